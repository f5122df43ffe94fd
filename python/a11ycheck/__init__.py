# SPDX-License-Identifier: AGPL-3.0-only
"""Accessibility diagnostics for declaratively built element trees.

Install an :class:`A11yEngine` on a host factory and every node the host
constructs is checked against the rule catalog. Accepted diagnostics go to
the configured channel (``A11yWarning`` by default) and to the engine's
failure log.
"""
from .audit import A11yValidationError, audit_tree
from .core import AttrKind, Element, attr_kind, el
from .engine import A11yEngine, FILTER_ERROR_ID, RULE_ERROR_ID, install
from .host import ElementFactory, element_from_dict, replay
from .rules import CATALOG, MESSAGES, Rule, rule_by_id
from .sink import A11yWarning, ReportSink
from .types import Diagnostic

__all__ = [
    "A11yEngine",
    "A11yValidationError",
    "A11yWarning",
    "AttrKind",
    "CATALOG",
    "Diagnostic",
    "Element",
    "ElementFactory",
    "MESSAGES",
    "FILTER_ERROR_ID",
    "RULE_ERROR_ID",
    "ReportSink",
    "Rule",
    "attr_kind",
    "audit_tree",
    "el",
    "element_from_dict",
    "install",
    "replay",
    "rule_by_id",
]
