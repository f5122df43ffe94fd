# SPDX-License-Identifier: AGPL-3.0-only
from __future__ import annotations

import warnings
from typing import Any, Iterable, Mapping, Sequence

from .core import Element
from .rules import CATALOG, Rule
from .sink import A11yWarning, ChannelError, ReportSink
from .types import Diagnostic, EmitFn, FilterFn

RULE_ERROR_ID = "engine.RULE_ERROR"
FILTER_ERROR_ID = "engine.FILTER_ERROR"

_FILTER_KEYS = ("filterFn", "filter_fn")
_KNOWN_OPTIONS = {*_FILTER_KEYS, "device", "emit"}


class A11yEngine:
    """Evaluates the rule catalog for each constructed node.

    An instance is also the per-node hook handed to a host: calling it with
    ``(node, ancestors)`` evaluates the node and reports what survives the
    filter. The hook never raises into the host.
    """

    def __init__(
        self,
        *,
        filter_fn: FilterFn | None = None,
        device: Iterable[str] | None = None,
        emit: EmitFn | None = None,
        catalog: Sequence[Rule] = CATALOG,
    ) -> None:
        self.device = frozenset(str(d).strip().lower() for d in (device or ()) if str(d).strip())
        self.catalog = tuple(catalog)
        self.sink = ReportSink(filter_fn=filter_fn, emit=emit)
        self.internal_errors: list[str] = []
        self._faulty_rules: set[str] = set()
        self._filter_failed = False

    def evaluate(self, node: Element, ancestors: Sequence[Element] = ()) -> list[Diagnostic]:
        if not isinstance(node, Element):
            return []
        chain = tuple(a for a in ancestors if isinstance(a, Element))
        out: list[Diagnostic] = []
        seen: set[str] = set()
        for rule in self.catalog:
            if rule.rule_id in seen or rule.exempt_for(self.device):
                continue
            try:
                violated = rule.test(node, chain, self.device)
            except Exception as exc:
                self._rule_failed(rule, node, exc)
                continue
            if not violated:
                continue
            seen.add(rule.rule_id)
            out.append(
                Diagnostic(
                    rule_id=rule.rule_id,
                    tag=node.name,
                    node_id=node.node_id,
                    message=rule.message,
                )
            )
        return out

    def report(self, diagnostic: Diagnostic) -> bool:
        return self.sink.report(diagnostic)

    def __call__(self, node: Element, ancestors: Sequence[Element] = ()) -> list[Diagnostic]:
        accepted: list[Diagnostic] = []
        for diagnostic in self.evaluate(node, ancestors):
            try:
                if self.report(diagnostic):
                    accepted.append(diagnostic)
            except ChannelError as exc:
                # Already in the failure log; only delivery failed.
                accepted.append(diagnostic)
                self.internal_errors.append(f"channel failed for {diagnostic.rule_id}: {exc}")
            except Exception as exc:
                detail = (
                    f"filter raised {type(exc).__name__}: {exc} "
                    f"(rule={diagnostic.rule_id}, tag={diagnostic.tag!r})"
                )
                self.internal_errors.append(detail)
                if not self._filter_failed:
                    self._filter_failed = True
                    self._signal(FILTER_ERROR_ID, detail)
        return accepted

    def get_failures(self) -> list[Diagnostic]:
        return self.sink.failures()

    def reset(self) -> None:
        self.sink.clear()
        self.internal_errors.clear()
        self._faulty_rules.clear()
        self._filter_failed = False

    def _rule_failed(self, rule: Rule, node: Element, exc: Exception) -> None:
        detail = f"rule {rule.rule_id} raised {type(exc).__name__}: {exc} (tag={node.name!r})"
        self.internal_errors.append(detail)
        if rule.rule_id in self._faulty_rules:
            return
        self._faulty_rules.add(rule.rule_id)
        self._signal(RULE_ERROR_ID, detail)

    def _signal(self, signal_id: str, detail: str) -> None:
        try:
            self.sink.emit(signal_id, detail)
        except Exception as exc:
            self.internal_errors.append(f"channel failed: {type(exc).__name__}: {exc}")


def _read_options(options: Mapping[str, Any] | None, overrides: Mapping[str, Any]) -> dict[str, Any]:
    merged: dict[str, Any] = dict(options or {})
    merged.update(overrides)
    unknown = sorted(k for k in merged if k not in _KNOWN_OPTIONS)
    if unknown:
        warnings.warn(
            f"Ignoring unrecognized a11y option(s): {', '.join(unknown)}",
            A11yWarning,
            stacklevel=3,
        )
    filter_fn = None
    for key in _FILTER_KEYS:
        if merged.get(key) is not None:
            filter_fn = merged[key]
    return {
        "filter_fn": filter_fn,
        "device": merged.get("device"),
        "emit": merged.get("emit"),
    }


def install(host: Any, options: Mapping[str, Any] | None = None, **overrides: Any) -> A11yEngine:
    """Build a fresh engine and register it as ``host``'s per-node hook.

    Re-installing replaces the previous engine, its filter, device profile
    and failure log.
    """
    engine = A11yEngine(**_read_options(options, overrides))
    host.set_hook(engine)
    return engine


__all__ = ["A11yEngine", "FILTER_ERROR_ID", "RULE_ERROR_ID", "install"]
