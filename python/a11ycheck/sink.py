# SPDX-License-Identifier: AGPL-3.0-only
from __future__ import annotations

import os
import sys
import warnings

from .types import Diagnostic, EmitFn, FilterFn


class A11yWarning(UserWarning):
    pass


class ChannelError(RuntimeError):
    """The diagnostic channel raised while emitting."""


def accept_all(tag: str, node_id: str | None, message: str) -> bool:
    return True


_PACKAGE_DIR = os.path.dirname(os.path.abspath(__file__)) + os.sep


def _outside_stacklevel() -> int:
    """Stack level of the nearest frame outside this package, for warnings.warn."""
    frame = sys._getframe(1)
    level = 1
    while frame is not None and os.path.abspath(frame.f_code.co_filename).startswith(_PACKAGE_DIR):
        frame = frame.f_back
        level += 1
    return level


def warn_channel(rule_id: str, message: str) -> None:
    warnings.warn(f"[a11y] {rule_id}: {message}", A11yWarning, stacklevel=_outside_stacklevel())


class ReportSink:
    """Filter gate plus the append-only failure log for one engine."""

    def __init__(self, *, filter_fn: FilterFn | None = None, emit: EmitFn | None = None) -> None:
        self.filter_fn = filter_fn or accept_all
        self.emit = emit or warn_channel
        self._log: list[Diagnostic] = []

    def report(self, diagnostic: Diagnostic) -> bool:
        if not self.filter_fn(diagnostic.tag, diagnostic.node_id, diagnostic.message):
            return False
        self._log.append(diagnostic)
        try:
            self.emit(diagnostic.rule_id, diagnostic.message)
        except Exception as exc:
            raise ChannelError(f"{type(exc).__name__}: {exc}") from exc
        return True

    def failures(self) -> list[Diagnostic]:
        return list(self._log)

    def clear(self) -> None:
        self._log.clear()

    def __len__(self) -> int:
        return len(self._log)
