# SPDX-License-Identifier: AGPL-3.0-only
from __future__ import annotations

import warnings
from collections import Counter
from typing import Any, Iterable

from .engine import A11yEngine
from .host import replay
from .sink import A11yWarning
from .types import FilterFn


class A11yValidationError(ValueError):
    def __init__(self, message: str, report: dict[str, Any]) -> None:
        super().__init__(message)
        self.report = report


def _normalize_mode(mode: str | None) -> str | None:
    normalized = None if mode is None else str(mode).strip().lower()
    if normalized not in {None, "", "none", "warn", "raise"}:
        raise ValueError(f"Unsupported a11y audit mode {mode!r}. Expected None, 'warn', or 'raise'.")
    if normalized in {"", "none"}:
        return None
    return normalized


def audit_tree(
    root: Any,
    *,
    device: Iterable[str] | None = None,
    filter_fn: FilterFn | None = None,
    mode: str | None = "warn",
) -> dict[str, Any]:
    """Run the rule catalog over a finished tree with real ancestor chains."""
    normalized_mode = _normalize_mode(mode)
    collected: list[tuple[str, str]] = []

    def collect(rule_id: str, message: str) -> None:
        collected.append((rule_id, message))

    engine = A11yEngine(filter_fn=filter_fn, device=device, emit=collect)
    visited = replay(root, engine)
    failures = engine.get_failures()
    rule_counts = Counter(d.rule_id for d in failures)

    report = {
        "ok": not failures,
        "mode": normalized_mode,
        "device": sorted(engine.device),
        "nodes_visited": visited,
        "failure_count": len(failures),
        "rule_counts": dict(sorted(rule_counts.items())),
        "failures": [d.to_dict() for d in failures],
        "internal_errors": list(engine.internal_errors),
    }

    if normalized_mode == "warn":
        for rule_id, message in collected:
            warnings.warn(f"[a11y] {rule_id}: {message}", A11yWarning, stacklevel=2)
    if normalized_mode == "raise" and failures:
        raise A11yValidationError("Accessibility audit failed", report)
    return report


__all__ = ["A11yValidationError", "audit_tree"]
