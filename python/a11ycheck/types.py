# SPDX-License-Identifier: AGPL-3.0-only
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional

FilterFn = Callable[[str, Optional[str], str], bool]
EmitFn = Callable[[str, str], None]


@dataclass(frozen=True)
class Diagnostic:
    rule_id: str
    tag: str
    node_id: str | None
    message: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "rule_id": self.rule_id,
            "tag": self.tag,
            "node_id": self.node_id,
            "message": self.message,
        }
