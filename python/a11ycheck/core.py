# SPDX-License-Identifier: AGPL-3.0-only
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator


class AttrKind(Enum):
    ABSENT = "absent"
    TEXT = "text"
    NUMBER = "number"
    BOOLEAN = "boolean"
    HANDLER = "handler"
    OTHER = "other"


def attr_kind(value: Any) -> AttrKind:
    if value is None:
        return AttrKind.ABSENT
    # bool subclasses int, so it has to be classified first.
    if isinstance(value, bool):
        return AttrKind.BOOLEAN
    if isinstance(value, (int, float)):
        return AttrKind.NUMBER
    if isinstance(value, str):
        return AttrKind.TEXT
    if callable(value):
        return AttrKind.HANDLER
    return AttrKind.OTHER


def normalize_tag(tag: Any) -> str:
    return str(tag).strip().lower()


def prop_get(props: dict[str, Any], *names: str) -> Any:
    """Return the first present spelling of an attribute, or None."""
    for name in names:
        if name in props:
            return props[name]
        hy = name.replace("_", "-")
        us = name.replace("-", "_")
        if hy in props:
            return props[hy]
        if us in props:
            return props[us]
    return None


def is_blank(value: Any) -> bool:
    return value is None or str(value).strip() == ""


@dataclass
class Element:
    tag: str
    props: dict[str, Any] = field(default_factory=dict)
    children: list[Any] = field(default_factory=list)

    @property
    def name(self) -> str:
        return normalize_tag(self.tag)

    @property
    def node_id(self) -> str | None:
        value = prop_get(self.props, "id")
        if is_blank(value):
            return None
        return str(value)

    def attr(self, *names: str) -> Any:
        return prop_get(self.props, *names)

    def kind(self, *names: str) -> AttrKind:
        return attr_kind(prop_get(self.props, *names))

    def iter_children(self) -> Iterator[Any]:
        """Yield children, skipping absent (None) entries."""
        for child in self.children:
            if child is None:
                continue
            yield child


def el(tag: str, *children: Any, **props: Any) -> Element:
    flat: list[Any] = []
    for child in children:
        if child is None:
            continue
        if isinstance(child, (list, tuple)):
            flat.extend(x for x in child if x is not None)
        else:
            flat.append(child)
    return Element(tag=tag, props=props, children=flat)


__all__ = [
    "AttrKind",
    "Element",
    "attr_kind",
    "el",
    "is_blank",
    "normalize_tag",
    "prop_get",
]
