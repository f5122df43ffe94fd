# SPDX-License-Identifier: AGPL-3.0-only
from __future__ import annotations

from typing import Any, Sequence

from .core import AttrKind, Element, is_blank

IMAGE_TAGS = {"img"}
ANCHOR_TAGS = {"a"}
BUTTON_LIKE_TAGS = {"button", "input", "select", "textarea"}

ARIA_LABEL_ATTRS = ("aria_label",)
ARIA_LABELLEDBY_ATTRS = ("aria_labelledby", "aria_labelled_by")
CLICK_ATTRS = ("onClick", "on_click", "onclick")
KEY_DOWN_ATTRS = ("onKeyDown", "on_key_down", "onkeydown")
TAB_INDEX_ATTRS = ("tabIndex", "tab_index", "tabindex")


def is_image(node: Element) -> bool:
    return node.name in IMAGE_TAGS


def is_anchor(node: Element) -> bool:
    return node.name in ANCHOR_TAGS


def _has_aria_label(node: Element) -> bool:
    if not is_blank(node.attr(*ARIA_LABEL_ATTRS)):
        return True
    return not is_blank(node.attr(*ARIA_LABELLEDBY_ATTRS))


def _leaf_labels(item: Any) -> bool:
    if isinstance(item, bool):
        return False
    if isinstance(item, str):
        return item.strip() != ""
    if isinstance(item, (int, float)):
        return True
    if isinstance(item, Element) and is_image(item):
        alt = item.attr("alt")
        # alt="" marks the image decorative; it is not a label.
        return isinstance(alt, str) and alt != ""
    return False


def has_accessible_label(node: Element) -> bool:
    if _has_aria_label(node):
        return True
    # Explicit stack: trees may be deeper than the interpreter recursion limit.
    stack: list[Any] = list(node.iter_children())
    while stack:
        item = stack.pop()
        if item is None:
            continue
        if _leaf_labels(item):
            return True
        if isinstance(item, Element):
            stack.extend(item.iter_children())
        elif isinstance(item, (list, tuple)):
            stack.extend(item)
    return False


def has_role(node: Element, value: str | None = None) -> bool:
    role = node.attr("role")
    if is_blank(role):
        return False
    if value is None:
        return True
    return str(role).strip().lower() == value.strip().lower()


def has_handler(node: Element, *names: str) -> bool:
    return node.kind(*names) is AttrKind.HANDLER


def has_click_handler(node: Element) -> bool:
    return has_handler(node, *CLICK_ATTRS)


def is_natively_interactive(node: Element) -> bool:
    if node.name in BUTTON_LIKE_TAGS:
        return True
    return is_anchor(node) and not is_blank(node.attr("href"))


def nearest_ancestor_with_role(
    ancestors: Sequence[Element],
    value: str | None = None,
) -> Element | None:
    for ancestor in ancestors:
        if isinstance(ancestor, Element) and has_role(ancestor, value):
            return ancestor
    return None


def text_content(node: Any) -> str:
    parts: list[str] = []
    stack: list[Any] = [node]
    while stack:
        item = stack.pop()
        if item is None or isinstance(item, bool):
            continue
        if isinstance(item, str):
            parts.append(item)
        elif isinstance(item, (int, float)):
            parts.append(str(item))
        elif isinstance(item, Element):
            stack.extend(reversed(list(item.iter_children())))
        elif isinstance(item, (list, tuple)):
            stack.extend(reversed(item))
    return "".join(parts)


__all__ = [
    "ANCHOR_TAGS",
    "BUTTON_LIKE_TAGS",
    "CLICK_ATTRS",
    "IMAGE_TAGS",
    "KEY_DOWN_ATTRS",
    "TAB_INDEX_ATTRS",
    "has_accessible_label",
    "has_click_handler",
    "has_handler",
    "has_role",
    "is_anchor",
    "is_image",
    "is_natively_interactive",
    "nearest_ancestor_with_role",
    "text_content",
]
