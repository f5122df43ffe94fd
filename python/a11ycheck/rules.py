# SPDX-License-Identifier: AGPL-3.0-only
"""Accessibility rule catalog.

Every rule is a pure predicate over ``(node, ancestors, device)`` that
returns True when the node violates it. Catalog order is the order in which
diagnostics are reported for a node.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Iterable, Sequence

from .core import AttrKind, Element
from .queries import (
    KEY_DOWN_ATTRS,
    TAB_INDEX_ATTRS,
    has_accessible_label,
    has_click_handler,
    has_handler,
    has_role,
    is_anchor,
    is_image,
    is_natively_interactive,
)

RuleTest = Callable[[Element, Sequence[Element], frozenset], bool]

KEYBOARD_EXEMPT_DEVICES = frozenset({"mobile"})

MESSAGES = {
    "props.onClick.NO_LABEL": (
        "You have a click handler on an element with no label. Add an "
        '"aria-label" attribute or text content so screen readers can '
        "announce it."
    ),
    "props.onClick.NO_ROLE": (
        "You have a click handler on an element with no role. Use a "
        '<button> instead, or add a "role" attribute.'
    ),
    "props.onClick.BUTTON_ROLE_SPACE": (
        'You have role="button" but no onKeyDown handler. Add one and have '
        'the "Space" key do the same thing as the click handler.'
    ),
    "props.onClick.BUTTON_ROLE_ENTER": (
        'You have role="button" but no onKeyDown handler. Add one and have '
        'the "Enter" key do the same thing as the click handler.'
    ),
    "props.onClick.NO_TABINDEX": (
        "You have a click handler on a non-interactive element with no "
        "tabIndex. Keyboard users will not be able to reach it."
    ),
    "tags.img.MISSING_ALT": (
        'You forgot an "alt" attribute on an image. Screen reader users will '
        "get no information about it."
    ),
    "tags.img.REDUDANT_ALT": (
        "Screen readers already announce img tags as an image; you don't "
        'need the word "image" in the alt text.'
    ),
    "tags.a.HASH_HREF_NEEDS_BUTTON": (
        'You have an anchor with href="#". If it only runs a click handler, '
        "use a <button> instead."
    ),
}


@dataclass(frozen=True)
class Rule:
    rule_id: str
    message: str
    test: RuleTest
    skip_devices: frozenset = field(default_factory=frozenset)

    @property
    def group(self) -> str:
        return self.rule_id.rsplit(".", 1)[0]

    @property
    def name(self) -> str:
        return self.rule_id.rsplit(".", 1)[-1]

    def exempt_for(self, device: Iterable[str]) -> bool:
        return not self.skip_devices.isdisjoint(device)

    def to_dict(self) -> dict[str, object]:
        return {
            "rule_id": self.rule_id,
            "message": self.message,
            "skip_devices": sorted(self.skip_devices),
        }


def _no_label(node: Element, ancestors: Sequence[Element], device: frozenset) -> bool:
    return has_click_handler(node) and not has_accessible_label(node)


def _no_role(node: Element, ancestors: Sequence[Element], device: frozenset) -> bool:
    return has_click_handler(node) and not has_role(node)


def _button_role_without_key_handler(
    node: Element, ancestors: Sequence[Element], device: frozenset
) -> bool:
    return (
        has_click_handler(node)
        and has_role(node, "button")
        and not has_handler(node, *KEY_DOWN_ATTRS)
    )


def _no_tabindex(node: Element, ancestors: Sequence[Element], device: frozenset) -> bool:
    if not has_click_handler(node) or is_natively_interactive(node):
        return False
    return node.kind(*TAB_INDEX_ATTRS) is AttrKind.ABSENT


def _img_missing_alt(node: Element, ancestors: Sequence[Element], device: frozenset) -> bool:
    return is_image(node) and node.kind("alt") is AttrKind.ABSENT


def _img_redundant_alt(node: Element, ancestors: Sequence[Element], device: frozenset) -> bool:
    if not is_image(node):
        return False
    alt = node.attr("alt")
    return isinstance(alt, str) and "image" in alt


def _hash_href(node: Element, ancestors: Sequence[Element], device: frozenset) -> bool:
    return is_anchor(node) and node.attr("href") == "#"


def build_catalog(rules: Iterable[Rule]) -> tuple[Rule, ...]:
    seen: set[str] = set()
    out: list[Rule] = []
    for rule in rules:
        if rule.rule_id in seen:
            raise ValueError(f"Duplicate rule id {rule.rule_id!r}")
        seen.add(rule.rule_id)
        out.append(rule)
    return tuple(out)


def _rule(rule_id: str, test: RuleTest, *, skip_devices: frozenset = frozenset()) -> Rule:
    return Rule(rule_id=rule_id, message=MESSAGES[rule_id], test=test, skip_devices=skip_devices)


CATALOG = build_catalog(
    [
        _rule("props.onClick.NO_LABEL", _no_label),
        _rule("props.onClick.NO_ROLE", _no_role),
        _rule(
            "props.onClick.BUTTON_ROLE_SPACE",
            _button_role_without_key_handler,
            skip_devices=KEYBOARD_EXEMPT_DEVICES,
        ),
        _rule(
            "props.onClick.BUTTON_ROLE_ENTER",
            _button_role_without_key_handler,
            skip_devices=KEYBOARD_EXEMPT_DEVICES,
        ),
        _rule("props.onClick.NO_TABINDEX", _no_tabindex),
        _rule("tags.img.MISSING_ALT", _img_missing_alt),
        _rule("tags.img.REDUDANT_ALT", _img_redundant_alt),
        _rule("tags.a.HASH_HREF_NEEDS_BUTTON", _hash_href),
    ]
)


def rule_by_id(rule_id: str) -> Rule:
    for rule in CATALOG:
        if rule.rule_id == rule_id:
            return rule
    raise KeyError(rule_id)


__all__ = [
    "CATALOG",
    "KEYBOARD_EXEMPT_DEVICES",
    "MESSAGES",
    "Rule",
    "RuleTest",
    "build_catalog",
    "rule_by_id",
]
