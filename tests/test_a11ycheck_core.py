from __future__ import annotations

from a11ycheck.core import AttrKind, Element, attr_kind, el, normalize_tag, prop_get


def _handler() -> None:
    return None


def test_attr_kind_classifies_values_as_tagged_union() -> None:
    assert attr_kind(None) is AttrKind.ABSENT
    assert attr_kind(True) is AttrKind.BOOLEAN
    assert attr_kind(False) is AttrKind.BOOLEAN
    assert attr_kind(0) is AttrKind.NUMBER
    assert attr_kind(1.5) is AttrKind.NUMBER
    assert attr_kind("") is AttrKind.TEXT
    assert attr_kind("0") is AttrKind.TEXT
    assert attr_kind(_handler) is AttrKind.HANDLER
    assert attr_kind(lambda: None) is AttrKind.HANDLER
    assert attr_kind(object()) is AttrKind.OTHER


def test_el_flattens_lists_and_drops_none_children() -> None:
    node = el("div", None, "a", ["b", None, el("span")], ("c",))
    assert [c if isinstance(c, str) else c.tag for c in node.children] == ["a", "b", "span", "c"]


def test_prop_get_accepts_hyphen_and_underscore_spellings() -> None:
    props = {"aria-label": "Close", "data_fb_role": "x"}
    assert prop_get(props, "aria_label") == "Close"
    assert prop_get(props, "data-fb-role") == "x"
    assert prop_get(props, "missing", "aria-label") == "Close"
    assert prop_get(props, "missing") is None


def test_element_kind_treats_none_as_absent() -> None:
    node = el("div", onClick=None, tabIndex=0)
    assert node.kind("onClick") is AttrKind.ABSENT
    assert node.kind("tabIndex") is AttrKind.NUMBER
    assert node.kind("never_set") is AttrKind.ABSENT


def test_element_name_and_node_id_are_normalized() -> None:
    node = Element(" IMG ", {"id": "hero"})
    assert node.name == "img"
    assert normalize_tag("A") == "a"
    assert node.node_id == "hero"
    assert Element("img", {"id": "  "}).node_id is None
    assert Element("img").node_id is None


def test_iter_children_skips_absent_entries() -> None:
    node = Element("div", {}, [None, "bar", None, 2])
    assert list(node.iter_children()) == ["bar", 2]
