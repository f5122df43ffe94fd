# SPDX-License-Identifier: AGPL-3.0-only
from __future__ import annotations

from typing import Any, Callable, Mapping, Sequence

from .core import Element, el

NodeHook = Callable[[Element, Sequence[Element]], Any]


class ElementFactory:
    """Element factory that reports every node it builds to an installed hook.

    Children are built before their parents, so the ancestor chain passed at
    construction time is always empty. Use :func:`replay` on a finished tree
    when ancestor context matters.
    """

    def __init__(self) -> None:
        self._hook: NodeHook | None = None

    @property
    def hook(self) -> NodeHook | None:
        return self._hook

    def set_hook(self, hook: NodeHook | None) -> None:
        self._hook = hook

    def el(self, tag: str, *children: Any, **props: Any) -> Element:
        node = el(tag, *children, **props)
        if self._hook is not None:
            self._hook(node, ())
        return node

    __call__ = el


def replay(root: Any, hook: NodeHook) -> int:
    """Invoke ``hook`` once per element of a finished tree, parents first.

    Returns the number of elements visited.
    """
    count = 0
    # Explicit stack keeps deep trees clear of the recursion limit.
    stack: list[tuple[Any, tuple[Element, ...]]] = [(root, ())]
    while stack:
        node, ancestors = stack.pop()
        if isinstance(node, Element):
            count += 1
            hook(node, ancestors)
            chain = (node, *ancestors)
            stack.extend((child, chain) for child in reversed(list(node.iter_children())))
        elif isinstance(node, (list, tuple)):
            stack.extend((item, ancestors) for item in reversed(node))
    return count


def _handler_stub(name: str) -> Callable[..., None]:
    def handler(*_args: Any, **_kwargs: Any) -> None:
        return None

    handler.__name__ = name or "handler"
    return handler


def _prop_from_json(value: Any) -> Any:
    if isinstance(value, Mapping) and "$handler" in value:
        return _handler_stub(str(value["$handler"] or ""))
    return value


def element_from_dict(data: Any) -> Any:
    """Build an element tree from JSON-shaped data.

    Elements are ``{"tag": ..., "props": {...}, "children": [...]}``; any
    other value is kept as a leaf. A prop written as ``{"$handler": "name"}``
    becomes a callable so handler rules can see it.
    """
    if isinstance(data, list):
        return [element_from_dict(item) for item in data]
    if not isinstance(data, Mapping):
        return data
    if "tag" not in data:
        raise ValueError(f"Element object is missing 'tag': {sorted(data)!r}")
    props = data.get("props") or {}
    if not isinstance(props, Mapping):
        raise ValueError(f"Element props must be an object, got {type(props).__name__}")
    children = data.get("children") or []
    if not isinstance(children, list):
        children = [children]
    return Element(
        tag=str(data["tag"]),
        props={str(k): _prop_from_json(v) for k, v in props.items()},
        children=[element_from_dict(child) for child in children],
    )


__all__ = ["ElementFactory", "NodeHook", "element_from_dict", "replay"]
