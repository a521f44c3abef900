"""Reactive attribute nodes with change notification and bubbling."""

from __future__ import annotations

from typing import Any, Callable

Callback = Callable[["Node", str, Any, Any], None]


def _adopt(value: Any, parent: Node, key: str) -> Any:
    """Turn plain dicts into child Nodes and reparent existing Nodes."""
    if isinstance(value, dict):
        return Node(_parent=parent, _key=key, **value)
    if isinstance(value, Node):
        object.__setattr__(value, "_parent", parent)
        object.__setattr__(value, "_key", key)
    return value


def _notify(node: Node, key: str, old: Any, new: Any) -> None:
    """Call watchers of key on node, then watchers of each ancestor's child key."""
    for callback in list(node._watchers.get(key, ())):
        callback(node, key, old, new)
    child = node
    while child._parent is not None:
        parent = child._parent
        for callback in list(parent._watchers.get(child._key, ())):
            callback(node, key, old, new)
        child = parent


class Node:
    """Attribute bag that reports changes.

    Reading a missing attribute gives None and assigning None removes
    it. Assignment only notifies when the new value compares unequal to
    the old one, so installing an equal snapshot is silent. Changes to a
    child Node bubble to watchers of that child's key on every ancestor.
    """

    def __init__(self, _parent: Node | None = None, _key: str | None = None, **data: Any) -> None:
        object.__setattr__(self, "_values", {})
        object.__setattr__(self, "_watchers", {})
        object.__setattr__(self, "_parent", None)
        object.__setattr__(self, "_key", _key)
        for key, value in data.items():
            setattr(self, key, value)
        object.__setattr__(self, "_parent", _parent)

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        return self._values.get(name)

    def __setattr__(self, name: str, value: Any) -> None:
        if name.startswith("_"):
            object.__setattr__(self, name, value)
            return
        old = self._values.get(name)
        if value is None:
            self._values.pop(name, None)
        else:
            value = _adopt(value, self, name)
            self._values[name] = value
        if old != value:
            _notify(self, name, old, value)

    def watch(self, key: str, callback: Callback) -> Callable[[], None]:
        """Call callback(node, key, old, new) when key changes. Returns an unwatch callable."""
        callbacks = self._watchers.setdefault(key, [])
        callbacks.append(callback)

        def unwatch() -> None:
            if callback in callbacks:
                callbacks.remove(callback)

        return unwatch
