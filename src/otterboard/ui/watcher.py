"""Mixin that ties Node watches to a widget's lifetime."""

from __future__ import annotations

from typing import Callable

from otterboard.model.node import Callback, Node


class NodeWatcherMixin:
    """Mixin for widgets and screens that watch Node keys.

    Subclasses should:
    - Call ``_init_watcher()`` in ``__init__``
    - Use ``self.node_watch(node, key, callback)`` instead of ``node.watch(...)``
    - Leave ``on_unmount`` alone, or call super() from it; watches are dropped there
    """

    def _init_watcher(self) -> None:
        self._unwatchers: list[Callable[[], None]] = []

    def node_watch(self, node: Node, key: str, callback: Callback) -> None:
        """Watch key on node until this widget is unmounted."""
        self._unwatchers.append(node.watch(key, callback))

    def on_unmount(self) -> None:
        for unwatch in self._unwatchers:
            unwatch()
        self._unwatchers.clear()
