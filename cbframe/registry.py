"""Weak registry of the callbacks produced by ``frame()``."""

from __future__ import annotations

import weakref
from collections.abc import Callable
from typing import Any

from loguru import logger

from .errors import ConfigurationError
from .node import FrameNode


class LivenessRegistry:
    """Answers "is this a frame" without keeping frames alive.

    Callbacks are weak keys, so an entry disappears with its callback. Every
    node gets a ``weakref.finalize`` cleanup on first registration; it runs
    once, when the last callback sharing the node is gone, and drops the node
    from the live-node table.
    """

    def __init__(self) -> None:
        self._frames: weakref.WeakKeyDictionary[Callable[..., Any], FrameNode] = (
            weakref.WeakKeyDictionary()
        )
        self._nodes: dict[int, str] = {}

    def register(self, callback: Callable[..., Any], node: FrameNode) -> None:
        self._frames[callback] = node
        if node.cleanup is None:
            self._nodes[node.serial] = node.name
            cleanup = weakref.finalize(node, self._release, node.serial)
            cleanup.atexit = False
            node.attach_cleanup(cleanup)

    def _release(self, serial: int) -> None:
        name = self._nodes.pop(serial, None)
        logger.debug("frame #{} collected: {}", serial, name)

    def is_frame(self, value: object) -> bool:
        if not callable(value):
            return False
        try:
            return value in self._frames
        except TypeError:
            return False

    def node_for(self, callback: object) -> FrameNode:
        node = self._frames.get(callback) if self.is_frame(callback) else None
        if node is None:
            raise ConfigurationError(
                f"existing_frame isn't a frame: {callback!r}",
                key="existing_frame",
                hint="pass a callback returned by frame() that is still referenced",
            )
        return node

    def live_nodes(self) -> int:
        return len(self._nodes)

    def __len__(self) -> int:
        return len(self._frames)


registry = LivenessRegistry()


def is_frame(value: object) -> bool:
    """Return True if ``value`` is a live callback produced by ``frame()``."""
    return registry.is_frame(value)


__all__ = ["LivenessRegistry", "is_frame", "registry"]
