"""The single "currently running" frame node."""

from __future__ import annotations

from .node import FrameNode


class ContextPointer:
    """Cell holding the active node, saved and restored around each invocation.

    Invocations nest like a call stack even though the nodes form a tree: each
    one saves the cell, installs its own node and puts the saved value back.
    """

    def __init__(self) -> None:
        self._current: FrameNode | None = None

    @property
    def current(self) -> FrameNode | None:
        return self._current

    def save(self) -> FrameNode | None:
        return self._current

    def install(self, node: FrameNode) -> None:
        self._current = node

    def restore(self, saved: FrameNode | None) -> None:
        self._current = saved


pointer = ContextPointer()


def current_frame() -> FrameNode | None:
    """Return the node of the frame whose code is running, if any."""
    return pointer.current


__all__ = ["ContextPointer", "current_frame", "pointer"]
