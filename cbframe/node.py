"""Frame nodes: the captured context records that callbacks replay."""

from __future__ import annotations

import itertools
import weakref
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, field
from typing import Any

from .bindings import UNSET

_serials = itertools.count(1)


@dataclass(frozen=True, eq=False)
class FrameNode:
    """One captured context.

    Nodes form a tree through ``parent``: many callbacks created under the same
    running frame share it as parent. ``parent``, ``handler`` and the set of
    declared binding names are fixed once the node is built; only the values
    held in ``bindings`` change, written back after each invocation.
    """

    name: str
    parent: FrameNode | None = None
    handler: Callable[[str], Any] | None = None
    bindings: dict[str, Any] | None = None
    cleanup: weakref.finalize | None = field(default=None, repr=False)
    serial: int = field(default_factory=lambda: next(_serials))

    @classmethod
    def build(
        cls,
        name: str,
        parent: FrameNode | None,
        handler: Callable[[str], Any] | None = None,
        local: Iterable[str] | None = None,
    ) -> FrameNode:
        declared = None if local is None else {binding: UNSET for binding in local}
        return cls(name=name, parent=parent, handler=handler, bindings=declared)

    def attach_cleanup(self, cleanup: weakref.finalize) -> None:
        """Set the cleanup once; every other field is fixed at construction."""
        if self.cleanup is not None:
            raise RuntimeError(f"frame #{self.serial} already has a cleanup")
        object.__setattr__(self, "cleanup", cleanup)

    def lineage(self) -> Iterator[FrameNode]:
        node: FrameNode | None = self
        while node is not None:
            yield node
            node = node.parent

    def visible_bindings(self) -> dict[str, FrameNode]:
        """Map each binding name in scope to the nearest node declaring it."""
        visible: dict[str, FrameNode] = {}
        for node in self.lineage():
            if node.bindings is None:
                continue
            for binding in node.bindings:
                visible.setdefault(binding, node)
        return visible

    def __repr__(self) -> str:
        parent = None if self.parent is None else self.parent.serial
        return f"FrameNode(#{self.serial} {self.name!r}, parent={parent})"


__all__ = ["FrameNode"]
