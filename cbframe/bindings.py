"""Process-wide named slots that frames temporarily override.

A binding is a plain global value addressed by a fully-qualified name such as
``"myapp.request_id"``. Frames that declare ``local=`` names hold their own
value for those names and install it into the store only while one of their
callbacks is running.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, Final

from ._validators import ensure_qualified_name
from .errors import UnboundNameError

if TYPE_CHECKING:
    from .node import FrameNode


class _Marker:
    """Sentinel held in a frame slot in place of a value."""

    def __init__(self, name: str) -> None:
        self._name = name

    def __repr__(self) -> str:
        return self._name

    def __bool__(self) -> bool:
        return False


# Declared but never assigned: the store keeps its value when the frame runs.
UNSET: Final = _Marker("UNSET")
# The frame left the name with no value: the store entry is removed when it runs.
ABSENT: Final = _Marker("ABSENT")


class BindingStore:
    """Mapping from qualified name to its single globally visible value."""

    def __init__(self) -> None:
        self._slots: dict[str, Any] = {}

    def get(self, name: str, default: Any = None) -> Any:
        return self._slots.get(name, default)

    def set(self, name: str, value: Any) -> None:
        ensure_qualified_name(name, name="binding name")
        self._slots[name] = value

    def unset(self, name: str) -> None:
        self._slots.pop(name, None)

    def snapshot(self) -> dict[str, Any]:
        return dict(self._slots)

    def __getitem__(self, name: str) -> Any:
        try:
            return self._slots[name]
        except KeyError:
            raise UnboundNameError(name) from None

    def __setitem__(self, name: str, value: Any) -> None:
        self.set(name, value)

    def __delitem__(self, name: str) -> None:
        if name not in self._slots:
            raise UnboundNameError(name)
        del self._slots[name]

    def __contains__(self, name: object) -> bool:
        return name in self._slots

    def __repr__(self) -> str:
        return f"BindingStore({self._slots!r})"

    # Raw access used by override(); ABSENT stands for a missing slot.

    def _read(self, name: str) -> Any:
        return self._slots.get(name, ABSENT)

    def _write(self, name: str, value: Any) -> None:
        if value is ABSENT:
            self._slots.pop(name, None)
        else:
            self._slots[name] = value


bindings = BindingStore()


@contextmanager
def override(
    visible: Mapping[str, FrameNode], store: BindingStore = bindings
) -> Iterator[None]:
    """Install the values held by ``visible`` owners for the duration of the block.

    ``visible`` maps each name to the nearest node declaring it. On exit the
    store's value, possibly reassigned by the block, is written back to the
    owner and the pre-entry value is put back, whether or not the block raised.
    A name missing from the store on exit is held as ``ABSENT`` and removed
    from the store again the next time the owner's chain runs.
    """
    saved = {name: store._read(name) for name in visible}
    for name, owner in visible.items():
        held = owner.bindings[name]
        if held is not UNSET:
            store._write(name, held)
    try:
        yield
    finally:
        for name, owner in visible.items():
            owner.bindings[name] = store._read(name)
            store._write(name, saved[name])


__all__ = ["ABSENT", "UNSET", "BindingStore", "bindings", "override"]
