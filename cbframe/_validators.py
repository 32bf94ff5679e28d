"""Runtime validators for frame options."""

from __future__ import annotations

import inspect
from collections.abc import Iterable

from .errors import ConfigurationError


def _type_name(value: object) -> str:
    return type(value).__name__


def ensure_str(value: object, *, name: str) -> None:
    if not isinstance(value, str):
        raise ConfigurationError(f"{name} must be str, got {_type_name(value)}", key=name)


def ensure_callable(value: object, *, name: str) -> None:
    if not callable(value):
        raise ConfigurationError(f"{name} must be callable, got {_type_name(value)}", key=name)


def ensure_sync_callable(value: object, *, name: str) -> None:
    ensure_callable(value, name=name)
    if inspect.iscoroutinefunction(value) or inspect.isasyncgenfunction(value):
        raise ConfigurationError(
            f"{name} must be a plain callable, got async function {value!r}",
            key=name,
            hint="wrap the awaitable in a task and pass a synchronous callback",
        )


def ensure_qualified_name(value: object, *, name: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(
            f"{name} must be a binding name (str), got {_type_name(value)}", key=name
        )
    parts = value.split(".")
    if len(parts) < 2 or not all(part.isidentifier() for part in parts):
        raise ConfigurationError(
            f"{name} must be a fully-qualified binding name, got {value!r}",
            key=name,
            hint="qualify the name with its owner, e.g. 'myapp.request_id'",
        )
    return value


def ensure_qualified_names(value: object, *, name: str) -> tuple[str, ...]:
    """Normalise ``local=`` to a tuple of names, accepting one name or many."""
    if isinstance(value, str):
        return (ensure_qualified_name(value, name=name),)
    if not isinstance(value, Iterable):
        raise ConfigurationError(
            f"{name} must be a binding name or an iterable of names, got {_type_name(value)}",
            key=name,
        )
    names: list[str] = []
    for index, item in enumerate(value):
        qualified = ensure_qualified_name(item, name=f"{name}[{index}]")
        if qualified not in names:
            names.append(qualified)
    return tuple(names)


__all__ = [
    "ensure_callable",
    "ensure_qualified_name",
    "ensure_qualified_names",
    "ensure_str",
    "ensure_sync_callable",
]
