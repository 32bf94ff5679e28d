from __future__ import annotations

from typing import Any


class ConfigurationError(ValueError):
    """Raised when ``frame()`` is called with a malformed set of options."""

    def __init__(self, message: str, *, key: Any = None, hint: str | None = None) -> None:
        self.key = key
        self.hint = hint
        text = message if hint is None else f"{message}\nHint: {hint}"
        super().__init__(text)


class UnboundNameError(KeyError):
    """Raised when a binding is read by subscription but was never set."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(
            f"Binding not set: {name!r}\n"
            f"Hint: assign it with `bindings[{name!r}] = value` or read it with "
            f"`bindings.get({name!r})`"
        )

    def __str__(self) -> str:
        return str(self.args[0])


__all__ = ["ConfigurationError", "UnboundNameError"]
