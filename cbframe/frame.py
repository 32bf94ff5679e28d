"""Frame builder and the callbacks it returns.

``frame()`` captures the frame that is running when it is called (its error
handlers and local bindings) and returns a callback that reinstalls that
context every time it is invoked, typically later from an event loop::

    def on_error(trace):
        print(trace)

    def start():
        loop.call_soon(frame(name="step", code=lambda: 1 / 0))

    frame(name="job", code=start, catch=on_error)()

When the event loop runs ``step`` the ZeroDivisionError is handed to
``on_error`` along with a trace naming both frames.
"""

from __future__ import annotations

import functools
from collections.abc import Callable, Iterator, Mapping
from typing import Any, TypeVar

from loguru import logger

from ._validators import ensure_qualified_names, ensure_str, ensure_sync_callable
from .bindings import override
from .context import pointer
from .errors import ConfigurationError
from .node import FrameNode
from .registry import registry
from .trace import generate_trace
from .utils import CallSite, capture_call_site, frame_name

F = TypeVar("F", bound=Callable[..., Any])

FRAME_OPTIONS = frozenset({"name", "code", "catch", "local", "existing_frame"})


def frame(**options: Any) -> Callable[..., Any]:
    """Build a frame and return its callback.

    Args:
        name: Label shown in traces, prefixed with the call site of ``frame()``.
        code: Synchronous callable run on every invocation with the callback's
            arguments. Async functions are rejected: their body would run after
            the context is restored.
        catch: Handler called with the trace string when an error reaches it.
        local: Binding name, or iterable of names, owned by this frame.
        existing_frame: Callback of a live frame whose node is shared instead of
            building a new one. Cannot be combined with ``catch`` or ``local``.

    Raises:
        ConfigurationError: the options are malformed.
    """
    return _build(options, capture_call_site(skip_frames=2))


def framed(code: F | None = None, /, **options: Any) -> Any:
    """Decorator form of ``frame()``: the decorated function becomes ``code``.

    Works bare (``@framed``) or with options (``@framed(name="poll")``).
    """
    call_site = capture_call_site(skip_frames=2)
    if "code" in options:
        raise ConfigurationError(
            "framed() takes code from the decorated function", key="code"
        )
    if code is not None:
        return _build({**options, "code": code}, call_site)

    def decorator(function: F) -> Callable[..., Any]:
        return _build({**options, "code": function}, call_site)

    return decorator


def _build(options: Mapping[str, Any], call_site: CallSite | None) -> Callable[..., Any]:
    unknown = sorted(set(options) - FRAME_OPTIONS)
    if unknown:
        raise ConfigurationError(
            f"Unknown frame option: {unknown[0]}",
            key=unknown[0],
            hint=f"valid options are {', '.join(sorted(FRAME_OPTIONS))}",
        )
    for key, value in options.items():
        if value is None:
            raise ConfigurationError(f"value missing for key {key}", key=key)

    code = options.get("code")
    if code is None:
        raise ConfigurationError("frame needs a 'code' callback", key="code")
    ensure_sync_callable(code, name="code")

    label = options.get("name")
    if label is not None:
        ensure_str(label, name="name")
    handler = options.get("catch")
    if handler is not None:
        ensure_sync_callable(handler, name="catch")
    local = (
        ensure_qualified_names(options["local"], name="local")
        if "local" in options
        else None
    )

    if "existing_frame" in options:
        if handler is not None:
            raise ConfigurationError(
                "can't install new catch handler if using existing_frame", key="catch"
            )
        if local is not None:
            raise ConfigurationError(
                "can't install new local if using existing_frame", key="local"
            )
        node = registry.node_for(options["existing_frame"])
    else:
        node = FrameNode.build(
            frame_name(label, call_site), pointer.current, handler, local
        )

    callback = _wrap(node, code)
    registry.register(callback, node)
    logger.debug("frame #{} callback created: {}", node.serial, node.name)
    return callback


def _wrap(node: FrameNode, code: Callable[..., Any]) -> Callable[..., Any]:
    @functools.wraps(code)
    def callback(*args: Any, **kwargs: Any) -> Any:
        saved = pointer.save()
        pointer.install(node)
        try:
            with override(node.visible_bindings()):
                return code(*args, **kwargs)
        except Exception as error:
            trace = generate_trace(node, error)
            pointer.restore(saved)
            # Handlers run inside this except block so sys.exc_info() reports the error.
            return _dispatch(node.lineage(), error, trace)
        finally:
            pointer.restore(saved)

    return callback


def _dispatch(lineage: Iterator[FrameNode], error: Exception, trace: str) -> None:
    """Offer ``error`` to each handler in ``lineage`` until one returns normally."""
    for holder in lineage:
        if holder.handler is None:
            continue
        logger.debug(
            "frame #{} handling {}", holder.serial, type(error).__name__
        )
        try:
            holder.handler(trace)
        except Exception as replacement:
            logger.debug(
                "frame #{} handler raised {}", holder.serial, type(replacement).__name__
            )
            return _dispatch(lineage, replacement, trace)
        return None
    logger.debug("unhandled {} leaving frame chain", type(error).__name__)
    raise error


__all__ = ["FRAME_OPTIONS", "frame", "framed"]
