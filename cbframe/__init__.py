"""
cbframe - Preserve error handlers and dynamic bindings across callbacks.

A callback stored for later (by an event loop, a timer, an I/O completion)
normally loses the context it was created in. ``frame()`` captures that
context and reinstalls it around every invocation.

Example:
    >>> from cbframe import bindings, frame
    >>>
    >>> def report(trace):
    ...     print(trace)
    >>>
    >>> def start():
    ...     bindings["app.user"] = "alice"
    ...     loop.call_later(1, frame(name="poll", code=poll))
    >>>
    >>> frame(name="session", code=start, catch=report, local="app.user")()
"""

from loguru import logger

from cbframe.bindings import ABSENT, UNSET, BindingStore, bindings
from cbframe.context import current_frame
from cbframe.errors import ConfigurationError, UnboundNameError
from cbframe.frame import FRAME_OPTIONS, frame, framed
from cbframe.node import FrameNode
from cbframe.registry import is_frame, registry
from cbframe.trace import TRACE_HEADER, generate_trace
from cbframe.utils import ANONYMOUS_FRAME, DEBUG_FRAMES

if not DEBUG_FRAMES:
    logger.disable("cbframe")

__all__ = [
    "ABSENT",
    "ANONYMOUS_FRAME",
    "FRAME_OPTIONS",
    "TRACE_HEADER",
    "UNSET",
    "BindingStore",
    "ConfigurationError",
    "FrameNode",
    "UnboundNameError",
    "bindings",
    "current_frame",
    "frame",
    "framed",
    "generate_trace",
    "is_frame",
    "registry",
]
