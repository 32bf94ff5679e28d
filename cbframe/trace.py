"""Rendering of the trace handed to ``catch`` handlers."""

from __future__ import annotations

import traceback

from .node import FrameNode

TRACE_HEADER = "----- cbframe stack-trace -----"


def format_error(error: BaseException) -> str:
    """Textual form of ``error``, e.g. ``"ValueError: boom"``."""
    text = "".join(traceback.format_exception_only(type(error), error))
    return text.rstrip("\n")


def generate_trace(node: FrameNode, error: BaseException) -> str:
    """Render ``error`` followed by the frame names from ``node`` to the root.

    Example::

        ValueError: boom
        ----- cbframe stack-trace -----
        app.py:20 - fetch user
        app.py:11 - request
    """
    lines = [format_error(error), TRACE_HEADER]
    lines.extend(frame.name for frame in node.lineage())
    return "".join(f"{line}\n" for line in lines)


__all__ = ["TRACE_HEADER", "format_error", "generate_trace"]
