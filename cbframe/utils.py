"""
Call-site capture for frame names.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass

# Environment variable to enable cbframe log output
DEBUG_FRAMES = os.environ.get("CBFRAME_DEBUG", "").lower() in ("1", "true", "yes")

ANONYMOUS_FRAME = "ANONYMOUS FRAME"


@dataclass(frozen=True)
class CallSite:
    filename: str
    line: int
    function: str

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}"


def capture_call_site(skip_frames: int = 2) -> CallSite | None:
    """
    Capture the location of the code that is constructing a frame.

    Args:
        skip_frames: Number of frames to skip (default 2 to skip this function and caller)

    Returns:
        CallSite for the requested frame, or None when the interpreter offers no
        frame introspection or the stack is shallower than requested.
    """
    try:
        frame = sys._getframe(skip_frames)
    except (AttributeError, ValueError):
        return None
    return CallSite(
        filename=frame.f_code.co_filename,
        line=frame.f_lineno,
        function=frame.f_code.co_name,
    )


def frame_name(label: str | None, call_site: CallSite | None) -> str:
    """Annotate ``label`` with the call site, e.g. ``"app.py:12 - fetch user"``."""
    label = label or ANONYMOUS_FRAME
    if call_site is None:
        return label
    return f"{call_site} - {label}"


__all__ = [
    "ANONYMOUS_FRAME",
    "DEBUG_FRAMES",
    "CallSite",
    "capture_call_site",
    "frame_name",
]
