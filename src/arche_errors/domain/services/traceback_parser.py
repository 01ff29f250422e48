# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Traceback text parser (Domain Service).

Purpose:
    Rebuild an :class:`Error` from a printed CPython traceback, typically read
    from a crashed child process's stderr. Only the last traceback block in
    the text is used; for chained exceptions that is the one finally raised.

Layer:
    domain/services
"""

from __future__ import annotations

import re
from typing import Final

from arche_errors.domain.entities.error import Error
from arche_errors.domain.entities.stack_frame import StackFrame
from arche_errors.domain.exceptions.base import TracebackParseError
from arche_errors.domain.services.stack_capture import MAX_STACK_DEPTH

__all__ = ["parse_traceback"]

_HEADER: Final[str] = "Traceback (most recent call last):"
_FRAME_RE: Final = re.compile(
    r'^\s*File "(?P<file>[^"]+)", line (?P<line>\d+)(?:, in (?P<name>.+?))?\s*$'
)
_EXCEPTION_RE: Final = re.compile(r"^(?P<type>[A-Za-z_][\w.]*)(?::\s?(?P<message>.*))?$")


def parse_traceback(text: str) -> Error:
    """Parse printed traceback text into an :class:`Error`.

    Args:
        text: Output containing a ``Traceback (most recent call last):`` block.

    Returns:
        Error: Frames innermost-first, type name and message taken from the
        final exception line.

    Raises:
        TracebackParseError: If no traceback block or exception line is found.
    """
    lines = text.splitlines()
    starts = [i for i, line in enumerate(lines) if line.strip() == _HEADER]
    if not starts:
        raise TracebackParseError(
            "No traceback header found", details={"line_count": len(lines)}
        )

    frames: list[StackFrame] = []
    exception_line: str | None = None
    for line in lines[starts[-1] + 1 :]:
        match = _FRAME_RE.match(line)
        if match:
            frames.append(
                StackFrame(
                    name=match["name"] or "",
                    file=match["file"],
                    line_number=int(match["line"]),
                )
            )
            continue
        # Source excerpts, caret markers and "[Previous line repeated]" notes.
        if not line.strip() or line[0].isspace():
            continue
        exception_line = line.rstrip()
        break

    if exception_line is None:
        raise TracebackParseError(
            "Traceback has no exception line", details={"frame_count": len(frames)}
        )

    match = _EXCEPTION_RE.match(exception_line)
    if match is None:
        raise TracebackParseError(
            "Unrecognized exception line", details={"line": exception_line}
        )

    frames.reverse()
    return Error(
        match["message"] or "",
        type_name=match["type"],
        frames=frames[:MAX_STACK_DEPTH],
    )
