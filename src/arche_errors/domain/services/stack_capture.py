# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Stack capture (Domain Service).

Purpose:
    Snapshot the current call stack as opaque raw descriptors at error
    construction time. Symbol resolution is deferred to
    :mod:`arche_errors.domain.services.frame_parser`.

Layer:
    domain/services

Notes:
    - Raw frames hold the code object, the executing line and the module name,
      never the frame itself, so capturing does not keep locals alive.
    - When a traceback is supplied, the raised path (which has already been
      unwound from the live stack) is spliced in at the frame that caught it.
"""

from __future__ import annotations

import logging
import sys
from collections import deque
from types import CodeType, FrameType, TracebackType
from typing import Final, NamedTuple

from arche_errors.config.settings import Settings, get_settings

logger = logging.getLogger(__name__)


def _configured_depth() -> int:
    """Read the depth once; invalid configuration falls back to the default."""
    try:
        return get_settings().max_stack_depth
    except RuntimeError:
        default = int(Settings.model_fields["max_stack_depth"].default)
        logger.warning("Invalid arche_errors configuration, using max_stack_depth=%d", default)
        return default


MAX_STACK_DEPTH: Final[int] = _configured_depth()


class RawFrame(NamedTuple):
    """Opaque descriptor of one program location."""

    code: CodeType | None
    lineno: int | None
    module: str | None


def _raw(frame: FrameType, lineno: int | None) -> RawFrame:
    return RawFrame(frame.f_code, lineno, frame.f_globals.get("__name__"))


def _reaches(frame: FrameType | None, target: FrameType | None) -> bool:
    """Whether ``target`` is ``frame`` or one of its callers."""
    while frame is not None:
        if frame is target:
            return True
        frame = frame.f_back
    return False


def _raised_frames(tb: TracebackType | None) -> tuple[RawFrame, ...]:
    """Return a traceback's frames innermost-first, capped at the max depth."""
    window: deque[RawFrame] = deque(maxlen=MAX_STACK_DEPTH)
    while tb is not None:
        window.append(_raw(tb.tb_frame, tb.tb_lineno))
        tb = tb.tb_next
    return tuple(reversed(window))


def capture(skip: int = 0, tb: TracebackType | None = None) -> tuple[RawFrame, ...]:
    """Capture the caller's stack, innermost frame first.

    Args:
        skip: Number of additional innermost caller frames to omit. ``0``
            starts at the function that called :func:`capture`.
        tb: Optional traceback of an exception being handled. Its frames
            replace the catching frame's entry on the live stack, or are
            placed in front of it when the catching frame is not on it.

    Returns:
        tuple[RawFrame, ...]: At most :data:`MAX_STACK_DEPTH` raw frames.
        Empty when the interpreter has no frames to report.
    """
    try:
        frame: FrameType | None = sys._getframe(max(skip, 0) + 1)
    except ValueError:
        frame = None

    raised = _raised_frames(tb)
    root = tb.tb_frame if tb is not None else None
    spliced = not raised

    frames: list[RawFrame] = []
    while frame is not None and len(frames) < MAX_STACK_DEPTH:
        if not spliced and frame is root:
            frames.extend(raised)
            spliced = True
        else:
            frames.append(_raw(frame, frame.f_lineno))
        frame = frame.f_back

    # A catching frame beyond the depth cap still counts as live.
    if not spliced and not _reaches(frame, root):
        frames[:0] = raised

    if len(frames) > MAX_STACK_DEPTH or frame is not None:
        logger.debug("Stack capture truncated at %d frames", MAX_STACK_DEPTH)
        del frames[MAX_STACK_DEPTH:]

    return tuple(frames)
