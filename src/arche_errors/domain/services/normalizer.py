# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Error normalizer (Domain Service).

Purpose:
    Turn any failure signal into an :class:`Error`. Classification order:

    1. ``None``                      -> message ``"<nil>"``
    2. an existing :class:`Error`    -> returned unchanged
    3. :class:`ErrorWithStackFrames` -> frames copied, nothing captured
    4. ``BaseException``             -> its message; raised path spliced in
    5. ``str``                       -> verbatim, wrapped in ``Exception``
    6. anything else                 -> printed form, original type name

    Every input classifies into exactly one case and none of them raise.

Layer:
    domain/services
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from itertools import islice
from typing import cast

from arche_errors.domain.entities.error import Error, type_name_of
from arche_errors.domain.entities.stack_frame import StackFrame
from arche_errors.domain.enums.signal_kind import SignalKind
from arche_errors.domain.interfaces.capabilities import ErrorWithStackFrames
from arche_errors.domain.services.frame_parser import as_stack_frame
from arche_errors.domain.services.stack_capture import MAX_STACK_DEPTH, capture

__all__ = ["NIL_MESSAGE", "classify", "format_message", "normalize"]

logger = logging.getLogger(__name__)

NIL_MESSAGE = "<nil>"


def _printed(value: object) -> str:
    """Default printed representation of an arbitrary value."""
    try:
        return str(value)
    except Exception:  # noqa: BLE001
        try:
            return repr(value)
        except Exception:  # noqa: BLE001
            return f"<unprintable {type_name_of(value)}>"


def _printed_args(args: tuple[object, ...]) -> str:
    try:
        return repr(args)
    except Exception:  # noqa: BLE001
        return "(" + ", ".join(_printed(arg) for arg in args) + ")"


def _reported_frames(signal: ErrorWithStackFrames) -> list[StackFrame]:
    try:
        reported = signal.stack_frames() or ()
        return [as_stack_frame(frame) for frame in islice(reported, MAX_STACK_DEPTH)]
    except Exception:  # noqa: BLE001
        logger.debug("stack_frames() failed on %s", type_name_of(signal), exc_info=True)
        return []


def classify(signal: object) -> SignalKind:
    """Return which normalization case ``signal`` falls into."""
    if signal is None:
        return SignalKind.NIL
    if isinstance(signal, Error):
        return SignalKind.PASSTHROUGH
    # Classes satisfy runtime protocols through their unbound methods.
    if isinstance(signal, ErrorWithStackFrames) and not isinstance(signal, type):
        return SignalKind.FRAMES
    if isinstance(signal, BaseException):
        return SignalKind.EXCEPTION
    if isinstance(signal, str):
        return SignalKind.STRING
    return SignalKind.OTHER


def normalize(signal: object, skip: int = 0) -> Error:
    """Normalize a failure signal into an :class:`Error`.

    Args:
        signal: Any value: ``None``, an :class:`Error`, a frame-capable value,
            an exception, a string, or anything else.
        skip: Extra innermost frames to drop from a freshly captured stack.
            ``0`` starts at the caller of :func:`normalize`. Ignored when
            nothing is captured.

    Returns:
        Error: ``signal`` itself when it already is one, else a new error.
    """
    kind = classify(signal)
    if kind is SignalKind.PASSTHROUGH:
        return cast(Error, signal)
    if kind is SignalKind.NIL:
        return Error(NIL_MESSAGE, type_name=type_name_of(None), raw_stack=capture(skip + 1))
    if kind is SignalKind.FRAMES:
        reporter = cast(ErrorWithStackFrames, signal)
        return Error(
            _printed(reporter),
            type_name=type_name_of(reporter),
            err=reporter,
            frames=_reported_frames(reporter),
        )
    if isinstance(signal, BaseException):
        return Error(
            _printed(signal),
            err=signal,
            raw_stack=capture(skip + 1, signal.__traceback__),
        )
    if isinstance(signal, str):
        return Error(signal, err=Exception(signal), raw_stack=capture(skip + 1))

    message = _printed(signal)
    return Error(
        message,
        type_name=type_name_of(signal),
        err=Exception(message),
        raw_stack=capture(skip + 1),
    )


def format_message(format_: str, *args: object) -> str:
    """Apply ``%``-style substitution, never raising.

    The template is used verbatim when no args are given. A single mapping
    argument feeds named placeholders. A mismatched template falls back to the
    template followed by the raw arguments.
    """
    if not args:
        return format_
    values = args[0] if len(args) == 1 and isinstance(args[0], Mapping) else args
    try:
        return format_ % values
    except Exception:  # noqa: BLE001
        logger.warning("errorf: template substitution failed for %r", format_, exc_info=True)
    return f"{format_} {_printed_args(args)}"
