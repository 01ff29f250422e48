# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Public entry points.

Thin wrappers over the domain services that also record the
``arche_errors_normalized_total`` metric. Each wrapper hides its own frame
from captured stacks, so a stack always starts at the caller.
"""

from __future__ import annotations

from arche_errors.domain.entities.error import Error
from arche_errors.domain.enums.signal_kind import SignalKind
from arche_errors.domain.services import normalizer, traceback_parser
from arche_errors.domain.services.stack_capture import capture
from arche_errors.infrastructure.observability.metrics import record_normalized

__all__ = ["errorf", "new", "parse_traceback"]


def new(signal: object, skip: int = 0) -> Error:
    """Normalize any failure signal into an :class:`Error`.

    Args:
        signal: ``None``, an :class:`Error`, a value exposing
            ``stack_frames()``, an exception, a string, or anything else.
        skip: Extra innermost frames to drop. ``0`` starts the stack at the
            caller of :func:`new`. For a raised exception, skip only trims
            helper frames between the catching frame and :func:`new`; the
            catching frame itself is part of the raised path and stays, so
            ``new(exc, 1)`` called directly in the ``except`` block gives the
            same frames as ``new(exc)``.

    Returns:
        Error: ``signal`` itself when it already is one, else a new error.

    Example:
        try:
            handler()
        except Exception as exc:
            raise new(exc) from exc
    """
    err = normalizer.normalize(signal, skip + 1)
    record_normalized(normalizer.classify(signal).value)
    return err


def errorf(format_: str, *args: object) -> Error:
    """Build an :class:`Error` from a printf-style template.

    Args:
        format_: ``%``-style template. Used verbatim when no args are given.
        *args: Substitution values.

    Returns:
        Error: New error with type name ``Exception``, stack starting at the
        caller of :func:`errorf`.
    """
    message = normalizer.format_message(format_, *args)
    err = Error(message, err=Exception(message), raw_stack=capture(1))
    record_normalized(SignalKind.FORMATTED.value)
    return err


def parse_traceback(text: str) -> Error:
    """Rebuild an :class:`Error` from printed traceback text.

    Raises:
        TracebackParseError: If ``text`` holds no complete traceback block.
    """
    err = traceback_parser.parse_traceback(text)
    record_normalized(SignalKind.PARSED.value)
    return err
