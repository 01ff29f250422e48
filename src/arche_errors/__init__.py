# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Stack-trace-capturing errors.

Public API:
    new(signal, skip=0)     Normalize any failure signal into an ``Error``.
    errorf(format_, *args)  Build an ``Error`` from a printf-style template.
    parse_traceback(text)   Rebuild an ``Error`` from printed traceback text.

Example:
    from arche_errors import new

    try:
        run_job()
    except Exception as exc:
        err = new(exc)
        log.error(format(err, "+v"))
"""

from __future__ import annotations

from arche_errors.api import errorf, new, parse_traceback
from arche_errors.domain.entities.error import Error, type_name_of
from arche_errors.domain.entities.stack_frame import StackFrame
from arche_errors.domain.enums.signal_kind import SignalKind
from arche_errors.domain.exceptions.base import DomainError, TracebackParseError
from arche_errors.domain.interfaces.capabilities import ErrorWithStackFrames
from arche_errors.domain.services.frame_parser import parse_stack, split_qualified_name
from arche_errors.domain.services.stack_capture import MAX_STACK_DEPTH, RawFrame, capture

__all__ = [
    "MAX_STACK_DEPTH",
    "DomainError",
    "Error",
    "ErrorWithStackFrames",
    "RawFrame",
    "SignalKind",
    "StackFrame",
    "TracebackParseError",
    "capture",
    "errorf",
    "new",
    "parse_stack",
    "parse_traceback",
    "split_qualified_name",
    "type_name_of",
]
