# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Normalized error entity.

Purpose:
    An exception carrying a message, the runtime type name of the original
    failure signal, and the call stack captured when it was built. Frames are
    parsed on first access and memoized.

Layer:
    domain/entities

Notes:
    - The raw stack is captured exactly once, in ``__init__``.
    - First-access parsing is guarded by a per-instance lock, so concurrent
      readers of a shared instance trigger a single parse.
"""

from __future__ import annotations

import threading
from collections.abc import Sequence

from arche_errors.domain.entities.stack_frame import StackFrame
from arche_errors.domain.services.frame_parser import parse_stack, to_raw_stack
from arche_errors.domain.services.stack_capture import MAX_STACK_DEPTH, RawFrame, capture

__all__ = ["Error", "type_name_of"]

_VERBOSE_SPEC = "+v"


def type_name_of(value: object) -> str:
    """Return ``module.QualName`` for a value's type (no ``builtins.`` prefix)."""
    cls = type(value)
    qualname = getattr(cls, "__qualname__", cls.__name__)
    module = getattr(cls, "__module__", None)
    if not module or module == "builtins":
        return qualname
    return f"{module}.{qualname}"


class Error(Exception):
    """Exception with a captured, lazily parsed stack trace.

    Build instances with :func:`arche_errors.new` or :func:`arche_errors.errorf`
    rather than directly; those entry points classify arbitrary failure
    signals and apply skip counts.

    Args:
        message: Human-readable message.
        type_name: Runtime type name of the original signal. Defaults to the
            type name of ``err`` (or of this error when ``err`` is ``None``).
        err: The wrapped underlying value.
        raw_stack: Pre-captured raw frames. When omitted and ``frames`` is
            also omitted, the stack is captured starting at the caller.
        frames: Already-parsed frames to adopt instead of capturing. Only the
            first :data:`MAX_STACK_DEPTH` are kept.
    """

    def __init__(
        self,
        message: str,
        *,
        type_name: str | None = None,
        err: object | None = None,
        raw_stack: Sequence[RawFrame] | None = None,
        frames: Sequence[StackFrame] | None = None,
    ) -> None:
        super().__init__(message)
        self._message = message
        self._err = err
        self._type_name = type_name or type_name_of(self if err is None else err)
        self._lock = threading.Lock()
        self._frames: tuple[StackFrame, ...] | None = None

        if frames is not None:
            self._frames = tuple(frames)[:MAX_STACK_DEPTH]
            if raw_stack is None:
                raw_stack = to_raw_stack(self._frames)
        elif raw_stack is None:
            raw_stack = capture(1)
        self._raw_stack: tuple[RawFrame, ...] = tuple(raw_stack)

    @property
    def message(self) -> str:
        return self._message

    @property
    def type_name(self) -> str:
        return self._type_name

    @property
    def err(self) -> object | None:
        """The underlying value this error wraps."""
        return self._err

    def callers(self) -> tuple[RawFrame, ...]:
        """Return the raw stack captured at construction."""
        return self._raw_stack

    def stack_frames(self) -> tuple[StackFrame, ...]:
        """Return the parsed frames, innermost first.

        The first call parses the raw stack; later calls return the same tuple.
        """
        frames = self._frames
        if frames is None:
            with self._lock:
                if self._frames is None:
                    self._frames = parse_stack(self._raw_stack)
                frames = self._frames
        return frames

    def format_stack(self) -> str:
        """Render the stack as text, one ``file:line package:name`` line per frame."""
        return "".join(f"{frame}\n" for frame in self.stack_frames())

    def stack(self) -> bytes:
        """Render the stack as UTF-8 bytes (see :meth:`format_stack`)."""
        return self.format_stack().encode("utf-8", errors="backslashreplace")

    def __str__(self) -> str:
        return self._message

    def __repr__(self) -> str:
        return f"Error(type_name={self._type_name!r}, message={self._message!r})"

    def __format__(self, format_spec: str) -> str:
        if format_spec == _VERBOSE_SPEC:
            rendered = self.format_stack().rstrip("\n")
            return f"{self._message}\n{rendered}" if rendered else self._message
        if format_spec == "v":
            return self._message
        return format(self._message, format_spec)
