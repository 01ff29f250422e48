# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Frame parser (Domain Service).

Purpose:
    Resolve raw frame descriptors into :class:`StackFrame` entities. Parsing
    is pure and deterministic; unresolvable frames are emitted with empty or
    zero fields so positions always line up with the raw stack.

Layer:
    domain/services
"""

from __future__ import annotations

from collections.abc import Iterable
from itertools import islice
from types import CodeType
from typing import Any

from arche_errors.domain.entities.stack_frame import StackFrame
from arche_errors.domain.services.stack_capture import MAX_STACK_DEPTH, RawFrame

__all__ = [
    "as_stack_frame",
    "parse_frame",
    "parse_stack",
    "split_qualified_name",
    "to_raw_stack",
]


def split_qualified_name(qualified: str) -> tuple[str, str]:
    """Split a fully-qualified function identifier into package and name.

    ``"pkg.mod:Outer.inner"`` splits at the colon. Without a colon the split
    happens at the last dot, so ``"pkg.mod.func"`` gives ``("pkg.mod", "func")``.

    Args:
        qualified: Identifier to split.

    Returns:
        tuple[str, str]: ``(package, name)``; package is ``""`` if absent.
    """
    package, sep, name = qualified.rpartition(":")
    if sep:
        return package, name
    package, _, name = qualified.rpartition(".")
    return package, name


def parse_frame(raw: RawFrame) -> StackFrame:
    """Resolve a single raw frame."""
    code, lineno, module = raw
    if code is None:
        return StackFrame(package=module or "", line_number=max(lineno or 0, 0))
    return StackFrame(
        name=getattr(code, "co_qualname", None) or code.co_name or "",
        package=module or "",
        file=code.co_filename or "",
        line_number=max(lineno or 0, 0),
        code=code,
    )


def parse_stack(raw_stack: Iterable[RawFrame]) -> tuple[StackFrame, ...]:
    """Resolve a raw stack, innermost first, capped at the max depth.

    Args:
        raw_stack: Raw frames as produced by the stack capturer.

    Returns:
        tuple[StackFrame, ...]: One frame per raw descriptor.
    """
    return tuple(parse_frame(raw) for raw in islice(raw_stack, MAX_STACK_DEPTH))


def as_stack_frame(frame: Any) -> StackFrame:
    """Copy a frame reported by a foreign frame-capable value.

    Accepts :class:`StackFrame` as-is. Other objects are read by attribute
    (``name``, ``package``, ``file``, ``line_number``); a missing package is
    derived from a fully-qualified ``name``.
    """
    if isinstance(frame, StackFrame):
        return frame

    name = str(getattr(frame, "name", "") or "")
    package = str(getattr(frame, "package", "") or "")
    if not package and ":" in name:
        package, name = split_qualified_name(name)

    try:
        line_number = max(int(getattr(frame, "line_number", 0) or 0), 0)
    except (TypeError, ValueError):
        line_number = 0

    code = getattr(frame, "code", None)
    return StackFrame(
        name=name,
        package=package,
        file=str(getattr(frame, "file", "") or ""),
        line_number=line_number,
        code=code if isinstance(code, CodeType) else None,
    )


def to_raw_stack(frames: Iterable[StackFrame]) -> tuple[RawFrame, ...]:
    """Rebuild raw descriptors from already-parsed frames."""
    return tuple(RawFrame(f.code, f.line_number, f.package or None) for f in frames)
