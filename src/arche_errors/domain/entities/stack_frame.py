# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Stack frame entity.

Purpose:
    Structured, immutable view of a single call-stack location as resolved by
    the frame parser. Frames are ordered innermost-first inside an error.

Layer:
    domain/entities
"""

from __future__ import annotations

import linecache
from dataclasses import dataclass, field
from types import CodeType

from arche_errors.domain.entities.base import BaseEntity


@dataclass(frozen=True, slots=True)
class StackFrame(BaseEntity):
    """A single resolved frame.

    Attributes:
        name: Qualified function name inside its module (``co_qualname``),
            e.g. ``"a"`` or ``"Handler.run.<locals>.recover"``.
        package: Dotted module name enclosing the function. Empty when the
            interpreter could not tell.
        file: Source path as reported by the interpreter.
        line_number: 1-based line number, ``0`` when unknown.
        code: Code object the frame was resolved from, if any. Excluded from
            equality so frames rebuilt from text compare equal to live ones.
    """

    name: str = ""
    package: str = ""
    file: str = ""
    line_number: int = 0
    code: CodeType | None = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        """Validate invariants.

        Raises:
            ValueError: If ``line_number`` is negative.
        """
        if self.line_number < 0:
            raise ValueError("line_number must be >= 0")

    @property
    def func(self) -> str:
        """Fully-qualified function identifier (``package:name``)."""
        if not self.package:
            return self.name
        return f"{self.package}:{self.name}"

    def source_line(self) -> str:
        """Return the stripped source text at this frame's location.

        Returns:
            str: The source line, or ``""`` when the file or line is unknown.
        """
        if not self.file or self.line_number <= 0:
            return ""
        return linecache.getline(self.file, self.line_number).strip()

    def __str__(self) -> str:
        # One line per frame: "<file>:<line> <package>:<name>"
        return f"{self.file}:{self.line_number} {self.func}"
