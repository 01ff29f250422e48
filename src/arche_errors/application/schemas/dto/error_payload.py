# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Error payload DTOs (Application Layer).

Purpose:
    Read-only, JSON-ready projection of a normalized :class:`Error` for
    reporting collaborators. Building a payload never mutates the error.

Layer: application/schemas/dto
"""

from __future__ import annotations

from typing import cast

from pydantic import Field

from arche_errors.application.schemas.dto.base import BaseDTO
from arche_errors.domain.entities.error import Error
from arche_errors.domain.entities.stack_frame import StackFrame
from arche_errors.types import JsonValue


class StackFramePayload(BaseDTO):
    """One stack frame as reported upstream."""

    file: str = Field(..., description="Source path as reported by the interpreter.")
    line_number: int = Field(..., ge=0, description="1-based line, 0 when unknown.")
    method: str = Field(..., description="Fully-qualified function (package:name).")
    package: str = Field(default="", description="Enclosing module, may be empty.")

    @classmethod
    def from_frame(cls, frame: StackFrame) -> StackFramePayload:
        return cls(
            file=frame.file,
            line_number=frame.line_number,
            method=frame.func,
            package=frame.package,
        )


class ErrorPayload(BaseDTO):
    """Normalized error as reported upstream."""

    error_class: str = Field(..., description="Runtime type name of the original signal.")
    message: str = Field(..., description="Human-readable error message.")
    stacktrace: list[StackFramePayload] = Field(
        default_factory=list, description="Frames, innermost first."
    )

    @classmethod
    def from_error(cls, err: Error) -> ErrorPayload:
        """Project an :class:`Error` (parses its frames if not done yet)."""
        return cls(
            error_class=err.type_name,
            message=err.message,
            stacktrace=[StackFramePayload.from_frame(f) for f in err.stack_frames()],
        )

    def to_json(self) -> JsonValue:
        """Return a JSON-serializable dict."""
        return cast(JsonValue, self.model_dump(mode="json"))
