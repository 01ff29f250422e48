# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""
Base Domain Exceptions.

Summary:
    Base class for exceptions the library raises itself. The normalizer never
    raises; these cover the explicit parsing entry points only.

Layer:
    domain/exceptions
"""
from __future__ import annotations

from typing import Any


class DomainError(Exception):
    """Base class for all library-raised exceptions."""

    code: str = "DOMAIN_ERROR"

    def __init__(self, message: str = "", *, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.details: dict[str, Any] = details or {}


class TracebackParseError(DomainError):
    """Raised when text does not contain a parseable Python traceback."""

    code = "TRACEBACK_PARSE_ERROR"
