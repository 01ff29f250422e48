# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Failure signal classification.

Layer:
    domain/enums
"""

from __future__ import annotations

from enum import Enum


class SignalKind(str, Enum):
    """How a failure signal was turned into an error, in classification order."""

    NIL = "nil"
    PASSTHROUGH = "passthrough"
    FRAMES = "frames"
    EXCEPTION = "exception"
    STRING = "string"
    OTHER = "other"
    FORMATTED = "formatted"
    PARSED = "parsed"
