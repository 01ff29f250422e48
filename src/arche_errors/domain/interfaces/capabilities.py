# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Capability protocols checked by the error normalizer.

Layer:
    domain/interfaces
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ErrorWithStackFrames(Protocol):
    """A value that can report its own previously captured frames.

    Its message is whatever ``str()`` returns. The frames are
    :class:`~arche_errors.domain.entities.stack_frame.StackFrame` instances or
    any objects exposing ``name``, ``file`` and ``line_number`` attributes.
    """

    def stack_frames(self) -> Sequence[Any]:
        """Return frames innermost-first."""
        ...
