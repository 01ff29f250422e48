# tests/unit/domain/services/test_frame_parser.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Unit tests for frame_parser."""

from __future__ import annotations

from types import SimpleNamespace

import pytest

from arche_errors.domain.entities.stack_frame import StackFrame
from arche_errors.domain.services.frame_parser import (
    as_stack_frame,
    parse_frame,
    parse_stack,
    split_qualified_name,
    to_raw_stack,
)
from arche_errors.domain.services.stack_capture import MAX_STACK_DEPTH, RawFrame, capture


class _Outer:
    def method(self) -> tuple[RawFrame, ...]:
        return capture()


@pytest.mark.parametrize(
    ("qualified", "expected"),
    [
        ("pkg.mod:Outer.inner", ("pkg.mod", "Outer.inner")),
        ("pkg.mod:func", ("pkg.mod", "func")),
        ("pkg.mod.func", ("pkg.mod", "func")),
        ("func", ("", "func")),
        ("", ("", "")),
    ],
)
def test_split_qualified_name(qualified: str, expected: tuple[str, str]) -> None:
    assert split_qualified_name(qualified) == expected


def test_parse_frame_resolves_live_frame() -> None:
    raw = _Outer().method()[0]

    frame = parse_frame(raw)

    assert frame.name == "_Outer.method"
    assert frame.package == __name__
    assert frame.file == raw.code.co_filename
    assert frame.line_number == raw.lineno
    assert frame.code is raw.code
    assert frame.func == f"{__name__}:_Outer.method"


def test_parse_frame_unresolved_gives_empty_fields() -> None:
    assert parse_frame(RawFrame(None, None, None)) == StackFrame()
    assert parse_frame(RawFrame(None, 7, "pkg")) == StackFrame(package="pkg", line_number=7)


def test_parse_frame_clamps_negative_line() -> None:
    code = test_parse_frame_clamps_negative_line.__code__

    assert parse_frame(RawFrame(code, -1, None)).line_number == 0


def test_parse_stack_keeps_positions() -> None:
    live = capture()[0]
    raw = (live, RawFrame(None, None, None), live)

    frames = parse_stack(raw)

    assert len(frames) == 3
    assert frames[1] == StackFrame()
    assert frames[0] == frames[2]
    assert frames[0].name == "test_parse_stack_keeps_positions"


def test_parse_stack_is_deterministic() -> None:
    raw = capture()

    assert parse_stack(raw) == parse_stack(raw)


def test_parse_stack_truncates_to_max_depth() -> None:
    raw = [RawFrame(None, i, None) for i in range(MAX_STACK_DEPTH + 10)]

    frames = parse_stack(raw)

    assert len(frames) == MAX_STACK_DEPTH
    assert frames[-1].line_number == MAX_STACK_DEPTH - 1


def test_as_stack_frame_passes_through_entities() -> None:
    frame = StackFrame(name="f", file="x.py", line_number=1)

    assert as_stack_frame(frame) is frame


def test_as_stack_frame_reads_attributes() -> None:
    foreign = SimpleNamespace(name="svc:Job.run", file="job.py", line_number="9", code="E42")

    frame = as_stack_frame(foreign)

    assert frame == StackFrame(name="Job.run", package="svc", file="job.py", line_number=9)
    assert frame.code is None


def test_as_stack_frame_tolerates_missing_attributes() -> None:
    assert as_stack_frame(object()) == StackFrame()


def test_to_raw_stack_reparses_to_same_frames() -> None:
    frames = parse_stack(capture())

    assert parse_stack(to_raw_stack(frames)) == frames
