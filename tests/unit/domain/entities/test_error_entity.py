from __future__ import annotations

import re
import threading
import time
from concurrent.futures import ThreadPoolExecutor

import pytest

from arche_errors.domain.entities import error as error_module
from arche_errors.domain.entities.error import Error, type_name_of
from arche_errors.domain.entities.stack_frame import StackFrame
from arche_errors.domain.services.frame_parser import parse_stack

_LINE_RE = re.compile(r"^(?P<file>.+):(?P<line>\d+) (?P<func>\S+)$")


def test_direct_construction_captures_caller() -> None:
    err = Error("boom")

    assert str(err) == "boom"
    assert err.type_name == "arche_errors.domain.entities.error.Error"
    assert err.err is None
    assert err.stack_frames()[0].name == "test_direct_construction_captures_caller"


def test_error_is_raisable() -> None:
    with pytest.raises(Error, match="boom"):
        raise Error("boom", type_name="Custom")


def test_adopted_frames_are_not_reparsed(monkeypatch: pytest.MonkeyPatch) -> None:
    frames = (StackFrame(name="f", file="a.py", line_number=1),)

    def _fail(raw: object) -> tuple[StackFrame, ...]:
        raise AssertionError("parse_stack must not run")

    monkeypatch.setattr(error_module, "parse_stack", _fail)
    err = Error("x", type_name="T", frames=frames)

    assert err.stack_frames() == frames
    assert len(err.callers()) == 1


def test_stack_frames_are_memoized() -> None:
    err = Error("x")

    assert err.stack_frames() is err.stack_frames()


def test_stack_is_byte_stable() -> None:
    err = Error("x")

    first = err.stack()
    second = err.stack()

    assert isinstance(first, bytes)
    assert first == second
    assert first.decode() == err.format_stack()


def test_stack_rendering_is_one_parseable_line_per_frame() -> None:
    err = Error("x")

    lines = err.format_stack().splitlines()

    assert len(lines) == len(err.stack_frames())
    for line, frame in zip(lines, err.stack_frames(), strict=True):
        match = _LINE_RE.match(line)
        assert match is not None, line
        assert int(match["line"]) == frame.line_number
        assert match["func"] == frame.func


def test_concurrent_first_access_parses_once(monkeypatch: pytest.MonkeyPatch) -> None:
    calls = 0
    calls_lock = threading.Lock()

    def _slow_parse(raw: object) -> tuple[StackFrame, ...]:
        nonlocal calls
        with calls_lock:
            calls += 1
        time.sleep(0.01)
        return parse_stack(raw)  # type: ignore[arg-type]

    err = Error("shared")
    monkeypatch.setattr(error_module, "parse_stack", _slow_parse)

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(lambda _: err.stack_frames(), range(16)))

    assert calls == 1
    assert all(r is results[0] for r in results)


def test_empty_stack_verbose_format_is_message() -> None:
    err = Error("lonely", type_name="T", frames=())

    assert format(err, "+v") == "lonely"
    assert err.stack() == b""


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (None, "NoneType"),
        ("s", "str"),
        (ValueError(), "ValueError"),
        (StackFrame(), "arche_errors.domain.entities.stack_frame.StackFrame"),
    ],
)
def test_type_name_of(value: object, expected: str) -> None:
    assert type_name_of(value) == expected
