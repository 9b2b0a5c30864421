# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the streamed subprocess output."""

from __future__ import annotations

import threading

import pytest

from goprecommit.checks.classify import Outcome, TestOutputClassifier
from goprecommit.clients.streaming import LineStream
from goprecommit.core.context import RunCancelled, RunContext


def test_lines_arrive_in_order(make_script, context: RunContext) -> None:
    script = make_script("emit", "echo one; echo two >&2; echo three")

    with LineStream([str(script)], context=context) as stream:
        lines = list(stream)

    assert lines == ["one", "two", "three"]


def test_stream_is_single_pass(make_script, context: RunContext) -> None:
    script = make_script("emit", "echo only")
    stream = LineStream([str(script)], context=context)

    assert list(stream) == ["only"]
    assert list(stream) == []
    assert stream.join(timeout=5)


def test_start_failure_yields_one_line(tmp_path, context: RunContext) -> None:
    missing = tmp_path / "missing-binary"

    lines = list(LineStream([str(missing)], context=context))

    assert len(lines) == 1
    assert "missing-binary" in lines[0]


def test_nonzero_exit_adds_status_line(make_script, context: RunContext) -> None:
    script = make_script("emit", "echo FAIL; exit 1")

    assert list(LineStream([str(script)], context=context)) == ["FAIL", "exit status 1"]


def test_zero_exit_adds_no_line(make_script, context: RunContext) -> None:
    script = make_script("emit", "echo ok")

    assert list(LineStream([str(script)], context=context)) == ["ok"]


def test_failed_run_with_only_shadowed_output_counts_an_issue(make_script, context: RunContext) -> None:
    script = make_script("go", "echo \"go: inconsistent vendoring in /src/proj\"; exit 1")
    classifier = TestOutputClassifier(lambda _package: ["library"])

    with LineStream([str(script)], context=context) as stream:
        outcomes = [classifier.classify(line).outcome for line in stream]

    assert outcomes == [Outcome.SHADOWED, Outcome.WARNING]
    assert classifier.issues == 1


def test_abandoned_stream_lets_producer_finish(make_script, context: RunContext) -> None:
    script = make_script("chatty", 'i=0; while [ "$i" -lt 2000 ]; do echo "line $i"; i=$((i+1)); done')
    stream = LineStream([str(script)], context=context)

    assert next(stream) == "line 0"
    stream.close()

    assert stream.join(timeout=10)
    with pytest.raises(StopIteration):
        next(stream)


def test_cancellation_is_observed_while_waiting(make_script) -> None:
    script = make_script("slow", "echo first; exec sleep 2")
    context = RunContext()
    stream = LineStream([str(script)], context=context)

    assert next(stream) == "first"
    threading.Timer(0.2, context.cancel).start()
    with pytest.raises(RunCancelled):
        next(stream)
    assert stream.join(timeout=10)
