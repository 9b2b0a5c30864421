# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for ``go test`` output classification."""

from __future__ import annotations

from collections.abc import Sequence

import pytest

from goprecommit.checks.classify import Outcome, TestOutputClassifier, classify_line
from goprecommit.logging import NoiseLevel, Reporter


def _library(_package: str) -> Sequence[str]:
    return ["library"]


def _never_called(package: str) -> Sequence[str]:
    raise AssertionError(f"unexpected package lookup for {package}")


@pytest.mark.parametrize(
    ("line", "outcome"),
    [
        ("go: downloading example.com/mod v1.0.0", Outcome.SHADOWED),
        ("ok  \texample.com/pkg\t(cached)", Outcome.LOWLIT),
        ("ok  \texample.com/pkg\t0.013s", Outcome.PASS),
        ("PASS", Outcome.PASS),
        ("FAIL", Outcome.SHADOWED),
        ("FAIL\texample.com/pkg\t0.010s", Outcome.FAIL),
        ("--- FAIL: TestThing (0.00s)", Outcome.FAIL),
        ("panic: runtime error: index out of range", Outcome.FAIL),
        ("panic: boom [recovered]", Outcome.WARNING),
        ('pkg/x.go:3:2: cannot find package "nope" in any of', Outcome.FAIL),
        ("something unexpected", Outcome.WARNING),
    ],
)
def test_rules(line: str, outcome: Outcome) -> None:
    assert classify_line(line, _never_called).outcome is outcome


def test_stream_example_counts_one_issue() -> None:
    classifier = TestOutputClassifier(_library)

    outcomes = [
        classifier.classify(line).outcome
        for line in ["ok pkg/a 0.01s", "--- FAIL: TestX", "? pkg/b [no test files]"]
    ]

    assert outcomes == [Outcome.PASS, Outcome.FAIL, Outcome.NOTICE]
    assert classifier.issues == 1


def test_bare_fail_is_not_double_counted() -> None:
    classifier = TestOutputClassifier(_never_called)

    outcomes = [classifier.classify(line).outcome for line in ["FAIL", "--- FAIL: TestY"]]

    assert outcomes == [Outcome.SHADOWED, Outcome.FAIL]
    assert classifier.issues == 1


def test_cached_ok_is_never_an_issue() -> None:
    classifier = TestOutputClassifier(_never_called)

    assert classifier.classify("ok pkg/c (cached)").outcome is Outcome.LOWLIT
    assert classifier.issues == 0


def test_recovered_panic_still_counts() -> None:
    classifier = TestOutputClassifier(_never_called)

    classifier.classify("panic: oops [recovered]")

    assert classifier.issues == 1


def test_main_package_without_tests_is_shadowed() -> None:
    lookups: list[str] = []

    def names(package: str) -> Sequence[str]:
        lookups.append(package)
        return ["main"]

    result = classify_line("?   \texample.com/cmd/tool\t[no test files]", names)

    assert result.outcome is Outcome.SHADOWED
    assert lookups == ["example.com/cmd/tool"]


def test_gopath_less_package_is_rewritten_relative() -> None:
    lookups: list[str] = []

    def names(package: str) -> Sequence[str]:
        lookups.append(package)
        return ["util"]

    result = classify_line("?   \t_/home/dev/proj/util\t[no test files]", names, workdir="/home/dev/proj")

    assert result.outcome is Outcome.NOTICE
    assert lookups == ["./util"]


def test_unrecognised_line_hides_workdir() -> None:
    result = classify_line("/home/dev/proj/x_test.go:12: oops", _never_called, workdir="/home/dev/proj")

    assert result.outcome is Outcome.WARNING
    assert result.text == "./x_test.go:12: oops"


def test_report_prints_at_outcome_level(capsys: pytest.CaptureFixture[str]) -> None:
    classifier = TestOutputClassifier(_never_called)
    reporter = Reporter(noise=NoiseLevel.NORMAL, color=False)

    classifier.report("--- FAIL: TestZ", reporter)

    assert "go test: --- FAIL: TestZ" in capsys.readouterr().err
    assert classifier.issues == 1
