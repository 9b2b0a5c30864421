# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Classification of ``go test`` output lines.

Rules are evaluated in order and the first match wins; several markers are
substrings of one another, so the order is significant.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Final

from ..logging import Level, Reporter

TOOL_MESSAGE_PREFIX: Final[str] = "go: "
OK_PREFIX: Final[str] = "ok"
CACHED_MARKER: Final[str] = "(cached)"
PASS_PREFIX: Final[str] = "PASS"
BARE_FAIL: Final[str] = "FAIL"
FAIL_PREFIXES: Final[tuple[str, ...]] = ("FAIL", "--- FAIL")
PANIC_PREFIX: Final[str] = "panic:"
RECOVERED_MARKER: Final[str] = "[recovered]"
MISSING_PACKAGE_MARKER: Final[str] = "cannot find package"
NO_TESTS_PREFIX: Final[str] = "?"
NO_TESTS_MARKER: Final[str] = "[no test files]"
MAIN_PACKAGE: Final[str] = "main"

PackageNames = Callable[[str], Sequence[str]]


class Outcome(Enum):
    """Outcome assigned to a single line of test output."""

    SHADOWED = "shadowed"
    LOWLIT = "lowlit"
    PASS = "pass"
    NOTICE = "notice"
    FAIL = "fail"
    WARNING = "warning"

    @property
    def is_issue(self) -> bool:
        """Return ``True`` for outcomes that count against the commit."""

        return self in {Outcome.FAIL, Outcome.WARNING}

    @property
    def level(self) -> Level:
        """Return the presentation level used to display the outcome."""

        return _OUTCOME_LEVELS[self]


_OUTCOME_LEVELS: Final[dict[Outcome, Level]] = {
    Outcome.SHADOWED: Level.HIDE,
    Outcome.LOWLIT: Level.INFO,
    Outcome.PASS: Level.OK,
    Outcome.NOTICE: Level.NOTICE,
    Outcome.FAIL: Level.ERROR,
    Outcome.WARNING: Level.WARNING,
}


@dataclass(frozen=True, slots=True)
class Classification:
    """A line together with its outcome and the text to display for it."""

    outcome: Outcome
    text: str

    @property
    def is_issue(self) -> bool:
        return self.outcome.is_issue


def classify_line(line: str, package_names: PackageNames, workdir: str = "") -> Classification:
    """Classify one line of ``go test`` output.

    Args:
        line: Output line without its terminator.
        package_names: Lookup returning the Go package name(s) of a package
            path; consulted only for ``[no test files]`` lines.
        workdir: Absolute module directory, replaced by ``.`` in unrecognised
            lines and used to rewrite GOPATH-less package paths.

    Returns:
        Classification: Outcome of the first matching rule.
    """

    if line.startswith(TOOL_MESSAGE_PREFIX):
        return Classification(Outcome.SHADOWED, line)
    if line.startswith(OK_PREFIX) and CACHED_MARKER in line:
        return Classification(Outcome.LOWLIT, line)
    if line.startswith((PASS_PREFIX, OK_PREFIX)):
        return Classification(Outcome.PASS, line)
    if line == BARE_FAIL:
        return Classification(Outcome.SHADOWED, line)
    if line.startswith(FAIL_PREFIXES):
        return Classification(Outcome.FAIL, line)
    if line.startswith(PANIC_PREFIX):
        outcome = Outcome.WARNING if RECOVERED_MARKER in line else Outcome.FAIL
        return Classification(outcome, line)
    if MISSING_PACKAGE_MARKER in line:
        return Classification(Outcome.FAIL, line)
    fields = line.split()
    if line.startswith(NO_TESTS_PREFIX) and NO_TESTS_MARKER in line and len(fields) > 1:
        package = _relative_package(fields[1], workdir)
        if MAIN_PACKAGE in package_names(package):
            return Classification(Outcome.SHADOWED, line)
        return Classification(Outcome.NOTICE, line)
    display = line.replace(workdir, ".") if workdir else line
    return Classification(Outcome.WARNING, display)


def _relative_package(package: str, workdir: str) -> str:
    """Rewrite a ``_<workdir>/sub`` package path into ``./sub``."""

    if not workdir:
        return package
    marker = f"_{workdir}"
    if not package.startswith(marker):
        return package
    rest = package[len(marker) :].lstrip("/")
    return f"./{rest}" if rest else "."


class TestOutputClassifier:
    """Classify a stream of test output while counting issues."""

    __test__ = False

    def __init__(self, package_names: PackageNames, workdir: str = "") -> None:
        """Create a classifier with no issues recorded.

        Args:
            package_names: Package-name lookup used for ``[no test files]`` lines.
            workdir: Absolute module directory of the test run.
        """

        self.package_names = package_names
        self.workdir = workdir
        self.issues = 0

    def classify(self, line: str) -> Classification:
        """Classify ``line`` and count it when it is an issue."""

        result = classify_line(line, self.package_names, self.workdir)
        if result.is_issue:
            self.issues += 1
        return result

    def report(self, line: str, reporter: Reporter, context: str = "go test") -> Classification:
        """Classify ``line`` and print it at the outcome's presentation level."""

        result = self.classify(line)
        reporter.emit(result.outcome.level, context, result.text)
        return result


__all__ = [
    "Classification",
    "Outcome",
    "PackageNames",
    "TestOutputClassifier",
    "classify_line",
]
