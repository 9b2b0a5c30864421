# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Verdict aggregation plus the branch-name and end-of-line rules."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from ..core.context import RunContext
from ..filesystem import ends_with_eol


@dataclass(slots=True)
class Verdict:
    """Accumulated outcome of a run, read once to choose the exit status.

    Attributes:
        issues: Number of issues reported by formatters, linters and tests.
        reasons: Categorical rules that blocked the commit regardless of ``issues``.
    """

    issues: int = 0
    reasons: list[str] = field(default_factory=list)

    def add_issues(self, count: int) -> None:
        """Add ``count`` issues to the tally."""

        self.issues += count

    def block(self, reason: str) -> None:
        """Record a rule violation that blocks the commit."""

        self.reasons.append(reason)

    @property
    def blocked(self) -> bool:
        """Return ``True`` when any issue or rule violation was recorded."""

        return self.issues > 0 or bool(self.reasons)

    @property
    def exit_code(self) -> int:
        return 1 if self.blocked else 0


def branch_is_protected(branch: str, head_branch: str, protected: Iterable[str]) -> bool:
    """Return ``True`` when committing to ``branch`` is not allowed.

    Args:
        branch: Currently checked out branch.
        head_branch: Default branch of the remote.
        protected: Additional branch names that never accept commits.

    Returns:
        bool: ``True`` if ``branch`` is the default branch or a protected one.
    """

    return branch == head_branch or branch in set(protected)


def eol_exempt(path: str, exempt_suffixes: Iterable[str]) -> bool:
    """Return ``True`` when ``path`` is not subject to the end-of-line rule.

    Paths without any ``.`` and paths with an exempt suffix (archives such as
    ``.jar``) are skipped. The whole tracked path is tested, so
    ``dir.v2/LICENSE`` is checked.
    """

    if "." not in path:
        return True
    return path.endswith(tuple(exempt_suffixes))


@dataclass(frozen=True, slots=True)
class EolViolation:
    """A tracked file that does not end with a newline, or could not be read."""

    path: str
    error: str | None = None


def eol_violations(
    files: Iterable[str],
    *,
    root: Path,
    exempt_suffixes: Iterable[str],
    context: RunContext | None = None,
) -> list[EolViolation]:
    """Return the tracked files that break the end-of-line rule.

    Args:
        files: Tracked paths relative to ``root``.
        root: Directory the paths are relative to.
        exempt_suffixes: Suffixes whose files are never checked.
        context: Optional run context checked between files.

    Returns:
        list[EolViolation]: Offending files in input order. Unreadable files are
        reported with the error that prevented the check.
    """

    suffixes = tuple(exempt_suffixes)
    violations: list[EolViolation] = []
    for path in files:
        if context is not None:
            context.check()
        if eol_exempt(path, suffixes):
            continue
        try:
            if not ends_with_eol(root / path):
                violations.append(EolViolation(path))
        except OSError as exc:
            violations.append(EolViolation(path, error=str(exc)))
    return violations


__all__ = [
    "EolViolation",
    "Verdict",
    "branch_is_protected",
    "eol_exempt",
    "eol_violations",
]
