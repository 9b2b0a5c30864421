# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Clients for ``gofmt``-style formatters that list unformatted files."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from ..core.context import RunContext
from ..core.process import Tool


class FormatterClient:
    """Structured interface to ``gofmt`` or ``goimports``."""

    def __init__(self, tool: Tool, context: RunContext) -> None:
        self.tool = tool
        self.context = context

    @property
    def name(self) -> str:
        return self.tool.name

    def list(self, filenames: Sequence[str], cwd: Path | None = None) -> list[str]:
        """Return the sorted subset of ``filenames`` that needs reformatting.

        Args:
            filenames: Source files to check, relative to ``cwd``.
            cwd: Optional working directory.

        Returns:
            list[str]: Sorted file names reported by ``-l``.
        """

        output, _ = self.tool.combined_output(self.context, "-l", *filenames, cwd=cwd)
        return sorted(line for line in output.split("\n") if line)


def reformat_findings(
    formatters: Sequence[FormatterClient],
    filenames: Sequence[str],
    cwd: Path | None = None,
) -> list[tuple[str, str]]:
    """Collect ``(formatter, file)`` findings across ``formatters`` in order.

    A file already flagged by an earlier formatter is not flagged again.

    Args:
        formatters: Formatter clients run one after the other.
        filenames: Source files to check.
        cwd: Optional working directory.

    Returns:
        list[tuple[str, str]]: One entry per flagged file.
    """

    flagged: set[str] = set()
    findings: list[tuple[str, str]] = []
    for formatter in formatters:
        for filename in formatter.list(filenames, cwd=cwd):
            if filename in flagged:
                continue
            flagged.add(filename)
            findings.append((formatter.name, filename))
    return findings


__all__ = ["FormatterClient", "reformat_findings"]
