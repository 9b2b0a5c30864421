# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Client for the ``golint`` style checker."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Final

from ..core.context import RunContext
from ..core.process import Tool
from ..logging import Reporter

GODOC_PATTERN: Final[re.Pattern[str]] = re.compile(r" or be unexported$")
ROOT_PACKAGE_LABEL: Final[str] = "<root package>"


class GolintClient:
    """Structured interface to a ``golint`` binary."""

    def __init__(self, tool: Tool, context: RunContext, reporter: Reporter) -> None:
        self.tool = tool
        self.context = context
        self.reporter = reporter

    def lint(
        self,
        package: str,
        trim_prefix: str,
        *,
        ignore_godoc: bool = False,
        cwd: Path | None = None,
    ) -> bool:
        """Lint ``package`` and report every issue found.

        The package name is reported once as an error before its first issue;
        each issue follows as a warning with ``trim_prefix`` removed.

        Args:
            package: Package path handed to ``golint``.
            trim_prefix: Prefix stripped from the start of every issue line.
            ignore_godoc: Drop "... or be unexported" documentation issues.
            cwd: Optional working directory.

        Returns:
            bool: ``True`` when at least one issue was reported.
        """

        issues = 0
        args = (package,) if package else ()
        output, _ = self.tool.combined_output(self.context, *args, cwd=cwd)
        for line in output.split("\n"):
            if not line:
                continue
            if ignore_godoc and GODOC_PATTERN.search(line):
                continue
            if issues == 0:
                self.reporter.fail(self.tool.name, package or ROOT_PACKAGE_LABEL)
            self.reporter.warn(self.tool.name, line.removeprefix(trim_prefix))
            issues += 1
        return issues > 0


__all__ = ["GODOC_PATTERN", "GolintClient", "ROOT_PACKAGE_LABEL"]
