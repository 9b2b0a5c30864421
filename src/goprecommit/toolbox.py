# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Per-run bundle of tool clients, cancellation and presentation."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .clients.formatters import FormatterClient
from .clients.git import GitClient
from .clients.go import GoClient
from .clients.golint import GolintClient
from .config import GateConfig
from .core.context import RunContext
from .core.process import Tool
from .logging import Reporter


@dataclass(frozen=True, slots=True)
class Toolbox:
    """Clients shared by every check of a single run.

    Each client owns its memoized values, so building one toolbox per run keeps
    "compute once" scoped to that run.
    """

    root: Path
    config: GateConfig
    context: RunContext
    reporter: Reporter
    git: GitClient
    go: GoClient
    gofmt: FormatterClient
    goimports: FormatterClient
    golint: GolintClient

    @classmethod
    def from_config(
        cls,
        config: GateConfig,
        context: RunContext,
        reporter: Reporter,
        root: Path | None = None,
    ) -> Toolbox:
        """Construct unresolved tool bindings and clients for ``config``.

        Args:
            config: Run configuration including executable overrides.
            context: Run context shared by every client.
            reporter: Presentation used by clients that print directly.
            root: Repository directory, the process working directory by default.

        Returns:
            Toolbox: Ready-to-use clients; executables resolve on first use.
        """

        tools = config.tools
        resolved_root = (root or Path.cwd()).resolve()
        return cls(
            root=resolved_root,
            config=config,
            context=context,
            reporter=reporter,
            git=GitClient(Tool("git", tools.git), context, resolved_root),
            go=GoClient(Tool("go", tools.go), context, reporter),
            gofmt=FormatterClient(Tool("gofmt", tools.gofmt), context),
            goimports=FormatterClient(Tool("goimports", tools.goimports), context),
            golint=GolintClient(Tool("golint", tools.golint), context, reporter),
        )


__all__ = ["Toolbox"]
