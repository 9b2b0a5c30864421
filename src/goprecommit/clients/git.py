# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Git client used to inspect the repository being committed to."""

from __future__ import annotations

from pathlib import Path
from threading import Lock
from typing import Final

from ..core.context import RunContext
from ..core.once import OnceCell
from ..core.process import Tool

REMOTE_PREFIX: Final[str] = "origin/"


class GitClient:
    """Structured interface to a ``git`` binary.

    Branch names are computed once per client; tracked files are cached per
    working directory.
    """

    def __init__(self, tool: Tool, context: RunContext, root: Path | None = None) -> None:
        """Bind the client to ``tool`` and the run ``context``.

        Args:
            tool: Tool binding for the git executable.
            context: Run context carrying cancellation.
            root: Directory repository-wide queries run in; the process
                working directory when omitted.
        """

        self.tool = tool
        self.context = context
        self.root = root
        self._branch: OnceCell[str] = OnceCell()
        self._head: OnceCell[str] = OnceCell()
        self._files: dict[Path, list[str]] = {}
        self._files_lock = Lock()

    def in_repo(self, cwd: Path | None = None) -> bool:
        """Return ``True`` when ``cwd`` lies inside a git work tree."""

        output, ok = self.tool.combined_output(self.context, "rev-parse", "--is-inside-work-tree", cwd=cwd or self.root)
        return ok and output.strip() == "true"

    def branch(self) -> str:
        """Return the name of the checked out branch."""

        return self._branch.get(self._resolve_branch)

    def _resolve_branch(self) -> str:
        return self.tool.must_output(self.context, "rev-parse", "--abbrev-ref", "HEAD", cwd=self.root)

    def head_branch(self) -> str:
        """Return the remote's default branch with the ``origin/`` prefix removed."""

        return self._head.get(self._resolve_head)

    def _resolve_head(self) -> str:
        head = self.tool.must_output(self.context, "rev-parse", "--abbrev-ref", "refs/remotes/origin/HEAD", cwd=self.root)
        return head.removeprefix(REMOTE_PREFIX)

    def files(self, cwd: Path | None = None) -> list[str]:
        """Return the files tracked under ``cwd``, relative to it.

        Args:
            cwd: Working directory to list from; the process directory when omitted.

        Returns:
            list[str]: Tracked paths as reported by ``git ls-files``.
        """

        key = (cwd or self.root or Path.cwd()).resolve()
        with self._files_lock:
            cached = self._files.get(key)
            if cached is None:
                output = self.tool.must_output(self.context, "ls-files", cwd=key)
                cached = [line for line in output.split("\n") if line]
                self._files[key] = cached
        return list(cached)

    def check_ignore(self, path: str, cwd: Path | None = None) -> bool:
        """Return ``True`` when git ignores ``path``; the output is not inspected."""

        _, ok = self.tool.combined_output(self.context, "check-ignore", "-q", path, cwd=cwd)
        return ok


__all__ = ["GitClient", "REMOTE_PREFIX"]
