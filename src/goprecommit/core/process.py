# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tool bindings and the invocation modes built on top of ``subprocess``."""

from __future__ import annotations

import logging
import shutil

# Bandit: subprocess usage is intentional, every invocation passes an argument
# list to a resolved executable and never enables ``shell=True``.
import subprocess  # nosec B404
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Final

from .context import RunCancelled, RunContext
from .once import OnceCell

LOGGER = logging.getLogger(__name__)

_POLL_INTERVAL: Final[float] = 0.1


class GoPrecommitError(RuntimeError):
    """Base class for fatal errors that abort the whole run."""


class ToolNotFoundError(GoPrecommitError):
    """Raised when a tool's executable cannot be located."""

    def __init__(self, tool: str, executable: str) -> None:
        """Initialise the error for ``tool`` and the missing ``executable``.

        Args:
            tool: Logical tool name (for example ``"go"``).
            executable: Executable name or path that failed to resolve.
        """

        super().__init__(f"{tool}: exec: {executable!r}: executable file not found in $PATH")
        self.tool = tool
        self.executable = executable


class ToolExecutionError(GoPrecommitError):
    """Raised when a subprocess cannot run or reports an unrecoverable failure."""

    def __init__(
        self,
        tool: str,
        command: Sequence[str],
        reason: str,
        *,
        returncode: int | None = None,
        output: str = "",
    ) -> None:
        """Initialise the error with captured subprocess metadata.

        Args:
            tool: Logical tool name that was invoked.
            command: Argument vector that was executed.
            reason: Short description of the failure.
            returncode: Exit status when the process ran to completion.
            output: Trimmed output captured before the failure.
        """

        super().__init__(f"{tool}: {reason}")
        self.tool = tool
        self.command = tuple(command)
        self.reason = reason
        self.returncode = returncode
        self.output = output


@dataclass(frozen=True, slots=True)
class InvocationOutcome:
    """Captured text and success flag of a completed invocation."""

    output: str
    ok: bool
    returncode: int


@dataclass(frozen=True, slots=True)
class Invocation:
    """Runnable description of a single tool invocation."""

    tool: Tool
    context: RunContext
    argv: tuple[str, ...]
    cwd: Path | None = None

    def run(self, *, merge_stderr: bool = False) -> InvocationOutcome:
        """Run the invocation to completion and capture its output.

        Args:
            merge_stderr: When ``True`` standard error is captured together with
                standard output; otherwise it passes through to our stderr.

        Returns:
            InvocationOutcome: Trimmed output, success flag and exit status.

        Raises:
            ToolExecutionError: If the process cannot be started or its output
                cannot be read.
            RunCancelled: If the run was cancelled while the process was live.
        """

        self.context.check()
        LOGGER.debug("exec tool=%s argv=%s cwd=%s", self.tool.name, list(self.argv), self.cwd)
        try:
            # Bandit: argv originates from the tool clients, no shell expansion.
            with subprocess.Popen(  # nosec B603
                self.argv,
                cwd=str(self.cwd) if self.cwd is not None else None,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT if merge_stderr else None,
                text=True,
                errors="replace",
            ) as process:
                stdout = self._communicate(process)
                returncode = process.wait()
        except OSError as exc:
            raise ToolExecutionError(self.tool.name, self.argv, str(exc)) from exc
        LOGGER.debug("exit tool=%s status=%s", self.tool.name, returncode)
        return InvocationOutcome(output=stdout.strip(), ok=returncode == 0, returncode=returncode)

    def _communicate(self, process: subprocess.Popen[str]) -> str:
        """Collect stdout from ``process`` while polling for cancellation.

        Args:
            process: Running subprocess with a captured stdout pipe.

        Returns:
            str: Everything the process wrote to stdout.

        Raises:
            RunCancelled: If the run is cancelled before the process exits.
        """

        while True:
            try:
                stdout, _ = process.communicate(timeout=_POLL_INTERVAL)
            except subprocess.TimeoutExpired:
                if self.context.cancelled:
                    process.kill()
                    process.communicate()
                    raise RunCancelled(f"{self.tool.name}: killed after cancellation") from None
                continue
            return stdout or ""


@dataclass(slots=True)
class Tool:
    """Binding between a logical tool name and its executable.

    The executable is looked up on ``PATH`` the first time it is needed and the
    resolved location is reused for every later invocation.
    """

    name: str
    executable: str
    _path: OnceCell[str] = field(default_factory=OnceCell, init=False, repr=False, compare=False)

    @property
    def path(self) -> str:
        """Return the resolved executable path, resolving it on first access.

        Returns:
            str: Absolute or ``PATH``-relative executable location.

        Raises:
            ToolNotFoundError: If the executable cannot be found.
        """

        return self._path.get(self._resolve)

    def _resolve(self) -> str:
        resolved = find_executable(self.executable)
        if resolved is None:
            raise ToolNotFoundError(self.name, self.executable)
        LOGGER.debug("resolved tool=%s path=%s", self.name, resolved)
        return resolved

    def command(self, context: RunContext, *args: str, cwd: Path | None = None) -> Invocation:
        """Build an invocation of this tool with ``args``.

        Args:
            context: Run context carrying cancellation.
            *args: Arguments passed after the executable.
            cwd: Optional working directory for the subprocess.

        Returns:
            Invocation: Runnable invocation bound to the resolved executable.
        """

        return Invocation(tool=self, context=context, argv=(self.path, *args), cwd=cwd)

    def output(self, context: RunContext, *args: str, cwd: Path | None = None) -> tuple[str, bool]:
        """Run the tool and return trimmed stdout with a success flag.

        A non-zero exit is a normal outcome reported as ``False``. Standard
        error passes straight through to the caller's stderr.

        Returns:
            tuple[str, bool]: Trimmed stdout and ``True`` on a zero exit status.
        """

        outcome = self.command(context, *args, cwd=cwd).run()
        return outcome.output, outcome.ok

    def must_output(self, context: RunContext, *args: str, cwd: Path | None = None) -> str:
        """Run the tool and return trimmed stdout, treating failure as fatal.

        Returns:
            str: Trimmed stdout of a successful run.

        Raises:
            ToolExecutionError: If the tool exits with a non-zero status.
        """

        invocation = self.command(context, *args, cwd=cwd)
        outcome = invocation.run()
        if not outcome.ok:
            raise ToolExecutionError(
                self.name,
                invocation.argv,
                "command unsuccessful",
                returncode=outcome.returncode,
                output=outcome.output,
            )
        return outcome.output

    def combined_output(self, context: RunContext, *args: str, cwd: Path | None = None) -> tuple[str, bool]:
        """Run the tool capturing stdout and stderr together.

        Returns:
            tuple[str, bool]: Trimmed combined output and the success flag.
        """

        outcome = self.command(context, *args, cwd=cwd).run(merge_stderr=True)
        return outcome.output, outcome.ok


def find_executable(executable: str) -> str | None:
    """Return the location of ``executable`` or ``None`` when it is missing.

    Args:
        executable: Bare command name or explicit path.

    Returns:
        str | None: Resolved location, ``None`` if nothing executable matches.
    """

    return shutil.which(executable)


__all__ = [
    "GoPrecommitError",
    "Invocation",
    "InvocationOutcome",
    "Tool",
    "ToolExecutionError",
    "ToolNotFoundError",
    "find_executable",
]
