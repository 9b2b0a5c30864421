# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point for the commit gate."""

from __future__ import annotations

import logging
import signal
from collections.abc import Iterator
from contextlib import contextmanager
from types import FrameType
from typing import Annotated

import typer

from .. import __version__
from ..config import GateConfig
from ..core.context import RunCancelled, RunContext
from ..core.process import GoPrecommitError
from ..gate import run_gate
from ..logging import NoiseLevel, Reporter
from ..toolbox import Toolbox
from .options import (
    CACHE_OPTION,
    COLOR_OPTION,
    LINT_OPTION,
    NO_GODOC_OPTION,
    QUIET_OPTION,
    SHORT_OPTION,
    VERBOSE_OPTION,
    build_gate_options,
)

PROG_NAME = "goprecommit"

app = typer.Typer(
    name=PROG_NAME,
    help="Block commits that fail gofmt, goimports, golint or go test.",
    add_completion=False,
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"{PROG_NAME} {__version__}")
        raise typer.Exit(code=0)


VERSION_OPTION = Annotated[
    bool,
    typer.Option("--version", callback=_version_callback, is_eager=True, help="Print the version and exit."),
]


@contextmanager
def cancel_on_signal(context: RunContext) -> Iterator[None]:
    """Cancel ``context`` on SIGINT/SIGTERM for the duration of the block."""

    def _handler(signum: int, frame: FrameType | None) -> None:
        context.cancel()

    previous = {sig: signal.signal(sig, _handler) for sig in (signal.SIGINT, signal.SIGTERM)}
    try:
        yield
    finally:
        for sig, handler in previous.items():
            signal.signal(sig, handler)


def configure_logging(noise: NoiseLevel) -> None:
    """Route diagnostic tracing to stderr, at DEBUG level in verbose mode."""

    logging.basicConfig(
        level=logging.DEBUG if noise >= NoiseLevel.VERBOSE else logging.WARNING,
        format=f"{PROG_NAME}: %(message)s",
    )


def execute(config: GateConfig, context: RunContext | None = None) -> int:
    """Run the gate for ``config`` and return the process exit status.

    Args:
        config: Immutable configuration for the run.
        context: Optional run context, a fresh one by default.

    Returns:
        int: ``0`` when the commit may proceed, ``1`` otherwise.
    """

    context = context or RunContext()
    reporter = Reporter(noise=config.noise, color=config.color)
    toolbox = Toolbox.from_config(config, context, reporter)
    try:
        verdict = run_gate(toolbox)
    except RunCancelled as exc:
        reporter.fail(PROG_NAME, str(exc))
        return 1
    except GoPrecommitError as exc:
        reporter.fail(str(exc))
        return 1
    return verdict.exit_code


@app.command()
def gate(
    cache: CACHE_OPTION = True,
    lint: LINT_OPTION = True,
    color: COLOR_OPTION = True,
    no_godoc: NO_GODOC_OPTION = False,
    verbose: VERBOSE_OPTION = False,
    short: SHORT_OPTION = False,
    quiet: QUIET_OPTION = False,
    version: VERSION_OPTION = False,
) -> None:
    """Check the repository in the current directory before a commit."""

    options = build_gate_options(cache, lint, color, no_godoc, verbose, short, quiet)
    config = options.to_config()
    configure_logging(config.noise)
    context = RunContext()
    with cancel_on_signal(context):
        code = execute(config, context)
    raise typer.Exit(code=code)


def main() -> None:
    """Console-script entry point."""

    app(prog_name=PROG_NAME)


__all__ = ["app", "execute", "main"]
