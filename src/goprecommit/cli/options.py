# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Option declarations and normalisation for the commit gate CLI."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Annotated

import typer

from ..config import GateConfig, ToolOverrides
from ..logging import NoiseLevel

CACHE_OPTION = Annotated[
    bool,
    typer.Option("--cache/--nocache", help="Use cached test results."),
]
LINT_OPTION = Annotated[
    bool,
    typer.Option("--lint/--nolint", help="Run golint on every package."),
]
COLOR_OPTION = Annotated[
    bool,
    typer.Option("--color/--nocolor", help="Colourise output."),
]
NO_GODOC_OPTION = Annotated[
    bool,
    typer.Option("--no-godoc", help="Do not show godoc issues."),
]
VERBOSE_OPTION = Annotated[
    bool,
    typer.Option("--verbose", help="Verbose output."),
]
SHORT_OPTION = Annotated[
    bool,
    typer.Option("--short", help="Only print errors."),
]
QUIET_OPTION = Annotated[
    bool,
    typer.Option("--quiet", help="Print nothing."),
]


@dataclass(slots=True)
class GateCLIOptions:
    """Normalised CLI inputs for a gate run."""

    use_cache: bool
    lint: bool
    color: bool
    ignore_godoc: bool
    noise: NoiseLevel

    def to_config(self, environ: Mapping[str, str] | None = None) -> GateConfig:
        """Return the run configuration for these options.

        Args:
            environ: Environment consulted for executable overrides.

        Returns:
            GateConfig: Immutable configuration for the run.
        """

        return GateConfig(
            use_cache=self.use_cache,
            lint=self.lint,
            color=self.color,
            ignore_godoc=self.ignore_godoc,
            noise=self.noise,
            tools=ToolOverrides.from_environ(environ),
        )


def resolve_noise(*, verbose: bool, short: bool, quiet: bool) -> NoiseLevel:
    """Return the requested noise level; the quietest request wins."""

    if quiet:
        return NoiseLevel.QUIET
    if short:
        return NoiseLevel.SHORT
    if verbose:
        return NoiseLevel.VERBOSE
    return NoiseLevel.NORMAL


def build_gate_options(
    cache: bool,
    lint: bool,
    color: bool,
    no_godoc: bool,
    verbose: bool,
    short: bool,
    quiet: bool,
) -> GateCLIOptions:
    """Construct :class:`GateCLIOptions` from parsed Typer parameters."""

    return GateCLIOptions(
        use_cache=cache,
        lint=lint,
        color=color,
        ignore_godoc=no_godoc,
        noise=resolve_noise(verbose=verbose, short=short, quiet=quiet),
    )


__all__ = [
    "CACHE_OPTION",
    "COLOR_OPTION",
    "GateCLIOptions",
    "LINT_OPTION",
    "NO_GODOC_OPTION",
    "QUIET_OPTION",
    "SHORT_OPTION",
    "VERBOSE_OPTION",
    "build_gate_options",
    "resolve_noise",
]
