# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models for a commit gate run."""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Final

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .logging import NoiseLevel

DEFAULT_PROTECTED_BRANCHES: Final[tuple[str, ...]] = ("production", "staging")
DEFAULT_EOL_EXEMPT_SUFFIXES: Final[tuple[str, ...]] = (".jar",)

# Environment variable -> (logical tool name, default executable)
TOOL_ENVIRONMENT: Final[dict[str, tuple[str, str]]] = {
    "GIT": ("git", "git"),
    "GO": ("go", "go"),
    "GOFMT": ("gofmt", "gofmt"),
    "GOIMPORTS": ("goimports", "goimports"),
    "GOLINT": ("golint", "golint"),
}


class ToolOverrides(BaseModel):
    """Executable names used for each external tool."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    git: str = "git"
    go: str = "go"
    gofmt: str = "gofmt"
    goimports: str = "goimports"
    golint: str = "golint"

    @classmethod
    def from_environ(cls, environ: Mapping[str, str] | None = None) -> ToolOverrides:
        """Build overrides from ``GIT``, ``GO``, ``GOFMT``, ``GOIMPORTS`` and ``GOLINT``.

        Args:
            environ: Environment mapping, defaults to :data:`os.environ`.

        Returns:
            ToolOverrides: Executable names with empty variables ignored.
        """

        source = os.environ if environ is None else environ
        values = {
            name: source[variable]
            for variable, (name, _default) in TOOL_ENVIRONMENT.items()
            if source.get(variable)
        }
        return cls(**values)


class GateConfig(BaseModel):
    """Options controlling a single commit gate run."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    use_cache: bool = True
    lint: bool = True
    color: bool = True
    ignore_godoc: bool = False
    noise: NoiseLevel = NoiseLevel.NORMAL
    protected_branches: tuple[str, ...] = DEFAULT_PROTECTED_BRANCHES
    eol_exempt_suffixes: tuple[str, ...] = DEFAULT_EOL_EXEMPT_SUFFIXES
    tools: ToolOverrides = Field(default_factory=ToolOverrides)

    @field_validator("eol_exempt_suffixes")
    @classmethod
    def _normalise_suffixes(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        return tuple(suffix if suffix.startswith(".") else f".{suffix}" for suffix in value)


__all__ = [
    "DEFAULT_EOL_EXEMPT_SUFFIXES",
    "DEFAULT_PROTECTED_BRANCHES",
    "GateConfig",
    "TOOL_ENVIRONMENT",
    "ToolOverrides",
]
