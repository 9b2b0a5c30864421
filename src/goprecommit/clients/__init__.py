# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Typed clients over the external tools invoked by the gate."""

from __future__ import annotations

from .formatters import FormatterClient
from .git import GitClient
from .go import GoClient, TestOptions
from .golint import GolintClient
from .streaming import LineStream

__all__ = [
    "FormatterClient",
    "GitClient",
    "GoClient",
    "GolintClient",
    "LineStream",
    "TestOptions",
]
