# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Process invocation, cancellation and once-only caching primitives."""

from __future__ import annotations

from .context import RunCancelled, RunContext
from .once import OnceCell
from .process import (
    GoPrecommitError,
    Invocation,
    Tool,
    ToolExecutionError,
    ToolNotFoundError,
)

__all__ = [
    "GoPrecommitError",
    "Invocation",
    "OnceCell",
    "RunCancelled",
    "RunContext",
    "Tool",
    "ToolExecutionError",
    "ToolNotFoundError",
]
