# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Leveled, colourised messages for the commit gate.

Messages render as ``"<context>: <text>"``; only the text part is coloured.
Which messages appear depends on the active :class:`NoiseLevel`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Final

from rich.console import Console
from rich.text import Text

from .console import get_console_manager


class NoiseLevel(IntEnum):
    """How chatty the gate is when printing information."""

    QUIET = 0
    SHORT = 1
    NORMAL = 2
    VERBOSE = 3


class Level(IntEnum):
    """Presentation levels, ordered by the noise needed to show them."""

    VERBOSE = 0
    HIDE = 1
    OK = 2
    INFO = 3
    NOTICE = 4
    WARNING = 5
    ERROR = 6


_STYLES: Final[dict[Level, str]] = {
    Level.VERBOSE: "white",
    Level.HIDE: "bright_black",
    Level.OK: "bright_green",
    Level.INFO: "bright_blue",
    Level.NOTICE: "bright_cyan",
    Level.WARNING: "bright_yellow",
    Level.ERROR: "bright_red",
}

_THRESHOLDS: Final[dict[Level, NoiseLevel]] = {
    Level.VERBOSE: NoiseLevel.VERBOSE,
    Level.HIDE: NoiseLevel.NORMAL,
    Level.OK: NoiseLevel.NORMAL,
    Level.INFO: NoiseLevel.NORMAL,
    Level.NOTICE: NoiseLevel.NORMAL,
    Level.WARNING: NoiseLevel.NORMAL,
    Level.ERROR: NoiseLevel.SHORT,
}


def format_message(context: str, *parts: object) -> tuple[str, str]:
    """Split a message into its uncoloured prefix and its body.

    Args:
        context: Message context, used as the whole body when no parts follow.
        *parts: Values concatenated into the message body.

    Returns:
        tuple[str, str]: ``(prefix, body)`` where ``prefix`` ends in ``": "``
        or is empty.
    """

    if not parts:
        return "", context
    prefix = f"{context}: " if context else ""
    return prefix, "".join(str(part) for part in parts)


@dataclass(slots=True)
class Reporter:
    """Print leveled messages honouring the noise level and colour preference."""

    noise: NoiseLevel = NoiseLevel.NORMAL
    color: bool = True
    console: Console | None = field(default=None, repr=False)

    def emit(self, level: Level, context: str, *parts: object) -> None:
        """Print a message at ``level`` when the noise level allows it.

        Args:
            level: Presentation level of the message.
            context: Message context such as the tool name.
            *parts: Values forming the message body.
        """

        if self.noise < _THRESHOLDS[level]:
            return
        prefix, body = format_message(context, *parts)
        text = Text(prefix)
        text.append(body, style=_STYLES[level] if self.color else None)
        self._console().print(text)

    def verbose(self, context: str, *parts: object) -> None:
        """Print a progress message shown only in verbose mode."""

        self.emit(Level.VERBOSE, context, *parts)

    def hide(self, context: str, *parts: object) -> None:
        """Print a shadowed message in dark grey."""

        self.emit(Level.HIDE, context, *parts)

    def ok(self, context: str, *parts: object) -> None:
        """Print a success message in green."""

        self.emit(Level.OK, context, *parts)

    def info(self, context: str, *parts: object) -> None:
        """Print a low-lit message in blue."""

        self.emit(Level.INFO, context, *parts)

    def notice(self, context: str, *parts: object) -> None:
        """Print a notice in cyan."""

        self.emit(Level.NOTICE, context, *parts)

    def warn(self, context: str, *parts: object) -> None:
        """Print a warning in yellow."""

        self.emit(Level.WARNING, context, *parts)

    def fail(self, context: str, *parts: object) -> None:
        """Print an error in red; shown at every noise level except quiet."""

        self.emit(Level.ERROR, context, *parts)

    def _console(self) -> Console:
        if self.console is None:
            return get_console_manager().get(color=self.color)
        return self.console


__all__ = ["Level", "NoiseLevel", "Reporter", "format_message"]
