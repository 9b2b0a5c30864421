# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Parsing of the dotted version strings reported by the Go toolchain."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Final

_DETAILS_RE: Final[re.Pattern[str]] = re.compile(r"[a-z][a-z0-9]*$")


class VersionParseError(ValueError):
    """Raised when a version string does not contain numeric components."""


@dataclass(frozen=True, slots=True, order=True)
class SemVer:
    """Major, minor and patch numbers plus an optional pre-release suffix.

    Attributes:
        major: Major version number.
        minor: Minor version number, ``0`` when absent.
        patch: Patch version number, ``0`` when absent.
        details: Lowercase alphanumeric suffix such as ``"beta2"`` or ``"rc1"``.
    """

    major: int
    minor: int = 0
    patch: int = 0
    details: str = ""

    @classmethod
    def parse(cls, text: str) -> SemVer:
        """Parse ``text`` such as ``"v1.11beta2"`` or ``"1.21.4"``.

        Args:
            text: Version string with an optional leading ``v``.

        Returns:
            SemVer: Structured version.

        Raises:
            VersionParseError: If a present component is not an integer.
        """

        fields = text.removeprefix("v").split(".", 2)
        match = _DETAILS_RE.search(fields[-1])
        details = match.group(0) if match else ""
        if details:
            fields[-1] = fields[-1][: -len(details)]
        try:
            numbers = [int(value) for value in fields]
        except ValueError as exc:
            raise VersionParseError(f"invalid version {text!r}: {exc}") from exc
        numbers.extend([0] * (3 - len(numbers)))
        major, minor, patch = numbers
        return cls(major=major, minor=minor, patch=patch, details=details)

    def older_than(self, major: int, minor: int) -> bool:
        """Return ``True`` when this version precedes ``major.minor``."""

        return (self.major, self.minor) < (major, minor)

    def __str__(self) -> str:
        return f"v{self.major}.{self.minor}.{self.patch}{self.details}"


__all__ = ["SemVer", "VersionParseError"]
