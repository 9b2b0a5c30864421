# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Filesystem predicates and a visitor-driven directory walk."""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Callable
from enum import Enum
from pathlib import Path
from typing import Final

LOGGER = logging.getLogger(__name__)

GENERATED_CODE_MARKER: Final[re.Pattern[str]] = re.compile(r"^// Code generated by .* DO NOT EDIT\.$")


class WalkControl(Enum):
    """Signal returned by a walk visitor to steer the traversal."""

    CONTINUE = "continue"
    SKIP = "skip"
    ABORT = "abort"


WalkVisitor = Callable[[Path, os.DirEntry[str]], WalkControl]


def can_read(path: Path) -> bool:
    """Return ``True`` when ``path`` can be opened for reading."""

    try:
        with path.open("rb"):
            return True
    except OSError:
        return False


def is_empty(path: Path) -> bool:
    """Return ``True`` when ``path`` exists and holds zero bytes."""

    try:
        return path.stat().st_size == 0
    except OSError:
        return False


def file_contains(path: Path, pattern: re.Pattern[str]) -> bool:
    """Return ``True`` when any line of ``path`` matches ``pattern``.

    Args:
        path: Text file to scan line by line.
        pattern: Compiled expression matched against each line without its
            terminator.

    Returns:
        bool: ``True`` on the first matching line; ``False`` when no line
        matches or the file cannot be read.
    """

    try:
        with path.open(encoding="utf-8", errors="replace") as handle:
            return any(pattern.search(line.rstrip("\r\n")) for line in handle)
    except OSError:
        return False


def module_name(go_mod: Path) -> str:
    """Return the module path declared by the ``module`` directive of ``go_mod``.

    Args:
        go_mod: Path to a ``go.mod`` file.

    Returns:
        str: Declared module path, or an empty string when none is found.
    """

    try:
        with go_mod.open(encoding="utf-8", errors="replace") as handle:
            for line in handle:
                if line.startswith("module "):
                    fields = line.split()
                    if len(fields) > 1:
                        return fields[1]
    except OSError:
        return ""
    return ""


def ends_with_eol(path: Path) -> bool:
    """Return ``True`` when ``path`` is empty or its final byte is ``\\n``.

    Args:
        path: File to inspect.

    Returns:
        bool: ``True`` for empty files and files ending in a newline.

    Raises:
        OSError: If the file cannot be opened or read.
    """

    with path.open("rb") as handle:
        handle.seek(0, os.SEEK_END)
        if handle.tell() == 0:
            return True
        handle.seek(-1, os.SEEK_END)
        return handle.read(1) == b"\n"


def walk(root: Path, visitor: WalkVisitor) -> bool:
    """Walk ``root`` depth first, calling ``visitor`` for every entry.

    ``visitor`` receives the entry path (relative to ``root``) and its
    :class:`os.DirEntry`. Returning :attr:`WalkControl.SKIP` for a directory
    keeps the walk out of it; :attr:`WalkControl.ABORT` ends the walk.

    Args:
        root: Directory to traverse.
        visitor: Callback deciding how the traversal proceeds.

    Returns:
        bool: ``False`` when the visitor aborted the walk, otherwise ``True``.
    """

    return _walk_dir(root, Path(), visitor)


def _walk_dir(root: Path, relative: Path, visitor: WalkVisitor) -> bool:
    try:
        with os.scandir(root / relative) as iterator:
            entries = sorted(iterator, key=lambda entry: entry.name)
    except OSError as exc:
        LOGGER.warning("cannot read directory %s: %s", root / relative, exc)
        return True
    for entry in entries:
        name = relative / entry.name
        control = visitor(name, entry)
        if control is WalkControl.ABORT:
            return False
        if control is WalkControl.SKIP:
            continue
        if entry.is_dir(follow_symlinks=False) and not _walk_dir(root, name, visitor):
            return False
    return True


__all__ = [
    "GENERATED_CODE_MARKER",
    "WalkControl",
    "WalkVisitor",
    "can_read",
    "ends_with_eol",
    "file_contains",
    "is_empty",
    "module_name",
    "walk",
]
