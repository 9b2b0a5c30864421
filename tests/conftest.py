# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import stat
from collections.abc import Callable
from pathlib import Path

import pytest

from goprecommit.core.context import RunContext
from goprecommit.logging import NoiseLevel, Reporter

ScriptFactory = Callable[[str, str], Path]


@pytest.fixture
def make_script(tmp_path: Path) -> ScriptFactory:
    """Return a factory writing executable ``/bin/sh`` scripts into ``tmp_path/bin``."""

    bin_dir = tmp_path / "bin"
    bin_dir.mkdir(exist_ok=True)

    def _make(name: str, body: str) -> Path:
        script = bin_dir / name
        script.write_text(f"#!/bin/sh\n{body}\n", encoding="utf-8")
        script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return script

    return _make


@pytest.fixture
def context() -> RunContext:
    return RunContext()


@pytest.fixture
def reporter() -> Reporter:
    """Return a colourless reporter printing everything, including verbose output."""

    return Reporter(noise=NoiseLevel.VERBOSE, color=False)
