# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

from __future__ import annotations

import importlib

import pytest
from typer.testing import CliRunner

from goprecommit import __version__
from goprecommit.checks.verdict import Verdict
from goprecommit.core.context import RunCancelled
from goprecommit.core.process import ToolNotFoundError
from goprecommit.logging import NoiseLevel
from goprecommit.toolbox import Toolbox

app_module = importlib.import_module("goprecommit.cli.app")

runner = CliRunner()


@pytest.fixture
def seen(monkeypatch: pytest.MonkeyPatch) -> list[Toolbox]:
    toolboxes: list[Toolbox] = []
    monkeypatch.setattr(app_module, "configure_logging", lambda noise: None)
    return toolboxes


def _fake_gate(seen: list[Toolbox], verdict: Verdict):
    def run(toolbox: Toolbox) -> Verdict:
        seen.append(toolbox)
        return verdict

    return run


def test_version() -> None:
    result = runner.invoke(app_module.app, ["--version"])

    assert result.exit_code == 0
    assert f"goprecommit {__version__}" in result.output


def test_clean_run_exits_zero(monkeypatch: pytest.MonkeyPatch, seen: list[Toolbox]) -> None:
    monkeypatch.setattr(app_module, "run_gate", _fake_gate(seen, Verdict()))

    result = runner.invoke(app_module.app, ["--nocolor", "--nocache", "--nolint", "--no-godoc", "--short"])

    assert result.exit_code == 0
    config = seen[0].config
    assert not config.use_cache
    assert not config.lint
    assert config.ignore_godoc
    assert config.noise is NoiseLevel.SHORT


def test_issues_exit_one(monkeypatch: pytest.MonkeyPatch, seen: list[Toolbox]) -> None:
    monkeypatch.setattr(app_module, "run_gate", _fake_gate(seen, Verdict(issues=2)))

    result = runner.invoke(app_module.app, ["--nocolor", "--quiet"])

    assert result.exit_code == 1


def test_blocking_reason_exits_one(monkeypatch: pytest.MonkeyPatch, seen: list[Toolbox]) -> None:
    monkeypatch.setattr(app_module, "run_gate", _fake_gate(seen, Verdict(reasons=["protected branch main"])))

    result = runner.invoke(app_module.app, ["--nocolor", "--quiet"])

    assert result.exit_code == 1


@pytest.mark.parametrize("error", [ToolNotFoundError("go", "go"), RunCancelled()])
def test_fatal_errors_exit_one(monkeypatch: pytest.MonkeyPatch, seen: list[Toolbox], error: Exception) -> None:
    def explode(toolbox: Toolbox) -> Verdict:
        raise error

    monkeypatch.setattr(app_module, "run_gate", explode)

    result = runner.invoke(app_module.app, ["--nocolor", "--quiet"])

    assert result.exit_code == 1
