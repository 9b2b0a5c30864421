# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Whole-run orchestration of the commit gate."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path, PurePosixPath
from typing import Final

from .checks.module import VENDOR_DIR, check_module
from .checks.verdict import Verdict, branch_is_protected, eol_violations
from .clients.go import ensure_bin_on_path
from .toolbox import Toolbox

GOLINT_PACKAGE: Final[str] = "golang.org/x/lint/golint"
GOIMPORTS_PACKAGE: Final[str] = "golang.org/x/tools/cmd/goimports"
GO_MOD: Final[str] = "go.mod"


def find_go_mods(toolbox: Toolbox, files: Sequence[str]) -> list[Path]:
    """Return the tracked ``go.mod`` files outside vendored trees.

    Falls back to ``./go.mod`` (with a warning) when none is tracked.
    """

    go_mods: list[Path] = []
    for name in files:
        toolbox.context.check()
        if name.startswith(f"{VENDOR_DIR}/") or f"/{VENDOR_DIR}/" in name:
            continue
        if PurePosixPath(name).name == GO_MOD:
            go_mods.append(Path(name))
    if go_mods:
        toolbox.reporter.verbose("found checked in go.mod files", len(go_mods))
        return go_mods
    toolbox.reporter.warn("could not find any checked in go.mod files")
    return [Path(".", GO_MOD)]


def prepare_tools(toolbox: Toolbox) -> None:
    """Make sure ``$GOPATH/bin`` is on ``PATH`` and the helper binaries exist.

    Raises:
        ToolExecutionError: If installing ``golint`` or ``goimports`` fails.
    """

    new_path = ensure_bin_on_path(toolbox.go.gopath())
    if new_path is not None:
        toolbox.reporter.warn("putting $GOPATH/bin into PATH", new_path)
    if toolbox.config.lint:
        toolbox.go.install(toolbox.golint.tool.executable, GOLINT_PACKAGE)
    toolbox.go.install(toolbox.goimports.tool.executable, GOIMPORTS_PACKAGE)


def run_gate(toolbox: Toolbox) -> Verdict:
    """Run every check against the repository at ``toolbox.root``.

    Args:
        toolbox: Clients, configuration and cancellation for the run.

    Returns:
        Verdict: Issues and rule violations collected over the whole run. An
        empty verdict is returned when the root is not inside a work tree.

    Raises:
        GoPrecommitError: On fatal tool failures.
        RunCancelled: When the run is cancelled at a check point.
    """

    root = toolbox.root
    reporter = toolbox.reporter
    config = toolbox.config
    verdict = Verdict()

    if not toolbox.git.in_repo():
        reporter.verbose("not in git repo")
        return verdict
    reporter.verbose("in git repo")

    version = toolbox.go.version()
    reporter.verbose("found go version", version)
    modules_enabled = toolbox.go.modules_supported()

    prepare_tools(toolbox)
    gopath = toolbox.go.gopath()

    files = toolbox.git.files(root)
    for go_mod in find_go_mods(toolbox, files):
        toolbox.context.check()
        report = check_module(toolbox, root / go_mod, modules_enabled=modules_enabled, gopath=gopath)
        verdict.add_issues(report.issues)
        if report.tidy_failed:
            verdict.block(f"go mod tidy failed for {go_mod}")

    branch = toolbox.git.branch()
    if branch_is_protected(branch, toolbox.git.head_branch(), config.protected_branches):
        reporter.fail("branch name", "do not commit to ", branch)
        verdict.block(f"protected branch {branch}")

    for violation in eol_violations(
        files,
        root=root,
        exempt_suffixes=config.eol_exempt_suffixes,
        context=toolbox.context,
    ):
        if violation.error:
            reporter.fail("check eol", violation.error)
        reporter.fail("file doesn't end with EOL", violation.path)
        verdict.block(f"missing EOL in {violation.path}")

    return verdict


__all__ = ["find_go_mods", "prepare_tools", "run_gate"]
