# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Format, lint and test checks for a single Go module."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path, PurePosixPath

from ..clients.formatters import reformat_findings
from ..clients.go import TestOptions
from ..filesystem import (
    GENERATED_CODE_MARKER,
    WalkControl,
    can_read,
    file_contains,
    is_empty,
    module_name,
    walk,
)
from ..toolbox import Toolbox
from .classify import TestOutputClassifier

GO_SUFFIX = ".go"
VENDOR_DIR = "vendor"


@dataclass(frozen=True, slots=True)
class ModuleReport:
    """Result of checking one module.

    Attributes:
        go_mod: The ``go.mod`` path the module was found through.
        issues: Formatting, lint and test issues reported for the module.
        tidy_failed: ``True`` when ``go mod tidy`` failed and nothing else ran.
    """

    go_mod: Path
    issues: int = 0
    tidy_failed: bool = False

    @property
    def passed(self) -> bool:
        return self.issues == 0 and not self.tidy_failed


def find_subrepos(root: Path) -> set[str]:
    """Return directories below ``root`` that hold their own ``.git``.

    Hidden directories and ``vendor`` are not descended into.

    Args:
        root: Module directory to scan.

    Returns:
        set[str]: Subrepository paths relative to ``root`` in POSIX form.
    """

    subrepos: set[str] = set()

    def visit(name: Path, entry: os.DirEntry[str]) -> WalkControl:
        if not entry.is_dir(follow_symlinks=False):
            return WalkControl.CONTINUE
        if entry.name == ".git" and name.parent != Path():
            subrepos.add(name.parent.as_posix())
        if entry.name.startswith(".") or entry.name == VENDOR_DIR:
            return WalkControl.SKIP
        return WalkControl.CONTINUE

    walk(root, visit)
    return subrepos


def source_files(tracked: list[str], workdir: Path) -> list[str]:
    """Return tracked Go sources worth formatting.

    Vendored, empty and generated files are excluded.
    """

    selected: list[str] = []
    for name in tracked:
        if not name.endswith(GO_SUFFIX) or name.startswith(f"{VENDOR_DIR}/"):
            continue
        path = workdir / name
        if is_empty(path) or file_contains(path, GENERATED_CODE_MARKER):
            continue
        selected.append(name)
    return selected


def normalize_package(package: str, workdir: str, mod_path: str, mod_base: str) -> str:
    """Rewrite an import path reported by ``go list`` relative to the module.

    Args:
        package: Import path from ``go list ./...``.
        workdir: Absolute module directory.
        mod_path: Module directory relative to ``$GOPATH/src`` (or ``workdir``).
        mod_base: Module path declared in ``go.mod``, empty outside modules mode.

    Returns:
        str: Package path relative to the module, ``"."`` for its root.
    """

    package = package.replace(f"_{workdir}/", "").replace(f"_{workdir}", ".")
    package = package.replace(f"{mod_path}/", "").replace(mod_path, ".")
    if mod_base:
        package = package.replace(f"{mod_base}/", "").replace(mod_base, ".")
    return package


def lint_target(package: str, mod_base: str) -> str:
    """Return the path handed to ``golint`` for ``package``."""

    if package != mod_base:
        package = package.removeprefix(mod_base)
    if package == "/":
        package = "."
    return package.removeprefix("/")


def _in_subrepo(package: str, subrepos: set[str]) -> bool:
    parts = PurePosixPath(package).parts
    return any(PurePosixPath(*parts[:index]).as_posix() in subrepos for index in range(1, len(parts) + 1))


def check_module(toolbox: Toolbox, go_mod: Path, *, modules_enabled: bool, gopath: str) -> ModuleReport:
    """Run the formatting, lint and test checks for the module owning ``go_mod``.

    Args:
        toolbox: Clients and configuration of the current run.
        go_mod: Path of the module's ``go.mod``.
        modules_enabled: Whether the toolchain supports Go modules.
        gopath: Value of ``$GOPATH`` used to detect GOPATH-mode checkouts.

    Returns:
        ModuleReport: Issue count and whether tidying failed.
    """

    reporter = toolbox.reporter
    context = toolbox.context
    config = toolbox.config
    reporter.verbose("using go.mod", go_mod)

    workdir = go_mod.parent.resolve()
    pwd = str(workdir)
    mod_path = pwd.removeprefix(os.path.join(gopath, "src") + os.sep) if gopath else pwd
    reporter.verbose("found MOD_PATH", mod_path)

    use_modules = modules_enabled
    if mod_path != pwd or not can_read(workdir / "go.mod"):
        reporter.verbose("ignoring go modules…")
        use_modules = False

    mod_base = module_name(workdir / "go.mod") if use_modules else ""
    if mod_base:
        reporter.verbose("found MOD_BASE", mod_base)

    reporter.verbose("listing go files…")
    go_files = source_files(toolbox.git.files(workdir), workdir)
    reporter.verbose("found files", len(go_files))

    reporter.verbose("looking for subrepos…")
    subrepos = find_subrepos(workdir)
    for subrepo in sorted(subrepos):
        reporter.verbose("found subrepo", subrepo)

    if use_modules:
        reporter.verbose("go mod tidy…")
        if not toolbox.go.mod_tidy(cwd=workdir):
            return ModuleReport(go_mod=go_mod, tidy_failed=True)

    reporter.verbose("listing packages…")
    packages: list[str] = []
    for listed in toolbox.go.list_packages("./...", cwd=workdir):
        context.check()
        if not listed or "/vendor/" in listed:
            continue
        package = normalize_package(listed, pwd, mod_path, mod_base)
        if toolbox.git.check_ignore(package, cwd=workdir):
            reporter.verbose("package is ignored in git", package)
            continue
        if _in_subrepo(package, subrepos):
            reporter.verbose("package is in a subrepo:", package)
            continue
        packages.append(package)
    reporter.verbose("found gopkgs", packages)

    issues = 0
    if go_files:
        reporter.verbose("gofmt on files…")
        for formatter, filename in reformat_findings([toolbox.gofmt, toolbox.goimports], go_files, cwd=workdir):
            reporter.fail(formatter, filename)
            issues += 1

    if config.lint and packages:
        reporter.verbose("golint on packages…")
        for package in packages:
            context.check()
            if toolbox.golint.lint(
                lint_target(package, mod_base),
                pwd + os.sep,
                ignore_godoc=config.ignore_godoc,
                cwd=workdir,
            ):
                issues += 1

    if packages:
        reporter.verbose("go test on packages…")
        classifier = TestOutputClassifier(
            lambda target: toolbox.go.package_names(target, cwd=workdir),
            workdir=pwd,
        )
        targets = [f"./{package}" for package in packages]
        with toolbox.go.test(targets, TestOptions(use_cache=config.use_cache), cwd=workdir) as stream:
            for line in stream:
                context.check()
                classifier.report(line, reporter)
        issues += classifier.issues

    return ModuleReport(go_mod=go_mod, issues=issues)


__all__ = [
    "ModuleReport",
    "check_module",
    "find_subrepos",
    "lint_target",
    "normalize_package",
    "source_files",
]
