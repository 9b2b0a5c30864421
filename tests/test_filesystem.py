# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for filesystem predicates and the visitor-driven walk."""

from __future__ import annotations

import os
from pathlib import Path

from goprecommit.checks.module import find_subrepos
from goprecommit.filesystem import (
    GENERATED_CODE_MARKER,
    WalkControl,
    ends_with_eol,
    file_contains,
    is_empty,
    module_name,
    walk,
)


def _tree(root: Path) -> None:
    (root / "a" / "deep").mkdir(parents=True)
    (root / "b").mkdir()
    (root / "a" / "deep" / "x.go").write_text("package deep\n", encoding="utf-8")
    (root / "b" / "y.go").write_text("package b\n", encoding="utf-8")


def test_walk_visits_everything(tmp_path: Path) -> None:
    _tree(tmp_path)
    seen: list[str] = []

    def visit(name: Path, entry: os.DirEntry[str]) -> WalkControl:
        seen.append(name.as_posix())
        return WalkControl.CONTINUE

    assert walk(tmp_path, visit)
    assert seen == ["a", "a/deep", "a/deep/x.go", "b", "b/y.go"]


def test_skip_prunes_subtree(tmp_path: Path) -> None:
    _tree(tmp_path)
    seen: list[str] = []

    def visit(name: Path, entry: os.DirEntry[str]) -> WalkControl:
        seen.append(name.as_posix())
        return WalkControl.SKIP if entry.name == "a" else WalkControl.CONTINUE

    walk(tmp_path, visit)

    assert seen == ["a", "b", "b/y.go"]


def test_abort_stops_walk(tmp_path: Path) -> None:
    _tree(tmp_path)
    seen: list[str] = []

    def visit(name: Path, entry: os.DirEntry[str]) -> WalkControl:
        seen.append(name.as_posix())
        return WalkControl.ABORT if entry.name == "deep" else WalkControl.CONTINUE

    assert not walk(tmp_path, visit)
    assert seen == ["a", "a/deep"]


def test_find_subrepos_skips_root_git_and_hidden_dirs(tmp_path: Path) -> None:
    (tmp_path / ".git").mkdir()
    (tmp_path / "nested" / ".git").mkdir(parents=True)
    (tmp_path / ".hidden" / "inner" / ".git").mkdir(parents=True)
    (tmp_path / "vendor" / "dep" / ".git").mkdir(parents=True)

    assert find_subrepos(tmp_path) == {"nested"}


def test_module_name(tmp_path: Path) -> None:
    go_mod = tmp_path / "go.mod"
    go_mod.write_text("module example.com/proj\n\ngo 1.21\n", encoding="utf-8")

    assert module_name(go_mod) == "example.com/proj"
    assert module_name(tmp_path / "missing.mod") == ""


def test_generated_marker(tmp_path: Path) -> None:
    generated = tmp_path / "gen.go"
    generated.write_text("// Code generated by stringer. DO NOT EDIT.\npackage x\n", encoding="utf-8")
    handwritten = tmp_path / "hand.go"
    handwritten.write_text("// Code generated by hand\npackage x\n", encoding="utf-8")

    assert file_contains(generated, GENERATED_CODE_MARKER)
    assert not file_contains(handwritten, GENERATED_CODE_MARKER)


def test_empty_and_eol(tmp_path: Path) -> None:
    empty = tmp_path / "empty.go"
    empty.write_bytes(b"")
    unterminated = tmp_path / "a.txt"
    unterminated.write_bytes(b"x")

    assert is_empty(empty)
    assert not is_empty(tmp_path / "missing")
    assert ends_with_eol(empty)
    assert not ends_with_eol(unterminated)
