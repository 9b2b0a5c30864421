# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for tool resolution and the invocation modes."""

from __future__ import annotations

import threading
import time
from pathlib import Path

import pytest

from goprecommit.core import process
from goprecommit.core.context import RunCancelled, RunContext
from goprecommit.core.process import Tool, ToolExecutionError, ToolNotFoundError


def test_path_resolution_runs_once_under_concurrency(monkeypatch: pytest.MonkeyPatch) -> None:
    lookups: list[str] = []

    def fake_find(executable: str) -> str:
        lookups.append(executable)
        time.sleep(0.05)
        return f"/opt/tools/{executable}"

    monkeypatch.setattr(process, "find_executable", fake_find)
    tool = Tool("go", "go")
    seen: list[str] = []
    barrier = threading.Barrier(6)

    def worker() -> None:
        barrier.wait()
        seen.append(tool.path)

    threads = [threading.Thread(target=worker) for _ in range(6)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert lookups == ["go"]
    assert seen == ["/opt/tools/go"] * 6


def test_missing_executable_is_fatal(context: RunContext) -> None:
    tool = Tool("golint", "definitely-not-a-real-binary-xyz")

    with pytest.raises(ToolNotFoundError) as excinfo:
        tool.output(context, "./...")

    assert "definitely-not-a-real-binary-xyz" in str(excinfo.value)


def test_output_trims_and_reports_success(make_script, context: RunContext) -> None:
    script = make_script("fake", 'echo "  hello $1  "; echo')
    tool = Tool("fake", str(script))

    assert tool.output(context, "world") == ("hello world", True)


def test_nonzero_exit_is_not_fatal(make_script, context: RunContext) -> None:
    script = make_script("fake", "echo partial; exit 3")
    tool = Tool("fake", str(script))

    output, ok = tool.output(context)

    assert output == "partial"
    assert ok is False


def test_must_output_raises_on_failure(make_script, context: RunContext) -> None:
    script = make_script("fake", "echo nope; exit 1")
    tool = Tool("fake", str(script))

    with pytest.raises(ToolExecutionError) as excinfo:
        tool.must_output(context, "ls-files")

    assert excinfo.value.returncode == 1
    assert excinfo.value.output == "nope"
    assert "command unsuccessful" in str(excinfo.value)


def test_output_keeps_stderr_separate(make_script, context: RunContext) -> None:
    script = make_script("fake", "echo out; echo err >&2")
    tool = Tool("fake", str(script))

    assert tool.output(context) == ("out", True)


def test_combined_output_merges_stderr(make_script, context: RunContext) -> None:
    script = make_script("fake", "echo out; echo err >&2; exit 1")
    tool = Tool("fake", str(script))

    output, ok = tool.combined_output(context)

    assert output.splitlines() == ["out", "err"]
    assert ok is False


def test_invocation_honours_cwd(make_script, context: RunContext, tmp_path: Path) -> None:
    script = make_script("fake", "pwd")
    workdir = tmp_path / "work"
    workdir.mkdir()
    tool = Tool("fake", str(script))

    output, _ = tool.output(context, cwd=workdir)

    assert Path(output).resolve() == workdir.resolve()


def test_unstartable_binary_is_fatal(tmp_path: Path, context: RunContext) -> None:
    script = tmp_path / "broken"
    script.write_text("#!/nonexistent/interpreter\n", encoding="utf-8")
    script.chmod(0o755)
    tool = Tool("broken", str(script))

    with pytest.raises(ToolExecutionError):
        tool.output(context)


def test_cancellation_kills_running_process(make_script) -> None:
    script = make_script("slow", "exec sleep 10")
    tool = Tool("slow", str(script))
    context = RunContext()
    timer = threading.Timer(0.2, context.cancel)
    timer.start()
    started = time.monotonic()

    with pytest.raises(RunCancelled):
        tool.output(context)

    timer.join()
    assert time.monotonic() - started < 5


def test_cancelled_context_prevents_spawn(make_script) -> None:
    marker_dir = make_script("touch-marker", "touch \"$1\"").parent
    tool = Tool("touch-marker", str(marker_dir / "touch-marker"))
    context = RunContext()
    context.cancel()
    marker = marker_dir / "marker"

    with pytest.raises(RunCancelled):
        tool.output(context, str(marker))

    assert not marker.exists()
