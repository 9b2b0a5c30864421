# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Go toolchain client: version detection, installs, listing, tidy and tests."""

from __future__ import annotations

import os
from collections.abc import MutableMapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from ..core.context import RunContext
from ..core.once import OnceCell
from ..core.process import Tool, ToolExecutionError, find_executable
from ..logging import Reporter
from ..semver import SemVer, VersionParseError
from .streaming import LineStream

VERSION_BANNER: Final[str] = "go version go"
TOOL_MESSAGE_PREFIX: Final[str] = "go: "
PACKAGE_NAME_TEMPLATE: Final[str] = "{{.Name}}"


@dataclass(frozen=True, slots=True)
class TestOptions:
    """Options applied to a ``go test`` run.

    Attributes:
        use_cache: When ``False`` the run appends ``-count=1`` so that cached
            results are not reused.
    """

    __test__ = False

    use_cache: bool = True

    def build(self, packages: Sequence[str]) -> list[str]:
        """Return the ``go test`` arguments for ``packages``."""

        args = ["test"]
        if not self.use_cache:
            args.append("-count=1")
        return [*args, *packages]


class GoClient:
    """Structured interface to a ``go`` binary."""

    def __init__(self, tool: Tool, context: RunContext, reporter: Reporter) -> None:
        """Bind the client to ``tool``, the run ``context`` and a ``reporter``.

        Args:
            tool: Tool binding for the go executable.
            context: Run context carrying cancellation.
            reporter: Presentation used to re-emit ``go mod`` output.
        """

        self.tool = tool
        self.context = context
        self.reporter = reporter
        self._version: OnceCell[SemVer] = OnceCell()

    def version(self) -> SemVer:
        """Return the toolchain version parsed from ``go version``.

        Returns:
            SemVer: Parsed version, computed once per client.

        Raises:
            ToolExecutionError: If ``go version`` fails or its banner is malformed.
        """

        return self._version.get(self._detect_version)

    def _detect_version(self) -> SemVer:
        output, ok = self.tool.output(self.context, "version")
        if not ok:
            raise ToolExecutionError(self.tool.name, ("version",), "could not get go version", output=output)
        if not output.startswith(VERSION_BANNER):
            raise ToolExecutionError(self.tool.name, ("version",), f"could not find version: {output}", output=output)
        banner = output.split()[2]
        try:
            return SemVer.parse(banner.removeprefix("go"))
        except VersionParseError as exc:
            raise ToolExecutionError(self.tool.name, ("version",), str(exc), output=output) from exc

    def modules_supported(self) -> bool:
        """Return ``True`` when the toolchain understands Go modules."""

        version = self.version()
        if version.older_than(1, 11):
            return False
        return not (version.major == 1 and version.minor == 11 and version.details == "beta1")

    def gopath(self) -> str:
        """Return ``$GOPATH``, asking the toolchain when the variable is unset."""

        return os.environ.get("GOPATH") or self.tool.must_output(self.context, "env", "GOPATH")

    def install(self, binary: str, package: str) -> None:
        """Install ``package`` unless ``binary`` is already on ``PATH``.

        Toolchains older than 1.16 use ``go get -u``; newer ones use
        ``go install <package>@latest``.

        Args:
            binary: Executable expected once the install completes.
            package: Import path of the command to install.

        Raises:
            ToolExecutionError: If the install fails or leaves ``binary`` missing.
        """

        if find_executable(binary) is not None:
            return
        args = ("get", "-u", package) if self.version().older_than(1, 16) else ("install", f"{package}@latest")
        output, ok = self.tool.combined_output(self.context, *args)
        if not ok:
            raise ToolExecutionError(self.tool.name, args, output or "install failed", output=output)
        if find_executable(binary) is None:
            raise ToolExecutionError(self.tool.name, args, f"after installing binary: {binary} not found in $PATH")

    def mod_tidy(self, cwd: Path | None = None) -> bool:
        """Tidy ``go.mod`` in ``cwd`` with the verb the toolchain supports.

        Toolchains older than 1.11 have nothing to tidy; 1.11 ``beta2`` spells
        the operation ``go mod -sync``. Output lines are re-emitted as low-lit
        messages with the ``go: `` prefix removed.

        Returns:
            bool: ``True`` when tidying succeeded or was not applicable.
        """

        version = self.version()
        if version.older_than(1, 11):
            return True
        verb = "-sync" if (version.major, version.minor, version.details) == (1, 11, "beta2") else "tidy"
        output, ok = self.tool.combined_output(self.context, "mod", verb, cwd=cwd)
        for raw in output.split("\n"):
            line = raw.removeprefix(TOOL_MESSAGE_PREFIX)
            if line:
                self.reporter.info(f"go mod {verb}", line)
        return ok

    def list_packages(
        self,
        packages: str | Sequence[str],
        *,
        template: str | None = None,
        cwd: Path | None = None,
    ) -> list[str]:
        """Return the output lines of ``go list`` for ``packages``.

        Args:
            packages: Package pattern or sequence of patterns.
            template: Optional ``-f`` template applied to each package.
            cwd: Optional working directory.

        Returns:
            list[str]: One entry per output line.

        Raises:
            ToolExecutionError: If ``go list`` fails.
        """

        targets = [packages] if isinstance(packages, str) else list(packages)
        args = ["list"]
        if template:
            args.extend(["-f", template])
        output = self.tool.must_output(self.context, *args, *targets, cwd=cwd)
        return output.split("\n")

    def package_names(self, package: str, cwd: Path | None = None) -> list[str]:
        """Return the Go package name(s) declared by ``package``."""

        return self.list_packages(package, template=PACKAGE_NAME_TEMPLATE, cwd=cwd)

    def test(
        self,
        packages: Sequence[str],
        options: TestOptions | None = None,
        *,
        cwd: Path | None = None,
    ) -> LineStream:
        """Start ``go test`` for ``packages`` and stream its combined output.

        Args:
            packages: Package targets passed to ``go test``.
            options: Test options, defaults to using the result cache.
            cwd: Optional working directory.

        Returns:
            LineStream: Lines in the order the toolchain wrote them.

        Raises:
            ToolNotFoundError: If the go executable cannot be resolved.
        """

        args = (options or TestOptions()).build(packages)
        return LineStream((self.tool.path, *args), context=self.context, cwd=cwd)


def ensure_bin_on_path(gopath: str, environ: MutableMapping[str, str] | None = None) -> str | None:
    """Append ``$GOPATH/bin`` to ``PATH`` when it is missing.

    Args:
        gopath: Value of ``GOPATH``.
        environ: Environment to update, defaults to :data:`os.environ`.

    Returns:
        str | None: The new ``PATH`` when it was changed, otherwise ``None``.
    """

    target = os.environ if environ is None else environ
    gopath_bin = os.path.join(gopath, "bin")
    paths = target.get("PATH", "").split(os.pathsep)
    if gopath_bin in paths:
        return None
    new_path = os.pathsep.join([*paths, gopath_bin])
    target["PATH"] = new_path
    return new_path


__all__ = ["GoClient", "TestOptions", "ensure_bin_on_path"]
