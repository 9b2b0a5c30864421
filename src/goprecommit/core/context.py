# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Cooperative cancellation shared across a single gate run."""

from __future__ import annotations

from threading import Event


class RunCancelled(RuntimeError):
    """Raised when a cancelled run reaches a cooperative check point."""

    def __init__(self, message: str = "run cancelled") -> None:
        """Initialise the error with a human-readable ``message``.

        Args:
            message: Description rendered when the cancellation is reported.
        """

        super().__init__(message)


class RunContext:
    """Carry the cancellation state of one run.

    Cancellation is never preemptive: loops call :meth:`check` between units of
    work and the invocation layer polls :attr:`cancelled` while waiting on a
    subprocess.
    """

    def __init__(self) -> None:
        """Create a context that has not been cancelled."""

        self._cancelled = Event()

    @property
    def cancelled(self) -> bool:
        """Return ``True`` once :meth:`cancel` has been called.

        Returns:
            bool: Cancellation flag for the run.
        """

        return self._cancelled.is_set()

    def cancel(self) -> None:
        """Request cancellation of the run."""

        self._cancelled.set()

    def check(self) -> None:
        """Raise :class:`RunCancelled` when cancellation has been requested.

        Raises:
            RunCancelled: If :meth:`cancel` was called.
        """

        if self._cancelled.is_set():
            raise RunCancelled()

    def wait(self, timeout: float) -> bool:
        """Block for up to ``timeout`` seconds waiting for cancellation.

        Args:
            timeout: Maximum number of seconds to wait.

        Returns:
            bool: ``True`` when the run was cancelled during the wait.
        """

        return self._cancelled.wait(timeout)


__all__ = ["RunCancelled", "RunContext"]
