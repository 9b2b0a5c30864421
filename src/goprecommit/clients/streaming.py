# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Incremental delivery of a long-running subprocess's combined output.

A producer thread reads the merged stdout/stderr pipe line by line and hands
each line to the consumer through a single-slot queue. The consumer iterates a
:class:`LineStream`; the stream ends when the pipe closes. A non-zero exit
status is delivered as one final ``exit status N`` line. A consumer that
stops early calls :meth:`LineStream.close` (or lets the stream be collected),
after which the producer keeps draining the pipe so the subprocess can finish,
dropping whatever it reads.
"""

from __future__ import annotations

import logging

# Bandit: the streamed command is an argument list built by the Go client.
import subprocess  # nosec B404
import weakref
from collections.abc import Iterator, Sequence
from pathlib import Path
from queue import Empty, Full, Queue
from threading import Event, Thread
from typing import Final

from ..core.context import RunContext

LOGGER = logging.getLogger(__name__)

_HANDOFF_POLL: Final[float] = 0.1
_CLOSED: Final = object()
EXIT_STATUS_TEMPLATE: Final[str] = "exit status {returncode}"


class _Channel:
    """Single-slot hand-off between the producer and the consumer."""

    def __init__(self) -> None:
        self.queue: Queue[object] = Queue(maxsize=1)
        self.abandoned = Event()

    def send(self, item: object) -> bool:
        """Block until ``item`` is handed over; ``False`` once the consumer is gone."""

        while not self.abandoned.is_set():
            try:
                self.queue.put(item, timeout=_HANDOFF_POLL)
            except Full:
                continue
            return True
        return False

    def abandon(self) -> None:
        self.abandoned.set()


def _produce(channel: _Channel, argv: Sequence[str], cwd: Path | None) -> None:
    """Run ``argv`` and forward its combined output onto ``channel``."""

    try:
        try:
            # Bandit: argv is an argument list with a resolved executable.
            process = subprocess.Popen(  # nosec B603
                list(argv),
                cwd=str(cwd) if cwd is not None else None,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                errors="replace",
                bufsize=1,
            )
        except OSError as exc:
            channel.send(str(exc))
            return
        with process:
            if process.stdout is None:
                channel.send(f"{argv[0]}: output pipe unavailable")
                process.kill()
                return
            try:
                for raw in process.stdout:
                    if channel.abandoned.is_set():
                        continue
                    channel.send(raw.rstrip("\r\n"))
            except (OSError, ValueError) as exc:
                channel.send(str(exc))
            try:
                returncode = process.wait()
            except OSError as exc:
                channel.send(str(exc))
            else:
                LOGGER.debug("stream exit argv=%s status=%s", list(argv), returncode)
                if returncode != 0:
                    channel.send(EXIT_STATUS_TEMPLATE.format(returncode=returncode))
    finally:
        channel.send(_CLOSED)


class LineStream(Iterator[str]):
    """Single-pass, ordered sequence of lines from a running subprocess."""

    def __init__(self, argv: Sequence[str], *, context: RunContext, cwd: Path | None = None) -> None:
        """Start the producer thread for ``argv``.

        A failure to start the process is delivered as a single line followed
        by the end of the stream; it is never raised.

        Args:
            argv: Command to run, executable first.
            context: Run context checked while waiting for the next line.
            cwd: Optional working directory for the subprocess.
        """

        self.argv = tuple(argv)
        self._context = context
        self._channel = _Channel()
        self._done = False
        self._finalizer = weakref.finalize(self, self._channel.abandon)
        self._thread = Thread(
            target=_produce,
            args=(self._channel, self.argv, cwd),
            name=f"stream:{self.argv[0]}",
            daemon=True,
        )
        self._thread.start()

    def __iter__(self) -> LineStream:
        return self

    def __next__(self) -> str:
        """Return the next line, blocking until one arrives or the stream ends.

        Raises:
            StopIteration: Once the subprocess output is exhausted or the
                stream was closed.
            RunCancelled: If the run is cancelled while waiting; the stream is
                closed first.
        """

        while not self._done:
            try:
                item = self._channel.queue.get(timeout=_HANDOFF_POLL)
            except Empty:
                if self._context.cancelled:
                    self.close()
                    self._context.check()
                continue
            if item is _CLOSED:
                self._done = True
                break
            return str(item)
        raise StopIteration

    def close(self) -> None:
        """Stop delivering lines; the producer drains and discards the rest."""

        self._done = True
        self._finalizer()

    def join(self, timeout: float | None = None) -> bool:
        """Wait for the producer thread to finish.

        Args:
            timeout: Maximum number of seconds to wait, ``None`` waits forever.

        Returns:
            bool: ``True`` when the producer has finished.
        """

        self._thread.join(timeout)
        return not self._thread.is_alive()

    def __enter__(self) -> LineStream:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


__all__ = ["LineStream"]
