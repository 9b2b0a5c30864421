# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Write-once value cells shared by the tool clients.

Unlike an LRU-style memoizer, the factory passed to :meth:`OnceCell.get` runs
while the cell's lock is held, so concurrent callers never trigger a second
computation.
"""

from __future__ import annotations

from collections.abc import Callable
from threading import Lock
from typing import Generic, TypeVar

T = TypeVar("T")


class OnceCell(Generic[T]):
    """Hold a value computed at most once for the lifetime of the cell."""

    __slots__ = ("_lock", "_value", "_ready")

    def __init__(self) -> None:
        """Initialise an empty cell guarded by its own lock."""

        self._lock = Lock()
        self._value: T | None = None
        self._ready = False

    @property
    def ready(self) -> bool:
        """Return ``True`` once a value has been stored in the cell.

        Returns:
            bool: ``True`` when :meth:`get` has completed successfully.
        """

        return self._ready

    def get(self, factory: Callable[[], T]) -> T:
        """Return the cached value, computing it with ``factory`` on first use.

        Args:
            factory: Zero-argument callable producing the value. Only the first
                caller's factory is ever invoked.

        Returns:
            T: Value shared by every caller of the cell.

        Raises:
            Exception: Any exception raised by ``factory`` propagates and the
                cell stays empty.
        """

        if self._ready:
            return self._value  # type: ignore[return-value]
        with self._lock:
            if not self._ready:
                self._value = factory()
                self._ready = True
        return self._value  # type: ignore[return-value]


__all__ = ["OnceCell"]
