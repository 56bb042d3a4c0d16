"""Durable sequence generator backed by a single zero-padded counter file."""

from __future__ import annotations

import contextlib
import logging
import threading
from collections.abc import Iterator
from pathlib import Path

from filelock import FileLock, Timeout

from todostore.core.errors import LockTimeout, StorageReadFailed, StorageWriteFailed
from todostore.core.ids import format_id
from todostore.storage.fs import replace_file

logger = logging.getLogger(__name__)


def read_counter(counter_file: Path) -> int:
    """Return the last issued value stored in *counter_file*.

    A missing file means nothing has been issued yet and reads as 0.

    Raises:
        StorageReadFailed: If the file exists but cannot be read, or does
            not hold a decimal integer.
    """
    try:
        raw = counter_file.read_bytes()
    except FileNotFoundError:
        return 0
    except OSError as exc:
        raise StorageReadFailed(f"Could not read counter file {counter_file}: {exc}") from exc

    text = raw.decode("ascii", errors="replace").strip()
    if not (text.isascii() and text.isdigit()):
        raise StorageReadFailed(f"Counter file {counter_file} is corrupt: {raw[:32]!r}")
    return int(text)


def write_counter(counter_file: Path, value: int) -> str:
    """Persist *value* zero-padded, fully replacing the file. Returns the padded string.

    Raises:
        CounterOverflow: If *value* does not fit the id width (nothing is written).
        StorageWriteFailed: If the file cannot be written.
    """
    counter_string = format_id(value)
    try:
        replace_file(counter_file, counter_string.encode("ascii"))
    except OSError as exc:
        raise StorageWriteFailed(f"Could not write counter file {counter_file}: {exc}") from exc
    return counter_string


class SequenceGenerator:
    """Issues strictly increasing zero-padded ids from *counter_file*.

    Each read-modify-write holds an in-process mutex and then an advisory
    ``filelock`` on ``<counter file>.lock``, so threads and processes
    sharing the counter never receive the same id. Both waits are bounded
    by *lock_timeout* seconds (``-1`` waits forever).
    """

    def __init__(self, counter_file: Path, *, lock_timeout: float = 10) -> None:
        self.counter_file = Path(counter_file)
        self.lock_timeout = lock_timeout
        self.lock_file = self.counter_file.with_name(f"{self.counter_file.name}.lock")
        self._mutex = threading.Lock()
        self._file_lock = FileLock(self.lock_file, timeout=lock_timeout)

    @contextlib.contextmanager
    def _exclusive(self) -> Iterator[None]:
        """Hold the mutex and the counter's file lock for the block.

        Raises:
            LockTimeout: If either lock is not acquired within ``lock_timeout``.
            StorageWriteFailed: If the lock file cannot be created or locked.
        """
        if not self._mutex.acquire(timeout=self.lock_timeout):
            raise LockTimeout(
                f"Could not acquire counter lock for {self.counter_file} "
                f"within {self.lock_timeout}s (held in this process)"
            )
        try:
            try:
                self._file_lock.acquire()
            except Timeout:
                raise LockTimeout(
                    f"Could not acquire {self.lock_file} within {self.lock_timeout}s"
                ) from None
            except OSError as exc:
                raise StorageWriteFailed(f"Could not lock counter file {self.lock_file}: {exc}") from exc
            try:
                yield
            finally:
                self._file_lock.release()
        finally:
            self._mutex.release()

    def next_id(self) -> str:
        """Increment the counter and return the new id.

        Raises:
            CounterOverflow: If the counter is already at the maximum id.
            LockTimeout: If the counter lock is not acquired in time.
            StorageReadFailed: If the counter cannot be read.
            StorageWriteFailed: If the new value cannot be persisted.
        """
        with self._exclusive():
            current = read_counter(self.counter_file)
            new_id = write_counter(self.counter_file, current + 1)
        logger.debug("Issued id %s from %s", new_id, self.counter_file)
        return new_id

    def current_value(self) -> int:
        """Return the last issued value without incrementing it."""
        return read_counter(self.counter_file)
