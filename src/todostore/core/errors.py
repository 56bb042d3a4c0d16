"""Typed errors raised by the sequence generator and the record store."""

from __future__ import annotations


class StoreError(Exception):
    """Base class for every failure surfaced by the store.

    Each subclass carries a stable ``code`` used by the CLI's JSON envelope.
    """

    code = "STORE_ERROR"


class NotFound(StoreError):
    """The requested id has no record file."""

    code = "NOT_FOUND"

    def __init__(self, record_id: str) -> None:
        super().__init__(f"No item with id: {record_id}")
        self.record_id = record_id


class StorageReadFailed(StoreError):
    """A counter or record file exists but could not be read."""

    code = "STORAGE_READ_FAILED"


class StorageWriteFailed(StoreError):
    """A counter or record file could not be written."""

    code = "STORAGE_WRITE_FAILED"


class StorageUnavailable(StoreError):
    """The data directory could not be listed."""

    code = "STORAGE_UNAVAILABLE"


class CounterOverflow(StoreError):
    """The next id would not fit in the fixed id width."""

    code = "COUNTER_OVERFLOW"


class LockTimeout(StoreError):
    """Raised when a lock cannot be acquired within the timeout period."""

    code = "LOCK_TIMEOUT"


class InvalidText(StoreError):
    """Record text that cannot be stored as UTF-8 (e.g. lone surrogates)."""

    code = "INVALID_TEXT"
