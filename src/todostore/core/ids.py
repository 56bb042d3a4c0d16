"""Zero-padded record id formatting and validation."""

from __future__ import annotations

from todostore.core.errors import CounterOverflow

ID_WIDTH = 5
MAX_ID = 10**ID_WIDTH - 1

RECORD_SUFFIX = ".txt"


def format_id(value: int) -> str:
    """Render *value* as a fixed-width, zero-padded decimal string.

    Raises:
        CounterOverflow: If *value* needs more than ``ID_WIDTH`` digits.
        ValueError: If *value* is negative.
    """
    if value < 0:
        raise ValueError(f"Record ids are non-negative, got {value}")
    if value > MAX_ID:
        raise CounterOverflow(f"Id {value} exceeds the {ID_WIDTH}-digit limit ({MAX_ID})")
    return f"{value:0{ID_WIDTH}d}"


def is_safe_record_name(s: str) -> bool:
    """Could *s* name a record file inside the data directory?

    Rejects empty strings, hidden names and anything carrying a path
    separator, so callers can never address files outside the directory.
    """
    if not s or s.startswith("."):
        return False
    return "/" not in s and "\\" not in s and "\x00" not in s


def record_filename(record_id: str) -> str:
    """Return the on-disk filename for *record_id* (``00001`` -> ``00001.txt``)."""
    return f"{record_id}{RECORD_SUFFIX}"
