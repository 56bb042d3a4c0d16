"""Record shape and ordering."""

from __future__ import annotations

from typing import TypedDict


class Record(TypedDict):
    id: str
    text: str


def make_record(record_id: str, text: str) -> Record:
    return {"id": record_id, "text": text}


def sort_records(records: list[Record]) -> list[Record]:
    """Return *records* ordered by id (zero-padded ids sort numerically)."""
    return sorted(records, key=lambda r: r["id"])

