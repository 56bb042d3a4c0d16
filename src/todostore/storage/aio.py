"""Asyncio facade over the blocking sequence generator and record store.

Each coroutine runs the matching synchronous operation in a worker thread
via ``asyncio.to_thread``; store errors propagate to the awaiting caller
unchanged.
"""

from __future__ import annotations

import asyncio

from todostore.core.config import StoreConfig
from todostore.core.records import Record
from todostore.storage.counter import SequenceGenerator
from todostore.storage.records import RecordStore


class AsyncSequenceGenerator:
    def __init__(self, sequence: SequenceGenerator) -> None:
        self.sync = sequence

    async def next_id(self) -> str:
        return await asyncio.to_thread(self.sync.next_id)


class AsyncRecordStore:
    """Coroutine versions of :class:`RecordStore` operations."""

    def __init__(self, store: RecordStore) -> None:
        self.sync = store
        self.sequence = AsyncSequenceGenerator(store.sequence)

    @classmethod
    def from_config(cls, config: StoreConfig, *, lock_timeout: float = 10) -> AsyncRecordStore:
        return cls(RecordStore.from_config(config, lock_timeout=lock_timeout))

    async def create(self, text: str) -> Record:
        return await asyncio.to_thread(self.sync.create, text)

    async def read_all(self) -> list[Record]:
        return await asyncio.to_thread(self.sync.read_all)

    async def read_one(self, record_id: str) -> Record:
        return await asyncio.to_thread(self.sync.read_one, record_id)

    async def update(self, record_id: str, text: str) -> Record:
        return await asyncio.to_thread(self.sync.update, record_id, text)

    async def delete(self, record_id: str) -> None:
        await asyncio.to_thread(self.sync.delete, record_id)
