"""
String Analyzer Service - String Store
======================================

What:  Owns the in-memory collection of StringRecords and keeps the
       persistence backend in sync with it.
How:   Records live in a list (insertion order) with an id → record index
       beside it. Every mutation runs under one asyncio.Lock around
       read-modify-persist; if the backend write fails, the in-memory
       change is undone so memory and disk never disagree.
Who:   Created once per application (lifespan or test fixture) and used by
       StringService.

Lifecycle:
    1. StringStore(backend)          → empty, not loaded
    2. await store.load()            → collection read from the backend
    3. insert()/delete()             → mutate + persist before returning
    4. await store.close()           → backend resources released
"""

import asyncio
import logging
from typing import Dict, List, Optional

from string_analyzer.exceptions import DuplicateError, NotFoundError
from string_analyzer.schemas.string import StringRecord
from string_analyzer.services.backends import PersistenceBackend

logger = logging.getLogger(__name__)


class StringStore:
    """
    In-memory, write-through collection of string records.

    Invariants:
        - at most one record per id (the SHA-256 of the value)
        - list_all() returns records in insertion order
        - records are never modified, only inserted or removed whole
    """

    def __init__(self, backend: PersistenceBackend):
        self.backend = backend
        self._records: List[StringRecord] = []
        self._by_id: Dict[str, StringRecord] = {}
        self._lock = asyncio.Lock()
        self.loaded = False

    async def load(self) -> None:
        """Replace the in-memory collection with the persisted one."""
        async with self._lock:
            records = await self.backend.load()
            self._records = []
            self._by_id = {}
            for record in records:
                if record.id in self._by_id:
                    logger.warning("Skipping duplicate persisted string %s", record.id)
                    continue
                self._records.append(record)
                self._by_id[record.id] = record
            self.loaded = True
        logger.info("Store ready with %d strings (backend=%s)", len(self._records), self.backend.name)

    async def insert(self, record: StringRecord) -> StringRecord:
        """
        Append `record` and persist the collection.

        Raises:
            DuplicateError: a record with the same id is already stored
            StorageError: the backend write failed (nothing is inserted)

        Any exception from the backend, cancellation included, undoes the append.
        """
        async with self._lock:
            if record.id in self._by_id:
                raise DuplicateError(record.id)

            self._records.append(record)
            self._by_id[record.id] = record
            try:
                await self.backend.save(self._records)
            except BaseException:
                self._records.pop()
                del self._by_id[record.id]
                raise

        logger.info("Stored string %s (%d chars)", record.id[:12], record.properties.length)
        return record

    def find_by_value(self, value: str) -> Optional[StringRecord]:
        for record in self._records:
            if record.value == value:
                return record
        return None

    def find_by_id(self, record_id: str) -> Optional[StringRecord]:
        return self._by_id.get(record_id)

    async def delete(self, value: str) -> StringRecord:
        """
        Remove the first record whose value equals `value` and persist.

        Raises:
            NotFoundError: no record has this value
            StorageError: the backend write failed (nothing is removed)

        Any exception from the backend, cancellation included, restores the record.
        """
        async with self._lock:
            index = next(
                (i for i, record in enumerate(self._records) if record.value == value),
                None,
            )
            if index is None:
                raise NotFoundError(resource="string")

            record = self._records.pop(index)
            del self._by_id[record.id]
            try:
                await self.backend.save(self._records)
            except BaseException:
                self._records.insert(index, record)
                self._by_id[record.id] = record
                raise

        logger.info("Deleted string %s", record.id[:12])
        return record

    def list_all(self) -> List[StringRecord]:
        return list(self._records)

    @property
    def count(self) -> int:
        return len(self._records)

    def __len__(self) -> int:
        return len(self._records)

    async def close(self) -> None:
        await self.backend.close()
