"""
String Analyzer Service - Persistence Backends
==============================================

What:  Durable storage for the store's collection of StringRecords.
How:   StringStore owns the in-memory collection and calls `save()` with the
       full collection after every mutation; `load()` runs once at startup.
Who:   Injected into StringStore by `build_backend()` (from settings) or
       directly by tests.

Implementations:
    - JsonFileBackend: one JSON document {"strings": [...]}, rewritten
      atomically (temp file + rename) on every save.
    - SqlBackend: one SQL table, rewritten in a single transaction on every
      save (async SQLAlchemy).
"""

import json
import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional, Sequence

import aiofiles
import aiofiles.os
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError

from string_analyzer.config import Settings, settings as default_settings
from string_analyzer.database import Base, create_engine, create_session_factory
from string_analyzer.exceptions import StorageError
from string_analyzer.models.string_row import StringRow
from string_analyzer.schemas.string import StringRecord

logger = logging.getLogger(__name__)


class PersistenceBackend(ABC):
    """
    Abstract interface for persisting the string collection.

    Contract:
        - load() returns every persisted record in insertion order,
          or [] when nothing has been persisted yet
        - save() durably replaces the persisted collection before returning
        - Implementation errors are wrapped in StorageError
    """

    name = "abstract"

    @abstractmethod
    async def load(self) -> List[StringRecord]:
        ...

    @abstractmethod
    async def save(self, records: Sequence[StringRecord]) -> None:
        ...

    async def close(self) -> None:
        """Release held resources. No-op by default."""


class JsonFileBackend(PersistenceBackend):
    """
    Stores the collection as {"strings": [StringRecord, ...]} in one file.

    Writes go to `<path>.tmp` first and are then renamed over the target,
    so a crash mid-write leaves the previous document intact.
    """

    name = "json"

    def __init__(self, path: str):
        self.path = Path(path).resolve()

    async def load(self) -> List[StringRecord]:
        if not self.path.exists():
            logger.info("No data file at %s; starting with an empty collection", self.path)
            return []

        try:
            async with aiofiles.open(self.path, "r", encoding="utf-8") as f:
                raw = await f.read()
        except OSError as e:
            logger.error("Failed to read data file %s: %s", self.path, str(e))
            raise StorageError(
                message="Could not read the stored strings.",
                context={"path": str(self.path), "os_error": str(e)},
            )

        if not raw.strip():
            return []

        try:
            document = json.loads(raw)
            items = document.get("strings") or []
            records = [StringRecord.model_validate(item) for item in items]
        except (json.JSONDecodeError, AttributeError, PydanticValidationError) as e:
            logger.error("Malformed data file %s: %s", self.path, str(e))
            raise StorageError(
                message="The stored strings document is malformed.",
                context={"path": str(self.path), "error": str(e)},
            )

        logger.info("Loaded %d strings from %s", len(records), self.path)
        return records

    async def save(self, records: Sequence[StringRecord]) -> None:
        document = {"strings": [r.model_dump(mode="json") for r in records]}
        tmp_path = self.path.with_name(self.path.name + ".tmp")

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            async with aiofiles.open(tmp_path, "w", encoding="utf-8") as f:
                await f.write(json.dumps(document, ensure_ascii=False, indent=2))
                await f.flush()
                await aiofiles.os.wrap(os.fsync)(f.fileno())
            await aiofiles.os.replace(tmp_path, self.path)
        except OSError as e:
            logger.error("Failed to write data file %s: %s", self.path, str(e))
            raise StorageError(
                message="Could not save the strings. Please try again.",
                context={"path": str(self.path), "os_error": str(e)},
            )

        logger.debug("Wrote %d strings to %s", len(records), self.path)


class SqlBackend(PersistenceBackend):
    """
    Stores the collection in the `strings` table via async SQLAlchemy.

    The table is created on first load(). save() deletes and re-inserts all
    rows inside one transaction, mirroring the whole-document rewrite of
    the json backend.
    """

    name = "sql"

    def __init__(self, database_url: str, echo: bool = False):
        self.database_url = database_url
        self.engine = create_engine(database_url, echo=echo)
        self.session_factory = create_session_factory(self.engine)

    async def load(self) -> List[StringRecord]:
        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
            async with self.session_factory() as session:
                result = await session.execute(select(StringRow).order_by(StringRow.position))
                rows = list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error("Failed to load strings from database: %s", str(e))
            raise StorageError(
                message="Could not read the stored strings.",
                context={"error_type": type(e).__name__},
            )

        logger.info("Loaded %d strings from database", len(rows))
        return [row.to_record() for row in rows]

    async def save(self, records: Sequence[StringRecord]) -> None:
        try:
            async with self.session_factory() as session:
                async with session.begin():
                    await session.execute(delete(StringRow))
                    session.add_all(
                        StringRow.from_record(record, position)
                        for position, record in enumerate(records)
                    )
        except SQLAlchemyError as e:
            logger.error("Failed to save strings to database: %s", str(e))
            raise StorageError(
                message="Could not save the strings. Please try again.",
                context={"error_type": type(e).__name__},
            )

    async def close(self) -> None:
        await self.engine.dispose()


def build_backend(config: Optional[Settings] = None) -> PersistenceBackend:
    """Construct the backend named by `config.storage_backend`."""
    config = config or default_settings
    if config.storage_backend == "sql":
        return SqlBackend(config.database_url, echo=config.log_level == "DEBUG")
    return JsonFileBackend(config.data_file)
