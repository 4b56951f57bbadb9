"""
String Analyzer Service - StringRow SQLAlchemy Model
====================================================

What:  ORM model for the `strings` table used by the sql backend.
How:   One row per StringRecord; `position` keeps insertion order because
       the listing order must survive a reload.

Table Design:
    - id: SHA-256 of the value (primary key and dedup key)
    - value: the raw string, unique
    - properties: derived properties as JSON (never recomputed)
    - created_at: insertion time, UTC
    - position: 0-based index in the in-memory collection
"""

from datetime import datetime, timezone

from sqlalchemy import JSON, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from string_analyzer.database import Base
from string_analyzer.schemas.string import StringProperties, StringRecord


class StringRow(Base):
    __tablename__ = "strings"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    properties: Mapped[dict] = mapped_column(JSON, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    position: Mapped[int] = mapped_column(Integer, nullable=False, index=True)

    @classmethod
    def from_record(cls, record: StringRecord, position: int) -> "StringRow":
        return cls(
            id=record.id,
            value=record.value,
            properties=record.properties.model_dump(),
            created_at=record.created_at,
            position=position,
        )

    def to_record(self) -> StringRecord:
        created_at = self.created_at
        # SQLite drops the offset; everything is stored in UTC
        if created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)
        return StringRecord(
            id=self.id,
            value=self.value,
            properties=StringProperties(**self.properties),
            created_at=created_at,
        )

    def __repr__(self) -> str:
        return f"<StringRow(id={self.id[:12]}..., position={self.position})>"
