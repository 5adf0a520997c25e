"""
Notes API — Note SQLAlchemy Model
==================================

What:  ORM model representing the `notes` table.
Why:   Maps Python objects to database rows for type-safe database operations.
Who:   Used by SQLAlchemyNoteStore for CRUD and by init_models() for schema creation.

Table Design Rationale:
    - UUID primary key: minted by NoteService at creation, never reused
    - name / text: VARCHAR(256), the same bound the API schema enforces
    - date: supplied by the client, stored and returned as UTC (see UTCDateTime)
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.types import TypeDecorator

from notes_api.database import Base

# Upper bound for name and text, shared with the request schema
MAX_FIELD_LENGTH = 256


def to_utc(value: datetime) -> datetime:
    """Aware datetimes are converted to UTC; naive ones are taken to be UTC already."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class UTCDateTime(TypeDecorator):
    """
    DateTime column that always stores and returns aware UTC values.

    PostgreSQL timestamptz keeps the instant but not the offset, and SQLite
    keeps neither; normalizing to UTC on both sides makes a read return the
    same value on every backend.
    """

    impl = DateTime
    cache_ok = True

    def process_bind_param(self, value, dialect):
        return to_utc(value) if value is not None else None

    def process_result_value(self, value, dialect):
        return to_utc(value) if value is not None else None


class Note(Base):
    """
    A single user note.

    Lifecycle:
        1. Created via POST /notes (id minted then)
        2. Updated in place via PUT /notes/{id} (id unchanged, other fields replaced)
        3. Removed via DELETE /notes/{id} (permanent, no tombstone)
    """

    __tablename__ = "notes"

    # ── Primary Key ───────────────────────────────────────────────────────
    # Why no server default: the id is minted in Python before the INSERT so
    # the service can return it without a round trip
    # Uuid (generic) maps to native UUID on PostgreSQL and CHAR(32) on SQLite
    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        comment="Unique identifier, assigned once at creation",
    )

    name: Mapped[str] = mapped_column(
        String(MAX_FIELD_LENGTH),
        nullable=False,
    )

    text: Mapped[str] = mapped_column(
        String(MAX_FIELD_LENGTH),
        nullable=False,
    )

    # Why caller-supplied: the date is part of the note, not an audit timestamp
    date: Mapped[datetime] = mapped_column(
        UTCDateTime(timezone=True),
        nullable=False,
        comment="Note date supplied by the client",
    )

    def __repr__(self) -> str:
        """Developer-friendly string representation for debugging."""
        return f"<Note(id={self.id}, name='{self.name}', date='{self.date}')>"
