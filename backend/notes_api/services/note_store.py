"""
Notes API — SQLAlchemy Note Store (Store Adapter)
==================================================

What:  CRUD for the `notes` table on top of an AsyncSession.
Why:   The only module that issues SQL. NoteService talks to it through the
       NoteStore interface and never sees SQLAlchemy types or exceptions.
How:   One instance per request, wrapping that request's session.
       Mutations commit before returning so the cache can be invalidated
       against a durable state.

Error Translation:
    IntegrityError / DataError / FlushError → ConstraintViolationError
    any other SQLAlchemyError or OSError     → StoreUnavailableError
    The session is rolled back before the translated error is raised.
"""

import logging
import uuid
from contextlib import asynccontextmanager
from typing import AsyncIterator, List, Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import DataError, IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import FlushError

from notes_api.exceptions import ConstraintViolationError, StoreUnavailableError
from notes_api.models.note import Note
from notes_api.services.store_base import NoteStore

logger = logging.getLogger(__name__)


class SQLAlchemyNoteStore(NoteStore):
    """NoteStore backed by an async SQLAlchemy session."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def get(self, note_id: uuid.UUID) -> Optional[Note]:
        async with self._translate_errors("get", note_id):
            result = await self._session.execute(
                select(Note).where(Note.id == note_id)
            )
            return result.scalar_one_or_none()

    async def list(self) -> List[Note]:
        async with self._translate_errors("list"):
            result = await self._session.execute(select(Note))
            return list(result.scalars().all())

    async def insert(self, note: Note) -> None:
        async with self._translate_errors("insert", note.id):
            self._session.add(note)
            await self._session.commit()
        logger.info("Note %s inserted", note.id)

    async def update(self, note: Note) -> None:
        # merge() keeps the call valid for detached instances too; for the
        # usual case (instance loaded by get() in this session) it is a no-op
        async with self._translate_errors("update", note.id):
            await self._session.merge(note)
            await self._session.commit()
        logger.info("Note %s updated", note.id)

    async def delete(self, note_id: uuid.UUID) -> bool:
        async with self._translate_errors("delete", note_id):
            result = await self._session.execute(
                delete(Note).where(Note.id == note_id)
            )
            await self._session.commit()
        removed = (result.rowcount or 0) > 0
        if removed:
            logger.info("Note %s deleted", note_id)
        return removed

    # ── Internal helpers ──────────────────────────────────────────────────

    @asynccontextmanager
    async def _translate_errors(
        self, operation: str, note_id: Optional[uuid.UUID] = None
    ) -> AsyncIterator[None]:
        """Roll back and re-raise SQLAlchemy failures as store errors."""
        context = {"operation": operation}
        if note_id is not None:
            context["note_id"] = str(note_id)

        try:
            yield
        except (IntegrityError, DataError, FlushError) as e:
            await self._rollback()
            logger.error("Constraint violation during %s: %s", operation, str(e))
            context["original_error"] = type(e).__name__
            raise ConstraintViolationError(context=context) from e
        except (SQLAlchemyError, OSError) as e:
            await self._rollback()
            logger.error("Store unavailable during %s: %s", operation, str(e))
            context["original_error"] = type(e).__name__
            raise StoreUnavailableError(context=context) from e

    async def _rollback(self) -> None:
        # A dead connection can fail the rollback too; the original error wins
        try:
            await self._session.rollback()
        except Exception as e:
            logger.error("Rollback failed: %s", str(e))
