"""
Notes API — Note Service (Cache-Aside Orchestrator)
====================================================

What:  Every note read and write, with the cache-aside rules applied.
Why:   Keeps cache keys, TTLs and invalidation triggers in one place so no
       route can mutate a note without clearing the entries it makes stale.
How:   Wraps a NoteStore (authoritative) and a CacheBackend (disposable),
       both injected through the constructor.

Cache Layout:
    all_notes    → JSON list of every NoteResponse      TTL 5 min
    note_{id}    → JSON of one NoteResponse             TTL 10 min

Read Path (list_notes, get_note):
    ┌──────────┐ hit  ┌──────────────┐
    │  cache   │─────▶│ return cached│
    └────┬─────┘      └──────────────┘
         │ miss / cache error / undecodable blob
    ┌────▼─────┐      ┌──────────────┐      ┌──────────┐
    │  store   │─────▶│ set with TTL │─────▶│  return  │
    └──────────┘      └──────────────┘      └──────────┘

Write Path (create_note, update_note, delete_note):
    validate → store write (committed) → delete affected keys

Rules:
    - Mutations never write to the cache, they only delete. A value written
      during a mutation could belong to a commit that later fails.
    - "Not found" is never cached. A cached absence would hide a note created
      right after the miss.
    - Cache failures on the read path degrade to a miss. Invalidation failures
      propagate: the caller must learn that readers may see stale data.
"""

import logging
import uuid
from typing import Any, List, Mapping, Optional, Tuple, Union

from pydantic import ValidationError as PydanticValidationError

from notes_api.exceptions import CacheError, NotFoundError, ValidationError, field_errors
from notes_api.models.note import Note
from notes_api.schemas.note import NoteCreate, NoteListAdapter, NoteResponse
from notes_api.services.cache_base import CacheBackend
from notes_api.services.store_base import NoteStore

logger = logging.getLogger(__name__)

ALL_NOTES_KEY = "all_notes"
ALL_NOTES_TTL = 300  # 5 minutes
NOTE_TTL = 600  # 10 minutes

NoteInput = Union[NoteCreate, Mapping[str, Any]]


def note_cache_key(note_id: uuid.UUID) -> str:
    """Cache key for a single note: note_<canonical uuid>."""
    return f"note_{note_id}"


class NoteService:
    """
    Cache-aside orchestration for notes.

    Stateless beyond its two collaborators. One instance is built per request
    around that request's store; the cache backend is shared.
    """

    def __init__(
        self,
        store: NoteStore,
        cache: CacheBackend,
        all_notes_ttl: int = ALL_NOTES_TTL,
        note_ttl: int = NOTE_TTL,
    ):
        self._store = store
        self._cache = cache
        self._all_notes_ttl = all_notes_ttl
        self._note_ttl = note_ttl

    # ══════════════════════════════════════════════════════════════════════
    # Reads
    # ══════════════════════════════════════════════════════════════════════

    async def list_notes(self) -> List[NoteResponse]:
        """
        Return every note.

        The result is either the current store state or a snapshot at most
        all_notes_ttl seconds old. The store is not consulted on a cache hit.
        """
        cached = await self._read_cache(ALL_NOTES_KEY)
        if cached is not None:
            try:
                return NoteListAdapter.validate_json(cached)
            except PydanticValidationError as e:
                logger.warning("Discarding undecodable cache entry %s: %s", ALL_NOTES_KEY, e)

        notes = await self._store.list()
        responses = [NoteResponse.model_validate(note) for note in notes]

        await self._write_cache(
            ALL_NOTES_KEY,
            NoteListAdapter.dump_json(responses).decode(),
            self._all_notes_ttl,
        )
        return responses

    async def get_note(self, note_id: uuid.UUID) -> NoteResponse:
        """
        Return one note.

        Raises:
            NotFoundError: No note with this id. Nothing is cached in that case.
        """
        key = note_cache_key(note_id)

        cached = await self._read_cache(key)
        if cached is not None:
            try:
                return NoteResponse.model_validate_json(cached)
            except PydanticValidationError as e:
                logger.warning("Discarding undecodable cache entry %s: %s", key, e)

        note = await self._store.get(note_id)
        if note is None:
            raise NotFoundError(resource="note", resource_id=str(note_id))

        response = NoteResponse.model_validate(note)
        await self._write_cache(key, response.model_dump_json(), self._note_ttl)
        return response

    # ══════════════════════════════════════════════════════════════════════
    # Writes
    # ══════════════════════════════════════════════════════════════════════

    async def create_note(self, payload: NoteInput) -> Tuple[uuid.UUID, NoteCreate]:
        """
        Create a note and invalidate the list view.

        note_{id} is left alone: nothing can have cached a note that did not exist.

        Returns:
            (id, payload): the minted id and the validated input
        """
        data = self._validate(payload)

        note = Note(id=uuid.uuid4(), name=data.name, text=data.text, date=data.date)
        await self._store.insert(note)

        await self._cache.delete(ALL_NOTES_KEY)
        logger.info("Note %s created", note.id)
        return note.id, data

    async def update_note(self, note_id: uuid.UUID, payload: NoteInput) -> None:
        """
        Replace name, text and date of an existing note.

        Raises:
            ValidationError: Input rejected; no store or cache call was made.
            NotFoundError: No note with this id; nothing was mutated or invalidated.
        """
        data = self._validate(payload)

        note = await self._store.get(note_id)
        if note is None:
            raise NotFoundError(resource="note", resource_id=str(note_id))

        note.name = data.name
        note.text = data.text
        note.date = data.date
        await self._store.update(note)

        await self._cache.delete(note_cache_key(note_id), ALL_NOTES_KEY)
        logger.info("Note %s updated", note_id)

    async def delete_note(self, note_id: uuid.UUID) -> None:
        """
        Delete an existing note.

        A second delete of the same id raises NotFoundError exactly like a
        delete of an id that never existed, and makes no store mutation.
        """
        note = await self._store.get(note_id)
        if note is None:
            raise NotFoundError(resource="note", resource_id=str(note_id))

        await self._store.delete(note_id)

        await self._cache.delete(note_cache_key(note_id), ALL_NOTES_KEY)
        logger.info("Note %s deleted", note_id)

    # ══════════════════════════════════════════════════════════════════════
    # Internal helpers
    # ══════════════════════════════════════════════════════════════════════

    @staticmethod
    def _validate(payload: NoteInput) -> NoteCreate:
        if isinstance(payload, NoteCreate):
            return payload
        try:
            return NoteCreate.model_validate(payload)
        except PydanticValidationError as e:
            raise ValidationError(
                message="Note input is invalid",
                context={"errors": field_errors(e.errors())},
            ) from e

    async def _read_cache(self, key: str) -> Optional[Union[str, bytes]]:
        """Cache probe; a failing cache counts as a miss."""
        try:
            return await self._cache.get(key)
        except CacheError as e:
            logger.warning("Cache read failed for %s, falling back to store: %s", key, e)
            return None

    async def _write_cache(self, key: str, value: str, ttl_seconds: int) -> None:
        """Cache population after a store read; the read result is returned regardless."""
        try:
            await self._cache.set(key, value, ttl_seconds)
        except CacheError as e:
            logger.warning("Cache write failed for %s: %s", key, e)
