"""
Notes API — Abstract Note Store Interface
==========================================

What:  Abstract base class defining the persistence contract for notes.
Why:   NoteService depends on this interface, not on SQLAlchemy, so the cache
       rules can be tested against a mock store and the backing database can
       change without touching them.
How:   SQLAlchemyNoteStore implements it; tests use MagicMock(spec=NoteStore).
"""

import uuid
from abc import ABC, abstractmethod
from typing import List, Optional

from notes_api.models.note import Note


class NoteStore(ABC):
    """
    Persistence contract for Note rows.

    Contract:
        - Every operation may raise StoreUnavailableError or ConstraintViolationError
        - Mutations are durable when the awaited call returns
        - The store knows nothing about caching
    """

    @abstractmethod
    async def get(self, note_id: uuid.UUID) -> Optional[Note]:
        """Return the note with this id, or None if absent."""
        ...

    @abstractmethod
    async def list(self) -> List[Note]:
        """Return every note. Order is unspecified."""
        ...

    @abstractmethod
    async def insert(self, note: Note) -> None:
        """
        Persist a new note.

        Raises:
            ConstraintViolationError: A note with the same id already exists.
        """
        ...

    @abstractmethod
    async def update(self, note: Note) -> None:
        """Replace the row matching note.id wholesale. The caller checks existence first."""
        ...

    @abstractmethod
    async def delete(self, note_id: uuid.UUID) -> bool:
        """Remove the note if present. Returns False when nothing was removed."""
        ...
