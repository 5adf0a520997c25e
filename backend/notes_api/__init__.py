"""
Notes API — Application Package Initializer
============================================

What: Marks the `notes_api` directory as a Python package.
Why:  Enables module imports like `from notes_api.config import settings`.
Who:  Used implicitly by Python's import system and explicitly by pytest and uvicorn.

Architecture Note:
    The backend follows a layered architecture with a cache in front of the store:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │    NoteService (Cache-Aside Logic)  │  ← keys, TTLs, invalidation
    ├──────────────────┬──────────────────┤
    │  NoteStore (DB)  │  Cache (Redis)   │  ← authoritative / disposable
    └──────────────────┴──────────────────┘

    Routes never talk to the cache or the database directly; every read and
    write goes through NoteService so the invalidation rules live in one place.
"""

__version__ = "1.0.0"
