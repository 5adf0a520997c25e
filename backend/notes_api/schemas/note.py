"""
Notes API — Pydantic Request/Response Schemas
==============================================

What:  Pydantic models defining the API contract.
Why:   Strict input validation, automatic serialization, and OpenAPI doc generation.
How:   FastAPI uses these models to validate request bodies and serialize
       responses. NoteService also uses NoteResponse as the cached blob format:
       model_dump_json() on write, model_validate_json() on read.

Design Decision:
    Schemas are separate from SQLAlchemy models because the cache must hold
    plain JSON. Caching the ORM row would tie cache entries to session state;
    caching NoteResponse keeps them a pure projection of the store.
"""

import uuid
from datetime import datetime
from typing import Annotated, List, Optional

from pydantic import AfterValidator, BaseModel, Field, TypeAdapter

from notes_api.models.note import MAX_FIELD_LENGTH, to_utc

# Every date crossing the API is an aware UTC datetime; naive input is read as UTC
UTCDatetime = Annotated[datetime, AfterValidator(to_utc)]


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class NoteCreate(BaseModel):
    """
    What:  Input for creating a note or replacing an existing note's fields.
    Who:   Body of POST /notes and PUT /notes/{id}.

    All three fields are required; name and text must be non-empty.
    """
    name: str = Field(min_length=1, max_length=MAX_FIELD_LENGTH, description="Note title")
    text: str = Field(min_length=1, max_length=MAX_FIELD_LENGTH, description="Note body")
    date: UTCDatetime = Field(description="Note date (ISO 8601), normalized to UTC")


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class NoteResponse(BaseModel):
    """
    What:  External representation of a note.
    Who:   Returned by GET /notes and GET /notes/{id}; stored in the cache.
    """
    id: uuid.UUID = Field(description="Unique note identifier (UUID)")
    name: str = Field(description="Note title")
    text: str = Field(description="Note body")
    date: UTCDatetime = Field(description="Note date (ISO 8601), normalized to UTC")

    model_config = {"from_attributes": True}


# Codec for the cached `all_notes` list
NoteListAdapter = TypeAdapter(List[NoteResponse])


# ══════════════════════════════════════════════════════════════════════════
# Error / Health Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    What:  Standardized error response format for all API errors.

    Example:
        {
            "error": "not_found",
            "message": "note with ID '...' was not found",
            "request_id": "a1b2c3d4"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """
    What:  Health check response showing service and dependency status.

    The database is authoritative, so losing it makes the service unhealthy.
    Losing the cache only makes it degraded: every read falls through to the store.
    """
    status: str = Field(description="Overall service status: healthy, degraded, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    cache: str = Field(description="Cache connectivity: connected, disconnected")
    cache_stats: Optional[dict] = Field(default=None, description="Cache hit/miss counters")
    uptime_seconds: float = Field(description="Seconds since service started")
