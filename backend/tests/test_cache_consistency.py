"""
Notes API — Cache Consistency Scenarios
========================================

What:  End-to-end checks of the cache-aside discipline with a real
       SQLAlchemyNoteStore on SQLite and a FakeCache.
Why:   The unit tests pin individual calls; these pin what a client observes
       across a sequence of operations: no stale read after any mutation.
How:   Store methods are wrapped in AsyncMock(wraps=...) to count store calls.
"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest

from notes_api.exceptions import NotFoundError
from notes_api.services.note_service import ALL_NOTES_KEY, NoteService, note_cache_key
from notes_api.services.note_store import SQLAlchemyNoteStore

NOTE_INPUT = {"name": "Test", "text": "Test", "date": "2024-01-15T12:00:00"}


@pytest.fixture
def store(sqlite_session):
    store = SQLAlchemyNoteStore(sqlite_session)
    store.get = AsyncMock(wraps=store.get)
    store.list = AsyncMock(wraps=store.list)
    return store


@pytest.fixture
def service(store, fake_cache):
    return NoteService(store, fake_cache)


@pytest.mark.asyncio
async def test_get_is_served_from_cache_until_expiry(service, store, fake_cache):
    note_id, _ = await service.create_note(NOTE_INPUT)

    first = await service.get_note(note_id)
    assert store.get.await_count == 1

    second = await service.get_note(note_id)
    assert second == first
    assert second.name == "Test"
    assert second.date == datetime(2024, 1, 15, 12, 0, 0, tzinfo=timezone.utc)
    assert store.get.await_count == 1

    fake_cache.expire(note_cache_key(note_id))
    third = await service.get_note(note_id)
    assert third == first
    assert store.get.await_count == 2


@pytest.mark.asyncio
async def test_list_twice_hits_store_once(service, store):
    await service.create_note(NOTE_INPUT)

    await service.list_notes()
    await service.list_notes()

    assert store.list.await_count == 1


@pytest.mark.asyncio
async def test_create_invalidates_list_view(service, fake_cache):
    first_id, _ = await service.create_note(NOTE_INPUT)
    before = await service.list_notes()
    assert [n.id for n in before] == [first_id]
    assert ALL_NOTES_KEY in fake_cache.entries

    second_id, _ = await service.create_note({**NOTE_INPUT, "name": "Second"})
    assert ALL_NOTES_KEY not in fake_cache.entries

    after = await service.list_notes()
    assert {n.id for n in after} == {first_id, second_id}


@pytest.mark.asyncio
async def test_update_is_visible_immediately(service, fake_cache):
    note_id, _ = await service.create_note(NOTE_INPUT)
    await service.get_note(note_id)
    await service.list_notes()

    update = {"name": "Changed", "text": "Changed text", "date": "2024-02-02T10:00:00"}
    await service.update_note(note_id, update)

    assert note_cache_key(note_id) not in fake_cache.entries
    assert ALL_NOTES_KEY not in fake_cache.entries

    fetched = await service.get_note(note_id)
    assert fetched.id == note_id
    assert fetched.name == "Changed"
    assert fetched.text == "Changed text"
    assert fetched.date == datetime(2024, 2, 2, 10, 0, 0, tzinfo=timezone.utc)

    listed = await service.list_notes()
    assert [n.name for n in listed] == ["Changed"]


@pytest.mark.asyncio
async def test_delete_is_visible_immediately(service, fake_cache):
    note_id, _ = await service.create_note(NOTE_INPUT)
    await service.get_note(note_id)
    await service.list_notes()

    await service.delete_note(note_id)

    with pytest.raises(NotFoundError):
        await service.get_note(note_id)
    assert await service.list_notes() == []

    with pytest.raises(NotFoundError):
        await service.delete_note(note_id)


@pytest.mark.asyncio
async def test_offset_date_round_trips_through_create_and_update(
    service, fake_cache, sqlite_session
):
    note_id, created = await service.create_note(
        {**NOTE_INPUT, "date": "2024-01-15T12:00:00+02:00"}
    )
    sqlite_session.expunge_all()

    fetched = await service.get_note(note_id)
    assert fetched.date == created.date
    assert fetched.date == datetime(2024, 1, 15, 10, 0, tzinfo=timezone.utc)

    await service.update_note(note_id, {**NOTE_INPUT, "date": "2024-06-01T08:30:00-05:00"})
    sqlite_session.expunge_all()

    updated = await service.get_note(note_id)
    assert updated.date == datetime(2024, 6, 1, 13, 30, tzinfo=timezone.utc)

    # The cached copy decodes to the same value as the stored row
    from_cache = await service.get_note(note_id)
    assert from_cache == updated
    assert note_cache_key(note_id) in fake_cache.entries
