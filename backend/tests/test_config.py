"""Tests for notes_api.config.Settings."""

import pytest
from pydantic import ValidationError

from notes_api.config import Settings


def test_cache_defaults(monkeypatch):
    monkeypatch.delenv("CACHE_KEY_PREFIX", raising=False)
    monkeypatch.delenv("CACHE_ALL_NOTES_TTL", raising=False)
    monkeypatch.delenv("CACHE_NOTE_TTL", raising=False)

    s = Settings(_env_file=None)

    assert s.cache_key_prefix == "NotesAPI_"
    assert s.cache_all_notes_ttl == 300
    assert s.cache_note_ttl == 600


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("CACHE_NOTE_TTL", "30")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    s = Settings(_env_file=None)

    assert s.cache_note_ttl == 30
    assert s.log_level == "DEBUG"


def test_invalid_log_level_rejected():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, log_level="LOUD")


def test_zero_ttl_rejected():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, cache_note_ttl=0)


def test_cors_origins_list():
    s = Settings(_env_file=None, cors_origins="http://a.test, http://b.test")

    assert s.cors_origins_list == ["http://a.test", "http://b.test"]


def test_uses_sqlite():
    assert Settings(_env_file=None, database_url="sqlite+aiosqlite://").uses_sqlite
    assert not Settings(
        _env_file=None, database_url="postgresql+asyncpg://u:p@h/db"
    ).uses_sqlite
