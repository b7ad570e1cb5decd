import pytest

from arena_snapshot.config import load_settings
from arena_snapshot.errors import ConfigError
from arena_snapshot.fetch.arena import CATEGORIES


def test_missing_credentials_are_fatal():
    with pytest.raises(ConfigError, match="SUPABASE_SERVICE_ROLE_KEY"):
        load_settings({"SUPABASE_URL": "https://x.supabase.co"})


def test_dry_run_needs_no_credentials():
    settings = load_settings({}, require_credentials=False)
    assert settings.supabase_url is None
    assert settings.categories == list(CATEGORIES)
    assert settings.table == "lm_arena_leaderboard_snapshots"


def test_overrides():
    settings = load_settings(
        {
            "SUPABASE_URL": "https://x.supabase.co",
            "SUPABASE_SERVICE_ROLE_KEY": "service-key",
            "ARENA_CATEGORIES": "text, vision,,",
            "ARENA_TABLE": "snapshots",
            "ARENA_FETCH_TIMEOUT_MS": "30000",
        }
    )
    assert settings.supabase_key == "service-key"
    assert settings.categories == ["text", "vision"]
    assert settings.table == "snapshots"
    assert settings.fetch_timeout_ms == 30000


def test_bad_timeout():
    with pytest.raises(ConfigError):
        load_settings({"ARENA_FETCH_TIMEOUT_MS": "soon"}, require_credentials=False)
