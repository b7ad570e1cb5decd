from __future__ import annotations

import os
from typing import List, Mapping, Optional

from pydantic import BaseModel

from .errors import ConfigError
from .fetch.arena import BASE_URL, CATEGORIES
from .store.snapshots import DEFAULT_TABLE


class Settings(BaseModel):
    supabase_url: Optional[str] = None
    supabase_key: Optional[str] = None
    table: str = DEFAULT_TABLE
    base_url: str = BASE_URL
    categories: List[str] = list(CATEGORIES)
    fetch_timeout_ms: int = 60_000
    settle_ms: int = 1_000
    headless: bool = True


def _split(value: str) -> List[str]:
    return [v.strip() for v in value.split(",") if v.strip()]


def load_settings(environ: Optional[Mapping[str, str]] = None, require_credentials: bool = True) -> Settings:
    """Build settings from the process environment.

    ``SUPABASE_URL`` and ``SUPABASE_SERVICE_ROLE_KEY`` are required unless
    ``require_credentials`` is False (dry runs).
    """
    env = os.environ if environ is None else environ
    values = {
        "supabase_url": env.get("SUPABASE_URL") or None,
        "supabase_key": env.get("SUPABASE_SERVICE_ROLE_KEY") or None,
    }
    if env.get("ARENA_TABLE"):
        values["table"] = env["ARENA_TABLE"]
    if env.get("ARENA_BASE_URL"):
        values["base_url"] = env["ARENA_BASE_URL"]
    if env.get("ARENA_CATEGORIES"):
        values["categories"] = _split(env["ARENA_CATEGORIES"])
    if env.get("ARENA_FETCH_TIMEOUT_MS"):
        try:
            values["fetch_timeout_ms"] = int(env["ARENA_FETCH_TIMEOUT_MS"])
        except ValueError:
            raise ConfigError(f"ARENA_FETCH_TIMEOUT_MS must be an integer, got {env['ARENA_FETCH_TIMEOUT_MS']!r}")

    if require_credentials:
        missing = [name for name, key in (("SUPABASE_URL", "supabase_url"), ("SUPABASE_SERVICE_ROLE_KEY", "supabase_key")) if not values[key]]
        if missing:
            raise ConfigError(f"missing environment variables: {', '.join(missing)}")
    return Settings(**values)
