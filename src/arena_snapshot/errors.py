from __future__ import annotations


class ArenaSnapshotError(Exception):
    """Base class for errors raised by arena-snapshot."""


class ConfigError(ArenaSnapshotError):
    """Missing credentials or an invalid setting. Fatal at start-up."""


class FetchError(ArenaSnapshotError):
    """A category page could not be loaded or read."""

    def __init__(self, url: str, message: str):
        super().__init__(f"{url}: {message}")
        self.url = url


class PersistError(ArenaSnapshotError):
    """The persistence backend rejected a batch."""
