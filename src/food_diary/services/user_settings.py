"""User settings service."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError


class UserSettingsRepository(Protocol):
    """Read access to per-user settings."""

    def get_timezone(self, user_id: UUID) -> str | None:
        """Return the user's timezone if set."""


@dataclass
class UserSettingsService:
    """Resolves the timezone used to bucket a user's days."""

    repository: UserSettingsRepository
    default_timezone: str = "UTC"

    def get_timezone(self, user_id: UUID) -> str:
        """Return the stored timezone, or the default when unset or unknown."""
        stored = self.repository.get_timezone(user_id)
        if stored and is_valid_timezone(stored):
            return stored
        return self.default_timezone


def is_valid_timezone(name: str) -> bool:
    """Return True when ``name`` is a known IANA timezone."""
    try:
        ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        return False
    return True
