"""Day-entry resolution backed by the local diary cache."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, replace
from datetime import date
from pathlib import Path
from typing import Protocol

from fatsecret_scraper.domain.diary import DiaryEntry
from fatsecret_scraper.domain.errors import CacheIOError
from fatsecret_scraper.domain.models import DiaryRecord, User
from fatsecret_scraper.domain.site import SiteConfig
from fatsecret_scraper.services.extractor import extract_diary_entry, parse_document

# The site numbers diary days sequentially; 2025-03-26 is day 20173.
ANCHOR_DAY_ID = 20173
ANCHOR_DATE = date(2025, 3, 26)

DISPLAY_DATE_FORMAT = "%d/%m/%Y"

_logger = logging.getLogger(__name__)


class DiarySession(Protocol):
    """Authenticated session able to fetch site pages."""

    async def get_page(self, path: str, params: dict[str, str]) -> bytes:
        """Fetch a page and return its raw body."""

    async def close(self) -> None:
        """Release the session."""


class DiaryCache(Protocol):
    """Persistence interface for per-day diary records."""

    def ensure_directory(self) -> None:
        """Prepare the storage location before a scrape run."""

    def load(self, username: str, day: date) -> DiaryRecord | None:
        """Return the cached record for a user and day, if valid."""

    def save(self, record: DiaryRecord, day: date) -> Path:
        """Persist a record and return where it was written."""


def day_identifier(day: date) -> int:
    """Translate a calendar date into the site's day identifier."""
    return ANCHOR_DAY_ID + (day - ANCHOR_DATE).days


@dataclass
class DiaryResolver:
    """Returns diary entries from the cache or from the site."""

    cache: DiaryCache
    site: SiteConfig
    today: Callable[[], date] = date.today

    async def resolve(self, session: DiarySession, user: User, day: date) -> DiaryEntry:
        """Return the entry for a user and day, fetching it on a cache miss.

        An empty entry is returned as-is and never cached.
        """
        cached = self.cache.load(user.username, day)
        if cached is not None:
            _logger.debug("Cache hit for %s on %s", user.username, day.isoformat())
            return cached.entry

        params = {"pa": "fj", "id": user.id, "dt": str(day_identifier(day))}
        _logger.info("Fetching diary for %s on %s", user.username, day.isoformat())
        body = await session.get_page(self.site.diary_path, params)
        entry = extract_diary_entry(parse_document(body))
        if entry.is_empty:
            _logger.info("No diary data for %s on %s", user.username, day.isoformat())
            return entry

        entry = replace(
            entry,
            date=day.strftime(DISPLAY_DATE_FORMAT),
            timestamp=self.today().strftime(DISPLAY_DATE_FORMAT),
        )
        try:
            path = self.cache.save(DiaryRecord(user=user, entry=entry), day)
        except CacheIOError:
            _logger.exception(
                "Failed to cache diary for %s on %s", user.username, day.isoformat()
            )
        else:
            _logger.info("Saved data for %s to %s", user.username, path)
        return entry
