"""Domain models for the diary scraper."""

from dataclasses import dataclass

from fatsecret_scraper.domain.diary import DiaryEntry


@dataclass(frozen=True)
class User:
    """A FatSecret account whose diary is scraped."""

    username: str
    id: str


@dataclass(frozen=True)
class DiaryRecord:
    """Cached pairing of a user and one diary entry."""

    user: User
    entry: DiaryEntry
