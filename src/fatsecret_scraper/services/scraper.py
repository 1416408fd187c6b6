"""Scrape orchestration: one login, then every user and day in sequence."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Protocol

from fatsecret_scraper.domain.diary import DiaryEntry
from fatsecret_scraper.domain.errors import (
    AuthenticationFailure,
    ParseError,
    TransportError,
)
from fatsecret_scraper.domain.models import User
from fatsecret_scraper.services.auth import LoginFailed, LoginResult
from fatsecret_scraper.services.diary import DiaryResolver, DiarySession
from fatsecret_scraper.services.users import UserService

_logger = logging.getLogger(__name__)


class Authenticator(Protocol):
    """Interface for the login handshake."""

    async def authenticate(self, username: str, password: str) -> LoginResult:
        """Log in and return a success or failure result."""


@dataclass
class ScrapeService:
    """Drives authentication and per-user, per-day diary resolution."""

    authenticator: Authenticator
    resolver: DiaryResolver
    user_service: UserService
    days: int = 30
    today: Callable[[], date] = date.today

    async def scrape_registered(
        self, username: str, password: str, day: date | None = None
    ) -> dict[str, list[DiaryEntry]]:
        """Scrape every user in the registry."""
        users = self.user_service.list_users()
        if not users:
            _logger.warning("No users found in configuration")
        return await self.scrape(username, password, users, day)

    async def scrape(
        self,
        username: str,
        password: str,
        users: list[User],
        day: date | None = None,
    ) -> dict[str, list[DiaryEntry]]:
        """Return each user's resolved, non-empty entries in resolve order.

        Without ``day`` the last ``days`` calendar days are resolved, newest
        first. A failed login raises ``AuthenticationFailure``.
        """
        self.resolver.cache.ensure_directory()
        result = await self.authenticator.authenticate(username, password)
        if isinstance(result, LoginFailed):
            raise AuthenticationFailure(result.reason)

        session = result.session
        try:
            return await self._collect(session, users, self._target_days(day))
        finally:
            await session.close()

    async def _collect(
        self, session: DiarySession, users: list[User], days: list[date]
    ) -> dict[str, list[DiaryEntry]]:
        entries: dict[str, list[DiaryEntry]] = {}
        for user in users:
            for day in days:
                try:
                    entry = await self.resolver.resolve(session, user, day)
                except (TransportError, ParseError) as exc:
                    _logger.warning(
                        "Skipping %s on %s: %s", user.username, day.isoformat(), exc
                    )
                    continue
                if entry.is_empty:
                    continue
                entries.setdefault(user.username, []).append(entry)
            _logger.info(
                "Resolved %s entries for %s",
                len(entries.get(user.username, [])),
                user.username,
            )
        return entries

    def _target_days(self, day: date | None) -> list[date]:
        if day is not None:
            return [day]
        today = self.today()
        return [today - timedelta(days=offset) for offset in range(self.days)]
