"""Dependency container wiring for the application."""

from dataclasses import dataclass

import httpx

from fatsecret_scraper.adapters.json_diary_cache import JsonDiaryCache
from fatsecret_scraper.adapters.json_user_repository import JsonUserRepository
from fatsecret_scraper.config import Settings
from fatsecret_scraper.services.auth import SessionAuthenticator
from fatsecret_scraper.services.diary import DiaryResolver
from fatsecret_scraper.services.scraper import ScrapeService
from fatsecret_scraper.services.users import UserService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    user_service: UserService
    diary_cache: JsonDiaryCache
    scrape_service: ScrapeService


def build_container(
    settings: Settings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    site = resolved_settings.site()
    user_service = UserService(JsonUserRepository(resolved_settings.config_dir))
    diary_cache = JsonDiaryCache(resolved_settings.output_dir)
    scrape_service = ScrapeService(
        authenticator=SessionAuthenticator(site=site, transport=transport),
        resolver=DiaryResolver(cache=diary_cache, site=site),
        user_service=user_service,
        days=resolved_settings.scrape_days,
    )

    return AppContainer(
        settings=resolved_settings,
        user_service=user_service,
        diary_cache=diary_cache,
        scrape_service=scrape_service,
    )
