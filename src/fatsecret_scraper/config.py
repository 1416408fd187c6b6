"""Application configuration."""

import os
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from fatsecret_scraper.domain.site import DEFAULT_BASE_URL, SiteConfig

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    fatsecret_login: str | None = None
    fatsecret_password: str | None = None
    fatsecret_base_url: str = DEFAULT_BASE_URL
    output_dir: Path = Path("output")
    config_dir: Path = Path("config")
    scrape_days: int = 30
    http_timeout_seconds: float = 15.0
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    def site(self) -> SiteConfig:
        """Build the target site configuration."""
        return SiteConfig(
            base_url=self.fatsecret_base_url,
            timeout_seconds=self.http_timeout_seconds,
        )

    def credentials(self) -> tuple[str, str] | None:
        """Return the login credentials, if both are configured."""
        if not self.fatsecret_login or not self.fatsecret_password:
            return None
        return self.fatsecret_login, self.fatsecret_password
