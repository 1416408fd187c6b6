"""Target site locations."""

from dataclasses import dataclass

import httpx

DEFAULT_BASE_URL = "https://www.fatsecret.com.br"


@dataclass(frozen=True)
class SiteConfig:
    """Base URL and page paths of the diary site."""

    base_url: str = DEFAULT_BASE_URL
    login_path: str = "/Auth.aspx?pa=s"
    diary_path: str = "/Diary.aspx"
    timeout_seconds: float = 15.0

    @property
    def login_url(self) -> str:
        """Absolute URL of the login page."""
        return self.resolve(self.login_path)

    @property
    def diary_url(self) -> str:
        """Absolute URL of the diary page."""
        return self.resolve(self.diary_path)

    def resolve(self, location: str) -> str:
        """Resolve a possibly relative location against the base URL."""
        return str(httpx.URL(self.base_url).join(location))
