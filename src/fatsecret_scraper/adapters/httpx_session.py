"""Authenticated httpx session used to fetch diary pages."""

from dataclasses import dataclass

import httpx

from fatsecret_scraper.domain.errors import TransportError


@dataclass
class HttpxDiarySession:
    """Cookie-bearing client that follows redirects for page fetches."""

    http_client: httpx.AsyncClient
    base_url: str

    async def get_page(self, path: str, params: dict[str, str]) -> bytes:
        """Fetch a page relative to the site base URL and return its body."""
        url = str(httpx.URL(self.base_url).join(path))
        try:
            response = await self.http_client.get(url, params=params)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise TransportError(f"GET {url} failed: {exc}") from exc
        return response.content

    async def close(self) -> None:
        """Close the underlying HTTP client session."""
        await self.http_client.aclose()
