"""Login handshake against the FatSecret ASP.NET login form."""

import logging
from dataclasses import dataclass

import httpx
from bs4 import BeautifulSoup

from fatsecret_scraper.adapters.httpx_session import HttpxDiarySession
from fatsecret_scraper.domain.errors import ParseError
from fatsecret_scraper.domain.site import SiteConfig
from fatsecret_scraper.services.extractor import parse_document

DEFAULT_LOGIN_BUTTON_ID = "ctl00$ctl12$Logincontrol1$LoginButton"
_LOGIN_CONTROL = "ctl00$ctl12$Logincontrol1"
_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoginSucceeded:
    """Login ended in a redirect; the session can fetch diary pages."""

    session: HttpxDiarySession


@dataclass(frozen=True)
class LoginFailed:
    """Login did not redirect or a request failed along the way."""

    reason: str
    status_code: int | None = None


LoginResult = LoginSucceeded | LoginFailed


def extract_form_data(document: BeautifulSoup) -> dict[str, str]:
    """Collect every named hidden input of the login page."""
    form_data: dict[str, str] = {}
    for field in document.select("input[type='hidden']"):
        name = field.get("name")
        if name:
            form_data[str(name)] = str(field.get("value") or "")
    return form_data


def find_login_button_id(document: BeautifulSoup) -> str:
    """Return the postback target of the sign-in button."""
    for button in document.select("button.signIn"):
        onclick = str(button.get("onclick") or "")
        if "__doPostBack" not in onclick:
            continue
        parts = onclick.split("'")
        if len(parts) >= 2 and parts[1]:
            _logger.info("Found login button id: %s", parts[1])
            return parts[1]
    return DEFAULT_LOGIN_BUTTON_ID


def build_login_form(
    document: BeautifulSoup, username: str, password: str
) -> dict[str, str]:
    """Build the login POST body from the fetched login page."""
    form_data = extract_form_data(document)
    form_data[f"{_LOGIN_CONTROL}$Name"] = username
    form_data[f"{_LOGIN_CONTROL}$Password"] = password
    form_data[f"{_LOGIN_CONTROL}$CreatePersistentCookie"] = "on"
    form_data["__EVENTTARGET"] = find_login_button_id(document)
    form_data["__EVENTARGUMENT"] = ""
    return form_data


class _BorrowedTransport(httpx.AsyncBaseTransport):
    """Caller-owned transport shared by the login and session clients."""

    def __init__(self, transport: httpx.AsyncBaseTransport) -> None:
        self._transport = transport

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        return await self._transport.handle_async_request(request)

    async def aclose(self) -> None:
        """Leave the underlying transport open for its owner."""


@dataclass
class SessionAuthenticator:
    """Performs the login handshake and hands out an authenticated session."""

    site: SiteConfig
    transport: httpx.AsyncBaseTransport | None = None

    async def authenticate(self, username: str, password: str) -> LoginResult:
        """Log in and return a session that follows redirects."""
        login_client = self._client(follow_redirects=False)
        try:
            return await self._login(login_client, username, password)
        except httpx.HTTPError as exc:
            _logger.warning("Login request failed: %s", exc)
            return LoginFailed(reason=f"Login request failed: {exc}")
        except ParseError as exc:
            return LoginFailed(reason=str(exc))
        finally:
            await login_client.aclose()

    async def _login(
        self, login_client: httpx.AsyncClient, username: str, password: str
    ) -> LoginResult:
        response = await login_client.get(self.site.login_url)
        _logger.info("Login page status code: %s", response.status_code)
        document = parse_document(response.content)
        form_data = build_login_form(document, username, password)

        login_response = await login_client.post(
            self.site.login_url, data=form_data, headers=self._login_headers()
        )
        _logger.info("Login response status code: %s", login_response.status_code)
        location = login_response.headers.get("location")
        if login_response.status_code != httpx.codes.FOUND or not location:
            return LoginFailed(
                reason="Login failed - no redirect detected",
                status_code=login_response.status_code,
            )

        redirect_url = self.site.resolve(location)
        _logger.info("Following login redirect to %s", redirect_url)
        redirect_response = await login_client.get(redirect_url)
        _logger.info("Redirect response status code: %s", redirect_response.status_code)

        follow_client = self._client(follow_redirects=True)
        follow_client.cookies = httpx.Cookies(login_client.cookies)
        return LoginSucceeded(
            session=HttpxDiarySession(
                http_client=follow_client, base_url=self.site.base_url
            )
        )

    def _client(self, *, follow_redirects: bool) -> httpx.AsyncClient:
        transport = (
            _BorrowedTransport(self.transport) if self.transport is not None else None
        )
        return httpx.AsyncClient(
            transport=transport,
            follow_redirects=follow_redirects,
            timeout=self.site.timeout_seconds,
        )

    def _login_headers(self) -> dict[str, str]:
        return {
            "User-Agent": _USER_AGENT,
            "Referer": self.site.login_url,
            "Origin": self.site.base_url,
            "Accept": (
                "text/html,application/xhtml+xml,application/xml;"
                "q=0.9,image/webp,*/*;q=0.8"
            ),
            "Accept-Language": "en-US,en;q=0.5",
            "Cache-Control": "max-age=0",
            "Upgrade-Insecure-Requests": "1",
        }
