"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import date
from pathlib import Path

import pytest

from fatsecret_scraper.adapters.json_diary_cache import JsonDiaryCache
from fatsecret_scraper.adapters.json_user_repository import JsonUserRepository
from fatsecret_scraper.config import Settings
from fatsecret_scraper.containers import AppContainer
from fatsecret_scraper.domain.errors import CacheIOError, TransportError
from fatsecret_scraper.domain.models import DiaryRecord
from fatsecret_scraper.domain.site import SiteConfig
from fatsecret_scraper.services.auth import LoginFailed, LoginResult, LoginSucceeded
from fatsecret_scraper.services.diary import DiaryCache, DiaryResolver
from fatsecret_scraper.services.scraper import Authenticator, ScrapeService
from fatsecret_scraper.services.users import UserService

TODAY = date(2025, 4, 1)

LOGIN_PAGE = """<html>
<body>
  <form method="post" action="./Auth.aspx?pa=s">
    <input type="hidden" name="__VIEWSTATE" value="view-state-token" />
    <input type="hidden" name="__EVENTVALIDATION" value="validation-token" />
    <input type="text" name="ctl00$search" value="" />
    <button class="signIn" type="button"
            onclick="javascript:__doPostBack('X','')">Entrar</button>
  </form>
</body>
</html>
"""

DIARY_PAGE = """<html>
<body>
  <div class="MyFSHeaderFooterAdditional">
    <table class="foodsNutritionTbl">
      <tr><td>Gord</td><td>Carb</td><td>Prot</td><td>Cal</td></tr>
      <tr><td colspan="4">&nbsp;</td></tr>
      <tr>
        <td class="sub"> 45,20 </td>
        <td class="sub">180,50</td>
        <td class="sub">95,10</td>
        <td class="sub">1.520</td>
      </tr>
    </table>
  </div>
  <div class="subtitle">
    terça-feira, 1 de abril de 2025
  </div>
  <div class="big">76%</div>
  <div class="big">RDI</div>
  <table class="generic foodsTbl">
    <tr>
      <td>
        <table class="foodsNutritionTbl">
          <tr>
            <td class="greytitlex"> Café da Manhã </td>
            <td class="sub">5,30</td>
            <td class="sub">40,10</td>
            <td class="sub">12,00</td>
            <td class="sub">260</td>
          </tr>
        </table>
      </td>
    </tr>
    <tr>
      <td class="borderLeft borderRight">
        <table class="foodsNutritionTbl">
          <tr>
            <td><a href="/calorias">Pão Francês</a>
              <div class="smallText"> 1 unidade (50 g) </div></td>
            <td class="normal">1,55</td>
            <td class="normal">28,65</td>
            <td class="normal">4,50</td>
            <td class="normal">150</td>
          </tr>
        </table>
      </td>
    </tr>
    <tr>
      <td class="borderLeft borderRight">
        <table class="foodsNutritionTbl">
          <tr>
            <td><div class="smallText">Total</div></td>
            <td class="normal">5,30</td>
            <td class="normal">40,10</td>
            <td class="normal">12,00</td>
            <td class="normal">260</td>
          </tr>
        </table>
      </td>
    </tr>
    <tr>
      <td class="borderLeft borderRight">
        <table class="foodsNutritionTbl">
          <tr>
            <td><a href="/calorias">Café com Leite</a>
              <div class="smallText">1 xícara (200 ml)</div></td>
            <td class="normal">3,75</td>
            <td class="normal">11,45</td>
            <td class="normal">7,50</td>
            <td class="normal">110</td>
          </tr>
        </table>
      </td>
    </tr>
  </table>
  <table class="generic foodsTbl">
    <tr>
      <td>
        <table class="foodsNutritionTbl">
          <tr>
            <td class="greytitlex">Almoço</td>
            <td class="sub">39,90</td>
            <td class="sub">140,40</td>
            <td class="sub">83,10</td>
            <td class="sub">1.260</td>
          </tr>
        </table>
      </td>
    </tr>
    <tr>
      <td class="borderLeft borderRight">
        <table class="foodsNutritionTbl">
          <tr>
            <td><a href="/calorias">Arroz Branco</a>
              <div class="smallText">200 g</div></td>
            <td class="normal">0,60</td>
            <td class="normal">56,30</td>
            <td class="normal">5,00</td>
            <td class="normal">260</td>
          </tr>
        </table>
      </td>
    </tr>
  </table>
</body>
</html>
"""

EMPTY_PAGE = """<html><body><p>Entre para ver este diário.</p></body></html>"""


@dataclass
class FakeDiarySession:
    """Diary session serving canned pages and counting fetches."""

    default_page: str = DIARY_PAGE
    pages: dict[str, str] = field(default_factory=dict)
    failing_days: set[str] = field(default_factory=set)
    calls: list[dict[str, str]] = field(default_factory=list)
    closed: bool = False

    async def get_page(self, path: str, params: dict[str, str]) -> bytes:
        self.calls.append({"path": path, **params})
        day_id = params["dt"]
        if day_id in self.failing_days:
            raise TransportError(f"connection reset for dt={day_id}")
        return self.pages.get(day_id, self.default_page).encode("utf-8")

    async def close(self) -> None:
        self.closed = True


@dataclass
class FakeAuthenticator(Authenticator):
    """Authenticator returning a prepared result."""

    session: FakeDiarySession = field(default_factory=FakeDiarySession)
    fail: bool = False
    attempts: list[tuple[str, str]] = field(default_factory=list)

    async def authenticate(self, username: str, password: str) -> LoginResult:
        self.attempts.append((username, password))
        if self.fail:
            return LoginFailed(
                reason="Login failed - no redirect detected", status_code=200
            )
        return LoginSucceeded(session=self.session)


@dataclass
class InMemoryDiaryCache(DiaryCache):
    """In-memory diary cache for tests."""

    records: dict[tuple[str, date], DiaryRecord] = field(default_factory=dict)
    fail_writes: bool = False
    prepared: int = 0

    def ensure_directory(self) -> None:
        self.prepared += 1

    def load(self, username: str, day: date) -> DiaryRecord | None:
        return self.records.get((username, day))

    def save(self, record: DiaryRecord, day: date) -> Path:
        if self.fail_writes:
            raise CacheIOError("disk full")
        self.records[(record.user.username, day)] = record
        return Path(f"{record.user.username}_{day.isoformat()}.json")


@pytest.fixture
def site() -> SiteConfig:
    return SiteConfig()


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        fatsecret_login="login@example.com",
        fatsecret_password="secret",
        output_dir=tmp_path / "output",
        config_dir=tmp_path / "config",
        scrape_days=3,
    )


@pytest.fixture
def authenticator() -> FakeAuthenticator:
    return FakeAuthenticator()


@pytest.fixture
def container(settings: Settings, authenticator: FakeAuthenticator) -> AppContainer:
    user_service = UserService(JsonUserRepository(settings.config_dir))
    diary_cache = JsonDiaryCache(settings.output_dir)
    scrape_service = ScrapeService(
        authenticator=authenticator,
        resolver=DiaryResolver(
            cache=diary_cache, site=settings.site(), today=lambda: TODAY
        ),
        user_service=user_service,
        days=settings.scrape_days,
        today=lambda: TODAY,
    )
    return AppContainer(
        settings=settings,
        user_service=user_service,
        diary_cache=diary_cache,
        scrape_service=scrape_service,
    )
