"""FastAPI application factory."""

import logging
from datetime import date

from fastapi import FastAPI, HTTPException, Query, Request, status

from fatsecret_scraper.api.models import ScrapeResponse, UserPayload
from fatsecret_scraper.app_logging import configure_logging
from fatsecret_scraper.containers import AppContainer
from fatsecret_scraper.domain.errors import (
    AuthenticationFailure,
    CacheIOError,
    UserAlreadyExistsError,
    ValidationError,
)


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    app = FastAPI()
    app.state.container = container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/api/scrape")
    async def scrape(
        request: Request, day: str | None = Query(default=None, alias="date")
    ) -> ScrapeResponse:
        """Scrape registered users for one day or the last days."""
        state_container: AppContainer = request.app.state.container
        target_day = _parse_day(day) if day else None
        credentials = state_container.settings.credentials()
        if credentials is None:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="FatSecret credentials not configured",
            )
        username, password = credentials
        try:
            entries = await state_container.scrape_service.scrape_registered(
                username, password, target_day
            )
        except AuthenticationFailure as exc:
            logger.warning("Scrape aborted: %s", exc)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)
            ) from exc
        except CacheIOError as exc:
            logger.exception("Scrape storage failure")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)
            ) from exc
        return ScrapeResponse(
            success=True,
            message=f"Scraped data for {len(entries)} users",
            count=len(entries),
            entries={name: len(days) for name, days in entries.items()},
        )

    @app.get("/api/users")
    async def list_users(request: Request) -> list[UserPayload]:
        """Return registered users."""
        state_container: AppContainer = request.app.state.container
        try:
            users = state_container.user_service.list_users()
        except CacheIOError as exc:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Error loading users: {exc}",
            ) from exc
        return [UserPayload(username=user.username, id=user.id) for user in users]

    @app.post("/api/users", status_code=status.HTTP_201_CREATED)
    async def add_user(payload: UserPayload, request: Request) -> UserPayload:
        """Register a new scrape target."""
        state_container: AppContainer = request.app.state.container
        try:
            user = state_container.user_service.add_user(payload.username, payload.id)
        except UserAlreadyExistsError as exc:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT, detail=str(exc)
            ) from exc
        except ValidationError as exc:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
            ) from exc
        except CacheIOError as exc:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Error saving users: {exc}",
            ) from exc
        return UserPayload(username=user.username, id=user.id)

    @app.get("/api/diary/{username}")
    async def latest_diary(username: str, request: Request) -> dict[str, object]:
        """Return the most recent cached diary of a user."""
        state_container: AppContainer = request.app.state.container
        try:
            record = state_container.diary_cache.latest(username)
        except CacheIOError as exc:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Error reading diary",
            ) from exc
        if record is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="No diary entries found for this user",
            )
        return record

    @app.get("/api/diary/{username}/{day}")
    async def diary_for_day(
        username: str, day: str, request: Request
    ) -> dict[str, object]:
        """Return the cached diary of a user for one day."""
        state_container: AppContainer = request.app.state.container
        parsed_day = _parse_day(day)
        try:
            record = state_container.diary_cache.read_raw(username, parsed_day)
        except CacheIOError as exc:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Error reading diary",
            ) from exc
        if record is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Diary entry not found",
            )
        return record

    return app


def _parse_day(raw: str) -> date:
    """Parse a ``YYYY-MM-DD`` path or query value."""
    try:
        return date.fromisoformat(raw)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Date must use the YYYY-MM-DD format",
        ) from exc
