"""Pydantic models for the HTTP API."""

from pydantic import BaseModel


class UserPayload(BaseModel):
    """User registry entry."""

    username: str = ""
    id: str = ""


class ScrapeResponse(BaseModel):
    """Summary of a scrape run."""

    success: bool
    message: str
    count: int
    entries: dict[str, int]
