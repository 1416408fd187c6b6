"""User registry business logic."""

from dataclasses import dataclass
from typing import Protocol

from fatsecret_scraper.domain.errors import UserAlreadyExistsError, ValidationError
from fatsecret_scraper.domain.models import User

_FORBIDDEN_CHARS = frozenset('/\\*?[]:\0')


class UserRepository(Protocol):
    """Persistence interface for registered users."""

    def list_users(self) -> list[User]:
        """Return all registered users."""

    def save_users(self, users: list[User]) -> None:
        """Replace the stored user list."""


@dataclass
class UserService:
    """Application service for the scrape target registry."""

    repository: UserRepository

    def list_users(self) -> list[User]:
        """Return all registered users."""
        return self.repository.list_users()

    def add_user(self, username: str, user_id: str) -> User:
        """Register a new user; usernames are unique."""
        username = username.strip()
        user_id = user_id.strip()
        if not username or not user_id:
            raise ValidationError("Username and ID are required")
        # Usernames become cache file names.
        if username in {".", ".."} or any(c in _FORBIDDEN_CHARS for c in username):
            raise ValidationError("Username contains characters not allowed")

        users = self.repository.list_users()
        if any(user.username == username for user in users):
            raise UserAlreadyExistsError("User with this username already exists")

        user = User(username=username, id=user_id)
        self.repository.save_users([*users, user])
        return user
