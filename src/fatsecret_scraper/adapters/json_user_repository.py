"""JSON file-backed user registry."""

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path

from fatsecret_scraper.domain.errors import CacheIOError
from fatsecret_scraper.domain.models import User
from fatsecret_scraper.services.users import UserRepository

SEED_USERS = [User(username="alissoncorsair", id="77829510")]

_logger = logging.getLogger(__name__)


@dataclass
class JsonUserRepository(UserRepository):
    """Stores users as a JSON array of ``{username, id}`` objects."""

    config_dir: Path
    filename: str = "users.json"

    @property
    def path(self) -> Path:
        """Location of the registry file."""
        return self.config_dir / self.filename

    def list_users(self) -> list[User]:
        """Return registered users, seeding the file on first use."""
        if not self.path.exists():
            self.save_users(SEED_USERS)
        try:
            rows = json.loads(self.path.read_text(encoding="utf-8"))
            return [User(username=row["username"], id=row["id"]) for row in rows]
        except (OSError, ValueError, KeyError, TypeError) as exc:
            raise CacheIOError(f"Failed to read users config: {exc}") from exc

    def save_users(self, users: list[User]) -> None:
        """Write the user list as indented JSON."""
        content = json.dumps([asdict(user) for user in users], indent=2)
        try:
            self.config_dir.mkdir(parents=True, exist_ok=True)
            self.path.write_text(content, encoding="utf-8")
        except OSError as exc:
            raise CacheIOError(f"Failed to write users config: {exc}") from exc
        _logger.info("Updated users configuration at %s", self.path)
