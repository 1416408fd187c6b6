"""JSON file store for scraped diary entries."""

import json
from dataclasses import asdict, dataclass
from datetime import date
from pathlib import Path

from fatsecret_scraper.domain.diary import DiaryEntry, FoodItem, MealData
from fatsecret_scraper.domain.errors import CacheIOError
from fatsecret_scraper.domain.models import DiaryRecord, User
from fatsecret_scraper.services.diary import DiaryCache


@dataclass
class JsonDiaryCache(DiaryCache):
    """One ``<username>_<YYYY-MM-DD>.json`` file per user and day."""

    output_dir: Path

    def path_for(self, username: str, day: date) -> Path:
        """Return the cache file path for a user and day."""
        path = self.output_dir / f"{username}_{day.isoformat()}.json"
        if path.resolve().parent != self.output_dir.resolve():
            raise CacheIOError(
                f"Cache path for {username!r} leaves {self.output_dir}"
            )
        return path

    def ensure_directory(self) -> None:
        """Create the output directory if needed."""
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise CacheIOError(
                f"Failed to create output directory {self.output_dir}: {exc}"
            ) from exc

    def load(self, username: str, day: date) -> DiaryRecord | None:
        """Return the cached record, treating unreadable files as a miss."""
        try:
            payload = self.read_raw(username, day)
        except CacheIOError:
            return None
        if payload is None:
            return None
        try:
            record = parse_record(payload)
        except (KeyError, TypeError, AttributeError):
            return None
        if record.entry.is_empty:
            return None
        return record

    def save(self, record: DiaryRecord, day: date) -> Path:
        """Write a record as indented JSON and return the file path."""
        path = self.path_for(record.user.username, day)
        content = json.dumps(asdict(record), indent=2, ensure_ascii=False)
        try:
            path.write_text(content, encoding="utf-8")
        except OSError as exc:
            raise CacheIOError(
                f"Failed to write JSON file for {record.user.username}: {exc}"
            ) from exc
        return path

    def read_raw(self, username: str, day: date) -> dict[str, object] | None:
        """Return the stored JSON object for a user and day, if present."""
        return self._read(self.path_for(username, day))

    def latest(self, username: str) -> dict[str, object] | None:
        """Return the stored JSON object of the user's most recent day."""
        days: list[date] = []
        prefix = f"{username}_"
        for path in self.output_dir.glob("*.json"):
            if not path.stem.startswith(prefix):
                continue
            suffix = path.stem[len(prefix) :]
            try:
                days.append(date.fromisoformat(suffix))
            except ValueError:
                continue
        if not days:
            return None
        return self.read_raw(username, max(days))

    def _read(self, path: Path) -> dict[str, object] | None:
        if not path.exists():
            return None
        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise CacheIOError(f"Failed to read {path}: {exc}") from exc
        if not isinstance(payload, dict):
            raise CacheIOError(f"Unexpected content in {path}")
        return payload


def parse_record(payload: dict[str, object]) -> DiaryRecord:
    """Build a diary record from its JSON representation."""
    user = payload["user"]
    entry = payload["entry"]
    if "username" not in user or "id" not in user:
        raise KeyError("user")
    return DiaryRecord(
        user=User(username=_text(user, "username"), id=_text(user, "id")),
        entry=_parse_entry(entry),
    )


def _parse_entry(row: dict[str, object]) -> DiaryEntry:
    return DiaryEntry(
        date=_text(row, "date"),
        calories=_text(row, "calories"),
        idr=_text(row, "idr"),
        fat=_text(row, "fat"),
        protein=_text(row, "protein"),
        carbs=_text(row, "carbs"),
        timestamp=_text(row, "timestamp"),
        meals=[_parse_meal(meal) for meal in row.get("meals") or []],
    )


def _parse_meal(row: dict[str, object]) -> MealData:
    return MealData(
        name=_text(row, "name"),
        fat=_text(row, "fat"),
        carbs=_text(row, "carbs"),
        protein=_text(row, "protein"),
        calories=_text(row, "calories"),
        items=[_parse_item(item) for item in row.get("items") or []],
    )


def _parse_item(row: dict[str, object]) -> FoodItem:
    return FoodItem(
        name=_text(row, "name"),
        quantity=_text(row, "quantity"),
        fat=_text(row, "fat"),
        carbs=_text(row, "carbs"),
        protein=_text(row, "protein"),
        calories=_text(row, "calories"),
    )


def _text(row: dict[str, object], key: str) -> str:
    value = row.get(key, "")
    if not isinstance(value, str):
        raise TypeError(f"{key} must be a string, got {type(value).__name__}")
    return value
