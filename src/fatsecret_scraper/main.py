"""Command-line entrypoint running a single scrape."""

import argparse
import asyncio
import logging
import sys
from datetime import date

from fatsecret_scraper.app_logging import configure_logging
from fatsecret_scraper.containers import build_container
from fatsecret_scraper.domain.diary import DiaryEntry
from fatsecret_scraper.domain.errors import AuthenticationFailure


def format_entry(username: str, entry: DiaryEntry) -> str:
    """Format a diary entry as a short plain-text summary."""
    lines = [
        f"----- Food diary for {username} ({entry.date}) -----",
        f"Calories: {entry.calories}",
        f"IDR: {entry.idr}",
        f"Fat: {entry.fat} g",
        f"Protein: {entry.protein} g",
        f"Carbs: {entry.carbs} g",
        "Meal summary:",
    ]
    lines.extend(
        f"- {meal.name}: {meal.calories} cal, {len(meal.items)} items"
        for meal in entry.meals
    )
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    """Scrape the registered users and print what was retrieved."""
    parser = argparse.ArgumentParser(description="Scrape FatSecret food diaries.")
    parser.add_argument(
        "--date",
        type=date.fromisoformat,
        default=None,
        help="Day to scrape (YYYY-MM-DD); defaults to the last days.",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log cache hits and misses."
    )
    args = parser.parse_args(argv)

    configure_logging(logging.DEBUG if args.verbose else logging.INFO)
    container = build_container()
    credentials = container.settings.credentials()
    if credentials is None:
        print("FatSecret credentials not configured", file=sys.stderr)
        return 1

    username, password = credentials
    try:
        entries = asyncio.run(
            container.scrape_service.scrape_registered(username, password, args.date)
        )
    except AuthenticationFailure as exc:
        print(f"Login failed: {exc}", file=sys.stderr)
        return 1

    for name, user_entries in entries.items():
        for entry in user_entries:
            print(format_entry(name, entry))
            print()
    print(f"Summary: Retrieved entries for {len(entries)} users")
    print(f"JSON files saved in the '{container.settings.output_dir}' directory")
    return 0


if __name__ == "__main__":
    sys.exit(main())
