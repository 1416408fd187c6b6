"""ASGI entrypoint for the diary scraper API."""

from fatsecret_scraper.api.app import create_app
from fatsecret_scraper.containers import build_container

app = create_app(build_container())
