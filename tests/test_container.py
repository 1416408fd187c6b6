"""Tests for container wiring."""

from fatsecret_scraper.containers import build_container


def test_build_container_creates_services(settings) -> None:
    container = build_container(settings)

    assert container.diary_cache.output_dir == settings.output_dir
    assert container.scrape_service.days == 3
    assert container.scrape_service.resolver.cache is container.diary_cache
    assert container.scrape_service.user_service is container.user_service


def test_settings_build_site_and_credentials(settings) -> None:
    site = settings.site()

    assert site.login_url == "https://www.fatsecret.com.br/Auth.aspx?pa=s"
    assert site.diary_url == "https://www.fatsecret.com.br/Diary.aspx"
    assert settings.credentials() == ("login@example.com", "secret")
    without_password = settings.model_copy(update={"fatsecret_password": None})
    assert without_password.credentials() is None
