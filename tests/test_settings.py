from nebula.core.models import DEFAULT_RELAY_URLS, AppSettings


def test_defaults_cover_every_scraper():
    settings = AppSettings(_env_file=None)

    assert settings.RELAY_URLS == DEFAULT_RELAY_URLS
    assert settings.MAX_RESULTS == 50
    assert settings.DIRECT_TIMEOUT > settings.RELAY_TIMEOUT
    assert settings.is_scraper_enabled("yts")
    assert settings.scraper_url("nyaa") == "https://nyaa.si"


def test_lists_are_read_from_comma_separated_env(monkeypatch):
    monkeypatch.setenv("RELAY_URLS", "https://relay-a.test/?, https://relay-b.test/get?u={URL}")
    monkeypatch.setenv("WSS_TRACKERS", "wss://a.test")
    monkeypatch.setenv("UDP_TRACKERS", "")

    settings = AppSettings(_env_file=None)

    assert settings.RELAY_URLS == [
        "https://relay-a.test/?",
        "https://relay-b.test/get?u={URL}",
    ]
    assert settings.trackers == ["wss://a.test"]


def test_scrapers_can_be_disabled_from_env(monkeypatch):
    monkeypatch.setenv("SCRAPE_TORLOCK", "false")

    settings = AppSettings(_env_file=None)

    assert not settings.is_scraper_enabled("torlock")
    assert settings.is_scraper_enabled("zooqle")


def test_unknown_scrapers_default_to_enabled():
    assert AppSettings(_env_file=None).is_scraper_enabled("somethingnew")


def test_base_urls_lose_trailing_slash():
    settings = AppSettings(_env_file=None, KNABEN_URL="https://knaben.example/")

    assert settings.KNABEN_URL == "https://knaben.example"


def test_tracker_list_drops_repeated_entries():
    settings = AppSettings(
        _env_file=None,
        WSS_TRACKERS=["wss://a.test", "wss://a.test"],
        UDP_TRACKERS=["udp://b.test:80", "wss://a.test"],
    )

    assert settings.trackers == ["wss://a.test", "udp://b.test:80"]
