import sys

from loguru import logger

from nebula.core.log_levels import CUSTOM_LOG_LEVELS, STANDARD_LOG_LEVELS
from nebula.core.models import settings


def setupLogger(level: str):
    # Configure custom log levels
    for level_name, level_config in CUSTOM_LOG_LEVELS.items():
        logger.level(
            level_name,
            no=level_config["no"],
            icon=level_config["icon"],
            color=level_config["loguru_color"],
        )

    # Configure standard log levels (override defaults)
    for level_name, level_config in STANDARD_LOG_LEVELS.items():
        logger.level(
            level_name, icon=level_config["icon"], color=level_config["loguru_color"]
        )

    log_format = (
        "<white>{time:YYYY-MM-DD}</white> <magenta>{time:HH:mm:ss}</magenta> | "
        "<level>{level.icon}</level> <level>{level}</level> | "
        "<cyan>{module}</cyan>.<cyan>{function}</cyan> - <level>{message}</level>"
    )

    logger.configure(
        handlers=[
            {
                "sink": sys.stderr,
                "level": level,
                "format": log_format,
                "backtrace": False,
                "diagnose": False,
                "enqueue": True,
            }
        ]
    )


setupLogger(settings.LOG_LEVEL)


def log_scraper_error(scraper_name: str, scraper_url: str, query: str, error: Exception):
    logger.warning(
        f"Exception while getting torrents for '{query}' with {scraper_name} ({scraper_url}), the source is most likely down or has changed its layout: {error}"
    )


def log_startup_info(settings):
    logger.log(
        "NEBULA",
        f"Server started on http://{settings.FASTAPI_HOST}:{settings.FASTAPI_PORT} - {settings.FASTAPI_WORKERS} workers",
    )
    logger.log(
        "NEBULA",
        f"Timeouts: direct={settings.DIRECT_TIMEOUT}s, relayed={settings.RELAY_TIMEOUT}s - Max Results: {settings.MAX_RESULTS}",
    )
    logger.log("NEBULA", f"Relays: {', '.join(settings.RELAY_URLS) or 'none'}")
    logger.log(
        "NEBULA",
        f"Trackers: {len(settings.WSS_TRACKERS)} WebSocket, {len(settings.UDP_TRACKERS)} UDP",
    )

    from nebula.scrapers.manager import ScraperManager

    for name in ScraperManager.discover_scrapers():
        state = "enabled" if settings.is_scraper_enabled(name) else "disabled"
        logger.log(
            "NEBULA",
            f"{name} Scraper: {state} - {settings.scraper_url(name)}",
        )

    logger.log("NEBULA", f"Torrent Engine: {settings.TORRENT_ENGINE_URL}")
