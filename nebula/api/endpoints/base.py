from fastapi import APIRouter

from nebula.core.models import settings
from nebula.scrapers.manager import ScraperManager

router = APIRouter()


@router.get(
    "/health",
    tags=["General"],
    summary="Health Check",
    description="Returns the health status of the application.",
)
async def health():
    return {"status": "ok"}


@router.get(
    "/scrapers",
    tags=["General"],
    summary="Scraper Registry",
    description="Lists every known source and whether it is enabled.",
)
async def scrapers():
    return [
        {
            "key": key,
            "name": scraper_class.name,
            "enabled": settings.is_scraper_enabled(key),
            "url": settings.scraper_url(key),
            "media_types": [media_type.value for media_type in scraper_class.media_types],
            "requires_identifier": scraper_class.requires_identifier,
        }
        for key, scraper_class in ScraperManager.discover_scrapers().items()
    ]
