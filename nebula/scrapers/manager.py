import asyncio
import importlib
import inspect
import os
import pkgutil
from typing import Dict, List, Optional, Type

from nebula.core.logger import logger
from nebula.core.models import AppSettings, settings as default_settings
from nebula.scrapers.base import BaseScraper, MarkupScraper
from nebula.scrapers.models import SearchContext, TorrentRecord
from nebula.utils.network import Transport


class ScraperManager:
    def __init__(
        self,
        transport: Transport,
        settings: AppSettings = None,
        scrapers: Optional[Dict[str, Type[BaseScraper]]] = None,
    ):
        self.transport = transport
        self.settings = settings or default_settings
        self.scrapers = scrapers if scrapers is not None else self.discover_scrapers()

    @staticmethod
    def discover_scrapers() -> Dict[str, Type[BaseScraper]]:
        """
        Dynamically discover and load scraper classes from the scrapers directory.

        The registry is keyed by module name, which is also the suffix of the
        matching ``SCRAPE_<NAME>`` / ``<NAME>_URL`` settings, and ordered by
        scraper priority so that earlier sources win deduplication ties.
        """
        package = "nebula.scrapers"
        path = os.path.dirname(__file__)
        scrapers = {}

        for _, module_name, _ in pkgutil.iter_modules([path]):
            if module_name in ["base", "manager", "models"]:
                continue

            module = importlib.import_module(f"{package}.{module_name}")

            for _, obj in inspect.getmembers(module):
                if (
                    inspect.isclass(obj)
                    and issubclass(obj, BaseScraper)
                    and obj not in (BaseScraper, MarkupScraper)
                    and obj.__module__ == module.__name__
                ):
                    scrapers[module_name] = obj

        return dict(sorted(scrapers.items(), key=lambda item: item[1].priority))

    def build_scrapers(self, context: SearchContext) -> List[BaseScraper]:
        scrapers = []
        for key, scraper_class in self.scrapers.items():
            if not self.settings.is_scraper_enabled(key):
                logger.debug(f"SCRAPE_{key.upper()} is off, skipping {key}")
                continue

            scraper = scraper_class(self, self.transport, self.settings.scraper_url(key))
            if not scraper.supports(context):
                continue

            scrapers.append(scraper)

        return scrapers

    async def _scrape_wrapper(self, scraper: BaseScraper, context: SearchContext):
        try:
            torrents = await scraper.search(context)
        except Exception as e:
            logger.warning(f"Scraper {scraper.name} failed: {e}")
            return []

        logger.log("SCRAPER", f"Scraper {scraper.name} found {len(torrents)} torrents.")
        return torrents

    async def scrape_all(self, context: SearchContext) -> List[TorrentRecord]:
        scrapers = self.build_scrapers(context)
        if not scrapers:
            return []

        results = await asyncio.gather(
            *(self._scrape_wrapper(scraper, context) for scraper in scrapers)
        )

        return [torrent for torrents in results for torrent in torrents]
