from typing import Dict, List, Optional, Type

from nebula.core.logger import logger
from nebula.core.models import AppSettings, settings as default_settings
from nebula.scrapers.base import BaseScraper
from nebula.scrapers.manager import ScraperManager
from nebula.scrapers.models import MediaQuery, TorrentRecord
from nebula.services.ranking import rank_torrents
from nebula.services.torrent_manager import deduplicate
from nebula.services.trackers import enrich_trackers
from nebula.utils.http_client import http_client_manager
from nebula.utils.network import Transport
from nebula.utils.parsing import build_search_context


class TorrentAggregator:
    def __init__(
        self,
        transport: Transport,
        settings: AppSettings = None,
        scrapers: Optional[Dict[str, Type[BaseScraper]]] = None,
    ):
        self.settings = settings or default_settings
        self.scraper_manager = ScraperManager(transport, self.settings, scrapers)

    async def aggregate(self, query: MediaQuery) -> List[TorrentRecord]:
        try:
            context = build_search_context(query)
            torrents = await self.scraper_manager.scrape_all(context)

            unique_torrents = deduplicate(torrents)
            enriched_torrents = enrich_trackers(unique_torrents, self.settings.trackers)
            ranked_torrents = rank_torrents(enriched_torrents, self.settings.MAX_RESULTS)
        except Exception as e:
            logger.exception(f"Aggregation failed for '{query.title}': {e}")
            return []

        logger.log(
            "SCRAPER",
            f"Aggregated {len(ranked_torrents)} torrents for '{context.search_query}' ({len(torrents)} found, {len(unique_torrents)} unique)",
        )
        return ranked_torrents


async def aggregate(query: MediaQuery, settings: AppSettings = None):
    settings = settings or default_settings
    session = await http_client_manager.get_session()
    aggregator = TorrentAggregator(Transport(session, settings), settings)
    return await aggregator.aggregate(query)
