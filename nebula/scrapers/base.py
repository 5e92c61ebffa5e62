from abc import ABC, abstractmethod
from typing import List, Optional

from pydantic import ValidationError

from nebula.core.constants import QUALITY_HD
from nebula.core.logger import log_scraper_error, logger
from nebula.scrapers.models import MediaType, SearchContext, TorrentRecord
from nebula.utils.markup import parse_html
from nebula.utils.network import Transport

ALL_MEDIA_TYPES = (MediaType.MOVIE, MediaType.SERIES, MediaType.ANIME)


class BaseScraper(ABC):
    name: str = None
    media_types = ALL_MEDIA_TYPES
    requires_identifier = False
    identifier_fallback = False
    priority = 100

    def __init__(self, manager, transport: Transport, url: str = None):
        self.manager = manager
        self.transport = transport
        self.url = url

    def supports(self, context: SearchContext):
        if context.media_type not in self.media_types:
            return False
        if self.requires_identifier and not context.imdb_id:
            return False
        return True

    def text_query(self, context: SearchContext):
        return context.search_query

    async def search(self, context: SearchContext) -> List[TorrentRecord]:
        try:
            return await self.scrape(context)
        except Exception as e:
            log_scraper_error(self.name, self.url, context.search_query, e)
            return []

    async def scrape(self, context: SearchContext) -> List[TorrentRecord]:
        if self.identifier_fallback and context.imdb_id:
            torrents = await self.fetch(context.imdb_id, context)
            if torrents:
                return torrents

            logger.debug(
                f"{self.name} found nothing for {context.imdb_id}, retrying with '{self.text_query(context)}'"
            )

        return await self.fetch(self.text_query(context), context)

    @abstractmethod
    async def fetch(self, query: str, context: SearchContext) -> List[TorrentRecord]:
        pass

    def record(self, **fields) -> Optional[TorrentRecord]:
        if not fields.get("locator"):
            return None
        try:
            return TorrentRecord(source=self.name, **fields)
        except ValidationError as e:
            logger.debug(f"Dropping malformed {self.name} torrent: {e}")
            return None


class MarkupScraper(BaseScraper):
    """
    Scraper for sources that only publish an HTML search page.

    Rows are located with ``select_rows`` and read one at a time by
    ``parse_row``; a row that fails to parse is skipped without affecting the
    rest of the page.
    """

    default_quality = QUALITY_HD

    def __init__(
        self, manager, transport: Transport, url: str = None, markup_parser=parse_html
    ):
        super().__init__(manager, transport, url)
        self.markup_parser = markup_parser

    @abstractmethod
    def build_url(self, query: str) -> str:
        pass

    @abstractmethod
    def select_rows(self, document) -> list:
        pass

    @abstractmethod
    def parse_row(self, row) -> Optional[TorrentRecord]:
        pass

    async def fetch(self, query: str, context: SearchContext):
        html = await self.transport.relayed(self.build_url(query), as_json=False)
        if not html:
            return []

        return self.parse(self.markup_parser(html))

    def parse(self, document) -> List[TorrentRecord]:
        torrents = []
        for row in self.select_rows(document):
            try:
                torrent = self.parse_row(row)
            except Exception as e:
                logger.debug(f"Skipping unparsable {self.name} row: {e}")
                continue

            if torrent is not None:
                torrents.append(torrent)

        return torrents
