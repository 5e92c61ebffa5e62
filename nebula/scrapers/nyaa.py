from urllib.parse import quote

from nebula.core.constants import QUALITY_720P
from nebula.core.logger import logger
from nebula.scrapers.base import BaseScraper
from nebula.scrapers.models import MediaType, SearchContext
from nebula.utils.formatting import clean_cell
from nebula.utils.markup import parse_xml
from nebula.utils.parsing import parse_number, parse_quality


def child_text(item, name: str):
    # Nyaa publishes its extra fields under the nyaa: namespace
    for child in item:
        if child.tag.rsplit("}", 1)[-1] == name:
            text = (child.text or "").strip()
            return text or None
    return None


class NyaaScraper(BaseScraper):
    name = "Nyaa"
    priority = 7
    media_types = (MediaType.ANIME,)

    def __init__(self, manager, transport, url: str = None, feed_parser=parse_xml):
        super().__init__(manager, transport, url)
        self.feed_parser = feed_parser

    def text_query(self, context: SearchContext):
        return context.clean_title

    async def fetch(self, query: str, context: SearchContext):
        xml_text = await self.transport.relayed(
            f"{self.url}/?page=rss&q={quote(query, safe='')}", as_json=False
        )
        if not xml_text or not xml_text.strip():
            return []

        return self.parse_items(self.feed_parser(xml_text))

    def parse_items(self, root):
        torrents = []
        for item in root.iter("item"):
            try:
                title = child_text(item, "title") or "Unknown"
                locator = (
                    child_text(item, "magnet")
                    or child_text(item, "infoHash")
                    or child_text(item, "link")
                )

                record = self.record(
                    quality=parse_quality(title, QUALITY_720P),
                    release_title=title,
                    size=clean_cell(child_text(item, "size")),
                    seeds=parse_number(child_text(item, "seeders")),
                    peers=parse_number(child_text(item, "leechers")),
                    locator=locator,
                    uploader="Anime",
                    date=child_text(item, "pubDate") or "Recent",
                )
                if record:
                    torrents.append(record)
            except Exception as e:
                logger.warning(f"Error parsing torrent item from Nyaa: {e}")
                continue

        return torrents
