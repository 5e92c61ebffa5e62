from nebula.core.constants import QUALITY_HD
from nebula.scrapers.base import BaseScraper
from nebula.scrapers.models import MediaType, SearchContext
from nebula.utils.formatting import format_megabytes


class EZTVScraper(BaseScraper):
    name = "EZTV"
    priority = 1
    media_types = (MediaType.SERIES,)
    requires_identifier = True

    async def scrape(self, context: SearchContext):
        return await self.fetch(context.imdb_id, context)

    async def fetch(self, query: str, context: SearchContext):
        imdb_numeric = query.removeprefix("tt")
        data = await self.transport.relayed(
            f"{self.url}/get-torrents?imdb_id={imdb_numeric}"
        )
        if not isinstance(data, dict):
            return []

        torrents = []
        for torrent in data.get("torrents") or []:
            record = self.record(
                quality=QUALITY_HD,
                release_title=torrent.get("title") or torrent.get("filename"),
                size=format_megabytes(torrent.get("size_bytes")),
                seeds=torrent.get("seeds"),
                peers=torrent.get("peers"),
                locator=torrent.get("magnet_url"),
                uploader="EZTV",
                date="Recent",
            )
            if record:
                torrents.append(record)

        return torrents
