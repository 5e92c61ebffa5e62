from urllib.parse import quote

from nebula.core.constants import QUALITY_UNKNOWN
from nebula.scrapers.base import BaseScraper
from nebula.scrapers.models import SearchContext
from nebula.utils.formatting import format_megabytes


class SolidTorrentsScraper(BaseScraper):
    name = "Solid"
    priority = 4

    async def fetch(self, query: str, context: SearchContext):
        data = await self.transport.relayed(
            f"{self.url}/search?q={quote(query, safe='')}&category=Video"
        )
        if not isinstance(data, dict):
            return []

        torrents = []
        for torrent in data.get("results") or []:
            swarm = torrent.get("swarm") or {}
            record = self.record(
                quality=QUALITY_UNKNOWN,
                release_title=torrent.get("title"),
                size=format_megabytes(torrent.get("size")),
                seeds=swarm.get("seeders"),
                peers=swarm.get("leechers"),
                locator=torrent.get("magnet"),
                uploader="Solid",
                date=torrent.get("imported"),
            )
            if record:
                torrents.append(record)

        return torrents
