from urllib.parse import quote

from nebula.core.constants import QUALITY_UNKNOWN
from nebula.scrapers.base import BaseScraper
from nebula.scrapers.models import SearchContext
from nebula.utils.formatting import format_megabytes

NO_RESULTS_NAME = "No results returned"
EMPTY_HASH = "0" * 40


class ApibayScraper(BaseScraper):
    name = "TPB"
    priority = 3
    identifier_fallback = True

    async def fetch(self, query: str, context: SearchContext):
        data = await self.transport.relayed(f"{self.url}/q.php?q={quote(query, safe='')}")
        if not isinstance(data, list) or not data:
            return []

        if data[0].get("name") == NO_RESULTS_NAME:
            return []

        torrents = []
        for torrent in data:
            info_hash = torrent.get("info_hash")
            if not info_hash or info_hash == EMPTY_HASH:
                continue

            name = torrent.get("name") or info_hash
            record = self.record(
                quality=QUALITY_UNKNOWN,
                release_title=name,
                size=format_megabytes(torrent.get("size")),
                seeds=torrent.get("seeders"),
                peers=torrent.get("leechers"),
                locator=f"magnet:?xt=urn:btih:{info_hash}&dn={quote(name, safe='')}",
                uploader=torrent.get("username"),
                date="Recent",
            )
            if record:
                torrents.append(record)

        return torrents
