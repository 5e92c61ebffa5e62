from nebula.core.constants import QUALITY_720P, QUALITY_HD, QUALITY_UNKNOWN
from nebula.scrapers.base import BaseScraper
from nebula.scrapers.models import MediaType, SearchContext
from nebula.utils.parsing import parse_quality


def yts_quality(label: str):
    # YTS labels look like "720p", "1080p.x265", "2160p" or "3D"
    if not label:
        return QUALITY_UNKNOWN
    if "720p" in label:
        return QUALITY_720P
    return parse_quality(label, QUALITY_HD)


class YTSScraper(BaseScraper):
    name = "YTS"
    priority = 0
    media_types = (MediaType.MOVIE,)
    requires_identifier = True

    async def scrape(self, context: SearchContext):
        return await self.fetch(context.imdb_id, context)

    async def fetch(self, query: str, context: SearchContext):
        data = await self.transport.direct(
            f"{self.url}/list_movies.json?query_term={query}"
        )
        if not isinstance(data, dict):
            return []

        movies = (data.get("data") or {}).get("movies") or []
        if not movies:
            return []

        movie = movies[0]
        year = movie.get("year") or context.year

        torrents = []
        for torrent in movie.get("torrents") or []:
            label = torrent.get("quality")
            quality = yts_quality(label)
            record = self.record(
                quality=quality,
                release_title=f"{context.title}.{year}.{label or quality}.YTS.MX",
                size=torrent.get("size") or "?",
                seeds=torrent.get("seeds"),
                peers=torrent.get("peers"),
                locator=torrent.get("hash"),
                uploader="YTS.MX",
                date=torrent.get("date_uploaded"),
            )
            if record:
                torrents.append(record)

        return torrents
