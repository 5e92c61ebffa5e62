from urllib.parse import quote

from nebula.scrapers.base import MarkupScraper
from nebula.utils.formatting import clean_cell
from nebula.utils.markup import cell_text, node_text
from nebula.utils.parsing import parse_hd_quality, parse_number


class BitSearchScraper(MarkupScraper):
    name = "BitSearch"
    priority = 2
    identifier_fallback = True

    def build_url(self, query: str):
        return f"{self.url}/search?q={quote(query, safe='')}"

    def select_rows(self, document):
        return document.select("li.search-result")

    def parse_row(self, row):
        title = node_text(row.select_one("h5 a"))
        link = row.select_one("a.dl-magnet")
        magnet = link.get("href") if link is not None else None
        if not title or not magnet:
            return None

        # stats: downloads, size, seeders, leechers, date
        stats = row.select(".stats div")
        return self.record(
            quality=parse_hd_quality(title),
            release_title=title,
            size=clean_cell(cell_text(stats, 1)),
            seeds=parse_number(cell_text(stats, 2)),
            peers=parse_number(cell_text(stats, 3)),
            locator=magnet,
            uploader="DHT",
            date="Recent",
        )
