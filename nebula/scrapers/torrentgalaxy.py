from urllib.parse import quote

from nebula.scrapers.base import MarkupScraper
from nebula.utils.formatting import clean_cell
from nebula.utils.markup import magnet_href, node_text
from nebula.utils.parsing import parse_number, parse_quality


class TorrentGalaxyScraper(MarkupScraper):
    name = "TGX"
    priority = 12

    def build_url(self, query: str):
        return f"{self.url}/torrents.php?search={quote(query, safe='')}&sort=seeders&order=desc"

    def select_rows(self, document):
        return document.select("div.tgxtablerow")

    def parse_row(self, row):
        magnet = magnet_href(row)
        if not magnet:
            return None

        link = row.select_one("div.tgxtablecell a[title]")
        title = (link.get("title") if link is not None else None) or "Unknown"
        return self.record(
            quality=parse_quality(title, self.default_quality),
            release_title=title,
            size=clean_cell(node_text(row.select_one("span.badge.badge-secondary"))),
            seeds=parse_number(node_text(row.select_one('font[color="green"] b'))),
            peers=parse_number(node_text(row.select_one('font[color="#ff0000"] b'))),
            locator=magnet,
            uploader="TGX",
            date="Recent",
        )
