from urllib.parse import quote

from nebula.scrapers.base import MarkupScraper
from nebula.utils.formatting import clean_cell
from nebula.utils.markup import cell_text, magnet_href, node_text
from nebula.utils.parsing import parse_number, parse_quality


class TorrentFunkScraper(MarkupScraper):
    name = "TorrentFunk"
    priority = 9

    def build_url(self, query: str):
        return f"{self.url}/all/torrents/{quote(query, safe='')}.html"

    def select_rows(self, document):
        return document.select("table tr:not(:first-child)")

    def parse_row(self, row):
        cells = row.find_all("td")
        if len(cells) < 6:
            return None

        title = node_text(cells[0].find("a"))
        magnet = magnet_href(row)
        if not title or not magnet:
            return None

        return self.record(
            quality=parse_quality(title, self.default_quality),
            release_title=title,
            size=clean_cell(cell_text(cells, 1)),
            seeds=parse_number(cell_text(cells, 4)),
            peers=parse_number(cell_text(cells, 5)),
            locator=magnet,
            uploader="TorrentFunk",
            date=cell_text(cells, 2, "Recent"),
        )
