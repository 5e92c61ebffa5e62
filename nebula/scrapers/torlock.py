from urllib.parse import quote

from nebula.scrapers.base import MarkupScraper
from nebula.utils.formatting import clean_cell
from nebula.utils.markup import cell_text, magnet_href, node_text
from nebula.utils.parsing import parse_number, parse_quality


class TorlockScraper(MarkupScraper):
    name = "Torlock"
    priority = 10

    def build_url(self, query: str):
        return f"{self.url}/all/torrents/{quote(query, safe='')}.html?sort=seeds&order=desc"

    def select_rows(self, document):
        return document.select("table tr:not(:first-child)")

    def parse_row(self, row):
        cells = row.find_all("td")
        if len(cells) < 7:
            return None

        title = node_text(cells[0].find("a"))
        magnet = magnet_href(row)
        if not title or not magnet:
            return None

        return self.record(
            quality=parse_quality(title, self.default_quality),
            release_title=title,
            size=clean_cell(cell_text(cells, 2)),
            seeds=parse_number(cell_text(cells, 3)),
            peers=parse_number(cell_text(cells, 4)),
            locator=magnet,
            uploader=cell_text(cells, 5, "Torlock"),
            date=cell_text(cells, 1, "Recent"),
        )
