from urllib.parse import quote

from nebula.scrapers.base import MarkupScraper
from nebula.utils.formatting import clean_cell
from nebula.utils.markup import cell_text, magnet_href, node_text
from nebula.utils.parsing import parse_number, parse_quality


class ZooqleScraper(MarkupScraper):
    name = "Zooqle"
    priority = 11

    def build_url(self, query: str):
        return f"{self.url}/search?q={quote(query, safe='')}&s=ns&v=t&sd=d"

    def select_rows(self, document):
        return document.select("table.table-torrents tbody tr")

    def parse_row(self, row):
        title = node_text(row.select_one("td a.small"))
        magnet = magnet_href(row)
        if not title or not magnet:
            return None

        cells = row.find_all("td")
        return self.record(
            quality=parse_quality(title, self.default_quality),
            release_title=title,
            size=clean_cell(cell_text(cells, 3)),
            seeds=parse_number(cell_text(cells, 5)),
            peers=parse_number(cell_text(cells, 6)),
            locator=magnet,
            uploader="Zooqle",
            date="Recent",
        )
