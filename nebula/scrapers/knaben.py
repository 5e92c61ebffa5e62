from urllib.parse import quote

from nebula.core.constants import QUALITY_720P
from nebula.scrapers.base import MarkupScraper
from nebula.utils.formatting import clean_cell
from nebula.utils.markup import cell_text, magnet_href, node_text
from nebula.utils.parsing import parse_number, parse_quality


class KnabenScraper(MarkupScraper):
    name = "Knaben"
    priority = 5
    default_quality = QUALITY_720P

    def build_url(self, query: str):
        return f"{self.url}/search/{quote(query, safe='')}/0/1/seeders"

    def select_rows(self, document):
        return document.select("table.table-striped tbody tr")

    def parse_row(self, row):
        cells = row.find_all("td")
        if len(cells) < 5:
            return None

        magnet = magnet_href(row)
        if not magnet:
            return None

        title = node_text(cells[1].find("a"), "Unknown")
        return self.record(
            quality=parse_quality(title, self.default_quality),
            release_title=title,
            size=clean_cell(cell_text(cells, 2)),
            seeds=parse_number(cell_text(cells, 4)),
            peers=parse_number(cell_text(cells, 5)),
            locator=magnet,
            uploader=cell_text(cells, 6, "Unknown"),
            date="Recent",
        )
