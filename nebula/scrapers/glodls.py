from urllib.parse import quote

from nebula.core.constants import QUALITY_720P
from nebula.scrapers.base import MarkupScraper
from nebula.utils.formatting import clean_cell
from nebula.utils.markup import cell_text, magnet_href, node_text
from nebula.utils.parsing import parse_number, parse_quality


class GlodlsScraper(MarkupScraper):
    name = "Glodls"
    priority = 8
    default_quality = QUALITY_720P

    def build_url(self, query: str):
        return (
            f"{self.url}/search_results.php?search={quote(query, safe='')}"
            "&cat=1&incldead=0&sort=seeders&order=desc"
        )

    def select_rows(self, document):
        return document.select("table.table tbody tr")

    def parse_row(self, row):
        cells = row.find_all("td")
        if len(cells) < 7:
            return None

        title = node_text(cells[1].find("a"))
        magnet = magnet_href(row)
        if not title or not magnet:
            return None

        return self.record(
            quality=parse_quality(title, self.default_quality),
            release_title=title,
            size=clean_cell(cell_text(cells, 4)),
            seeds=parse_number(cell_text(cells, 5)),
            peers=parse_number(cell_text(cells, 6)),
            locator=magnet,
            uploader="Glodls",
            date="Recent",
        )
