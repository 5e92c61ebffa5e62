from nebula.core.constants import QUALITY_720P
from nebula.scrapers.base import MarkupScraper
from nebula.scrapers.models import SearchContext
from nebula.utils.formatting import clean_cell
from nebula.utils.markup import cell_text, magnet_href
from nebula.utils.parsing import parse_number, parse_quality


class MagnetDLScraper(MarkupScraper):
    name = "MagnetDL"
    priority = 6
    default_quality = QUALITY_720P

    def text_query(self, context: SearchContext):
        return context.clean_title

    def build_url(self, query: str):
        # Browse paths look like /m/my-movie/
        slug = "-".join(query.lower().split())
        return f"{self.url}/{slug[:1]}/{slug}/"

    def select_rows(self, document):
        return document.select("table.download tbody tr")

    def parse_row(self, row):
        cells = row.find_all("td")
        if len(cells) < 8:
            return None

        magnet = magnet_href(cells[0])
        if not magnet:
            return None

        link = cells[1].find("a")
        title = (link.get("title") if link is not None else None) or "Unknown"
        return self.record(
            quality=parse_quality(title, self.default_quality),
            release_title=title,
            size=clean_cell(cell_text(cells, 5)),
            seeds=parse_number(cell_text(cells, 6)),
            peers=parse_number(cell_text(cells, 7)),
            locator=magnet,
            uploader="MDL",
            date="Recent",
        )
