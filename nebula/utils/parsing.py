import re

from nebula.core.constants import (QUALITY_4K, QUALITY_720P, QUALITY_1080P,
                                   QUALITY_HD)
from nebula.scrapers.models import MediaQuery, MediaType, SearchContext

NON_ALNUM_PATTERN = re.compile(r"[^a-zA-Z0-9 ]")
UHD_PATTERN = re.compile(r"2160p|4k", re.IGNORECASE)
FHD_PATTERN = re.compile(r"1080p", re.IGNORECASE)
NUMBER_PATTERN = re.compile(r"\d+")


def clean_title(title: str):
    return NON_ALNUM_PATTERN.sub(" ", title or "").strip()


def build_search_context(query: MediaQuery):
    cleaned = clean_title(query.title)

    if query.media_type == MediaType.SERIES:
        qualifier = "S01"
    else:
        qualifier = query.year
    search_query = " ".join(part for part in (cleaned, qualifier) if part)

    return SearchContext(
        media_type=query.media_type,
        title=query.title,
        clean_title=cleaned,
        search_query=search_query,
        year=query.year,
        imdb_id=query.imdb_id,
    )


def parse_quality(title: str, default: str = QUALITY_720P):
    if not title:
        return default
    if UHD_PATTERN.search(title):
        return QUALITY_4K
    if FHD_PATTERN.search(title):
        return QUALITY_1080P
    return default


def parse_hd_quality(title: str):
    return parse_quality(title, QUALITY_HD)


def parse_number(value):
    """Parse counts like '1,234' or ' 12 '; anything unparsable is 0."""
    if value is None:
        return 0

    cleaned = re.sub(r"[,\s]", "", str(value))
    match = NUMBER_PATTERN.search(cleaned)
    return int(match.group(0)) if match else 0
