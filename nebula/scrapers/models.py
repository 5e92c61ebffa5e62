from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, field_validator

from nebula.core.constants import QUALITY_UNKNOWN

Quality = Literal["4K", "1080p", "720p", "HD", "Unknown"]


class MediaType(str, Enum):
    MOVIE = "movie"
    SERIES = "series"
    ANIME = "anime"


class MediaQuery(BaseModel):
    title: str
    year: Optional[str] = None
    media_type: MediaType = MediaType.MOVIE
    imdb_id: Optional[str] = None  # e.g. "tt1234567"

    @field_validator("year", "imdb_id", mode="before")
    def blank_to_none(cls, v):
        if v is None:
            return None
        v = str(v).strip()
        return v or None


class SearchContext(BaseModel):
    media_type: MediaType
    title: str
    clean_title: str
    search_query: str
    year: Optional[str] = None
    imdb_id: Optional[str] = None


class TorrentRecord(BaseModel):
    source: str
    quality: Quality = QUALITY_UNKNOWN
    release_title: Optional[str] = None
    size: str = "?"
    seeds: int = 0
    peers: int = 0
    locator: str
    uploader: Optional[str] = None
    date: Optional[str] = None

    @field_validator("seeds", "peers", mode="before")
    def coerce_count(cls, v):
        try:
            v = int(float(str(v).replace(",", "").strip()))
        except (TypeError, ValueError, OverflowError):
            return 0
        return max(v, 0)

    @field_validator("locator")
    def locator_not_empty(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("locator must not be empty")
        return v
