from typing import Optional

from fastapi import APIRouter, Query

from nebula.scrapers.models import MediaQuery, MediaType
from nebula.services.orchestration import aggregate

router = APIRouter()


@router.get(
    "/torrents",
    tags=["Torrents"],
    summary="Aggregate Torrents",
    description="Searches every enabled source and returns deduplicated, tracker-enriched torrents sorted by seeders.",
)
async def torrents(
    title: str = Query(..., min_length=1),
    year: Optional[str] = None,
    type: MediaType = MediaType.MOVIE,
    imdb_id: Optional[str] = None,
):
    query = MediaQuery(title=title, year=year, media_type=type, imdb_id=imdb_id)
    results = await aggregate(query)
    return [torrent.model_dump() for torrent in results]
