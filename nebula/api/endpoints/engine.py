from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from nebula.core.models import settings
from nebula.engine.client import TorrentEngineClient
from nebula.engine.exceptions import TorrentEngineError
from nebula.utils.http_client import http_client_manager

router = APIRouter(prefix="/engine", tags=["Engine"])


class AddTorrentBody(BaseModel):
    locator: str


async def get_engine_client():
    session = await http_client_manager.get_session()
    return TorrentEngineClient(
        session, settings.TORRENT_ENGINE_URL, timeout=settings.ENGINE_TIMEOUT
    )


def engine_error(e: TorrentEngineError):
    return HTTPException(status_code=e.status if e.status == 404 else 502, detail=e.display_message)


@router.post("/add", summary="Start a torrent on the engine")
async def add_torrent(body: AddTorrentBody):
    client = await get_engine_client()
    try:
        result = await client.add_torrent(body.locator)
    except TorrentEngineError as e:
        raise engine_error(e) from e

    result["stream_urls"] = [
        client.stream_url(result["session_id"], file.get("index", index))
        for index, file in enumerate(result["files"])
    ]
    return result


@router.get("/{session_id}/status", summary="Swarm status of an engine session")
async def status(session_id: str):
    client = await get_engine_client()
    try:
        return await client.status(session_id)
    except TorrentEngineError as e:
        raise engine_error(e) from e


@router.delete("/{session_id}", summary="Stop an engine session")
async def remove(session_id: str):
    client = await get_engine_client()
    try:
        await client.remove(session_id)
    except TorrentEngineError as e:
        raise engine_error(e) from e
    return {"status": "removed"}
