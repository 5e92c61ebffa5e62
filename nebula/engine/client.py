import asyncio

import aiohttp

from nebula.core.logger import logger
from nebula.engine.exceptions import TorrentEngineError, TorrentSessionNotFound


class TorrentEngineClient:
    """
    Thin client for the external torrent engine.

    The engine takes a locator, returns its own session id and file listing,
    and serves each file over HTTP. Every call is bounded by ``timeout``.
    """

    def __init__(self, session: aiohttp.ClientSession, base_url: str, timeout: float = 30.0):
        self.session = session
        self.api_url = f"{base_url.rstrip('/')}/api/torrent"
        self.timeout = timeout

    async def _json(self, response, session_id: str = None):
        if response.status == 404 and session_id is not None:
            raise TorrentSessionNotFound(session_id)

        try:
            data = await response.json(content_type=None)
        except (aiohttp.ContentTypeError, ValueError):
            data = None

        if response.status >= 400:
            error = data.get("error") if isinstance(data, dict) else None
            raise TorrentEngineError(
                f"Torrent engine returned HTTP {response.status}: {error or response.reason}",
                error,
                response.status,
            )

        return data or {}

    async def _send(self, method: str, url: str, session_id: str = None, **kwargs):
        async with getattr(self.session, method)(url, **kwargs) as response:
            return await self._json(response, session_id)

    async def _call(self, method: str, url: str, session_id: str = None, **kwargs):
        try:
            return await asyncio.wait_for(
                self._send(method, url, session_id, **kwargs), self.timeout
            )
        except asyncio.TimeoutError as e:
            logger.warning(f"Torrent engine did not answer {method.upper()} {url} within {self.timeout}s")
            raise TorrentEngineError(
                f"Torrent engine timed out after {self.timeout}s",
                "Torrent engine took too long to answer.",
            ) from e
        except aiohttp.ClientError as e:
            logger.warning(f"Exception while calling torrent engine ({method.upper()} {url}): {e}")
            raise TorrentEngineError(str(e), "Torrent engine is unreachable.") from e

    async def add_torrent(self, locator: str):
        data = await self._call("post", f"{self.api_url}/add", json={"magnet": locator})

        return {
            "session_id": str(data.get("id")),
            "info_hash": data.get("infoHash"),
            "files": data.get("files") or [],
        }

    async def status(self, session_id: str):
        data = await self._call("get", f"{self.api_url}/{session_id}/status", session_id)

        return {
            "downloaded": data.get("downloaded", 0),
            "rate": data.get("downloadSpeed", 0),
            "peer_count": data.get("peers", 0),
        }

    def stream_url(self, session_id: str, file_index: int):
        return f"{self.api_url}/{session_id}/stream/{file_index}"

    async def remove(self, session_id: str):
        await self._call("delete", f"{self.api_url}/{session_id}", session_id)
