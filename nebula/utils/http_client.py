import asyncio
from typing import Optional

import aiohttp

from nebula.core.models import AppSettings, settings as default_settings


def build_session(settings: AppSettings) -> aiohttp.ClientSession:
    """
    Session shared by every scraper and the engine client.

    Scraper calls are cut off earlier by ``Transport``; the session timeout
    bounds everything else (engine calls, anything without its own deadline).
    """
    connector = aiohttp.TCPConnector(
        limit=settings.HTTP_CLIENT_LIMIT or 100,
        limit_per_host=settings.HTTP_CLIENT_LIMIT_PER_HOST or 20,
        ttl_dns_cache=settings.HTTP_CLIENT_TTL_DNS_CACHE,
        keepalive_timeout=settings.HTTP_CLIENT_KEEPALIVE_TIMEOUT,
        enable_cleanup_closed=True,
    )
    return aiohttp.ClientSession(
        connector=connector,
        timeout=aiohttp.ClientTimeout(total=settings.HTTP_CLIENT_TIMEOUT_TOTAL),
        headers={"User-Agent": settings.USER_AGENT},
    )


class HttpClientManager:
    def __init__(self, settings: AppSettings = None):
        self.settings = settings or default_settings
        self._session: Optional[aiohttp.ClientSession] = None
        self._lock = asyncio.Lock()

    async def init(self) -> aiohttp.ClientSession:
        if self._session and not self._session.closed:
            return self._session

        async with self._lock:
            if not self._session or self._session.closed:
                self._session = build_session(self.settings)
            return self._session

    async def get_session(self) -> aiohttp.ClientSession:
        return await self.init()

    async def close(self) -> None:
        async with self._lock:
            if self._session and not self._session.closed:
                await self._session.close()
            self._session = None


http_client_manager = HttpClientManager()
