import asyncio

import aiohttp
import orjson

from nebula.core.logger import logger
from nebula.core.models import AppSettings, settings as default_settings
from nebula.utils.proxy import build_relay_url


class UpstreamStatusError(Exception):
    def __init__(self, url: str, status: int):
        self.url = url
        self.status = status
        super().__init__(f"HTTP {status} from {url}")


FETCH_ERRORS = (UpstreamStatusError, aiohttp.ClientError, asyncio.TimeoutError, ValueError)


class Transport:
    """
    The two ways an adapter reaches its upstream.

    ``direct`` is a single bounded call to an origin that allows being called
    from here; ``relayed`` walks the configured relay list in order until one
    answers. Both return ``None`` instead of raising when no data came back.
    """

    def __init__(self, session: aiohttp.ClientSession, settings: AppSettings = None):
        self.session = session
        self.settings = settings or default_settings

    async def _get(self, url: str, timeout: float, as_json: bool, headers: dict = None):
        return await asyncio.wait_for(self._request(url, as_json, headers), timeout)

    async def _request(self, url: str, as_json: bool, headers: dict = None):
        async with self.session.get(url, headers=headers) as response:
            if response.status < 200 or response.status >= 300:
                raise UpstreamStatusError(url, response.status)

            body = await response.text()
            if as_json:
                return orjson.loads(body)
            return body

    async def direct(self, url: str, as_json: bool = True, headers: dict = None):
        try:
            return await self._get(url, self.settings.DIRECT_TIMEOUT, as_json, headers)
        except FETCH_ERRORS as e:
            logger.debug(f"Direct fetch failed for {url}: {e}")
            return None

    async def relayed(self, url: str, as_json: bool = True):
        loop = asyncio.get_running_loop()
        deadline = loop.time() + self.settings.RELAY_TIMEOUT

        for relay in self.settings.RELAY_URLS:
            remaining = deadline - loop.time()
            if remaining <= 0:
                logger.log("RELAY", f"Relay budget exhausted for {url}")
                break

            target = build_relay_url(relay, url)
            try:
                return await self._get(target, remaining, as_json)
            except FETCH_ERRORS as e:
                logger.log("RELAY", f"Relay {relay} failed for {url}: {e}")
                continue

        return None
