"""
HTTP Adapter

Implements DocumentSource port with httpx, throttled so SEC.gov sees at most
one request per min_interval from this process.
"""
import asyncio
import logging
import time
from typing import Callable, Optional

import httpx

from ..core.errors import FetchError
from ..core.ports import DocumentSource

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 60.0


class RequestThrottle:
    """
    Minimum spacing between request starts, shared by every caller.

    Callers reserve the next free slot under the lock and then sleep outside
    it, so waiting callers never block each other from queueing.
    """

    def __init__(self, min_interval: float = 0.2, clock: Callable[[], float] = time.monotonic):
        if min_interval < 0:
            raise ValueError("min_interval must be >= 0")
        self.min_interval = min_interval
        self._clock = clock
        self._next_slot: Optional[float] = None
        self._lock = asyncio.Lock()

    async def reserve(self) -> float:
        """Claim a slot and return how long to wait for it"""
        async with self._lock:
            now = self._clock()
            slot = now if self._next_slot is None else max(now, self._next_slot)
            self._next_slot = slot + self.min_interval
        return slot - now

    async def wait(self) -> None:
        delay = await self.reserve()
        if delay > 0:
            await asyncio.sleep(delay)


class HttpFetcher(DocumentSource):
    """EDGAR document fetcher using httpx"""

    def __init__(
        self,
        user_agent: str,
        throttle: Optional[RequestThrottle] = None,
        timeout: float = DEFAULT_TIMEOUT,
        client: Optional[httpx.AsyncClient] = None
    ):
        if not user_agent or not user_agent.strip():
            raise ValueError("A descriptive User-Agent is required by SEC.gov (e.g. 'Name email@example.com')")
        self.user_agent = user_agent.strip()
        self.throttle = throttle or RequestThrottle()
        self._client = client or httpx.AsyncClient(timeout=timeout, follow_redirects=True)

    async def fetch(self, url: str) -> bytes:
        """GET a URL after waiting for the throttle; non-2xx raises FetchError"""
        await self.throttle.wait()
        logger.debug(f"GET {url}")

        try:
            response = await self._client.get(
                url,
                headers={"User-Agent": self.user_agent, "Accept-Encoding": "gzip, deflate"}
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            if status == 429:
                raise FetchError(
                    f"Rate limited by SEC.gov (HTTP 429) for {url}. Increase the request interval.",
                    url, status
                ) from e
            raise FetchError(f"HTTP {status} for {url}", url, status) from e
        except httpx.TimeoutException as e:
            raise FetchError(f"Timeout fetching {url}: {e}", url) from e
        except httpx.HTTPError as e:
            raise FetchError(f"Failed to fetch {url}: {e}", url) from e

        return response.content

    async def aclose(self) -> None:
        await self._client.aclose()
