import asyncio
import logging
import time
from typing import Optional

import httpx

from sitecarbon.core.config import settings
from sitecarbon.errors import FetchError
from .base import BaseFetcher, FetchResult

logger = logging.getLogger(__name__)

def is_http_url(url: str) -> bool:
    """True for an absolute http(s) URL with a host; the scheme is case-insensitive."""
    if not url:
        return False
    try:
        parsed = httpx.URL(url)
    except httpx.InvalidURL:
        return False
    return parsed.scheme in ("http", "https") and bool(parsed.host)

class HttpxFetcher(BaseFetcher):
    """
    Download a URL's full body with httpx and report how many bytes came back.

    One attempt per call: no retries and no caching. ``transport`` replaces the
    network layer (tests pass ``httpx.MockTransport`` or rely on respx).
    """

    def __init__(
        self,
        timeout: Optional[float] = None,
        max_redirects: Optional[int] = None,
        user_agent: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.timeout = settings.REQUEST_TIMEOUT if timeout is None else timeout
        self.max_redirects = settings.MAX_REDIRECTS if max_redirects is None else max_redirects
        self.user_agent = user_agent or settings.USER_AGENT
        self.transport = transport

    async def fetch(self, url: str) -> FetchResult:
        if not is_http_url(url):
            raise FetchError(url, f"Invalid URL: {url!r}")

        logger.info("Fetching: %s", url)
        started = time.perf_counter()
        try:
            body = await asyncio.wait_for(self._download(url), timeout=self.timeout)
        except asyncio.TimeoutError:
            raise FetchError(url, f"Timeout while fetching {url}")
        except httpx.TimeoutException:
            raise FetchError(url, f"Timeout while fetching {url}")
        except httpx.TooManyRedirects:
            raise FetchError(url, f"Too many redirects (max {self.max_redirects}) for {url}")
        except httpx.HTTPStatusError as e:
            raise FetchError(url, f"HTTP error {e.response.status_code} for {url}")
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise FetchError(url, f"Failed to fetch {url}: {str(e) or type(e).__name__}")
        elapsed_ms = (time.perf_counter() - started) * 1000

        logger.info("Fetched %s: %d bytes in %.0f ms", url, len(body), elapsed_ms)
        return FetchResult(url=url, byte_length=len(body), elapsed_millis=elapsed_ms)

    async def _download(self, url: str) -> bytes:
        async with httpx.AsyncClient(
            timeout=self.timeout,
            headers={"User-Agent": self.user_agent},
            follow_redirects=True,
            max_redirects=self.max_redirects,
            transport=self.transport,
        ) as client:
            response = await client.get(url)
            response.raise_for_status()
            return response.content
