"""
Async Research API client with aiohttp.
Node process() hooks run inside the host's event loop, so they use this one.
"""
import asyncio
import json
import logging

import aiohttp

from config import REQUEST_TIMEOUT, SCRAPE_PATH, SEARCH_PATH, USER_AGENT
from research_api.client import build_url, resolve_base_url
from research_api.errors import (
    ResearchAPIConnectionError,
    ResearchAPIResponseError,
    ResearchAPIStatusError,
)

logger = logging.getLogger(__name__)


async def fetch_json(session, url, params=None, timeout=REQUEST_TIMEOUT):
    """Fetch JSON with a single GET. Raises ResearchAPIError subclasses on failure."""
    logger.debug("GET %s params=%s", url, params)
    try:
        async with session.get(url, params=params, timeout=aiohttp.ClientTimeout(total=timeout)) as response:
            # Non-UTF-8 bodies fall through to the JSON check
            body = await response.text(errors="replace")
            if not 200 <= response.status < 300:
                raise ResearchAPIStatusError(url, response.status, body)
            try:
                payload = json.loads(body)
            except ValueError as exc:
                raise ResearchAPIResponseError(f"{url} did not return JSON: {body[:200]}") from exc
    except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
        raise ResearchAPIConnectionError(f"Network error calling {url}: {exc}") from exc

    logger.debug("Response from %s: %s", url, payload)
    return payload


class AsyncResearchClient:
    """
    Non-blocking client for the search and scrape endpoints.

    Pass an existing aiohttp session to share it; otherwise the client opens
    its own on first use and closes it in close() / on context exit.
    """

    def __init__(self, base_url=None, session=None, timeout=REQUEST_TIMEOUT):
        self.base_url = resolve_base_url(base_url)
        self.timeout = timeout
        self._session = session
        self._owns_session = session is None

    async def _get_session(self):
        if self._session is None:
            self._session = aiohttp.ClientSession(headers={"User-Agent": USER_AGENT})
        return self._session

    async def search(self, query: str) -> dict:
        session = await self._get_session()
        return await fetch_json(session, build_url(self.base_url, SEARCH_PATH), {"query": query}, self.timeout)

    async def scrape(self, url: str):
        session = await self._get_session()
        return await fetch_json(session, build_url(self.base_url, SCRAPE_PATH), {"url": url}, self.timeout)

    async def close(self):
        if self._owns_session and self._session is not None:
            await self._session.close()
            self._session = None

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.close()
