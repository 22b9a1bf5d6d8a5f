"""
Synchronous Research API client, used by the command line.
One GET per call: no retries, no pagination.
"""
import logging
from typing import Optional

import requests
from requests import Response
from requests.exceptions import RequestException

from config import BASE_URL, REQUEST_TIMEOUT, SCRAPE_PATH, SEARCH_PATH, USER_AGENT
from research_api.errors import (
    ResearchAPIConnectionError,
    ResearchAPIResponseError,
    ResearchAPIStatusError,
)

logger = logging.getLogger(__name__)


def resolve_base_url(base_url: Optional[str] = None) -> str:
    """Return the base URL to use, falling back to the configured default."""
    return (base_url or BASE_URL).rstrip("/")


def build_url(base_url: Optional[str], path: str) -> str:
    """Join a base URL and an endpoint path."""
    return f"{resolve_base_url(base_url)}{path}"


class ResearchAPIClient:
    """Blocking client for the search and scrape endpoints."""

    def __init__(self, base_url=None, session=None, timeout=REQUEST_TIMEOUT):
        self.base_url = resolve_base_url(base_url)
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": USER_AGENT})

    def search(self, query: str) -> dict:
        """Run a web search. Returns the decoded JSON payload."""
        return self.get_json(SEARCH_PATH, {"query": query})

    def scrape(self, url: str):
        """Scrape a page through the API. Returns the decoded JSON payload."""
        return self.get_json(SCRAPE_PATH, {"url": url})

    def get_json(self, path: str, params: dict):
        url = build_url(self.base_url, path)
        logger.debug("GET %s params=%s", url, params)

        try:
            response: Response = self.session.get(url, params=params, timeout=self.timeout)
        except RequestException as exc:
            raise ResearchAPIConnectionError(f"Network error calling {url}: {exc}") from exc

        if not 200 <= response.status_code < 300:
            raise ResearchAPIStatusError(url, response.status_code, response.text)

        try:
            payload = response.json()
        except ValueError as exc:
            raise ResearchAPIResponseError(f"{url} did not return JSON: {response.text[:200]}") from exc

        logger.debug("Response from %s: %s", url, payload)
        return payload

    def close(self):
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()
