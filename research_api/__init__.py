"""
Research API client.
Thin wrappers over the companion service's search and scrape endpoints.
"""
from research_api.errors import (
    ResearchAPIError,
    ResearchAPIConnectionError,
    ResearchAPIStatusError,
    ResearchAPIResponseError,
)
from research_api.client import ResearchAPIClient, build_url, resolve_base_url
from research_api.async_client import AsyncResearchClient

__all__ = [
    "ResearchAPIError",
    "ResearchAPIConnectionError",
    "ResearchAPIStatusError",
    "ResearchAPIResponseError",
    "ResearchAPIClient",
    "AsyncResearchClient",
    "build_url",
    "resolve_base_url",
]
