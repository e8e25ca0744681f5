"""
Web Search Client (Serper)
Raw Google results used to ground contact finding for providers that have no
built-in web-search tool.
"""
import logging
from typing import Any, Dict, List, Optional

import httpx

from prnow.modules.ai_gateway.services.completion_gateway import execute_request
from prnow.modules.ai_gateway.services.provider_adapters import ProviderHTTPRequest
from prnow.shared.core.constants import SERPER_RESULTS_PER_QUERY, SERPER_SEARCH_URL
from prnow.shared.utils.http_client import http_client_manager

logger = logging.getLogger("search_client")

NO_RESULTS_TEXT = "No search results found."


def format_search_results(results: Any) -> str:
    """
    Render Serper organic results as numbered blocks for a prompt:

        [1] Title
        Snippet
        URL: https://...
    """
    organic = results.get("organic") if isinstance(results, dict) else None
    if not isinstance(organic, list):
        return NO_RESULTS_TEXT

    blocks: List[str] = []
    for i, item in enumerate(organic, start=1):
        if not isinstance(item, dict):
            continue
        blocks.append(
            f"[{i}] {item.get('title') or ''}\n{item.get('snippet') or ''}\nURL: {item.get('link') or ''}"
        )
    return "\n\n".join(blocks) or NO_RESULTS_TEXT


class SearchClient:

    def __init__(self, client: Optional[httpx.AsyncClient] = None):
        self._client = client

    def _get_client(self) -> httpx.AsyncClient:
        return self._client or http_client_manager.get_client()

    async def search(self, api_key: str, query: str) -> Dict[str, Any]:
        """Run one query and return Serper's JSON untouched."""
        logger.info(f"Web search: {query[:80]}")
        request = ProviderHTTPRequest(
            url=SERPER_SEARCH_URL,
            headers={"X-API-KEY": api_key, "Content-Type": "application/json"},
            json={"q": query, "num": SERPER_RESULTS_PER_QUERY},
        )
        payload = await execute_request(self._get_client(), "search", request)
        return payload if isinstance(payload, dict) else {}

    async def search_text(self, api_key: str, query: str) -> str:
        return format_search_results(await self.search(api_key, query))


search_client = SearchClient()
