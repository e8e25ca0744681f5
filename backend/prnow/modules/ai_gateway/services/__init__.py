"""
AI Gateway Services

Provider adapters, the completion gateway and the web search client.
"""

from .provider_adapters import (
    ProviderAdapter,
    ProviderHTTPRequest,
    AnthropicAdapter,
    OpenAIAdapter,
    GoogleAdapter,
    PROVIDER_ADAPTERS,
    get_adapter,
)
from .completion_gateway import CompletionGateway, completion_gateway
from .search_client import SearchClient, search_client, format_search_results

__all__ = [
    "ProviderAdapter",
    "ProviderHTTPRequest",
    "AnthropicAdapter",
    "OpenAIAdapter",
    "GoogleAdapter",
    "PROVIDER_ADAPTERS",
    "get_adapter",
    "CompletionGateway",
    "completion_gateway",
    "SearchClient",
    "search_client",
    "format_search_results",
]
