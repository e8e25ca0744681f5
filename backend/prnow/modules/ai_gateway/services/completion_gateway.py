"""
Completion Gateway
Single entry point for "give me text for this prompt" across all providers.

Pure dispatch:
- picks the adapter for config.provider (unknown provider -> error, no I/O)
- sends the adapter's request on the shared pooled client
- non-2xx -> ProviderHTTPError, network failure -> ProviderTransportError

No caching, no retries, no timeouts beyond the shared client's defaults.
"""
import logging
from typing import Any, Optional

import httpx

from prnow.modules.ai_gateway.models import AIConfig, CompletionOptions, CompletionRequest
from prnow.modules.ai_gateway.services.provider_adapters import ProviderHTTPRequest, get_adapter
from prnow.shared.utils.exceptions import (
    ProviderHTTPError,
    ProviderTransportError,
    UnsupportedProviderError,
)
from prnow.shared.utils.http_client import http_client_manager
from prnow.shared.utils.json_utils import safe_json_parse

logger = logging.getLogger("completion_gateway")


async def execute_request(
    client: httpx.AsyncClient,
    label: str,
    http_request: ProviderHTTPRequest,
) -> Any:
    """
    Send one provider request and return the decoded JSON body.
    A 2xx body that is not JSON decodes to {} so text extraction yields "".
    """
    try:
        response = await client.request(
            http_request.method,
            http_request.url,
            headers=http_request.headers,
            params=http_request.params or None,
            json=http_request.json,
        )
    except httpx.TransportError as e:
        logger.error(f"{label} request failed: {type(e).__name__}: {e}")
        raise ProviderTransportError(label, type(e).__name__) from e

    if not response.is_success:
        logger.warning(f"{label} returned HTTP {response.status_code}")
        raise ProviderHTTPError(label, response.status_code, response.text)

    return safe_json_parse(response.text, default={})


class CompletionGateway:
    """
    Provider-agnostic completion client.

    Usage:
        gateway = CompletionGateway()
        text = await gateway.complete(config, system_prompt, user_prompt)
    """

    def __init__(self, client: Optional[httpx.AsyncClient] = None):
        self._client = client

    def _get_client(self) -> httpx.AsyncClient:
        return self._client or http_client_manager.get_client()

    def supports_search(self, provider: Any) -> bool:
        adapter = get_adapter(provider)
        return bool(adapter and adapter.supports_search)

    async def complete(
        self,
        config: AIConfig,
        system_prompt: str,
        user_prompt: str,
        options: Optional[CompletionOptions] = None,
    ) -> str:
        adapter = get_adapter(config.provider)
        if adapter is None:
            raise UnsupportedProviderError(str(getattr(config.provider, "value", config.provider)))

        options = options or CompletionOptions()
        request = CompletionRequest(
            system_prompt=system_prompt or "",
            user_prompt=user_prompt,
            credential=config.api_key,
            auth_method=config.auth_method,
            model=options.model or config.model or adapter.default_model,
            max_tokens=options.max_tokens,
            want_search=options.want_search and adapter.supports_search,
        )

        label = adapter.provider.value
        logger.info(
            f"Completion -> {label} (model={request.model}, search={request.want_search}, "
            f"max_tokens={request.max_tokens})"
        )
        payload = await execute_request(self._get_client(), label, adapter.build_request(request))
        text = adapter.extract_text(payload)

        if not text:
            logger.warning(f"{label} response contained no text")
        return text


# Singleton instance for easy import
completion_gateway = CompletionGateway()
