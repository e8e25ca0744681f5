"""
AI Relay Endpoints
Thin server-side relays so the browser never calls provider APIs directly.

Each relay forwards one completion (or one search) with the caller's
credential and answers `{text}` / `{results}`, or `{error}` carrying the
provider's own HTTP status and body.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from prnow.modules.ai_gateway.models import AIConfig, AIProvider, AuthMethod, CompletionOptions
from prnow.modules.ai_gateway.schemas import (
    AnthropicRelayRequest,
    GoogleRelayRequest,
    OpenAIRelayRequest,
    RelayErrorResponse,
    RelayTextResponse,
    SearchRelayRequest,
    SearchRelayResponse,
)
from prnow.modules.ai_gateway.services.completion_gateway import CompletionGateway, completion_gateway
from prnow.modules.ai_gateway.services.search_client import SearchClient, search_client
from prnow.shared.core.constants import SEARCH_MAX_TOKENS
from prnow.shared.utils.exceptions import ProviderHTTPError, ProviderTransportError

router = APIRouter()
logger = logging.getLogger("ai_relay_api")

_ERROR_RESPONSES = {
    400: {"model": RelayErrorResponse},
    502: {"model": RelayErrorResponse},
}


def get_completion_gateway() -> CompletionGateway:
    return completion_gateway


def get_search_client() -> SearchClient:
    return search_client


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


async def _relay_completion(
    gateway: CompletionGateway,
    provider: AIProvider,
    api_key: Optional[str],
    prompt: Optional[str],
    system: Optional[str] = None,
    model: Optional[str] = None,
    auth_method: AuthMethod = AuthMethod.API_KEY,
    use_search: bool = False,
):
    if not api_key or not prompt:
        return _error("Missing apiKey or prompt", 400)

    config = AIConfig(provider=provider, api_key=api_key, auth_method=auth_method, model=model)
    options = CompletionOptions(want_search=True, max_tokens=SEARCH_MAX_TOKENS) if use_search else None

    try:
        text = await gateway.complete(config, system or "", prompt, options)
    except ProviderHTTPError as e:
        return _error(e.body, e.status_code)
    except ProviderTransportError as e:
        return _error(e.message, 502)

    return RelayTextResponse(text=text)


@router.post("/ai/anthropic", response_model=RelayTextResponse, responses=_ERROR_RESPONSES)
async def relay_anthropic(
    request: AnthropicRelayRequest,
    gateway: CompletionGateway = Depends(get_completion_gateway),
):
    """Relay a Messages API call. `useSearch` enables the web-search tool."""
    return await _relay_completion(
        gateway,
        AIProvider.ANTHROPIC,
        api_key=request.api_key,
        prompt=request.prompt,
        system=request.system,
        model=request.model,
        auth_method=request.auth_method,
        use_search=request.use_search,
    )


@router.post("/ai/openai", response_model=RelayTextResponse, responses=_ERROR_RESPONSES)
async def relay_openai(
    request: OpenAIRelayRequest,
    gateway: CompletionGateway = Depends(get_completion_gateway),
):
    """Relay a Chat Completions call (always bearer auth)."""
    return await _relay_completion(
        gateway,
        AIProvider.OPENAI,
        api_key=request.api_key,
        prompt=request.prompt,
        system=request.system,
        model=request.model,
    )


@router.post("/ai/google", response_model=RelayTextResponse, responses=_ERROR_RESPONSES)
async def relay_google(
    request: GoogleRelayRequest,
    gateway: CompletionGateway = Depends(get_completion_gateway),
):
    """Relay a generateContent call. The caller folds any system text into `prompt`."""
    return await _relay_completion(
        gateway,
        AIProvider.GOOGLE,
        api_key=request.api_key,
        prompt=request.prompt,
        model=request.model,
        auth_method=request.auth_method,
    )


@router.post("/search", response_model=SearchRelayResponse, responses=_ERROR_RESPONSES)
async def relay_search(
    request: SearchRelayRequest,
    client: SearchClient = Depends(get_search_client),
):
    """Raw Serper passthrough."""
    if not request.api_key or not request.query:
        return _error("Missing apiKey or query", 400)

    try:
        results = await client.search(request.api_key, request.query)
    except ProviderHTTPError as e:
        return _error(e.body, e.status_code)
    except ProviderTransportError as e:
        return _error(e.message, 502)

    return SearchRelayResponse(results=results)
