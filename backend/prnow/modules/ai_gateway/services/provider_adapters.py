"""
Provider Adapters
Translate a provider-neutral CompletionRequest into the exact HTTP request for
one backend, and pull plain text back out of that backend's response shape.

Each adapter is two pure functions:
- build_request(request) -> ProviderHTTPRequest
- extract_text(payload)  -> str ("" when the expected path is missing)

No I/O happens here; CompletionGateway sends the request.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from prnow.modules.ai_gateway.models import AIProvider, AuthMethod, CompletionRequest
from prnow.shared.core.constants import (
    ANTHROPIC_API_VERSION,
    ANTHROPIC_MESSAGES_URL,
    ANTHROPIC_WEB_SEARCH_MAX_USES,
    ANTHROPIC_WEB_SEARCH_TOOL_TYPE,
    DEFAULT_ANTHROPIC_MODEL,
    DEFAULT_GOOGLE_MODEL,
    DEFAULT_OPENAI_MODEL,
    GOOGLE_GENERATE_CONTENT_URL,
    OPENAI_CHAT_COMPLETIONS_URL,
)


@dataclass
class ProviderHTTPRequest:
    url: str
    headers: Dict[str, str]
    json: Dict[str, Any]
    params: Dict[str, str] = field(default_factory=dict)
    method: str = "POST"


def _bearer(token: str) -> str:
    return token if token.startswith("Bearer ") else f"Bearer {token}"


class ProviderAdapter(ABC):
    provider: AIProvider
    default_model: str
    supports_search: bool = False

    @abstractmethod
    def build_request(self, request: CompletionRequest) -> ProviderHTTPRequest:
        ...

    @abstractmethod
    def extract_text(self, payload: Any) -> str:
        ...


class AnthropicAdapter(ProviderAdapter):
    provider = AIProvider.ANTHROPIC
    default_model = DEFAULT_ANTHROPIC_MODEL
    supports_search = True

    def build_request(self, request: CompletionRequest) -> ProviderHTTPRequest:
        headers = {
            "Content-Type": "application/json",
            "anthropic-version": ANTHROPIC_API_VERSION,
        }
        if request.auth_method == AuthMethod.OAUTH_TOKEN:
            headers["Authorization"] = _bearer(request.credential)
        else:
            headers["x-api-key"] = request.credential

        body: Dict[str, Any] = {
            "model": request.model,
            "max_tokens": request.max_tokens,
            "messages": [{"role": "user", "content": request.user_prompt}],
        }
        if request.system_prompt:
            body["system"] = request.system_prompt
        if request.want_search:
            body["tools"] = [{
                "type": ANTHROPIC_WEB_SEARCH_TOOL_TYPE,
                "name": "web_search",
                "max_uses": ANTHROPIC_WEB_SEARCH_MAX_USES,
            }]

        return ProviderHTTPRequest(url=ANTHROPIC_MESSAGES_URL, headers=headers, json=body)

    def extract_text(self, payload: Any) -> str:
        # Search-augmented answers interleave text with server_tool_use and
        # web_search_tool_result blocks; only text blocks are kept, in order.
        if not isinstance(payload, dict):
            return ""
        blocks = payload.get("content") or []
        if not isinstance(blocks, list):
            return ""
        return "".join(
            block.get("text") or ""
            for block in blocks
            if isinstance(block, dict) and block.get("type") == "text"
        )


class OpenAIAdapter(ProviderAdapter):
    provider = AIProvider.OPENAI
    default_model = DEFAULT_OPENAI_MODEL

    def build_request(self, request: CompletionRequest) -> ProviderHTTPRequest:
        messages = []
        if request.system_prompt:
            messages.append({"role": "system", "content": request.system_prompt})
        messages.append({"role": "user", "content": request.user_prompt})

        return ProviderHTTPRequest(
            url=OPENAI_CHAT_COMPLETIONS_URL,
            headers={
                "Content-Type": "application/json",
                "Authorization": _bearer(request.credential),
            },
            json={
                "model": request.model,
                "messages": messages,
                "max_tokens": request.max_tokens,
            },
        )

    def extract_text(self, payload: Any) -> str:
        try:
            text = payload["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError):
            return ""
        return text if isinstance(text, str) else ""


class GoogleAdapter(ProviderAdapter):
    provider = AIProvider.GOOGLE
    default_model = DEFAULT_GOOGLE_MODEL

    def build_request(self, request: CompletionRequest) -> ProviderHTTPRequest:
        headers = {"Content-Type": "application/json"}
        params: Dict[str, str] = {}
        if request.auth_method == AuthMethod.OAUTH_TOKEN:
            headers["Authorization"] = _bearer(request.credential)
        else:
            params["key"] = request.credential

        # No system role in this integration: both prompts share one part
        prompt = request.user_prompt
        if request.system_prompt:
            prompt = f"{request.system_prompt}\n\n{request.user_prompt}"

        return ProviderHTTPRequest(
            url=GOOGLE_GENERATE_CONTENT_URL.format(model=request.model),
            headers=headers,
            params=params,
            json={
                "contents": [{"parts": [{"text": prompt}]}],
                "generationConfig": {"maxOutputTokens": request.max_tokens},
            },
        )

    def extract_text(self, payload: Any) -> str:
        try:
            text = payload["candidates"][0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError):
            return ""
        return text if isinstance(text, str) else ""


# Keyed by the wire value so plain strings and enum members both resolve
PROVIDER_ADAPTERS: Dict[str, ProviderAdapter] = {
    adapter.provider.value: adapter
    for adapter in (AnthropicAdapter(), OpenAIAdapter(), GoogleAdapter())
}


def get_adapter(provider: Any) -> Optional[ProviderAdapter]:
    """Look up the adapter for a provider id (enum member or plain string)."""
    key = getattr(provider, "value", provider)
    if not isinstance(key, str):
        return None
    return PROVIDER_ADAPTERS.get(key)
