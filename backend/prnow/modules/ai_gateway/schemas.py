"""
AI Gateway - Relay request/response schemas.

Credentials arrive per request and are never stored. Required fields are
Optional here so a missing value yields the relay's own `{error}` 400 body
instead of a validation 422.
"""
from typing import Any, Dict, Optional

from pydantic import BaseModel

from prnow.modules.ai_gateway.models import AuthMethod
from prnow.shared.models import CamelModel


class AnthropicRelayRequest(CamelModel):
    api_key: Optional[str] = None
    auth_method: AuthMethod = AuthMethod.API_KEY
    model: Optional[str] = None
    system: Optional[str] = None
    prompt: Optional[str] = None
    use_search: bool = False


class OpenAIRelayRequest(CamelModel):
    api_key: Optional[str] = None
    model: Optional[str] = None
    system: Optional[str] = None
    prompt: Optional[str] = None


class GoogleRelayRequest(CamelModel):
    api_key: Optional[str] = None
    auth_method: AuthMethod = AuthMethod.API_KEY
    model: Optional[str] = None
    prompt: Optional[str] = None


class SearchRelayRequest(CamelModel):
    api_key: Optional[str] = None
    query: Optional[str] = None


class RelayTextResponse(BaseModel):
    text: str


class SearchRelayResponse(BaseModel):
    results: Dict[str, Any]


class RelayErrorResponse(BaseModel):
    error: str
