"""
AI Gateway - Configuration and request models.
"""
from enum import Enum
from typing import Optional

from pydantic import Field

from prnow.shared.core.constants import DEFAULT_MAX_TOKENS
from prnow.shared.models import CamelModel


class AIProvider(str, Enum):
    ANTHROPIC = "anthropic"
    OPENAI = "openai"
    GOOGLE = "google"


class AuthMethod(str, Enum):
    API_KEY = "apiKey"
    OAUTH_TOKEN = "oauthToken"


class AIConfig(CamelModel):
    """
    The user's AI credential. Singleton in the store, overwritten wholesale
    on every save.
    """
    provider: AIProvider
    api_key: str = Field(..., min_length=1)
    auth_method: AuthMethod = AuthMethod.API_KEY
    model: Optional[str] = None
    search_api_key: Optional[str] = None


class CompletionOptions(CamelModel):
    """Per-call knobs for CompletionGateway.complete()."""
    max_tokens: int = Field(default=DEFAULT_MAX_TOKENS, ge=1)
    want_search: bool = False
    model: Optional[str] = None  # overrides AIConfig.model for this call


class CompletionRequest(CamelModel):
    """Provider-neutral request handed to an adapter."""
    system_prompt: str = ""
    user_prompt: str
    credential: str
    auth_method: AuthMethod = AuthMethod.API_KEY
    model: str
    max_tokens: int = DEFAULT_MAX_TOKENS
    want_search: bool = False
