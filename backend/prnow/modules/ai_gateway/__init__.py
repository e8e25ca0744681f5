"""
AI Gateway Module

Provider-agnostic completion layer:
- Provider adapters (Anthropic / OpenAI / Google request and response shapes)
- Completion gateway (dispatch + typed HTTP/transport errors)
- Serper web search client
- Relay endpoints under /api/ai/* and /api/search
"""

from .models import AIProvider, AuthMethod, AIConfig, CompletionOptions

__all__ = [
    "AIProvider",
    "AuthMethod",
    "AIConfig",
    "CompletionOptions",
]
