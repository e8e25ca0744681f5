"""
AI Gateway Module - API Router
"""
from prnow.modules.ai_gateway.api.endpoints import router

__all__ = ["router"]
