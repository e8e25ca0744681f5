"""
HTTP Client Manager with Connection Pooling

One shared httpx.AsyncClient for all outbound provider and search calls.
The provider gateway never retries and sets no timeout of its own, so the
limits configured here are the only ones in play.

Usage:
    from prnow.shared.utils.http_client import http_client_manager

    client = http_client_manager.get_client()
    response = await client.post(url, json=payload)

Tests swap the transport instead of patching call sites:
    http_client_manager.use_client(httpx.AsyncClient(transport=httpx.MockTransport(handler)))
"""
import logging
from typing import Optional, Dict, Any

import httpx

from prnow.shared.core.config import settings

logger = logging.getLogger("http_client")


DEFAULT_TIMEOUT = 120.0  # LLM completions (especially with web search) are slow
DEFAULT_CONNECT_TIMEOUT = 10.0
DEFAULT_MAX_CONNECTIONS = 50
DEFAULT_MAX_KEEPALIVE_CONNECTIONS = 10
DEFAULT_KEEPALIVE_EXPIRY = 30.0  # seconds


class HTTPClientManager:
    """
    Singleton owner of the shared AsyncClient.

    - Lazy initialization (client created on first use)
    - Replaceable client for tests (`use_client`)
    - Explicit close on application shutdown
    """

    _instance: Optional['HTTPClientManager'] = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if getattr(self, "_initialized", False):
            return

        self._initialized = True
        self._client: Optional[httpx.AsyncClient] = None
        self._config = {
            "timeout": DEFAULT_TIMEOUT,
            "connect_timeout": DEFAULT_CONNECT_TIMEOUT,
            "max_connections": DEFAULT_MAX_CONNECTIONS,
            "max_keepalive_connections": DEFAULT_MAX_KEEPALIVE_CONNECTIONS,
            "keepalive_expiry": DEFAULT_KEEPALIVE_EXPIRY,
        }

    def configure(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        connect_timeout: float = DEFAULT_CONNECT_TIMEOUT,
        max_connections: int = DEFAULT_MAX_CONNECTIONS,
        max_keepalive_connections: int = DEFAULT_MAX_KEEPALIVE_CONNECTIONS,
        keepalive_expiry: float = DEFAULT_KEEPALIVE_EXPIRY
    ) -> None:
        """
        Change pool settings. Only effective before first use or after close().
        """
        if self._client is not None:
            logger.warning("Cannot reconfigure while client is active. Call close() first.")
            return

        self._config = {
            "timeout": timeout,
            "connect_timeout": connect_timeout,
            "max_connections": max_connections,
            "max_keepalive_connections": max_keepalive_connections,
            "keepalive_expiry": keepalive_expiry,
        }
        logger.info(f"HTTPClientManager configured: {self._config}")

    def _create_client(self) -> httpx.AsyncClient:
        timeout = httpx.Timeout(
            timeout=self._config["timeout"],
            connect=self._config["connect_timeout"]
        )
        limits = httpx.Limits(
            max_connections=self._config["max_connections"],
            max_keepalive_connections=self._config["max_keepalive_connections"],
            keepalive_expiry=self._config["keepalive_expiry"]
        )
        return httpx.AsyncClient(timeout=timeout, limits=limits, follow_redirects=True)

    def get_client(self) -> httpx.AsyncClient:
        """Get the shared client, creating it on first access."""
        if self._client is None:
            self._client = self._create_client()
            logger.info("HTTP client created with connection pooling")
        return self._client

    def use_client(self, client: Optional[httpx.AsyncClient]) -> None:
        """
        Replace the shared client (None resets to lazy creation).
        The previous client is not closed; the caller owns it.
        """
        self._client = client

    async def close(self) -> None:
        """Close the client and release all connections."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
            logger.info("HTTP client closed, connections released")

    def get_status(self) -> Dict[str, Any]:
        """Current client status for the health endpoint."""
        return {
            "active": self._client is not None,
            "config": self._config,
        }


http_client_manager = HTTPClientManager()


# ============================================
# FastAPI LIFECYCLE HOOKS
# ============================================

async def startup_http_client():
    """Apply the configured limits and pre-warm the connection pool."""
    http_client_manager.configure(
        timeout=settings.HTTP_TIMEOUT,
        connect_timeout=settings.HTTP_CONNECT_TIMEOUT,
        max_connections=settings.HTTP_MAX_CONNECTIONS,
    )
    http_client_manager.get_client()
    logger.info("HTTP client pre-warmed during startup")


async def shutdown_http_client():
    """Close pooled connections during shutdown."""
    await http_client_manager.close()
    logger.info("HTTP client shutdown complete")
