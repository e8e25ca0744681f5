# backend/tests/utils/test_http_client.py
"""
Shared HTTP client tests: startup applies the configured limits, and the
pool cannot be reconfigured while a client is live.
"""
import asyncio

import httpx
import pytest

from prnow.shared.core.config import settings
from prnow.shared.utils.http_client import http_client_manager, startup_http_client


@pytest.fixture
def fresh_manager():
    """The singleton with no live client; previous client and config restored after."""
    previous_client = http_client_manager._client
    previous_config = dict(http_client_manager._config)
    http_client_manager.use_client(None)
    yield http_client_manager
    asyncio.run(http_client_manager.close())
    http_client_manager.use_client(previous_client)
    http_client_manager._config = previous_config


def test_startup_applies_settings_timeouts(fresh_manager, monkeypatch):
    monkeypatch.setattr(settings, "HTTP_TIMEOUT", 45.0)
    monkeypatch.setattr(settings, "HTTP_CONNECT_TIMEOUT", 3.0)
    monkeypatch.setattr(settings, "HTTP_MAX_CONNECTIONS", 7)

    asyncio.run(startup_http_client())

    client = fresh_manager.get_client()
    assert client.timeout.read == 45.0
    assert client.timeout.connect == 3.0
    status = fresh_manager.get_status()
    assert status["active"] is True
    assert status["config"]["max_connections"] == 7


def test_configure_is_ignored_while_client_is_live(fresh_manager):
    fresh_manager.configure(timeout=30.0)
    client = fresh_manager.get_client()

    fresh_manager.configure(timeout=5.0)

    assert fresh_manager.get_status()["config"]["timeout"] == 30.0
    assert fresh_manager.get_client() is client
    assert isinstance(client, httpx.AsyncClient)
