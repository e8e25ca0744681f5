# backend/tests/conftest.py
"""
Shared fixtures for all test modules.

No fixture does real network I/O: provider and search traffic goes through
httpx.MockTransport (see fakes.py), and the API client runs on a fresh
in-memory store. Async code is driven with asyncio.run() inside plain tests.
"""
import pytest
from fastapi.testclient import TestClient

from prnow.main import app
from prnow.modules.ai_gateway.models import AIConfig, AIProvider, AuthMethod
from prnow.modules.outreach.dependencies import get_store
from prnow.modules.outreach.models import Contact, Outlet, OutletType, ProjectProfile
from prnow.modules.outreach.repositories import InMemoryStateRepository, OutreachStore


# --- SAMPLE DATA FIXTURES ---
@pytest.fixture
def sample_profile():
    return ProjectProfile(
        name="Tidepool",
        tagline="Offline-first notes for field researchers",
        brief="Tidepool syncs field notes without a network.",
        achievements=["12,000 monthly active researchers", "Used by 40 university labs"],
        website="https://tidepool.example.com",
        category="Productivity",
    )


@pytest.fixture
def anthropic_config():
    return AIConfig(provider=AIProvider.ANTHROPIC, api_key="sk-ant-test-key")


@pytest.fixture
def openai_config():
    return AIConfig(provider=AIProvider.OPENAI, api_key="sk-openai-test-key")


@pytest.fixture
def google_config():
    return AIConfig(provider=AIProvider.GOOGLE, api_key="google-test-key", auth_method=AuthMethod.API_KEY)


@pytest.fixture
def sample_outlet():
    return Outlet(
        name="TechCrunch",
        type=OutletType.PUBLICATION,
        niche="Startups",
        url="https://techcrunch.com",
        relevance_score=90,
        is_user_picked=True,
    )


@pytest.fixture
def sample_contact(sample_outlet):
    return Contact(
        name="Alex Kim",
        email="alex@techcrunch.com",
        role="Senior Reporter",
        outlet=sample_outlet.name,
        outlet_id=sample_outlet.id,
        beat="Developer tools",
    )


# --- STORE FIXTURES ---
@pytest.fixture
def memory_store():
    """Empty store with no persistence."""
    return OutreachStore(InMemoryStateRepository())


@pytest.fixture
def configured_store(memory_store, anthropic_config, sample_profile):
    memory_store.set_ai_config(anthropic_config)
    memory_store.set_project_profile(sample_profile)
    return memory_store


# --- TEST CLIENT FIXTURE ---
@pytest.fixture
def test_client(memory_store):
    """
    API client bound to `memory_store`. Tests that need fake provider traffic
    call fakes.override_services() themselves; overrides are cleared after.
    """
    app.dependency_overrides[get_store] = lambda: memory_store
    yield TestClient(app)
    app.dependency_overrides.clear()
