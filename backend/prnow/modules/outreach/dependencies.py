"""
FastAPI dependencies for the outreach module.
Tests swap these out with app.dependency_overrides.
"""
import logging
from typing import Optional

from prnow.modules.outreach.repositories import (
    InMemoryStateRepository,
    JsonFileStorage,
    OutreachStore,
    PersistentStateRepository,
)
from prnow.modules.outreach.services import (
    CampaignService,
    OutreachIntelligenceService,
    campaign_service,
    outreach_intelligence_service,
)
from prnow.shared.core.config import settings

logger = logging.getLogger("outreach_dependencies")

_store: Optional[OutreachStore] = None


def get_store() -> OutreachStore:
    """Process-wide store, hydrated from STORAGE_DIR on first use."""
    global _store
    if _store is None:
        repo = PersistentStateRepository(
            InMemoryStateRepository(),
            JsonFileStorage(settings.STORAGE_DIR),
            settings.STORAGE_KEY,
        )
        _store = OutreachStore(repo)
        logger.info(f"Store ready (storage: {settings.STORAGE_DIR}/{settings.STORAGE_KEY}.json)")
    return _store


def get_intelligence_service() -> OutreachIntelligenceService:
    return outreach_intelligence_service


def get_campaign_service() -> CampaignService:
    return campaign_service
