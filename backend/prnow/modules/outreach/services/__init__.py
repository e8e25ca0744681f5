from .outreach_intelligence_service import (
    OutreachIntelligenceService,
    outreach_intelligence_service,
    publication_placeholder_email,
)
from .campaign_service import CampaignService, campaign_service

__all__ = [
    "OutreachIntelligenceService",
    "outreach_intelligence_service",
    "publication_placeholder_email",
    "CampaignService",
    "campaign_service",
]
