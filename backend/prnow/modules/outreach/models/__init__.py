"""
Outreach entity models (pydantic, persisted as one JSON blob).
"""
from .project import ProjectProfile
from .outlet import Outlet, OutletDraft, OutletType
from .contact import Contact, ContactDraft
from .campaign import (
    Campaign,
    CampaignFrequency,
    CampaignStats,
    CampaignStatus,
    CAMPAIGN_STATUS_TRANSITIONS,
)
from .outreach_email import (
    EmailDraft,
    OutreachEmail,
    OutreachStatus,
    OutreachType,
    EMAIL_STATUS_TRANSITIONS,
    can_transition,
)
from .app_state import AppState, DEFAULT_STYLE_GUIDE

__all__ = [
    "ProjectProfile",
    "Outlet",
    "OutletDraft",
    "OutletType",
    "Contact",
    "ContactDraft",
    "Campaign",
    "CampaignFrequency",
    "CampaignStats",
    "CampaignStatus",
    "CAMPAIGN_STATUS_TRANSITIONS",
    "EmailDraft",
    "OutreachEmail",
    "OutreachStatus",
    "OutreachType",
    "EMAIL_STATUS_TRANSITIONS",
    "can_transition",
    "AppState",
    "DEFAULT_STYLE_GUIDE",
]
