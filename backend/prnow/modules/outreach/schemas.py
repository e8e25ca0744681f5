"""
Outreach - Request and response schemas for the store API and the
stateless /api/outlets and /api/generate relays.

Bodies are camelCase on the wire (CamelModel); both spellings are accepted.
"""
from typing import Any, Dict, List, Optional, Union

from pydantic import Field

from prnow.modules.ai_gateway.models import AIConfig, AIProvider, AuthMethod
from prnow.modules.outreach.models import (
    Campaign,
    CampaignFrequency,
    CampaignStats,
    Contact,
    EmailDraft,
    Outlet,
    OutletType,
    OutreachEmail,
    OutreachStatus,
    ProjectProfile,
)
from prnow.shared.models import CamelModel


def mask_sensitive_string(value: Optional[str], show_chars: int = 4) -> str:
    """
    Mask a credential, showing only the first few characters.
    Example: "sk-ant-api03-abc" -> "sk-a************"
    """
    if not value:
        return ""
    if len(value) <= show_chars:
        return "*" * len(value)
    return value[:show_chars] + "*" * (len(value) - show_chars)


# ============================================
# SETUP
# ============================================

class AIConfigView(CamelModel):
    """AIConfig as read back: credentials masked, never echoed."""
    provider: AIProvider
    auth_method: AuthMethod
    model: Optional[str] = None
    api_key_hint: str = ""
    has_search_api_key: bool = False
    search_api_key_hint: str = ""

    @classmethod
    def from_config(cls, config: AIConfig) -> "AIConfigView":
        return cls(
            provider=config.provider,
            auth_method=config.auth_method,
            model=config.model,
            api_key_hint=mask_sensitive_string(config.api_key),
            has_search_api_key=bool(config.search_api_key),
            search_api_key_hint=mask_sensitive_string(config.search_api_key),
        )


class SetupRequest(CamelModel):
    """Either half may be sent alone; `complete` marks setup finished."""
    ai_config: Optional[AIConfig] = None
    project_profile: Optional[ProjectProfile] = None
    complete: bool = False

    model_config = {
        "json_schema_extra": {
            "example": {
                "aiConfig": {"provider": "anthropic", "apiKey": "sk-ant-...", "authMethod": "apiKey"},
                "projectProfile": {
                    "name": "Tidepool",
                    "tagline": "Offline-first notes for field researchers",
                    "brief": "Syncs field notes without a network.",
                    "achievements": ["12k MAU"],
                    "category": "Productivity",
                },
                "complete": True,
            }
        }
    }


class SetupStateResponse(CamelModel):
    ai_config: Optional[AIConfigView] = None
    project_profile: Optional[ProjectProfile] = None
    setup_complete: bool = False


class StyleGuideRequest(CamelModel):
    text: str


class StyleGuideResponse(CamelModel):
    text: str


# ============================================
# OUTLETS & CONTACTS
# ============================================

class OutletCreateRequest(CamelModel):
    """Manual add. Relevance defaults to 80 when omitted."""
    name: str = Field(..., min_length=1)
    type: OutletType = OutletType.PUBLICATION
    niche: str = ""
    url: Optional[str] = None
    audience_size: Optional[str] = None
    relevance_score: Optional[int] = Field(default=None, ge=0, le=100)


class DiscoverOutletsRequest(CamelModel):
    target_niches: List[str] = Field(default_factory=list)


class OutletListResponse(CamelModel):
    outlets: List[Outlet]


class ContactCreateRequest(CamelModel):
    name: str = Field(..., min_length=1)
    email: str = ""
    role: str = ""
    outlet_id: Optional[str] = None
    outlet: str = ""
    beat: Optional[str] = None
    linked_in: Optional[str] = None


class ContactListResponse(CamelModel):
    contacts: List[Contact]


# ============================================
# CAMPAIGNS
# ============================================

class CampaignCreateRequest(CamelModel):
    name: str = Field(..., min_length=1)
    frequency: CampaignFrequency = CampaignFrequency.DAILY
    target_outlets: List[str] = Field(default_factory=list)
    target_niches: List[str] = Field(default_factory=list)


class CampaignView(Campaign):
    """Campaign plus counters derived from its emails."""
    stats: CampaignStats = Field(default_factory=CampaignStats)


class CampaignListResponse(CamelModel):
    campaigns: List[CampaignView]


class GenerationError(CamelModel):
    type: str
    target_id: Optional[str] = None
    target_name: str = ""
    error: str


class GenerateCampaignResponse(CamelModel):
    success_count: int
    failed_count: int
    errors: List[GenerationError] = Field(default_factory=list)
    emails: List[OutreachEmail] = Field(default_factory=list)
    campaign: CampaignView


# ============================================
# EMAILS
# ============================================

class EmailView(OutreachEmail):
    """Email with its recipient resolved against the live contact list."""
    recipient_name: str = ""
    recipient_email: str = ""


class EmailListResponse(CamelModel):
    emails: List[EmailView]


class BulkEmailRequest(CamelModel):
    email_ids: List[str] = Field(..., min_length=1, max_length=500)


class SkippedEmail(CamelModel):
    email_id: str
    error: str


class BulkEmailResponse(CamelModel):
    updated: List[str] = Field(default_factory=list)
    skipped: List[SkippedEmail] = Field(default_factory=list)


class EmailStatusRequest(CamelModel):
    status: OutreachStatus


class EmailNotesRequest(CamelModel):
    notes: Optional[str] = None


# ============================================
# DASHBOARD
# ============================================

class DashboardStatsResponse(CamelModel):
    total_campaigns: int = 0
    active_campaigns: int = 0
    emails_pending: int = 0
    emails_approved: int = 0
    emails_sent: int = 0
    emails_replied: int = 0
    outlets_targeted: int = 0
    contacts_reached: int = 0


# ============================================
# STATELESS RELAYS (/api/outlets, /api/generate)
# ============================================

class OutletsRelayRequest(CamelModel):
    """
    Credential and profile travel with the request. `existingOutlets` may be
    names or outlet objects.
    """
    ai_config: Optional[AIConfig] = None
    project_profile: Optional[ProjectProfile] = None
    existing_outlets: List[Union[str, Dict[str, Any]]] = Field(default_factory=list)
    target_niches: List[str] = Field(default_factory=list)

    def existing_outlet_names(self) -> List[str]:
        names = []
        for item in self.existing_outlets:
            name = item.get("name") if isinstance(item, dict) else item
            if isinstance(name, str) and name.strip():
                names.append(name.strip())
        return names


class OutletsRelayResponse(CamelModel):
    outlets: List[Outlet]


class GenerateRelayRequest(CamelModel):
    ai_config: Optional[AIConfig] = None
    project_profile: Optional[ProjectProfile] = None
    campaign_id: Optional[str] = None
    contacts: List[Contact] = Field(default_factory=list)
    outlets: List[Outlet] = Field(default_factory=list)
    style_guide: Optional[str] = None


class GenerateRelayResponse(CamelModel):
    emails: List[EmailDraft] = Field(default_factory=list)
    errors: List[GenerationError] = Field(default_factory=list)
