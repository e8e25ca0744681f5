from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional, Set

from pydantic import Field

from prnow.shared.models import CamelModel, new_id, utc_now


class CampaignFrequency(str, Enum):
    ONCE = "once"
    DAILY = "daily"
    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    CONTINUOUS = "continuous"


class CampaignStatus(str, Enum):
    DRAFT = "draft"
    ACTIVE = "active"
    PAUSED = "paused"
    COMPLETED = "completed"  # no trigger reaches this yet


# User-driven only: "Generate Emails" activates, the toggle pauses/resumes
CAMPAIGN_STATUS_TRANSITIONS: Dict[CampaignStatus, Set[CampaignStatus]] = {
    CampaignStatus.DRAFT: {CampaignStatus.ACTIVE},
    CampaignStatus.ACTIVE: {CampaignStatus.PAUSED},
    CampaignStatus.PAUSED: {CampaignStatus.ACTIVE},
    CampaignStatus.COMPLETED: set(),
}


class Campaign(CamelModel):
    """
    A named batch of target outlets/niches. `frequency` and `next_run_at` are
    stored labels only; nothing executes them.
    """
    id: str = Field(default_factory=new_id)
    name: str = Field(..., min_length=1)
    frequency: CampaignFrequency = CampaignFrequency.DAILY
    status: CampaignStatus = CampaignStatus.DRAFT
    target_outlets: List[str] = Field(default_factory=list)
    target_niches: List[str] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utc_now)
    next_run_at: Optional[datetime] = None


class CampaignStats(CamelModel):
    """Counters derived from the email collection on every read."""
    total_sent: int = 0
    total_approved: int = 0
    total_pending: int = 0
