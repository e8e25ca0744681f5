from datetime import datetime
from enum import Enum
from typing import Dict, Optional, Set

from pydantic import Field

from prnow.shared.models import CamelModel, new_id, utc_now


class OutreachType(str, Enum):
    INDIVIDUAL = "individual"
    PUBLICATION = "publication"


class OutreachStatus(str, Enum):
    DRAFT = "draft"
    PENDING_APPROVAL = "pending_approval"
    APPROVED = "approved"
    REJECTED = "rejected"
    SENT = "sent"
    REPLIED = "replied"


# Strictly forward. `rejected` and `replied` are terminal.
EMAIL_STATUS_TRANSITIONS: Dict[OutreachStatus, Set[OutreachStatus]] = {
    OutreachStatus.DRAFT: {OutreachStatus.PENDING_APPROVAL},
    OutreachStatus.PENDING_APPROVAL: {OutreachStatus.APPROVED, OutreachStatus.REJECTED},
    OutreachStatus.APPROVED: {OutreachStatus.SENT},
    OutreachStatus.REJECTED: set(),
    OutreachStatus.SENT: {OutreachStatus.REPLIED},
    OutreachStatus.REPLIED: set(),
}


def can_transition(current: OutreachStatus, target: OutreachStatus) -> bool:
    """Same-state moves are allowed (idempotent); everything else follows the table."""
    return current == target or target in EMAIL_STATUS_TRANSITIONS[current]


class EmailDraft(CamelModel):
    """Output of a drafting operation; the store adds id and created_at."""
    campaign_id: str
    contact_id: Optional[str] = None
    contact_name: str
    contact_email: str = ""
    outlet_name: str = ""
    type: OutreachType
    subject: str
    body: str
    status: OutreachStatus = OutreachStatus.PENDING_APPROVAL
    email_is_placeholder: bool = False


class OutreachEmail(EmailDraft):
    """A pitch email tracked through the approval workflow."""
    id: str = Field(default_factory=new_id)
    status: OutreachStatus = OutreachStatus.DRAFT
    created_at: datetime = Field(default_factory=utc_now)
    approved_at: Optional[datetime] = None
    sent_at: Optional[datetime] = None
    notes: Optional[str] = None
