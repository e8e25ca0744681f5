from typing import List, Optional

from pydantic import Field

from prnow.modules.ai_gateway.models import AIConfig
from prnow.modules.outreach.models.campaign import Campaign
from prnow.modules.outreach.models.contact import Contact
from prnow.modules.outreach.models.outlet import Outlet
from prnow.modules.outreach.models.outreach_email import OutreachEmail
from prnow.modules.outreach.models.project import ProjectProfile
from prnow.shared.models import CamelModel

DEFAULT_STYLE_GUIDE = """Be concise and direct. No corporate jargon. Write like a real person, not a PR agency.
Lead with value: why should they care about this story?
Keep emails under 200 words. Respect their time.
Warm but professional tone. No exclamation marks. No "I hope this email finds you well".
When referencing their work, be specific and genuine. Don't be generic or sycophantic.
End with a clear, low-pressure ask (e.g. "would you be open to a quick look?" not "please let me know at your earliest convenience").
No buzzwords. No "revolutionary", "game-changing", "excited to share". Just say what it does."""


class AppState(CamelModel):
    """Everything the store persists, serialized wholesale as one blob."""
    ai_config: Optional[AIConfig] = None
    project_profile: Optional[ProjectProfile] = None
    setup_complete: bool = False
    email_style_guide: str = DEFAULT_STYLE_GUIDE
    outlets: List[Outlet] = Field(default_factory=list)
    contacts: List[Contact] = Field(default_factory=list)
    emails: List[OutreachEmail] = Field(default_factory=list)
    campaigns: List[Campaign] = Field(default_factory=list)
