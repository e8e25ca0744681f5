from enum import Enum
from typing import Optional

from pydantic import Field

from prnow.shared.models import CamelModel, new_id


class OutletType(str, Enum):
    PUBLICATION = "publication"
    BLOG = "blog"
    PODCAST = "podcast"
    NEWSLETTER = "newsletter"
    YOUTUBE = "youtube"


class OutletDraft(CamelModel):
    """An outlet before the store gives it an id (manual add or discovery)."""
    name: str = Field(..., min_length=1)
    type: OutletType = OutletType.PUBLICATION
    niche: str = ""
    url: Optional[str] = None
    audience_size: Optional[str] = None
    relevance_score: Optional[int] = Field(default=None, ge=0, le=100)
    is_user_picked: bool = False
    is_discovered: bool = False


class Outlet(OutletDraft):
    """
    A media outlet. Discovered outlets stay unpicked until the user confirms
    them; confirmation is the only mutation after creation.
    """
    id: str = Field(default_factory=new_id)
