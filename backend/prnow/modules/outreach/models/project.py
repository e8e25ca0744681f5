from typing import List, Optional

from pydantic import Field, field_validator

from prnow.shared.models import CamelModel


class ProjectProfile(CamelModel):
    """What the user is pitching. Singleton in the store."""
    name: str = Field(..., min_length=1)
    tagline: str = ""
    brief: str = ""
    achievements: List[str] = Field(default_factory=list)
    website: Optional[str] = None
    category: str = ""

    @field_validator("achievements")
    @classmethod
    def drop_blank_achievements(cls, v: List[str]) -> List[str]:
        return [a.strip() for a in v if a and a.strip()]
