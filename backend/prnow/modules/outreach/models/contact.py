from typing import Optional

from pydantic import Field

from prnow.shared.models import CamelModel, new_id


class ContactDraft(CamelModel):
    name: str = Field(..., min_length=1)
    email: str = ""  # empty when no verified address was found
    role: str = ""
    outlet: str = ""  # outlet name, denormalized
    outlet_id: Optional[str] = None
    beat: Optional[str] = None
    linked_in: Optional[str] = None


class Contact(ContactDraft):
    """A journalist/editor. Weak reference to an outlet; survives its removal."""
    id: str = Field(default_factory=new_id)
