"""
Base model for every persisted entity and API body.

Attributes are snake_case in Python; the persisted blob and the HTTP bodies use
camelCase (`isUserPicked`, `contactEmail`, ...). Both spellings are accepted
on input.
"""
import uuid
from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


def new_id() -> str:
    return str(uuid.uuid4())


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    def to_json_dict(self) -> dict:
        """camelCase, JSON-safe dict (datetimes as ISO strings, enums as values)."""
        return self.model_dump(mode="json", by_alias=True)
