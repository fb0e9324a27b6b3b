# /portal/models/common.py

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """
    Base for every API model. Python attributes are snake_case (matching the
    ORM columns, so `model_validate` works on rows directly); the JSON
    contract is camelCase to match JavaScript conventions. Both spellings are
    accepted on input.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


def as_utc(value: datetime) -> datetime:
    """Normalises a datetime to aware UTC; naive values are taken to be UTC already."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
