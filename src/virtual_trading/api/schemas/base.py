"""Shared base for wire schemas."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Serializes as camelCase; accepts either camelCase or field names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
