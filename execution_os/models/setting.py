"""Key/value preference row."""

from pydantic import Field

from .common import EntityModel


class Setting(EntityModel):
    key: str = Field(alias="Key")
    value: str = Field("", alias="Value")
