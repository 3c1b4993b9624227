from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt, field_validator, model_serializer


class Dataset(BaseModel):
    # storage and wire format both use the MongoDB key names
    model_config = ConfigDict(populate_by_name=True)

    id: StrictInt = Field(alias="_id")
    name: Optional[str] = None
    data: Optional[str] = None
    download_link: Optional[str] = None
    short_description: Optional[str] = None
    long_description: Optional[str] = None

    @field_validator("id", mode="before")
    @classmethod
    def _whole_double_id(cls, v: Any) -> Any:
        # shells and some drivers store integers as BSON doubles
        if isinstance(v, float) and v.is_integer():
            return int(v)
        return v

    @model_serializer(mode="wrap")
    def _omit_empty_strings(self, handler):
        return {k: v for k, v in handler(self).items() if v != ""}
