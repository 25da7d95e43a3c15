from __future__ import annotations

from typing import Any, Dict, List, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

Number = Union[int, float]


class StrictBaseModel(BaseModel):
    # Python attributes stay snake_case; the wire format is camelCase.
    model_config = ConfigDict(
        extra="forbid", populate_by_name=True, alias_generator=to_camel
    )


class Location(StrictBaseModel):
    lat: Number
    lon: Number
    address: str = Field(min_length=1)


class WasteItem(StrictBaseModel):
    material: str = Field(min_length=1)
    quantity: Number  # sign is not checked
    unit: str = Field(min_length=1)
    location: Location


class NormalizedRequest(StrictBaseModel):
    company_id: str = Field(min_length=1)
    company_size: str
    industry: str
    risk_appetite: str
    waste_items: List[WasteItem] = Field(min_length=1)


class NormalizeResult(StrictBaseModel):
    request: NormalizedRequest
    warnings: List[str] = Field(default_factory=list)

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)
