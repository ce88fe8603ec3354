from __future__ import annotations
import json
from enum import Enum
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field


class FieldState(str, Enum):
    ABSENT = "absent"
    NULL = "null"
    VALUE = "value"


class AddressResolutionResult(BaseModel):
    """地址反查结果。可选字段区分三种状态：缺省、显式 null、有值。"""

    model_config = ConfigDict(strict=True, populate_by_name=True)

    status: str
    address: str
    province: str
    district: str
    ward: str

    poi_vn: Optional[str] = None
    poi_en: Optional[str] = None
    poi_ex: Optional[str] = None

    type: Optional[str] = None
    sub_type: Optional[str] = None
    poi_st_sd: Optional[str] = None

    room: Optional[str] = None
    house_num: Optional[str] = None
    buaname: Optional[str] = None
    st_name: Optional[str] = None
    sub_com: Optional[str] = None

    phone: Optional[str] = None
    fax: Optional[str] = None
    web: Optional[str] = None
    mail: Optional[str] = None

    brandname: Optional[str] = None
    import_: Optional[str] = Field(default=None, alias="import")
    status_detail: Optional[str] = None
    note: Optional[str] = None
    dine: Optional[str] = None
    update_: Optional[str] = None
    source: Optional[str] = None
    gen_type: Optional[str] = None
    perform: Optional[str] = None
    dup: Optional[str] = None
    explain: Optional[str] = None
    classify: Optional[str] = None
    dtrend: Optional[str] = None

    google_id: Optional[str] = None
    be_id: Optional[str] = None

    plus_code: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    @classmethod
    def error_result(cls, message: str) -> "AddressResolutionResult":
        return cls(status="error", address=message, province="", district="", ward="")

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "AddressResolutionResult":
        return cls.model_validate(dict(payload))

    @classmethod
    def from_json(cls, text: str | bytes) -> "AddressResolutionResult":
        return cls.model_validate_json(text)

    def to_payload(self) -> Dict[str, Any]:
        # 未设置的字段不输出，显式 None 保留为 null
        return self.model_dump(by_alias=True, exclude_unset=True)

    def to_json(self) -> str:
        return json.dumps(self.to_payload(), ensure_ascii=False)

    def field_state(self, name: str) -> FieldState:
        attr = wire_to_attr(name)
        if attr not in type(self).model_fields:
            raise KeyError(name)
        if attr not in self.model_fields_set:
            return FieldState.ABSENT
        if getattr(self, attr) is None:
            return FieldState.NULL
        return FieldState.VALUE


class CoordinateQuery(BaseModel):
    model_config = ConfigDict(strict=True)

    lat: float
    lng: float


class MapViewRequest(BaseModel):
    model_config = ConfigDict(strict=True)

    lat: float
    lng: float
    map_type: str
    point_id: str


REQUIRED_FIELDS = ("status", "address", "province", "district", "ward")

RESULT_WIRE_FIELDS = tuple(
    (info.alias or name) for name, info in AddressResolutionResult.model_fields.items()
)


def wire_to_attr(name: str) -> str:
    return "import_" if name == "import" else name
