from __future__ import annotations
import math
from typing import Any, Dict, List, Optional, Tuple

from .models import AddressResolutionResult

# (组件类型, 结果字段)，按顺序匹配，后出现的组件覆盖先前的值
COMPONENT_FIELD_MAP: Tuple[Tuple[Tuple[str, ...], str], ...] = (
    (("premise", "point_of_interest"), "poi_vn"),
    (("street_number",), "house_num"),
    (("floor", "room"), "room"),
    (("sublocality_level_1",), "buaname"),
    (("sublocality_level_2",), "sub_com"),
    (("route",), "st_name"),
)

ADMIN_LEVELS: Dict[str, Tuple[str, ...]] = {
    "province": ("administrative_area_level_1",),
    "district": ("administrative_area_level_2", "locality"),
    "ward": ("administrative_area_level_3", "sublocality_level_1"),
}

TOP_LEVEL_FIELDS = (
    ("formatted_phone_number", "phone"),
    ("website", "web"),
    ("place_id", "google_id"),
)


def parse_geocoding_response(payload: Any) -> AddressResolutionResult:
    """把 Google Geocoding 风格的响应映射为 AddressResolutionResult。

    只取 results[0]；服务商未提供的字段保持缺省（不写 null）。
    status 不是 "OK" 时直接返回该状态，地址与行政区为空串。
    """
    data = payload if isinstance(payload, dict) else {}

    status = data.get("status")
    if isinstance(status, str) and status != "OK":
        return AddressResolutionResult(status=status, address="", province="", district="", ward="")

    first = _first_result(data)
    address = first.get("formatted_address")
    components = _components(first)

    result = AddressResolutionResult(
        status="success",
        address=address if isinstance(address, str) else "",
        province=_admin_name(components, ADMIN_LEVELS["province"]),
        district=_admin_name(components, ADMIN_LEVELS["district"]),
        ward=_admin_name(components, ADMIN_LEVELS["ward"]),
    )

    geometry = first.get("geometry")
    location = geometry.get("location") if isinstance(geometry, dict) else None
    if isinstance(location, dict):
        lat, lng = _as_float(location.get("lat")), _as_float(location.get("lng"))
        if lat is not None:
            result.latitude = lat
        if lng is not None:
            result.longitude = lng

    plus_code = first.get("plus_code")
    if isinstance(plus_code, dict) and isinstance(plus_code.get("global_code"), str):
        result.plus_code = plus_code["global_code"]

    for types, long_name in components:
        for wanted, field in COMPONENT_FIELD_MAP:
            if any(t in types for t in wanted):
                setattr(result, field, long_name)

    for key, field in TOP_LEVEL_FIELDS:
        value = first.get(key)
        if isinstance(value, str):
            setattr(result, field, value)

    return result


def _first_result(data: Dict[str, Any]) -> Dict[str, Any]:
    results = data.get("results")
    if isinstance(results, list) and results and isinstance(results[0], dict):
        return results[0]
    return {}


def _components(first: Dict[str, Any]) -> List[Tuple[List[str], str]]:
    out: List[Tuple[List[str], str]] = []
    raw = first.get("address_components")
    if not isinstance(raw, list):
        return out
    for comp in raw:
        if not isinstance(comp, dict):
            continue
        long_name = comp.get("long_name")
        types = comp.get("types")
        out.append((
            [t for t in types if isinstance(t, str)] if isinstance(types, list) else [],
            long_name if isinstance(long_name, str) else "",
        ))
    return out


def _admin_name(components: List[Tuple[List[str], str]], levels: Tuple[str, ...]) -> str:
    for level in levels:
        found: Optional[str] = None
        for types, long_name in components:
            if level in types:
                found = long_name
        if found is not None:
            return found
    return ""


def _as_float(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if not isinstance(value, (int, float)):
        return None
    try:
        out = float(value)
    except OverflowError:
        return None
    # NaN/Infinity 无法写回 JSON
    return out if math.isfinite(out) else None
