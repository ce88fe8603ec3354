from __future__ import annotations
from typing import Dict, List

from .utils import format_coord

MAP_TYPES = ("google", "openstreetmap")


def map_view_url(lat: float, lng: float, map_type: str) -> str:
    la, lo = format_coord(lat), format_coord(lng)
    if map_type == "google":
        return f"https://www.google.com/maps?q={la},{lo}"
    if map_type == "openstreetmap":
        return f"https://www.openstreetmap.org/?mlat={la}&mlon={lo}&zoom=17"
    raise ValueError("Invalid map type")


def map_view(lat: float, lng: float, map_type: str, point_id: str) -> Dict[str, str]:
    return {
        "url": map_view_url(lat, lng, map_type),
        "window_id": f"map_view_{point_id}_{map_type}",
        "title": f"{map_type} - {point_id} ({format_coord(lat)}, {format_coord(lng)})",
    }


def all_map_views(lat: float, lng: float, point_id: str) -> List[Dict[str, str]]:
    return [map_view(lat, lng, t, point_id) for t in MAP_TYPES]
