from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from .config import ApiConfig
from .maps import all_map_views, map_view
from .models import CoordinateQuery, MapViewRequest
from .service import ConfigSaveError, LookupService

logger = logging.getLogger(__name__)


class ApiConfigBody(BaseModel):
    custom_url: str
    opacity: float = 0.8


class MapViewsRequest(BaseModel):
    lat: float
    lng: float
    point_id: str


def create_app(service: LookupService) -> FastAPI:
    app = FastAPI(title="Geocoder Bridge")

    @app.exception_handler(RequestValidationError)
    async def invalid_body(request: Request, exc: RequestValidationError):
        logger.warning("Rejected request body on %s: %s", request.url.path, exc.errors())
        return JSONResponse(status_code=400, content={"detail": f"Error parsing JSON: {_first_error(exc)}"})

    @app.post("/process")
    def process(payload: CoordinateQuery):
        logger.info("Received lookup request: lat=%s lng=%s", payload.lat, payload.lng)
        result = service.process(payload)
        return JSONResponse(content=result.to_payload())

    @app.get("/latest")
    def latest():
        result = service.latest()
        return JSONResponse(content=result.to_payload() if result is not None else None)

    @app.get("/processing")
    def processing() -> Dict[str, bool]:
        return {"processing": service.processing}

    @app.get("/config")
    def get_config() -> ApiConfigBody:
        cfg = service.api_config()
        return ApiConfigBody(custom_url=cfg.custom_url, opacity=cfg.opacity)

    @app.put("/config")
    def update_config(payload: ApiConfigBody) -> ApiConfigBody:
        try:
            service.update_api_config(ApiConfig(custom_url=payload.custom_url, opacity=payload.opacity))
        except ConfigSaveError as exc:
            raise HTTPException(status_code=500, detail=str(exc))
        return payload

    @app.post("/map-view")
    def open_map_view(payload: MapViewRequest) -> Dict[str, str]:
        try:
            return map_view(payload.lat, payload.lng, payload.map_type, payload.point_id)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc))

    @app.post("/map-views")
    def open_map_views(payload: MapViewsRequest) -> List[Dict[str, str]]:
        return all_map_views(payload.lat, payload.lng, payload.point_id)

    return app


def _first_error(exc: RequestValidationError) -> Optional[str]:
    errors: List[Dict[str, Any]] = list(exc.errors())
    if not errors:
        return None
    err = errors[0]
    loc = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
    return f"{loc}: {err.get('msg')}" if loc else str(err.get("msg"))
