from __future__ import annotations
import http.client
import json
import logging
import urllib.error
import urllib.request

from .google_parser import parse_geocoding_response
from .models import AddressResolutionResult, CoordinateQuery
from .utils import format_coord

logger = logging.getLogger(__name__)


class LookupFailed(RuntimeError):
    """反查接口调用失败（HTTP 状态异常、网络错误或响应不是 JSON）。"""


def build_url(template: str, lat: float, lng: float) -> str:
    lat_s, lng_s = format_coord(lat), format_coord(lng)
    return (
        template.replace("{lat}", lat_s)
        .replace("{lng}", lng_s)
        .replace("{long}", lng_s)
    )


class CustomApiClient:
    """按用户配置的 URL 模板调用反向地理编码接口。"""

    def __init__(self, url_template: str, timeout: float = 30.0) -> None:
        self.url_template = url_template
        self.timeout = timeout

    def lookup(self, query: CoordinateQuery) -> AddressResolutionResult:
        url = build_url(self.url_template, query.lat, query.lng)
        logger.info("Calling custom API: %s", url)
        raw = self._get(url)
        try:
            body = raw.decode("utf-8")
            logger.debug("Custom API response: %s", body)
            payload = json.loads(body)
        except ValueError as exc:
            raise LookupFailed(f"Invalid JSON response: {exc}") from exc
        return parse_geocoding_response(payload)

    def _get(self, url: str) -> bytes:
        try:
            req = urllib.request.Request(url, method="GET")
            req.add_header("Accept", "application/json")
            with urllib.request.urlopen(req, timeout=self.timeout) as resp:
                status = getattr(resp, "status", 200)
                if not 200 <= status < 300:
                    raise LookupFailed(f"API request failed with status: {status}")
                return resp.read()
        except urllib.error.HTTPError as exc:
            raise LookupFailed(f"API request failed with status: {exc.code}") from exc
        except urllib.error.URLError as exc:
            raise LookupFailed(f"API request failed: {exc.reason}") from exc
        except (OSError, ValueError, http.client.HTTPException) as exc:
            # 非法 URL（缺少协议、含空格）与响应读取中断
            raise LookupFailed(f"API request failed: {exc}") from exc
