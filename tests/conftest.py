from __future__ import annotations
from typing import List, Optional

import pytest

from geocoder_bridge.client import LookupFailed
from geocoder_bridge.config import ApiConfig
from geocoder_bridge.models import AddressResolutionResult, CoordinateQuery
from geocoder_bridge.service import LookupService


class StubClient:
    """替代 CustomApiClient，记录调用并返回预设结果。"""

    def __init__(self, result: Optional[AddressResolutionResult] = None, error: Optional[str] = None) -> None:
        self.result = result
        self.error = error
        self.calls: List[tuple] = []

    def factory(self, url_template: str, timeout: float) -> "StubClient":
        self.url_template = url_template
        self.timeout = timeout
        return self

    def lookup(self, query: CoordinateQuery) -> AddressResolutionResult:
        self.calls.append((self.url_template, query.lat, query.lng))
        if self.error:
            raise LookupFailed(self.error)
        return self.result


@pytest.fixture
def sample_result() -> AddressResolutionResult:
    return AddressResolutionResult(
        status="success",
        address="1 Hoan Kiem",
        province="Hanoi",
        district="Hoan Kiem",
        ward="Hang Trong",
        google_id="pid-1",
    )


@pytest.fixture
def stub(sample_result) -> StubClient:
    return StubClient(result=sample_result)


@pytest.fixture
def service(tmp_path, stub) -> LookupService:
    cfg = ApiConfig(custom_url="https://geo.example/?latlng={lat},{lng}")
    return LookupService(cfg, tmp_path / "config.json", timeout=3.0, client_factory=stub.factory)
