from __future__ import annotations
import json

import pytest

from geocoder_bridge.config import ApiConfig
from geocoder_bridge.models import CoordinateQuery
from geocoder_bridge.service import ConfigSaveError, LookupService

from conftest import StubClient


def test_process_success_updates_latest(service, stub, sample_result):
    assert service.latest() is None
    result = service.process(CoordinateQuery(lat=21.0285, lng=105.8542))
    assert result == sample_result
    assert service.latest() == sample_result
    assert stub.calls == [("https://geo.example/?latlng={lat},{lng}", 21.0285, 105.8542)]
    assert stub.timeout == 3.0
    assert service.processing is False


def test_process_without_url(tmp_path, stub):
    svc = LookupService(ApiConfig(), tmp_path / "c.json", client_factory=stub.factory)
    result = svc.process(CoordinateQuery(lat=1.0, lng=2.0))
    assert result.status == "error"
    assert result.address == "API Error: Custom URL not configured"
    assert stub.calls == []
    assert svc.latest() is None


def test_process_failure_keeps_previous_latest(service, stub, sample_result):
    service.process(CoordinateQuery(lat=1.0, lng=2.0))
    stub.error = "API request failed with status: 500"
    result = service.process(CoordinateQuery(lat=3.0, lng=4.0))
    assert result.to_payload() == {
        "status": "error",
        "address": "API Error: API request failed with status: 500",
        "province": "",
        "district": "",
        "ward": "",
    }
    assert service.latest() == sample_result
    assert service.processing is False


def test_processing_flag_during_lookup(tmp_path, sample_result):
    seen = []

    class Probe(StubClient):
        def lookup(self, query):
            seen.append(svc.processing)
            return sample_result

    probe = Probe()
    svc = LookupService(ApiConfig(custom_url="u"), tmp_path / "c.json", client_factory=probe.factory)
    svc.process(CoordinateQuery(lat=0.0, lng=0.0))
    assert seen == [True]
    assert svc.processing is False


def test_update_config_persists(service):
    service.update_api_config(ApiConfig(custom_url="https://other/{lat}/{long}", opacity=0.4))
    assert service.api_config() == ApiConfig(custom_url="https://other/{lat}/{long}", opacity=0.4)
    saved = json.loads(service.config_path.read_text(encoding="utf-8"))
    assert saved == {"custom_url": "https://other/{lat}/{long}", "opacity": 0.4}


def test_update_config_save_failure(tmp_path, stub):
    blocker = tmp_path / "blocker"
    blocker.write_text("file, not a dir", encoding="utf-8")
    svc = LookupService(ApiConfig(), blocker / "config.json", client_factory=stub.factory)
    with pytest.raises(ConfigSaveError, match="Failed to save config"):
        svc.update_api_config(ApiConfig(custom_url="u"))


def test_api_config_returns_copy(service):
    cfg = service.api_config()
    cfg.custom_url = "mutated"
    assert service.api_config().custom_url != "mutated"
