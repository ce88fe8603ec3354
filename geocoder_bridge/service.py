from __future__ import annotations
import logging
import threading
from dataclasses import replace
from pathlib import Path
from typing import Callable, Optional

from .client import CustomApiClient, LookupFailed
from .config import ApiConfig, save_api_config
from .models import AddressResolutionResult, CoordinateQuery

logger = logging.getLogger(__name__)

ClientFactory = Callable[[str, float], CustomApiClient]


class ConfigSaveError(RuntimeError):
    pass


class LookupService:
    """反查主流程：读取配置 -> 调用接口 -> 记录最新结果。

    HTTP 层在线程池中并发调用，所有共享状态都在锁内读写。
    """

    def __init__(
        self,
        config: ApiConfig,
        config_path: str | Path,
        timeout: float = 30.0,
        client_factory: ClientFactory = CustomApiClient,
    ) -> None:
        self.config_path = Path(config_path)
        self.timeout = timeout
        self._client_factory = client_factory
        self._lock = threading.Lock()
        self._config = config
        self._latest: Optional[AddressResolutionResult] = None
        self._in_flight = 0

    def process(self, query: CoordinateQuery) -> AddressResolutionResult:
        logger.info("Lookup requested: lat=%s lng=%s", query.lat, query.lng)
        with self._lock:
            self._in_flight += 1
            cfg = replace(self._config)
        try:
            if not cfg.custom_url:
                raise LookupFailed("Custom URL not configured")
            client = self._client_factory(cfg.custom_url, self.timeout)
            result = client.lookup(query)
            with self._lock:
                self._latest = result
            return result
        except LookupFailed as exc:
            logger.error("Error calling API: %s", exc)
            return AddressResolutionResult.error_result(f"API Error: {exc}")
        finally:
            with self._lock:
                self._in_flight -= 1

    def latest(self) -> Optional[AddressResolutionResult]:
        with self._lock:
            return self._latest

    @property
    def processing(self) -> bool:
        with self._lock:
            return self._in_flight > 0

    def api_config(self) -> ApiConfig:
        with self._lock:
            return replace(self._config)

    def update_api_config(self, new_config: ApiConfig) -> None:
        with self._lock:
            self._config = replace(new_config)
            try:
                save_api_config(new_config, self.config_path)
            except OSError as exc:
                logger.error("Error saving config: %s", exc)
                raise ConfigSaveError(f"Failed to save config: {exc}") from exc
