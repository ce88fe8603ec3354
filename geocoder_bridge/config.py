from __future__ import annotations
import json
import logging
import os
import sys
from dataclasses import asdict, dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

APP_DIR_NAME = "GeocoderApp"
CONFIG_FILE_NAME = "config.json"


@dataclass
class ApiConfig:
    custom_url: str = ""
    opacity: float = 0.8


@dataclass
class ServerSettings:
    host: str
    port: int
    timeout: float
    log_level: str
    config_path: Path


def default_config_path() -> Path:
    override = os.getenv("GEOCODER_CONFIG_PATH")
    if override:
        return Path(override)
    if sys.platform.startswith("win"):
        base = Path(os.getenv("APPDATA") or Path.home() / "AppData" / "Roaming")
    elif sys.platform == "darwin":
        base = Path.home() / "Library" / "Application Support"
    else:
        base = Path(os.getenv("XDG_CONFIG_HOME") or Path.home() / ".config")
    return base / APP_DIR_NAME / CONFIG_FILE_NAME


def load_api_config(path: str | Path) -> ApiConfig:
    """读取持久化的接口配置；文件缺失或内容有误时回退为默认配置。"""
    p = Path(path)
    if not p.exists():
        return ApiConfig()
    try:
        raw = json.loads(p.read_text(encoding="utf-8"))
    except OSError as exc:
        logger.warning("Error reading config file %s: %s, using default", p, exc)
        return ApiConfig()
    except ValueError as exc:
        logger.warning("Error parsing config file %s: %s, using default", p, exc)
        return ApiConfig()
    if not isinstance(raw, dict) or not isinstance(raw.get("custom_url"), str):
        logger.warning("Config file %s has unexpected shape, using default", p)
        return ApiConfig()
    try:
        opacity = float(raw.get("opacity", ApiConfig.opacity))
    except (TypeError, ValueError):
        logger.warning("Config file %s has invalid opacity, using default", p)
        return ApiConfig()
    logger.info("Configuration loaded from: %s", p)
    return ApiConfig(custom_url=raw["custom_url"], opacity=opacity)


def save_api_config(cfg: ApiConfig, path: str | Path) -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(json.dumps(asdict(cfg), ensure_ascii=False, indent=2), encoding="utf-8")
    logger.info("Configuration saved to: %s", p)


def load_settings() -> ServerSettings:
    return ServerSettings(
        host=os.getenv("APP_HOST", "127.0.0.1"),
        port=int(os.getenv("APP_PORT", "31203")),
        timeout=float(os.getenv("GEOCODER_TIMEOUT", "30")),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        config_path=default_config_path(),
    )
