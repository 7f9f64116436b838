from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_SYNC_URL = (
    "https://script.google.com/macros/s/"
    "AKfycbznk8elEgtGVFgLi8SIN9rcX31noEo-Xx2tVrPI8OYoUeqY504M3BY6aj2LcUT39r-g/exec"
)


def _env_bool(name: str, default: bool = False) -> bool:
    v = (os.getenv(name) or "").strip().lower()
    if not v:
        return default
    return v in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    store_path: Path
    default_webhook_url: str
    sync_timeout_sec: float
    signature_width: int
    signature_height: int
    signature_pixel_ratio: float
    http_log: bool
    http_log_headers: bool
    http_log_body_max_bytes: int


def load_settings() -> Settings:
    """
    Read service settings from the environment.

    Unparseable numbers fall back to their defaults instead of failing startup.
    """
    store_path = (os.getenv("ONBOARDING_STORE_PATH") or "").strip() or str(Path(".data") / "local_store.json")
    default_url = (os.getenv("ONBOARDING_DEFAULT_WEBHOOK_URL") or "").strip() or DEFAULT_SYNC_URL
    return Settings(
        store_path=Path(store_path),
        default_webhook_url=default_url,
        sync_timeout_sec=max(1.0, _env_float("ONBOARDING_SYNC_TIMEOUT_SEC", 20.0)),
        signature_width=max(1, _env_int("ONBOARDING_SIGNATURE_WIDTH", 600)),
        signature_height=max(1, _env_int("ONBOARDING_SIGNATURE_HEIGHT", 320)),
        signature_pixel_ratio=max(0.5, _env_float("ONBOARDING_SIGNATURE_PIXEL_RATIO", 1.0)),
        http_log=_env_bool("ONBOARDING_HTTP_LOG", default=False),
        http_log_headers=_env_bool("ONBOARDING_HTTP_LOG_HEADERS", default=False),
        http_log_body_max_bytes=max(0, _env_int("ONBOARDING_HTTP_LOG_BODY_MAX_BYTES", 4096)),
    )
