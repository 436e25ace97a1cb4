import os
from dataclasses import dataclass


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    host: str
    port: int
    log_level: str
    metrics_enabled: bool
    metrics_port: int
    max_body_bytes: int = 64 * 1024


def load_settings() -> Settings:
    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "3000"))
    log_level = os.getenv("LOG_LEVEL", "INFO").upper()
    metrics_enabled = _parse_bool(os.getenv("METRICS_ENABLED", "false"))
    metrics_port = int(os.getenv("METRICS_PORT", "9109"))
    max_body_bytes = int(os.getenv("MAX_BODY_BYTES", str(64 * 1024)))  # 64 KiB

    return Settings(
        host=host,
        port=port,
        log_level=log_level,
        metrics_enabled=metrics_enabled,
        metrics_port=metrics_port,
        max_body_bytes=max_body_bytes,
    )
