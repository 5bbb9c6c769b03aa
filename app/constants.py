from __future__ import annotations

import logging
import os

# Device endpoint (served by the wall-eno firmware)
STATUS_PATH = "/wall-eno/json-status"
DEVICE_URL: str = os.getenv("WALLENO_DEVICE_URL", "http://wall-eno.local")

# Text shown for a data field until the first successful poll
PLACEHOLDER = "-"
ERROR_PREFIX = "Failed to update wall-eno status: "

# Webserver bind (NiceGUI host/port)
SERVER_HOST: str = os.getenv("WALLENO_SERVER_IP", "0.0.0.0")
SERVER_PORT: int = int(os.getenv("WALLENO_SERVER_PORT", "8080"))


def _env_seconds(name: str, default: float) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    return value if value > 0 else default


# Poll cadence and per-request timeout
UPDATE_INTERVAL_S: float = _env_seconds("WALLENO_UPDATE_INTERVAL", 6.0)
REQUEST_TIMEOUT_S: float = _env_seconds("WALLENO_REQUEST_TIMEOUT", 5.0)


def _resolve_log_level() -> int:
    s = os.getenv("WALLENO_LOG_LEVEL")
    if s:
        name = s.strip().upper()
        mapping = {
            "DEBUG": logging.DEBUG,
            "INFO": logging.INFO,
            "WARNING": logging.WARNING,
            "ERROR": logging.ERROR,
            "CRITICAL": logging.CRITICAL,
        }
        return mapping.get(name, logging.WARNING)
    else:
        return logging.WARNING


LOG_LEVEL: int = _resolve_log_level()
