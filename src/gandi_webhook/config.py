"""Configuration loading and validation from environment variables."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

_GANDI_LIVEDNS_API = "https://api.gandi.net/v5/livedns"
_DEFAULT_LOG_LEVEL = "INFO"


@dataclass(frozen=True)
class WebhookConfig:
    """Process configuration loaded from environment variables."""

    group_name: str
    gandi_api_url: str = _GANDI_LIVEDNS_API
    log_level: str = _DEFAULT_LOG_LEVEL


def _require_env(name: str) -> str:
    value = os.environ.get(name)
    if not value:
        raise ValueError(f"Required environment variable {name} is not set")
    return value


def load_config() -> WebhookConfig:
    """Load and validate webhook configuration from environment variables."""
    group_name = _require_env("GROUP_NAME")
    gandi_api_url = os.environ.get("GANDI_API_URL", _GANDI_LIVEDNS_API).rstrip("/")

    log_level = os.environ.get("LOG_LEVEL", _DEFAULT_LOG_LEVEL).upper()
    if not isinstance(logging.getLevelName(log_level), int):
        raise ValueError(f"LOG_LEVEL must be a logging level name, got: {log_level!r}")

    return WebhookConfig(
        group_name=group_name,
        gandi_api_url=gandi_api_url,
        log_level=log_level,
    )
