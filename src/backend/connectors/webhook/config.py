from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv


load_dotenv()


@dataclass(frozen=True)
class WebhookConfig:
    url: str
    timeout_seconds: int = 10
    max_retries: int = 2

    @property
    def enabled(self) -> bool:
        return bool(self.url)


def get_webhook_config() -> WebhookConfig:
    """
    Load lead-logging webhook configuration from environment variables.

    Reads AUDIT_LOGGING_WEBHOOK_URL (empty disables logging),
    AUDIT_WEBHOOK_TIMEOUT_SECONDS and AUDIT_WEBHOOK_MAX_RETRIES.
    """
    return WebhookConfig(
        url=os.getenv("AUDIT_LOGGING_WEBHOOK_URL", "").strip(),
        timeout_seconds=_int_env("AUDIT_WEBHOOK_TIMEOUT_SECONDS", 10),
        max_retries=_int_env("AUDIT_WEBHOOK_MAX_RETRIES", 2),
    )


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer (got {raw!r}).") from exc
    if value < 0:
        raise ValueError(f"{name} must be non-negative.")
    return value
