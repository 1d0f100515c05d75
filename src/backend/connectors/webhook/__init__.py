"""Lead-logging webhook connector (network lives here; the audit engine never calls it)."""

from .client import LoggingSource, WebhookHttpError, build_log_payload, log_client_data, post_webhook
from .config import WebhookConfig, get_webhook_config

__all__ = [
    "LoggingSource",
    "WebhookConfig",
    "WebhookHttpError",
    "build_log_payload",
    "get_webhook_config",
    "log_client_data",
    "post_webhook",
]
