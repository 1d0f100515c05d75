from __future__ import annotations

import json
import logging
import time
from datetime import datetime, timezone
from enum import Enum
from http.client import HTTPException
from typing import Any, Mapping, Optional
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from .config import WebhookConfig, get_webhook_config

logger = logging.getLogger(__name__)


class LoggingSource(str, Enum):
    WEALTH_SIMULATOR = "WEALTH_SIMULATOR"
    WEALTH_SIMULATOR_ANALYSIS = "WEALTH_SIMULATOR_ANALYSIS"
    INTAKE_FORM = "INTAKE_FORM"
    NEWSLETTER = "NEWSLETTER"


class WebhookHttpError(RuntimeError):
    def __init__(self, status: int, message: str, body: str | None = None):
        super().__init__(f"Webhook HTTP {status}: {message}")
        self.status = status
        self.body = body


def build_log_payload(
    source: LoggingSource | str,
    data: Mapping[str, Any],
    *,
    now: Optional[datetime] = None,
) -> dict[str, Any]:
    # `data` keys win over timestamp/source, matching the spread order of the form payloads.
    stamp = (now or datetime.now(timezone.utc)).isoformat()
    source_value = source.value if isinstance(source, LoggingSource) else str(source)
    return {"timestamp": stamp, "source": source_value, **dict(data)}


def post_webhook(
    config: WebhookConfig,
    payload: Mapping[str, Any],
    *,
    sleep=time.sleep,
) -> Any:
    """
    POST a JSON payload to the configured webhook.

    Retries 429/5xx and connection errors with exponential backoff; any other
    failure raises WebhookHttpError.
    """
    if not config.url:
        raise ValueError("Webhook URL is not configured.")

    body = json.dumps(payload, default=str).encode("utf-8")
    retries = 0
    backoff = 0.5

    while True:
        req = Request(config.url, data=body, method="POST")
        req.add_header("Content-Type", "application/json")
        req.add_header("Accept", "application/json")

        try:
            with urlopen(req, timeout=config.timeout_seconds) as resp:
                raw = resp.read().decode("utf-8")
                if not raw.strip():
                    return None
                try:
                    return json.loads(raw)
                except json.JSONDecodeError:
                    return raw
        except HTTPError as exc:
            err_body = exc.read().decode("utf-8") if exc.fp else None
            status = exc.code

            if status in (429, 500, 502, 503, 504) and retries < config.max_retries:
                sleep(backoff)
                retries += 1
                backoff *= 2
                continue

            raise WebhookHttpError(status, exc.reason, err_body) from exc
        except URLError as exc:
            if retries < config.max_retries:
                sleep(backoff)
                retries += 1
                backoff *= 2
                continue
            raise WebhookHttpError(0, str(exc)) from exc


def log_client_data(
    source: LoggingSource | str,
    data: Mapping[str, Any],
    *,
    config: Optional[WebhookConfig] = None,
) -> bool:
    """
    Best-effort lead logging.

    Returns True when the webhook accepted the payload. A missing URL, a bad
    webhook setting or a transport failure is logged and reported as False so
    callers never block on it.
    """
    source_value = source.value if isinstance(source, LoggingSource) else str(source)
    try:
        cfg = config or get_webhook_config()
        if not cfg.enabled:
            logger.warning("Logging webhook URL is not set; %s data was not sent.", source_value)
            return False
        post_webhook(cfg, build_log_payload(source, data))
    except (WebhookHttpError, OSError, ValueError, HTTPException) as exc:
        logger.error("[%s] Logging failed: %s", source_value, exc)
        return False

    logger.info("[%s] Data logged successfully.", source_value)
    return True
