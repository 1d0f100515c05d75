from __future__ import annotations

import http.client
from typing import Any, Dict, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from connectors.webhook import WebhookHttpError, build_log_payload, get_webhook_config, post_webhook


router = APIRouter(tags=["leads"])


class ClientLogRequest(BaseModel):
    # Any non-empty source is forwarded; LoggingSource lists the ones the site sends.
    source: Optional[str] = None
    data: Dict[str, Any] = Field(default_factory=dict)


@router.post("/log")
def log_client_data_endpoint(body: ClientLogRequest) -> dict[str, Any]:
    try:
        config = get_webhook_config()
    except ValueError as exc:
        raise HTTPException(status_code=500, detail="Logging failed") from exc
    if not config.enabled:
        return {"ok": False, "skipped": True}

    if not body.source:
        raise HTTPException(status_code=400, detail="Missing source")

    try:
        post_webhook(config, build_log_payload(body.source, body.data))
    except (WebhookHttpError, OSError, http.client.HTTPException) as exc:
        raise HTTPException(status_code=500, detail="Logging failed") from exc
    return {"ok": True}
