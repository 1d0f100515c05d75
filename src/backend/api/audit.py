from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, BackgroundTasks

from common.wealth_audit.catalog import build_catalog
from common.wealth_audit.engine import AuditEngine
from common.wealth_audit.models import AnalysisResult, FinancialInput
from connectors.webhook import LoggingSource, log_client_data
from pipelines.compliance_store import get_compliance_store, save_compliance_record

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/audit", tags=["audit"])

_ENGINE = AuditEngine()


def _store_compliance_record(result: AnalysisResult) -> None:
    try:
        store = get_compliance_store()
        if store is not None:
            record_id = save_compliance_record(store, result)
            logger.info("Stored compliance record %s", record_id)
    except (OSError, RuntimeError, ValueError) as exc:
        logger.error("Compliance record not stored: %s", exc)


def _record_audit(inp: FinancialInput, result: AnalysisResult) -> None:
    # Runs after the response is sent; nothing here may affect the audit result.
    try:
        log_client_data(LoggingSource.WEALTH_SIMULATOR, inp.model_dump(mode="json", by_alias=True))
        log_client_data(LoggingSource.WEALTH_SIMULATOR_ANALYSIS, result.to_wire())
    finally:
        _store_compliance_record(result)


@router.post("")
def run_audit(payload: FinancialInput, background_tasks: BackgroundTasks) -> dict[str, Any]:
    result = _ENGINE.run(payload)
    background_tasks.add_task(_record_audit, payload, result)
    return result.to_wire()


@router.get("/alerts")
def list_alerts() -> list[dict[str, Any]]:
    return [entry.model_dump(mode="json") for entry in build_catalog()]
