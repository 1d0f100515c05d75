from __future__ import annotations

import json
import logging
import os
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional, Protocol

from dotenv import load_dotenv

from common.wealth_audit.models import AnalysisResult

logger = logging.getLogger(__name__)

load_dotenv()


class ComplianceStore(Protocol):
    def save_json(self, *, generated_on: str, record_id: str, payload: dict[str, Any]) -> None:
        ...


@dataclass(frozen=True)
class LocalComplianceStore:
    root_dir: Path

    def save_json(self, *, generated_on: str, record_id: str, payload: dict[str, Any]) -> None:
        out_dir = self.root_dir / generated_on
        out_dir.mkdir(parents=True, exist_ok=True)
        out_path = out_dir / f"{record_id}.json"
        out_path.write_text(json.dumps(payload, indent=2))


def _blob_account_url(explicit: str | None = None) -> str:
    account_url = (explicit or os.getenv("AZURE_STORAGE_ACCOUNT_URL", "")).strip()
    if account_url:
        return account_url
    account_name = os.getenv("AZURE_STORAGE_ACCOUNT_NAME", "").strip()
    if not account_name:
        raise RuntimeError("Blob compliance storage needs AZURE_STORAGE_ACCOUNT_URL or AZURE_STORAGE_ACCOUNT_NAME.")
    return f"https://{account_name}.blob.core.windows.net"


class BlobComplianceStore:
    """Compliance records as JSON blobs named `[<prefix>/]<yyyy-mm-dd>/<record_id>.json`."""

    def __init__(
        self,
        *,
        container_name: str | None = None,
        account_url: str | None = None,
        prefix: str = "",
    ) -> None:
        try:
            from azure.identity import DefaultAzureCredential
            from azure.storage.blob import BlobServiceClient, ContentSettings
        except ImportError as exc:
            raise RuntimeError("Install the 'azure' extra to store compliance records in blob storage.") from exc

        self._service = BlobServiceClient(
            account_url=_blob_account_url(account_url),
            credential=DefaultAzureCredential(),
        )
        self.container_name = container_name or os.getenv("COMPLIANCE_BLOB_CONTAINER", "").strip() or "compliance"
        self._prefix = prefix.strip("/")
        self._content_settings = ContentSettings(content_type="application/json")

    def blob_name(self, *, generated_on: str, record_id: str) -> str:
        name = f"{generated_on}/{record_id}.json"
        return f"{self._prefix}/{name}" if self._prefix else name

    def save_json(self, *, generated_on: str, record_id: str, payload: dict[str, Any]) -> None:
        blob = self.blob_name(generated_on=generated_on, record_id=record_id)
        self._service.get_container_client(self.container_name).upload_blob(
            blob,
            json.dumps(payload, indent=2),
            overwrite=True,
            content_settings=self._content_settings,
        )
        logger.debug("Uploaded compliance record to %s/%s", self.container_name, blob)


def build_compliance_payload(result: AnalysisResult, *, record_id: str) -> dict[str, Any]:
    wire = result.to_wire()
    return {
        "recordId": record_id,
        "headline": wire["headline"],
        "keyFacts": wire["keyFacts"],
        "compliance": wire["compliance"],
    }


def _generated_on(result: AnalysisResult) -> str:
    stamp = result.compliance.generated_at_iso.replace("Z", "+00:00")
    try:
        return datetime.fromisoformat(stamp).date().isoformat()
    except ValueError:
        return datetime.now(timezone.utc).date().isoformat()


def save_compliance_record(
    store: ComplianceStore,
    result: AnalysisResult,
    *,
    record_id: Optional[str] = None,
) -> str:
    record_id = record_id or uuid.uuid4().hex
    store.save_json(
        generated_on=_generated_on(result),
        record_id=record_id,
        payload=build_compliance_payload(result, record_id=record_id),
    )
    return record_id


def default_local_compliance_store() -> LocalComplianceStore:
    root = os.getenv("COMPLIANCE_STORE_DIR", "").strip()
    if root:
        return LocalComplianceStore(root_dir=Path(root))
    return LocalComplianceStore(root_dir=Path(__file__).resolve().parents[3] / "data" / "compliance")


def get_compliance_store(name: str | None = None) -> ComplianceStore | None:
    """Resolve the compliance store from COMPLIANCE_STORE (none|local|blob)."""
    choice = (name if name is not None else os.getenv("COMPLIANCE_STORE", "none")).strip().lower()
    if choice in ("", "none"):
        return None
    if choice == "local":
        return default_local_compliance_store()
    if choice == "blob":
        return BlobComplianceStore()
    raise ValueError(f"Unknown compliance store '{choice}' (expected 'none', 'local' or 'blob').")
