from __future__ import annotations

import argparse
import json
from typing import Any, List

import yaml
from pydantic import BaseModel

from .config import DEFAULT_SELECTION_POLICY, SelectionPolicy
from .models import AlertCategory, AlertStatus
from .registry import registry

# Ensure built-in alerts are imported/registered when generating a catalog.
from . import alerts as _builtin_alerts  # noqa: F401


class AlertCatalogEntry(BaseModel):
    alert_id: str
    category: AlertCategory
    title: str
    description: str
    status: AlertStatus
    sort_score: int
    # snapshot | baseline | standard
    role: str
    table_position: int
    module: str
    trigger_name: str


def _role_for(alert_id: str, policy: SelectionPolicy) -> str:
    if alert_id == policy.snapshot_alert_id:
        return "snapshot"
    if alert_id == policy.baseline_alert_id:
        return "baseline"
    return "standard"


def build_catalog(policy: SelectionPolicy = DEFAULT_SELECTION_POLICY) -> List[AlertCatalogEntry]:
    entries: List[AlertCatalogEntry] = []
    for position, alert in enumerate(registry.all()):
        entries.append(
            AlertCatalogEntry(
                alert_id=alert.alert_id,
                category=alert.category,
                title=alert.title,
                description=alert.description,
                status=alert.status,
                sort_score=alert.sort_score,
                role=_role_for(alert.alert_id, policy),
                table_position=position,
                module=getattr(alert.trigger, "__module__", ""),
                trigger_name=getattr(alert.trigger, "__name__", ""),
            )
        )

    entries.sort(key=lambda e: e.alert_id)
    return entries


def _dump_json(catalog: list[dict[str, Any]]) -> str:
    return json.dumps(catalog, indent=2, sort_keys=True)


def _dump_yaml(catalog: list[dict[str, Any]]) -> str:
    return yaml.safe_dump(catalog, sort_keys=True, allow_unicode=True)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Generate the wealth audit alert catalog from the registry.")
    parser.add_argument(
        "--format",
        choices=("yaml", "json"),
        default="yaml",
        help="Output format (default: yaml).",
    )
    args = parser.parse_args(argv)

    catalog = [e.model_dump(mode="json") for e in build_catalog()]
    if args.format == "json":
        print(_dump_json(catalog))
    else:
        print(_dump_yaml(catalog))


if __name__ == "__main__":
    main()
