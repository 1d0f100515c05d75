from __future__ import annotations

from typing import Callable, Dict, Iterable

from .alert import AlertSpec, AlertTrigger
from .models import AlertCategory, AlertStatus


class AlertRegistry:
    """Ordered alert table; registration order is evaluation order."""

    def __init__(self):
        self._alerts: Dict[str, AlertSpec] = {}

    def register(self, spec: AlertSpec) -> None:
        if spec.alert_id in self._alerts:
            raise ValueError(f"Duplicate alert_id registered: {spec.alert_id}")
        self._alerts[spec.alert_id] = spec

    def all(self) -> list[AlertSpec]:
        return list(self._alerts.values())

    def get(self, alert_id: str) -> AlertSpec:
        return self._alerts[alert_id]

    def ids(self) -> Iterable[str]:
        return self._alerts.keys()

    def __contains__(self, alert_id: object) -> bool:
        return alert_id in self._alerts

    def __len__(self) -> int:
        return len(self._alerts)


registry = AlertRegistry()


def register_alert(
    *,
    alert_id: str,
    category: AlertCategory,
    title: str,
    description: str,
    status: AlertStatus,
    sort_score: int,
) -> Callable[[AlertTrigger], AlertTrigger]:
    def _decorator(trigger: AlertTrigger) -> AlertTrigger:
        registry.register(
            AlertSpec(
                alert_id=alert_id,
                category=category,
                title=title,
                description=description,
                status=status,
                sort_score=sort_score,
                trigger=trigger,
            )
        )
        return trigger

    return _decorator
