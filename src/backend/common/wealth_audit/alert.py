from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from .models import AlertCategory, AlertStatus, DerivedMetrics, FinancialInput

AlertTrigger = Callable[[FinancialInput, DerivedMetrics], bool]


@dataclass(frozen=True)
class AlertSpec:
    alert_id: str
    category: AlertCategory
    title: str
    description: str
    status: AlertStatus
    sort_score: int
    trigger: AlertTrigger

    def __post_init__(self):
        if not self.alert_id:
            raise ValueError("Alert must define alert_id")

    def is_triggered(self, inp: FinancialInput, derived: DerivedMetrics) -> bool:
        return bool(self.trigger(inp, derived))
