from __future__ import annotations

from typing import Iterable, Optional

from .alert import AlertSpec
from .config import DEFAULT_SELECTION_POLICY, SelectionPolicy
from .models import DerivedMetrics, FinancialInput
from .registry import registry


def evaluate_alerts(
    inp: FinancialInput,
    derived: DerivedMetrics,
    *,
    library: Optional[Iterable[AlertSpec]] = None,
    policy: SelectionPolicy = DEFAULT_SELECTION_POLICY,
) -> list[AlertSpec]:
    """Return every alert whose trigger holds, in table order.

    The baseline alert is never evaluated here; it only appears as the
    selector's no-signal fallback.
    """
    alerts = list(library) if library is not None else registry.all()
    return [
        alert
        for alert in alerts
        if alert.alert_id != policy.baseline_alert_id and alert.is_triggered(inp, derived)
    ]
