from __future__ import annotations

from typing import Iterable, Mapping, Optional, Sequence

from .alert import AlertSpec
from .config import DEFAULT_SELECTION_POLICY, SelectionPolicy
from .models import AlertStatus
from .registry import registry


def ranking_key(alert: AlertSpec) -> tuple[int, str]:
    # Higher score first; equal scores fall back to ascending id.
    return (-alert.sort_score, alert.alert_id)


def select_insights(
    triggered: Sequence[AlertSpec],
    *,
    policy: SelectionPolicy = DEFAULT_SELECTION_POLICY,
    library: Optional[Mapping[str, AlertSpec]] = None,
) -> list[AlertSpec]:
    """Reduce triggered alerts to the ordered list shown to the user.

    Phase one pins the snapshot first and the forced liquidity alert second;
    phase two fills the remaining slots from the score-ranked pool.
    """
    lookup = library if library is not None else {a.alert_id: a for a in registry.all()}
    snapshot = lookup[policy.snapshot_alert_id]

    candidates: dict[str, AlertSpec] = {}
    for alert in triggered:
        if alert.alert_id == policy.snapshot_alert_id:
            continue
        candidates.setdefault(alert.alert_id, alert)

    if not candidates:
        return [snapshot, lookup[policy.baseline_alert_id]]

    presented = [snapshot]

    forced = candidates.pop(policy.forced_alert_id, None)
    if forced is not None:
        presented.append(forced)

    pool = sorted(candidates.values(), key=ranking_key)
    open_slots = max(0, policy.max_presented - len(presented))
    presented.extend(pool[:open_slots])
    return presented


def headline_for(
    presented: Iterable[AlertSpec],
    *,
    policy: SelectionPolicy = DEFAULT_SELECTION_POLICY,
) -> str:
    if any(alert.status == AlertStatus.CRITICAL for alert in presented):
        return policy.critical_headline
    return policy.default_headline
