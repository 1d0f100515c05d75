from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Iterable, Mapping, Optional, Sequence, Union

from .alert import AlertSpec
from .config import DEFAULT_SELECTION_POLICY, DEFAULT_TAX_CONFIG, SelectionPolicy, TaxYearConfig
from .evaluator import evaluate_alerts
from .metrics import derive_metrics
from .models import (
    AnalysisResult,
    ComplianceRecord,
    DerivedMetrics,
    FinancialInput,
    KeyFacts,
    PresentedInsight,
    TaxEstimate,
)
from .registry import registry
from .selector import headline_for, select_insights
from .tax import estimate_tax

logger = logging.getLogger(__name__)

ENGINE_VERSION = "wealth-audit-engine@1.0.0"

HIDDEN_ROADMAP_ITEMS = (
    "These observations reflect common patterns seen among high-income accumulators.",
    "A short discovery call can help determine whether any of these areas warrant deeper review.",
)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def assemble_result(
    *,
    inp: FinancialInput,
    derived: DerivedMetrics,
    tax: TaxEstimate,
    triggered: Sequence[AlertSpec],
    presented: Sequence[AlertSpec],
    generated_at: datetime,
    policy: SelectionPolicy = DEFAULT_SELECTION_POLICY,
) -> AnalysisResult:
    key_facts = KeyFacts(
        total_comp=derived.total_comp_current,
        effective_tax_rate=tax.effective_rate,
        total_tax_est=tax.total_tax,
        monthly_surplus=derived.monthly_surplus,
        savings_rate=derived.savings_rate,
        cash_runway_months=derived.cash_runway_months,
        net_worth_ex_home=inp.net_worth,
    )
    return AnalysisResult(
        headline=headline_for(presented, policy=policy),
        key_facts=key_facts,
        presented_insights=[
            PresentedInsight(title=a.title, description=a.description, status=a.status)
            for a in presented
        ],
        hidden_roadmap_items=list(HIDDEN_ROADMAP_ITEMS),
        compliance=ComplianceRecord(
            engine_version=ENGINE_VERSION,
            generated_at_iso=format_timestamp(generated_at),
            raw_input=inp,
            derived=derived,
            triggered_alert_ids=[a.alert_id for a in triggered],
            presented_alert_ids=[a.alert_id for a in presented],
        ),
    )


class AuditEngine:
    def __init__(
        self,
        alerts: Optional[Iterable[AlertSpec]] = None,
        *,
        tax_config: Optional[TaxYearConfig] = None,
        policy: Optional[SelectionPolicy] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._alerts = list(alerts) if alerts is not None else registry.all()
        self._lookup = {a.alert_id: a for a in self._alerts}
        self._tax_config = tax_config or DEFAULT_TAX_CONFIG
        self._policy = policy or DEFAULT_SELECTION_POLICY
        self._clock = clock or _utc_now

    def run(self, inp: Union[FinancialInput, Mapping[str, Any]]) -> AnalysisResult:
        if not isinstance(inp, FinancialInput):
            inp = FinancialInput.model_validate(inp)

        derived = derive_metrics(inp)
        tax = estimate_tax(inp, derived.total_comp_current, self._tax_config)
        triggered = evaluate_alerts(inp, derived, library=self._alerts, policy=self._policy)
        presented = select_insights(triggered, policy=self._policy, library=self._lookup)

        logger.debug(
            "Wealth audit evaluated: triggered=%s presented=%s",
            [a.alert_id for a in triggered],
            [a.alert_id for a in presented],
        )

        return assemble_result(
            inp=inp,
            derived=derived,
            tax=tax,
            triggered=triggered,
            presented=presented,
            generated_at=self._clock(),
            policy=self._policy,
        )


def compute_audit(inp: Union[FinancialInput, Mapping[str, Any]]) -> AnalysisResult:
    return AuditEngine().run(inp)
