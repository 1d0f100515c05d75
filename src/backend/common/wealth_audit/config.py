from __future__ import annotations

from typing import Any, Dict, FrozenSet, List, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from .models import FilingStatus

T = TypeVar("T", bound=BaseModel)


class TaxBracket(BaseModel):
    model_config = ConfigDict(frozen=True)

    # Upper bound of taxable income taxed at `rate`; the top bracket uses float("inf").
    cap: float
    rate: float


def _brackets(pairs: List[tuple[float, float]]) -> List[TaxBracket]:
    return [TaxBracket(cap=cap, rate=rate) for cap, rate in pairs]


SINGLE_BRACKETS_2026 = _brackets(
    [
        (12400, 0.10),
        (50400, 0.12),
        (105700, 0.22),
        (201775, 0.24),
        (256225, 0.32),
        (640600, 0.35),
        (float("inf"), 0.37),
    ]
)

MFJ_BRACKETS_2026 = _brackets(
    [
        (24800, 0.10),
        (100800, 0.12),
        (211400, 0.22),
        (403550, 0.24),
        (512450, 0.32),
        (768700, 0.35),
        (float("inf"), 0.37),
    ]
)

NO_INCOME_TAX_STATES = frozenset({"TX", "FL", "NV", "WA", "TN", "NH", "SD", "WY", "AK"})
HIGH_TAX_STATES = frozenset({"CA", "NY", "NJ", "HI", "OR", "MN"})


class TaxYearConfig(BaseModel):
    """Reference-year tax constants (simplified, federal + flat state)."""

    model_config = ConfigDict(frozen=True)

    tax_year: int = 2026

    standard_deduction_single: float = 16100
    standard_deduction_mfj: float = 32200

    elective_deferral_limit: float = 23500
    hsa_limit_single: float = 4300
    hsa_limit_mfj: float = 8550

    single_brackets: List[TaxBracket] = Field(default_factory=lambda: list(SINGLE_BRACKETS_2026))
    mfj_brackets: List[TaxBracket] = Field(default_factory=lambda: list(MFJ_BRACKETS_2026))

    social_security_wage_base: float = 176100
    social_security_rate: float = 0.062
    medicare_rate: float = 0.0145
    additional_medicare_rate: float = 0.009
    additional_medicare_threshold_single: float = 200000
    additional_medicare_threshold_mfj: float = 250000

    no_income_tax_states: FrozenSet[str] = NO_INCOME_TAX_STATES
    high_tax_states: FrozenSet[str] = HIGH_TAX_STATES
    high_tax_state_rate: float = 0.09
    default_state_rate: float = 0.045

    def is_mfj(self, filing_status: FilingStatus) -> bool:
        # Only MFJ gets joint thresholds; "Other" is taxed on the single schedule.
        return filing_status == FilingStatus.MARRIED_FILING_JOINTLY

    def brackets_for(self, filing_status: FilingStatus) -> List[TaxBracket]:
        return self.mfj_brackets if self.is_mfj(filing_status) else self.single_brackets

    def standard_deduction_for(self, filing_status: FilingStatus) -> float:
        if self.is_mfj(filing_status):
            return self.standard_deduction_mfj
        return self.standard_deduction_single

    def hsa_limit_for(self, filing_status: FilingStatus) -> float:
        return self.hsa_limit_mfj if self.is_mfj(filing_status) else self.hsa_limit_single

    def additional_medicare_threshold_for(self, filing_status: FilingStatus) -> float:
        if self.is_mfj(filing_status):
            return self.additional_medicare_threshold_mfj
        return self.additional_medicare_threshold_single

    def state_rate_for(self, state: str) -> float:
        code = (state or "").strip().upper()
        if code in self.no_income_tax_states:
            return 0.0
        if code in self.high_tax_states:
            return self.high_tax_state_rate
        return self.default_state_rate


class SelectionPolicy(BaseModel):
    model_config = ConfigDict(frozen=True)

    max_presented: int = 6
    snapshot_alert_id: str = "HUMAN_CAPITAL_SNAPSHOT"
    baseline_alert_id: str = "BASELINE_OK_01"
    # Placed directly after the snapshot whenever it triggers, regardless of score.
    forced_alert_id: str = "LIQ_CRITICAL_01"

    critical_headline: str = "Immediate Action Items Detected"
    default_headline: str = "Wealth Accumulation Audit Complete"


def load_config(model: Type[T], raw: Optional[Dict[str, Any]] = None) -> T:
    """Build a config model from an optional override mapping (defaults otherwise)."""
    if not raw:
        return model()  # type: ignore[call-arg]
    return model.model_validate(raw)


DEFAULT_TAX_CONFIG = TaxYearConfig()
DEFAULT_SELECTION_POLICY = SelectionPolicy()
