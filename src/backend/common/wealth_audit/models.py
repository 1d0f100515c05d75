from __future__ import annotations

from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class FilingStatus(str, Enum):
    SINGLE = "Single"
    MARRIED_FILING_JOINTLY = "Married Filing Jointly"
    OTHER = "Other"


class YesNoUnsure(str, Enum):
    YES = "Yes"
    NO = "No"
    UNSURE = "Unsure"


class CpaRelationship(str, Enum):
    YES = "Yes"
    NO = "No"
    SOMETIMES = "Sometimes"


class EquityType(str, Enum):
    RSUS = "RSUs"
    ISOS = "ISOs"
    NSOS = "NSOs"
    ESPP = "ESPP"
    OTHER = "Other"
    NONE = "None"


class SurplusAllocation(str, Enum):
    RETIREMENT = "Retirement"
    TAXABLE = "Taxable"
    CASH = "Cash"
    VARIES = "Varies"


class RetirementSplit(str, Enum):
    MOSTLY_TRADITIONAL = "MostlyTraditional"
    ROUGHLY_SPLIT = "Roughly split"
    MOSTLY_ROTH = "MostlyRoth"
    UNSURE = "Unsure"


class HousingStatus(str, Enum):
    RENT = "rent"
    OWN = "own"


class DisabilityCoverage(str, Enum):
    NONE = "None"
    WORK = "Work"
    PRIVATE = "Private"
    BOTH = "Both"


class LifeCoverage(str, Enum):
    NONE = "None"
    WORK = "Work"
    PRIVATE = "Private"
    BOTH = "Both"
    NOT_APPLICABLE = "NA"


class EstateReviewRecency(str, Enum):
    WITHIN_3_YEARS = "Within the last 3 years"
    THREE_TO_FIVE_YEARS = "3–5 years ago"
    MORE_THAN_5_YEARS = "More than 5 years ago"
    NEVER_OR_UNSURE = "Never / Unsure"


class VolatilityLevel(str, Enum):
    HIGH = "High"
    MODERATE = "Moderate"
    LOW = "Low"


class AlertStatus(str, Enum):
    CRITICAL = "critical"
    WARNING = "warning"
    INFO = "info"


class AlertCategory(str, Enum):
    HUMAN_CAPITAL = "human_capital"
    LIQUIDITY = "liquidity"
    TAX = "tax"
    RISK = "risk"
    OTHER = "other"


class _WireModel(BaseModel):
    # Wire format is camelCase (form payloads / JSON responses); attributes stay snake_case.
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


_NUMERIC_FIELDS = (
    "age",
    "kids_count",
    "annual_base_income",
    "annual_variable_comp",
    "last_year_total_comp",
    "equity_grant_value",
    "monthly_take_home",
    "monthly_spending",
    "net_worth",
    "retirement_balance",
    "cash_holdings",
    "monthly_housing_payment",
    "mortgage_balance",
    "home_value",
)


class FinancialInput(_WireModel):
    """Questionnaire answers for one household; the engine's only input.

    Missing fields fall back to zero / empty / neutral enum members. Values are
    not range-checked: negative amounts flow through the arithmetic unchanged.
    """

    # General profile
    first_name: str = ""
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    age: int = 0
    kids_count: int = 0
    filing_status: FilingStatus = FilingStatus.SINGLE
    state: str = ""
    financial_objectives: List[str] = Field(default_factory=list)
    primary_concern: str = ""
    job_title: str = ""
    employer: str = ""
    additional_notes: str = ""

    # Income & tax
    annual_base_income: float = 0.0
    annual_variable_comp: float = 0.0
    last_year_total_comp: float = 0.0
    equity_compensation: List[EquityType] = Field(default_factory=list)
    equity_grant_value: float = 0.0
    maxing_401k: YesNoUnsure = Field(default=YesNoUnsure.UNSURE, alias="maxing401k")
    hsa_eligible: YesNoUnsure = YesNoUnsure.UNSURE
    hsa_contributing: YesNoUnsure = YesNoUnsure.UNSURE
    has_cpa: CpaRelationship = Field(default=CpaRelationship.SOMETIMES, alias="hasCPA")
    has_self_employment_income: bool = False
    has_real_estate_investments: bool = False

    # Cash flow
    monthly_take_home: float = 0.0
    monthly_spending: float = 0.0
    runs_surplus: YesNoUnsure = YesNoUnsure.YES
    surplus_allocation: SurplusAllocation = SurplusAllocation.VARIES
    has_savings_system: bool = True

    # Assets & liquidity (net worth excludes the primary home)
    net_worth: float = 0.0
    retirement_balance: float = 0.0
    retirement_split: RetirementSplit = RetirementSplit.UNSURE
    cash_holdings: float = 0.0
    has_concentrated_position: bool = False
    housing_status: HousingStatus = HousingStatus.RENT
    monthly_housing_payment: float = 0.0
    mortgage_balance: float = 0.0
    home_value: float = 0.0

    # Risk & estate
    disability_coverage: DisabilityCoverage = DisabilityCoverage.WORK
    life_insurance_coverage: LifeCoverage = LifeCoverage.NOT_APPLICABLE
    has_whole_life: YesNoUnsure = YesNoUnsure.NO
    has_umbrella: YesNoUnsure = YesNoUnsure.UNSURE
    has_estate_plan: YesNoUnsure = YesNoUnsure.UNSURE
    estate_last_reviewed: EstateReviewRecency = EstateReviewRecency.NEVER_OR_UNSURE

    @field_validator(*_NUMERIC_FIELDS, mode="before")
    @classmethod
    def _blank_as_zero(cls, value: Any) -> Any:
        if value is None or value == "":
            return 0
        return value

    @field_validator("state", mode="before")
    @classmethod
    def _blank_state(cls, value: Any) -> Any:
        # Stored as given; the state-rate lookup does its own case folding.
        return "" if value is None else value

    @property
    def is_married_filing_jointly(self) -> bool:
        return self.filing_status == FilingStatus.MARRIED_FILING_JOINTLY


class DerivedMetrics(BaseModel):
    # Compliance logs carry these under their snake_case names.
    model_config = ConfigDict(frozen=True)

    total_comp_current: float
    variable_pct: float
    income_volatility_level: VolatilityLevel
    required_liquidity_months: int
    monthly_surplus: float
    annual_surplus: float
    cash_runway_months: float
    income_change_pct: float
    has_dependents: bool
    investable_assets_est: float
    human_capital_est: float
    human_capital_multiple: float

    @property
    def savings_rate(self) -> float:
        return self.annual_surplus / max(self.total_comp_current, 1)


class TaxEstimate(_WireModel):
    total_tax: float
    effective_rate: float

    agi: float = 0.0
    taxable_income: float = 0.0
    federal_tax: float = 0.0
    social_security_tax: float = 0.0
    medicare_tax: float = 0.0
    additional_medicare_tax: float = 0.0
    state_tax: float = 0.0
    state_rate: float = 0.0
    marginal_rate: float = 0.0


class KeyFacts(_WireModel):
    total_comp: float
    effective_tax_rate: float
    total_tax_est: float
    monthly_surplus: float
    savings_rate: float
    cash_runway_months: float
    net_worth_ex_home: float


class PresentedInsight(_WireModel):
    title: str
    description: str
    status: AlertStatus


class ComplianceRecord(_WireModel):
    engine_version: str
    generated_at_iso: str = Field(alias="generatedAtISO")
    raw_input: FinancialInput
    derived: DerivedMetrics
    triggered_alert_ids: List[str] = Field(default_factory=list)
    presented_alert_ids: List[str] = Field(default_factory=list)


class AnalysisResult(_WireModel):
    headline: str
    key_facts: KeyFacts
    presented_insights: List[PresentedInsight] = Field(default_factory=list)
    hidden_roadmap_items: List[str] = Field(default_factory=list)
    compliance: ComplianceRecord

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)
