"""Built-in alert library.

Definition order is table order: it fixes evaluation order and the order of
`triggered_alert_ids`. Presentation order is decided by the selector.
"""

from __future__ import annotations

from .models import (
    AlertCategory,
    AlertStatus,
    CpaRelationship,
    DerivedMetrics,
    DisabilityCoverage,
    EquityType,
    EstateReviewRecency,
    FilingStatus,
    FinancialInput,
    HousingStatus,
    LifeCoverage,
    RetirementSplit,
    VolatilityLevel,
    YesNoUnsure,
)
from .registry import register_alert

SNAPSHOT_ALERT_ID = "HUMAN_CAPITAL_SNAPSHOT"
BASELINE_ALERT_ID = "BASELINE_OK_01"
LIQUIDITY_CRITICAL_ALERT_ID = "LIQ_CRITICAL_01"

# Start of the 24% federal bracket, expressed as gross compensation.
HIGH_INCOME_SINGLE = 201776
HIGH_INCOME_MFJ = 403551

# Commonly cited direct Roth IRA contribution ceilings.
ROTH_LIMIT_SINGLE = 161000
ROTH_LIMIT_MFJ = 240000


def is_high_income(inp: FinancialInput, derived: DerivedMetrics) -> bool:
    if inp.filing_status == FilingStatus.SINGLE:
        return derived.total_comp_current >= HIGH_INCOME_SINGLE
    if inp.filing_status == FilingStatus.MARRIED_FILING_JOINTLY:
        return derived.total_comp_current >= HIGH_INCOME_MFJ
    return False


@register_alert(
    alert_id=SNAPSHOT_ALERT_ID,
    category=AlertCategory.HUMAN_CAPITAL,
    title="Human Capital Snapshot",
    description=(
        "Based on your inputs, your future earning potential may be a meaningful financial asset alongside "
        "your current net worth. For accumulators with a large share of lifetime earnings ahead, the ability "
        "to convert income into long-term assets can materially influence flexibility over time."
    ),
    status=AlertStatus.INFO,
    sort_score=2000,
)
def human_capital_snapshot(inp: FinancialInput, derived: DerivedMetrics) -> bool:
    return True


@register_alert(
    alert_id=LIQUIDITY_CRITICAL_ALERT_ID,
    category=AlertCategory.LIQUIDITY,
    title="Critical Liquidity Risk",
    description=(
        "Based on your inputs, your liquid reserves appear lower than what is commonly maintained by "
        "households with volatile income. In periods of income disruption—such as a commission slowdown, "
        "equity timing delay, or job transition—this may increase the risk of forced financial or career "
        "decisions."
    ),
    status=AlertStatus.CRITICAL,
    sort_score=1000,
)
def critical_liquidity(inp: FinancialInput, derived: DerivedMetrics) -> bool:
    volatile = derived.income_volatility_level in (VolatilityLevel.HIGH, VolatilityLevel.MODERATE)
    return volatile and derived.cash_runway_months < 6


@register_alert(
    alert_id="CF_NEG_01",
    category=AlertCategory.LIQUIDITY,
    title="Negative Cash Flow Pattern",
    description=(
        "Your reported monthly spending exceeds your take-home income. Over time, patterns like this can "
        "place pressure on savings and reduce flexibility, particularly during income volatility."
    ),
    status=AlertStatus.CRITICAL,
    sort_score=950,
)
def negative_cash_flow(inp: FinancialInput, derived: DerivedMetrics) -> bool:
    return derived.monthly_surplus < 0


@register_alert(
    alert_id="HC_CONVERSION_01",
    category=AlertCategory.HUMAN_CAPITAL,
    title="Human Capital Conversion Gap",
    description=(
        "Your projected future earnings substantially exceed your current invested assets. When a large "
        "share of lifetime earnings is still ahead, the effectiveness of converting income into long-term "
        "assets can meaningfully influence future outcomes."
    ),
    status=AlertStatus.CRITICAL,
    sort_score=900,
)
def human_capital_conversion_gap(inp: FinancialInput, derived: DerivedMetrics) -> bool:
    return derived.human_capital_est > 5 * inp.net_worth and derived.savings_rate < 0.20


@register_alert(
    alert_id="INS_DIS_NONE_01",
    category=AlertCategory.OTHER,
    title="Disability Coverage Gap",
    description=(
        "You indicated no disability coverage. For working households, income is often the primary "
        "financial asset, and limited protection may increase vulnerability to unexpected disruptions."
    ),
    status=AlertStatus.CRITICAL,
    sort_score=850,
)
def disability_coverage_gap(inp: FinancialInput, derived: DerivedMetrics) -> bool:
    return inp.disability_coverage == DisabilityCoverage.NONE and inp.age <= 50


@register_alert(
    alert_id="INS_LIFE_NONE_DEP_01",
    category=AlertCategory.OTHER,
    title="Life Coverage Gap (Dependents)",
    description=(
        "You indicated no life insurance coverage while others may rely on your income. In similar "
        "situations, households often review how income disruption could affect longer-term plans."
    ),
    status=AlertStatus.CRITICAL,
    sort_score=800,
)
def life_coverage_gap(inp: FinancialInput, derived: DerivedMetrics) -> bool:
    return inp.life_insurance_coverage == LifeCoverage.NONE and derived.has_dependents


@register_alert(
    alert_id="ESTATE_NONE_KIDS_01",
    category=AlertCategory.OTHER,
    title="Guardianship Planning Gap",
    description=(
        "You indicated no estate planning documents while having dependent children. In many households, "
        "this is where guardianship preferences are formally documented, which can reduce uncertainty "
        "during unexpected events."
    ),
    status=AlertStatus.CRITICAL,
    sort_score=750,
)
def guardianship_gap(inp: FinancialInput, derived: DerivedMetrics) -> bool:
    return inp.has_estate_plan == YesNoUnsure.NO and derived.has_dependents


@register_alert(
    alert_id="RISK_CONC_01",
    category=AlertCategory.RISK,
    title="Concentrated Position Noted",
    description=(
        "You indicated a concentrated position in a single holding. Concentration can increase portfolio "
        "volatility, and some households evaluate a range of risk-management approaches depending on "
        "taxes, timelines, and constraints."
    ),
    status=AlertStatus.CRITICAL,
    sort_score=700,
)
def concentrated_position(inp: FinancialInput, derived: DerivedMetrics) -> bool:
    return inp.has_concentrated_position


@register_alert(
    alert_id="LIQ_LOW_LOWVOL_01",
    category=AlertCategory.LIQUIDITY,
    title="Liquidity Below 3-Month Baseline",
    description=(
        "Based on your inputs, your liquid reserves appear below a commonly used 3-month baseline. In some "
        "cases, this can increase sensitivity to unexpected expenses or short-term income disruption."
    ),
    status=AlertStatus.WARNING,
    sort_score=640,
)
def low_liquidity_low_volatility(inp: FinancialInput, derived: DerivedMetrics) -> bool:
    return derived.income_volatility_level == VolatilityLevel.LOW and derived.cash_runway_months < 3


@register_alert(
    alert_id="SAVE_RATE_01",
    category=AlertCategory.LIQUIDITY,
    title="Savings Rate Below Accumulator Norms",
    description=(
        "Based on your inputs, the portion of income being saved appears lower than what is commonly seen "
        "among high-income accumulators focused on building long-term flexibility."
    ),
    status=AlertStatus.WARNING,
    sort_score=630,
)
def low_savings_rate(inp: FinancialInput, derived: DerivedMetrics) -> bool:
    return derived.savings_rate < 0.20 and derived.monthly_surplus > 0


@register_alert(
    alert_id="TAX_PRETAX_01",
    category=AlertCategory.TAX,
    title="Limited Pre-Tax Utilization at Higher Income",
    description=(
        "At higher income levels, taxes can meaningfully affect how income converts into long-term wealth. "
        "Your inputs suggest some commonly used pre-tax strategies may not be fully utilized."
    ),
    status=AlertStatus.WARNING,
    sort_score=620,
)
def limited_pretax_utilization(inp: FinancialInput, derived: DerivedMetrics) -> bool:
    return is_high_income(inp, derived) and inp.maxing_401k == YesNoUnsure.NO


@register_alert(
    alert_id="EQ_GRANT_CONC_01",
    category=AlertCategory.RISK,
    title="Equity Grant Concentration",
    description=(
        "A significant portion of your compensation appears tied to equity grants. In similar situations, "
        "timing, concentration, and tax treatment can influence how reliably income translates into usable "
        "capital."
    ),
    status=AlertStatus.WARNING,
    sort_score=610,
)
def equity_grant_concentration(inp: FinancialInput, derived: DerivedMetrics) -> bool:
    # An empty equity list counts as "not None"; only an explicit None opts out.
    return (
        EquityType.NONE not in inp.equity_compensation
        and inp.equity_grant_value >= 0.30 * derived.total_comp_current
    )


@register_alert(
    alert_id="DATA_MISMATCH_01",
    category=AlertCategory.OTHER,
    title="Potential Data Inconsistency",
    description=(
        "Some of your entries appear directionally inconsistent (for example, monthly take-home relative to "
        "annual compensation). This may reflect taxes/benefits/withholding differences—or a data entry "
        "issue that could change the outputs."
    ),
    status=AlertStatus.WARNING,
    sort_score=600,
)
def data_mismatch(inp: FinancialInput, derived: DerivedMetrics) -> bool:
    monthly_gross = derived.total_comp_current / 12
    return abs(inp.monthly_take_home - monthly_gross) > 0.50 * monthly_gross


@register_alert(
    alert_id="RET_CONC_01",
    category=AlertCategory.RISK,
    title="Retirement-Heavy Asset Mix",
    description=(
        "Your inputs suggest a high concentration of wealth in retirement accounts. In some cases, "
        "households evaluate how much flexibility they want in taxable or liquid accounts for goals before "
        "traditional retirement ages."
    ),
    status=AlertStatus.WARNING,
    sort_score=590,
)
def retirement_heavy_mix(inp: FinancialInput, derived: DerivedMetrics) -> bool:
    return inp.net_worth > 0 and inp.retirement_balance >= 0.80 * inp.net_worth


@register_alert(
    alert_id="RET_ROTH_CONC_01",
    category=AlertCategory.RISK,
    title="Roth-Heavy Retirement Mix",
    description=(
        "You indicated a Roth-heavy retirement mix. Roth assets can be valuable for tax-free growth, though "
        "the optimal balance can vary based on expected future income, tax rates, and withdrawal timing."
    ),
    status=AlertStatus.WARNING,
    sort_score=580,
)
def roth_heavy_mix(inp: FinancialInput, derived: DerivedMetrics) -> bool:
    return inp.retirement_split == RetirementSplit.MOSTLY_ROTH


@register_alert(
    alert_id="RET_PRETAX_CONC_01",
    category=AlertCategory.RISK,
    title="Pre-Tax-Heavy Retirement Mix",
    description=(
        "You indicated a pre-tax-heavy retirement mix. Pre-tax deferral can be efficient, though some "
        "households monitor future tax-rate uncertainty and withdrawal flexibility when evaluating overall "
        "balance."
    ),
    status=AlertStatus.WARNING,
    sort_score=570,
)
def pretax_heavy_mix(inp: FinancialInput, derived: DerivedMetrics) -> bool:
    return inp.retirement_split == RetirementSplit.MOSTLY_TRADITIONAL


@register_alert(
    alert_id="VAR_INCOME_HIGH_01",
    category=AlertCategory.LIQUIDITY,
    title="High Variable Income Profile",
    description=(
        "Your inputs suggest a high proportion of compensation is variable. In similar situations, "
        "households sometimes use more structured cash flow systems to reduce month-to-month volatility and "
        "avoid overcommitting during strong periods."
    ),
    status=AlertStatus.WARNING,
    sort_score=560,
)
def high_variable_income(inp: FinancialInput, derived: DerivedMetrics) -> bool:
    return derived.income_volatility_level == VolatilityLevel.HIGH


@register_alert(
    alert_id="CPA_SE_01",
    category=AlertCategory.TAX,
    title="Self-Employment Without CPA Coordination",
    description=(
        "You indicated self-employment income and no CPA relationship. In some cases, 1099/self-employment "
        "income can introduce additional tax and retirement-plan complexity that benefits from coordinated "
        "review."
    ),
    status=AlertStatus.WARNING,
    sort_score=550,
)
def self_employment_without_cpa(inp: FinancialInput, derived: DerivedMetrics) -> bool:
    return inp.has_self_employment_income and inp.has_cpa == CpaRelationship.NO


@register_alert(
    alert_id="CPA_RE_01",
    category=AlertCategory.TAX,
    title="Real Estate Investing Without CPA Coordination",
    description=(
        "You indicated real estate investments and no CPA relationship. In some cases, real estate tax rules "
        "and reporting can affect outcomes, and households coordinate planning decisions with tax "
        "professionals."
    ),
    status=AlertStatus.WARNING,
    sort_score=540,
)
def real_estate_without_cpa(inp: FinancialInput, derived: DerivedMetrics) -> bool:
    return inp.has_real_estate_investments and inp.has_cpa == CpaRelationship.NO


@register_alert(
    alert_id="TAX_BRACKET_RE_01",
    category=AlertCategory.TAX,
    title="High Marginal Bracket Without Real Estate Exposure",
    description=(
        "Your inputs suggest a higher marginal bracket and no real estate investments. Some households "
        "evaluate whether real estate belongs in their plan due to potential tax characteristics, though "
        "these investments also carry additional risks and complexity."
    ),
    status=AlertStatus.WARNING,
    sort_score=530,
)
def high_bracket_without_real_estate(inp: FinancialInput, derived: DerivedMetrics) -> bool:
    return is_high_income(inp, derived) and not inp.has_real_estate_investments


@register_alert(
    alert_id="SURPLUS_UNSURE_01",
    category=AlertCategory.LIQUIDITY,
    title="Surplus Consistency Unclear",
    description=(
        "You indicated uncertainty about whether you typically run a monthly surplus. In some cases, a short "
        "cash flow review can clarify recurring expenses and identify drivers of variability."
    ),
    status=AlertStatus.WARNING,
    sort_score=520,
)
def surplus_unclear(inp: FinancialInput, derived: DerivedMetrics) -> bool:
    return inp.runs_surplus == YesNoUnsure.UNSURE


@register_alert(
    alert_id="SAVE_SYSTEM_01",
    category=AlertCategory.LIQUIDITY,
    title="No Defined Savings System Noted",
    description=(
        "You indicated no defined savings target or system. In similar situations, households sometimes find "
        "that a clear structure improves consistency and reduces decision fatigue."
    ),
    status=AlertStatus.WARNING,
    sort_score=510,
)
def no_savings_system(inp: FinancialInput, derived: DerivedMetrics) -> bool:
    return not inp.has_savings_system


@register_alert(
    alert_id="LIQ_EXCESS_01",
    category=AlertCategory.LIQUIDITY,
    title="Elevated Cash Holdings",
    description=(
        "Your cash holdings appear higher than what is typically held for short-term needs. While this may "
        "be intentional, elevated cash balances can affect long-term growth if not tied to a specific "
        "purpose."
    ),
    status=AlertStatus.INFO,
    sort_score=400,
)
def elevated_cash(inp: FinancialInput, derived: DerivedMetrics) -> bool:
    return derived.cash_runway_months > 12


@register_alert(
    alert_id="TAX_CPA_NONE_01",
    category=AlertCategory.TAX,
    title="Limited Tax Coordination",
    description=(
        "You indicated that you do not currently work with a CPA. As income complexity increases, some "
        "households coordinate planning decisions more closely with tax professionals."
    ),
    status=AlertStatus.INFO,
    sort_score=390,
)
def no_cpa(inp: FinancialInput, derived: DerivedMetrics) -> bool:
    return inp.has_cpa == CpaRelationship.NO


@register_alert(
    alert_id="WHOLE_LIFE_01",
    category=AlertCategory.RISK,
    title="Permanent Life Policy Present",
    description=(
        "You indicated ownership of a permanent life insurance policy. These policies can vary widely in "
        "structure and purpose and are often reviewed periodically to ensure alignment with broader goals."
    ),
    status=AlertStatus.INFO,
    sort_score=380,
)
def permanent_life_policy(inp: FinancialInput, derived: DerivedMetrics) -> bool:
    return inp.has_whole_life == YesNoUnsure.YES


@register_alert(
    alert_id="ADV_INVEST_01",
    category=AlertCategory.RISK,
    title="Advanced Investment Access",
    description=(
        "Your inputs suggest asset levels that may provide access to a broader range of investment "
        "structures. In some cases, these options can influence diversification and after-tax results."
    ),
    status=AlertStatus.INFO,
    sort_score=370,
)
def advanced_investment_access(inp: FinancialInput, derived: DerivedMetrics) -> bool:
    return inp.net_worth >= 5_000_000


@register_alert(
    alert_id="BACKDOOR_ROTH_01",
    category=AlertCategory.TAX,
    title="Potential Backdoor Roth Relevance",
    description=(
        "Your inputs suggest income may be above commonly cited thresholds for direct Roth IRA "
        "contributions. In some cases, households evaluate alternative contribution methods depending on "
        "their tax situation."
    ),
    status=AlertStatus.INFO,
    sort_score=360,
)
def backdoor_roth_relevance(inp: FinancialInput, derived: DerivedMetrics) -> bool:
    # Unlike the bracket checks, "Other" filers use the single threshold here.
    if inp.is_married_filing_jointly:
        return derived.total_comp_current > ROTH_LIMIT_MFJ
    return derived.total_comp_current > ROTH_LIMIT_SINGLE


@register_alert(
    alert_id="HOUSE_PAID_OFF_01",
    category=AlertCategory.RISK,
    title="Paid-Off Home Noted",
    description=(
        "You indicated a fully paid-off home. In many cases, lower fixed housing costs can increase the "
        "capacity to build liquid or investable assets over time, depending on goals and cash flow."
    ),
    status=AlertStatus.INFO,
    sort_score=350,
)
def paid_off_home(inp: FinancialInput, derived: DerivedMetrics) -> bool:
    return inp.housing_status == HousingStatus.OWN and inp.mortgage_balance == 0 and inp.home_value > 0


@register_alert(
    alert_id="SOLO401K_01",
    category=AlertCategory.TAX,
    title="Self-Employment Retirement Plan Opportunity",
    description=(
        "You indicated self-employment / 1099 income. In some cases, this can open access to additional "
        "retirement-plan options that may affect tax outcomes and long-term savings capacity."
    ),
    status=AlertStatus.INFO,
    sort_score=340,
)
def self_employment_retirement_plan(inp: FinancialInput, derived: DerivedMetrics) -> bool:
    return inp.has_self_employment_income


@register_alert(
    alert_id="UMBRELLA_GAP_01",
    category=AlertCategory.RISK,
    title="Umbrella Coverage Noted as Absent",
    description=(
        "Based on your inputs, household assets and/or income may increase exposure to liability risk. Some "
        "households evaluate umbrella coverage as an additional layer of protection depending on "
        "circumstances."
    ),
    status=AlertStatus.INFO,
    sort_score=330,
)
def umbrella_gap(inp: FinancialInput, derived: DerivedMetrics) -> bool:
    exposed = inp.net_worth > 1_000_000 or derived.total_comp_current > 300_000
    return exposed and inp.has_umbrella == YesNoUnsure.NO


@register_alert(
    alert_id="ESTATE_STALE_01",
    category=AlertCategory.OTHER,
    title="Estate Plan Review Timing",
    description=(
        "You indicated having estate documents, but the last review appears dated or unclear. In some "
        "cases, life events or asset changes can make periodic reviews relevant."
    ),
    status=AlertStatus.INFO,
    sort_score=320,
)
def stale_estate_plan(inp: FinancialInput, derived: DerivedMetrics) -> bool:
    return inp.has_estate_plan == YesNoUnsure.YES and inp.estate_last_reviewed in (
        EstateReviewRecency.MORE_THAN_5_YEARS,
        EstateReviewRecency.NEVER_OR_UNSURE,
    )


@register_alert(
    alert_id=BASELINE_ALERT_ID,
    category=AlertCategory.OTHER,
    title="No Major Issues Detected",
    description=(
        "Based on the information provided, no major risk flags were identified by this rules-based scan. "
        "Many households still use a deeper review to confirm assumptions, validate inputs, and identify "
        "more nuanced planning opportunities."
    ),
    status=AlertStatus.INFO,
    sort_score=10,
)
def baseline_no_issues(inp: FinancialInput, derived: DerivedMetrics) -> bool:
    # Never matches on its own; the selector inserts it as the no-signal fallback.
    return False
