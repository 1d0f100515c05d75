from __future__ import annotations

import math

from .models import DerivedMetrics, FinancialInput, VolatilityLevel

HUMAN_CAPITAL_GROWTH_RATE = 0.03
HUMAN_CAPITAL_HORIZON_AGE = 60

REQUIRED_LIQUIDITY_MONTHS = {
    VolatilityLevel.HIGH: 6,
    VolatilityLevel.MODERATE: 4,
    VolatilityLevel.LOW: 3,
}


def classify_volatility(variable_pct: float) -> VolatilityLevel:
    if variable_pct >= 0.40:
        return VolatilityLevel.HIGH
    if variable_pct >= 0.20:
        return VolatilityLevel.MODERATE
    return VolatilityLevel.LOW


def estimate_human_capital(total_comp: float, age: int) -> float:
    """Sum of projected nominal earnings from now through age 60, inclusive.

    Income grows 3% a year and is not discounted back to present value.
    """
    years_remaining = max(0, HUMAN_CAPITAL_HORIZON_AGE - age)
    return sum(
        total_comp * math.pow(1 + HUMAN_CAPITAL_GROWTH_RATE, t)
        for t in range(int(math.floor(years_remaining)) + 1)
    )


def derive_metrics(inp: FinancialInput) -> DerivedMetrics:
    total_comp_current = inp.annual_base_income + inp.annual_variable_comp
    variable_pct = inp.annual_variable_comp / max(total_comp_current, 1)
    volatility = classify_volatility(variable_pct)

    monthly_surplus = inp.monthly_take_home - inp.monthly_spending
    if inp.monthly_spending > 0:
        cash_runway_months = inp.cash_holdings / inp.monthly_spending
    else:
        cash_runway_months = 0.0

    human_capital_est = estimate_human_capital(total_comp_current, inp.age)

    return DerivedMetrics(
        total_comp_current=total_comp_current,
        variable_pct=variable_pct,
        income_volatility_level=volatility,
        required_liquidity_months=REQUIRED_LIQUIDITY_MONTHS[volatility],
        monthly_surplus=monthly_surplus,
        annual_surplus=monthly_surplus * 12,
        cash_runway_months=cash_runway_months,
        income_change_pct=(total_comp_current - inp.last_year_total_comp) / max(inp.last_year_total_comp, 1),
        has_dependents=inp.kids_count >= 1,
        investable_assets_est=inp.net_worth,
        human_capital_est=human_capital_est,
        human_capital_multiple=human_capital_est / max(inp.net_worth, 1),
    )
