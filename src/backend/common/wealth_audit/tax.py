from __future__ import annotations

from typing import Optional, Sequence

from .config import DEFAULT_TAX_CONFIG, TaxBracket, TaxYearConfig
from .models import FinancialInput, TaxEstimate, YesNoUnsure


def bracket_tax(taxable_income: float, brackets: Sequence[TaxBracket]) -> float:
    """Progressive tax over ascending (cap, rate) brackets."""
    tax = 0.0
    prev_cap = 0.0
    for bracket in brackets:
        if taxable_income <= prev_cap:
            break
        tax += (min(taxable_income, bracket.cap) - prev_cap) * bracket.rate
        prev_cap = bracket.cap
    return tax


def marginal_rate(taxable_income: float, brackets: Sequence[TaxBracket]) -> float:
    if taxable_income <= 0 or not brackets:
        return 0.0
    for bracket in brackets:
        if taxable_income <= bracket.cap:
            return bracket.rate
    return brackets[-1].rate


def estimate_tax(
    inp: FinancialInput,
    total_comp_current: float,
    config: Optional[TaxYearConfig] = None,
) -> TaxEstimate:
    cfg = config or DEFAULT_TAX_CONFIG
    status = inp.filing_status

    pretax_401k = cfg.elective_deferral_limit if inp.maxing_401k == YesNoUnsure.YES else 0.0
    hsa = cfg.hsa_limit_for(status) if inp.hsa_contributing == YesNoUnsure.YES else 0.0

    agi = max(0.0, total_comp_current - pretax_401k - hsa)
    taxable_income = max(0.0, agi - cfg.standard_deduction_for(status))

    brackets = cfg.brackets_for(status)
    federal = bracket_tax(taxable_income, brackets)

    # Payroll taxes apply to gross compensation, not AGI.
    social_security = min(total_comp_current, cfg.social_security_wage_base) * cfg.social_security_rate
    medicare = total_comp_current * cfg.medicare_rate
    additional_medicare = (
        max(0.0, total_comp_current - cfg.additional_medicare_threshold_for(status))
        * cfg.additional_medicare_rate
    )

    state_rate = cfg.state_rate_for(inp.state)
    state = agi * state_rate

    total_tax = federal + social_security + medicare + additional_medicare + state
    effective_rate = total_tax / total_comp_current if total_comp_current > 0 else 0.0

    return TaxEstimate(
        total_tax=total_tax,
        effective_rate=effective_rate,
        agi=agi,
        taxable_income=taxable_income,
        federal_tax=federal,
        social_security_tax=social_security,
        medicare_tax=medicare,
        additional_medicare_tax=additional_medicare,
        state_tax=state,
        state_rate=state_rate,
        marginal_rate=marginal_rate(taxable_income, brackets),
    )
