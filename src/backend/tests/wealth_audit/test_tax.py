import pytest

from common.wealth_audit.config import DEFAULT_TAX_CONFIG, TaxYearConfig, load_config
from common.wealth_audit.models import FilingStatus
from common.wealth_audit.tax import bracket_tax, estimate_tax, marginal_rate


def _estimate(make_input, **overrides):
    inp = make_input(**overrides)
    return estimate_tax(inp, inp.annual_base_income + inp.annual_variable_comp)


def test_single_texas_150k_matches_hand_computation(make_input):
    est = _estimate(
        make_input,
        annualBaseIncome=150000,
        annualVariableComp=0,
        filingStatus="Single",
        state="TX",
        maxing401k="No",
        hsaContributing="No",
    )
    assert est.agi == 150000
    assert est.taxable_income == 133900
    # 1,240 + 4,560 + 12,166 + 6,768
    assert est.federal_tax == pytest.approx(24734.0)
    assert est.social_security_tax == pytest.approx(9300.0)
    assert est.medicare_tax == pytest.approx(2175.0)
    assert est.additional_medicare_tax == 0
    assert est.state_tax == 0
    assert est.marginal_rate == 0.24
    assert est.total_tax == pytest.approx(36209.0)
    assert est.effective_rate == pytest.approx(36209.0 / 150000)


def test_mfj_high_tax_state_with_pretax_reductions(make_input):
    est = _estimate(
        make_input,
        annualBaseIncome=300000,
        annualVariableComp=0,
        filingStatus="Married Filing Jointly",
        state="CA",
        maxing401k="Yes",
        hsaContributing="Yes",
    )
    assert est.agi == pytest.approx(267950)
    assert est.taxable_income == pytest.approx(235750)
    assert est.federal_tax == pytest.approx(41776.0)
    assert est.social_security_tax == pytest.approx(10918.2)
    assert est.additional_medicare_tax == pytest.approx(450.0)
    assert est.state_rate == 0.09
    assert est.state_tax == pytest.approx(24115.5)
    assert est.total_tax == pytest.approx(81609.7)


def test_other_filing_status_uses_single_schedule(make_input):
    single = _estimate(make_input, annualBaseIncome=250000, filingStatus="Single", maxing401k="No")
    other = _estimate(make_input, annualBaseIncome=250000, filingStatus="Other", maxing401k="No")
    assert other.total_tax == pytest.approx(single.total_tax)
    assert other.additional_medicare_tax == pytest.approx(450.0)


def test_zero_income_has_zero_tax_and_rate(make_input):
    est = _estimate(make_input, annualBaseIncome=0, annualVariableComp=0, state="NY")
    assert est.total_tax == 0
    assert est.effective_rate == 0


def test_pretax_reductions_cannot_push_agi_negative(make_input):
    est = _estimate(make_input, annualBaseIncome=10000, maxing401k="Yes", hsaContributing="Yes", state="IL")
    assert est.agi == 0
    assert est.taxable_income == 0
    assert est.state_tax == 0
    assert est.total_tax == pytest.approx(10000 * (0.062 + 0.0145))


@pytest.mark.parametrize(
    "state, rate",
    [("TX", 0.0), ("tx", 0.0), ("AK", 0.0), ("NJ", 0.09), ("MN", 0.09), ("IL", 0.045), ("", 0.045)],
)
def test_state_rate_lookup(make_input, state, rate):
    est = _estimate(make_input, state=state)
    assert est.state_rate == rate


def test_social_security_caps_at_wage_base(make_input):
    est = _estimate(make_input, annualBaseIncome=500000)
    assert est.social_security_tax == pytest.approx(176100 * 0.062)


def test_bracket_tax_top_bracket_and_marginal_rate():
    brackets = DEFAULT_TAX_CONFIG.brackets_for(FilingStatus.SINGLE)
    expected = (
        12400 * 0.10
        + 38000 * 0.12
        + 55300 * 0.22
        + 96075 * 0.24
        + 54450 * 0.32
        + 384375 * 0.35
        + 359400 * 0.37
    )
    assert bracket_tax(1_000_000, brackets) == pytest.approx(expected)
    assert marginal_rate(1_000_000, brackets) == 0.37
    assert marginal_rate(0, brackets) == 0.0
    assert bracket_tax(0, brackets) == 0


@pytest.mark.parametrize("status", ["Single", "Married Filing Jointly", "Other"])
@pytest.mark.parametrize("income", [0, 25000, 80000, 150000, 400000, 900000, 2500000])
@pytest.mark.parametrize("state", ["TX", "CA", "OH"])
def test_tax_is_non_negative_and_rate_bounded(make_input, status, income, state):
    est = _estimate(make_input, annualBaseIncome=income, filingStatus=status, state=state, maxing401k="No")
    assert est.total_tax >= 0
    assert 0 <= est.effective_rate < 1


def test_tax_config_overrides_validate_from_mapping(make_input):
    cfg = load_config(TaxYearConfig, {"default_state_rate": 0.05, "tax_year": 2027})
    assert cfg.tax_year == 2027
    assert cfg.state_rate_for("OH") == 0.05
    inp = make_input(annualBaseIncome=100000, state="OH")
    assert estimate_tax(inp, 100000, cfg).state_rate == 0.05
    assert load_config(TaxYearConfig) == DEFAULT_TAX_CONFIG
