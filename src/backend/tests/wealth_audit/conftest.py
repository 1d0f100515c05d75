import os
import sys


# Ensure `src/backend` is on sys.path so imports like `import common...` work.
BACKEND_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "../.."))
if BACKEND_DIR not in sys.path:
    sys.path.insert(0, BACKEND_DIR)

from datetime import datetime, timezone

import pytest

from common.wealth_audit.engine import AuditEngine
from common.wealth_audit.evaluator import evaluate_alerts
from common.wealth_audit.metrics import derive_metrics
from common.wealth_audit.models import FinancialInput


# A household on which no alert other than the snapshot fires.
QUIET_PROFILE = {
    "firstName": "Jordan",
    "age": 55,
    "kidsCount": 0,
    "filingStatus": "Single",
    "state": "TX",
    "annualBaseIncome": 120000,
    "annualVariableComp": 0,
    "lastYearTotalComp": 115000,
    "equityCompensation": ["None"],
    "equityGrantValue": 0,
    "maxing401k": "Yes",
    "hsaEligible": "No",
    "hsaContributing": "No",
    "hasCPA": "Yes",
    "hasSelfEmploymentIncome": False,
    "hasRealEstateInvestments": False,
    "monthlyTakeHome": 7000,
    "monthlySpending": 4000,
    "runsSurplus": "Yes",
    "surplusAllocation": "Retirement",
    "hasSavingsSystem": True,
    "netWorth": 500000,
    "retirementBalance": 200000,
    "retirementSplit": "Roughly split",
    "cashHoldings": 24000,
    "hasConcentratedPosition": False,
    "housingStatus": "rent",
    "monthlyHousingPayment": 2500,
    "mortgageBalance": 0,
    "homeValue": 0,
    "disabilityCoverage": "Both",
    "lifeInsuranceCoverage": "Work",
    "hasWholeLife": "No",
    "hasUmbrella": "Yes",
    "hasEstatePlan": "Yes",
    "estateLastReviewed": "Within the last 3 years",
}

# Volatile income, thin cash, uninsured dependents: many critical alerts at once.
STRESSED_OVERRIDES = {
    "age": 35,
    "kidsCount": 2,
    "annualBaseIncome": 150000,
    "annualVariableComp": 150000,
    "lastYearTotalComp": 260000,
    "equityCompensation": ["RSUs"],
    "equityGrantValue": 100000,
    "maxing401k": "No",
    "hasCPA": "No",
    "monthlyTakeHome": 30000,
    "monthlySpending": 20000,
    "netWorth": 200000,
    "retirementBalance": 100000,
    "cashHoldings": 10000,
    "hasConcentratedPosition": True,
    "disabilityCoverage": "None",
    "lifeInsuranceCoverage": "None",
    "hasEstatePlan": "No",
}


@pytest.fixture
def quiet_profile() -> dict:
    return dict(QUIET_PROFILE)


@pytest.fixture
def make_input():
    def _make(**overrides) -> FinancialInput:
        raw = dict(QUIET_PROFILE)
        raw.update(overrides)
        return FinancialInput.model_validate(raw)

    return _make


@pytest.fixture
def stressed_input(make_input) -> FinancialInput:
    return make_input(**STRESSED_OVERRIDES)


@pytest.fixture
def triggered_ids():
    def _ids(inp: FinancialInput) -> list[str]:
        return [a.alert_id for a in evaluate_alerts(inp, derive_metrics(inp))]

    return _ids


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc)


@pytest.fixture
def engine(fixed_now) -> AuditEngine:
    return AuditEngine(clock=lambda: fixed_now)
