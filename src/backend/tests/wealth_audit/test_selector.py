import pytest

from common.wealth_audit.alert import AlertSpec
from common.wealth_audit.config import SelectionPolicy
from common.wealth_audit.models import AlertCategory, AlertStatus
from common.wealth_audit.registry import registry
from common.wealth_audit.selector import headline_for, ranking_key, select_insights


def _spec(alert_id: str, score: int, status: AlertStatus = AlertStatus.WARNING) -> AlertSpec:
    return AlertSpec(
        alert_id=alert_id,
        category=AlertCategory.OTHER,
        title=alert_id,
        description="",
        status=status,
        sort_score=score,
        trigger=lambda inp, derived: True,
    )


@pytest.fixture
def snapshot():
    return _spec("HUMAN_CAPITAL_SNAPSHOT", 2000, AlertStatus.INFO)


@pytest.fixture
def baseline():
    return _spec("BASELINE_OK_01", 10, AlertStatus.INFO)


@pytest.fixture
def lookup(snapshot, baseline):
    return {snapshot.alert_id: snapshot, baseline.alert_id: baseline}


def _ids(alerts):
    return [a.alert_id for a in alerts]


def test_fallback_when_only_snapshot(snapshot, lookup):
    assert _ids(select_insights([snapshot], library=lookup)) == ["HUMAN_CAPITAL_SNAPSHOT", "BASELINE_OK_01"]
    assert _ids(select_insights([], library=lookup)) == ["HUMAN_CAPITAL_SNAPSHOT", "BASELINE_OK_01"]


def test_forced_liquidity_alert_ignores_score(snapshot, lookup):
    forced = _spec("LIQ_CRITICAL_01", 1, AlertStatus.CRITICAL)
    others = [_spec("A", 900), _spec("B", 800)]
    presented = select_insights([snapshot, *others, forced], library=lookup)
    assert _ids(presented) == ["HUMAN_CAPITAL_SNAPSHOT", "LIQ_CRITICAL_01", "A", "B"]


def test_pool_sorted_by_score_then_id_and_truncated(snapshot, lookup):
    pool = [
        _spec("ZETA", 500),
        _spec("ALPHA", 500),
        _spec("LOW", 100),
        _spec("TOP", 900),
        _spec("MID_B", 600),
        _spec("MID_A", 600),
        _spec("DROPPED", 50),
    ]
    presented = select_insights([snapshot, *pool], library=lookup)
    assert _ids(presented) == ["HUMAN_CAPITAL_SNAPSHOT", "TOP", "MID_A", "MID_B", "ALPHA", "ZETA"]


def test_snapshot_first_even_when_missing_from_triggered(lookup):
    presented = select_insights([_spec("A", 1)], library=lookup)
    assert _ids(presented) == ["HUMAN_CAPITAL_SNAPSHOT", "A"]


def test_duplicate_triggered_entries_presented_once(snapshot, lookup):
    a = _spec("A", 700)
    presented = select_insights([snapshot, a, a, snapshot], library=lookup)
    assert _ids(presented) == ["HUMAN_CAPITAL_SNAPSHOT", "A"]


def test_selection_independent_of_input_order(snapshot, lookup):
    pool = [_spec(f"R{i}", score) for i, score in enumerate([300, 700, 700, 100, 900, 500, 500])]
    forward = select_insights([snapshot, *pool], library=lookup)
    backward = select_insights(list(reversed([snapshot, *pool])), library=lookup)
    assert _ids(forward) == _ids(backward)


def test_custom_policy_limit(snapshot, lookup):
    policy = SelectionPolicy(max_presented=3)
    presented = select_insights([snapshot, _spec("A", 3), _spec("B", 2), _spec("C", 1)], policy=policy, library=lookup)
    assert _ids(presented) == ["HUMAN_CAPITAL_SNAPSHOT", "A", "B"]


def test_ranking_key_orders_score_desc_then_id():
    alerts = [_spec("B", 5), _spec("A", 5), _spec("C", 9)]
    assert _ids(sorted(alerts, key=ranking_key)) == ["C", "A", "B"]


def test_headline():
    assert headline_for([_spec("A", 1, AlertStatus.INFO), _spec("B", 1, AlertStatus.WARNING)]) == (
        "Wealth Accumulation Audit Complete"
    )
    assert headline_for([_spec("A", 1, AlertStatus.INFO), _spec("B", 1, AlertStatus.CRITICAL)]) == (
        "Immediate Action Items Detected"
    )


def test_selects_from_builtin_registry_by_default():
    snapshot = registry.get("HUMAN_CAPITAL_SNAPSHOT")
    presented = select_insights([snapshot, registry.get("TAX_CPA_NONE_01"), registry.get("CF_NEG_01")])
    assert _ids(presented) == ["HUMAN_CAPITAL_SNAPSHOT", "CF_NEG_01", "TAX_CPA_NONE_01"]
