import json

from common.wealth_audit.catalog import build_catalog, main


def test_catalog_sorted_with_roles():
    entries = build_catalog()
    ids = [e.alert_id for e in entries]
    assert ids == sorted(ids)
    assert len(entries) == 32

    roles = {e.alert_id: e.role for e in entries}
    assert roles["HUMAN_CAPITAL_SNAPSHOT"] == "snapshot"
    assert roles["BASELINE_OK_01"] == "baseline"
    assert roles["CF_NEG_01"] == "standard"

    by_id = {e.alert_id: e for e in entries}
    assert by_id["HUMAN_CAPITAL_SNAPSHOT"].table_position == 0
    assert by_id["CF_NEG_01"].trigger_name == "negative_cash_flow"


def test_catalog_cli_json(capsys):
    main(["--format", "json"])
    catalog = json.loads(capsys.readouterr().out)
    assert catalog[0]["alert_id"] == "ADV_INVEST_01"
    assert {"status", "sort_score", "category", "role"}.issubset(catalog[0])


def test_catalog_cli_yaml(capsys):
    main([])
    out = capsys.readouterr().out
    assert "alert_id: LIQ_CRITICAL_01" in out
