from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path


def _ensure_backend_on_path() -> None:
    backend_dir = Path(__file__).resolve().parents[1]
    if str(backend_dir) not in sys.path:
        sys.path.insert(0, str(backend_dir))


_ensure_backend_on_path()

from common.wealth_audit.engine import AuditEngine  # noqa: E402
from common.wealth_audit.models import AnalysisResult, FinancialInput  # noqa: E402
from pipelines.compliance_store import get_compliance_store, save_compliance_record  # noqa: E402

logger = logging.getLogger(__name__)


def _load_json(path: Path):
    with path.open() as handle:
        return json.load(handle)


def _fmt_money(value: float) -> str:
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.0f}"


def _fmt_pct(value: float) -> str:
    return f"{value * 100:.1f}%"


def _write_markdown(result: AnalysisResult, out_path: Path) -> None:
    facts = result.key_facts
    lines = [
        f"# {result.headline}",
        "",
        f"Generated at: {result.compliance.generated_at_iso}",
        f"Engine: {result.compliance.engine_version}",
        "",
        "## Key Facts",
        f"- Total compensation: {_fmt_money(facts.total_comp)}",
        f"- Estimated total tax: {_fmt_money(facts.total_tax_est)} ({_fmt_pct(facts.effective_tax_rate)} effective)",
        f"- Monthly surplus: {_fmt_money(facts.monthly_surplus)}",
        f"- Savings rate: {_fmt_pct(facts.savings_rate)}",
        f"- Cash runway: {facts.cash_runway_months:.1f} months",
        f"- Net worth (ex-home): {_fmt_money(facts.net_worth_ex_home)}",
        "",
        "## Insights",
    ]
    for insight in result.presented_insights:
        lines.append(f"### [{insight.status.value.upper()}] {insight.title}")
        lines.append("")
        lines.append(insight.description)
        lines.append("")
    lines.append("## Next Steps")
    lines.extend(f"- {item}" for item in result.hidden_roadmap_items)
    lines.append("")
    lines.append(f"Triggered: {', '.join(result.compliance.triggered_alert_ids) or '(none)'}")
    lines.append(f"Presented: {', '.join(result.compliance.presented_alert_ids)}")
    out_path.write_text("\n".join(lines) + "\n")


def run_wealth_audit_from_file(input_path: Path) -> AnalysisResult:
    raw = _load_json(input_path)
    if not isinstance(raw, dict):
        raise SystemExit(f"{input_path} must contain a single JSON object.")
    return AuditEngine().run(FinancialInput.model_validate(raw))


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Run the wealth audit engine on a questionnaire JSON file and write JSON/MD outputs."
    )
    parser.add_argument(
        "--input",
        required=True,
        help="Path to a FinancialInput JSON file (camelCase or snake_case keys).",
    )
    parser.add_argument(
        "--output-dir",
        default=None,
        help="Output directory for audit files (defaults to the input file's directory).",
    )
    parser.add_argument(
        "--store-compliance",
        action="store_true",
        help="Also save the compliance record to the store named by COMPLIANCE_STORE.",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO").upper())

    input_path = Path(args.input).resolve()
    if not input_path.exists():
        raise SystemExit(f"Input file not found: {input_path}")
    output_dir = Path(args.output_dir).resolve() if args.output_dir else input_path.parent
    output_dir.mkdir(parents=True, exist_ok=True)

    result = run_wealth_audit_from_file(input_path)

    stamp = result.compliance.generated_at_iso.replace(":", "").replace("-", "").replace(".", "")
    base_name = f"wealth_audit_{stamp}"
    out_json = output_dir / f"{base_name}.json"
    out_md = output_dir / f"{base_name}.md"

    out_json.write_text(json.dumps(result.to_wire(), indent=2))
    _write_markdown(result, out_md)

    if args.store_compliance:
        store = get_compliance_store()
        if store is None:
            logger.warning("COMPLIANCE_STORE is not set; compliance record was not stored.")
        else:
            record_id = save_compliance_record(store, result)
            print(f"Stored compliance record {record_id}")

    print(f"Wrote {out_json}")
    print(f"Wrote {out_md}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
