"""
ASCII terminal formatters for CLI output.

All formatters accept in-memory report objects and return plain multi-line
strings suitable for ``typer.echo()``.

Example::

  === Stock Check v1.0 ===
    Current date:    2026-02-14
    Prediction date: 2026-02-15
    Header:          TRADE
    Sector warning:  no

    Rank  Ticker  Company Name        Sector       Current  Predicted  Growth%  3-Month  6-Month  12-Month
    ...
"""

from __future__ import annotations

from stock_check.engine import StockCheckReport
from stock_check.factors.spec import FactorSpec
from stock_check.models.result import RankedResult


def _trunc(text: str, width: int) -> str:
    return text if len(text) <= width else text[: width - 1] + "~"


def format_result_row(r: RankedResult) -> str:
    return (
        f"  {r.rank:>4}  {r.ticker:<6}  {_trunc(r.company_name, 20):<20}  "
        f"{_trunc(r.sector, 12):<12}  {r.current_price:>9.2f}  "
        f"{r.predicted_price:>9.2f}  {r.predicted_1day_growth_pct:>+8.4f}  "
        f"{r.three_month:>+8.2f}  {r.six_month:>+8.2f}  {r.twelve_month:>+8.2f}"
    )


def format_stock_check_table(report: StockCheckReport) -> str:
    """Format the display-ordered results with a decision banner."""
    doc = report.document
    dec = report.decision
    lines: list[str] = []
    lines.append("")
    lines.append(f"=== {doc.model_version} ===")
    lines.append(f"  Current date:    {doc.current_date}")
    lines.append(f"  Prediction date: {doc.prediction_date}")
    header_note = " (manual override)" if dec.manual_override and dec.rule_header != doc.trade_header else ""
    lines.append(f"  Header:          {doc.trade_header}{header_note}")
    lines.append(
        f"  Top-{dec.primary_count} avg growth {dec.average_growth:+.4f}%  dispersion {dec.dispersion:.4f}"
    )
    warn = f"YES ({dec.dominant_sector} x{dec.dominant_count})" if doc.sector_warning else "no"
    lines.append(f"  Sector warning:  {warn}")
    lines.append("")

    header = (
        f"  {'Rank':>4}  {'Ticker':<6}  {'Company Name':<20}  {'Sector':<12}  "
        f"{'Current':>9}  {'Predicted':>9}  {'Growth%':>8}  "
        f"{'3-Month':>8}  {'6-Month':>8}  {'12-Month':>8}"
    )
    lines.append(header)
    lines.append("  " + "-" * (len(header) - 2))
    for r in report.display:
        lines.append(format_result_row(r))
    return "\n".join(lines)


def format_factor_table(spec: FactorSpec) -> str:
    """Format the locked factor table grouped by factor group."""
    lines: list[str] = []
    lines.append("")
    lines.append(f"=== Factor Model ({spec.version}) ===")
    lines.append(f"  Factors: {len(spec.factors)}   Total weight: {spec.total_weight_pct:.1f}%")

    current_group = None
    for f in spec.factors:
        if f.group != current_group:
            current_group = f.group
            group_total = sum(g.weight_pct for g in spec.factors if g.group == current_group)
            lines.append("")
            lines.append(f"  [{current_group.upper()}] {group_total:.1f}%")
        lines.append(f"    {f.id}  {f.name:<32}  {f.weight_pct:>4.1f}%  {f.definition}")
    return "\n".join(lines)
