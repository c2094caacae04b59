from __future__ import annotations

from datetime import datetime, timezone

from .roi import RoiResult
from .scenarios import ScenarioSet

NOT_REACHED = "Not reached"


def format_currency(value: float) -> str:
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.0f}"


def format_percent(value: float, digits: int = 1) -> str:
    return f"{value:.{digits}f}%"


def summary_rows(result: RoiResult) -> list[tuple[str, str]]:
    """Return labelled, formatted summary values in display order."""
    summary = result.summary
    return [
        ("Total investment", format_currency(summary.total_investment)),
        ("Total savings", format_currency(summary.total_savings)),
        ("Total net savings", format_currency(summary.total_net_savings)),
        ("ROI", format_percent(summary.final_roi)),
        ("Break-even", summary.break_even_year or NOT_REACHED),
        ("Baseline burnout rate", format_percent(summary.baseline_burnout_rate * 100)),
        ("Baseline turnover rate", format_percent(summary.baseline_turnover_rate * 100)),
        ("Providers with burnout averted", f"{summary.total_burnout_averted:.1f}"),
        ("Providers retained", f"{summary.total_providers_retained:.1f}"),
    ]


def year_rows(result: RoiResult) -> list[dict[str, str]]:
    return [
        {
            "year": year.year_label,
            "investment": format_currency(year.investment),
            "savings": format_currency(year.annual_savings),
            "net": format_currency(year.net_savings_for_year),
            "cumulative": format_currency(year.cumulative_net_savings),
            "burnout_rate": format_percent(year.burnout_rate * 100),
            "turnover_rate": format_percent(year.turnover_rate * 100),
        }
        for year in result.projected_data
    ]


def scenario_comparison(scenarios: ScenarioSet) -> list[dict[str, str]]:
    return [
        {
            "scenario": name.title(),
            "net_savings": format_currency(result.summary.total_net_savings),
            "roi": format_percent(result.summary.final_roi),
            "break_even": result.summary.break_even_year or NOT_REACHED,
        }
        for name, result in scenarios.items()
    ]


def render_report(
    result: RoiResult,
    scenarios: ScenarioSet | None = None,
    generated_at: datetime | None = None,
) -> str:
    """Render a plain-text ROI report.

    Args:
        result: Expected-case projection to summarise.
        scenarios: Optional scenario set appended as a comparison table.
        generated_at: Timestamp printed in the header; defaults to now (UTC).

    Returns:
        Multi-line report text.
    """
    stamp = (generated_at or datetime.now(timezone.utc)).strftime("%Y-%m-%d %H:%M %Z").strip()
    lines = [f"Wellness Program ROI Projection (generated {stamp})", ""]

    width = max(len(label) for label, _ in summary_rows(result))
    lines += [f"{label.ljust(width)}  {value}" for label, value in summary_rows(result)]

    lines += ["", "Year-by-year:"]
    for row in year_rows(result):
        lines.append(
            f"  {row['year']}: invest {row['investment']}, save {row['savings']}, "
            f"net {row['net']}, cumulative {row['cumulative']}, "
            f"burnout {row['burnout_rate']}, turnover {row['turnover_rate']}"
        )

    if scenarios is not None:
        lines += ["", "Scenarios:"]
        for row in scenario_comparison(scenarios):
            lines.append(
                f"  {row['scenario']}: net {row['net_savings']}, ROI {row['roi']}, break-even {row['break_even']}"
            )

    return "\n".join(lines)
