"""Multi-year wellness program ROI projection.

The model compares each projected year against a frozen "no program"
baseline cost. Burnout and turnover rates decay multiplicatively year over
year, so each year's reduction applies to the previous year's already
reduced rate. Investment beyond ``max_effective_investment`` per provider
buys no extra effect.
"""
from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import numpy as np

logger = logging.getLogger(__name__)

MAX_PROJECTION_YEARS = 10


@dataclass(slots=True, frozen=True)
class OrgDetails:
    """Organization inputs; rates are fractions in ``[0, 1]``."""

    num_providers: int
    year1_investment: float
    sustaining_investment: float
    projection_years: int
    current_burnout_rate: float
    current_turnover_rate: float
    avg_salary: float

    def __post_init__(self):
        if self.num_providers < 1:
            raise ValueError("num_providers must be at least 1")
        if not 1 <= self.projection_years <= MAX_PROJECTION_YEARS:
            raise ValueError(f"projection_years must be between 1 and {MAX_PROJECTION_YEARS}")
        for name in ("year1_investment", "sustaining_investment", "avg_salary"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must not be negative")
        for name in ("current_burnout_rate", "current_turnover_rate"):
            if not 0 <= getattr(self, name) <= 1:
                raise ValueError(f"{name} must be a fraction between 0 and 1")


@dataclass(slots=True, frozen=True)
class ModelAssumptions:
    """Cost and effectiveness assumptions; reductions are fractions of the current rate."""

    turnover_cost_multiplier: float = 1.5
    productivity_loss_rate: float = 0.2
    max_effective_investment: float = 5000.0
    year1_burnout_reduction: float = 0.35
    year1_turnover_reduction: float = 0.25
    sustain_burnout_reduction: float = 0.10
    sustain_turnover_reduction: float = 0.05

    def __post_init__(self):
        if self.max_effective_investment <= 0:
            raise ValueError("max_effective_investment must be positive")


@dataclass(slots=True, frozen=True)
class YearProjection:
    year_label: str
    investment: float
    annual_savings: float
    net_savings_for_year: float
    cumulative_net_savings: float
    burnout_rate: float
    turnover_rate: float


@dataclass(slots=True, frozen=True)
class RoiSummary:
    total_investment: float
    total_savings: float
    total_net_savings: float
    final_roi: float
    break_even_year: str | None
    total_burnout_averted: float
    total_providers_retained: float
    baseline_burnout_rate: float
    baseline_turnover_rate: float
    baseline_annual_cost: float
    year1_effectiveness_ratio: float
    sustain_effectiveness_ratio: float


@dataclass(slots=True, frozen=True)
class RoiResult:
    projected_data: tuple[YearProjection, ...]
    summary: RoiSummary


# ---------------------------------------------------------------------------
# Model
# ---------------------------------------------------------------------------


def annual_cost(
    details: OrgDetails,
    assumptions: ModelAssumptions,
    burnout_rate: float,
    turnover_rate: float,
) -> float:
    """Yearly cost of turnover replacement plus burnout-driven productivity loss."""
    turnover_cost = details.num_providers * turnover_rate * (details.avg_salary * assumptions.turnover_cost_multiplier)
    burnout_cost = details.num_providers * burnout_rate * (details.avg_salary * assumptions.productivity_loss_rate)
    return turnover_cost + burnout_cost


def effectiveness_ratio(investment: float, num_providers: int, max_effective_investment: float) -> float:
    """Fraction of the maximum modelled reduction bought by ``investment``, capped at 1."""
    return min(1.0, (investment / num_providers) / max_effective_investment)


def project(details: OrgDetails, assumptions: ModelAssumptions) -> RoiResult:
    """Project savings, ROI, and human impact over the configured horizon.

    Args:
        details: Organization size, rates, salary, and investment plan.
        assumptions: Cost multipliers and maximum reduction effects.

    Returns:
        Year-by-year projections plus an aggregate summary. Identical inputs
        always produce identical output.
    """
    years = details.projection_years
    n = details.num_providers

    baseline_cost = annual_cost(details, assumptions, details.current_burnout_rate, details.current_turnover_rate)

    year1_ratio = effectiveness_ratio(details.year1_investment, n, assumptions.max_effective_investment)
    sustain_ratio = effectiveness_ratio(details.sustaining_investment, n, assumptions.max_effective_investment)
    year1_effects = (
        assumptions.year1_burnout_reduction * year1_ratio,
        assumptions.year1_turnover_reduction * year1_ratio,
    )
    sustain_effects = (
        assumptions.sustain_burnout_reduction * sustain_ratio,
        assumptions.sustain_turnover_reduction * sustain_ratio,
    )

    burnout_rates = np.empty(years, dtype=np.float64)
    turnover_rates = np.empty(years, dtype=np.float64)
    investments = np.empty(years, dtype=np.float64)

    burnout = details.current_burnout_rate
    turnover = details.current_turnover_rate
    for year_idx in range(years):
        burnout_effect, turnover_effect = year1_effects if year_idx == 0 else sustain_effects
        burnout = max(0.0, burnout * (1 - burnout_effect))
        turnover = max(0.0, turnover * (1 - turnover_effect))
        burnout_rates[year_idx] = burnout
        turnover_rates[year_idx] = turnover
        investments[year_idx] = details.year1_investment if year_idx == 0 else details.sustaining_investment

    costs = n * turnover_rates * (details.avg_salary * assumptions.turnover_cost_multiplier) + n * burnout_rates * (
        details.avg_salary * assumptions.productivity_loss_rate
    )
    savings = baseline_cost - costs
    net_savings = savings - investments
    cumulative = np.cumsum(net_savings)

    projected = tuple(
        YearProjection(
            year_label=f"Year {year_idx + 1}",
            investment=float(investments[year_idx]),
            annual_savings=float(savings[year_idx]),
            net_savings_for_year=float(net_savings[year_idx]),
            cumulative_net_savings=float(cumulative[year_idx]),
            burnout_rate=float(burnout_rates[year_idx]),
            turnover_rate=float(turnover_rates[year_idx]),
        )
        for year_idx in range(years)
    )

    total_investment = details.year1_investment + details.sustaining_investment * (years - 1)
    total_savings = float(savings.sum())
    total_net_savings = total_savings - total_investment
    final_roi = 100 * total_net_savings / total_investment if total_investment > 0 else 0.0

    positive_years = np.flatnonzero(cumulative > 0)
    break_even_year = projected[positive_years[0]].year_label if positive_years.size else None

    baseline_burnout_headcount = n * details.current_burnout_rate
    baseline_turnover_headcount = n * details.current_turnover_rate
    total_burnout_averted = baseline_burnout_headcount - n * float(burnout_rates[-1])
    total_providers_retained = float((baseline_turnover_headcount - n * turnover_rates).sum())

    logger.debug(
        "Projected %d years for %d providers: net savings %.2f, ROI %.2f%%",
        years,
        n,
        total_net_savings,
        final_roi,
    )
    return RoiResult(
        projected_data=projected,
        summary=RoiSummary(
            total_investment=total_investment,
            total_savings=total_savings,
            total_net_savings=total_net_savings,
            final_roi=final_roi,
            break_even_year=break_even_year,
            total_burnout_averted=total_burnout_averted,
            total_providers_retained=total_providers_retained,
            baseline_burnout_rate=details.current_burnout_rate,
            baseline_turnover_rate=details.current_turnover_rate,
            baseline_annual_cost=baseline_cost,
            year1_effectiveness_ratio=year1_ratio,
            sustain_effectiveness_ratio=sustain_ratio,
        ),
    )


# ---------------------------------------------------------------------------
# Form validation
# ---------------------------------------------------------------------------


class RoiValidationError(ValueError):
    """Raised when one ROI form field is missing, non-numeric, or out of bounds."""

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field
        self.message = message


@dataclass(slots=True, frozen=True)
class FieldRule:
    """Declared bounds for one ROI form field.

    Percentage fields are entered in percent and stored as fractions.
    """

    name: str
    label: str
    minimum: float
    maximum: float | None = None
    percentage: bool = False
    integer: bool = False


FIELD_RULES: tuple[FieldRule, ...] = (
    FieldRule("numProviders", "Number of providers", 1, integer=True),
    FieldRule("avgSalary", "Average provider salary", 0),
    FieldRule("currentBurnoutRate", "Current burnout rate (%)", 0, 100, percentage=True),
    FieldRule("currentTurnoverRate", "Current turnover rate (%)", 0, 100, percentage=True),
    FieldRule("year1Investment", "Year 1 investment", 0),
    FieldRule("sustainingInvestment", "Sustaining annual investment", 0),
    FieldRule("projectionYears", "Projection years", 1, MAX_PROJECTION_YEARS, integer=True),
    FieldRule("turnoverCostMultiplier", "Turnover cost multiplier", 0),
    FieldRule("productivityLossRate", "Productivity loss rate (%)", 0, 100, percentage=True),
    FieldRule("maxEffectiveInvestment", "Max effective investment per provider", 1),
    FieldRule("year1BurnoutReduction", "Year 1 burnout reduction (%)", 0, 100, percentage=True),
    FieldRule("year1TurnoverReduction", "Year 1 turnover reduction (%)", 0, 100, percentage=True),
    FieldRule("sustainBurnoutReduction", "Sustaining burnout reduction (%)", 0, 100, percentage=True),
    FieldRule("sustainTurnoverReduction", "Sustaining turnover reduction (%)", 0, 100, percentage=True),
)


def _parse_field(rule: FieldRule, raw: Any) -> float:
    label = f"{rule.label} ({rule.name})"
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        raise RoiValidationError(rule.name, f"{label} is required.")
    if isinstance(raw, bool):
        raise RoiValidationError(rule.name, f"{label} must be a number.")

    try:
        value = float(raw.strip() if isinstance(raw, str) else raw)
    except (TypeError, ValueError) as exc:
        raise RoiValidationError(rule.name, f"{label} must be a number.") from exc

    if not math.isfinite(value):
        raise RoiValidationError(rule.name, f"{label} must be a finite number.")
    if rule.integer and not value.is_integer():
        raise RoiValidationError(rule.name, f"{label} must be a whole number.")
    if value < rule.minimum:
        raise RoiValidationError(rule.name, f"{label} must be at least {rule.minimum:g} (got {value:g}).")
    if rule.maximum is not None and value > rule.maximum:
        raise RoiValidationError(rule.name, f"{label} must be at most {rule.maximum:g} (got {value:g}).")
    return value


def validate_roi_form(form: Mapping[str, Any]) -> dict[str, float]:
    """Parse every declared field, failing on the first invalid one.

    Returns:
        Mapping of field name to parsed value, percentages converted to fractions.

    Raises:
        RoiValidationError: Naming the offending field and violated bound.
    """
    values: dict[str, float] = {}
    for rule in FIELD_RULES:
        value = _parse_field(rule, form.get(rule.name))
        values[rule.name] = value / 100 if rule.percentage else value
    return values


def parse_roi_form(form: Mapping[str, Any]) -> tuple[OrgDetails, ModelAssumptions]:
    values = validate_roi_form(form)
    details = OrgDetails(
        num_providers=int(values["numProviders"]),
        year1_investment=values["year1Investment"],
        sustaining_investment=values["sustainingInvestment"],
        projection_years=int(values["projectionYears"]),
        current_burnout_rate=values["currentBurnoutRate"],
        current_turnover_rate=values["currentTurnoverRate"],
        avg_salary=values["avgSalary"],
    )
    assumptions = ModelAssumptions(
        turnover_cost_multiplier=values["turnoverCostMultiplier"],
        productivity_loss_rate=values["productivityLossRate"],
        max_effective_investment=values["maxEffectiveInvestment"],
        year1_burnout_reduction=values["year1BurnoutReduction"],
        year1_turnover_reduction=values["year1TurnoverReduction"],
        sustain_burnout_reduction=values["sustainBurnoutReduction"],
        sustain_turnover_reduction=values["sustainTurnoverReduction"],
    )
    return details, assumptions
