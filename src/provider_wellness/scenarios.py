from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, replace
from typing import Any

from .roi import ModelAssumptions, OrgDetails, RoiResult, RoiValidationError, parse_roi_form, project

logger = logging.getLogger(__name__)

SCENARIO_MULTIPLIERS = {
    "pessimistic": 0.5,
    "expected": 1.0,
    "optimistic": 1.5,
}


@dataclass(slots=True, frozen=True)
class ScenarioSet:
    """Pessimistic, expected, and optimistic projections for one input set."""

    pessimistic: RoiResult
    expected: RoiResult
    optimistic: RoiResult

    def items(self) -> Iterator[tuple[str, RoiResult]]:
        for name in SCENARIO_MULTIPLIERS:
            yield name, getattr(self, name)


@dataclass(slots=True)
class RoiResponse:
    """Boundary result for a form submission: either projections or an error message."""

    result: RoiResult | None = None
    scenarios: ScenarioSet | None = None
    error: str | None = None
    error_field: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def scale_assumptions(assumptions: ModelAssumptions, factor: float) -> ModelAssumptions:
    """Scale the four reduction effects by ``factor``; cost fields stay as they are."""
    return replace(
        assumptions,
        year1_burnout_reduction=assumptions.year1_burnout_reduction * factor,
        year1_turnover_reduction=assumptions.year1_turnover_reduction * factor,
        sustain_burnout_reduction=assumptions.sustain_burnout_reduction * factor,
        sustain_turnover_reduction=assumptions.sustain_turnover_reduction * factor,
    )


def run_scenarios(details: OrgDetails, assumptions: ModelAssumptions) -> ScenarioSet:
    results = {
        name: project(details, assumptions if factor == 1.0 else scale_assumptions(assumptions, factor))
        for name, factor in SCENARIO_MULTIPLIERS.items()
    }
    return ScenarioSet(**results)


def calculate_from_form(form: Mapping[str, Any]) -> RoiResponse:
    """Validate raw form input and run the expected projection plus scenarios.

    Args:
        form: Field name to numeric string (or number) mapping.

    Returns:
        ``RoiResponse`` carrying either the projections or a single
        validation message. Invalid input never raises.
    """
    try:
        details, assumptions = parse_roi_form(form)
    except RoiValidationError as exc:
        logger.info("ROI form rejected: %s", exc.message)
        return RoiResponse(error=exc.message, error_field=exc.field)

    scenarios = run_scenarios(details, assumptions)
    return RoiResponse(result=scenarios.expected, scenarios=scenarios)
