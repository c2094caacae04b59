"""Shared pytest fixtures for provider_wellness unit tests."""
from __future__ import annotations

import pytest

from provider_wellness.content import ContentIndex
from provider_wellness.roi import ModelAssumptions, OrgDetails
from provider_wellness.sample_content import build_sample_index
from provider_wellness.search import SearchEngine


@pytest.fixture()
def sample_index() -> ContentIndex:
    return build_sample_index()


@pytest.fixture()
def engine(sample_index) -> SearchEngine:
    return SearchEngine(sample_index)


@pytest.fixture()
def example_details() -> OrgDetails:
    return OrgDetails(
        num_providers=100,
        year1_investment=500_000,
        sustaining_investment=250_000,
        projection_years=5,
        current_burnout_rate=0.5,
        current_turnover_rate=0.15,
        avg_salary=250_000,
    )


@pytest.fixture()
def default_assumptions() -> ModelAssumptions:
    return ModelAssumptions()


@pytest.fixture()
def valid_form() -> dict[str, str]:
    return {
        "numProviders": "100",
        "avgSalary": "250000",
        "currentBurnoutRate": "50",
        "currentTurnoverRate": "15",
        "year1Investment": "500000",
        "sustainingInvestment": "250000",
        "projectionYears": "5",
        "turnoverCostMultiplier": "1.5",
        "productivityLossRate": "20",
        "maxEffectiveInvestment": "5000",
        "year1BurnoutReduction": "35",
        "year1TurnoverReduction": "25",
        "sustainBurnoutReduction": "10",
        "sustainTurnoverReduction": "5",
    }
