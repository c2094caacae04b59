from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv


@dataclass(slots=True)
class SearchSettings:
    """Runtime search configuration shared by the engine and scripts."""

    scoring_profile: str = "enriched"
    top_k: int = 10
    min_query_length: int = 2
    snippet_length: int = 150


@dataclass(slots=True)
class ContentPaths:
    """Locations of the three static JSON content documents."""

    provider_path: str = "data/providers.json"
    crisis_path: str = "data/crisis.json"
    organization_path: str = "data/organization.json"


def load_settings() -> tuple[SearchSettings, ContentPaths]:
    """Load environment-backed settings and return typed config objects.

    Returns:
        Tuple containing search settings and content document paths.
    """
    load_dotenv()
    defaults = ContentPaths()
    return (
        SearchSettings(
            scoring_profile=os.getenv("WELLNESS_SCORING_PROFILE", "enriched"),
            top_k=int(os.getenv("WELLNESS_SEARCH_TOP_K", "10")),
        ),
        ContentPaths(
            provider_path=os.getenv("WELLNESS_PROVIDER_DATA", defaults.provider_path),
            crisis_path=os.getenv("WELLNESS_CRISIS_DATA", defaults.crisis_path),
            organization_path=os.getenv("WELLNESS_ORGANIZATION_DATA", defaults.organization_path),
        ),
    )
