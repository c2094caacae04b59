from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class SourceType(str, Enum):
    """Kind of content a search candidate was extracted from."""

    INTRODUCTION = "Introduction"
    STRESSOR = "Stressor"
    STRATEGY = "Strategy"
    RESOURCE = "Resource"
    FOCUS_AREA = "Focus Area"
    DETAILED_GUIDE = "Detailed Guide"
    KEY_POINTS = "Key Points"
    CRISIS = "Crisis"
    ORG_STRATEGY = "Org Strategy"
    ORG_CATEGORY = "Org Category"


@dataclass(slots=True, frozen=True)
class SearchCandidate:
    """Unit of content that matched a query, before scoring."""

    source_type: SourceType
    title: str
    raw_content: str
    provider_label: str
    category_label: str
    section_key: str
    snippet: str = ""
    provider_id: str | None = None
    category_id: str | None = None
    ordinal_index: int | None = None
    cross_ref_id: str | None = None


@dataclass(slots=True, frozen=True)
class ScoredResult:
    """Search candidate paired with its relevance score."""

    candidate: SearchCandidate
    score: float


@dataclass(slots=True)
class SearchResponse:
    """Outcome of one search call, handed to the presentation layer as-is."""

    status: str
    query: str
    results: list[ScoredResult] = field(default_factory=list)

    @property
    def has_results(self) -> bool:
        return bool(self.results)
