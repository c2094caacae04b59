from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from types import MappingProxyType

from .schema import ScoredResult, SearchCandidate, SourceType
from .text import strip_markup, tokenize

TYPE_WEIGHTS = MappingProxyType(
    {
        SourceType.INTRODUCTION: 30.0,
        SourceType.CRISIS: 30.0,
        SourceType.DETAILED_GUIDE: 25.0,
        SourceType.STRATEGY: 20.0,
        SourceType.KEY_POINTS: 20.0,
        SourceType.STRESSOR: 15.0,
        SourceType.RESOURCE: 15.0,
        SourceType.FOCUS_AREA: 15.0,
    }
)


@dataclass(slots=True, frozen=True)
class ScoringProfile:
    """Weight table for the rule-based relevance score."""

    name: str
    exact_title: float = 100.0
    title_prefix: float = 50.0
    title_contains: float = 40.0
    all_tokens_in_title: float = 30.0
    per_token_in_title: float = 10.0
    per_token_in_label: float = 25.0
    exact_label_token: float = 50.0
    snippet_phrase: float = 5.0
    per_token_in_snippet: float = 0.0
    short_circuit_title: bool = False
    type_weights: MappingProxyType = field(default_factory=lambda: TYPE_WEIGHTS)
    default_type_weight: float = 10.0

    def type_weight(self, source_type: SourceType) -> float:
        return self.type_weights.get(source_type, self.default_type_weight)


ADDITIVE_PROFILE = ScoringProfile(name="additive")

ENRICHED_PROFILE = ScoringProfile(
    name="enriched",
    snippet_phrase=25.0,
    per_token_in_snippet=5.0,
    short_circuit_title=True,
)

PROFILES = {profile.name: profile for profile in (ADDITIVE_PROFILE, ENRICHED_PROFILE)}


def get_profile(name: str) -> ScoringProfile:
    try:
        return PROFILES[name]
    except KeyError as exc:
        raise ValueError(f"Unknown scoring profile '{name}'. Expected one of: {sorted(PROFILES)}") from exc


class RelevanceScorer:
    """Deterministic rule-based scorer for search candidates."""

    def __init__(self, profile: ScoringProfile = ENRICHED_PROFILE):
        self.profile = profile

    def score(self, candidate: SearchCandidate, query: str) -> float:
        """Score one candidate against a query.

        Args:
            candidate: Matched candidate carrying title, label, and snippet.
            query: Raw query text; it is trimmed and lower-cased here.

        Returns:
            Non-negative relevance score. Rules are cumulative unless the
            profile short-circuits the three title rules.
        """
        profile = self.profile
        term = query.lower().strip()
        words = tokenize(term)
        title = candidate.title.lower()
        label = candidate.provider_label.lower()
        snippet = strip_markup(candidate.snippet).lower()

        score = 0.0

        if profile.short_circuit_title:
            if title == term:
                score += profile.exact_title
            elif title.startswith(term):
                score += profile.title_prefix
            elif term in title:
                score += profile.title_contains
        else:
            if title == term:
                score += profile.exact_title
            if title.startswith(term):
                score += profile.title_prefix
            if term in title:
                score += profile.title_contains

        if all(word in title for word in words):
            score += profile.all_tokens_in_title

        score += profile.per_token_in_title * sum(1 for word in words if word in title)
        score += profile.per_token_in_label * sum(1 for word in words if word in label)

        if any(word == label for word in words):
            score += profile.exact_label_token

        if term in snippet:
            score += profile.snippet_phrase
        score += profile.per_token_in_snippet * sum(1 for word in words if word in snippet)

        score += profile.type_weight(candidate.source_type)
        return score

    def rank(
        self, candidates: Iterable[SearchCandidate], query: str, top_k: int | None = None
    ) -> list[ScoredResult]:
        """Score candidates and order them by descending relevance.

        Ties keep the order in which candidates were discovered.

        Args:
            candidates: Candidates in discovery order.
            query: Query used for scoring.
            top_k: Number of results to keep; ``None`` keeps the full ranking.

        Returns:
            Scored results sorted by score, highest first.
        """
        ranked = sorted(
            (ScoredResult(candidate=candidate, score=self.score(candidate, query)) for candidate in candidates),
            key=lambda row: row.score,
            reverse=True,
        )
        if top_k is None:
            return ranked
        return ranked[:top_k]
