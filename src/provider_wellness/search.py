from __future__ import annotations

import logging

from .content import ContentIndex
from .extraction import crisis_candidates, organization_candidates, provider_candidates
from .schema import ScoredResult, SearchCandidate, SearchResponse
from .scoring import RelevanceScorer, get_profile
from .settings import SearchSettings

logger = logging.getLogger(__name__)

STATUS_OK = "ok"
STATUS_TOO_SHORT = "too_short"
STATUS_LOADING = "loading"
STATUS_NO_RESULTS = "no_results"


def normalize_query(query: str) -> str:
    return (query or "").lower().strip()


class SearchEngine:
    """Multi-source keyword search over the loaded content documents.

    The engine holds no per-call state: every search reads the immutable
    index and returns a fresh ``SearchResponse``.
    """

    def __init__(
        self,
        index: ContentIndex,
        scorer: RelevanceScorer | None = None,
        top_k: int = 10,
        min_query_length: int = 2,
        snippet_length: int = 150,
    ):
        self.index = index
        self.scorer = scorer or RelevanceScorer()
        self.top_k = top_k
        self.min_query_length = min_query_length
        self.snippet_length = snippet_length

    def collect_candidates(self, query: str, scope_provider_id: str | None = None) -> list[SearchCandidate]:
        """Gather matching candidates in discovery order.

        Args:
            query: Normalized query text.
            scope_provider_id: Restrict the search to one provider when given.

        Returns:
            Unscored candidates: providers first, then crisis resources, then
            organizational content. Scoped searches only visit the provider.
        """
        if scope_provider_id is not None:
            if self.index.provider(scope_provider_id) is None:
                logger.warning("Scoped search for unknown provider '%s'", scope_provider_id)
                return []
            return provider_candidates(scope_provider_id, self.index, query, self.snippet_length)

        candidates: list[SearchCandidate] = []
        for provider_id in self.index.provider_ids():
            candidates.extend(provider_candidates(provider_id, self.index, query, self.snippet_length))
        candidates.extend(crisis_candidates(self.index, query, self.snippet_length))
        candidates.extend(organization_candidates(self.index, query, self.snippet_length))
        return candidates

    def rank_all(self, query: str, scope_provider_id: str | None = None) -> list[ScoredResult]:
        term = normalize_query(query)
        if len(term) < self.min_query_length or not self.index.ready:
            return []
        return self.scorer.rank(self.collect_candidates(term, scope_provider_id), term)

    def search(self, query: str, scope_provider_id: str | None = None) -> SearchResponse:
        """Run a ranked search and wrap the outcome for the presentation layer.

        Args:
            query: Free-text query as typed by the user.
            scope_provider_id: Provider id for a scoped search, or ``None``.

        Returns:
            ``SearchResponse`` whose status is ``too_short``, ``loading``,
            ``no_results``, or ``ok``. At most ``top_k`` results are returned.
        """
        # The response echoes the query as typed; matching uses the normalized term.
        typed = (query or "").strip()
        term = normalize_query(query)
        if len(term) < self.min_query_length:
            return SearchResponse(status=STATUS_TOO_SHORT, query=typed)
        if not self.index.ready:
            logger.warning("Search attempted before content was loaded")
            return SearchResponse(status=STATUS_LOADING, query=typed)

        results = self.scorer.rank(self.collect_candidates(term, scope_provider_id), term, top_k=self.top_k)
        logger.debug("Search '%s' (scope=%s) returned %d results", term, scope_provider_id, len(results))
        if not results:
            return SearchResponse(status=STATUS_NO_RESULTS, query=typed)
        return SearchResponse(status=STATUS_OK, query=typed, results=results)


def build_search_engine(index: ContentIndex, settings: SearchSettings | None = None) -> SearchEngine:
    """Create a search engine configured from ``SearchSettings``."""
    settings = settings or SearchSettings()
    return SearchEngine(
        index=index,
        scorer=RelevanceScorer(get_profile(settings.scoring_profile)),
        top_k=settings.top_k,
        min_query_length=settings.min_query_length,
        snippet_length=settings.snippet_length,
    )
