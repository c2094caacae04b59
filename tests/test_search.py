"""Tests for search.py: query handling, scoping, ranking, and truncation."""
from __future__ import annotations

import pytest

from provider_wellness.content import ContentIndex
from provider_wellness.schema import SearchResponse, SourceType
from provider_wellness.search import (
    STATUS_LOADING,
    STATUS_NO_RESULTS,
    STATUS_OK,
    STATUS_TOO_SHORT,
    SearchEngine,
    build_search_engine,
    normalize_query,
)
from provider_wellness.settings import SearchSettings

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _many_stressor_index(count: int) -> ContentIndex:
    stressors = [{"title": f"Stress {idx}", "detail": "stress detail"} for idx in range(count)]
    return ContentIndex(
        providers={"p": {"title": "P", "mentalhealth": {"stressors": stressors}}},
        crisis={},
        organization={},
    )


class TestNormalizeQuery:
    def test_trims_and_lowercases(self):
        assert normalize_query("  BURNOUT ") == "burnout"

    def test_none_safe(self):
        assert normalize_query(None) == ""  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# SearchEngine.search: status handling
# ---------------------------------------------------------------------------


class TestSearchStatus:
    @pytest.mark.parametrize("query", ["", "a", "  b  "])
    def test_short_query_is_too_short(self, engine, query):
        response = engine.search(query)
        assert response.status == STATUS_TOO_SHORT
        assert response.results == []

    def test_not_ready_index_returns_loading(self):
        response = SearchEngine(ContentIndex.empty()).search("burnout")
        assert response.status == STATUS_LOADING
        assert response.results == []

    def test_no_match_echoes_query(self, engine):
        response = engine.search("  Xylophone Club ")
        assert response.status == STATUS_NO_RESULTS
        assert response.query == "Xylophone Club"
        assert not response.has_results

    def test_match_returns_ok(self, engine):
        response = engine.search("burnout")
        assert isinstance(response, SearchResponse)
        assert response.status == STATUS_OK
        assert response.has_results


# ---------------------------------------------------------------------------
# SearchEngine.search: results
# ---------------------------------------------------------------------------


class TestSearchResults:
    def test_global_search_covers_every_source(self, engine):
        results = engine.search("burnout").results
        types = {r.candidate.source_type for r in results}
        assert types == {
            SourceType.INTRODUCTION,
            SourceType.DETAILED_GUIDE,
            SourceType.STRESSOR,
            SourceType.CRISIS,
            SourceType.ORG_CATEGORY,
        }

    def test_results_sorted_descending(self, engine):
        scores = [r.score for r in engine.search("burnout").results]
        assert scores == sorted(scores, reverse=True)

    def test_query_normalized_for_matching_only(self, engine):
        assert engine.search("  BURNOUT ").query == "BURNOUT"
        assert len(engine.search("  BURNOUT ").results) == len(engine.search("burnout").results)

    def test_exact_title_ranks_first(self, engine):
        results = engine.search("sleep hygiene").results
        assert results[0].candidate.title == "Sleep Hygiene"

    def test_repeated_search_is_identical(self, engine):
        assert engine.search("peer support") == engine.search("peer support")

    def test_scoped_search_restricted_to_provider(self, engine):
        results = engine.search("burnout", scope_provider_id="nurses").results
        assert len(results) == 1
        assert all(r.candidate.provider_id == "nurses" for r in results)

    def test_scoped_search_excludes_crisis_and_organization(self, engine):
        results = engine.search("burnout", scope_provider_id="physicians").results
        assert {r.candidate.source_type for r in results} == {
            SourceType.INTRODUCTION,
            SourceType.DETAILED_GUIDE,
        }

    def test_unknown_scope_has_no_results(self, engine):
        assert engine.search("burnout", scope_provider_id="dentists").status == STATUS_NO_RESULTS


# ---------------------------------------------------------------------------
# Ranking vs truncation
# ---------------------------------------------------------------------------


class TestTruncation:
    def test_results_capped_at_ten(self):
        engine = SearchEngine(_many_stressor_index(15))
        assert len(engine.search("stress").results) == 10

    def test_rank_all_returns_full_list(self):
        engine = SearchEngine(_many_stressor_index(15))
        assert len(engine.rank_all("stress")) == 15

    def test_equal_scores_keep_discovery_order(self):
        engine = SearchEngine(_many_stressor_index(15))
        titles = [r.candidate.title for r in engine.search("stress").results]
        assert titles == [f"Stress {idx}" for idx in range(10)]

    def test_rank_all_short_query_empty(self, engine):
        assert engine.rank_all("a") == []

    def test_collect_candidates_discovery_order(self, engine):
        candidates = engine.collect_candidates("burnout")
        assert [c.source_type for c in candidates] == [
            SourceType.INTRODUCTION,
            SourceType.DETAILED_GUIDE,
            SourceType.STRESSOR,
            SourceType.CRISIS,
            SourceType.ORG_CATEGORY,
        ]


# ---------------------------------------------------------------------------
# build_search_engine
# ---------------------------------------------------------------------------


class TestBuildSearchEngine:
    def test_settings_applied(self, sample_index):
        engine = build_search_engine(sample_index, SearchSettings(scoring_profile="additive", top_k=3))
        assert engine.top_k == 3
        assert engine.scorer.profile.name == "additive"
        assert len(engine.search("burnout").results) == 3

    def test_defaults(self, sample_index):
        engine = build_search_engine(sample_index)
        assert engine.top_k == 10
        assert engine.scorer.profile.name == "enriched"

    def test_unknown_profile_raises(self, sample_index):
        with pytest.raises(ValueError):
            build_search_engine(sample_index, SearchSettings(scoring_profile="nope"))
