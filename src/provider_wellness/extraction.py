"""Turn the content documents into matched search candidates.

Each extractor walks one document in display order and emits a
``SearchCandidate`` for every item whose searchable fields match the query.
Discovery order matters: ranking is a stable sort, so equal scores keep the
order produced here.
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .content import ContentIndex
from .schema import SearchCandidate, SourceType
from .text import context_snippet, matches

CRISIS_LABEL = "Crisis Resources"
ORGANIZATION_LABEL = "Organizational Strategies"

SECTION_NAMES = {
    "mentalhealth": "Mental Health",
    "physicalhealth": "Physical Health",
    "stressors": "Stressors",
    "strategies": "Strategies",
    "focus_areas": "Focus Areas",
    "resources": "Resources",
    "detailedGuide": "Detailed Guide",
    "key_points": "Key Points",
}

# (section key, source type, title field, detail field)
ITEM_SECTIONS = (
    ("stressors", SourceType.STRESSOR, "title", "detail"),
    ("strategies", SourceType.STRATEGY, "title", "detail"),
    ("resources", SourceType.RESOURCE, "name", "description"),
    ("focus_areas", SourceType.FOCUS_AREA, "title", "detail"),
)


def format_section_name(section: str) -> str:
    return SECTION_NAMES.get(section, section)


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _item_fields(item: Any, title_field: str, detail_field: str) -> tuple[str, str]:
    if isinstance(item, str):
        return item, ""
    if isinstance(item, Mapping):
        return _text(item.get(title_field)), _text(item.get(detail_field))
    return "", ""


def _match_fields(fields: list[str], query: str) -> str | None:
    """Return the field to build the snippet from, or None when nothing matches.

    ``fields`` is ordered from most to least detailed. The combined text has
    to match; the snippet then comes from the most detailed field that
    matches on its own, or the most detailed non-empty field otherwise.
    """
    searchable = " ".join(value for value in fields if value)
    if not matches(searchable, query):
        return None
    for value in fields:
        if value and matches(value, query):
            return value
    return next(value for value in fields if value)


def provider_candidates(
    provider_id: str,
    index: ContentIndex,
    query: str,
    snippet_length: int = 150,
) -> list[SearchCandidate]:
    """Extract matching candidates from one provider's categories.

    Args:
        provider_id: Key of the provider in the provider document.
        index: Content index holding the provider document.
        query: Normalized query text.
        snippet_length: Window size passed to ``context_snippet``.

    Returns:
        Candidates in category, section, then item order.
    """
    provider_title = index.provider_title(provider_id)
    candidates: list[SearchCandidate] = []

    for category_id, category in index.iter_categories(provider_id):
        category_title = format_section_name(category_id)

        def _candidate(
            source_type: SourceType,
            title: str,
            content: str,
            section_key: str,
            ordinal_index: int | None = None,
        ) -> SearchCandidate:
            return SearchCandidate(
                source_type=source_type,
                title=title,
                raw_content=content,
                provider_label=provider_title,
                category_label=category_title,
                section_key=section_key,
                snippet=context_snippet(content, query, snippet_length),
                provider_id=provider_id,
                category_id=category_id,
                ordinal_index=ordinal_index,
            )

        introduction = _text(category.get("introduction"))
        if introduction and matches(introduction, query):
            candidates.append(
                _candidate(
                    SourceType.INTRODUCTION,
                    f"{provider_title} - {category_title}",
                    introduction,
                    "introduction",
                )
            )

        for section_key, source_type, title_field, detail_field in ITEM_SECTIONS:
            items = category.get(section_key)
            if not isinstance(items, list):
                continue
            for position, item in enumerate(items):
                title, detail = _item_fields(item, title_field, detail_field)
                matched = _match_fields([detail, title], query)
                if matched is None:
                    continue
                candidates.append(_candidate(source_type, title, matched, section_key, position))

        guide = _text(category.get("detailedGuide"))
        if guide and matches(guide, query):
            candidates.append(
                _candidate(
                    SourceType.DETAILED_GUIDE,
                    f"{provider_title} - {category_title} Guide",
                    guide,
                    "detailedGuide",
                )
            )

        key_points = category.get("key_points")
        if isinstance(key_points, list):
            blob = " ".join(point for point in key_points if isinstance(point, str) and point)
            if blob and matches(blob, query):
                candidates.append(
                    _candidate(
                        SourceType.KEY_POINTS,
                        f"{provider_title} - Key Points",
                        blob,
                        "key_points",
                    )
                )

    return candidates


def crisis_candidates(index: ContentIndex, query: str, snippet_length: int = 150) -> list[SearchCandidate]:
    candidates: list[SearchCandidate] = []
    for position, resource in enumerate(index.crisis_resources()):
        if not isinstance(resource, Mapping):
            continue
        name = _text(resource.get("name"))
        matched = _match_fields(
            [
                _text(resource.get("expandedDescription")),
                _text(resource.get("description")),
                name,
            ],
            query,
        )
        if matched is None:
            continue
        candidates.append(
            SearchCandidate(
                source_type=SourceType.CRISIS,
                title=name,
                raw_content=matched,
                provider_label=CRISIS_LABEL,
                category_label=_text(resource.get("category")),
                section_key="crisis",
                snippet=context_snippet(matched, query, snippet_length),
                ordinal_index=position,
                cross_ref_id=resource.get("id"),
            )
        )
    return candidates


def organization_candidates(index: ContentIndex, query: str, snippet_length: int = 150) -> list[SearchCandidate]:
    """Extract category and strategy candidates from the organization document.

    Each category is followed by its own strategies, so a category always
    precedes the strategies it contains in discovery order.
    """
    candidates: list[SearchCandidate] = []
    for category in index.organization_categories():
        if not isinstance(category, Mapping):
            continue
        category_name = _text(category.get("name"))
        category_id = category.get("id")

        matched = _match_fields([_text(category.get("introduction")), category_name], query)
        if matched is not None:
            candidates.append(
                SearchCandidate(
                    source_type=SourceType.ORG_CATEGORY,
                    title=category_name,
                    raw_content=matched,
                    provider_label=ORGANIZATION_LABEL,
                    category_label=category_name,
                    section_key="categories",
                    snippet=context_snippet(matched, query, snippet_length),
                    category_id=category_id,
                    cross_ref_id=category_id,
                )
            )

        for position, strategy in enumerate(category.get("strategies") or []):
            if not isinstance(strategy, Mapping):
                continue
            title = _text(strategy.get("title"))
            matched = _match_fields(
                [
                    _text(strategy.get("description")),
                    _text(strategy.get("introduction")),
                    title,
                ],
                query,
            )
            if matched is None:
                continue
            candidates.append(
                SearchCandidate(
                    source_type=SourceType.ORG_STRATEGY,
                    title=title,
                    raw_content=matched,
                    provider_label=ORGANIZATION_LABEL,
                    category_label=category_name,
                    section_key="strategies",
                    snippet=context_snippet(matched, query, snippet_length),
                    category_id=category_id,
                    ordinal_index=position,
                    cross_ref_id=strategy.get("id"),
                )
            )
    return candidates
