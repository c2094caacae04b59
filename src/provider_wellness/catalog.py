from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from .content import ContentIndex
from .text import matches

CATALOG_SECTIONS = (
    ("mentalhealth", "Mental Health Resources"),
    ("physicalhealth", "Physical Health Resources"),
)


@dataclass(slots=True, frozen=True)
class ResourceEntry:
    """Resource card data, normalized from either a string or an object."""

    name: str
    description: str = ""
    type: str = ""
    url: str | None = None


@dataclass(slots=True, frozen=True)
class QuickWin:
    category: str
    title: str
    description: str
    strategy_id: str | None = None


def normalize_resource(item: str | Mapping[str, Any]) -> ResourceEntry:
    if isinstance(item, str):
        return ResourceEntry(name=item)
    return ResourceEntry(
        name=item.get("name") or "",
        description=item.get("description") or "",
        type=(item.get("type") or "").lower(),
        url=item.get("url") or None,
    )


def provider_resource_catalog(index: ContentIndex, provider_id: str) -> dict[str, list[ResourceEntry]]:
    """Group one provider's resources under their display headings.

    Categories without a resource list are omitted; an unknown provider
    yields an empty mapping.
    """
    info = index.provider(provider_id) or {}
    catalog: dict[str, list[ResourceEntry]] = {}
    for category_id, heading in CATALOG_SECTIONS:
        resources = (info.get(category_id) or {}).get("resources")
        if resources:
            catalog[heading] = [normalize_resource(item) for item in resources]
    return catalog


def filter_resources(
    entries: Iterable[ResourceEntry],
    resource_type: str | None = None,
    text: str | None = None,
) -> list[ResourceEntry]:
    selected: list[ResourceEntry] = []
    for entry in entries:
        if resource_type and entry.type != resource_type.lower():
            continue
        if text and not matches(f"{entry.name} {entry.description}", text):
            continue
        selected.append(entry)
    return selected


def quick_win_strategies(index: ContentIndex) -> list[QuickWin]:
    wins: list[QuickWin] = []
    for category in index.organization_categories():
        for strategy in category.get("strategies") or []:
            if strategy.get("quickWin"):
                wins.append(
                    QuickWin(
                        category=category.get("name") or "",
                        title=strategy.get("title") or "",
                        description=strategy.get("description") or "",
                        strategy_id=strategy.get("id"),
                    )
                )
    return wins
