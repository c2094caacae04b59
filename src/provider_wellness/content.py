"""Read-only view over the provider, crisis, and organization documents."""
from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any

PROVIDER_CATEGORIES = ("mentalhealth", "physicalhealth")


class ContentIndex:
    """Structural access to the three JSON content trees.

    The trees are loaded once and never mutated. An index built with
    ``ContentIndex.empty()`` reports ``ready == False`` until real documents
    are supplied, which lets callers answer with a "loading" state instead of
    raising.
    """

    def __init__(
        self,
        providers: Mapping[str, Any] | None,
        crisis: Mapping[str, Any] | None,
        organization: Mapping[str, Any] | None,
    ) -> None:
        self._providers = providers
        self._crisis = crisis
        self._organization = organization

    @classmethod
    def empty(cls) -> ContentIndex:
        return cls(providers=None, crisis=None, organization=None)

    @property
    def ready(self) -> bool:
        return None not in (self._providers, self._crisis, self._organization)

    @property
    def providers(self) -> Mapping[str, Any]:
        return self._providers or {}

    @property
    def crisis(self) -> Mapping[str, Any]:
        return self._crisis or {}

    @property
    def organization(self) -> Mapping[str, Any]:
        return self._organization or {}

    def provider_ids(self) -> list[str]:
        return list(self.providers)

    def provider(self, provider_id: str) -> Mapping[str, Any] | None:
        return self.providers.get(provider_id)

    def provider_title(self, provider_id: str) -> str:
        info = self.provider(provider_id) or {}
        return info.get("title", provider_id)

    def iter_categories(self, provider_id: str) -> Iterator[tuple[str, Mapping[str, Any]]]:
        """Yield ``(category_id, category_data)`` for one provider.

        Mental and physical health come first, in that order; any further
        category keys follow in document order. The ``title`` key is skipped.
        """
        info = self.provider(provider_id) or {}
        ordered = [key for key in PROVIDER_CATEGORIES if key in info]
        ordered += [key for key in info if key not in PROVIDER_CATEGORIES and key != "title"]
        for category_id in ordered:
            category_data = info[category_id]
            if isinstance(category_data, Mapping):
                yield category_id, category_data

    def crisis_resources(self) -> list[Mapping[str, Any]]:
        return list(self.crisis.get("resources") or [])

    def organization_categories(self) -> list[Mapping[str, Any]]:
        return list(self.organization.get("categories") or [])
