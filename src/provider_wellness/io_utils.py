from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from .content import ContentIndex

logger = logging.getLogger(__name__)


class ContentLoadError(RuntimeError):
    """Raised when a content document is missing or is not valid JSON."""


def load_json(path: str | Path) -> dict[str, Any]:
    source = Path(path)
    try:
        with source.open("r", encoding="utf-8") as file_handle:
            payload = json.load(file_handle)
    except FileNotFoundError as exc:
        raise ContentLoadError(f"Content file not found: {source}") from exc
    except json.JSONDecodeError as exc:
        raise ContentLoadError(f"Content file is not valid JSON: {source} ({exc.msg})") from exc

    if not isinstance(payload, dict):
        raise ContentLoadError(f"Content file must hold a JSON object: {source}")
    return payload


def load_content_index(
    provider_path: str | Path = "data/providers.json",
    crisis_path: str | Path = "data/crisis.json",
    organization_path: str | Path = "data/organization.json",
) -> ContentIndex:
    """Load the three content documents into a ready ``ContentIndex``.

    Args:
        provider_path: Provider wellness document keyed by provider id.
        crisis_path: Crisis resources document.
        organization_path: Organizational strategy document.

    Returns:
        Index over all three documents.

    Raises:
        ContentLoadError: If any document cannot be read or parsed.
    """
    try:
        providers = load_json(provider_path)
        crisis = load_json(crisis_path)
        organization = load_json(organization_path)
    except ContentLoadError:
        logger.exception("Failed to load content documents")
        raise

    logger.info(
        "Loaded content: %d providers, %d crisis resources, %d organization categories",
        len(providers),
        len(crisis.get("resources") or []),
        len(organization.get("categories") or []),
    )
    return ContentIndex(providers=providers, crisis=crisis, organization=organization)


def save_content(index: ContentIndex, output_dir: str | Path = "data") -> None:
    root = Path(output_dir)
    root.mkdir(parents=True, exist_ok=True)

    documents = {
        "providers.json": index.providers,
        "crisis.json": index.crisis,
        "organization.json": index.organization,
    }
    for filename, document in documents.items():
        with (root / filename).open("w", encoding="utf-8") as file_handle:
            json.dump(document, file_handle, indent=2, ensure_ascii=False)
            file_handle.write("\n")
