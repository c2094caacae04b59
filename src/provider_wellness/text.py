"""Markup stripping, fuzzy containment, and highlighted context snippets."""
from __future__ import annotations

import re

from bs4 import BeautifulSoup

BLOCK_TAGS = ["p", "div", "h1", "h2", "h3", "h4", "h5", "h6", "li", "td", "th", "br"]

ELLIPSIS = "..."
HIGHLIGHT_OPEN = "<mark>"
HIGHLIGHT_CLOSE = "</mark>"

_WHITESPACE = re.compile(r"\s+")
# Decoded text that the parser would read as a tag or an entity on a second pass.
_ENTITY_START = re.compile(r"&(?=#|[A-Za-z])")
_TAG_START = re.compile(r"<(?=[A-Za-z/!?])")


def strip_markup(content: str) -> str:
    """Remove HTML tags and collapse whitespace into single spaces.

    A space is inserted after every block-level element so that text from
    adjacent paragraphs or list items never fuses into one token. Escaped
    markup such as ``&lt;b&gt;`` stays escaped in the output, so stripping
    an already stripped string returns it unchanged.
    """
    if not content:
        return ""
    if "<" in content or "&" in content:
        soup = BeautifulSoup(content, "html.parser")
        for element in soup.find_all(BLOCK_TAGS):
            element.insert_after(" ")
        content = _ENTITY_START.sub("&amp;", soup.get_text())
        content = _TAG_START.sub("&lt;", content)
    return _WHITESPACE.sub(" ", content).strip()


normalize_for_search = strip_markup


def tokenize(term: str) -> list[str]:
    return [token for token in term.lower().split() if token]


def matches(content: str, term: str) -> bool:
    """Return True when ``term`` occurs in ``content`` as a phrase or as a set of words.

    The exact phrase is tried first; otherwise every whitespace-separated word
    of ``term`` must appear somewhere in the text, in any order.
    """
    if not content:
        return False

    text = strip_markup(content).lower()
    needle = term.lower().strip()
    if needle in text:
        return True
    return all(token in text for token in tokenize(needle))


def highlight(snippet: str, tokens: list[str]) -> str:
    if not tokens:
        return snippet
    # Longest first so overlapping tokens mark the widest span.
    alternation = "|".join(re.escape(token) for token in sorted(set(tokens), key=len, reverse=True))
    return re.sub(f"({alternation})", rf"{HIGHLIGHT_OPEN}\1{HIGHLIGHT_CLOSE}", snippet, flags=re.IGNORECASE)


def _earliest_token(lower_text: str, tokens: list[str]) -> tuple[int, str]:
    first_index = -1
    matched = ""
    for token in tokens:
        index = lower_text.find(token)
        if index != -1 and (first_index == -1 or index < first_index):
            first_index = index
            matched = token
    return first_index, matched


def context_snippet(content: str, term: str, max_length: int = 150) -> str:
    """Extract a highlighted window of text around the first query match.

    Args:
        content: Raw content, possibly containing HTML.
        term: Search query; each of its words is highlighted.
        max_length: Size of the text window, excluding ellipses and markers.

    Returns:
        Snippet with ``...`` on truncated sides and every query word wrapped
        in ``<mark>`` tags. Falls back to the leading ``max_length``
        characters when no query word occurs in the text.
    """
    if not content or not term:
        return ""

    text = strip_markup(content)
    tokens = tokenize(term)
    first_index, matched = _earliest_token(text.lower(), tokens)

    if first_index == -1:
        return text[:max_length] + ELLIPSIS

    half = max_length // 2
    start = max(0, first_index - half)
    end = min(len(text), start + max_length)
    if end - start < max_length:
        start = max(0, end - max_length)

    # Snap both edges onto word boundaries without losing the matched word.
    if start > 0 and text[start - 1] != " ":
        space_index = text.find(" ", start, first_index)
        if space_index != -1:
            start = space_index + 1
    if end < len(text) and text[end] != " ":
        space_index = text.rfind(" ", first_index + len(matched), end)
        if space_index != -1:
            end = space_index

    snippet = text[start:end].strip()
    if start > 0:
        snippet = ELLIPSIS + snippet
    if end < len(text):
        snippet = snippet + ELLIPSIS

    return highlight(snippet, tokens)
