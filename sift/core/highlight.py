"""Highlight query words inside display text."""

import re
from typing import List, Tuple

DEFAULT_MARKER: Tuple[str, str] = ('<mark class="bg-yellow-200 px-1 rounded">', '</mark>')


def highlight_matches(text: str, query: str, marker: Tuple[str, str] = DEFAULT_MARKER) -> str:
    """
    Wrap every case-insensitive occurrence of each query word in marker.

    Words are applied one after another, so a later word also matches
    inside markup inserted for an earlier one.
    """
    if not query.strip():
        return text

    open_tag, close_tag = marker
    highlighted = text
    for word in query.split():
        pattern = re.compile(f"({re.escape(word)})", re.IGNORECASE)
        highlighted = pattern.sub(
            lambda m: f"{open_tag}{m.group(1)}{close_tag}", highlighted
        )
    return highlighted


def match_spans(text: str, query: str) -> List[Tuple[int, int]]:
    """(start, end) offsets of every query word occurrence in the unmarked text."""
    spans: List[Tuple[int, int]] = []
    for word in query.split():
        pattern = re.compile(re.escape(word), re.IGNORECASE)
        spans.extend(m.span() for m in pattern.finditer(text))
    return sorted(spans)
