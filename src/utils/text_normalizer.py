"""Text normalization for event titles, pick labels, and name matching.

Three concerns live here:

1. **Title normalization** -- Event names from the provider vary in
   apostrophes, punctuation and spacing between redundant listings of the
   same show ("Oilers vs. Canucks" / "Oilers vs Canucks").  Identity keys
   for events without a provider id are built from the normalized form.

2. **Label normalization** -- Pick display names are compared case- and
   whitespace-insensitively when deciding whether two picks are the same.

3. **Fuzzy scoring** -- The pick resolver ranks attraction search results
   against the user's text; rapidfuzz breaks ties between candidates that
   the substring heuristics score equally.
"""

import re

from rapidfuzz import fuzz

_APOSTROPHES = re.compile(r"[’']")
_NON_ALNUM = re.compile(r"[^a-z0-9]+")
_WHITESPACE = re.compile(r"\s+")


def normalize_title(title: str) -> str:
    """Normalize an event title for identity comparison.

    Lowercases, drops apostrophes, and collapses every run of
    non-alphanumeric characters to a single space.

    Args:
        title: Raw event title.

    Returns:
        Normalized title ("Oilers' Night - LIVE!" -> "oilers night live").
    """
    lowered = _APOSTROPHES.sub("", (title or "").lower())
    return _NON_ALNUM.sub(" ", lowered).strip()


def normalize_label(label: str) -> str:
    """Lowercase and collapse whitespace in a human label."""
    return _WHITESPACE.sub(" ", (label or "").strip()).lower()


def word_overlap(query: str, candidate: str) -> int:
    """Count distinct whitespace-separated words shared by both strings."""
    q_words = set(normalize_label(query).split())
    c_words = set(normalize_label(candidate).split())
    return len(q_words & c_words)


def similarity(query: str, candidate: str) -> float:
    """Token-set similarity between two names on a 0.0--1.0 scale.

    ``token_set_ratio`` ignores word order and duplicated tokens, so
    "Oilers Edmonton" still scores 1.0 against "Edmonton Oilers".
    """
    if not query or not candidate:
        return 0.0
    return fuzz.token_set_ratio(normalize_label(query), normalize_label(candidate)) / 100.0
