"""Text normalization helpers shared by grading and the vocabulary drill."""

import re

_DOUBLE_QUOTES = re.compile(r'[“”„"]')
_SINGLE_QUOTES = re.compile(r'[’]')
_DISALLOWED = re.compile(r'[^a-z0-9äöüß\s\-/]')
_WHITESPACE = re.compile(r'\s+')


def normalize(text: str | None) -> str:
    """Canonicalize a string for comparison.

    Lower-cases, unifies quote glyphs, replaces everything except latin
    letters, digits, umlauts, ß, whitespace, '-' and '/' with a space and
    collapses whitespace. None counts as the empty string.
    """
    s = (text or '').lower()
    s = _DOUBLE_QUOTES.sub('"', s)
    s = _SINGLE_QUOTES.sub("'", s)
    s = _DISALLOWED.sub(' ', s)
    s = _WHITESPACE.sub(' ', s)
    return s.strip()


def tokenize(text: str | None) -> list[str]:
    """Split normalized text into tokens."""
    return [t for t in normalize(text).split(' ') if t]


def unique(items: list) -> list:
    """Deduplicate, keeping the first occurrence of each item."""
    seen = set()
    result = []
    for item in items:
        if item not in seen:
            seen.add(item)
            result.append(item)
    return result


def collapse_whitespace(text: str | None) -> str:
    """Trim and collapse internal whitespace."""
    return _WHITESPACE.sub(' ', (text or '')).strip()
