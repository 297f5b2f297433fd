"""Identifier helpers — slugs for test case IDs and per-plan uniqueness."""

from __future__ import annotations

import re

FALLBACK_SLUG = "test-case"
MAX_SLUG_LENGTH = 60

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def slugify(value: str) -> str:
    """Lower-case, collapse non-alphanumeric runs to '-', and cap the length."""
    sanitized = _NON_ALNUM.sub("-", value.lower()).strip("-")
    if not sanitized:
        return FALLBACK_SLUG
    return sanitized[:MAX_SLUG_LENGTH]


def create_unique_id(base: str, used: set[str]) -> str:
    """Slugify ``base`` and register it in ``used``, suffixing -2, -3, ... on collision."""
    candidate = slugify(base)
    if candidate not in used:
        used.add(candidate)
        return candidate
    counter = 2
    while f"{candidate}-{counter}" in used:
        counter += 1
    final_id = f"{candidate}-{counter}"
    used.add(final_id)
    return final_id
