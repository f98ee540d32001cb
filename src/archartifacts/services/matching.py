"""Case-insensitive substring matching over nested JSON documents.

Shared by the search and dataserve providers. Only string values are
compared; numbers, booleans and keys are ignored.
"""

from __future__ import annotations

from typing import Any


def contains_term(document: Any, term: str) -> bool:
    """Return True if any string inside ``document`` contains ``term``.

    Dicts are searched through their values and lists through their items,
    at any depth. The comparison is case-insensitive.

    Example:
        >>> contains_term({"title": "Design Notes", "tags": ["ADR"]}, "adr")
        True
    """
    return _contains_lowered(document, term.lower())


def _contains_lowered(value: Any, needle: str) -> bool:
    if isinstance(value, str):
        return needle in value.lower()
    if isinstance(value, dict):
        return any(_contains_lowered(v, needle) for v in value.values())
    if isinstance(value, (list, tuple)):
        return any(_contains_lowered(v, needle) for v in value)
    return False
