"""Utility functions for keyword matching over free text."""
from __future__ import annotations

from typing import Iterable, Optional

MAX_KEYWORD_OCCURRENCES = 10


def contains_any(text: str, keywords: Iterable[str]) -> bool:
    """Plain substring containment, no tokenisation or stemming."""
    return any(keyword in text for keyword in keywords)


def first_match(text: str, keywords: Iterable[str]) -> Optional[str]:
    for keyword in keywords:
        if keyword in text:
            return keyword
    return None


def count_occurrences(
    text: str, keywords: Iterable[str], limit: int = MAX_KEYWORD_OCCURRENCES
) -> int:
    """Count non-overlapping occurrences of every keyword, capped at ``limit``."""
    total = sum(text.count(keyword) for keyword in keywords if keyword)
    return min(total, limit)


__all__ = [
    "MAX_KEYWORD_OCCURRENCES",
    "contains_any",
    "count_occurrences",
    "first_match",
]
