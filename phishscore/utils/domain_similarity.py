"""Domain similarity helpers used by the typo-squatting rule."""

from __future__ import annotations

from typing import Iterable, Optional

from rapidfuzz.distance import Levenshtein

TYPO_MIN_DISTANCE = 1
TYPO_MAX_DISTANCE = 2


def levenshtein_distance(a: str, b: str) -> int:
    """Edit distance with unit insert/delete/substitute cost."""
    return Levenshtein.distance(a or "", b or "")


def first_label(domain: str) -> str:
    return (domain or "").split(".")[0]


def closest_brand(label: str, brands: Iterable[str]) -> Optional[str]:
    """Return the first brand within typo distance of ``label``.

    An exact match is the brand itself, not a typo, and is skipped.
    """
    for brand in brands:
        if label == brand:
            continue
        distance = levenshtein_distance(label, brand)
        if TYPO_MIN_DISTANCE <= distance <= TYPO_MAX_DISTANCE:
            return brand
    return None
