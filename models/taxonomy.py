"""Canonical taxonomy definitions for closet items.

The mobile client offers three categories when an item is added and lets the
closet be filtered by any of them or by ``all``. Helper functions keep the
normalisation consistent between the store, the tools and the HTTP layer.
"""

from typing import Dict, List, Optional


def _normalize_key(value: str) -> str:
    """Normalise a free-form string into a taxonomy key."""

    return value.strip().lower().replace(" ", "_")


CATEGORIES: List[str] = ["top", "bottom", "shoe"]

CATEGORY_ALIASES: Dict[str, str] = {
    "top": "top",
    "tops": "top",
    "bottom": "bottom",
    "bottoms": "bottom",
    "shoe": "shoe",
    "shoes": "shoe",
}

ALL_CATEGORIES = "all"


def validate_category(value: str) -> str:
    """Validate and normalise a category value.

    Plural labels used by the client ("Tops", "Shoes") are accepted. Raises a
    :class:`ValueError` if the category is not part of the canonical taxonomy.
    """

    key = CATEGORY_ALIASES.get(_normalize_key(value)) if isinstance(value, str) else None
    if key is None:
        raise ValueError(f"Unsupported category '{value}'. Allowed: {CATEGORIES}")
    return key


def normalize_category_filter(value: Optional[str]) -> Optional[str]:
    """Return the category key for a closet filter, ``None`` meaning no filter."""

    if value is None or _normalize_key(value) in {"", ALL_CATEGORIES}:
        return None
    return validate_category(value)


__all__ = [
    "ALL_CATEGORIES",
    "CATEGORIES",
    "CATEGORY_ALIASES",
    "normalize_category_filter",
    "validate_category",
]
