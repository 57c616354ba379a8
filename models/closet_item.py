"""Closet item data model and helpers."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from models.taxonomy import validate_category


def utc_now() -> str:
    """Return the current UTC time as an ISO-8601 string."""

    return datetime.now(timezone.utc).isoformat()


def _clean_optional(value: Any) -> Optional[str]:
    """Strip a loose string value, mapping blanks to ``None``."""

    if value is None:
        return None
    text = str(value).strip()
    return text or None


@dataclass
class ClosetItem:
    """Represents a clothing item in a user's closet.

    ``color`` holds the primary color as entered by the user, normally a hex
    triplet. It is kept verbatim; the color-harmony engine decides what it can
    make of it.
    """

    id: str
    user_id: str
    name: str
    category: str
    color: Optional[str] = None
    brand: Optional[str] = None
    image_url: Optional[str] = None
    created_at: str = field(default_factory=utc_now)
    updated_at: str = field(default_factory=utc_now)

    def __post_init__(self) -> None:
        self.name = _clean_optional(self.name) or ""
        if not self.name:
            raise ValueError("ClosetItem requires a non-empty name")
        self.category = validate_category(self.category)
        self.color = _clean_optional(self.color)
        self.brand = _clean_optional(self.brand)
        self.image_url = _clean_optional(self.image_url)

    @property
    def primary_color(self) -> Optional[str]:
        return self.color


def from_raw_metadata(metadata: Dict[str, Any]) -> ClosetItem:
    """Factory to build a :class:`ClosetItem` from loose client metadata."""

    required_fields = ["user_id", "name", "category"]
    missing = [name for name in required_fields if not metadata.get(name)]
    if missing:
        raise ValueError(f"Missing required fields for ClosetItem: {missing}")

    now = utc_now()
    return ClosetItem(
        id=str(metadata.get("id") or uuid.uuid4()),
        user_id=str(metadata["user_id"]),
        name=str(metadata["name"]),
        category=str(metadata["category"]),
        color=metadata.get("color"),
        brand=metadata.get("brand"),
        image_url=metadata.get("image_url"),
        created_at=str(metadata.get("created_at") or now),
        updated_at=str(metadata.get("updated_at") or now),
    )


__all__ = ["ClosetItem", "from_raw_metadata", "utc_now"]
