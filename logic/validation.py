"""Pydantic schemas and helpers for validating tool and API payloads."""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field, ValidationError


class ItemCreateInput(BaseModel):
    """Fields a client supplies when adding a closet item."""

    name: str = Field(min_length=1)
    category: str = Field(min_length=1)
    color: Optional[str] = None
    brand: Optional[str] = None
    image_url: Optional[str] = Field(None, description="Storage path of the item photo")


class ItemUpdateInput(BaseModel):
    """Partial update for a closet item; unset fields are left untouched."""

    name: Optional[str] = Field(None, min_length=1)
    category: Optional[str] = None
    color: Optional[str] = None
    brand: Optional[str] = None
    image_url: Optional[str] = None


class RecommendationToolInput(BaseModel):
    """Input contract for color recommendations."""

    user_id: str = Field(min_length=1)
    item_id: str = Field(min_length=1)


class ValidationResult(BaseModel):
    """Wrapper returned to callers when validation fails."""

    status: Literal["error"] = "error"
    message: str
    details: List[Dict[str, Any]]


def validation_failure(message: str, exc: ValidationError) -> Dict[str, Any]:
    """Translate Pydantic errors into a consistent error payload."""

    details = [
        {"loc": list(error.get("loc", ())), "msg": error.get("msg", ""), "type": error.get("type", "")}
        for error in exc.errors()
    ]
    return ValidationResult(message=message, details=details).model_dump()


__all__ = [
    "ItemCreateInput",
    "ItemUpdateInput",
    "RecommendationToolInput",
    "ValidationResult",
    "validation_failure",
]
