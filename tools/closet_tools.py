"""Instrumented closet operations shared by the app and the HTTP layer."""

from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, List, Optional

from logic.color_harmony import BUCKETS, ColorHarmonyEngine
from logic.validation import RecommendationToolInput, validation_failure
from models.closet_item import from_raw_metadata
from tools.closet_store import ClosetStore, SQLiteClosetStore
from tools.observability import instrument_tool


def _default_store() -> SQLiteClosetStore:
    return SQLiteClosetStore()


class ClosetTools:
    """Thin wrapper exposing ClosetStore and the harmony engine as tools."""

    def __init__(self, store: Optional[ClosetStore] = None, engine: Optional[ColorHarmonyEngine] = None) -> None:
        self.store = store or _default_store()
        self.engine = engine or ColorHarmonyEngine()

    @instrument_tool("add_closet_item")
    def add_item(self, user_id: str, item_data: Dict[str, Any]) -> Dict[str, Any]:
        item = from_raw_metadata({**item_data, "user_id": user_id})
        stored = self.store.create_item(item)
        return asdict(stored)

    @instrument_tool("get_closet_item")
    def get_item(self, user_id: str, item_id: str) -> Optional[Dict[str, Any]]:
        item = self.store.get_item(user_id, item_id)
        return asdict(item) if item else None

    @instrument_tool("list_closet_items")
    def list_items(self, user_id: str) -> List[Dict[str, Any]]:
        return [asdict(item) for item in self.store.list_items_for_user(user_id)]

    @instrument_tool("filter_closet_items")
    def filter_items(self, user_id: str, category: Optional[str] = None) -> List[Dict[str, Any]]:
        return [asdict(item) for item in self.store.filter_items(user_id, category)]

    @instrument_tool("update_closet_item")
    def update_item(self, user_id: str, item_id: str, updates: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        item = self.store.update_item(user_id, item_id, updates or {})
        return asdict(item) if item else None

    @instrument_tool("delete_closet_item")
    def delete_item(self, user_id: str, item_id: str) -> bool:
        return self.store.delete_item(user_id, item_id)

    @instrument_tool(
        "recommend_for_item",
        input_model=RecommendationToolInput,
        on_validation_error=lambda exc: validation_failure("Invalid recommendation request", exc),
    )
    def recommend_for_item(self, user_id: str, item_id: str) -> Dict[str, Any]:
        """Return color-coordinated suggestions from the rest of the user's closet."""

        base = self.store.get_item(user_id, item_id)
        if base is None:
            return {"status": "error", "message": f"Item '{item_id}' not found"}

        recommendations = self.engine.classify(base, self.store.list_items_for_user(user_id))
        response: Dict[str, Any] = {"status": "ok", "base_item": asdict(base)}
        for bucket in BUCKETS:
            response[bucket] = [asdict(item) for item in recommendations.bucket(bucket)]
        return response


__all__ = ["ClosetTools"]
