"""Closet storage abstractions and SQLite implementation."""
from __future__ import annotations

import sqlite3
from dataclasses import asdict
from pathlib import Path
from typing import Dict, List, Optional

from models.closet_item import ClosetItem, utc_now
from models.taxonomy import normalize_category_filter

_IMMUTABLE_FIELDS = {"id", "user_id", "created_at", "updated_at"}


class ClosetStore:
    """Persistence interface for closet items."""

    def create_item(self, item: ClosetItem) -> ClosetItem:
        raise NotImplementedError

    def get_item(self, user_id: str, item_id: str) -> Optional[ClosetItem]:
        raise NotImplementedError

    def list_items_for_user(self, user_id: str) -> List[ClosetItem]:
        raise NotImplementedError

    def update_item(self, user_id: str, item_id: str, updated_fields: Dict[str, object]) -> Optional[ClosetItem]:
        raise NotImplementedError

    def delete_item(self, user_id: str, item_id: str) -> bool:
        raise NotImplementedError

    def filter_items(self, user_id: str, category: Optional[str] = None) -> List[ClosetItem]:
        """Return the user's items in one category, or all of them for ``all``/``None``."""

        try:
            category_key = normalize_category_filter(category)
        except ValueError:
            return []
        items = self.list_items_for_user(user_id)
        if category_key is None:
            return items
        return [item for item in items if item.category == category_key]


class SQLiteClosetStore(ClosetStore):
    """Local SQLite-backed store for closet items."""

    def __init__(self, database_path: str | Path = "data/closet.db") -> None:
        self.database_path = Path(database_path)
        if self.database_path.parent and not self.database_path.parent.exists():
            self.database_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_tables()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.database_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_tables(self) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS closet_items (
                    user_id TEXT NOT NULL,
                    id TEXT NOT NULL,
                    name TEXT NOT NULL,
                    category TEXT NOT NULL,
                    color TEXT,
                    brand TEXT,
                    image_url TEXT,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL,
                    PRIMARY KEY (user_id, id)
                );
                """
            )

    def create_item(self, item: ClosetItem) -> ClosetItem:
        with self._connect() as conn:
            conn.execute(
                """
                INSERT OR REPLACE INTO closet_items (
                    user_id, id, name, category, color, brand, image_url, created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    item.user_id,
                    item.id,
                    item.name,
                    item.category,
                    item.color,
                    item.brand,
                    item.image_url,
                    item.created_at,
                    item.updated_at,
                ),
            )
        return item

    @staticmethod
    def _row_to_item(row: sqlite3.Row) -> ClosetItem:
        return ClosetItem(
            id=row["id"],
            user_id=row["user_id"],
            name=row["name"],
            category=row["category"],
            color=row["color"],
            brand=row["brand"],
            image_url=row["image_url"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )

    def get_item(self, user_id: str, item_id: str) -> Optional[ClosetItem]:
        with self._connect() as conn:
            cursor = conn.execute(
                "SELECT * FROM closet_items WHERE user_id = ? AND id = ?",
                (user_id, item_id),
            )
            row = cursor.fetchone()
            return self._row_to_item(row) if row else None

    def list_items_for_user(self, user_id: str) -> List[ClosetItem]:
        with self._connect() as conn:
            cursor = conn.execute(
                "SELECT * FROM closet_items WHERE user_id = ? ORDER BY created_at DESC, rowid DESC",
                (user_id,),
            )
            return [self._row_to_item(row) for row in cursor.fetchall()]

    def update_item(self, user_id: str, item_id: str, updated_fields: Dict[str, object]) -> Optional[ClosetItem]:
        current = self.get_item(user_id, item_id)
        if not current:
            return None

        values = asdict(current)
        for key, value in updated_fields.items():
            if key in _IMMUTABLE_FIELDS or key not in values:
                continue
            values[key] = value
        values["updated_at"] = utc_now()

        validated = ClosetItem(**values)
        with self._connect() as conn:
            conn.execute(
                """
                UPDATE closet_items
                SET name = ?, category = ?, color = ?, brand = ?, image_url = ?, updated_at = ?
                WHERE user_id = ? AND id = ?
                """,
                (
                    validated.name,
                    validated.category,
                    validated.color,
                    validated.brand,
                    validated.image_url,
                    validated.updated_at,
                    user_id,
                    item_id,
                ),
            )
        return validated

    def delete_item(self, user_id: str, item_id: str) -> bool:
        with self._connect() as conn:
            cursor = conn.execute(
                "DELETE FROM closet_items WHERE user_id = ? AND id = ?",
                (user_id, item_id),
            )
            return cursor.rowcount > 0


__all__ = ["ClosetStore", "SQLiteClosetStore"]
