"""Closet item model, storage and tool tests."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Dict

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from models import taxonomy
from models.closet_item import ClosetItem, from_raw_metadata
from tools.closet_store import SQLiteClosetStore
from tools.closet_tools import ClosetTools


@pytest.fixture()
def sample_metadata() -> Dict[str, object]:
    return {
        "id": "item-1",
        "user_id": "user-123",
        "name": "Orange Skirt",
        "category": "Bottoms",
        "color": "#FDBA74",
        "brand": "Example",
        "image_url": "user-123/1700000000.jpg",
    }


@pytest.fixture()
def store(tmp_path: Path) -> SQLiteClosetStore:
    return SQLiteClosetStore(tmp_path / "closet.db")


def _stored(store: SQLiteClosetStore, item_id: str, category: str, color: str | None, created_at: str) -> ClosetItem:
    item = ClosetItem(
        id=item_id,
        user_id="user-123",
        name=f"Item {item_id}",
        category=category,
        color=color,
        created_at=created_at,
        updated_at=created_at,
    )
    return store.create_item(item)


def test_taxonomy_accepts_client_labels() -> None:
    assert taxonomy.validate_category("Tops") == "top"
    assert taxonomy.validate_category(" shoes ") == "shoe"
    with pytest.raises(ValueError):
        taxonomy.validate_category("hat")


def test_category_filter_normalisation() -> None:
    assert taxonomy.normalize_category_filter(None) is None
    assert taxonomy.normalize_category_filter("All") is None
    assert taxonomy.normalize_category_filter("bottom") == "bottom"


def test_from_raw_metadata_normalises_fields(sample_metadata: Dict[str, object]) -> None:
    item = from_raw_metadata({**sample_metadata, "brand": "  "})

    assert item.category == "bottom"
    assert item.brand is None
    assert item.primary_color == "#FDBA74"


def test_from_raw_metadata_generates_id_and_timestamps(sample_metadata: Dict[str, object]) -> None:
    metadata = {key: value for key, value in sample_metadata.items() if key != "id"}

    item = from_raw_metadata(metadata)

    assert item.id
    assert item.created_at == item.updated_at


def test_from_raw_metadata_requires_name_and_category(sample_metadata: Dict[str, object]) -> None:
    with pytest.raises(ValueError):
        from_raw_metadata({**sample_metadata, "name": ""})
    with pytest.raises(ValueError):
        from_raw_metadata({**sample_metadata, "category": "accessory"})


def test_blank_color_is_treated_as_missing() -> None:
    item = ClosetItem(id="x", user_id="u", name="Tee", category="top", color="")

    assert item.primary_color is None


def test_store_crud_roundtrip(store: SQLiteClosetStore, sample_metadata: Dict[str, object]) -> None:
    item = from_raw_metadata(sample_metadata)
    store.create_item(item)

    fetched = store.get_item("user-123", "item-1")
    assert fetched == item

    updated = store.update_item("user-123", "item-1", {"color": "#60A5FA", "id": "hijack", "category": "Tops"})
    assert updated is not None
    assert updated.id == "item-1"
    assert updated.category == "top"
    assert updated.created_at == item.created_at
    assert store.get_item("user-123", "item-1").color == "#60A5FA"

    assert store.delete_item("user-123", "item-1") is True
    assert store.get_item("user-123", "item-1") is None
    assert store.delete_item("user-123", "item-1") is False


def test_update_missing_item_returns_none(store: SQLiteClosetStore) -> None:
    assert store.update_item("user-123", "missing", {"name": "x"}) is None


def test_update_rejects_invalid_category(store: SQLiteClosetStore, sample_metadata: Dict[str, object]) -> None:
    store.create_item(from_raw_metadata(sample_metadata))

    with pytest.raises(ValueError):
        store.update_item("user-123", "item-1", {"category": "hat"})
    assert store.get_item("user-123", "item-1").category == "bottom"


def test_list_is_newest_first_and_scoped_to_user(store: SQLiteClosetStore) -> None:
    _stored(store, "old", "top", "#FFFFFF", "2024-01-01T00:00:00+00:00")
    _stored(store, "new", "shoe", "#6B7280", "2024-03-01T00:00:00+00:00")
    _stored(store, "mid", "top", "#86EFAC", "2024-02-01T00:00:00+00:00")
    store.create_item(ClosetItem(id="other", user_id="user-999", name="Hat", category="top"))

    assert [item.id for item in store.list_items_for_user("user-123")] == ["new", "mid", "old"]


def test_filter_items_by_category(store: SQLiteClosetStore) -> None:
    _stored(store, "tee", "top", "#FFFFFF", "2024-01-01T00:00:00+00:00")
    _stored(store, "jeans", "bottom", "#93C5FD", "2024-01-02T00:00:00+00:00")

    assert [item.id for item in store.filter_items("user-123", "Tops")] == ["tee"]
    assert [item.id for item in store.filter_items("user-123", "all")] == ["jeans", "tee"]
    assert [item.id for item in store.filter_items("user-123")] == ["jeans", "tee"]
    assert store.filter_items("user-123", "hats") == []


def test_tools_recommend_for_item(store: SQLiteClosetStore) -> None:
    tools = ClosetTools(store)
    _stored(store, "red-skirt", "bottom", "#FF0000", "2024-01-01T00:00:00+00:00")
    _stored(store, "cyan-top", "top", "#00FFFF", "2024-01-02T00:00:00+00:00")
    _stored(store, "orange-top", "top", "#FF8800", "2024-01-03T00:00:00+00:00")
    _stored(store, "crimson-shoe", "shoe", "#FF0022", "2024-01-04T00:00:00+00:00")
    _stored(store, "plain-shoe", "shoe", None, "2024-01-05T00:00:00+00:00")

    result = tools.recommend_for_item(user_id="user-123", item_id="red-skirt")

    assert result["status"] == "ok"
    assert result["base_item"]["id"] == "red-skirt"
    assert [item["id"] for item in result["complementary"]] == ["cyan-top"]
    assert [item["id"] for item in result["analogous"]] == ["orange-top"]
    assert [item["id"] for item in result["monochromatic"]] == ["crimson-shoe"]


def test_tools_recommend_without_color_is_empty(store: SQLiteClosetStore) -> None:
    tools = ClosetTools(store)
    _stored(store, "plain", "top", None, "2024-01-01T00:00:00+00:00")
    _stored(store, "red", "top", "#FF0000", "2024-01-02T00:00:00+00:00")

    result = tools.recommend_for_item(user_id="user-123", item_id="plain")

    assert result["status"] == "ok"
    assert result["complementary"] == result["analogous"] == result["monochromatic"] == []


def test_tools_recommend_unknown_item(store: SQLiteClosetStore) -> None:
    result = ClosetTools(store).recommend_for_item(user_id="user-123", item_id="missing")

    assert result == {"status": "error", "message": "Item 'missing' not found"}


def test_tools_recommend_validates_input(store: SQLiteClosetStore) -> None:
    result = ClosetTools(store).recommend_for_item(user_id="", item_id="x")

    assert result["status"] == "error"
    assert result["details"][0]["loc"] == ["user_id"]


def test_tools_add_list_and_filter(store: SQLiteClosetStore, sample_metadata: Dict[str, object]) -> None:
    tools = ClosetTools(store)
    payload = {key: value for key, value in sample_metadata.items() if key != "user_id"}

    created = tools.add_item(user_id="user-123", item_data=payload)

    assert created["category"] == "bottom"
    assert tools.get_item(user_id="user-123", item_id="item-1")["name"] == "Orange Skirt"
    assert [item["id"] for item in tools.list_items(user_id="user-123")] == ["item-1"]
    assert tools.filter_items(user_id="user-123", category="shoe") == []
    assert tools.update_item(user_id="user-123", item_id="item-1", updates={"brand": "Other"})["brand"] == "Other"
    assert tools.delete_item(user_id="user-123", item_id="item-1") is True


def test_tools_add_item_rejects_invalid_payload(store: SQLiteClosetStore) -> None:
    with pytest.raises(ValueError):
        ClosetTools(store).add_item(user_id="user-123", item_data={"name": "Hat", "category": "accessory"})


@pytest.mark.parametrize("value", [None, 3, ["top"]])
def test_validate_category_rejects_non_strings(value: object) -> None:
    with pytest.raises(ValueError):
        taxonomy.validate_category(value)  # type: ignore[arg-type]


@pytest.mark.parametrize("updates", [{"name": None}, {"category": None}, {"name": "  "}])
def test_update_rejects_missing_required_fields(
    store: SQLiteClosetStore, sample_metadata: Dict[str, object], updates: Dict[str, object]
) -> None:
    store.create_item(from_raw_metadata(sample_metadata))

    with pytest.raises(ValueError):
        store.update_item("user-123", "item-1", updates)
    stored = store.get_item("user-123", "item-1")
    assert (stored.name, stored.category) == ("Orange Skirt", "bottom")
