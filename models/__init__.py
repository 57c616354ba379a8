"""Model package exports."""

from models.closet_item import ClosetItem, from_raw_metadata
from models.color_theory import HSL, hex_to_hsl, is_hue_similar
from models.taxonomy import *  # noqa: F401,F403

__all__ = ["ClosetItem", "HSL", "from_raw_metadata", "hex_to_hsl", "is_hue_similar"]
