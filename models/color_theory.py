"""Color space helpers for deterministic outfit color matching."""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)

HEX_PATTERN = re.compile(r"^#?([0-9a-fA-F]{2})([0-9a-fA-F]{2})([0-9a-fA-F]{2})$")

DEFAULT_HUE_THRESHOLD = 30.0


@dataclass(frozen=True)
class HSL:
    """Hue in degrees [0, 360), saturation and lightness as percentages."""

    h: float
    s: float
    l: float  # noqa: E741


FALLBACK_HSL = HSL(h=0.0, s=0.0, l=0.0)


def hex_to_hsl(hex_color: Any) -> HSL:
    """Convert a ``#RRGGBB`` string to :class:`HSL`.

    The leading ``#`` is optional and digits are case-insensitive. Anything
    that does not match maps to ``HSL(0, 0, 0)`` instead of raising so one bad
    catalog record cannot break matching for the rest of the closet.
    """

    match = HEX_PATTERN.fullmatch(hex_color) if isinstance(hex_color, str) else None
    if match is None:
        logger.debug("unparseable color %r -> fallback hsl", hex_color)
        return FALLBACK_HSL

    r, g, b = (int(group, 16) / 255 for group in match.groups())
    high, low = max(r, g, b), min(r, g, b)
    lightness = (high + low) / 2

    if high == low:
        return HSL(h=0.0, s=0.0, l=lightness * 100)

    delta = high - low
    if lightness > 0.5:
        saturation = delta / (2 - high - low)
    else:
        saturation = delta / (high + low)

    if high == r:
        hue = (g - b) / delta + (6 if g < b else 0)
    elif high == g:
        hue = (b - r) / delta + 2
    else:
        hue = (r - g) / delta + 4
    hue = (hue / 6 * 360) % 360

    return HSL(h=hue, s=saturation * 100, l=lightness * 100)


def is_hue_similar(h1: float, h2: float, threshold: float = DEFAULT_HUE_THRESHOLD) -> bool:
    """Return True when two hues lie within ``threshold`` degrees on the wheel."""

    diff = abs(h1 - h2)
    return diff <= threshold or diff >= 360 - threshold


__all__ = [
    "DEFAULT_HUE_THRESHOLD",
    "FALLBACK_HSL",
    "HEX_PATTERN",
    "HSL",
    "hex_to_hsl",
    "is_hue_similar",
]
