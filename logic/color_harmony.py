"""Color-harmony recommendations for a chosen closet item.

Candidates are sorted into three buckets relative to the base item's hue. The
buckets are evaluated as an ordered rule list and the first matching rule wins,
so a candidate lands in at most one bucket. Monochromatic is checked first
because its narrow window would otherwise be shadowed by the wider
complementary and analogous windows.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from models.closet_item import ClosetItem
from models.color_theory import hex_to_hsl, is_hue_similar

logger = logging.getLogger(__name__)

MONOCHROMATIC = "monochromatic"
COMPLEMENTARY = "complementary"
ANALOGOUS = "analogous"
BUCKETS: Tuple[str, ...] = (COMPLEMENTARY, ANALOGOUS, MONOCHROMATIC)

MONOCHROMATIC_THRESHOLD = 15.0
COMPLEMENTARY_THRESHOLD = 20.0
ANALOGOUS_THRESHOLD = 20.0
ANALOGOUS_OFFSET = 30.0


@dataclass(frozen=True)
class HarmonyThresholds:
    """Hue windows, in degrees, used by each bucket."""

    monochromatic: float = MONOCHROMATIC_THRESHOLD
    complementary: float = COMPLEMENTARY_THRESHOLD
    analogous: float = ANALOGOUS_THRESHOLD


@dataclass(frozen=True)
class ReferenceHues:
    base: float
    complementary: float
    analogous: Tuple[float, float]

    @classmethod
    def for_hue(cls, hue: float) -> "ReferenceHues":
        return cls(
            base=hue,
            complementary=(hue + 180) % 360,
            analogous=((hue + ANALOGOUS_OFFSET) % 360, (hue - ANALOGOUS_OFFSET + 360) % 360),
        )


HarmonyPredicate = Callable[[float, ReferenceHues, HarmonyThresholds], bool]


def _is_monochromatic(hue: float, refs: ReferenceHues, thresholds: HarmonyThresholds) -> bool:
    return is_hue_similar(refs.base, hue, thresholds.monochromatic)


def _is_complementary(hue: float, refs: ReferenceHues, thresholds: HarmonyThresholds) -> bool:
    return is_hue_similar(hue, refs.complementary, thresholds.complementary)


def _is_analogous(hue: float, refs: ReferenceHues, thresholds: HarmonyThresholds) -> bool:
    return any(is_hue_similar(hue, ref, thresholds.analogous) for ref in refs.analogous)


HARMONY_RULES: Tuple[Tuple[str, HarmonyPredicate], ...] = (
    (MONOCHROMATIC, _is_monochromatic),
    (COMPLEMENTARY, _is_complementary),
    (ANALOGOUS, _is_analogous),
)


@dataclass
class RecommendationSet:
    """Pool items grouped by how their color pairs with the base item."""

    complementary: List[ClosetItem] = field(default_factory=list)
    analogous: List[ClosetItem] = field(default_factory=list)
    monochromatic: List[ClosetItem] = field(default_factory=list)

    def bucket(self, name: str) -> List[ClosetItem]:
        if name not in BUCKETS:
            raise KeyError(name)
        return getattr(self, name)

    def is_empty(self) -> bool:
        return not (self.complementary or self.analogous or self.monochromatic)

    def item_ids(self) -> Dict[str, List[str]]:
        return {name: [item.id for item in self.bucket(name)] for name in BUCKETS}


class ColorHarmonyEngine:
    """Stateless classifier turning a closet into pairing suggestions."""

    def __init__(
        self,
        thresholds: Optional[HarmonyThresholds] = None,
        rules: Sequence[Tuple[str, HarmonyPredicate]] = HARMONY_RULES,
    ) -> None:
        self.thresholds = thresholds or HarmonyThresholds()
        self.rules = tuple(rules)
        unknown = [name for name, _ in self.rules if name not in BUCKETS]
        if unknown:
            raise ValueError(f"Unknown harmony buckets: {unknown}")

    def match_bucket(self, hue: float, refs: ReferenceHues) -> Optional[str]:
        """Return the first bucket whose rule accepts ``hue``, if any."""

        for name, predicate in self.rules:
            if predicate(hue, refs, self.thresholds):
                return name
        return None

    def classify(self, base: ClosetItem, pool: Iterable[ClosetItem]) -> RecommendationSet:
        """Split ``pool`` into complementary, analogous and monochromatic matches.

        A base item without a color yields an empty set. Candidates sharing the
        base item's id or lacking a color are skipped, as are candidates no
        rule accepts. Pool order is kept inside each bucket.
        """

        result = RecommendationSet()
        if not base.primary_color:
            logger.debug("base item %s has no color, nothing to recommend", base.id)
            return result

        refs = ReferenceHues.for_hue(hex_to_hsl(base.primary_color).h)
        dropped = 0
        for candidate in pool:
            if candidate.id == base.id or not candidate.primary_color:
                continue
            bucket = self.match_bucket(hex_to_hsl(candidate.primary_color).h, refs)
            if bucket is None:
                dropped += 1
                continue
            result.bucket(bucket).append(candidate)

        logger.info(
            "Color recommendations for %s (hue %.1f) -> %s, %d unmatched",
            base.id,
            refs.base,
            {name: len(result.bucket(name)) for name in BUCKETS},
            dropped,
        )
        return result


def classify(base: ClosetItem, pool: Iterable[ClosetItem]) -> RecommendationSet:
    """Classify ``pool`` against ``base`` with the default thresholds."""

    return ColorHarmonyEngine().classify(base, pool)


__all__ = [
    "ANALOGOUS",
    "BUCKETS",
    "COMPLEMENTARY",
    "ColorHarmonyEngine",
    "HARMONY_RULES",
    "HarmonyThresholds",
    "MONOCHROMATIC",
    "RecommendationSet",
    "ReferenceHues",
    "classify",
]
