import math
from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple

from sitecarbon.errors import ConfigurationError


class EfficiencyTier(Enum):
    """Ordered efficiency tiers, lowest emissions first."""
    TIER_1 = (1, "Average (Could Improve)")
    TIER_2 = (2, "Below average (Must Improve)")
    TIER_3 = (3, "Poor (High Emissions)")
    TIER_4 = (4, "Very Poor (Very High Emissions)")

    @property
    def rank(self) -> int:
        return self.value[0]

    @property
    def label(self) -> str:
        return self.value[1]


@dataclass(frozen=True)
class TierThresholds:
    """Upper bounds (grams per load) of TIER_1..TIER_3; TIER_4 is unbounded."""
    first: float = 0.5
    second: float = 1.0
    third: float = 2.0

    def __post_init__(self):
        bounds = self.as_tuple()
        if not all(math.isfinite(b) and b > 0 for b in bounds):
            raise ConfigurationError(f"Tier thresholds must be positive and finite, got {bounds}")
        if not bounds[0] < bounds[1] < bounds[2]:
            raise ConfigurationError(f"Tier thresholds must be strictly increasing, got {bounds}")

    def as_tuple(self) -> Tuple[float, float, float]:
        return (self.first, self.second, self.third)


DEFAULT_THRESHOLDS = TierThresholds()


@dataclass(frozen=True)
class TierBand:
    tier: EfficiencyTier
    low: float
    high: float  # exclusive; math.inf for the last band

    def contains(self, grams: float) -> bool:
        return self.low <= grams < self.high


def tier_bands(thresholds: TierThresholds = DEFAULT_THRESHOLDS) -> List[TierBand]:
    """Half-open [low, high) intervals partitioning [0, inf)."""
    edges = (0.0,) + thresholds.as_tuple() + (math.inf,)
    return [
        TierBand(tier=tier, low=edges[i], high=edges[i + 1])
        for i, tier in enumerate(EfficiencyTier)
    ]


def classify(grams_per_load: float, thresholds: TierThresholds = DEFAULT_THRESHOLDS) -> EfficiencyTier:
    if math.isnan(grams_per_load) or grams_per_load < 0:
        raise ValueError(f"grams_per_load must be non-negative, got {grams_per_load}")
    for band in tier_bands(thresholds):
        if band.contains(grams_per_load):
            return band.tier
    # inf itself falls outside [2.0, inf)
    return EfficiencyTier.TIER_4
