import math
from dataclasses import dataclass

from sitecarbon.errors import ConfigurationError

DAYS_PER_YEAR = 365


@dataclass(frozen=True)
class ProjectionConstants:
    assumed_daily_visits: float = 1000
    avg_car_grams_per_km: float = 120
    grams_absorbed_per_tree_per_year: float = 21000

    def __post_init__(self):
        for name in ("assumed_daily_visits", "avg_car_grams_per_km", "grams_absorbed_per_tree_per_year"):
            value = getattr(self, name)
            if not math.isfinite(value) or value <= 0:
                raise ConfigurationError(f"{name} must be a positive number, got {value!r}")


DEFAULT_CONSTANTS = ProjectionConstants()


@dataclass(frozen=True)
class ImpactProjection:
    annual_grams: float
    car_km_equivalent: float
    trees_required_per_year: float


def project(grams_per_load: float, constants: ProjectionConstants = DEFAULT_CONSTANTS) -> ImpactProjection:
    """
    Restate a single-load emission as yearly and everyday equivalents.

    annual = grams * daily visits * 365
    car km = grams / car grams per km (one load, not annual)
    trees  = annual / grams absorbed per tree per year
    """
    annual = grams_per_load * constants.assumed_daily_visits * DAYS_PER_YEAR
    return ImpactProjection(
        annual_grams=annual,
        car_km_equivalent=grams_per_load / constants.avg_car_grams_per_km,
        trees_required_per_year=annual / constants.grams_absorbed_per_tree_per_year,
    )
