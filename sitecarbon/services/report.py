import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from sitecarbon.core.config import DEFAULT_ESTIMATION, EstimationConfig
from sitecarbon.errors import CollaboratorError
from sitecarbon.estimation.classifier import EfficiencyTier, classify
from sitecarbon.estimation.emissions import EmissionEstimate, energy_from_emissions, estimate_emissions
from sitecarbon.estimation.projection import ImpactProjection, project
from sitecarbon.fetch.base import BaseFetcher, FetchResult
from sitecarbon.fetch.fetcher import HttpxFetcher
from sitecarbon.llm.client import Recommender, StaticRecommender
from sitecarbon.schemas import CarbonReportResponse, ImpactComparison

logger = logging.getLogger(__name__)

class RecommendationStatus(str, Enum):
    STATIC = "static"
    GENERATED = "generated"
    UNAVAILABLE = "unavailable"

@dataclass(frozen=True)
class Report:
    fetch: FetchResult
    emission: EmissionEstimate
    projection: ImpactProjection
    tier: EfficiencyTier
    energy_kwh: float
    recommendations: Tuple[str, ...] = ()
    recommendation_status: RecommendationStatus = RecommendationStatus.STATIC

    @property
    def degraded(self) -> bool:
        """True when the core estimate succeeded but recommendations did not."""
        return self.recommendation_status is RecommendationStatus.UNAVAILABLE

def assemble_report(
    fetch: FetchResult,
    emission: EmissionEstimate,
    projection: ImpactProjection,
    tier: EfficiencyTier,
    energy_kwh: float,
    recommendations: Optional[List[str]],
    status: RecommendationStatus,
) -> Report:
    if recommendations is None:
        recommendations, status = [], RecommendationStatus.UNAVAILABLE
    return Report(
        fetch=fetch,
        emission=emission,
        projection=projection,
        tier=tier,
        energy_kwh=energy_kwh,
        recommendations=tuple(recommendations),
        recommendation_status=status,
    )

async def build_report(
    url: str,
    fetcher: Optional[BaseFetcher] = None,
    recommender: Optional[Recommender] = None,
    is_green_hosted: bool = False,
    config: EstimationConfig = DEFAULT_ESTIMATION,
) -> Report:
    """
    Main pipeline for a carbon report.

    1. Fetch the resource (FetchError propagates to the caller)
    2. Estimate grams of CO2 per load from the byte count
    3. Project annual/car/tree equivalents and classify the tier
    4. Ask the recommender; its failure degrades the report instead of failing it
    """
    fetcher = fetcher or HttpxFetcher()
    recommender = recommender or StaticRecommender()

    fetched = await fetcher.fetch(url)

    emission = estimate_emissions(fetched.byte_length, is_green_hosted, config.model)
    grams = emission.grams_co2_per_load
    projection = project(grams, config.projection)
    tier = classify(grams, config.thresholds)
    energy = energy_from_emissions(grams, config.model)

    status = RecommendationStatus.GENERATED if recommender.generated else RecommendationStatus.STATIC
    try:
        recommendations = await recommender.recommend(url, fetched.kilobytes, grams)
    except CollaboratorError as e:
        logger.warning("Recommendations unavailable for %s (%s): %s", url, e.collaborator, e)
        recommendations = None

    return assemble_report(fetched, emission, projection, tier, energy, recommendations, status)

def render_report(report: Report) -> CarbonReportResponse:
    """Format a report into the JSON response shape."""
    grams = report.emission.grams_co2_per_load
    return CarbonReportResponse(
        url=report.fetch.url,
        resource_size=f"{report.fetch.kilobytes:.2f} KB",
        page_load_time=f"{report.fetch.elapsed_millis / 1000:.2f} sec",
        co2_emissions=f"{grams:.4f} g",
        energy_consumption=f"{report.energy_kwh:.6f} kWh",
        estimated_annual_co2=f"{report.projection.annual_grams:.2f} g",
        impact_comparison=ImpactComparison(
            car_km_equivalent=f"{report.projection.car_km_equivalent:.2f} km driven",
            trees_required=f"{report.projection.trees_required_per_year:.4f} trees/year to offset",
        ),
        efficiency_score=report.tier.label,
        recommendations=list(report.recommendations),
        recommendations_status=report.recommendation_status.value,
    )
