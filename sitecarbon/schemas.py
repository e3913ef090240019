from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import List, Optional, Union

class CamelModel(BaseModel):
    """Wire models use camelCase keys; Python code uses snake_case."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

class ImpactComparison(CamelModel):
    car_km_equivalent: str = Field(description="Per-load emission as km driven, e.g. '0.01 km driven'")
    trees_required: str = Field(description="Trees needed to offset the annual emission")

class CarbonReportResponse(CamelModel):
    url: str
    resource_size: str = Field(description="Transferred size, e.g. '500.00 KB'")
    page_load_time: str = Field(description="Fetch duration, e.g. '0.42 sec'")
    co2_emissions: str = Field(alias="co2Emissions", description="Grams of CO2 per load, 4 decimals")
    energy_consumption: str = Field(description="kWh per load, 6 decimals")
    estimated_annual_co2: str = Field(alias="estimatedAnnualCO2")
    impact_comparison: ImpactComparison
    efficiency_score: str
    recommendations: List[str] = Field(default_factory=list)
    recommendations_status: str = Field(default="static", description="static, generated or unavailable")

class ErrorResponse(BaseModel):
    error: str
    details: Optional[str] = None

class PerformanceSection(CamelModel):
    score: str
    first_contentful_paint: str
    largest_contentful_paint: str
    total_blocking_time: str
    cumulative_layout_shift: str

class AccessibilitySection(CamelModel):
    score: str
    issues: Union[List[str], str]

class SeoSection(CamelModel):
    score: str
    mobile_friendly: str
    meta_tags: str

class BestPracticesSection(CamelModel):
    score: str
    security_issues: str

class AuditReport(CamelModel):
    url: str
    fetch_time: str
    performance: PerformanceSection
    accessibility: AccessibilitySection
    seo: SeoSection
    best_practices: BestPracticesSection
