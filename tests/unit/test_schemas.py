import pytest
from pydantic import ValidationError
from sitecarbon.schemas import CarbonReportResponse, ErrorResponse, ImpactComparison

def sample_response(**overrides):
    fields = dict(
        url="https://example.com",
        resource_size="500.00 KB",
        page_load_time="0.42 sec",
        co2_emissions="0.1833 g",
        energy_consumption="0.000055 kWh",
        estimated_annual_co2="66906.78 g",
        impact_comparison=ImpactComparison(
            car_km_equivalent="0.00 km driven",
            trees_required="3.1860 trees/year to offset",
        ),
        efficiency_score="Average (Could Improve)",
        recommendations=["Enable Gzip or Brotli compression to reduce file sizes."],
    )
    fields.update(overrides)
    return CarbonReportResponse(**fields)

class TestSchemaValidation:
    """Unit tests for Pydantic schema validation"""

    def test_wire_keys(self):
        data = sample_response().model_dump(by_alias=True)
        assert list(data) == [
            "url",
            "resourceSize",
            "pageLoadTime",
            "co2Emissions",
            "energyConsumption",
            "estimatedAnnualCO2",
            "impactComparison",
            "efficiencyScore",
            "recommendations",
            "recommendationsStatus",
        ]
        assert data["impactComparison"] == {
            "carKmEquivalent": "0.00 km driven",
            "treesRequired": "3.1860 trees/year to offset",
        }

    def test_populate_from_wire_keys(self):
        response = CarbonReportResponse.model_validate(sample_response().model_dump(by_alias=True))
        assert response.estimated_annual_co2 == "66906.78 g"
        assert response.recommendations_status == "static"

    def test_recommendations_default_empty(self):
        response = sample_response(recommendations=[])
        assert response.recommendations == []

    def test_missing_required_field(self):
        with pytest.raises(ValidationError):
            CarbonReportResponse(url="https://example.com")

    def test_error_response_omits_empty_details(self):
        assert ErrorResponse(error="Missing URL parameter.").model_dump(exclude_none=True) == {
            "error": "Missing URL parameter."
        }
