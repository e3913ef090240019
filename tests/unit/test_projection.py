import pytest
from sitecarbon.errors import ConfigurationError
from sitecarbon.estimation.projection import ProjectionConstants, project

GRAMS = [0.0, 0.0001, 0.18330624, 0.49, 0.5, 1.0, 2.75, 123.456]

class TestProjection:
    """Unit tests for the impact projection formulas"""

    @pytest.mark.parametrize("grams", GRAMS)
    def test_annual_grams(self, grams):
        assert project(grams).annual_grams == grams * 1000 * 365

    @pytest.mark.parametrize("grams", GRAMS)
    def test_car_km_equivalent(self, grams):
        assert project(grams).car_km_equivalent == grams / 120

    @pytest.mark.parametrize("grams", GRAMS)
    def test_trees_required(self, grams):
        result = project(grams)
        assert result.trees_required_per_year == result.annual_grams / 21000

    def test_one_gram_example(self):
        result = project(1.0)
        assert result.annual_grams == 365000
        assert result.car_km_equivalent == pytest.approx(0.008333, rel=1e-3)
        assert result.trees_required_per_year == pytest.approx(17.381, rel=1e-4)

    def test_custom_constants(self):
        constants = ProjectionConstants(assumed_daily_visits=10, avg_car_grams_per_km=100, grams_absorbed_per_tree_per_year=3650)
        result = project(2.0, constants)
        assert result.annual_grams == 7300
        assert result.car_km_equivalent == 0.02
        assert result.trees_required_per_year == 2

    def test_idempotent(self):
        assert project(0.73) == project(0.73)

class TestProjectionConstants:
    @pytest.mark.parametrize("field", ["assumed_daily_visits", "avg_car_grams_per_km", "grams_absorbed_per_tree_per_year"])
    def test_zero_rejected(self, field):
        with pytest.raises(ConfigurationError):
            ProjectionConstants(**{field: 0})

    def test_negative_rejected(self):
        with pytest.raises(ConfigurationError):
            ProjectionConstants(avg_car_grams_per_km=-120)

    def test_defaults(self):
        constants = ProjectionConstants()
        assert constants.assumed_daily_visits == 1000
        assert constants.avg_car_grams_per_km == 120
        assert constants.grams_absorbed_per_tree_per_year == 21000
