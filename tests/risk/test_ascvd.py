"""Tests for the Pooled Cohort Equations."""

import pytest

from genome_report.risk import ASCVDRiskFactors, calculate_ascvd_risk
from genome_report.risk.ascvd import COEFFICIENTS, _round_half_up, predictor_sum


def _factors(**overrides):
    values = {
        "age": 55,
        "is_male": True,
        "is_black": False,
        "is_smoker": False,
        "is_diabetic": False,
        "is_hypertensive": False,
        "systolic_blood_pressure": 120,
        "total_cholesterol": 213,
        "hdl": 50,
    }
    values.update(overrides)
    return ASCVDRiskFactors(**values)


class TestCalculateAscvdRisk:
    """Reference cases for each race/sex group."""

    def test_white_male_reference_case(self):
        assert calculate_ascvd_risk(_factors()) == 5.4

    def test_white_female(self):
        assert calculate_ascvd_risk(_factors(is_male=False)) == 2.1

    def test_black_female(self):
        assert calculate_ascvd_risk(_factors(is_male=False, is_black=True)) == 3.0

    def test_black_male(self):
        assert calculate_ascvd_risk(_factors(is_black=True)) == 6.1

    def test_smoker_diabetic_raises_risk(self):
        assert calculate_ascvd_risk(_factors(is_smoker=True, is_diabetic=True)) == 18.4

    def test_treatment_raises_risk(self):
        treated = calculate_ascvd_risk(_factors(is_hypertensive=True, systolic_blood_pressure=140))
        untreated = calculate_ascvd_risk(_factors(systolic_blood_pressure=140))
        assert treated > untreated

    def test_white_male_predictor_sum(self):
        assert predictor_sum(_factors(), COEFFICIENTS[(False, True)]) == pytest.approx(
            60.6995, abs=1e-3
        )


class TestAgeRange:
    """The equations are only defined for ages 40-79."""

    @pytest.mark.parametrize("age", [40, 79, 60.5])
    def test_in_range(self, age):
        assert calculate_ascvd_risk(_factors(age=age)) is not None

    @pytest.mark.parametrize("age", [39, 39.9, 80, 100])
    def test_out_of_range_is_undefined(self, age):
        assert calculate_ascvd_risk(_factors(age=age)) is None


class TestMeasurementRange:
    @pytest.mark.parametrize("field", ["systolic_blood_pressure", "total_cholesterol", "hdl"])
    @pytest.mark.parametrize("value", [0, -10])
    def test_non_positive_measurement_is_undefined(self, field, value):
        assert calculate_ascvd_risk(_factors(**{field: value})) is None


class TestRounding:
    def test_half_rounds_up(self):
        assert _round_half_up(2.25) == 2.3
        assert _round_half_up(2.35) == 2.4

    def test_below_half_rounds_down(self):
        assert _round_half_up(5.3786) == 5.4
        assert _round_half_up(5.34) == 5.3
