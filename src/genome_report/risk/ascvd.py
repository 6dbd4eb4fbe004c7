"""10-year ASCVD risk from the 2013 ACC/AHA Pooled Cohort Equations.

Reference: Goff DC Jr, et al. 2013 ACC/AHA guideline on the assessment of
cardiovascular risk. Circulation. 2014;129(25 Suppl 2):S49-73.
DOI: 10.1161/01.cir.0000437741.48606.98

Risk = 1 - S0 ** exp(sum(coef * term) - mean), with race- and sex-specific
coefficients. The equations are validated for ages 40-79 only.
"""

import math
from dataclasses import dataclass

MIN_AGE = 40
MAX_AGE = 79


@dataclass
class ASCVDRiskFactors:
    """Clinical inputs for the Pooled Cohort Equations."""

    age: float
    is_male: bool
    is_black: bool
    is_smoker: bool
    is_diabetic: bool
    is_hypertensive: bool
    systolic_blood_pressure: float
    total_cholesterol: float
    hdl: float


@dataclass(frozen=True)
class PooledCohortCoefficients:
    """Coefficients for one race/sex group; unused terms are zero."""

    baseline_survival: float
    mean_predictor: float
    ln_age: float = 0.0
    ln_age_squared: float = 0.0
    ln_total_cholesterol: float = 0.0
    ln_age_x_ln_total_cholesterol: float = 0.0
    ln_hdl: float = 0.0
    ln_age_x_ln_hdl: float = 0.0
    ln_treated_sbp: float = 0.0
    ln_age_x_ln_treated_sbp: float = 0.0
    ln_untreated_sbp: float = 0.0
    ln_age_x_ln_untreated_sbp: float = 0.0
    smoker: float = 0.0
    ln_age_x_smoker: float = 0.0
    diabetes: float = 0.0


COEFFICIENTS: dict[tuple[bool, bool], PooledCohortCoefficients] = {
    # (is_black, is_male)
    (True, False): PooledCohortCoefficients(
        baseline_survival=0.95334,
        mean_predictor=86.6081,
        ln_age=17.1141,
        ln_total_cholesterol=0.9396,
        ln_hdl=-18.9196,
        ln_age_x_ln_hdl=4.4748,
        ln_treated_sbp=29.2907,
        ln_age_x_ln_treated_sbp=-6.4321,
        ln_untreated_sbp=27.8197,
        ln_age_x_ln_untreated_sbp=-6.0873,
        smoker=0.6908,
        diabetes=0.8738,
    ),
    (False, False): PooledCohortCoefficients(
        baseline_survival=0.96652,
        mean_predictor=-29.1817,
        ln_age=-29.799,
        ln_age_squared=4.884,
        ln_total_cholesterol=13.540,
        ln_age_x_ln_total_cholesterol=-3.114,
        ln_hdl=-13.578,
        ln_age_x_ln_hdl=3.149,
        ln_treated_sbp=2.019,
        ln_untreated_sbp=1.957,
        smoker=7.574,
        ln_age_x_smoker=-1.665,
        diabetes=0.661,
    ),
    (True, True): PooledCohortCoefficients(
        baseline_survival=0.89536,
        mean_predictor=19.5425,
        ln_age=2.469,
        ln_total_cholesterol=0.302,
        ln_hdl=-0.307,
        ln_treated_sbp=1.916,
        ln_untreated_sbp=1.809,
        smoker=0.549,
        diabetes=0.645,
    ),
    (False, True): PooledCohortCoefficients(
        baseline_survival=0.91436,
        mean_predictor=61.1816,
        ln_age=12.344,
        ln_total_cholesterol=11.853,
        ln_age_x_ln_total_cholesterol=-2.664,
        ln_hdl=-7.990,
        ln_age_x_ln_hdl=1.769,
        ln_treated_sbp=1.797,
        ln_untreated_sbp=1.764,
        smoker=7.837,
        ln_age_x_smoker=-1.795,
        diabetes=0.658,
    ),
}


def _round_half_up(value: float, digits: int = 1) -> float:
    scale = 10**digits
    return math.floor(value * scale + 0.5) / scale


def predictor_sum(factors: ASCVDRiskFactors, coef: PooledCohortCoefficients) -> float:
    """Weighted sum of log-transformed risk factors and their interactions."""
    ln_age = math.log(factors.age)
    ln_total_chol = math.log(factors.total_cholesterol)
    ln_hdl = math.log(factors.hdl)
    ln_sbp = math.log(factors.systolic_blood_pressure)

    ln_treated_sbp = ln_sbp if factors.is_hypertensive else 0.0
    ln_untreated_sbp = 0.0 if factors.is_hypertensive else ln_sbp
    smoker = 1.0 if factors.is_smoker else 0.0
    diabetic = 1.0 if factors.is_diabetic else 0.0

    return (
        coef.ln_age * ln_age
        + coef.ln_age_squared * ln_age**2
        + coef.ln_total_cholesterol * ln_total_chol
        + coef.ln_age_x_ln_total_cholesterol * ln_age * ln_total_chol
        + coef.ln_hdl * ln_hdl
        + coef.ln_age_x_ln_hdl * ln_age * ln_hdl
        + coef.ln_treated_sbp * ln_treated_sbp
        + coef.ln_age_x_ln_treated_sbp * ln_age * ln_treated_sbp
        + coef.ln_untreated_sbp * ln_untreated_sbp
        + coef.ln_age_x_ln_untreated_sbp * ln_age * ln_untreated_sbp
        + coef.smoker * smoker
        + coef.ln_age_x_smoker * ln_age * smoker
        + coef.diabetes * diabetic
    )


def calculate_ascvd_risk(factors: ASCVDRiskFactors) -> float | None:
    """Calculate 10-year ASCVD risk as a percentage rounded to 0.1.

    Returns:
        Risk percentage (e.g. 5.4 for 5.4%), or None when age is outside
        40-79 or a blood pressure or cholesterol value is not positive, so
        the equations do not apply. None means "undefined", not 0.
    """
    if factors.age < MIN_AGE or factors.age > MAX_AGE:
        return None
    if min(factors.systolic_blood_pressure, factors.total_cholesterol, factors.hdl) <= 0:
        return None

    coef = COEFFICIENTS[(bool(factors.is_black), bool(factors.is_male))]
    predictor = predictor_sum(factors, coef)
    risk = 1 - coef.baseline_survival ** math.exp(predictor - coef.mean_predictor)

    return _round_half_up(risk * 100)
