"""Clinical risk equations."""

from .ascvd import (
    MAX_AGE,
    MIN_AGE,
    ASCVDRiskFactors,
    PooledCohortCoefficients,
    calculate_ascvd_risk,
)

__all__ = [
    "ASCVDRiskFactors",
    "MAX_AGE",
    "MIN_AGE",
    "PooledCohortCoefficients",
    "calculate_ascvd_risk",
]
