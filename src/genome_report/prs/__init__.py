"""Polygenic risk score calculation."""

from .calculator import (
    PRSAssetError,
    calculate_all_prs,
    classify_risk,
    effect_allele_dosage,
)
from .loader import PRSAssets, load_prs_assets
from .models import PRSConfig, PRSResult, PRSWeights

__all__ = [
    "PRSAssetError",
    "PRSAssets",
    "PRSConfig",
    "PRSResult",
    "PRSWeights",
    "calculate_all_prs",
    "classify_risk",
    "effect_allele_dosage",
    "load_prs_assets",
]
