"""Polygenic risk score calculation from consumer genotype calls.

Every PRS model shares one indexing scheme: ``index_map`` maps an rsid to a
position in each model's flat weight list. Dosage of the effect allele is
read straight from the two-character call (2 for homozygous, 1 for any call
containing the allele).
"""

import logging

from ..models import InputVariant
from .models import PRSConfig, PRSResult, PRSWeights

logger = logging.getLogger(__name__)

LOW = "low"
NORMAL = "normal"
HIGH = "high"


class PRSAssetError(Exception):
    """Raised when PRS configuration, weights or index map are inconsistent."""

    pass


def effect_allele_dosage(genotype: str, effect_allele: str) -> int:
    """Count copies of the effect allele in a call (0, 1 or 2)."""
    if not effect_allele:
        return 0
    if genotype == effect_allele + effect_allele:
        return 2
    if effect_allele in genotype:
        return 1
    return 0


def classify_risk(score: float, config: PRSConfig) -> str | float:
    """Map a raw score onto a risk tier using the model's cutoffs.

    With ``lower_is_better`` false (the default) a higher score means lower
    risk. Models without both cutoffs return the raw score unchanged.
    """
    if not config.has_cutoffs:
        return score

    if config.lower_is_better:
        if score <= config.lower_cutoff:
            return LOW
        if score <= config.upper_cutoff:
            return NORMAL
        return HIGH

    if score <= config.lower_cutoff:
        return HIGH
    if score <= config.upper_cutoff:
        return NORMAL
    return LOW


def calculate_all_prs(
    input_map: dict[str, InputVariant],
    index_map: dict[str, int],
    prs_configs: list[PRSConfig],
    all_weights: list[PRSWeights],
) -> list[PRSResult]:
    """Calculate every configured PRS for one genotype file.

    Args:
        input_map: Lowercased rsid to InputVariant
        index_map: rsid to index into each model's weight list
        prs_configs: Model configurations
        all_weights: Weight tables, parallel to ``prs_configs``

    Returns:
        One PRSResult per configuration, in configuration order

    Raises:
        PRSAssetError: If weights are not parallel to configs or an index is
            out of range
    """
    if len(all_weights) != len(prs_configs):
        raise PRSAssetError(
            f"Expected {len(prs_configs)} weight tables, got {len(all_weights)}"
        )

    scores = [0.0] * len(prs_configs)

    for rsid, variant in input_map.items():
        if rsid not in index_map:
            continue
        index = index_map[rsid]

        for j, model in enumerate(all_weights):
            try:
                effect_weight, effect_allele = model.weights[index]
            except IndexError:
                raise PRSAssetError(
                    f"Index {index} for {rsid} is out of range for "
                    f"'{prs_configs[j].name}' ({len(model.weights)} weights)"
                ) from None
            dosage = effect_allele_dosage(variant.genotype, effect_allele)
            if dosage:
                scores[j] += effect_weight * dosage

    results = []
    for config, score in zip(prs_configs, scores):
        result = PRSResult(
            name=config.name,
            score=score,
            risk=classify_risk(score, config),
            lower_cutoff=config.lower_cutoff,
            upper_cutoff=config.upper_cutoff,
            lower_is_better=config.lower_is_better,
            pgs_id=config.pgs_id,
            sex=config.sex,
            extra=dict(config.extra),
        )
        logger.info("PRS %s score: %s, risk: %s", result.name, result.score, result.risk)
        results.append(result)

    return results
