"""Project matched variants into report-ready mutation records."""

import logging

from ..models import Mutation, ResultVariant

logger = logging.getLogger(__name__)

DEFAULT_EVIDENCE_LEVEL = "1 Star"
UNKNOWN_CHROMOSOME = "Unknown"


def to_mutation(result: ResultVariant) -> Mutation | None:
    """Project one result, or None if it lacks a condition or gene name."""
    variant = result.variant
    condition = result.condition
    if not condition or not variant.gene_name:
        return None

    return Mutation(
        rsid=variant.rsid,
        evidence_level=variant.evidence_level or DEFAULT_EVIDENCE_LEVEL,
        gene_name=variant.gene_name,
        phenotype=condition,
        chrom=variant.chrom or UNKNOWN_CHROMOSOME,
        position=variant.position or 0,
        reference_allele=variant.reference_allele,
        alternative_allele=variant.alternative_allele,
        source=variant.source,
        genotype=result.genotype,
        user_allele=result.user_allele,
        description=variant.description,
        tags=variant.tags,
        matched_genotype=result.matched_genotype,
    )


def convert_to_mutations(results: list[ResultVariant]) -> list[Mutation]:
    """Keep results with both a condition and a gene name, in input order."""
    mutations = [m for m in (to_mutation(r) for r in results) if m is not None]
    logger.debug("Projected %d of %d shared variants", len(mutations), len(results))
    return mutations
