"""Join user genotype calls against ClinVar and SNPedia lookups."""

import logging

from ..models import CLINVAR, SNPEDIA, InputVariant, ReferenceVariant, ResultVariant
from .genotype import (
    find_matching_genotype,
    match_genotype,
    orient_genotype,
    snpedia_genotype_code,
)

logger = logging.getLogger(__name__)

SOURCE_ORDER = {CLINVAR: 0, SNPEDIA: 1}


def match_clinvar(
    input_variant: InputVariant, db_variant: ReferenceVariant
) -> ResultVariant | None:
    """Return a result if the user carries at least one ClinVar alternative allele."""
    code = match_genotype(
        input_variant.genotype,
        db_variant.reference_allele,
        db_variant.alternative_allele,
    )
    if code <= 0:
        return None
    return ResultVariant(
        variant=db_variant,
        genotype=int(code),
        user_allele=input_variant.genotype,
    )


def match_snpedia(
    input_variant: InputVariant, db_variant: ReferenceVariant
) -> ResultVariant | None:
    """Return a result if the user carries a non-reference SNPedia genotype.

    The user's call is complemented for minus-orientation records before it
    is compared against the stored per-genotype annotations.
    """
    alleles = orient_genotype(input_variant.genotype, db_variant)
    matched = find_matching_genotype(alleles, db_variant.genotypes)

    code = snpedia_genotype_code(input_variant.genotype, db_variant, matched)
    if code <= 0:
        return None

    if matched is None and not (db_variant.diseases or db_variant.description):
        return None

    return ResultVariant(
        variant=db_variant,
        genotype=int(code),
        user_allele=input_variant.genotype,
        matched_genotype=matched,
    )


def result_sort_key(result: ResultVariant) -> tuple[int, int, str]:
    """Order by source, then condition availability, then rsid."""
    return (
        SOURCE_ORDER.get(result.source, len(SOURCE_ORDER)),
        0 if result.condition else 1,
        result.rsid.lower(),
    )


def find_shared_variants(
    user_variants: dict[str, InputVariant],
    clinvar_map: dict[str, ReferenceVariant],
    snpedia_map: dict[str, ReferenceVariant],
) -> list[ResultVariant]:
    """Find reference variants the user carries at least one alternative allele of.

    Each rsid is checked against both databases independently, so one rsid
    can yield a ClinVar and a SNPedia result.

    Args:
        user_variants: Lowercased rsid to InputVariant
        clinvar_map: Lowercased rsid to ClinVar ReferenceVariant
        snpedia_map: Lowercased rsid to SNPedia ReferenceVariant

    Returns:
        Results sorted ClinVar first, annotated conditions first, then by rsid
    """
    results: list[ResultVariant] = []

    for rsid, input_variant in user_variants.items():
        clinvar_variant = clinvar_map.get(rsid)
        if clinvar_variant is not None:
            match = match_clinvar(input_variant, clinvar_variant)
            if match is not None:
                results.append(match)

        snpedia_variant = snpedia_map.get(rsid)
        if snpedia_variant is not None:
            match = match_snpedia(input_variant, snpedia_variant)
            if match is not None:
                results.append(match)

    results.sort(key=result_sort_key)

    logger.info(
        "Found %d shared variants (%d ClinVar, %d SNPedia)",
        len(results),
        sum(1 for r in results if r.source == CLINVAR),
        sum(1 for r in results if r.source == SNPEDIA),
    )
    return results
