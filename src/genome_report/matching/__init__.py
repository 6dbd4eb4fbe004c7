"""Genotype matching, variant intersection and mutation projection."""

from .genotype import (
    GenotypeCode,
    complement_genotype,
    find_matching_genotype,
    match_genotype,
    orient_genotype,
    snpedia_genotype_code,
)
from .intersection import find_shared_variants, match_clinvar, match_snpedia
from .mutations import convert_to_mutations

__all__ = [
    "GenotypeCode",
    "complement_genotype",
    "convert_to_mutations",
    "find_matching_genotype",
    "find_shared_variants",
    "match_clinvar",
    "match_genotype",
    "match_snpedia",
    "orient_genotype",
    "snpedia_genotype_code",
]
