"""Genotype classification against reference/alternative allele pairs.

Consumer arrays report diploid calls as two-character strings (``AG``),
hemizygous X/Y calls as a single character (``A``), indels as ``I``/``D``
pairs and no-calls as ``--``. Classification codes:

| Code | Meaning                        |
|------|--------------------------------|
| -1   | cannot classify                |
|  0   | homozygous reference           |
|  1   | heterozygous                   |
|  2   | homozygous alternative         |
"""

from collections.abc import Iterable
from enum import IntEnum

from ..models import GenotypeAnnotation, ReferenceVariant

COMPLEMENTS = {"A": "T", "T": "A", "C": "G", "G": "C"}

UNRELIABLE_INDEL_CALLS = {"II", "DD"}
HETEROZYGOUS_INDEL_CALLS = {"ID", "DI"}
NO_CALL = "--"


class GenotypeCode(IntEnum):
    """Zygosity of a user call relative to a reference allele pair."""

    UNKNOWN = -1
    HOM_REF = 0
    HET = 1
    HOM_ALT = 2


def complement_genotype(genotype: str) -> str:
    """Complement every base (A<->T, C<->G), leaving other symbols intact."""
    return "".join(COMPLEMENTS.get(base, base) for base in genotype)


def expand_hemizygous(genotype: str) -> str:
    """Duplicate a single-allele call (chrX/Y) to a diploid string."""
    if len(genotype) == 1:
        return genotype + genotype
    return genotype


def _special_call_code(genotype: str) -> GenotypeCode | None:
    """Classify indel and no-call codes, or None for ordinary calls."""
    if genotype in UNRELIABLE_INDEL_CALLS:
        return GenotypeCode.UNKNOWN
    if genotype in HETEROZYGOUS_INDEL_CALLS:
        return GenotypeCode.HET
    if genotype == NO_CALL:
        return GenotypeCode.UNKNOWN
    return None


def match_genotype(
    user_genotype: str,
    ref_allele: str | None,
    alt_allele: str | None,
) -> GenotypeCode:
    """Classify a user genotype against a reference/alternative allele pair.

    Args:
        user_genotype: Raw call from the genotype file (e.g. "AG", "A", "--")
        ref_allele: Reference allele
        alt_allele: Alternative allele

    Returns:
        GenotypeCode; allele order within the call does not matter
    """
    special = _special_call_code(user_genotype)
    if special is not None:
        return special

    alleles = expand_hemizygous(user_genotype)
    if len(alleles) != 2:
        return GenotypeCode.UNKNOWN

    pair = sorted(alleles)
    if ref_allele and pair == [ref_allele, ref_allele]:
        return GenotypeCode.HOM_REF
    if alt_allele and pair == [alt_allele, alt_allele]:
        return GenotypeCode.HOM_ALT
    if ref_allele and alt_allele and pair == sorted([ref_allele, alt_allele]):
        return GenotypeCode.HET

    return GenotypeCode.UNKNOWN


def orient_genotype(user_genotype: str, variant: ReferenceVariant) -> str:
    """Bring a user call onto the plus strand used by SNPedia genotype entries."""
    alleles = expand_hemizygous(user_genotype)
    if variant.is_minus_strand:
        return complement_genotype(alleles)
    return alleles


def find_matching_genotype(
    alleles: str,
    genotypes: Iterable[GenotypeAnnotation],
) -> GenotypeAnnotation | None:
    """Find the first annotation whose allele pair equals ``alleles`` unordered."""
    if len(alleles) != 2:
        return None
    pair = sorted(alleles)
    for annotation in genotypes:
        if pair == sorted([annotation.allele1, annotation.allele2]):
            return annotation
    return None


def snpedia_genotype_code(
    user_genotype: str,
    variant: ReferenceVariant,
    matched: GenotypeAnnotation | None,
) -> GenotypeCode:
    """Classify a user call against a SNPedia record.

    A matched genotype entry decides when there is one: a homozygous match
    on the known reference allele is HOM_REF, any other homozygous match is
    HOM_ALT and a mixed pair is HET. Without a match the standard comparison
    against reference and alternative alleles applies when both are present.
    """
    special = _special_call_code(user_genotype)
    if special is not None:
        return special
    if len(expand_hemizygous(user_genotype)) != 2:
        return GenotypeCode.UNKNOWN

    if matched is None:
        if variant.reference_allele and variant.alternative_allele:
            return match_genotype(
                user_genotype, variant.reference_allele, variant.alternative_allele
            )
        return GenotypeCode.UNKNOWN
    if matched.allele1 != matched.allele2:
        return GenotypeCode.HET
    if variant.reference_allele and matched.allele1 == _plus_strand_reference(variant):
        return GenotypeCode.HOM_REF
    return GenotypeCode.HOM_ALT


def _plus_strand_reference(variant: ReferenceVariant) -> str | None:
    # reference_allele is in the same orientation as user calls, genotype entries are not
    if variant.reference_allele is None:
        return None
    if variant.is_minus_strand:
        return complement_genotype(variant.reference_allele)
    return variant.reference_allele
