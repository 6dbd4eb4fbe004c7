"""Tests for genotype classification."""

from hypothesis import assume, given, settings
from hypothesis import strategies as st

from genome_report.matching import (
    GenotypeCode,
    complement_genotype,
    find_matching_genotype,
    match_genotype,
    orient_genotype,
    snpedia_genotype_code,
)
from genome_report.models import SNPEDIA, GenotypeAnnotation, ReferenceVariant

bases = st.sampled_from("ACGT")


def _snpedia(**fields):
    return ReferenceVariant(rsid="rs1", source=SNPEDIA, **fields)


class TestMatchGenotype:
    """Tests for ref/alt pair classification."""

    def test_homozygous_reference(self):
        assert match_genotype("CC", "C", "T") == GenotypeCode.HOM_REF

    def test_heterozygous(self):
        assert match_genotype("CT", "C", "T") == GenotypeCode.HET

    def test_heterozygous_reversed(self):
        assert match_genotype("TC", "C", "T") == GenotypeCode.HET

    def test_homozygous_alternative(self):
        assert match_genotype("TT", "C", "T") == GenotypeCode.HOM_ALT

    def test_unrelated_alleles(self):
        assert match_genotype("AG", "C", "T") == GenotypeCode.UNKNOWN

    def test_hemizygous_alternative(self):
        assert match_genotype("T", "C", "T") == GenotypeCode.HOM_ALT

    def test_hemizygous_reference(self):
        assert match_genotype("C", "C", "T") == GenotypeCode.HOM_REF

    def test_no_call(self):
        assert match_genotype("--", "C", "T") == GenotypeCode.UNKNOWN

    def test_unreliable_indels(self):
        assert match_genotype("II", "C", "T") == GenotypeCode.UNKNOWN
        assert match_genotype("DD", "C", "T") == GenotypeCode.UNKNOWN

    def test_heterozygous_indels(self):
        assert match_genotype("ID", "C", "T") == GenotypeCode.HET
        assert match_genotype("DI", None, None) == GenotypeCode.HET

    def test_missing_alleles(self):
        assert match_genotype("CT", None, None) == GenotypeCode.UNKNOWN
        assert match_genotype("CC", "C", None) == GenotypeCode.HOM_REF
        assert match_genotype("CT", "C", None) == GenotypeCode.UNKNOWN

    def test_empty_and_long_calls(self):
        assert match_genotype("", "C", "T") == GenotypeCode.UNKNOWN
        assert match_genotype("CTT", "C", "T") == GenotypeCode.UNKNOWN

    def test_multi_base_alleles_do_not_match(self):
        assert match_genotype("GG", "G", "GC") == GenotypeCode.HOM_REF
        assert match_genotype("GC", "G", "GC") == GenotypeCode.UNKNOWN

    def test_codes_are_ints(self):
        assert match_genotype("TT", "C", "T") == 2
        assert int(match_genotype("--", "C", "T")) == -1


class TestMatchGenotypeProperties:
    """Property-based tests using hypothesis."""

    @given(a=bases, b=bases, ref=bases, alt=bases)
    @settings(max_examples=200)
    def test_allele_order_irrelevant(self, a, b, ref, alt):
        assert match_genotype(a + b, ref, alt) == match_genotype(b + a, ref, alt)

    @given(a=bases, b=bases, ref=bases, alt=bases)
    @settings(max_examples=200)
    def test_code_range(self, a, b, ref, alt):
        assert match_genotype(a + b, ref, alt) in (-1, 0, 1, 2)

    @given(ref=bases, alt=bases)
    @settings(max_examples=50)
    def test_canonical_calls(self, ref, alt):
        assume(ref != alt)
        assert match_genotype(ref + ref, ref, alt) == GenotypeCode.HOM_REF
        assert match_genotype(ref + alt, ref, alt) == GenotypeCode.HET
        assert match_genotype(alt + alt, ref, alt) == GenotypeCode.HOM_ALT

    @given(call=st.text(alphabet="ACGT-", max_size=4))
    @settings(max_examples=100)
    def test_complement_is_involution(self, call):
        assert complement_genotype(complement_genotype(call)) == call


class TestOrientation:
    """Tests for strand handling of SNPedia calls."""

    def test_complement(self):
        assert complement_genotype("AC") == "TG"
        assert complement_genotype("--") == "--"

    def test_plus_strand_unchanged(self):
        assert orient_genotype("CT", _snpedia(orientation="plus")) == "CT"

    def test_minus_orientation_complemented(self):
        assert orient_genotype("CC", _snpedia(orientation="minus")) == "GG"

    def test_minus_stabilized_complemented(self):
        assert orient_genotype("AG", _snpedia(stabilized="minus")) == "TC"

    def test_hemizygous_expanded(self):
        assert orient_genotype("A", _snpedia(orientation="minus")) == "TT"


class TestFindMatchingGenotype:
    """Tests for per-genotype annotation lookup."""

    def test_unordered_match(self):
        entries = [GenotypeAnnotation(name="rs1(A;G)", allele1="A", allele2="G")]
        assert find_matching_genotype("GA", entries) is entries[0]

    def test_first_match_wins(self):
        entries = [
            GenotypeAnnotation(name="first", allele1="G", allele2="G"),
            GenotypeAnnotation(name="second", allele1="G", allele2="G"),
        ]
        assert find_matching_genotype("GG", entries).name == "first"

    def test_no_match(self):
        entries = [GenotypeAnnotation(name="rs1(A;A)", allele1="A", allele2="A")]
        assert find_matching_genotype("GG", entries) is None

    def test_invalid_length(self):
        entries = [GenotypeAnnotation(name="rs1(A;A)", allele1="A", allele2="A")]
        assert find_matching_genotype("--A", entries) is None


class TestSnpediaGenotypeCode:
    """Tests for SNPedia-specific classification."""

    def test_ref_alt_comparison_uses_raw_call(self):
        variant = _snpedia(reference_allele="G", alternative_allele="A")
        assert snpedia_genotype_code("AG", variant, None) == GenotypeCode.HET

    def test_matched_entry_takes_precedence_over_ref_alt(self):
        variant = _snpedia(reference_allele="A", alternative_allele="G", orientation="minus")
        matched = GenotypeAnnotation(name="rs1(G;G)", allele1="G", allele2="G")
        assert snpedia_genotype_code("CC", variant, matched) == GenotypeCode.HOM_ALT

    def test_no_alleles_homozygous_match(self):
        variant = _snpedia(orientation="minus")
        matched = GenotypeAnnotation(name="rs1015362(G;G)", allele1="G", allele2="G")
        assert snpedia_genotype_code("CC", variant, matched) == GenotypeCode.HOM_ALT

    def test_no_alleles_heterozygous_match(self):
        matched = GenotypeAnnotation(name="rs1(A;G)", allele1="A", allele2="G")
        assert snpedia_genotype_code("AG", _snpedia(), matched) == GenotypeCode.HET

    def test_no_alleles_no_match(self):
        assert snpedia_genotype_code("AG", _snpedia(), None) == GenotypeCode.UNKNOWN

    def test_reference_only_homozygous_reference(self):
        variant = _snpedia(reference_allele="C", orientation="minus")
        matched = GenotypeAnnotation(name="rs1(G;G)", allele1="G", allele2="G")
        assert snpedia_genotype_code("CC", variant, matched) == GenotypeCode.HOM_REF

    def test_special_calls(self):
        assert snpedia_genotype_code("--", _snpedia(), None) == GenotypeCode.UNKNOWN
        assert snpedia_genotype_code("ID", _snpedia(), None) == GenotypeCode.HET
