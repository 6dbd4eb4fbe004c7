"""Data models for genotype and reference variants."""

from dataclasses import dataclass, field
from typing import Any

CLINVAR = "clinvar"
SNPEDIA = "snpedia"


@dataclass
class InputVariant:
    """Represents a single line of a consumer genotype export."""

    rsid: str
    chromosome: str
    position: int
    genotype: str


@dataclass
class GenotypeAnnotation:
    """Represents one SNPedia per-genotype annotation (e.g. rs1015362(G;G))."""

    name: str | None
    allele1: str
    allele2: str
    magnitude: str = "0"
    repute: str = "Unknown"
    summary: str = ""
    tags: dict | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "allele1": self.allele1,
            "allele2": self.allele2,
            "magnitude": self.magnitude,
            "repute": self.repute,
            "summary": self.summary,
            "tags": self.tags,
        }


@dataclass
class ReferenceVariant:
    """Reference annotation for an rsid from either ClinVar or SNPedia.

    Both databases share one record type tagged by ``source``; fields that
    only one database populates are left at their defaults by the other.
    """

    rsid: str
    source: str
    reference_allele: str | None = None
    alternative_allele: str | None = None
    gene_name: str | None = None
    chrom: str | None = None
    position: int | None = None

    # ClinVar
    evidence_level: str | None = None
    phenotype: str | None = None

    # SNPedia
    description: str = ""
    diseases: str = ""
    tags: dict | None = None
    orientation: str | None = None
    stabilized: str | None = None
    genotypes: list[GenotypeAnnotation] = field(default_factory=list)

    @property
    def condition(self) -> str:
        """Condition text used for filtering and sorting."""
        if self.source == CLINVAR:
            return self.phenotype or ""
        return self.diseases or ""

    @property
    def is_minus_strand(self) -> bool:
        return self.orientation == "minus" or self.stabilized == "minus"


@dataclass
class ResultVariant:
    """A reference variant the user carries at least one alternative allele of."""

    variant: ReferenceVariant
    genotype: int
    user_allele: str
    matched_genotype: GenotypeAnnotation | None = None

    @property
    def rsid(self) -> str:
        return self.variant.rsid

    @property
    def source(self) -> str:
        return self.variant.source

    @property
    def condition(self) -> str:
        return self.variant.condition


@dataclass
class Mutation:
    """Report-ready projection of a matched variant."""

    rsid: str
    evidence_level: str
    gene_name: str
    phenotype: str
    chrom: str
    position: int
    reference_allele: str | None
    alternative_allele: str | None
    source: str

    genotype: int | None = None
    user_allele: str | None = None
    description: str = ""
    tags: dict | None = None
    matched_genotype: GenotypeAnnotation | None = None

    @property
    def magnitude(self) -> str | None:
        return self.matched_genotype.magnitude if self.matched_genotype else None

    @property
    def repute(self) -> str | None:
        return self.matched_genotype.repute if self.matched_genotype else None

    @property
    def summary(self) -> str | None:
        return self.matched_genotype.summary if self.matched_genotype else None

    def to_dict(self) -> dict[str, Any]:
        return {
            "rsid": self.rsid,
            "evidence_level": self.evidence_level,
            "gene_name": self.gene_name,
            "phenotype": self.phenotype,
            "chrom": self.chrom,
            "position": self.position,
            "reference_allele": self.reference_allele,
            "alternative_allele": self.alternative_allele,
            "source": self.source,
            "genotype": self.genotype,
            "user_allele": self.user_allele,
            "description": self.description,
            "tags": self.tags,
            "matched_genotype": (
                self.matched_genotype.to_dict() if self.matched_genotype else None
            ),
            "magnitude": self.magnitude,
            "repute": self.repute,
            "summary": self.summary,
        }
