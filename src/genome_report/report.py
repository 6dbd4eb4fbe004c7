"""Report assembly: run the full pipeline and group mutations into findings."""

import logging
import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from .matching.intersection import find_shared_variants
from .matching.mutations import DEFAULT_EVIDENCE_LEVEL, convert_to_mutations
from .models import Mutation, ReferenceVariant
from .parsers.genome_file import detect_vendor, parse_genome_file
from .prs.calculator import calculate_all_prs
from .prs.loader import PRSAssets
from .prs.models import PRSResult
from .risk.ascvd import ASCVDRiskFactors, calculate_ascvd_risk

logger = logging.getLogger(__name__)

EVIDENCE_TIERS = {"4 Stars": "A", "3 Stars": "B"}
DISEASE_KEYWORDS = ("cancer", "disease", "diabetes")

_LEADING_INT = re.compile(r"\d+")


@dataclass
class Finding:
    """Mutations sharing one phenotype, summarized for display."""

    id: str
    title: str
    summary: str
    phenotype: str
    rsids: list[str]
    evidence_level: str
    max_star_rating: str
    risk_level: str
    category: str
    mutations: list[Mutation] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "summary": self.summary,
            "phenotype": self.phenotype,
            "rsids": self.rsids,
            "evidence_level": self.evidence_level,
            "max_star_rating": self.max_star_rating,
            "risk_level": self.risk_level,
            "category": self.category,
            "mutations": [m.to_dict() for m in self.mutations],
        }


@dataclass
class Report:
    """Complete analysis of one genotype file."""

    vendor: str
    generated_at: datetime
    variant_count: int
    shared_variant_count: int
    mutations: list[Mutation]
    findings: list[Finding]
    prs_results: list[PRSResult] = field(default_factory=list)
    ascvd_risk: float | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "vendor": self.vendor,
            "generated_at": self.generated_at.isoformat(timespec="seconds"),
            "variant_count": self.variant_count,
            "shared_variant_count": self.shared_variant_count,
            "mutations": [m.to_dict() for m in self.mutations],
            "findings": [f.to_dict() for f in self.findings],
            "prs_results": [r.to_dict() for r in self.prs_results],
            "ascvd_risk": self.ascvd_risk,
        }


def star_count(evidence_level: str | None) -> int:
    """Parse the leading integer of an evidence label ("3 Stars" -> 3)."""
    if not evidence_level:
        return 0
    match = _LEADING_INT.match(evidence_level.strip())
    return int(match.group()) if match else 0


def evidence_tier(star_rating: str) -> str:
    return EVIDENCE_TIERS.get(star_rating, "C")


def is_disease_phenotype(phenotype: str) -> bool:
    lowered = phenotype.lower()
    return any(keyword in lowered for keyword in DISEASE_KEYWORDS)


def _summary(phenotype: str, mutations: list[Mutation]) -> str:
    count = len(mutations)
    genes = ", ".join(dict.fromkeys(m.gene_name for m in mutations))
    plural = "s" if count > 1 else ""
    return (
        f"Genetic analysis of {count} variant{plural} in {genes} "
        f"related to {phenotype.lower()}."
    )


def build_findings(mutations: list[Mutation]) -> list[Finding]:
    """Group mutations by phenotype, in order of first appearance."""
    groups: dict[str, list[Mutation]] = {}
    for mutation in mutations:
        groups.setdefault(mutation.phenotype, []).append(mutation)

    findings = []
    for index, (phenotype, group) in enumerate(groups.items()):
        max_rating = DEFAULT_EVIDENCE_LEVEL
        for mutation in group:
            if star_count(mutation.evidence_level) > star_count(max_rating):
                max_rating = mutation.evidence_level

        tier = evidence_tier(max_rating)
        is_disease = is_disease_phenotype(phenotype)
        if is_disease:
            risk_level = "High"
        elif tier == "A":
            risk_level = "Moderate"
        else:
            risk_level = "Low"

        findings.append(
            Finding(
                id=f"finding-{index}",
                title=phenotype[:1].upper() + phenotype[1:],
                summary=_summary(phenotype, group),
                phenotype=phenotype,
                rsids=list(dict.fromkeys(m.rsid for m in group)),
                evidence_level=tier,
                max_star_rating=max_rating,
                risk_level=risk_level,
                category="disease" if is_disease else "trait",
                mutations=group,
            )
        )

    return findings


def generate_report(
    genome_content: str,
    clinvar_map: dict[str, ReferenceVariant],
    snpedia_map: dict[str, ReferenceVariant],
    prs_assets: PRSAssets | None = None,
    risk_factors: ASCVDRiskFactors | None = None,
) -> Report:
    """Run parsing, matching, projection and scoring over one genotype file.

    Args:
        genome_content: Raw text of the vendor export
        clinvar_map: Output of load_clinvar_database
        snpedia_map: Output of load_snpedia_database
        prs_assets: Optional PRS inputs; PRS is skipped when None
        risk_factors: Optional clinical inputs; ASCVD is skipped when None

    Returns:
        Report with mutations, findings and any supplementary scores
    """
    user_variants = parse_genome_file(genome_content)
    shared = find_shared_variants(user_variants, clinvar_map, snpedia_map)
    mutations = convert_to_mutations(shared)
    findings = build_findings(mutations)

    prs_results: list[PRSResult] = []
    if prs_assets is not None:
        prs_results = calculate_all_prs(
            user_variants, prs_assets.index_map, prs_assets.configs, prs_assets.weights
        )

    ascvd_risk = calculate_ascvd_risk(risk_factors) if risk_factors is not None else None

    logger.info(
        "Report: %d mutations in %d findings from %d genotype calls",
        len(mutations),
        len(findings),
        len(user_variants),
    )

    return Report(
        vendor=detect_vendor(genome_content),
        generated_at=datetime.now(timezone.utc),
        variant_count=len(user_variants),
        shared_variant_count=len(shared),
        mutations=mutations,
        findings=findings,
        prs_results=prs_results,
        ascvd_risk=ascvd_risk,
    )
