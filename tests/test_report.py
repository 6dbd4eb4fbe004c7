"""Tests for report assembly."""

import json

import pytest

from genome_report.models import CLINVAR, Mutation
from genome_report.report import (
    build_findings,
    evidence_tier,
    generate_report,
    is_disease_phenotype,
    star_count,
)
from genome_report.risk import ASCVDRiskFactors


def _mutation(rsid, phenotype, evidence_level="1 Star", gene_name="GENE"):
    return Mutation(
        rsid=rsid,
        evidence_level=evidence_level,
        gene_name=gene_name,
        phenotype=phenotype,
        chrom="1",
        position=1,
        reference_allele="A",
        alternative_allele="G",
        source=CLINVAR,
        genotype=1,
        user_allele="AG",
    )


class TestEvidenceHelpers:
    def test_star_count(self):
        assert star_count("4 Stars") == 4
        assert star_count("1 Star") == 1
        assert star_count("no stars") == 0
        assert star_count(None) == 0

    def test_evidence_tier(self):
        assert evidence_tier("4 Stars") == "A"
        assert evidence_tier("3 Stars") == "B"
        assert evidence_tier("2 Stars") == "C"
        assert evidence_tier("1 Star") == "C"

    def test_disease_keywords(self):
        assert is_disease_phenotype("Hereditary breast and ovarian Cancer")
        assert is_disease_phenotype("Alzheimer disease")
        assert is_disease_phenotype("Type 2 Diabetes")
        assert not is_disease_phenotype("Lactose intolerance")


class TestBuildFindings:
    """Tests for grouping mutations by phenotype."""

    def test_grouped_in_first_seen_order(self):
        findings = build_findings(
            [
                _mutation("rs1", "Eye color"),
                _mutation("rs2", "Alzheimer disease"),
                _mutation("rs3", "Eye color"),
            ]
        )
        assert [f.phenotype for f in findings] == ["Eye color", "Alzheimer disease"]
        assert [f.id for f in findings] == ["finding-0", "finding-1"]
        assert findings[0].rsids == ["rs1", "rs3"]
        assert len(findings[0].mutations) == 2

    def test_highest_star_rating_wins(self):
        (finding,) = build_findings(
            [
                _mutation("rs1", "Trait", "2 Stars"),
                _mutation("rs2", "Trait", "4 Stars"),
                _mutation("rs3", "Trait", "3 Stars"),
            ]
        )
        assert finding.max_star_rating == "4 Stars"
        assert finding.evidence_level == "A"
        assert finding.risk_level == "Moderate"
        assert finding.category == "trait"

    def test_disease_is_high_risk(self):
        (finding,) = build_findings([_mutation("rs1", "Coronary artery disease")])
        assert finding.category == "disease"
        assert finding.risk_level == "High"
        assert finding.evidence_level == "C"

    def test_low_evidence_trait_is_low_risk(self):
        (finding,) = build_findings([_mutation("rs1", "Earwax type", "3 Stars")])
        assert finding.evidence_level == "B"
        assert finding.risk_level == "Low"

    def test_title_and_summary(self):
        (finding,) = build_findings(
            [
                _mutation("rs1", "sun sensitivity", gene_name="ASIP"),
                _mutation("rs2", "sun sensitivity", gene_name="MC1R"),
            ]
        )
        assert finding.title == "Sun sensitivity"
        assert "2 variants" in finding.summary
        assert "ASIP, MC1R" in finding.summary

    def test_empty(self):
        assert build_findings([]) == []


class TestGenerateReport:
    """End-to-end report over the demo fixtures."""

    def test_demo_report(self, demo_genome_content, clinvar_map, snpedia_map):
        report = generate_report(demo_genome_content, clinvar_map, snpedia_map)
        assert report.vendor == "23andMe"
        assert report.variant_count == 10
        assert report.shared_variant_count == 7
        assert len(report.mutations) == 5
        assert [f.phenotype for f in report.findings] == [
            "Homocystinuria due to MTHFR deficiency",
            "Factor V Leiden thrombophilia",
            "Sun sensitivity",
            "Cardiovascular disease",
            "Lactose intolerance",
        ]
        assert report.prs_results == []
        assert report.ascvd_risk is None

    def test_report_with_prs_and_ascvd(
        self, demo_genome_content, clinvar_map, snpedia_map, fixtures_dir
    ):
        from genome_report.prs import load_prs_assets

        assets = load_prs_assets(
            fixtures_dir / "prs_config.json",
            fixtures_dir / "prs_weights.json",
            fixtures_dir / "prs_index_map.json",
        )
        factors = ASCVDRiskFactors(
            age=55,
            is_male=True,
            is_black=False,
            is_smoker=False,
            is_diabetic=False,
            is_hypertensive=False,
            systolic_blood_pressure=120,
            total_cholesterol=213,
            hdl=50,
        )
        report = generate_report(
            demo_genome_content, clinvar_map, snpedia_map, assets, factors
        )
        assert [r.name for r in report.prs_results] == [
            "Coronary artery disease",
            "Type 2 diabetes",
            "Height",
        ]
        assert report.prs_results[0].score == pytest.approx(1.1)
        assert report.ascvd_risk == 5.4

    def test_to_dict_is_json_serializable(self, demo_genome_content, clinvar_map, snpedia_map):
        report = generate_report(demo_genome_content, clinvar_map, snpedia_map)
        data = json.loads(json.dumps(report.to_dict()))
        assert data["vendor"] == "23andMe"
        assert len(data["findings"]) == 5
        assert data["findings"][3]["category"] == "disease"
        assert "generated_at" in data
