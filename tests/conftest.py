"""Pytest configuration and fixtures for genome-report tests."""

import json
from pathlib import Path

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture
def demo_genome_content() -> str:
    return (FIXTURES_DIR / "demo_genome.txt").read_text()


@pytest.fixture
def clinvar_entries() -> list:
    with open(FIXTURES_DIR / "clinvar_sample.json") as f:
        return json.load(f)


@pytest.fixture
def snpedia_data() -> dict:
    with open(FIXTURES_DIR / "snpedia_sample.json") as f:
        return json.load(f)


@pytest.fixture
def clinvar_map(clinvar_entries):
    from genome_report.references import load_clinvar_database

    return load_clinvar_database(clinvar_entries)


@pytest.fixture
def snpedia_map(snpedia_data):
    from genome_report.references import load_snpedia_database

    return load_snpedia_database(snpedia_data)


@pytest.fixture
def user_variants(demo_genome_content):
    from genome_report.parsers import parse_genome_file

    return parse_genome_file(demo_genome_content)
