"""Genotype file parsing modules."""

from .genome_file import detect_vendor, parse_genome_file, parse_genome_line

__all__ = [
    "detect_vendor",
    "parse_genome_file",
    "parse_genome_line",
]
