"""Consumer genotype export parsing.

Supports line-oriented vendor exports (23andMe, AncestryDNA, MyHeritage raw
data) with whitespace-separated columns:

    rsid    chromosome    position    genotype

Comment lines start with ``#``. Malformed data lines are skipped rather than
raised on, since vendor exports routinely contain internal probe IDs
(``i3000001``), truncated rows and non-numeric positions.
"""

import logging
import re

from ..models import InputVariant
from ..utils.validators import is_rsid

logger = logging.getLogger(__name__)

MIN_COLUMNS = 4

VENDOR_MARKERS = (
    ("23andme", "23andMe"),
    ("ancestrydna", "AncestryDNA"),
    ("myheritage", "MyHeritage"),
)

_WHITESPACE = re.compile(r"\s+")
_POSITION = re.compile(r"[0-9]+")


def parse_genome_line(line: str) -> InputVariant | None:
    """Parse a single data line, returning None for anything unusable."""
    stripped = line.strip()
    if not stripped or stripped.startswith("#"):
        return None

    parts = _WHITESPACE.split(stripped)
    if len(parts) < MIN_COLUMNS:
        return None

    rsid, chromosome, position, genotype = parts[:MIN_COLUMNS]
    if not is_rsid(rsid):
        return None

    if not _POSITION.fullmatch(position):
        return None

    return InputVariant(
        rsid=rsid, chromosome=chromosome, position=int(position), genotype=genotype
    )


def parse_genome_file(content: str) -> dict[str, InputVariant]:
    """Parse raw genotype file text into a map keyed by lowercased rsid.

    Args:
        content: Full text of the vendor export

    Returns:
        Dict mapping lowercased rsid to InputVariant; when an rsid repeats,
        the last line wins
    """
    variants: dict[str, InputVariant] = {}
    skipped = 0

    for line in content.splitlines():
        variant = parse_genome_line(line)
        if variant is None:
            stripped = line.strip()
            if stripped and not stripped.startswith("#"):
                skipped += 1
            continue
        variants[variant.rsid.lower()] = variant

    if skipped:
        logger.debug("Skipped %d malformed genotype lines", skipped)
    logger.info("Parsed %d genotype calls", len(variants))
    return variants


def detect_vendor(content: str) -> str:
    """Detect the export vendor from leading comment lines."""
    for line in content.splitlines():
        stripped = line.strip()
        if not stripped:
            continue
        if not stripped.startswith("#"):
            break
        lowered = stripped.lower()
        for marker, vendor in VENDOR_MARKERS:
            if marker in lowered:
                return vendor
    return "Unknown"
