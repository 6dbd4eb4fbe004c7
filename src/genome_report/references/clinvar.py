"""ClinVar reference export loader.

The ClinVar export is a flat JSON array of objects::

    [{"rsid": "rs6025", "reference_allele": "C", "alternative_allele": "T",
      "evidence_level": "3 Stars", "gene_name": "F5",
      "phenotype": "Factor V Leiden thrombophilia", "chrom": "1",
      "position": 169549811}, ...]
"""

import logging
from typing import Any

from ..models import CLINVAR, ReferenceVariant
from ..utils.validators import is_rsid, optional_int, optional_str

logger = logging.getLogger(__name__)


def load_clinvar_database(entries: list[Any]) -> dict[str, ReferenceVariant]:
    """Build an rsid lookup from a ClinVar export.

    Args:
        entries: Decoded JSON array of ClinVar variant objects

    Returns:
        Dict mapping lowercased rsid to ReferenceVariant with source "clinvar"
    """
    database: dict[str, ReferenceVariant] = {}

    for entry in entries:
        if not isinstance(entry, dict):
            continue
        rsid = entry.get("rsid")
        if not is_rsid(rsid):
            continue

        database[rsid.lower()] = ReferenceVariant(
            rsid=rsid,
            source=CLINVAR,
            reference_allele=optional_str(entry.get("reference_allele")),
            alternative_allele=optional_str(entry.get("alternative_allele")),
            evidence_level=optional_str(entry.get("evidence_level")),
            gene_name=optional_str(entry.get("gene_name")),
            phenotype=optional_str(entry.get("phenotype")),
            chrom=optional_str(entry.get("chrom")),
            position=optional_int(entry.get("position")),
        )

    logger.info("Loaded %d ClinVar variants", len(database))
    return database
