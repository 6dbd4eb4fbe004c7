"""SNPedia structured export loader.

The export is a JSON object keyed by SNP page name (vendor casing, e.g.
``Rs1015362``), optionally wrapped under a top-level ``"snps"`` key. Each page
holds free text and wiki templates::

    {
      "sections": [
        {"templates": [{"template": "rsnum", "rsid": "1015362",
                        "gene": "ASIP", "orientation": "minus"}],
         "paragraphs": [{"sentences": [{"text": "..."}]}]}
      ],
      "tags": {"medicines": [], "topics": [], "conditions": []},
      "genotypes": [
        {"name": "rs1015362(G;G)", "tags": {...},
         "sections": [{"templates": [{"template": "genotype", "allele1": "G",
                                       "allele2": "G", "magnitude": "2",
                                       "repute": "Bad", "summary": "..."}]}]}
      ]
    }

Genotype alleles are always stored on the plus strand; ``orientation`` or
``stabilized`` equal to ``"minus"`` means user calls must be complemented
before comparison.
"""

import logging
from typing import Any

from ..models import SNPEDIA, GenotypeAnnotation, ReferenceVariant
from ..utils.validators import is_rsid, optional_int, optional_str
from .tree import collect, find_first, iter_nodes

logger = logging.getLogger(__name__)

DEFAULT_DESCRIPTION_LIMIT = 500

SENTENCE_PATH = ("sections", "paragraphs", "sentences")
TEMPLATE_PATH = ("sections", "templates")


def _template_value(template: dict, *names: str) -> Any:
    """Look up a template parameter case-insensitively."""
    for name in names:
        if name in template:
            return template[name]
    lowered = {str(k).lower(): v for k, v in template.items()}
    for name in names:
        if name.lower() in lowered:
            return lowered[name.lower()]
    return None


def _is_rsnum(template: dict) -> bool:
    return template.get("template") == "rsnum"


def _is_genotype(template: dict) -> bool:
    return (
        template.get("template") == "genotype"
        and bool(template.get("allele1"))
        and bool(template.get("allele2"))
    )


def resolve_rsid(snp_key: str, snp_data: dict) -> str | None:
    """Derive the canonical rsid for a SNPedia page.

    The ``rsnum`` template's ``rsid`` parameter takes precedence; the page key
    (``Rs12345``) is used only when no template rsid is present.

    Returns:
        The rsid (``rs`` prefixed) or None if the page is not an rsid page
    """
    rsnum = find_first(snp_data, TEMPLATE_PATH, lambda t: _is_rsnum(t) and bool(t.get("rsid")))

    if rsnum is not None:
        raw = str(rsnum["rsid"]).strip()
        rsid = raw.lower() if raw.lower().startswith("rs") else f"rs{raw}"
    elif snp_key:
        rsid = snp_key[0].lower() + snp_key[1:]
    else:
        return None

    if not is_rsid(rsid):
        return None
    return rsid


def extract_description(snp_data: dict, limit: int = DEFAULT_DESCRIPTION_LIMIT) -> str:
    """Join page sentences into a description.

    Sentences are appended whole while the accumulated text is shorter than
    ``limit``; once past it no further sentences are added.
    """
    description = ""
    for sentence in iter_nodes(snp_data, SENTENCE_PATH):
        text = sentence.get("text")
        if not text or not isinstance(text, str):
            continue
        if len(description) >= limit:
            break
        description = f"{description} {text}" if description else text
    return description.strip()


def extract_genotypes(snp_data: dict) -> list[GenotypeAnnotation]:
    """Collect per-genotype annotations in document order."""
    annotations: list[GenotypeAnnotation] = []

    genotype_pages = snp_data.get("genotypes")
    if not isinstance(genotype_pages, list):
        return annotations

    for page in genotype_pages:
        if not isinstance(page, dict):
            continue
        for template in collect(page, TEMPLATE_PATH, _is_genotype):
            magnitude = template.get("magnitude")
            annotations.append(
                GenotypeAnnotation(
                    name=page.get("name"),
                    allele1=str(template["allele1"]),
                    allele2=str(template["allele2"]),
                    magnitude=str(magnitude) if magnitude not in (None, "") else "0",
                    repute=template.get("repute") or "Unknown",
                    summary=template.get("summary") or "",
                    tags=page.get("tags"),
                )
            )

    return annotations


def _diseases(snp_data: dict, tags: dict | None) -> str:
    explicit = snp_data.get("diseases")
    if isinstance(explicit, str) and explicit:
        return explicit
    if isinstance(explicit, list) and explicit:
        return ", ".join(str(d) for d in explicit)
    if tags and isinstance(tags.get("conditions"), list):
        return ", ".join(str(c) for c in tags["conditions"])
    return ""


def build_snpedia_variant(
    rsid: str,
    snp_data: dict,
    description_limit: int = DEFAULT_DESCRIPTION_LIMIT,
) -> ReferenceVariant:
    """Flatten one SNPedia page into a ReferenceVariant."""
    rsnum = find_first(snp_data, TEMPLATE_PATH, _is_rsnum) or {}
    tags = snp_data.get("tags") if isinstance(snp_data.get("tags"), dict) else None

    gene_name = snp_data.get("gene_name") or _template_value(rsnum, "gene", "Gene")
    chrom = snp_data.get("chrom") or _template_value(rsnum, "chromosome", "Chromosome")
    position = snp_data.get("position") or _template_value(rsnum, "position", "Position")

    return ReferenceVariant(
        rsid=rsid,
        source=SNPEDIA,
        reference_allele=optional_str(snp_data.get("reference_allele")),
        alternative_allele=optional_str(snp_data.get("alternative_allele")),
        gene_name=optional_str(gene_name),
        chrom=optional_str(chrom),
        position=optional_int(position),
        description=extract_description(snp_data, description_limit),
        diseases=_diseases(snp_data, tags),
        tags=tags,
        orientation=optional_str(
            snp_data.get("orientation") or _template_value(rsnum, "orientation")
        ),
        stabilized=optional_str(
            snp_data.get("stabilized") or _template_value(rsnum, "stabilized")
        ),
        genotypes=extract_genotypes(snp_data),
    )


def load_snpedia_database(
    data: dict[str, Any],
    description_limit: int = DEFAULT_DESCRIPTION_LIMIT,
) -> dict[str, ReferenceVariant]:
    """Build an rsid lookup from a SNPedia structured export.

    Args:
        data: Decoded JSON object keyed by SNP page name, or a document
            holding that mapping under ``"snps"``
        description_limit: Soft cap on description length

    Returns:
        Dict mapping lowercased rsid to ReferenceVariant with source "snpedia"
    """
    pages = data.get("snps") if isinstance(data.get("snps"), dict) else data
    database: dict[str, ReferenceVariant] = {}

    for snp_key, snp_data in pages.items():
        if not isinstance(snp_data, dict):
            continue
        rsid = resolve_rsid(snp_key, snp_data)
        if rsid is None:
            continue
        database[rsid.lower()] = build_snpedia_variant(rsid, snp_data, description_limit)

    with_genotypes = sum(1 for v in database.values() if v.genotypes)
    logger.info(
        "Loaded %d SNPedia variants (%d with genotype annotations)",
        len(database),
        with_genotypes,
    )
    return database
