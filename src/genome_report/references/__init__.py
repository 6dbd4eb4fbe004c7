"""Reference database loaders (ClinVar, SNPedia) and asset retrieval."""

from .clinvar import load_clinvar_database
from .download import (
    ReferenceDownloadConfig,
    ReferenceDownloader,
    ReferenceLoadError,
    load_json_source,
    resolve_source,
    verify_checksum,
)
from .snpedia import (
    extract_description,
    extract_genotypes,
    load_snpedia_database,
    resolve_rsid,
)
from .tree import collect, find_first, iter_nodes

__all__ = [
    "ReferenceDownloadConfig",
    "ReferenceDownloader",
    "ReferenceLoadError",
    "collect",
    "extract_description",
    "extract_genotypes",
    "find_first",
    "iter_nodes",
    "load_clinvar_database",
    "load_json_source",
    "load_snpedia_database",
    "resolve_rsid",
    "resolve_source",
    "verify_checksum",
]
