"""Configuration file support for genome-report.

Example ``genome_report.toml``::

    [genome_report]
    clinvar = "data/clinvar.json"
    snpedia = "https://example.org/snp-data-structured.json"
    prs_config = "data/prs_config.json"
    prs_weights = "data/prs_weights.json"
    prs_index_map = "data/prs_23andme_index_map.json"
    description_limit = 500
    log_level = "INFO"
"""

import logging
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .references.download import is_url
from .references.snpedia import DEFAULT_DESCRIPTION_LIMIT

logger = logging.getLogger(__name__)

VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}

SOURCE_KEYS = ("clinvar", "snpedia", "prs_config", "prs_weights", "prs_index_map")

VALID_FIELDS = {*SOURCE_KEYS, "description_limit", "cache_dir", "log_level"}


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""

    pass


@dataclass
class ReportConfig:
    """Locations of reference assets and processing options."""

    clinvar: str | None = None
    snpedia: str | None = None
    prs_config: str | None = None
    prs_weights: str | None = None
    prs_index_map: str | None = None
    description_limit: int = DEFAULT_DESCRIPTION_LIMIT
    cache_dir: Path | None = None
    log_level: str = "INFO"

    @property
    def has_prs_assets(self) -> bool:
        return bool(self.prs_config and self.prs_weights and self.prs_index_map)


def validate_config(config_dict: dict[str, Any]) -> None:
    """Validate configuration values.

    Raises:
        ConfigValidationError: If any configuration value is invalid.
    """
    for key in SOURCE_KEYS:
        if key in config_dict and not isinstance(config_dict[key], str):
            raise ConfigValidationError(
                f"{key} must be a path or URL string, got {type(config_dict[key]).__name__}"
            )

    if "description_limit" in config_dict:
        limit = config_dict["description_limit"]
        if not isinstance(limit, int) or isinstance(limit, bool):
            raise ConfigValidationError(
                f"description_limit must be an integer, got {type(limit).__name__}"
            )
        if limit <= 0:
            raise ConfigValidationError(f"description_limit must be positive, got {limit}")

    if "log_level" in config_dict:
        log_level = config_dict["log_level"]
        if not isinstance(log_level, str):
            raise ConfigValidationError(
                f"log_level must be a string, got {type(log_level).__name__}"
            )
        if log_level.upper() not in VALID_LOG_LEVELS:
            raise ConfigValidationError(
                f"log_level must be one of {VALID_LOG_LEVELS}, got '{log_level}'"
            )


def _resolve_source(value: str, base_dir: Path) -> str:
    if is_url(value):
        return value
    path = Path(value).expanduser()
    if not path.is_absolute():
        path = base_dir / path
    return str(path)


def load_config(config_path: Path, overrides: dict[str, Any] | None = None) -> ReportConfig:
    """Load configuration from a TOML file.

    Relative asset paths from the file are resolved against its directory;
    overrides are taken as given.

    Args:
        config_path: Path to the TOML configuration file.
        overrides: Optional dict of values to override loaded config.

    Returns:
        ReportConfig instance with loaded values.

    Raises:
        FileNotFoundError: If the config file doesn't exist.
        ConfigValidationError: If any configuration value is invalid.
    """
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, "rb") as f:
        try:
            toml_data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigValidationError(f"Invalid TOML in {config_path}: {e}") from e

    config_dict = dict(toml_data.get("genome_report", {}))
    overrides = {k: v for k, v in (overrides or {}).items() if v is not None}
    config_dict.update(overrides)

    validate_config(config_dict)

    unknown = set(config_dict) - VALID_FIELDS
    if unknown:
        logger.warning("Ignoring unknown config keys: %s", ", ".join(sorted(unknown)))

    base_dir = config_path.resolve().parent
    filtered = {k: v for k, v in config_dict.items() if k in VALID_FIELDS}

    for key in SOURCE_KEYS:
        if filtered.get(key) and key not in overrides:
            filtered[key] = _resolve_source(filtered[key], base_dir)
    if filtered.get("cache_dir"):
        filtered["cache_dir"] = Path(filtered["cache_dir"]).expanduser()
    if "log_level" in filtered:
        filtered["log_level"] = filtered["log_level"].upper()

    return ReportConfig(**filtered)
