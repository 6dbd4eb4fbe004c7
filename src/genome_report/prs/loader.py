"""Load PRS configuration, weight tables and the rsid index map.

Expected asset shapes:

- ``prs_config.json``: ``{"prs_list": [{"name": ..., "lower_cutoff": ..., ...}]}``
- ``prs_weights.json``: ``[{"weights": [[0.012, "A"], ...]}, ...]`` parallel
  to ``prs_list``
- index map: ``{"rs123": 0, "rs456": 1, ...}``
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from ..references.download import load_json_source
from .calculator import PRSAssetError
from .models import PRSConfig, PRSWeights

logger = logging.getLogger(__name__)


@dataclass
class PRSAssets:
    """All static inputs needed by calculate_all_prs."""

    configs: list[PRSConfig]
    weights: list[PRSWeights]
    index_map: dict[str, int]


def _optional_cutoff(value: Any) -> float | None:
    if value is None:
        return None
    if isinstance(value, bool):
        raise TypeError(f"expected a number, got {value!r}")
    return float(value)


def parse_prs_configs(data: Any) -> list[PRSConfig]:
    if not isinstance(data, dict) or not isinstance(data.get("prs_list"), list):
        raise PRSAssetError("PRS config must be an object with a 'prs_list' array")
    configs = []
    for i, entry in enumerate(data["prs_list"]):
        if not isinstance(entry, dict) or not entry.get("name"):
            raise PRSAssetError(f"PRS config entry {i} must be an object with a 'name'")
        config = PRSConfig.from_dict(entry)
        try:
            config.lower_cutoff = _optional_cutoff(config.lower_cutoff)
            config.upper_cutoff = _optional_cutoff(config.upper_cutoff)
        except (TypeError, ValueError) as e:
            raise PRSAssetError(f"PRS config entry {i} has a non-numeric cutoff: {e}") from e
        configs.append(config)
    return configs


def parse_prs_weights(data: Any) -> list[PRSWeights]:
    if not isinstance(data, list):
        raise PRSAssetError("PRS weights must be an array of {'weights': [...]} objects")
    tables = []
    for i, entry in enumerate(data):
        if not isinstance(entry, dict) or not isinstance(entry.get("weights"), list):
            raise PRSAssetError(f"PRS weights entry {i} has no 'weights' array")
        try:
            tables.append(PRSWeights.from_dict(entry))
        except (TypeError, ValueError) as e:
            raise PRSAssetError(f"PRS weights entry {i} is malformed: {e}") from e
    return tables


def parse_index_map(data: Any) -> dict[str, int]:
    if not isinstance(data, dict):
        raise PRSAssetError("PRS index map must be an object of rsid -> index")
    index_map = {}
    for rsid, index in data.items():
        if isinstance(index, bool) or not isinstance(index, int) or index < 0:
            raise PRSAssetError(f"Invalid index for {rsid}: {index!r}")
        index_map[rsid.lower()] = index
    return index_map


def load_prs_assets(
    config_source: str | Path,
    weights_source: str | Path,
    index_source: str | Path,
    cache_dir: Path | None = None,
) -> PRSAssets:
    """Read and validate the three PRS assets.

    Raises:
        ReferenceLoadError: If an asset cannot be read
        PRSAssetError: If the assets are malformed or not parallel
    """
    configs = parse_prs_configs(load_json_source(config_source, cache_dir=cache_dir))
    weights = parse_prs_weights(load_json_source(weights_source, cache_dir=cache_dir))
    index_map = parse_index_map(load_json_source(index_source, cache_dir=cache_dir))

    if len(configs) != len(weights):
        raise PRSAssetError(
            f"PRS config lists {len(configs)} models but weights file has {len(weights)}"
        )

    logger.info("Loaded %d PRS models over %d indexed variants", len(configs), len(index_map))
    return PRSAssets(configs=configs, weights=weights, index_map=index_map)
