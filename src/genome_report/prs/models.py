"""Data models for polygenic risk score configuration and results."""

from dataclasses import dataclass, field
from typing import Any

KNOWN_CONFIG_FIELDS = ("name", "lower_cutoff", "upper_cutoff", "lower_is_better", "pgs_id", "sex")


@dataclass
class PRSConfig:
    """Represents one entry of ``prs_config.json`` ``prs_list``."""

    name: str
    lower_cutoff: float | None = None
    upper_cutoff: float | None = None
    lower_is_better: bool = False
    pgs_id: str | None = None
    sex: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PRSConfig":
        return cls(
            name=str(data.get("name", "")),
            lower_cutoff=data.get("lower_cutoff"),
            upper_cutoff=data.get("upper_cutoff"),
            lower_is_better=bool(data.get("lower_is_better", False)),
            pgs_id=data.get("pgs_id"),
            sex=data.get("sex"),
            extra={k: v for k, v in data.items() if k not in KNOWN_CONFIG_FIELDS},
        )

    @property
    def has_cutoffs(self) -> bool:
        return self.lower_cutoff is not None and self.upper_cutoff is not None


@dataclass
class PRSWeights:
    """Weight table of one PRS model: ``(effect_weight, effect_allele)`` per index."""

    weights: list[tuple[float, str]]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PRSWeights":
        return cls(weights=[(float(w), str(a)) for w, a in data.get("weights", [])])


@dataclass
class PRSResult:
    """Calculated score for one PRS model."""

    name: str
    score: float
    risk: str | float
    lower_cutoff: float | None = None
    upper_cutoff: float | None = None
    lower_is_better: bool = False
    pgs_id: str | None = None
    sex: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    @property
    def is_classified(self) -> bool:
        return isinstance(self.risk, str)

    def to_dict(self) -> dict[str, Any]:
        return {
            **self.extra,
            "name": self.name,
            "lower_cutoff": self.lower_cutoff,
            "upper_cutoff": self.upper_cutoff,
            "lower_is_better": self.lower_is_better,
            "pgs_id": self.pgs_id,
            "sex": self.sex,
            "score": self.score,
            "risk": self.risk,
        }
