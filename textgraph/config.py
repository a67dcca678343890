from __future__ import annotations

import dataclasses
import json
import logging
from pathlib import Path
from typing import Dict, Mapping, Optional

from textgraph.errors import ConfigError
from textgraph.ngram_builder import DistanceWeighting, NGramConfig, UniformWeighting
from textgraph.text_export import placeholder_for

log = logging.getLogger("textgraph.config")


@dataclasses.dataclass(frozen=True)
class EngineConfig:
    ngram: NGramConfig = dataclasses.field(default_factory=NGramConfig)
    # display-time filters, applied after the graph is built
    min_edge_weight: float = 1
    min_node_frequency: int = 1
    placeholder_style: str = "underscore"
    stopword_language: Optional[str] = None

    def to_dict(self) -> Dict:
        out = self.ngram.to_dict()
        out.update(
            {
                "minEdgeWeight": self.min_edge_weight,
                "minNodeFrequency": self.min_node_frequency,
                "placeholderStyle": self.placeholder_style,
                "stopwordLanguage": self.stopword_language,
            }
        )
        return out

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), sort_keys=True, separators=(",", ":"), ensure_ascii=False)

    @classmethod
    def from_dict(cls, data: Mapping) -> "EngineConfig":
        """Partial configs are fine; unknown keys are ignored."""
        if not isinstance(data, Mapping):
            raise ConfigError(f"Config must be a JSON object, got {type(data).__name__}")
        base = cls()
        try:
            ngram = NGramConfig.from_dict(data)
        except (TypeError, AttributeError) as e:
            raise ConfigError(f"Malformed n-gram options: {e}") from e
        return cls(
            ngram=ngram,
            min_edge_weight=data.get("minEdgeWeight", base.min_edge_weight),
            min_node_frequency=data.get("minNodeFrequency", base.min_node_frequency),
            placeholder_style=data.get("placeholderStyle", base.placeholder_style),
            stopword_language=data.get("stopwordLanguage", base.stopword_language),
        )


def load_config(path: str | Path | None) -> EngineConfig:
    if not path:
        return EngineConfig()
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Config {path} is not valid JSON: {e}") from e
    cfg = EngineConfig.from_dict(data)
    log.info("Loaded config from %s: %s", path, cfg.to_json())
    return cfg


def validate_ngram_config(cfg: NGramConfig) -> NGramConfig:
    """
    Caller-side check of the builder's preconditions.

    The builder itself accepts anything; out-of-range values are a contract
    violation of whoever calls it, so entry points run this first.
    """
    ws = cfg.window_size
    if isinstance(ws, bool) or not isinstance(ws, int) or ws < 2:
        raise ConfigError(f"windowSize must be an integer >= 2, got {ws!r}")
    w = cfg.weighting
    if isinstance(w, DistanceWeighting):
        if not isinstance(w.bonus_range, int) or not 1 <= w.bonus_range <= ws - 1:
            raise ConfigError(f"bonusRange must be within [1, {ws - 1}], got {w.bonus_range!r}")
        for name in ("base_value", "bonus_value"):
            if not _is_number(getattr(w, name)):
                raise ConfigError(f"{name} must be a number, got {getattr(w, name)!r}")
    elif isinstance(w, UniformWeighting):
        if not _is_number(w.value):
            raise ConfigError(f"value must be a number, got {w.value!r}")
    else:
        raise ConfigError(f"Unsupported weighting: {w!r}")
    for b in cfg.sentence_boundaries:
        if not isinstance(b, str) or len(b) != 1:
            raise ConfigError(f"sentence boundaries must be single characters, got {b!r}")
    return cfg


def validate_engine_config(cfg: EngineConfig) -> EngineConfig:
    validate_ngram_config(cfg.ngram)
    if not _is_number(cfg.min_edge_weight):
        raise ConfigError(f"minEdgeWeight must be a number, got {cfg.min_edge_weight!r}")
    if not _is_number(cfg.min_node_frequency):
        raise ConfigError(f"minNodeFrequency must be a number, got {cfg.min_node_frequency!r}")
    placeholder_for(cfg.placeholder_style)
    return cfg


def _is_number(x) -> bool:
    return isinstance(x, (int, float)) and not isinstance(x, bool)
