from __future__ import annotations

import json
import logging
from collections import defaultdict, deque
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Sequence, Tuple, Union

from textgraph.errors import ConfigError
from textgraph.tokenizer import PUNCTUATION, WHITESPACE, WORD, Token

log = logging.getLogger("textgraph.ngram")


# -----------------------
# Graph data
# -----------------------
@dataclass(frozen=True)
class GraphNode:
    id: str
    label: str
    frequency: int

    def to_dict(self) -> Dict:
        return {"id": self.id, "label": self.label, "frequency": self.frequency}


@dataclass(frozen=True)
class GraphEdge:
    source: str
    target: str
    weight: float

    @property
    def key(self) -> Tuple[str, str]:
        return edge_key(self.source, self.target)

    def to_dict(self) -> Dict:
        return {"source": self.source, "target": self.target, "weight": self.weight}


@dataclass(frozen=True)
class GraphData:
    nodes: Tuple[GraphNode, ...] = ()
    edges: Tuple[GraphEdge, ...] = ()

    def to_dict(self) -> Dict:
        return {
            "nodes": [n.to_dict() for n in self.nodes],
            "edges": [e.to_dict() for e in self.edges],
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2, ensure_ascii=False)

    @classmethod
    def from_dict(cls, data: Mapping) -> "GraphData":
        nodes = tuple(
            GraphNode(str(n["id"]), str(n.get("label", n["id"])), int(n["frequency"]))
            for n in data.get("nodes", [])
        )
        edges = tuple(
            GraphEdge(str(e["source"]), str(e["target"]), e["weight"])
            for e in data.get("edges", [])
        )
        return cls(nodes, edges)

    def node_ids(self) -> List[str]:
        return [n.id for n in self.nodes]

    def edge_weight(self, a: str, b: str) -> float:
        """Weight between two words in either order; 0 if they are not connected."""
        k = edge_key(a, b)
        for e in self.edges:
            if e.key == k:
                return e.weight
        return 0


def edge_key(a: str, b: str) -> Tuple[str, str]:
    return (a, b) if a <= b else (b, a)


# -----------------------
# Weighting policies
# -----------------------
@dataclass(frozen=True)
class UniformWeighting:
    value: float = 1

    type = "uniform"

    def weight(self, distance: int) -> float:
        return self.value

    def to_dict(self) -> Dict:
        return {"type": self.type, "value": self.value}


@dataclass(frozen=True)
class DistanceWeighting:
    """Step function: base_value for every pair, plus bonus_value when distance <= bonus_range."""

    base_value: float = 1
    bonus_range: int = 1
    bonus_value: float = 1

    type = "distance"

    def weight(self, distance: int) -> float:
        if distance <= self.bonus_range:
            return self.base_value + self.bonus_value
        return self.base_value

    def to_dict(self) -> Dict:
        return {
            "type": self.type,
            "baseValue": self.base_value,
            "bonusRange": self.bonus_range,
            "bonusValue": self.bonus_value,
        }


EdgeWeighting = Union[UniformWeighting, DistanceWeighting]


def weighting_from_dict(data: Mapping) -> EdgeWeighting:
    kind = data.get("type", "uniform")
    if kind == "uniform":
        return UniformWeighting(value=data.get("value", 1))
    if kind == "distance":
        return DistanceWeighting(
            base_value=data.get("baseValue", 1),
            bonus_range=data.get("bonusRange", 1),
            bonus_value=data.get("bonusValue", 1),
        )
    raise ConfigError(f"Unknown weighting type: {kind!r}")


# -----------------------
# Config
# -----------------------
@dataclass(frozen=True)
class NGramConfig:
    window_size: int = 5
    weighting: EdgeWeighting = field(default_factory=UniformWeighting)
    sentence_boundaries: Tuple[str, ...] = (".", "?", "!")

    def to_dict(self) -> Dict:
        return {
            "windowSize": self.window_size,
            "weighting": self.weighting.to_dict(),
            "sentenceBoundaries": list(self.sentence_boundaries),
        }

    @classmethod
    def from_dict(cls, data: Mapping) -> "NGramConfig":
        """Build from the external option names; missing keys keep their defaults."""
        base = cls()
        weighting = base.weighting
        if "weighting" in data:
            weighting = weighting_from_dict(data["weighting"])
        boundaries = base.sentence_boundaries
        if "sentenceBoundaries" in data:
            boundaries = tuple(data["sentenceBoundaries"])
        return cls(
            window_size=data.get("windowSize", base.window_size),
            weighting=weighting,
            sentence_boundaries=boundaries,
        )


# -----------------------
# Builder
# -----------------------
BOUNDARY = None  # marker in the content stream


def extract_content_units(tokens: Iterable[Token], sentence_boundaries: Iterable[str]) -> List[str | None]:
    """
    Reduce tokens to content words (normalized) and boundary markers (None).

    Whitespace and stopwords are dropped; punctuation survives only when its
    glyph is a configured sentence boundary.
    """
    boundaries = set(sentence_boundaries)
    units: List[str | None] = []
    for tok in tokens:
        if tok.type == WHITESPACE or tok.is_stopword:
            continue
        if tok.type == PUNCTUATION:
            if tok.text in boundaries:
                units.append(BOUNDARY)
            continue
        if tok.type == WORD:
            units.append(tok.normalized_text)
    return units


class CooccurrenceGraphBuilder:
    """Sliding-window co-occurrence graph over content words, reset at sentence boundaries."""

    def __init__(self, cfg: NGramConfig):
        self.cfg = cfg

    def build(self, tokens: Sequence[Token]) -> GraphData:
        cfg = self.cfg
        units = extract_content_units(tokens, cfg.sentence_boundaries)

        frequencies: Dict[str, int] = defaultdict(int)
        weights: Dict[Tuple[str, str], float] = defaultdict(int)

        window: deque[str] = deque([], maxlen=cfg.window_size)
        for word in units:
            if word is BOUNDARY:
                window.clear()
                continue
            frequencies[word] += 1
            window.append(word)
            last = len(window) - 1
            for i in range(last):
                other = window[i]
                if other == word:
                    continue
                # 1 for the immediately preceding word
                distance = last - i
                weights[edge_key(word, other)] += cfg.weighting.weight(distance)

        nodes = tuple(GraphNode(w, w, f) for w, f in frequencies.items())
        edges = tuple(GraphEdge(a, b, wt) for (a, b), wt in weights.items() if wt != 0)
        log.info(
            "Built co-occurrence graph: %d nodes, %d edges (window=%d, weighting=%s)",
            len(nodes), len(edges), cfg.window_size, cfg.weighting.type,
        )
        return GraphData(nodes, edges)


def build_cooccurrence_graph(tokens: Sequence[Token], config: NGramConfig | None = None) -> GraphData:
    return CooccurrenceGraphBuilder(config or NGramConfig()).build(tokens)
