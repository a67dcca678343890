from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Dict

import numpy as np

from textgraph.ngram_builder import GraphData

log = logging.getLogger("textgraph.graph_filter")


@dataclass(frozen=True)
class GraphStats:
    node_count: int
    edge_count: int
    max_node_frequency: int
    max_edge_weight: float
    avg_edge_weight: float

    def to_dict(self) -> Dict:
        return {
            "nodeCount": self.node_count,
            "edgeCount": self.edge_count,
            "maxNodeFrequency": self.max_node_frequency,
            "maxEdgeWeight": self.max_edge_weight,
            "avgEdgeWeight": self.avg_edge_weight,
        }


def filter_graph(graph: GraphData, min_edge_weight: float, min_node_frequency: int) -> GraphData:
    """
    Keep edges with weight >= min_edge_weight whose endpoints both have
    frequency >= min_node_frequency, then keep only the nodes those edges touch.
    The result never contains isolated nodes.
    """
    valid = {n.id for n in graph.nodes if n.frequency >= min_node_frequency}
    edges = tuple(
        e for e in graph.edges
        if e.weight >= min_edge_weight and e.source in valid and e.target in valid
    )
    used = set()
    for e in edges:
        used.add(e.source)
        used.add(e.target)
    nodes = tuple(n for n in graph.nodes if n.id in used)
    log.debug(
        "Filtered graph (min_edge_weight=%s, min_node_frequency=%s): %d/%d nodes, %d/%d edges",
        min_edge_weight, min_node_frequency, len(nodes), len(graph.nodes), len(edges), len(graph.edges),
    )
    return GraphData(nodes, edges)


def _round2(x: float) -> float:
    # half-up, not banker's rounding
    return math.floor(x * 100 + 0.5) / 100


def get_graph_stats(graph: GraphData) -> GraphStats:
    freqs = np.array([n.frequency for n in graph.nodes], dtype=float)
    weights = np.array([e.weight for e in graph.edges], dtype=float)
    max_freq = int(freqs.max()) if freqs.size else 0
    max_weight = float(weights.max()) if weights.size else 0.0
    avg_weight = float(weights.mean()) if weights.size else 0.0
    # defaults of 0 also apply when every value is negative
    return GraphStats(
        node_count=len(graph.nodes),
        edge_count=len(graph.edges),
        max_node_frequency=max(max_freq, 0),
        max_edge_weight=_number(max(max_weight, 0.0)),
        avg_edge_weight=_number(_round2(avg_weight)),
    )


def _number(x: float) -> float:
    """Integral floats come back as ints so JSON output reads 3, not 3.0."""
    return int(x) if float(x).is_integer() else x
