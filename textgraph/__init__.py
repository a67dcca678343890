"""Stopword-aware word frequencies and co-occurrence graphs from free text."""

from textgraph.config import EngineConfig, load_config
from textgraph.errors import ConfigError
from textgraph.frequencies import calculate_frequencies
from textgraph.graph_filter import filter_graph, get_graph_stats
from textgraph.ngram_builder import (
    DistanceWeighting,
    GraphData,
    GraphEdge,
    GraphNode,
    NGramConfig,
    UniformWeighting,
    build_cooccurrence_graph,
)
from textgraph.session import TextSession
from textgraph.stopwords import StopwordSet
from textgraph.text_export import generate_cleaned_text, generate_download_text
from textgraph.tokenizer import Token, tokenize_text

__all__ = [
    "ConfigError",
    "DistanceWeighting",
    "EngineConfig",
    "GraphData",
    "GraphEdge",
    "GraphNode",
    "NGramConfig",
    "StopwordSet",
    "TextSession",
    "Token",
    "UniformWeighting",
    "build_cooccurrence_graph",
    "calculate_frequencies",
    "filter_graph",
    "generate_cleaned_text",
    "generate_download_text",
    "get_graph_stats",
    "load_config",
    "tokenize_text",
]
