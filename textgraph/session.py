from __future__ import annotations

import logging
from typing import Dict, List, Optional, Tuple

from textgraph.config import EngineConfig, validate_ngram_config
from textgraph.frequencies import (
    FrequencyEntry,
    TextStats,
    WordCount,
    calculate_frequencies,
    stopword_list,
    text_stats,
    visible_word_frequencies,
)
from textgraph.graph_filter import GraphStats, filter_graph, get_graph_stats
from textgraph.ngram_builder import GraphData, NGramConfig, build_cooccurrence_graph
from textgraph.stopwords import StopwordSet, format_stopword_file, normalize_word
from textgraph.text_export import generate_cleaned_text, generate_download_text, placeholder_for
from textgraph.tokenizer import Token, tokenize_text

log = logging.getLogger("textgraph.session")


class TextSession:
    """
    Raw text plus the current stopword snapshot.

    Tokens and everything derived from them are recomputed whenever the text or
    the stopwords change. The co-occurrence graph is only rebuilt on an explicit
    build_graph() call; displayed_graph() re-filters the last build.
    """

    def __init__(self, config: Optional[EngineConfig] = None, text: str = "", stopwords: Optional[StopwordSet] = None):
        self.config = config or EngineConfig()
        self._text = text
        self._stopwords = stopwords if stopwords is not None else StopwordSet()
        if self.config.stopword_language:
            self._stopwords = self._stopwords.with_standard(self.config.stopword_language)
        self._cache_key: Optional[Tuple[str, StopwordSet]] = None
        self._tokens: List[Token] = []
        self._freqs: Dict[str, FrequencyEntry] = {}
        self.graph = GraphData()

    # -----------------------
    # Inputs
    # -----------------------
    @property
    def text(self) -> str:
        return self._text

    def set_text(self, text: str) -> None:
        """Load new text; the previously built graph no longer applies and is dropped."""
        self._text = text
        self.graph = GraphData()
        log.info("Loaded text (%d chars)", len(text))

    @property
    def stopwords(self) -> StopwordSet:
        return self._stopwords

    def set_stopwords(self, stopwords: StopwordSet) -> None:
        self._stopwords = stopwords

    def add_stopword(self, word: str) -> None:
        self._stopwords = self._stopwords.with_added(word)

    def remove_stopword(self, word: str) -> None:
        self._stopwords = self._stopwords.with_removed(word)

    def toggle_stopword(self, word: str) -> bool:
        """Flip `word`'s status; returns True if it is now a stopword."""
        if normalize_word(word) in self._stopwords:
            self.remove_stopword(word)
            return False
        self.add_stopword(word)
        return True

    def clear_stopwords(self) -> None:
        self._stopwords = self._stopwords.cleared()

    def load_standard_stopwords(self, language: str) -> None:
        self._stopwords = self._stopwords.with_standard(language)

    def reset(self) -> None:
        self._text = ""
        self._stopwords = StopwordSet()
        self.graph = GraphData()

    # -----------------------
    # Derived
    # -----------------------
    def _refresh(self) -> None:
        key = (self._text, self._stopwords)
        if key == self._cache_key:
            return
        self._tokens = tokenize_text(self._text, self._stopwords)
        self._freqs = calculate_frequencies(self._tokens)
        self._cache_key = key
        log.debug("Re-tokenized: %d tokens, %d distinct keys", len(self._tokens), len(self._freqs))

    @property
    def tokens(self) -> List[Token]:
        self._refresh()
        return self._tokens

    @property
    def word_frequencies(self) -> Dict[str, FrequencyEntry]:
        self._refresh()
        return self._freqs

    def visible_words(self) -> List[WordCount]:
        return visible_word_frequencies(self.word_frequencies)

    def stopword_list(self) -> List[WordCount]:
        return stopword_list(self.word_frequencies, self._stopwords)

    def stats(self) -> TextStats:
        return text_stats(self.tokens, self.word_frequencies)

    # -----------------------
    # Graph
    # -----------------------
    def build_graph(self, ngram: Optional[NGramConfig] = None) -> GraphData:
        cfg = validate_ngram_config(ngram or self.config.ngram)
        self.graph = build_cooccurrence_graph(self.tokens, cfg)
        return self.graph

    def displayed_graph(self, min_edge_weight: Optional[float] = None, min_node_frequency: Optional[int] = None) -> GraphData:
        if min_edge_weight is None:
            min_edge_weight = self.config.min_edge_weight
        if min_node_frequency is None:
            min_node_frequency = self.config.min_node_frequency
        return filter_graph(self.graph, min_edge_weight, min_node_frequency)

    def graph_stats(self, displayed: bool = True) -> GraphStats:
        return get_graph_stats(self.displayed_graph() if displayed else self.graph)

    # -----------------------
    # Exports
    # -----------------------
    def cleaned_text(self, style: Optional[str] = None) -> str:
        return generate_cleaned_text(self.tokens, placeholder_for(style or self.config.placeholder_style))

    def download_text(self) -> str:
        return generate_download_text(self.tokens)

    def stopword_file(self) -> str:
        return format_stopword_file(wc.word for wc in self.stopword_list())
