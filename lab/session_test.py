from __future__ import annotations

import pytest

from textgraph.config import EngineConfig
from textgraph.errors import ConfigError
from textgraph.frequencies import WordCount
from textgraph.ngram_builder import DistanceWeighting, GraphData, NGramConfig
from textgraph.session import TextSession
from textgraph.stopwords import StopwordSet

LINES = "Sun and moon. Sun and sea. Moon and sun and stars."


def _session(**cfg) -> TextSession:
    return TextSession(EngineConfig(**cfg), text=LINES)


def test_tokens_follow_stopword_changes():
    s = _session()
    assert not any(t.is_stopword for t in s.tokens)
    s.add_stopword("AND")
    assert [t.text for t in s.tokens if t.is_stopword] == ["and"] * 4
    s.remove_stopword("and")
    assert not any(t.is_stopword for t in s.tokens)


def test_tokens_are_memoized_per_text_and_stopwords():
    s = _session()
    first = s.tokens
    assert s.tokens is first
    s.add_stopword("sun")
    assert s.tokens is not first


def test_graph_is_only_rebuilt_on_request():
    s = _session(ngram=NGramConfig(window_size=2))
    assert s.graph == GraphData()
    built = s.build_graph()
    assert "and" in built.node_ids()
    s.add_stopword("and")
    assert s.graph is built
    rebuilt = s.build_graph()
    assert "and" not in rebuilt.node_ids()


def test_new_text_drops_the_built_graph():
    s = _session()
    s.build_graph()
    s.set_text("Other words entirely.")
    assert s.graph == GraphData()
    assert s.text == "Other words entirely."


def test_displayed_graph_uses_config_thresholds_by_default():
    s = _session(ngram=NGramConfig(window_size=2), min_edge_weight=2)
    s.add_stopword("and")
    s.build_graph()
    shown = s.displayed_graph()
    assert {e.key for e in shown.edges} == {("moon", "sun")}
    assert s.displayed_graph(min_edge_weight=1).edges != shown.edges
    assert s.graph_stats(displayed=True).edge_count == 1


def test_build_validates_the_window_config():
    s = _session()
    with pytest.raises(ConfigError):
        s.build_graph(NGramConfig(window_size=3, weighting=DistanceWeighting(1, 3, 1)))


def test_word_lists_and_stats():
    s = _session()
    s.set_stopwords(StopwordSet(["and", "the"]))
    assert s.visible_words()[0] == WordCount("Sun", 3)
    assert s.stopword_list() == [WordCount("and", 4), WordCount("the", 0)]
    stats = s.stats()
    assert stats.hidden_words == 4
    assert stats.total_words == 14


def test_toggle_stopword():
    s = _session()
    assert s.toggle_stopword("Moon") is True
    assert "moon" in s.stopwords
    assert s.toggle_stopword("moon") is False
    assert "moon" not in s.stopwords


def test_exports():
    s = TextSession(text="a big dog", stopwords=StopwordSet(["a"]))
    assert s.download_text() == "big dog"
    assert s.cleaned_text() == "_ big dog"
    assert s.cleaned_text("hidden") == " big dog"
    assert s.stopword_file() == "a"


def test_config_language_preloads_standard_stopwords():
    s = TextSession(EngineConfig(stopword_language="en"), text="The whale and the sea")
    assert [wc.word for wc in s.visible_words()] == ["whale", "sea"]


def test_reset_clears_everything():
    s = _session()
    s.add_stopword("and")
    s.build_graph()
    s.reset()
    assert s.text == ""
    assert len(s.stopwords) == 0
    assert s.tokens == []
    assert s.graph == GraphData()


def test_clear_and_standard_stopwords():
    s = _session()
    s.load_standard_stopwords("en")
    assert "and" in s.stopwords
    s.clear_stopwords()
    assert len(s.stopwords) == 0
