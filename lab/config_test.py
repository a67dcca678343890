from __future__ import annotations

import json

import pytest

from textgraph.config import (
    EngineConfig,
    load_config,
    validate_engine_config,
    validate_ngram_config,
)
from textgraph.errors import ConfigError
from textgraph.ngram_builder import DistanceWeighting, NGramConfig, UniformWeighting, weighting_from_dict


def test_defaults():
    cfg = load_config(None)
    assert cfg == EngineConfig()
    assert cfg.ngram == NGramConfig()
    assert cfg.min_edge_weight == 1
    assert cfg.min_node_frequency == 1
    assert cfg.placeholder_style == "underscore"
    assert cfg.stopword_language is None


def test_partial_config_file(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({
        "windowSize": 3,
        "weighting": {"type": "distance", "baseValue": 1, "bonusRange": 1, "bonusValue": 2},
        "minEdgeWeight": 2,
        "somethingElse": True,
    }), encoding="utf-8")
    cfg = load_config(path)
    assert cfg.ngram.window_size == 3
    assert cfg.ngram.weighting == DistanceWeighting(1, 1, 2)
    assert cfg.ngram.sentence_boundaries == (".", "?", "!")
    assert cfg.min_edge_weight == 2
    assert cfg.min_node_frequency == 1


def test_invalid_json_is_a_config_error(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{windowSize: 3", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(path)


def test_non_object_config_is_rejected():
    with pytest.raises(ConfigError):
        EngineConfig.from_dict([1, 2, 3])


def test_malformed_weighting_is_rejected():
    with pytest.raises(ConfigError):
        EngineConfig.from_dict({"weighting": "uniform"})


def test_unknown_weighting_type_is_a_config_error():
    with pytest.raises(ConfigError, match="cubic"):
        weighting_from_dict({"type": "cubic"})
    with pytest.raises(ConfigError):
        EngineConfig.from_dict({"weighting": {"type": "cubic"}})


def test_to_json_is_compact_and_sorted():
    out = EngineConfig().to_json()
    assert " " not in out
    data = json.loads(out)
    assert list(data) == sorted(data)
    assert data["weighting"] == {"type": "uniform", "value": 1}
    assert EngineConfig.from_dict(data) == EngineConfig()


@pytest.mark.parametrize("window", [1, 0, -3, 2.5, True])
def test_window_size_must_be_integer_of_at_least_two(window):
    with pytest.raises(ConfigError):
        validate_ngram_config(NGramConfig(window_size=window))


@pytest.mark.parametrize("bonus_range", [0, 5, 7])
def test_bonus_range_must_fit_inside_the_window(bonus_range):
    cfg = NGramConfig(window_size=5, weighting=DistanceWeighting(1, bonus_range, 1))
    with pytest.raises(ConfigError):
        validate_ngram_config(cfg)


def test_valid_configs_pass():
    assert validate_ngram_config(NGramConfig(window_size=2)) == NGramConfig(window_size=2)
    validate_ngram_config(NGramConfig(window_size=5, weighting=DistanceWeighting(1, 4, 1)))
    validate_ngram_config(NGramConfig(weighting=UniformWeighting(0.5)))


def test_boundaries_must_be_single_characters():
    with pytest.raises(ConfigError):
        validate_ngram_config(NGramConfig(sentence_boundaries=("...",)))


def test_non_numeric_weights_are_rejected():
    with pytest.raises(ConfigError):
        validate_ngram_config(NGramConfig(weighting=UniformWeighting("1")))


def test_engine_validation_checks_placeholder_style():
    with pytest.raises(ConfigError):
        validate_engine_config(EngineConfig(placeholder_style="stars"))
    with pytest.raises(ConfigError):
        validate_engine_config(EngineConfig(min_edge_weight="high"))
    assert validate_engine_config(EngineConfig(placeholder_style="hidden")).placeholder_style == "hidden"
