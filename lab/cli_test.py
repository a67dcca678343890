from __future__ import annotations

import json

import pytest

import textgraph_builder
from textgraph_builder import main

TEXT = "The cat sat. The dog ran. The cat ran!"


@pytest.fixture
def text_file(tmp_path):
    path = tmp_path / "input.txt"
    path.write_text(TEXT, encoding="utf-8")
    return path


@pytest.fixture
def stopword_file(tmp_path):
    path = tmp_path / "stopwords.txt"
    path.write_text("the\n", encoding="utf-8")
    return path


def test_graph_command_dumps_filtered_json(text_file, stopword_file, capsys):
    main(["graph", str(text_file), "--stopwords", str(stopword_file), "--window", "3", "--boundaries", ".!"])
    data = json.loads(capsys.readouterr().out)
    nodes = {n["id"]: n["frequency"] for n in data["nodes"]}
    assert nodes == {"cat": 2, "sat": 1, "dog": 1, "ran": 2}
    pairs = {(e["source"], e["target"]): e["weight"] for e in data["edges"]}
    assert pairs == {("cat", "sat"): 1, ("dog", "ran"): 1, ("cat", "ran"): 1}


def test_graph_command_applies_display_filters(text_file, stopword_file, tmp_path):
    out = tmp_path / "graph.json"
    main([
        "graph", str(text_file), "--stopwords", str(stopword_file),
        "--weighting", "distance", "--base-value", "1", "--bonus-range", "1", "--bonus-value", "2",
        "--min-edge-weight", "3", "--min-node-frequency", "2", "--out", str(out),
    ])
    data = json.loads(out.read_text(encoding="utf-8"))
    assert data["nodes"] == [
        {"id": "cat", "label": "cat", "frequency": 2},
        {"id": "ran", "label": "ran", "frequency": 2},
    ]
    assert data["edges"] == [{"source": "cat", "target": "ran", "weight": 3}]
    assert type(data["edges"][0]["weight"]) is int


def test_graph_command_reads_config_file(text_file, tmp_path, capsys):
    cfg = tmp_path / "config.json"
    cfg.write_text(json.dumps({"windowSize": 2, "sentenceBoundaries": [], "stopwordLanguage": "en"}), encoding="utf-8")
    main(["graph", str(text_file), "--config", str(cfg), "--raw"])
    data = json.loads(capsys.readouterr().out)
    pairs = {(e["source"], e["target"]) for e in data["edges"]}
    # no boundaries: the window runs across sentences
    assert ("dog", "sat") in pairs


def test_words_command(text_file, stopword_file, capsys):
    main(["words", str(text_file), "--stopwords", str(stopword_file), "--top", "2"])
    assert capsys.readouterr().out == "cat\t2\n.\t2\n"


def test_words_command_stopwords_only(text_file, stopword_file, capsys):
    main(["words", str(text_file), "--stopwords", str(stopword_file), "--stopwords-only"])
    assert capsys.readouterr().out == "The\t3\n"


def test_clean_command_download_mode(text_file, stopword_file, capsys):
    main(["clean", str(text_file), "--stopwords", str(stopword_file), "--download"])
    assert capsys.readouterr().out == "cat sat. dog ran. cat ran!\n"


def test_clean_command_placeholder(text_file, stopword_file, capsys):
    main(["clean", str(text_file), "--stopwords", str(stopword_file), "--placeholder", "dot"])
    assert capsys.readouterr().out == "··· cat sat. ··· dog ran. ··· cat ran!\n"


def test_stopwords_command_writes_file(text_file, tmp_path):
    out = tmp_path / "out.txt"
    main(["stopwords", "--text", str(text_file), "--lang", "en", "--out", str(out)])
    words = out.read_text(encoding="utf-8").splitlines()
    assert "The" in words
    assert "the" not in words
    assert words == sorted(words)


def test_stats_command(text_file, stopword_file, capsys):
    main(["stats", str(text_file), "--stopwords", str(stopword_file), "--window", "3"])
    report = json.loads(capsys.readouterr().out)
    assert report["text"] == {"totalWords": 12, "uniqueWords": 7, "hiddenWords": 3}
    assert report["graph"]["nodeCount"] == 4
    assert report["config"]["windowSize"] == 3


def test_invalid_window_exits_with_code_2(text_file):
    with pytest.raises(SystemExit) as exc:
        main(["graph", str(text_file), "--window", "1"])
    assert exc.value.code == 2


def test_missing_input_exits_with_code_2(tmp_path):
    with pytest.raises(SystemExit) as exc:
        main(["words", str(tmp_path / "missing.txt")])
    assert exc.value.code == 2


def test_read_text_ignores_undecodable_bytes(tmp_path):
    path = tmp_path / "latin.txt"
    path.write_bytes(b"caf\xe9 ok")
    assert textgraph_builder.read_text(path) == "caf ok"


def test_fractional_weight_flag_stays_fractional(text_file, stopword_file, capsys):
    main(["graph", str(text_file), "--stopwords", str(stopword_file), "--value", "0.5", "--raw"])
    data = json.loads(capsys.readouterr().out)
    assert [e["weight"] for e in data["edges"]] == [0.5, 0.5, 0.5]


def test_byte_order_mark_is_dropped_from_input(tmp_path, stopword_file, capsys):
    path = tmp_path / "bom.txt"
    path.write_text("The cat ran.", encoding="utf-8-sig")
    assert textgraph_builder.read_text(path) == "The cat ran."
    main(["clean", str(path), "--stopwords", str(stopword_file), "--download"])
    assert capsys.readouterr().out == "cat ran.\n"
