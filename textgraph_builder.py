#!/usr/bin/env python3
"""
textgraph — stopword-aware word lists and co-occurrence graphs

Pipeline:
- Tokenize text into words / punctuation / whitespace, flagged against a stopword set
- Word frequencies (content words and stopwords ranked separately)
- Co-occurrence graph over content words within a sliding n-gram window,
  reset at sentence boundaries, uniform or distance-stepped edge weights
- Display filtering (min edge weight / min node frequency, no isolated nodes)
- Cleaned text export (placeholder glyphs or stopwords removed)

CLI:
- words <text> [--stopwords FILE] [--lang en|de] [--top N] [--stopwords-only]
- graph <text> [--config config.json] [--raw] [--out graph.json]
- clean <text> [--placeholder STYLE | --download] [--out FILE]
- stopwords [--text FILE] --out stopwords.txt
- stats <text>

This module does not render the graph; see textgraph_view.py.
"""

from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import sys
from pathlib import Path
from typing import List

from textgraph.config import EngineConfig, load_config, validate_engine_config
from textgraph.errors import ConfigError
from textgraph.ngram_builder import DistanceWeighting, NGramConfig, UniformWeighting
from textgraph.session import TextSession
from textgraph.stopwords import StopwordSet, parse_stopword_file
from textgraph.text_export import PLACEHOLDER_CHARS

log = logging.getLogger("textgraph")


# -----------------------
# Inputs
# -----------------------
def read_text(path: str | Path) -> str:
    return Path(path).read_text(encoding="utf-8-sig", errors="ignore")


def _write_output(content: str, out: str | None) -> None:
    if out:
        out_path = Path(out)
        out_path.write_text(content, encoding="utf-8")
        log.info("Wrote %s (%d chars)", out_path, len(content))
    else:
        sys.stdout.write(content)
        if content and not content.endswith("\n"):
            sys.stdout.write("\n")


def _apply_overrides(cfg: EngineConfig, ns: argparse.Namespace) -> EngineConfig:
    """CLI flags win over config-file values."""
    ngram = cfg.ngram
    if getattr(ns, "window", None) is not None:
        ngram = dataclasses.replace(ngram, window_size=ns.window)

    kind = getattr(ns, "weighting", None)
    if kind == "uniform" or (kind is None and isinstance(ngram.weighting, UniformWeighting)):
        current = ngram.weighting if isinstance(ngram.weighting, UniformWeighting) else UniformWeighting()
        value = ns.value if getattr(ns, "value", None) is not None else current.value
        ngram = dataclasses.replace(ngram, weighting=UniformWeighting(value=value))
    elif kind == "distance" or (kind is None and isinstance(ngram.weighting, DistanceWeighting)):
        current = ngram.weighting if isinstance(ngram.weighting, DistanceWeighting) else DistanceWeighting()
        ngram = dataclasses.replace(
            ngram,
            weighting=DistanceWeighting(
                base_value=_pick(ns, "base_value", current.base_value),
                bonus_range=_pick(ns, "bonus_range", current.bonus_range),
                bonus_value=_pick(ns, "bonus_value", current.bonus_value),
            ),
        )

    if getattr(ns, "boundaries", None) is not None:
        ngram = dataclasses.replace(ngram, sentence_boundaries=tuple(ns.boundaries))

    return dataclasses.replace(
        cfg,
        ngram=ngram,
        min_edge_weight=_pick(ns, "min_edge_weight", cfg.min_edge_weight),
        min_node_frequency=_pick(ns, "min_node_frequency", cfg.min_node_frequency),
        placeholder_style=_pick(ns, "placeholder", cfg.placeholder_style),
        stopword_language=_pick(ns, "lang", cfg.stopword_language),
    )


def _pick(ns: argparse.Namespace, name: str, default):
    v = getattr(ns, name, None)
    return default if v is None else v


def _weight_arg(s: str) -> float:
    """Numeric flag; whole numbers stay ints so JSON output matches config-file values."""
    v = float(s)
    return int(v) if v.is_integer() else v


def load_session(ns: argparse.Namespace) -> TextSession:
    cfg = validate_engine_config(_apply_overrides(load_config(getattr(ns, "config", None)), ns))
    stopwords = StopwordSet()
    if getattr(ns, "stopwords", None):
        stopwords = parse_stopword_file(read_text(ns.stopwords))
        log.info("Loaded %d stopwords from %s", len(stopwords), ns.stopwords)
    session = TextSession(cfg, stopwords=stopwords)
    text_path = getattr(ns, "text", None)
    if text_path:
        session.set_text(read_text(text_path))
    return session


# -----------------------
# Commands
# -----------------------
def cmd_words(ns: argparse.Namespace) -> None:
    session = load_session(ns)
    items = session.stopword_list() if ns.stopwords_only else session.visible_words()
    if ns.top is not None:
        items = items[: ns.top]
    _write_output("".join(f"{wc.word}\t{wc.count}\n" for wc in items), ns.out)


def cmd_graph(ns: argparse.Namespace) -> None:
    session = load_session(ns)
    session.build_graph()
    graph = session.graph if ns.raw else session.displayed_graph()
    stats = session.graph_stats(displayed=not ns.raw)
    log.info(
        "Graph: %d nodes, %d edges (max frequency %s, max weight %s, avg weight %s)",
        stats.node_count, stats.edge_count, stats.max_node_frequency, stats.max_edge_weight, stats.avg_edge_weight,
    )
    _write_output(graph.to_json(), ns.out)


def cmd_clean(ns: argparse.Namespace) -> None:
    session = load_session(ns)
    content = session.download_text() if ns.download else session.cleaned_text()
    _write_output(content, ns.out)


def cmd_stopwords(ns: argparse.Namespace) -> None:
    session = load_session(ns)
    _write_output(session.stopword_file(), ns.out)


def cmd_stats(ns: argparse.Namespace) -> None:
    session = load_session(ns)
    session.build_graph()
    report = {
        "text": session.stats().to_dict(),
        "graph": session.graph_stats(displayed=False).to_dict(),
        "displayedGraph": session.graph_stats(displayed=True).to_dict(),
        "config": json.loads(session.config.to_json()),
    }
    _write_output(json.dumps(report, indent=2, ensure_ascii=False), ns.out)


# -----------------------
# CLI
# -----------------------
def _add_stopword_args(ap: argparse.ArgumentParser) -> None:
    ap.add_argument("--stopwords", default=None, help="Stopword file (one word per line)")
    ap.add_argument("--lang", choices=["en", "de"], default=None, help="Merge a standard stopword list")
    ap.add_argument("--config", default=None, help="Optional JSON config file")
    ap.add_argument("--out", default=None, help="Write to this file instead of stdout")


def _add_graph_args(ap: argparse.ArgumentParser) -> None:
    ap.add_argument("--window", type=int, default=None, help="Window size (default from config: 5)")
    ap.add_argument("--weighting", choices=["uniform", "distance"], default=None, help="Edge weighting policy")
    ap.add_argument("--value", type=_weight_arg, default=None, help="Uniform weight per co-occurrence")
    ap.add_argument("--base-value", type=_weight_arg, default=None, help="Distance weighting: base weight")
    ap.add_argument("--bonus-range", type=int, default=None, help="Distance weighting: max distance earning the bonus")
    ap.add_argument("--bonus-value", type=_weight_arg, default=None, help="Distance weighting: bonus weight")
    ap.add_argument("--boundaries", default=None, help="Sentence boundary glyphs, e.g. '.?!'")
    ap.add_argument("--min-edge-weight", type=_weight_arg, default=None, help="Display filter (default from config: 1)")
    ap.add_argument("--min-node-frequency", type=int, default=None, help="Display filter (default from config: 1)")


def _parse_args(argv: List[str]) -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="Stopword-aware word lists and co-occurrence graphs")
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = ap.add_subparsers(dest="cmd", required=True)

    ap_w = sub.add_parser("words", help="Ranked word frequencies")
    ap_w.add_argument("text", help="Path to input text")
    _add_stopword_args(ap_w)
    ap_w.add_argument("--top", type=int, default=None, help="Only the N most frequent words")
    ap_w.add_argument("--stopwords-only", action="store_true", help="List stopwords instead of content words")
    ap_w.set_defaults(func=cmd_words)

    ap_g = sub.add_parser("graph", help="Build the co-occurrence graph and dump it as JSON")
    ap_g.add_argument("text", help="Path to input text")
    _add_stopword_args(ap_g)
    _add_graph_args(ap_g)
    ap_g.add_argument("--raw", action="store_true", help="Skip the display filters")
    ap_g.set_defaults(func=cmd_graph)

    ap_c = sub.add_parser("clean", help="Text with stopwords masked or removed")
    ap_c.add_argument("text", help="Path to input text")
    _add_stopword_args(ap_c)
    mode = ap_c.add_mutually_exclusive_group()
    mode.add_argument("--placeholder", choices=sorted(PLACEHOLDER_CHARS), default=None, help="Placeholder style")
    mode.add_argument("--download", action="store_true", help="Remove stopwords entirely")
    ap_c.set_defaults(func=cmd_clean)

    ap_s = sub.add_parser("stopwords", help="Write the stopword list")
    ap_s.add_argument("--text", default=None, help="Optional text; stopwords found in it keep their original casing")
    _add_stopword_args(ap_s)
    ap_s.set_defaults(func=cmd_stopwords)

    ap_t = sub.add_parser("stats", help="Text and graph statistics as JSON")
    ap_t.add_argument("text", help="Path to input text")
    _add_stopword_args(ap_t)
    _add_graph_args(ap_t)
    ap_t.set_defaults(func=cmd_stats)

    return ap.parse_args(argv)


def main(argv: List[str] | None = None) -> None:
    ns = _parse_args(sys.argv[1:] if argv is None else argv)
    logging.basicConfig(
        level=logging.DEBUG if ns.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(message)s",
    )
    try:
        ns.func(ns)
    except ConfigError as e:
        log.error("Invalid configuration: %s", e)
        raise SystemExit(2) from e
    except OSError as e:
        log.error("Cannot read or write %s: %s", getattr(e, "filename", None) or "file", e)
        raise SystemExit(2) from e


if __name__ == "__main__":
    main()
