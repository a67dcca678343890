#!/usr/bin/env python3
"""
Interactive co-occurrence graph viewer.

Builds the graph for a text file, filters it with the display thresholds and
renders it with a force-directed (spring) layout: node size follows word
frequency, edge width follows co-occurrence weight. A search box selects and
centres a word.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Dict, List, Tuple

import networkx as nx
import numpy as np
from bokeh.io import output_file, save, show
from bokeh.layouts import column, row
from bokeh.models import Button, ColumnDataSource, CustomJS, Div, HoverTool, TextInput
from bokeh.plotting import figure

from textgraph.config import load_config, validate_engine_config
from textgraph.errors import ConfigError
from textgraph.ngram_builder import GraphData
from textgraph.session import TextSession
from textgraph.stopwords import StopwordSet, parse_stopword_file

log = logging.getLogger("textgraph.view")

NODE_PX = (8.0, 40.0)    # min/max node diameter
EDGE_PX = (0.5, 6.0)     # min/max edge width
LAYOUT_SEED = 42


# -----------------------
# Scaling
# -----------------------
def size_from_count(counts, min_px: float, max_px: float) -> np.ndarray:
    """Map counts to screen sizes on a sqrt scale; equal counts get the midpoint."""
    arr = np.array(counts, dtype=float)
    if arr.size == 0:
        return arr
    if arr.max() == arr.min():
        return np.full_like(arr, (min_px + max_px) * 0.5)
    s = (np.sqrt(arr) - np.sqrt(arr.min())) / (np.sqrt(arr.max()) - np.sqrt(arr.min()))
    return min_px + s * (max_px - min_px)


def width_from_weight(weights, min_px: float, max_px: float) -> np.ndarray:
    arr = np.array(weights, dtype=float)
    if arr.size == 0:
        return arr
    if arr.max() == arr.min():
        return np.full_like(arr, min_px)
    s = (arr - arr.min()) / (arr.max() - arr.min())
    return min_px + s * (max_px - min_px)


# -----------------------
# Layout
# -----------------------
def to_networkx(graph: GraphData) -> nx.Graph:
    G = nx.Graph()
    for n in graph.nodes:
        G.add_node(n.id, label=n.label, frequency=n.frequency)
    for e in graph.edges:
        G.add_edge(e.source, e.target, weight=e.weight)
    return G


def force_layout(graph: GraphData, seed: int = LAYOUT_SEED) -> Dict[str, Tuple[float, float]]:
    G = to_networkx(graph)
    if G.number_of_nodes() == 0:
        return {}
    # spring_layout pulls heavier edges closer
    k = 1.0 / np.sqrt(G.number_of_nodes())
    pos = nx.spring_layout(G, weight="weight", seed=seed, k=k)
    return {node: (float(xy[0]), float(xy[1])) for node, xy in pos.items()}


# -----------------------
# Plot
# -----------------------
def build_plot(graph: GraphData, title: str = "Co-occurrence graph"):
    pos = force_layout(graph)
    words = [n.id for n in graph.nodes]
    freqs = [n.frequency for n in graph.nodes]
    sizes = size_from_count(freqs, *NODE_PX)

    source = ColumnDataSource(data=dict(
        x=[pos[w][0] for w in words],
        y=[pos[w][1] for w in words],
        word=words,
        label=[n.label for n in graph.nodes],
        frequency=freqs,
        size=sizes,
    ))
    edge_source = ColumnDataSource(data=dict(
        xs=[[pos[e.source][0], pos[e.target][0]] for e in graph.edges],
        ys=[[pos[e.source][1], pos[e.target][1]] for e in graph.edges],
        source=[e.source for e in graph.edges],
        target=[e.target for e in graph.edges],
        weight=[e.weight for e in graph.edges],
        width=width_from_weight([e.weight for e in graph.edges], *EDGE_PX),
    ))

    TOOLS = "pan,wheel_zoom,reset,save,tap,box_zoom"
    p = figure(
        title=f"{title} (nodes={len(graph.nodes)}, edges={len(graph.edges)})",
        tools=TOOLS,
        active_scroll="wheel_zoom",
        match_aspect=True,
        sizing_mode="stretch_both",
    )

    r_edges = p.multi_line(
        xs="xs", ys="ys",
        line_width="width",
        line_color="#8a9a91",
        line_alpha=0.6,
        source=edge_source,
    )
    r_nodes = p.scatter(
        x="x", y="y",
        marker="circle",
        size="size",
        fill_color="#2f7d5b",
        fill_alpha=0.85,
        line_color="#0f3d2a",
        source=source,
    )
    p.text(
        x="x", y="y",
        text="label",
        source=source,
        text_align="center",
        text_baseline="bottom",
        y_offset=-8,
        text_font_size="9pt",
        text_color="#1b1b1b",
    )

    p.add_tools(HoverTool(tooltips=[("word", "@label"), ("frequency", "@frequency")], renderers=[r_nodes]))
    p.add_tools(HoverTool(tooltips=[("pair", "@source – @target"), ("weight", "@weight")], renderers=[r_edges]))

    p.grid.visible = False
    p.axis.visible = False
    p.outline_line_color = None
    p.min_border = 0

    # --- Search controls
    search_input = TextInput(title="Search word (exact, case-insensitive):", placeholder="e.g., summer")
    search_btn = Button(label="Find", button_type="primary")
    status = Div(text="")
    search_cb = CustomJS(args=dict(src=source, p=p, ti=search_input, status=status), code="""
const q = (ti.value || "").trim().toLowerCase();
if (!q) { return; }
const words = src.data['word'];
const idx = words.indexOf(q);
if (idx === -1) {
    status.text = `Not found: “${q}”`;
    return;
}
status.text = "";
src.selected.indices = [idx];
src.change.emit();
const xr = p.x_range, yr = p.y_range;
const x = src.data['x'][idx];
const y = src.data['y'][idx];
const newW = (xr.end - xr.start) * 0.30;
const newH = (yr.end - yr.start) * 0.30;
xr.start = x - newW / 2; xr.end = x + newW / 2;
yr.start = y - newH / 2; yr.end = y + newH / 2;
""")
    search_btn.js_on_event("button_click", search_cb)

    controls = row(search_input, search_btn, status, sizing_mode="stretch_width")
    return column(controls, p, sizing_mode="stretch_both")


# -----------------------
# Main
# -----------------------
def _parse_args(argv: List[str]) -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="Render a text's co-occurrence graph")
    ap.add_argument("text", help="Path to input text")
    ap.add_argument("--config", default=None, help="Optional JSON config file")
    ap.add_argument("--stopwords", default=None, help="Stopword file (one word per line)")
    ap.add_argument("--lang", choices=["en", "de"], default=None, help="Merge a standard stopword list")
    ap.add_argument("--out", default=None, help="Write HTML here instead of opening a browser")
    return ap.parse_args(argv)


def main(argv: List[str] | None = None) -> None:
    ns = _parse_args(sys.argv[1:] if argv is None else argv)
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
    try:
        cfg = validate_engine_config(load_config(ns.config))
    except ConfigError as e:
        log.error("Invalid configuration: %s", e)
        raise SystemExit(2) from e

    stopwords = StopwordSet()
    if ns.stopwords:
        stopwords = parse_stopword_file(Path(ns.stopwords).read_text(encoding="utf-8-sig", errors="ignore"))
    session = TextSession(cfg, stopwords=stopwords)
    if ns.lang:
        session.load_standard_stopwords(ns.lang)
    session.set_text(Path(ns.text).read_text(encoding="utf-8-sig", errors="ignore"))
    session.build_graph()
    graph = session.displayed_graph()
    log.info("Rendering %d nodes, %d edges", len(graph.nodes), len(graph.edges))

    plot = build_plot(graph, title=Path(ns.text).name)
    if ns.out:
        output_file(ns.out, title="Co-occurrence graph")
        save(plot)
        log.info("Wrote %s", ns.out)
    else:
        show(plot)


if __name__ == "__main__":
    main()
