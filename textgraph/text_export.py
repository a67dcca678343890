from __future__ import annotations

from typing import Dict, Iterable, List

from textgraph.errors import ConfigError
from textgraph.tokenizer import EDGE_WHITESPACE_RE, WHITESPACE, Token

PLACEHOLDER_CHARS: Dict[str, str] = {
    "underscore": "_",
    "dot": "·",
    "dash": "—",
    "hidden": "",
}


def placeholder_for(style: str) -> str:
    try:
        return PLACEHOLDER_CHARS[style]
    except KeyError:
        raise ConfigError(
            f"Unknown placeholder style {style!r} (expected one of {', '.join(PLACEHOLDER_CHARS)})"
        ) from None


def generate_cleaned_text(tokens: Iterable[Token], placeholder: str) -> str:
    """Original layout with every stopword character replaced by `placeholder` ('' drops it)."""
    return "".join(placeholder * len(t.text) if t.is_stopword else t.text for t in tokens)


def generate_download_text(tokens: Iterable[Token]) -> str:
    """
    Text with stopwords removed.

    Whitespace following a removed stopword collapses to at most one space, and
    only if the output does not already end in a space or newline.
    """
    parts: List[str] = []
    last_was_stopword = False
    for tok in tokens:
        if tok.is_stopword:
            last_was_stopword = True
            continue
        if tok.type == WHITESPACE:
            if not last_was_stopword or not parts:
                parts.append(tok.text)
            elif not parts[-1].endswith((" ", "\n")):
                parts.append(" ")
        else:
            parts.append(tok.text)
            last_was_stopword = False
    return EDGE_WHITESPACE_RE.sub("", "".join(parts))
