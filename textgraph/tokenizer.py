from __future__ import annotations

import itertools
import logging
import re
from dataclasses import dataclass
from typing import AbstractSet, Iterable, List

log = logging.getLogger("textgraph.tokenizer")

WORD = "word"
PUNCTUATION = "punctuation"
WHITESPACE = "whitespace"

# Letters/digits; an apostrophe (straight or curly) extends the word only when letters follow: "don't", "ow’st"
WORD_RE = re.compile(r"[^\W_]+")
APOSTROPHES = "'’"
# \s plus the byte order mark, which str.isspace() does not cover
WHITESPACE_RE = re.compile(r"[\s\ufeff]+")
EDGE_WHITESPACE_RE = re.compile(r"^[\s\ufeff]+|[\s\ufeff]+$")


@dataclass(frozen=True)
class Token:
    id: str
    text: str
    type: str
    normalized_text: str
    is_stopword: bool = False


def _word_end(text: str, pos: int) -> int:
    """End of the word starting at `pos`, or `pos` if there is none."""
    m = WORD_RE.match(text, pos)
    if not m:
        return pos
    end = m.end()
    if end < len(text) and text[end] in APOSTROPHES:
        k = end + 1
        # isalpha() is exactly the Unicode letter categories; other numerals (², Ⅻ) do not count
        while k < len(text) and text[k].isalpha():
            k += 1
        if k > end + 1:
            end = k
    return end


def tokenize_text(text: str, stopwords: AbstractSet[str] = frozenset()) -> List[Token]:
    """
    Split `text` into whitespace runs, words and single punctuation characters.

    Tried in that order at every position; the concatenated token texts always
    reproduce `text` exactly. Ids restart at "token-1" on every call.
    """
    counter = itertools.count(1)
    tokens: List[Token] = []
    pos = 0
    n = len(text)

    while pos < n:
        m = WHITESPACE_RE.match(text, pos)
        if m:
            chunk = m.group()
            # whitespace is never a stopword and keeps its text as the key
            tokens.append(Token(f"token-{next(counter)}", chunk, WHITESPACE, chunk, False))
            pos = m.end()
            continue

        end = _word_end(text, pos)
        if end > pos:
            chunk = text[pos:end]
            normalized = chunk.lower()
            tokens.append(Token(f"token-{next(counter)}", chunk, WORD, normalized, normalized in stopwords))
            pos = end
            continue

        # catch-all: one character (symbols, emoji, ...)
        chunk = text[pos]
        normalized = chunk.lower()
        tokens.append(Token(f"token-{next(counter)}", chunk, PUNCTUATION, normalized, normalized in stopwords))
        pos += 1

    log.debug("Tokenized %d chars into %d tokens", n, len(tokens))
    return tokens


def detect_punctuation(tokens: Iterable[Token]) -> List[str]:
    """Sorted distinct punctuation glyphs in `tokens` (candidates for sentence boundaries)."""
    return sorted({t.text for t in tokens if t.type == PUNCTUATION})


def reconstruct_text(tokens: Iterable[Token]) -> str:
    return "".join(t.text for t in tokens)
