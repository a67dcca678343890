from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import AbstractSet, Dict, Iterable, List, Sequence

from textgraph.tokenizer import WHITESPACE, Token

log = logging.getLogger("textgraph.frequencies")


@dataclass
class FrequencyEntry:
    word: str  # display form: text of the first token seen with this key
    count: int
    is_stopword: bool


@dataclass(frozen=True)
class WordCount:
    word: str
    count: int


@dataclass(frozen=True)
class TextStats:
    total_words: int
    unique_words: int
    hidden_words: int

    def to_dict(self) -> Dict[str, int]:
        return {
            "totalWords": self.total_words,
            "uniqueWords": self.unique_words,
            "hiddenWords": self.hidden_words,
        }


def calculate_frequencies(tokens: Iterable[Token]) -> Dict[str, FrequencyEntry]:
    """
    Count non-whitespace tokens by normalized text.

    The display word is fixed by the first occurrence; `is_stopword` is
    overwritten by every occurrence (last write wins).
    """
    freqs: Dict[str, FrequencyEntry] = {}
    for tok in tokens:
        if tok.type == WHITESPACE:
            continue
        entry = freqs.get(tok.normalized_text)
        if entry is None:
            freqs[tok.normalized_text] = FrequencyEntry(tok.text, 1, tok.is_stopword)
        else:
            entry.count += 1
            entry.is_stopword = tok.is_stopword
    return freqs


def visible_word_frequencies(freqs: Dict[str, FrequencyEntry]) -> List[WordCount]:
    """Non-stopword entries, most frequent first (ties keep first-seen order)."""
    items = [WordCount(e.word, e.count) for e in freqs.values() if not e.is_stopword]
    items.sort(key=lambda wc: -wc.count)
    return items


def stopword_list(freqs: Dict[str, FrequencyEntry], stopwords: AbstractSet[str]) -> List[WordCount]:
    """Stopwords found in the text plus configured stopwords that never occur (count 0)."""
    items = [WordCount(e.word, e.count) for e in freqs.values() if e.is_stopword]
    for sw in stopwords:
        if sw not in freqs:
            items.append(WordCount(sw, 0))
    items.sort(key=lambda wc: (-wc.count, wc.word.casefold(), wc.word))
    return items


def text_stats(tokens: Sequence[Token], freqs: Dict[str, FrequencyEntry]) -> TextStats:
    shown = [t for t in tokens if t.type != WHITESPACE]
    hidden = sum(1 for t in shown if t.is_stopword)
    stats = TextStats(total_words=len(shown), unique_words=len(freqs), hidden_words=hidden)
    log.debug("Text stats: %s", stats)
    return stats


def top_words(freqs: Dict[str, FrequencyEntry], n: int | None = None) -> List[WordCount]:
    items = visible_word_frequencies(freqs)
    return items if n is None else items[:n]
