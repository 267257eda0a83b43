from __future__ import annotations

from collections import Counter
from itertools import groupby

# Letters in any script, ASCII digits and underscore make up words;
# everything else (other digits and numerals included) separates them.
_ASCII_WORD_CHARS = frozenset("0123456789_")

MIN_WORD_LENGTH = 2


def _is_word_char(ch: str) -> bool:
    return ch.isalpha() or ch in _ASCII_WORD_CHARS


def tokenize(text: str) -> list[str]:
    """Lowercased words of ``text``; single characters are dropped."""
    words = []
    for is_word, run in groupby(text.lower(), key=_is_word_char):
        if not is_word:
            continue
        word = "".join(run)
        if len(word) >= MIN_WORD_LENGTH:
            words.append(word)
    return words


def update_word_counts(text: str, counts: Counter[str]) -> None:
    """Add every word of ``text`` to ``counts`` in place."""
    for word in tokenize(text):
        counts[word] += 1
