from __future__ import annotations

from typing import Mapping

from .types import RankedEntry


def rank_words(counts: Mapping[str, int], top_n: int) -> list[RankedEntry]:
    """Top ``top_n`` words by count; equal counts are ordered alphabetically."""
    if top_n <= 0:
        return []
    ordered = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
    return [RankedEntry(word=word, count=count) for word, count in ordered[:top_n]]
