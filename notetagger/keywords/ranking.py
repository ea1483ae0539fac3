"""
Weighted aggregation and frequency ranking of keyword candidates.

Weighting is done by repetition: a title keyword is inserted three times,
a proper noun twice, everything else once. Counting the resulting sequence
then yields the weighted frequency directly.
"""

from __future__ import annotations

from collections import Counter
from typing import List, Sequence, Tuple

TITLE_WEIGHT = 3
PROPER_NOUN_WEIGHT = 2
BODY_WEIGHT = 1
NUMERIC_WEIGHT = 1


def build_weighted_sequence(
    title_keywords: Sequence[str],
    proper_nouns: Sequence[str],
    body_keywords: Sequence[str],
    numeric_tokens: Sequence[str],
) -> List[str]:
    """Concatenate all sources, each repeated by its weight, in a fixed order.

    Order matters: it decides first-seen position and therefore ties.
    """
    weighted: List[str] = []
    weighted.extend(list(title_keywords) * TITLE_WEIGHT)
    weighted.extend(list(proper_nouns) * PROPER_NOUN_WEIGHT)
    weighted.extend(list(body_keywords) * BODY_WEIGHT)
    weighted.extend(list(numeric_tokens) * NUMERIC_WEIGHT)
    return weighted


def count_frequencies(sequence: Sequence[str]) -> Counter:
    """Single left-to-right count; keys keep first-seen order."""
    return Counter(sequence)


def rank_with_counts(sequence: Sequence[str], max_tags: int) -> List[Tuple[str, int]]:
    """Top `max_tags` (term, count) pairs, highest count first.

    Counter.most_common is stable, so equal counts stay in first-seen order.
    """
    if max_tags <= 0:
        return []
    return count_frequencies(sequence).most_common(max_tags)


def rank_keywords(sequence: Sequence[str], max_tags: int) -> List[str]:
    return [term for term, _ in rank_with_counts(sequence, max_tags)]
