"""
Tests for weighted aggregation and frequency ranking.
"""

from __future__ import annotations

from notetagger.keywords.ranking import (
    build_weighted_sequence,
    count_frequencies,
    rank_keywords,
    rank_with_counts,
)


def test_weighted_sequence_multipliers_and_order():
    seq = build_weighted_sequence(["T1", "T2"], ["P"], ["B"], ["2024년"])
    assert seq == ["T1", "T2", "T1", "T2", "T1", "T2", "P", "P", "B", "2024년"]


def test_weighted_sequence_empty_sources():
    assert build_weighted_sequence([], [], [], []) == []


def test_frequency_table_invariants():
    seq = build_weighted_sequence(["제목"], ["NASA"], ["제목", "본문"], ["3회"])
    freq = count_frequencies(seq)
    assert list(freq) == ["제목", "NASA", "본문", "3회"]
    assert all(count >= 1 for count in freq.values())
    assert sum(freq.values()) == len(seq)


def test_rank_sorts_by_count_then_first_seen():
    seq = ["b", "a", "c", "a", "c", "d"]
    assert rank_with_counts(seq, 10) == [("a", 2), ("c", 2), ("b", 1), ("d", 1)]


def test_rank_truncates_to_max_tags():
    seq = [f"w{i}" for i in range(10)]
    assert rank_keywords(seq, 3) == ["w0", "w1", "w2"]


def test_rank_returns_unique_terms():
    seq = ["x", "y", "x", "x", "y", "z"]
    ranked = rank_keywords(seq, 10)
    assert ranked == ["x", "y", "z"]
    assert len(ranked) == len(set(ranked))
