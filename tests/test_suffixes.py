"""
Tests for particle stripping and stopword lists.
"""

from __future__ import annotations

import pytest

from notetagger.keywords.stopwords import (
    ENGLISH_STOPWORDS,
    KOREAN_STOPWORDS,
    is_stopword,
    remove_stopwords,
)
from notetagger.keywords.suffixes import PARTICLE_SUFFIXES, match_suffix, strip_suffixes


@pytest.mark.parametrize(
    "word, expected",
    [
        ("회사는", "회사"),
        ("회사에서는", "회사"),
        ("학교에서", "학교"),
        ("정부가", "정부"),
        ("서울에서도", "서울"),
        ("회사입니다", "회사"),
        ("삼성전자", "삼성전자"),
    ],
)
def test_strip_suffixes(word, expected):
    assert strip_suffixes(word) == expected


def test_longest_suffix_wins():
    assert match_suffix("회사에서는") == "에서는"
    assert match_suffix("사람으로") == "으로"
    assert match_suffix("사과") == "과"
    assert match_suffix("사람") is None


def test_strip_never_goes_below_two_characters():
    assert strip_suffixes("회의") == "회의"
    assert strip_suffixes("이가") == "이가"
    assert strip_suffixes("에서") == "에서"


def test_strip_short_input_is_returned_unchanged():
    assert strip_suffixes("") == ""
    assert strip_suffixes("은") == "은"


@pytest.mark.parametrize("word", ["회사는", "서울에서도", "기술혁신을", "데이터베이스", "에서"])
def test_strip_is_idempotent(word):
    once = strip_suffixes(word)
    assert strip_suffixes(once) == once


def test_suffix_table_has_no_duplicates():
    assert len(PARTICLE_SUFFIXES) == len(set(PARTICLE_SUFFIXES))


def test_korean_stopwords_are_case_sensitive_exact():
    assert is_stopword("경우")
    assert is_stopword("때문")
    assert not is_stopword("경우의수")


def test_english_stopwords_are_case_insensitive():
    assert is_stopword("The")
    assert is_stopword("AND")
    assert not is_stopword("Theory")


def test_remove_stopwords_keeps_order():
    assert remove_stopwords(["데이터", "경우", "The", "Apple", "관계"]) == ["데이터", "Apple"]


def test_stopword_list_sizes():
    assert 40 <= len(KOREAN_STOPWORDS) <= 50
    assert len(ENGLISH_STOPWORDS) == 25
