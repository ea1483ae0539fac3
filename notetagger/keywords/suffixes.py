"""
Trailing particle and ending removal for Hangul words.

Korean attaches case/topic markers and verb endings directly to the noun, so
"회사는" and "회사에서" should both count as "회사". Particles can also stack
("서울에서도"), which is why stripping repeats until a fixed point.
"""

from __future__ import annotations

from typing import Optional

MIN_WORD_LENGTH = 2

PARTICLE_SUFFIXES = (
    # case and topic markers
    "은", "는", "이", "가", "을", "를", "의", "에", "에서", "으로", "로",
    "와", "과", "도", "만", "부터", "까지", "처럼", "같이", "보다",
    # quotative and connective endings
    "라고", "라는", "이라", "라며", "에도", "에는", "으로는", "에서는",
    "이나", "나", "든지", "든가", "이란", "란", "이면", "면",
    "하면", "다면", "라면", "해서", "해도", "하는", "하고", "하며", "해야",
    # formal sentence endings
    "입니다", "합니다", "됩니다", "습니다", "ㅂ니다", "니다",
)

# Longest first so "에서는" wins over "는"; sorted() keeps listed order on ties.
_SUFFIXES_LONGEST_FIRST = tuple(sorted(PARTICLE_SUFFIXES, key=len, reverse=True))


def match_suffix(word: str) -> Optional[str]:
    """Return the longest known suffix the word ends with, if any."""
    for suffix in _SUFFIXES_LONGEST_FIRST:
        if word.endswith(suffix):
            return suffix
    return None


def strip_suffixes(word: str) -> str:
    """Remove trailing particles one at a time until none applies.

    A suffix is never removed if that would leave fewer than
    MIN_WORD_LENGTH characters, so "회의" stays "회의".
    """
    cleaned = word
    while len(cleaned) >= MIN_WORD_LENGTH:
        suffix = match_suffix(cleaned)
        if suffix is None or len(cleaned) - len(suffix) < MIN_WORD_LENGTH:
            break
        cleaned = cleaned[: -len(suffix)]
    return cleaned
