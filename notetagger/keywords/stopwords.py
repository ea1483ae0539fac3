"""
Closed stopword lists for Hangul and Latin candidates.
"""

from __future__ import annotations

import re
from typing import Iterable, List

# Particles, copulas, ubiquitous verbs and generic document-structure words.
KOREAN_STOPWORDS = frozenset({
    "이", "그", "저", "것", "수", "등", "및", "의", "가", "을", "를",
    "에", "에서", "으로", "로", "와", "과", "도", "만", "하다",
    "있다", "없다", "되다", "이다", "아니다", "하고", "한다",
    "이는", "이하", "따라", "통해", "위한", "대한", "관한",
    "때문", "경우", "이후", "다른", "여러", "같은", "다양한",
    "중요한", "필요한", "가능한", "직접적인", "장기적인",
    "배경지식", "결론", "맥락", "관계",
})

ENGLISH_STOPWORDS = frozenset({
    "the", "a", "an", "and", "or", "but", "in", "on", "at",
    "to", "for", "of", "with", "by", "from", "is", "was",
    "are", "were", "be", "been", "being", "have", "has", "had",
})

_LATIN_RE = re.compile(r"[A-Za-z]")


def is_korean_stopword(word: str) -> bool:
    return word in KOREAN_STOPWORDS


def is_english_stopword(word: str) -> bool:
    return word.lower() in ENGLISH_STOPWORDS


def is_stopword(word: str) -> bool:
    """Case-sensitive for Hangul words, case-insensitive for Latin ones."""
    if _LATIN_RE.search(word):
        return is_english_stopword(word)
    return is_korean_stopword(word)


def remove_stopwords(words: Iterable[str]) -> List[str]:
    return [w for w in words if not is_stopword(w)]
