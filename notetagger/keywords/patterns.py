"""
Lexical scanners that pull raw keyword candidates out of text.

Every scanner here runs in linear time over its input. The only regular
expressions are single character-class runs; anything with more structure
(title-case chains, entity names, numeric families) is assembled by walking
those runs in order.

Latin words are delimited by ASCII word boundaries, so a Hangul particle
glued to a Latin word ("Apple은") still leaves "Apple" as a whole word.
"""

from __future__ import annotations

import re
from typing import Dict, List, Optional, Tuple

from .stopwords import is_english_stopword

HANGUL_RUN_RE = re.compile(r"[가-힣]+")
ASCII_WORD_RE = re.compile(r"[A-Za-z0-9_]+")
DIGIT_RUN_RE = re.compile(r"[0-9]+")
NAME_RUN_RE = re.compile(r"[가-힣A-Za-z]+")

MIN_CANDIDATE_LENGTH = 2

ENTITY_MARKERS = ("주식회사", "㈜")

MONEY_MAGNITUDES = frozenset("조억만")
CURRENCY_UNIT = "원"
YEAR_UNIT = "년"
MONTH_UNIT = "월"
DAY_UNIT = "일"
COUNT_UNITS = frozenset("명건회개")

_Span = Tuple[int, int, str]


def _ascii_words(text: str) -> List[_Span]:
    return [(m.start(), m.end(), m.group(0)) for m in ASCII_WORD_RE.finditer(text)]


def _is_ascii_alpha(word: str) -> bool:
    return word.isascii() and word.isalpha()


def _is_acronym(word: str) -> bool:
    return len(word) >= 2 and _is_ascii_alpha(word) and word.isupper()


def _is_capitalized_word(word: str) -> bool:
    return len(word) >= 3 and _is_ascii_alpha(word) and word[0].isupper()


def _is_title_word(word: str) -> bool:
    return (
        len(word) >= 2
        and _is_ascii_alpha(word)
        and word[0].isupper()
        and word[1:].islower()
    )


def _skip_whitespace(text: str, pos: int) -> int:
    while pos < len(text) and text[pos].isspace():
        pos += 1
    return pos


def _is_inline_gap(gap: str) -> bool:
    """Non-empty whitespace that stays on one line."""
    return bool(gap) and gap.isspace() and "\n" not in gap and "\r" not in gap


def _skip_inline_whitespace(text: str, pos: int) -> int:
    while pos < len(text) and _is_inline_gap(text[pos]):
        pos += 1
    return pos


def _char_at(text: str, pos: int) -> str:
    return text[pos] if pos < len(text) else ""


# ---------------------------------------------------------------------------
# General words
# ---------------------------------------------------------------------------


def match_hangul_words(text: str) -> List[str]:
    """Maximal Hangul syllable runs of at least two characters."""
    return [
        m.group(0)
        for m in HANGUL_RUN_RE.finditer(text)
        if len(m.group(0)) >= MIN_CANDIDATE_LENGTH
    ]


def match_latin_words(text: str) -> List[str]:
    """Capitalized words (3+ letters) and acronyms (2+ letters), minus stopwords."""
    words: List[str] = []
    for _, _, word in _ascii_words(text):
        if not (_is_capitalized_word(word) or _is_acronym(word)):
            continue
        if is_english_stopword(word):
            continue
        words.append(word)
    return words


# ---------------------------------------------------------------------------
# Proper nouns
# ---------------------------------------------------------------------------


def _next_entity_marker(
    text: str, pos: int, next_at: Dict[str, int]
) -> Optional[Tuple[int, str]]:
    best: Optional[Tuple[int, str]] = None
    for marker in ENTITY_MARKERS:
        idx = next_at[marker]
        if idx != -1 and idx < pos:
            idx = next_at[marker] = text.find(marker, pos)
        if idx != -1 and (best is None or idx < best[0]):
            best = (idx, marker)
    return best


def match_entity_names(text: str) -> List[str]:
    """Company names introduced by a legal-entity marker ("주식회사 카카오").

    The name is one word, optionally followed by a second one on the same line.
    """
    names: List[str] = []
    next_at = {marker: text.find(marker) for marker in ENTITY_MARKERS}
    pos = 0
    while True:
        found = _next_entity_marker(text, pos, next_at)
        if found is None:
            break
        idx, marker = found
        first = NAME_RUN_RE.match(text, _skip_whitespace(text, idx + len(marker)))
        if first is None:
            pos = idx + 1
            continue

        end = first.end()
        gap_end = _skip_inline_whitespace(text, end)
        if gap_end > end:
            second = NAME_RUN_RE.match(text, gap_end)
            if second is not None:
                end = second.end()

        name = text[first.start() : end].strip()
        if len(name) >= MIN_CANDIDATE_LENGTH:
            names.append(name)
        pos = end
    return names


def match_title_case_phrases(text: str) -> List[str]:
    """Runs of two or more Title-Case words on one line ("Kim Jong Un")."""
    phrases: List[str] = []
    chain: List[_Span] = []

    def flush() -> None:
        if len(chain) >= 2:
            phrases.append(text[chain[0][0] : chain[-1][1]])
        chain.clear()

    for span in _ascii_words(text):
        start, _, word = span
        if not _is_title_word(word):
            flush()
            continue
        if chain:
            if not _is_inline_gap(text[chain[-1][1] : start]):
                flush()
        chain.append(span)
    flush()
    return phrases


def match_acronyms(text: str) -> List[str]:
    return [word for _, _, word in _ascii_words(text) if _is_acronym(word)]


def match_proper_nouns(text: str) -> List[str]:
    """Entity names, then title-case phrases, then acronyms. Not exclusive."""
    found = match_entity_names(text) + match_title_case_phrases(text) + match_acronyms(text)
    trimmed = (item.strip() for item in found)
    return [item for item in trimmed if item]


# ---------------------------------------------------------------------------
# Numbers and dates
# ---------------------------------------------------------------------------


def match_currency_amounts(text: str) -> List[str]:
    """Won amounts with an optional magnitude: "500원", "3000억원"."""
    amounts: List[str] = []
    for run in DIGIT_RUN_RE.finditer(text):
        end = run.end()
        if _char_at(text, end) == CURRENCY_UNIT:
            amounts.append(text[run.start() : end + 1])
        elif _char_at(text, end) in MONEY_MAGNITUDES and _char_at(text, end + 1) == CURRENCY_UNIT:
            amounts.append(text[run.start() : end + 2])
    return amounts


def match_dates(text: str) -> List[str]:
    """Years ("2024년") and month-day pairs ("3월15일")."""
    dates: List[str] = []
    runs = list(DIGIT_RUN_RE.finditer(text))
    consumed = 0
    for i, run in enumerate(runs):
        if run.start() < consumed:
            continue
        end = run.end()
        unit = _char_at(text, end)
        if unit == YEAR_UNIT and end - run.start() >= 4:
            dates.append(text[end - 4 : end + 1])
            consumed = end + 1
        elif unit == MONTH_UNIT and i + 1 < len(runs):
            day = runs[i + 1]
            if (
                day.start() == end + 1
                and len(day.group(0)) <= 2
                and _char_at(text, day.end()) == DAY_UNIT
            ):
                dates.append(text[max(run.start(), end - 2) : day.end() + 1])
                consumed = day.end() + 1
    return dates


def match_counted_numbers(text: str) -> List[str]:
    """Counts with a unit and optional thousands separators: "1,234명", "12건"."""
    runs = list(DIGIT_RUN_RE.finditer(text))

    # match_end[i]: where a match starting at runs[i] would end. Filled right
    # to left so each ",ddd" chain is walked once.
    match_end: List[Optional[int]] = [None] * len(runs)
    for i in range(len(runs) - 1, -1, -1):
        end = runs[i].end()
        nxt = _char_at(text, end)
        if nxt and nxt in COUNT_UNITS:
            match_end[i] = end + 1
        elif (
            nxt == ","
            and i + 1 < len(runs)
            and runs[i + 1].start() == end + 1
            and len(runs[i + 1].group(0)) == 3
        ):
            match_end[i] = match_end[i + 1]

    counts: List[str] = []
    consumed = 0
    for run, stop in zip(runs, match_end):
        if run.start() < consumed or stop is None:
            continue
        counts.append(text[run.start() : stop])
        consumed = stop
    return counts


def match_numeric_expressions(text: str) -> List[str]:
    """Currency amounts, then dates, then counted numbers, verbatim."""
    return match_currency_amounts(text) + match_dates(text) + match_counted_numbers(text)
