"""
Keyword extractor: combines the scanners, suffix stripping, stopword
filtering and weighted ranking into one call.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .config import DEFAULT_MAX_TAGS, ExtractorConfig
from .patterns import (
    MIN_CANDIDATE_LENGTH,
    match_hangul_words,
    match_latin_words,
    match_numeric_expressions,
    match_proper_nouns,
)
from .ranking import build_weighted_sequence, rank_with_counts
from .stopwords import is_korean_stopword, remove_stopwords
from .suffixes import strip_suffixes

logger = logging.getLogger(__name__)


def extract_general_keywords(text: str) -> List[str]:
    """Normalized Hangul words followed by capitalized Latin words and acronyms."""
    keywords: List[str] = []
    for word in match_hangul_words(text):
        cleaned = strip_suffixes(word)
        if len(cleaned) >= MIN_CANDIDATE_LENGTH and not is_korean_stopword(cleaned):
            keywords.append(cleaned)
    keywords.extend(match_latin_words(text))
    return keywords


@dataclass(frozen=True)
class KeywordSources:
    """Candidates from each source, before weighting."""

    title_keywords: List[str] = field(default_factory=list)
    proper_nouns: List[str] = field(default_factory=list)
    body_keywords: List[str] = field(default_factory=list)
    numeric_tokens: List[str] = field(default_factory=list)

    def weighted_sequence(self) -> List[str]:
        return build_weighted_sequence(
            self.title_keywords,
            self.proper_nouns,
            self.body_keywords,
            self.numeric_tokens,
        )


@dataclass(frozen=True)
class KeywordExtractor:
    """Extracts up to `config.max_tags` keywords from a document.

    Instances are immutable; build a new one to change the configuration.
    Calls share no state and are safe to run from several threads.
    """

    config: ExtractorConfig = field(default_factory=ExtractorConfig)

    @classmethod
    def with_max_tags(cls, max_tags: int) -> "KeywordExtractor":
        return cls(config=ExtractorConfig(max_tags=max_tags))

    @property
    def max_tags(self) -> int:
        return self.config.max_tags

    def collect_sources(self, text: Optional[str], title: Optional[str] = "") -> KeywordSources:
        text = text or ""
        title = title or ""
        return KeywordSources(
            title_keywords=extract_general_keywords(title) if title else [],
            proper_nouns=remove_stopwords(match_proper_nouns(text)),
            body_keywords=extract_general_keywords(text),
            numeric_tokens=match_numeric_expressions(text),
        )

    def score_keywords(
        self, text: Optional[str], title: Optional[str] = ""
    ) -> List[Tuple[str, int]]:
        """Ranked (keyword, weighted count) pairs."""
        sources = self.collect_sources(text, title)
        ranked = rank_with_counts(sources.weighted_sequence(), self.config.max_tags)
        logger.debug(
            "Ranked %s keywords (title=%s proper=%s body=%s numeric=%s)",
            len(ranked),
            len(sources.title_keywords),
            len(sources.proper_nouns),
            len(sources.body_keywords),
            len(sources.numeric_tokens),
        )
        return ranked

    def extract_keywords(self, text: Optional[str], title: Optional[str] = "") -> List[str]:
        """
        Return the top keywords for a document.

        Title keywords count three times, proper nouns twice, body keywords
        and numeric expressions once. Ties keep first-seen order. Empty
        input gives an empty list.
        """
        return [term for term, _ in self.score_keywords(text, title)]


def extract_keywords(
    text: Optional[str],
    title: Optional[str] = "",
    max_tags: int = DEFAULT_MAX_TAGS,
) -> List[str]:
    """Convenience wrapper around KeywordExtractor.extract_keywords."""
    return KeywordExtractor.with_max_tags(max_tags).extract_keywords(text, title)
