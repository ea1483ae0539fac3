"""
Keyword extraction module.

Deterministic, pattern-based tag candidates for Korean and English text:
- Hangul word runs with particle stripping
- Capitalized Latin words, title-case phrases and acronyms
- Company names after legal-entity markers
- Won amounts, dates and counted numbers
- Weighted frequency ranking (title x3, proper nouns x2, body x1)
"""

from .config import DEFAULT_MAX_TAGS, ConfigurationError, ExtractorConfig
from .extractor import (
    KeywordExtractor,
    KeywordSources,
    extract_general_keywords,
    extract_keywords,
)
from .patterns import match_numeric_expressions, match_proper_nouns
from .ranking import build_weighted_sequence, count_frequencies, rank_keywords
from .stopwords import ENGLISH_STOPWORDS, KOREAN_STOPWORDS, is_stopword
from .suffixes import strip_suffixes

__all__ = [
    "DEFAULT_MAX_TAGS",
    "ConfigurationError",
    "ExtractorConfig",
    "KeywordExtractor",
    "KeywordSources",
    "extract_general_keywords",
    "extract_keywords",
    "match_numeric_expressions",
    "match_proper_nouns",
    "build_weighted_sequence",
    "count_frequencies",
    "rank_keywords",
    "ENGLISH_STOPWORDS",
    "KOREAN_STOPWORDS",
    "is_stopword",
    "strip_suffixes",
]
