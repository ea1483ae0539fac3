"""
Configuration for keyword extraction.
"""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_MAX_TAGS = 10


class ConfigurationError(ValueError):
    """Raised when an extractor is built with invalid settings."""


@dataclass(frozen=True)
class ExtractorConfig:
    """Settings bound to a KeywordExtractor at construction."""

    max_tags: int = DEFAULT_MAX_TAGS

    def __post_init__(self) -> None:
        if isinstance(self.max_tags, bool) or not isinstance(self.max_tags, int):
            raise ConfigurationError(
                f"max_tags must be an integer, got {type(self.max_tags).__name__}"
            )
        if self.max_tags <= 0:
            raise ConfigurationError(f"max_tags must be positive, got {self.max_tags}")
