"""
Tagger settings, read from the environment (and a project `.env`).
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from typing import Mapping, Optional, Tuple

from notetagger.keywords.config import DEFAULT_MAX_TAGS, ConfigurationError, ExtractorConfig
from notetagger.llm.client import DEFAULT_MODEL

from .refiner import RefinerSettings

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FOLDER_SPLIT_RE = re.compile(r"[,\n]")


def _env_flag(value: Optional[str]) -> bool:
    return (value or "").strip().lower() in _TRUE_VALUES


def _env_int(name: str, value: Optional[str], default: int) -> int:
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be an integer, got {value!r}") from e


@dataclass(frozen=True)
class TaggerSettings:
    """
    Everything needed to build a tagging pipeline.

    Frozen: use dataclasses.replace() to derive changed settings, then build
    a new pipeline from them.
    """

    max_tags: int = DEFAULT_MAX_TAGS
    overwrite_existing_tags: bool = False
    exclude_folders: Tuple[str, ...] = ()
    refiner: RefinerSettings = field(default_factory=RefinerSettings)

    def __post_init__(self) -> None:
        # Validate eagerly so bad settings fail at load time, not mid-run.
        self.extractor_config()

    def extractor_config(self) -> ExtractorConfig:
        return ExtractorConfig(max_tags=self.max_tags)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "TaggerSettings":
        """
        Read settings from environment variables.

        TAGGER_MAX_TAGS, TAGGER_OVERWRITE_TAGS, TAGGER_EXCLUDE_FOLDERS,
        TAGGER_USE_AI, plus LLM_API_KEY/OPENAI_API_KEY, LLM_MODEL and
        LLM_BASE_URL for the refiner.
        """
        env = os.environ if environ is None else environ
        folders = _FOLDER_SPLIT_RE.split(env.get("TAGGER_EXCLUDE_FOLDERS", ""))
        refiner = RefinerSettings(
            enabled=_env_flag(env.get("TAGGER_USE_AI")),
            api_key=env.get("LLM_API_KEY") or env.get("OPENAI_API_KEY") or "",
            model=env.get("LLM_MODEL") or DEFAULT_MODEL,
            base_url=env.get("LLM_BASE_URL") or None,
        )
        return cls(
            max_tags=_env_int("TAGGER_MAX_TAGS", env.get("TAGGER_MAX_TAGS"), DEFAULT_MAX_TAGS),
            overwrite_existing_tags=_env_flag(env.get("TAGGER_OVERWRITE_TAGS")),
            exclude_folders=tuple(f.strip() for f in folders if f.strip()),
            refiner=refiner,
        )
