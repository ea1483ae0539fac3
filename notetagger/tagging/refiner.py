"""
Optional LLM refinement of extracted tags.

Refinement is a best-effort pass: whatever goes wrong (no key, network error,
a reply that is not a list of strings) the caller gets the extracted tags
back unchanged.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Protocol, Sequence

from notetagger.llm.client import DEFAULT_MODEL, ChatClient, LLMError, create_client

from .prompts import REFINE_PROMPT, REFINE_SYSTEM_PROMPT

logger = logging.getLogger(__name__)

CONTEXT_EXCERPT_CHARS = 500
REFINED_MAX_TAGS = 10
REFINE_MAX_TOKENS = 200
REFINE_TEMPERATURE = 0.3

_FENCED_RE = re.compile(r"```(?:json)?\s*(.*?)\s*```", re.DOTALL)
_QUOTED_RE = re.compile(r'"([^"]+)"')


class RefinementError(ValueError):
    """The refinement reply could not be turned into a tag list."""


class Refiner(Protocol):
    def refine(self, tags: Sequence[str], context: str) -> List[str]:
        ...


class NoopRefiner:
    """Default refiner: returns the tags as given."""

    def refine(self, tags: Sequence[str], context: str) -> List[str]:
        return list(tags)


@dataclass(frozen=True)
class RefinerSettings:
    """Settings for LLM refinement."""

    enabled: bool = False
    api_key: str = ""
    model: str = DEFAULT_MODEL
    base_url: Optional[str] = None

    @property
    def active(self) -> bool:
        return self.enabled and bool(self.api_key)


def build_refine_prompt(tags: Sequence[str], context: str) -> str:
    return REFINE_PROMPT.format(
        tags=", ".join(tags),
        excerpt=context[:CONTEXT_EXCERPT_CHARS],
        max_tags=REFINED_MAX_TAGS,
    )


def _coerce_tags(items: List[Any]) -> List[str]:
    return [item for item in items if isinstance(item, str) and item]


def parse_refined_tags(raw: str) -> List[str]:
    """
    Parse the model reply into tags.

    Expects a JSON array of strings, optionally inside a ```json fence.
    If the reply is not valid JSON, falls back to every "quoted" string in it.
    Raises RefinementError when neither yields any tag.
    """
    text = (raw or "").strip()
    fenced = _FENCED_RE.search(text)
    if fenced:
        text = fenced.group(1)

    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        tags = _QUOTED_RE.findall(text)
        if tags:
            logger.debug("Refinement reply was not JSON; recovered %s quoted tags", len(tags))
            return tags
        raise RefinementError("reply is neither a JSON array nor contains quoted tags")

    if not isinstance(data, list):
        raise RefinementError(f"expected a JSON array, got {type(data).__name__}")
    tags = _coerce_tags(data)
    if not tags:
        raise RefinementError("JSON array contained no usable tags")
    return tags


class LLMTagRefiner:
    """Refine tags with one chat completion call."""

    def __init__(
        self,
        settings: RefinerSettings,
        client: Optional[ChatClient] = None,
        client_factory: Callable[..., ChatClient] = create_client,
    ):
        self.settings = settings
        self._client = client
        self._client_factory = client_factory

    def _get_client(self) -> ChatClient:
        if self._client is None:
            self._client = self._client_factory(
                model_name=self.settings.model,
                api_key=self.settings.api_key,
                base_url=self.settings.base_url,
            )
        return self._client

    def refine(self, tags: Sequence[str], context: str) -> List[str]:
        """Return refined tags, or `tags` unchanged on any failure."""
        original = list(tags)
        if not self.settings.active or not original:
            return original

        prompt = build_refine_prompt(original, context or "")
        try:
            raw = self._get_client().complete(
                prompt,
                system=REFINE_SYSTEM_PROMPT,
                max_tokens=REFINE_MAX_TOKENS,
                temperature=REFINE_TEMPERATURE,
                max_retries=1,
            )
            refined = parse_refined_tags(raw)
        except (LLMError, RefinementError) as e:
            logger.warning("Tag refinement failed, keeping extracted tags: %s", e)
            return original

        logger.info("Refined %s tags into %s", len(original), len(refined))
        return refined
