"""
LLM client for OpenAI-compatible chat completion APIs (OpenAI, Z.AI/GLM, DeepSeek, etc.).
"""

from __future__ import annotations

import logging
import os
import random
import time
from pathlib import Path
from typing import Dict, List, Optional

from dotenv import load_dotenv
from openai import OpenAI

# Load .env file if it exists
project_root = Path(__file__).resolve().parents[2]
env_file = project_root / ".env"
if env_file.exists():
    load_dotenv(env_file)


DEFAULT_BASE_URL = "https://api.openai.com/v1"
DEFAULT_MODEL = "gpt-3.5-turbo"

logger = logging.getLogger(__name__)


class LLMError(RuntimeError):
    """The chat completion request failed or returned nothing usable."""


def resolve_api_key(api_key: Optional[str] = None) -> str:
    return api_key or os.getenv("LLM_API_KEY") or os.getenv("OPENAI_API_KEY") or ""


def resolve_model(model_name: Optional[str] = None) -> str:
    return model_name or os.getenv("LLM_MODEL") or DEFAULT_MODEL


def resolve_base_url(base_url: Optional[str] = None) -> str:
    return base_url or os.getenv("LLM_BASE_URL") or DEFAULT_BASE_URL


def is_reasoning_model(model_name: str) -> bool:
    """o1-family models reject system messages and a temperature setting."""
    return model_name.startswith("o1")


def _is_rate_limit(error: Exception) -> bool:
    error_str = str(error)
    return "429" in error_str or "concurrency" in error_str.lower() or "1302" in error_str


class ChatClient:
    """OpenAI-compatible chat client."""

    def __init__(
        self,
        model_name: Optional[str] = None,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
    ):
        self.model_name = resolve_model(model_name)
        self.base_url = resolve_base_url(base_url)
        key = resolve_api_key(api_key)
        if not key:
            raise LLMError("API key required. Set LLM_API_KEY or OPENAI_API_KEY.")
        self.client = OpenAI(base_url=self.base_url, api_key=key)

    def build_messages(self, prompt: str, system: Optional[str] = None) -> List[Dict[str, str]]:
        if not system:
            return [{"role": "user", "content": prompt}]
        if is_reasoning_model(self.model_name):
            return [{"role": "user", "content": f"{system}\n\n{prompt}"}]
        return [
            {"role": "system", "content": system},
            {"role": "user", "content": prompt},
        ]

    def complete(
        self,
        prompt: str,
        system: Optional[str] = None,
        max_tokens: int = 200,
        temperature: float = 0.3,
        max_retries: int = 1,
    ) -> str:
        """
        Run one chat completion and return the message text.

        Rate-limit errors are retried with exponential backoff up to
        `max_retries` attempts in total. Any other failure, or an empty
        reply, raises LLMError.
        """
        create_kw: dict = {
            "model": self.model_name,
            "messages": self.build_messages(prompt, system),
            "max_tokens": max_tokens,
        }
        if not is_reasoning_model(self.model_name):
            create_kw["temperature"] = temperature
        # Z.AI: disable thinking so the model returns directly in content
        if "z.ai" in self.base_url.lower():
            create_kw["extra_body"] = {"thinking": {"type": "disabled"}}

        attempt = 0
        while True:
            attempt += 1
            try:
                response = self.client.chat.completions.create(**create_kw)
                break
            except Exception as e:
                if _is_rate_limit(e) and attempt < max_retries:
                    backoff = (2 ** attempt) * 3 + random.uniform(0, 3)
                    logger.warning(
                        "Rate limit hit (429/concurrency). Retrying in %s s (attempt %s/%s)",
                        round(backoff, 1),
                        attempt,
                        max_retries,
                    )
                    time.sleep(backoff)
                    continue
                raise LLMError(f"Chat completion failed: {e}") from e

        if not response.choices:
            raise LLMError("Empty response from API")
        choice = response.choices[0]
        content = (choice.message.content or "").strip()
        if not content:
            raise LLMError(
                f"Empty content in response (finish_reason={getattr(choice, 'finish_reason', '?')})"
            )
        return content


def create_client(
    model_name: Optional[str] = None,
    api_key: Optional[str] = None,
    base_url: Optional[str] = None,
) -> ChatClient:
    """Create an OpenAI-compatible client from arguments or the environment."""
    return ChatClient(model_name=model_name, api_key=api_key, base_url=base_url)
