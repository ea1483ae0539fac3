"""
LLM client module for OpenAI-compatible APIs.
"""

from .client import ChatClient, LLMError, create_client

__all__ = ["ChatClient", "LLMError", "create_client"]
