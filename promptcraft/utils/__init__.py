"""Utility modules for PromptCraft."""

from .exceptions import (
    ConfigurationError,
    EmptyPromptError,
    LLMError,
    PromptCraftError,
    PromptTooLongError,
    PromptValidationError,
    StoreError,
)
from .llm_client import LLMClient
from .logging_config import setup_logging
from .store import KeyValueStore, MemoryStore, RateLimiter, SQLiteStore, UsageRecorder, create_store

__all__ = [
    "ConfigurationError",
    "EmptyPromptError",
    "LLMError",
    "PromptCraftError",
    "PromptTooLongError",
    "PromptValidationError",
    "StoreError",
    "LLMClient",
    "setup_logging",
    "KeyValueStore",
    "MemoryStore",
    "RateLimiter",
    "SQLiteStore",
    "UsageRecorder",
    "create_store",
]
