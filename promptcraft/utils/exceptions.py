"""Custom exceptions for PromptCraft."""

from typing import Optional


class PromptCraftError(Exception):
    """Base exception for PromptCraft errors."""
    pass


class PromptValidationError(PromptCraftError):
    """Raised when a raw prompt is rejected before enhancement."""

    code = "INVALID_PROMPT"

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        if code:
            self.code = code


class EmptyPromptError(PromptValidationError):
    """Raised when the prompt is empty or whitespace-only."""

    code = "MISSING_PROMPT"

    def __init__(self, message: str = "Prompt is required"):
        super().__init__(message)


class PromptTooLongError(PromptValidationError):
    """Raised when the prompt exceeds the configured maximum length."""

    code = "PROMPT_TOO_LONG"

    def __init__(self, length: int, max_length: int):
        super().__init__(
            f"Prompt exceeds maximum length of {max_length:,} characters (got {length:,})"
        )
        self.length = length
        self.max_length = max_length


class LLMError(PromptCraftError):
    """Raised when LLM operations fail."""
    pass


class StoreError(PromptCraftError):
    """Raised when key-value store operations fail."""
    pass


class ConfigurationError(PromptCraftError):
    """Raised when configuration is invalid."""
    pass
