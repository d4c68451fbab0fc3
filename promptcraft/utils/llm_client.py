"""LLM client used to polish templates when a provider is configured."""

import asyncio
import logging
import os
from enum import Enum
from typing import Any, Dict, Optional

import aiohttp

from .exceptions import LLMError

logger = logging.getLogger(__name__)


class LLMProvider(str, Enum):
    """Supported LLM providers."""

    ANTHROPIC = "anthropic"
    OPENAI = "openai"
    OLLAMA = "ollama"
    NONE = "none"


ANTHROPIC_URL = "https://api.anthropic.com/v1/messages"
ANTHROPIC_VERSION = "2023-06-01"
OPENAI_URL = "https://api.openai.com/v1/chat/completions"


class LLMClient:
    """Thin async client over the Anthropic, OpenAI and Ollama chat APIs.

    Requests are made once; there is no retry loop. Every failure surfaces
    as ``LLMError`` so callers can fall back to the deterministic template.
    """

    def __init__(self, provider: Optional[str] = None):
        self.anthropic_key = os.getenv("ANTHROPIC_API_KEY")
        self.anthropic_model = os.getenv("ANTHROPIC_MODEL", "claude-3-haiku-20240307")

        self.openai_key = os.getenv("OPENAI_API_KEY")
        self.openai_model = os.getenv("OPENAI_MODEL", "gpt-3.5-turbo")

        self.ollama_host = os.getenv("OLLAMA_HOST", "http://localhost:11434")
        self.ollama_model = os.getenv("OLLAMA_MODEL", "llama3.1:8b")

        self.provider = self._resolve_provider(provider or os.getenv("LLM_PROVIDER", "auto"))

        self.request_timeout_seconds = float(os.getenv("LLM_REQUEST_TIMEOUT_SECONDS", "30"))
        self.connection_timeout = float(os.getenv("LLM_CONNECTION_TIMEOUT", "10"))

        self._session: Optional[aiohttp.ClientSession] = None
        self._session_lock = asyncio.Lock()

        self._request_count = 0
        self._error_count = 0
        self._total_response_time = 0.0

    def _resolve_provider(self, requested: str) -> LLMProvider:
        requested = (requested or "auto").strip().lower()
        if requested == "auto":
            if self.anthropic_key:
                return LLMProvider.ANTHROPIC
            if self.openai_key:
                return LLMProvider.OPENAI
            return LLMProvider.NONE
        try:
            return LLMProvider(requested)
        except ValueError:
            logger.warning("Unknown LLM_PROVIDER '%s'; LLM enhancement disabled", requested)
            return LLMProvider.NONE

    @property
    def available(self) -> bool:
        """True when the selected provider has what it needs to be called."""
        if self.provider == LLMProvider.ANTHROPIC:
            return bool(self.anthropic_key)
        if self.provider == LLMProvider.OPENAI:
            return bool(self.openai_key)
        return self.provider == LLMProvider.OLLAMA

    @property
    def model(self) -> Optional[str]:
        return {
            LLMProvider.ANTHROPIC: self.anthropic_model,
            LLMProvider.OPENAI: self.openai_model,
            LLMProvider.OLLAMA: self.ollama_model,
        }.get(self.provider)

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create the shared aiohttp session."""
        async with self._session_lock:
            if self._session is None or self._session.closed:
                timeout = aiohttp.ClientTimeout(
                    total=self.request_timeout_seconds,
                    connect=self.connection_timeout,
                    sock_connect=self.connection_timeout,
                )
                self._session = aiohttp.ClientSession(
                    timeout=timeout,
                    headers={
                        "User-Agent": "PromptCraft/1.0 (LLM Client)",
                        "Accept": "application/json",
                    },
                )
                logger.debug("Created new HTTP session")
            return self._session

    async def generate(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float = 0.7,
        max_tokens: int = 1024,
    ) -> str:
        """Generate a completion from the configured provider.

        Args:
            system_prompt: Instructions for the model
            user_prompt: The user message
            temperature: Sampling temperature
            max_tokens: Maximum tokens to generate

        Returns:
            Generated text, stripped

        Raises:
            LLMError: provider unconfigured, HTTP error, timeout or malformed response
        """
        if not self.available:
            raise LLMError("No LLM provider configured")

        loop = asyncio.get_running_loop()
        start = loop.time()
        success = False
        try:
            if self.provider == LLMProvider.ANTHROPIC:
                text = await self._generate_anthropic(
                    system_prompt, user_prompt, temperature, max_tokens
                )
            elif self.provider == LLMProvider.OPENAI:
                text = await self._generate_openai(
                    system_prompt, user_prompt, temperature, max_tokens
                )
            else:
                text = await self._generate_ollama(
                    system_prompt, user_prompt, temperature, max_tokens
                )
            text = (text or "").strip()
            if not text:
                raise LLMError(f"{self.provider.value} returned an empty completion")
            success = True
            return text
        except LLMError:
            raise
        except asyncio.TimeoutError as e:
            logger.error("%s request timed out", self.provider.value)
            raise LLMError(f"{self.provider.value} request timed out") from e
        except (aiohttp.ClientError, KeyError, IndexError, TypeError, ValueError) as e:
            logger.error("%s generation failed: %s", self.provider.value, e)
            raise LLMError(f"{self.provider.value} generation failed: {e}") from e
        finally:
            self._track_request_performance(loop.time() - start, success)

    async def _post(self, url: str, payload: Dict[str, Any], headers: Dict[str, str]) -> Any:
        session = await self._get_session()
        async with session.post(url, json=payload, headers=headers) as response:
            if response.status != 200:
                error = await response.text()
                raise LLMError(f"{self.provider.value} error {response.status}: {error[:200]}")
            return await response.json()

    async def _generate_anthropic(
        self, system_prompt: str, user_prompt: str, temperature: float, max_tokens: int
    ) -> str:
        data = await self._post(
            ANTHROPIC_URL,
            {
                "model": self.anthropic_model,
                "max_tokens": max_tokens,
                "temperature": temperature,
                "system": system_prompt,
                "messages": [{"role": "user", "content": user_prompt}],
            },
            {
                "x-api-key": self.anthropic_key or "",
                "anthropic-version": ANTHROPIC_VERSION,
                "Content-Type": "application/json",
            },
        )
        return data["content"][0]["text"]

    async def _generate_openai(
        self, system_prompt: str, user_prompt: str, temperature: float, max_tokens: int
    ) -> str:
        data = await self._post(
            OPENAI_URL,
            {
                "model": self.openai_model,
                "max_tokens": max_tokens,
                "temperature": temperature,
                "messages": [
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
            },
            {
                "Authorization": f"Bearer {self.openai_key}",
                "Content-Type": "application/json",
            },
        )
        return data["choices"][0]["message"]["content"]

    async def _generate_ollama(
        self, system_prompt: str, user_prompt: str, temperature: float, max_tokens: int
    ) -> str:
        data = await self._post(
            f"{self.ollama_host}/api/chat",
            {
                "model": self.ollama_model,
                "messages": [
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                "stream": False,
                "options": {"temperature": temperature, "num_predict": max_tokens},
            },
            {"Content-Type": "application/json"},
        )
        return data["message"]["content"]

    def _track_request_performance(self, response_time: float, success: bool) -> None:
        self._request_count += 1
        self._total_response_time += response_time
        if not success:
            self._error_count += 1
        if response_time > self.request_timeout_seconds / 2:
            logger.warning("Slow LLM request: %.2fs", response_time)

    def get_performance_stats(self) -> Dict[str, Any]:
        """Request counters for the health endpoint."""
        avg = self._total_response_time / self._request_count if self._request_count else 0.0
        error_rate = self._error_count / self._request_count * 100 if self._request_count else 0.0
        return {
            "provider": self.provider.value,
            "model": self.model,
            "available": self.available,
            "total_requests": self._request_count,
            "total_errors": self._error_count,
            "error_rate_percent": round(error_rate, 2),
            "average_response_time_seconds": round(avg, 3),
        }

    async def close(self) -> None:
        """Close the client and cleanup resources."""
        if self._session and not self._session.closed:
            await self._session.close()
            logger.debug("Closed HTTP session")
