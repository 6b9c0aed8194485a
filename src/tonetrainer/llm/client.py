"""LLM client for cloud providers and LM Studio.

Provides a unified interface for LLM interactions through the
OpenAI-compatible chat completions API.

Supported providers:
- anthropic: Anthropic API (via its OpenAI-compatible endpoint)
- openai: OpenAI API
- lmstudio: Local LM Studio server
"""

from __future__ import annotations

import os
import time
from dataclasses import dataclass, field
from typing import Any, Literal

import structlog
from openai import OpenAI

from tonetrainer.config.app_config import AppConfig

logger = structlog.get_logger(__name__)

# =============================================================================
# CONSTANTS
# =============================================================================

Provider = Literal["anthropic", "openai", "lmstudio"]

# Provider-specific defaults
PROVIDER_DEFAULTS: dict[str, dict[str, Any]] = {
    "anthropic": {
        "base_url": "https://api.anthropic.com/v1/",
        "api_key_env": "ANTHROPIC_API_KEY",
        "model": "claude-sonnet-4-20250514",
    },
    "openai": {
        "base_url": "https://api.openai.com/v1",
        "api_key_env": "OPENAI_API_KEY",
        "model": "gpt-4o-mini",
    },
    "lmstudio": {
        "base_url": "http://localhost:1234/v1",
        "api_key": "lm-studio",  # LM Studio doesn't need a real API key
        "model": "default",
    },
}


# =============================================================================
# DATA CLASSES
# =============================================================================


@dataclass
class LLMConfig:
    """Configuration for LLM client."""

    provider: Provider = "anthropic"
    base_url: str = "https://api.anthropic.com/v1/"
    model: str = "claude-sonnet-4-20250514"
    temperature: float = 0.7
    max_tokens: int = 1500
    timeout: int = 30
    max_retries: int = 1
    api_key: str | None = None

    @classmethod
    def for_provider(cls, provider: str, **overrides: Any) -> LLMConfig:
        """Build a config from the built-in provider defaults."""
        defaults = PROVIDER_DEFAULTS.get(provider, PROVIDER_DEFAULTS["anthropic"])

        api_key = None
        if "api_key_env" in defaults:
            api_key = os.environ.get(defaults["api_key_env"])
        elif "api_key" in defaults:
            api_key = defaults["api_key"]

        values: dict[str, Any] = {
            "provider": provider,
            "base_url": defaults["base_url"],
            "model": defaults["model"],
            "api_key": api_key,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

    @classmethod
    def from_app_config(cls, app_config: AppConfig) -> LLMConfig:
        """Build the feedback LLM config from the application config."""
        feedback = app_config.feedback
        provider_config = app_config.get_provider(feedback.provider)

        base_url = None
        model = feedback.model
        api_key = None
        if provider_config is not None:
            base_url = provider_config.base_url
            model = model or provider_config.default_model
            api_key = provider_config.get_api_key()

        return cls.for_provider(
            feedback.provider,
            base_url=base_url,
            model=model,
            api_key=api_key,
            temperature=feedback.temperature,
            max_tokens=feedback.max_tokens,
            timeout=feedback.timeout,
            max_retries=feedback.max_retries,
        )


@dataclass
class Message:
    """A chat message."""

    role: Literal["system", "user", "assistant"]
    content: str

    def to_dict(self) -> dict[str, str]:
        """Convert to dictionary for API call."""
        return {"role": self.role, "content": self.content}


@dataclass
class LLMResponse:
    """Response from LLM."""

    content: str
    model: str
    provider: str
    usage: dict[str, int] = field(default_factory=dict)
    latency_ms: int = 0

    @property
    def total_tokens(self) -> int:
        """Get total token count."""
        return self.usage.get("total_tokens", 0)


class LLMError(Exception):
    """Error during LLM interaction."""

    pass


class LLMConnectionError(LLMError):
    """Error connecting to LLM server."""

    pass


class LLMResponseError(LLMError):
    """Error in LLM response."""

    pass


# =============================================================================
# LLM CLIENT
# =============================================================================


class LLMClient:
    """Unified client for LLM interactions.

    Requests carry an explicit timeout. The OpenAI SDK retries a failed
    request at most ``config.max_retries`` times before raising.
    """

    def __init__(self, config: LLMConfig | None = None):
        """Initialize LLM client.

        Args:
            config: LLM configuration (provider defaults if not provided)
        """
        self.config = config or LLMConfig()

        self._client = OpenAI(
            base_url=self.config.base_url,
            api_key=self.config.api_key or "not-needed",
            timeout=self.config.timeout,
            max_retries=self.config.max_retries,
        )

        logger.info(
            "llm_client_initialized",
            provider=self.config.provider,
            model=self.config.model,
            base_url=self.config.base_url,
        )

    def chat(
        self,
        messages: list[Message],
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> LLMResponse:
        """Send chat completion request.

        Args:
            messages: List of messages in conversation
            temperature: Override default temperature
            max_tokens: Override default max tokens

        Returns:
            LLMResponse with content and metadata

        Raises:
            LLMConnectionError: If cannot connect to server
            LLMResponseError: If response is empty or malformed
            LLMError: For any other API failure (including non-2xx status)
        """
        if temperature is None:
            temperature = self.config.temperature
        if max_tokens is None:
            max_tokens = self.config.max_tokens

        request_kwargs: dict[str, Any] = {
            "model": self.config.model,
            "messages": [m.to_dict() for m in messages],
            "temperature": temperature,
            "max_tokens": max_tokens,
        }

        start_time = time.time()

        try:
            response = self._client.chat.completions.create(**request_kwargs)
        except Exception as e:
            error_msg = str(e)
            if "Connection" in error_msg or "connect" in error_msg.lower():
                raise LLMConnectionError(
                    f"Cannot connect to {self.config.provider} at {self.config.base_url}: {e}"
                ) from e
            raise LLMError(f"LLM call failed: {e}") from e

        latency_ms = int((time.time() - start_time) * 1000)

        if not getattr(response, "choices", None):
            raise LLMResponseError("Empty response from LLM")

        content = response.choices[0].message.content
        if not content:
            raise LLMResponseError("LLM response has no text content")

        usage = {}
        if response.usage:
            usage = {
                "prompt_tokens": response.usage.prompt_tokens,
                "completion_tokens": response.usage.completion_tokens,
                "total_tokens": response.usage.total_tokens,
            }

        logger.debug(
            "llm_response",
            provider=self.config.provider,
            model=response.model,
            tokens=usage.get("total_tokens", 0),
            latency_ms=latency_ms,
        )

        return LLMResponse(
            content=content,
            model=response.model,
            provider=self.config.provider,
            usage=usage,
            latency_ms=latency_ms,
        )

    def user_chat(self, user_message: str, max_tokens: int | None = None) -> str:
        """Single user-role message, no system prompt.

        Returns:
            Response content as string
        """
        response = self.chat(
            messages=[Message(role="user", content=user_message)],
            max_tokens=max_tokens,
        )
        return response.content

    def is_available(self) -> bool:
        """Check if LLM server is available.

        Returns:
            True if server responds, False otherwise
        """
        try:
            self._client.models.list()
            return True
        except Exception:
            return False
