"""Reasoning service clients for the character guesser.

Each client turns a prompt into reply text and maps transport failures onto
the turn error types. Gemini is called through its REST API; OpenAI and
Ollama through their SDKs.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Any

import httpx
from ollama import AsyncClient, ResponseError
from openai import APIError, APIStatusError, AsyncOpenAI

from ..config import LLMConfig
from ..errors import ConfigurationError, EmptyReplyError, UpstreamError

logger = logging.getLogger(__name__)


@dataclass
class GenerationConfig:
    """Configuration for text generation."""

    temperature: float = 0.7
    max_tokens: int = 1024
    top_p: float = 0.95
    top_k: int = 40
    safety_settings: list[dict] = field(default_factory=list)

    @classmethod
    def from_llm_config(cls, config: LLMConfig) -> "GenerationConfig":
        return cls(
            temperature=config.temperature,
            max_tokens=config.max_tokens,
            top_p=config.top_p,
            top_k=config.top_k,
            safety_settings=[
                {"category": category, "threshold": config.safety_threshold}
                for category in config.safety_categories
            ],
        )


@dataclass
class GenerationResult:
    """Result of a text generation."""

    content: str
    model: str
    prompt_eval_count: int | None = None  # tokens in prompt
    eval_count: int | None = None  # tokens generated


class ReasoningClient:
    """Common surface of the reasoning service clients."""

    provider = "base"

    def __init__(
        self,
        model: str,
        api_key: str | None = None,
        api_key_env: str | None = None,
        timeout: float = 30.0,
        default_config: GenerationConfig | None = None,
    ):
        """Initialize the client.

        Args:
            model: Model name to use
            api_key: Explicit credential; takes precedence over api_key_env
            api_key_env: Environment variable read at call time for the credential
            timeout: Request timeout in seconds
            default_config: Generation settings used when a call passes none
        """
        self.model = model
        self._api_key = api_key
        self.api_key_env = api_key_env
        self.timeout = timeout
        self.default_config = default_config or GenerationConfig()

    @property
    def api_key(self) -> str | None:
        if self._api_key:
            return self._api_key
        if self.api_key_env:
            return os.environ.get(self.api_key_env) or None
        return None

    @property
    def requires_api_key(self) -> bool:
        return True

    def is_configured(self) -> bool:
        """Check whether a credential is available, without any network call."""
        return bool(self.api_key) or not self.requires_api_key

    def ensure_configured(self) -> None:
        """Raise ConfigurationError if the credential is missing."""
        if not self.is_configured():
            raise ConfigurationError("API key not configured")

    async def agenerate(
        self, prompt: str, config: GenerationConfig | None = None
    ) -> GenerationResult:
        """Send one prompt and return the reply text."""
        raise NotImplementedError


class GeminiClient(ReasoningClient):
    """Google Gemini through the REST generateContent endpoint."""

    provider = "gemini"

    def __init__(
        self,
        model: str = "gemini-2.0-flash",
        api_key: str | None = None,
        api_key_env: str | None = "GOOGLE_GEMINI_API_KEY",
        base_url: str = "https://generativelanguage.googleapis.com/v1beta",
        timeout: float = 30.0,
        default_config: GenerationConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        super().__init__(model, api_key, api_key_env, timeout, default_config)
        self.base_url = base_url.rstrip("/")
        self._transport = transport

    def build_request_body(self, prompt: str, config: GenerationConfig) -> dict[str, Any]:
        """Build the generateContent payload."""
        return {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {
                "temperature": config.temperature,
                "topK": config.top_k,
                "topP": config.top_p,
                "maxOutputTokens": config.max_tokens,
            },
            "safetySettings": config.safety_settings,
        }

    @staticmethod
    def extract_text(data: Any) -> str | None:
        """Pull candidates[0].content.parts[0].text out of a reply, if present."""
        try:
            text = data["candidates"][0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError):
            return None
        return text if isinstance(text, str) else None

    async def agenerate(
        self, prompt: str, config: GenerationConfig | None = None
    ) -> GenerationResult:
        """Generate a reply for a prompt.

        Raises:
            ConfigurationError: If no API key is available
            UpstreamError: On transport failure or non-success status
            EmptyReplyError: If the reply carries no candidate text
        """
        self.ensure_configured()
        config = config or self.default_config
        url = f"{self.base_url}/models/{self.model}:generateContent"

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(
                    url,
                    params={"key": self.api_key},
                    json=self.build_request_body(prompt, config),
                )
        except httpx.HTTPError as e:
            logger.warning(f"Gemini request failed: {e.__class__.__name__}")
            raise UpstreamError(f"Gemini API request failed: {e.__class__.__name__}") from e

        if response.is_error:
            raise UpstreamError(
                f"Gemini API error: {response.status_code}",
                status=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise EmptyReplyError("Invalid Gemini API response format") from e

        text = self.extract_text(data)
        if not text or not text.strip():
            raise EmptyReplyError("Invalid Gemini API response format")

        usage = data.get("usageMetadata") or {}
        return GenerationResult(
            content=text,
            model=data.get("modelVersion", self.model),
            prompt_eval_count=usage.get("promptTokenCount"),
            eval_count=usage.get("candidatesTokenCount"),
        )


class OpenAIClient(ReasoningClient):
    """OpenAI chat completions."""

    provider = "openai"

    def __init__(
        self,
        model: str = "gpt-4o-mini",
        api_key: str | None = None,
        api_key_env: str | None = "OPENAI_API_KEY",
        timeout: float = 30.0,
        default_config: GenerationConfig | None = None,
    ):
        super().__init__(model, api_key, api_key_env, timeout, default_config)

    async def agenerate(
        self, prompt: str, config: GenerationConfig | None = None
    ) -> GenerationResult:
        """Generate a reply for a prompt (single user message)."""
        self.ensure_configured()
        config = config or self.default_config

        try:
            async with AsyncOpenAI(api_key=self.api_key, timeout=self.timeout) as client:
                response = await client.chat.completions.create(
                    model=self.model,
                    messages=[{"role": "user", "content": prompt}],
                    temperature=config.temperature,
                    max_tokens=config.max_tokens,
                    top_p=config.top_p,
                )
        except APIStatusError as e:
            raise UpstreamError(f"OpenAI API error: {e.status_code}", status=e.status_code) from e
        except APIError as e:
            raise UpstreamError(f"OpenAI API request failed: {e.__class__.__name__}") from e

        content = response.choices[0].message.content if response.choices else None
        if not content or not content.strip():
            raise EmptyReplyError("OpenAI API returned no text")

        return GenerationResult(
            content=content,
            model=response.model,
            prompt_eval_count=response.usage.prompt_tokens if response.usage else None,
            eval_count=response.usage.completion_tokens if response.usage else None,
        )


class OllamaClient(ReasoningClient):
    """Local Ollama server; needs no credential."""

    provider = "ollama"

    def __init__(
        self,
        model: str = "hermes3:latest",
        base_url: str = "http://localhost:11434",
        timeout: float = 30.0,
        default_config: GenerationConfig | None = None,
    ):
        super().__init__(model, timeout=timeout, default_config=default_config)
        self.base_url = base_url

    @property
    def requires_api_key(self) -> bool:
        return False

    async def agenerate(
        self, prompt: str, config: GenerationConfig | None = None
    ) -> GenerationResult:
        """Generate a reply for a prompt (single user message)."""
        config = config or self.default_config
        try:
            async with AsyncClient(host=self.base_url, timeout=self.timeout) as client:
                response = await client.chat(
                    model=self.model,
                    messages=[{"role": "user", "content": prompt}],
                    options={
                        "temperature": config.temperature,
                        "num_predict": config.max_tokens,
                        "top_p": config.top_p,
                        "top_k": config.top_k,
                    },
                )
        except ResponseError as e:
            raise UpstreamError(f"Ollama error: {e.status_code}", status=e.status_code) from e
        except (httpx.HTTPError, ConnectionError) as e:
            raise UpstreamError(f"Ollama request failed: {e.__class__.__name__}") from e

        content = response["message"]["content"]
        if not content or not content.strip():
            raise EmptyReplyError("Ollama returned no text")

        return GenerationResult(
            content=content,
            model=response.get("model", self.model),
            prompt_eval_count=response.get("prompt_eval_count"),
            eval_count=response.get("eval_count"),
        )


def create_client(config: LLMConfig) -> ReasoningClient:
    """Create the reasoning client named by ``config.provider``.

    Connection settings left unset in the config keep the client's defaults.

    Raises:
        ConfigurationError: If the provider is unknown
    """
    kwargs: dict[str, Any] = {
        "timeout": config.timeout,
        "default_config": GenerationConfig.from_llm_config(config),
    }
    if config.model:
        kwargs["model"] = config.model
    if config.base_url and config.provider in ("gemini", "ollama"):
        kwargs["base_url"] = config.base_url
    if config.provider in ("gemini", "openai"):
        kwargs["api_key"] = config.api_key
        if config.api_key_env:
            kwargs["api_key_env"] = config.api_key_env

    if config.provider == "gemini":
        return GeminiClient(**kwargs)
    if config.provider == "openai":
        return OpenAIClient(**kwargs)
    if config.provider == "ollama":
        return OllamaClient(**kwargs)
    raise ConfigurationError(f"Unknown LLM provider: {config.provider}")
