"""Reasoning service integration."""

from .client import (
    GeminiClient,
    GenerationConfig,
    GenerationResult,
    OllamaClient,
    OpenAIClient,
    ReasoningClient,
    create_client,
)

__all__ = [
    "GeminiClient",
    "GenerationConfig",
    "GenerationResult",
    "OllamaClient",
    "OpenAIClient",
    "ReasoningClient",
    "create_client",
]
