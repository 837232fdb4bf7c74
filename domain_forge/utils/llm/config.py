"""
LLM configuration: model definitions and defaults.

Designed to support multiple providers with easy expansion.
"""

from dataclasses import dataclass
from typing import Dict, Optional
from enum import Enum


class Provider(Enum):
    """Supported LLM providers."""
    GEMINI = "gemini"
    ANTHROPIC = "anthropic"
    OPENAI = "openai"


@dataclass
class ModelConfig:
    """Configuration for a specific model."""
    provider: Provider
    model_id: str
    display_name: str
    max_tokens: int = 8192
    default_temperature: float = 0.7


# Model registry - add new models here
MODEL_REGISTRY: Dict[str, ModelConfig] = {
    # Gemini models
    "gemini-2.0-flash": ModelConfig(
        provider=Provider.GEMINI,
        model_id="gemini-2.0-flash",
        display_name="Gemini 2.0 Flash",
    ),
    "gemini-2.5-pro": ModelConfig(
        provider=Provider.GEMINI,
        model_id="gemini-2.5-pro",
        display_name="Gemini 2.5 Pro",
    ),
    "gemini-2.5-flash": ModelConfig(
        provider=Provider.GEMINI,
        model_id="gemini-2.5-flash",
        display_name="Gemini 2.5 Flash",
    ),

    # Anthropic models
    "claude-3-5-sonnet": ModelConfig(
        provider=Provider.ANTHROPIC,
        model_id="claude-3-5-sonnet-20241022",
        display_name="Claude 3.5 Sonnet",
    ),
    "claude-3-5-haiku": ModelConfig(
        provider=Provider.ANTHROPIC,
        model_id="claude-3-5-haiku-20241022",
        display_name="Claude 3.5 Haiku",
    ),

    # OpenAI models
    "gpt-4o": ModelConfig(
        provider=Provider.OPENAI,
        model_id="gpt-4o",
        display_name="GPT-4o",
        max_tokens=16384,
    ),
    "gpt-4o-mini": ModelConfig(
        provider=Provider.OPENAI,
        model_id="gpt-4o-mini",
        display_name="GPT-4o Mini",
        max_tokens=16384,
    ),
}


# Default models per provider
DEFAULT_MODELS: Dict[Provider, str] = {
    Provider.GEMINI: "gemini-2.0-flash",
    Provider.ANTHROPIC: "claude-3-5-haiku",
    Provider.OPENAI: "gpt-4o-mini",
}


def get_model_config(model_name: str) -> ModelConfig:
    """Get configuration for a model by name."""
    if model_name not in MODEL_REGISTRY:
        available = ", ".join(sorted(MODEL_REGISTRY.keys()))
        raise ValueError(f"Unknown model: {model_name}. Available: {available}")
    return MODEL_REGISTRY[model_name]


def get_default_model(provider: Provider) -> str:
    """Get the default model name for a provider."""
    return DEFAULT_MODELS[provider]


def list_models(provider: Optional[Provider] = None) -> list:
    """List available models, optionally filtered by provider."""
    models = []
    for name, config in MODEL_REGISTRY.items():
        if provider is None or config.provider == provider:
            models.append({
                "name": name,
                "provider": config.provider.value,
                "display_name": config.display_name,
                "max_tokens": config.max_tokens,
            })
    return models
