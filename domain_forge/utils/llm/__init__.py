"""
Multi-provider LLM text generation for generative scenario fields.

Wraps LangChain chat models (Gemini, Claude, OpenAI) behind the provider
interface expected by GenerativeBridge: an async generate(prompt, model=None).

Usage:
    from domain_forge import RandomizationEngine
    from domain_forge.utils.llm import create_provider

    engine = RandomizationEngine(seed=7)
    engine.register_provider(
        "openai",
        create_provider("gpt-4o-mini", system_prompt="Answer in one sentence."),
    )
    engine.apply_generative_fuzzing(
        "npc.personality",
        provider="openai",
        prompt="Describe a merchant during a famine",
        timeout_ms=5000,
        fallback="A wary merchant",
    )

Available models:
    Gemini: gemini-2.0-flash, gemini-2.5-flash, gemini-2.5-pro
    Claude: claude-3-5-sonnet, claude-3-5-haiku (requires langchain-anthropic)
    OpenAI: gpt-4o, gpt-4o-mini (requires langchain-openai)
"""

from .base import (
    BaseLLMProvider,
    Message,
    content_to_text,
    create_provider,
)
from .config import (
    Provider,
    ModelConfig,
    get_model_config,
    get_default_model,
    list_models,
    MODEL_REGISTRY,
    DEFAULT_MODELS,
)

__all__ = [
    # Core classes
    "BaseLLMProvider",
    "Message",
    "content_to_text",
    # Factory
    "create_provider",
    # Config
    "Provider",
    "ModelConfig",
    "get_model_config",
    "get_default_model",
    "list_models",
    "MODEL_REGISTRY",
    "DEFAULT_MODELS",
]
