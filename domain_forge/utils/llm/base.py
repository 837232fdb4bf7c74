"""
Base LLM wrapper exposing LangChain chat models as generative providers.

A provider instance satisfies the generative bridge's provider interface:
an async generate(prompt, model=None) -> str method. No retries happen here;
timeouts and fallbacks are applied by the bridge.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv

from .config import ModelConfig, Provider, get_default_model, get_model_config

logger = logging.getLogger(__name__)


@dataclass
class Message:
    """Simple message container for provider-agnostic use."""
    role: str  # "system", "human", "assistant"
    content: str

    def to_langchain(self):
        """Convert to LangChain message type."""
        from langchain_core.messages import SystemMessage, HumanMessage, AIMessage

        if self.role == "system":
            return SystemMessage(content=self.content)
        elif self.role == "human" or self.role == "user":
            return HumanMessage(content=self.content)
        elif self.role == "assistant" or self.role == "ai":
            return AIMessage(content=self.content)
        else:
            raise ValueError(f"Unknown role: {self.role}")


def content_to_text(content: Any) -> str:
    """
    Flatten a chat response's content to plain text.

    Some integrations return a list of content blocks instead of a string.
    """
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for block in content:
            if isinstance(block, str):
                parts.append(block)
            elif isinstance(block, dict) and block.get("type") == "text":
                parts.append(block.get("text", ""))
        return "".join(parts)
    return str(content)


class BaseLLMProvider(ABC):
    """
    Abstract base class for LLM providers.

    Subclasses implement provider-specific model construction. Chat models are
    created lazily, once per model name, so a per-call model override reuses
    the same client on later calls.
    """

    provider: Provider

    def __init__(
        self,
        model_name: Optional[str] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        system_prompt: Optional[str] = None,
        **kwargs
    ):
        """
        Initialize provider.

        Args:
            model_name: Default model (must be in MODEL_REGISTRY and belong to
                this provider); the provider's default model if None
            temperature: Sampling temperature (model default if None)
            max_tokens: Max output tokens (model default if None)
            system_prompt: Optional system message sent before every prompt
            **kwargs: Provider-specific arguments passed to the chat model
        """
        self.model_name = model_name or get_default_model(self.provider)
        self.config = self._resolve_config(self.model_name)
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.system_prompt = system_prompt
        self._model_kwargs = kwargs
        self._models: Dict[str, Any] = {}

    def _resolve_config(self, model_name: str) -> ModelConfig:
        config = get_model_config(model_name)
        if config.provider != self.provider:
            raise ValueError(
                f"Model {model_name} belongs to {config.provider.value}, "
                f"not {self.provider.value}"
            )
        return config

    @abstractmethod
    def _create_model(self, config: ModelConfig, **kwargs) -> Any:
        """Create the underlying LangChain chat model. Provider-specific."""
        pass

    def get_model(self, model_name: Optional[str] = None) -> Any:
        """Return the chat model for model_name, creating it on first use."""
        name = model_name or self.model_name
        if name not in self._models:
            config = self._resolve_config(name)
            logger.debug(f"Creating {self.provider.value} chat model {config.model_id}")
            self._models[name] = self._create_model(config, **dict(self._model_kwargs))
        return self._models[name]

    def _build_messages(self, prompt: str) -> List[Any]:
        messages = []
        if self.system_prompt:
            messages.append(Message(role="system", content=self.system_prompt))
        messages.append(Message(role="human", content=prompt))
        return [m.to_langchain() for m in messages]

    def _temperature_for(self, config: ModelConfig) -> float:
        if self.temperature is not None:
            return self.temperature
        return config.default_temperature

    def _max_tokens_for(self, config: ModelConfig) -> int:
        return self.max_tokens or config.max_tokens

    async def generate(self, prompt: str, model: Optional[str] = None) -> str:
        """
        Generate text for a prompt.

        Args:
            prompt: User prompt
            model: Optional model override (same provider)

        Returns:
            Response text
        """
        chat_model = self.get_model(model)
        response = await chat_model.ainvoke(self._build_messages(prompt))
        return content_to_text(response.content)


def create_provider(
    model_name: str,
    temperature: Optional[float] = None,
    system_prompt: Optional[str] = None,
    **kwargs
) -> BaseLLMProvider:
    """
    Factory function to create the appropriate provider for a model.

    Loads a .env file (if present) so API keys can live there.

    Args:
        model_name: Name of the model (from MODEL_REGISTRY)
        temperature: Sampling temperature
        system_prompt: Optional system message
        **kwargs: Provider-specific arguments

    Returns:
        Configured LLM provider instance
    """
    from .providers import get_provider_class

    load_dotenv()
    config = get_model_config(model_name)
    provider_class = get_provider_class(config.provider)
    return provider_class(
        model_name, temperature=temperature, system_prompt=system_prompt, **kwargs
    )
