"""
Anthropic Claude provider implementation.

Requires: langchain-anthropic>=0.1.0
Compatible with: langchain-core>=0.2.0
"""

import os
from typing import Any

from ..base import BaseLLMProvider
from ..config import ModelConfig, Provider


class AnthropicProvider(BaseLLMProvider):
    """
    Anthropic Claude provider using LangChain.

    Environment variables:
        ANTHROPIC_API_KEY: Anthropic API key (required)
    """

    provider = Provider.ANTHROPIC

    def _create_model(self, config: ModelConfig, **kwargs) -> Any:
        """Create the Claude chat model."""
        try:
            from langchain_anthropic import ChatAnthropic
        except ImportError:
            raise ImportError(
                "langchain-anthropic is required for Claude support. "
                "Install with: pip install langchain-anthropic>=0.1.0"
            )

        api_key = kwargs.pop("api_key", None)
        if not api_key:
            api_key = os.getenv("ANTHROPIC_API_KEY")

        if not api_key:
            raise ValueError(
                "ANTHROPIC_API_KEY environment variable not set. "
                "Set it in your .env file or pass api_key parameter."
            )

        model_kwargs = {
            "model": config.model_id,
            "temperature": self._temperature_for(config),
            "max_tokens": self._max_tokens_for(config),
            "api_key": api_key,
        }
        model_kwargs.update(kwargs)

        return ChatAnthropic(**model_kwargs)
