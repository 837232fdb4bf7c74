"""
OpenAI GPT provider implementation.

Requires: langchain-openai>=0.1.0
Compatible with: langchain-core>=0.2.0
"""

import os
from typing import Any

from ..base import BaseLLMProvider
from ..config import ModelConfig, Provider


class OpenAIProvider(BaseLLMProvider):
    """
    OpenAI GPT provider using LangChain.

    Environment variables:
        OPENAI_API_KEY: OpenAI API key (required)
    """

    provider = Provider.OPENAI

    def _create_model(self, config: ModelConfig, **kwargs) -> Any:
        """Create the OpenAI chat model."""
        try:
            from langchain_openai import ChatOpenAI
        except ImportError:
            raise ImportError(
                "langchain-openai is required for OpenAI support. "
                "Install with: pip install langchain-openai>=0.1.0"
            )

        api_key = kwargs.pop("api_key", None)
        if not api_key:
            api_key = os.getenv("OPENAI_API_KEY")

        if not api_key:
            raise ValueError(
                "OPENAI_API_KEY environment variable not set. "
                "Set it in your .env file or pass api_key parameter."
            )

        model_kwargs = {
            "model": config.model_id,
            "temperature": self._temperature_for(config),
            "max_tokens": self._max_tokens_for(config),
            "api_key": api_key,
        }
        model_kwargs.update(kwargs)

        return ChatOpenAI(**model_kwargs)
