"""
Google Gemini provider implementation.

Requires: langchain-google-genai>=1.0.0
Compatible with: langchain-core>=0.2.0
"""

import os
from typing import Any

from ..base import BaseLLMProvider
from ..config import ModelConfig, Provider


class GeminiProvider(BaseLLMProvider):
    """
    Google Gemini provider using LangChain.

    Environment variables:
        GEMINI_API_KEY: Google AI API key (required)
        GOOGLE_API_KEY: Alternative name for API key
    """

    provider = Provider.GEMINI

    def _create_model(self, config: ModelConfig, **kwargs) -> Any:
        """Create the Gemini chat model."""
        try:
            from langchain_google_genai import ChatGoogleGenerativeAI
        except ImportError:
            raise ImportError(
                "langchain-google-genai is required for Gemini support. "
                "Install with: pip install langchain-google-genai>=1.0.0"
            )

        # Get API key from environment
        api_key = kwargs.pop("api_key", None)
        if not api_key:
            api_key = os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY")

        if not api_key:
            raise ValueError(
                "GEMINI_API_KEY environment variable not set. "
                "Set it in your .env file or pass api_key parameter."
            )

        model_kwargs = {
            "model": config.model_id,
            "temperature": self._temperature_for(config),
            "max_output_tokens": self._max_tokens_for(config),
            "google_api_key": api_key,
        }
        model_kwargs.update(kwargs)

        return ChatGoogleGenerativeAI(**model_kwargs)
