"""
Provider adapters, one module per LangChain integration package.

Adapter modules are imported on first lookup, so a missing integration
package only fails when its provider is actually requested.
"""

import importlib
from typing import TYPE_CHECKING, Dict, Tuple, Type

from ..config import Provider

if TYPE_CHECKING:
    from ..base import BaseLLMProvider

_ADAPTERS: Dict[Provider, Tuple[str, str]] = {
    Provider.GEMINI: ("gemini", "GeminiProvider"),
    Provider.ANTHROPIC: ("anthropic", "AnthropicProvider"),
    Provider.OPENAI: ("openai", "OpenAIProvider"),
}


def get_provider_class(provider: Provider) -> Type["BaseLLMProvider"]:
    """Return the adapter class for a provider."""
    if provider not in _ADAPTERS:
        raise ValueError(f"No provider implementation for: {provider}")
    module_name, class_name = _ADAPTERS[provider]
    module = importlib.import_module(f".{module_name}", __name__)
    return getattr(module, class_name)


__all__ = ["get_provider_class"]
