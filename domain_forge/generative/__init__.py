"""
Generative enrichment of scenario fields through named text providers.
"""

from .bridge import GenerativeBridge, ProviderFn

__all__ = [
    "GenerativeBridge",
    "ProviderFn",
]
