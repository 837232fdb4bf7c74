"""
Exception hierarchy for scenario generation.

Input errors are raised synchronously at the point of use. Provider errors are
raised when a generative operation is invoked, never at registration time.
Validation errors belong to whatever validator the caller attaches and are not
wrapped here.
"""

from typing import Optional


class ForgeError(Exception):
    """Base exception for all domain-forge errors."""
    pass


class InputError(ForgeError, ValueError):
    """Raised when sampling input or distribution parameters are invalid."""
    pass


class EmptyInputError(InputError):
    """Raised when a weight map has no entries."""
    pass


class ZeroWeightError(InputError):
    """Raised when the total weight of a weight map is not positive."""
    pass


class InvalidParameterError(InputError):
    """Raised when distribution parameters, seeds or field paths are invalid."""
    pass


class EngineStateError(ForgeError, RuntimeError):
    """Raised when the engine is configured or run in the wrong state."""
    pass


class ProviderNotRegisteredError(ForgeError, LookupError):
    """Raised when a generative call names a provider that is not registered."""

    def __init__(self, provider: str):
        self.provider = provider
        super().__init__(
            f'LLM provider "{provider}" is not registered. '
            f'Call register("{provider}", fn) first.'
        )


class ProviderTimeoutError(ForgeError, TimeoutError):
    """Raised when a provider call exceeds its timeout and no fallback is set."""

    def __init__(self, provider: str, timeout_ms: Optional[int]):
        self.provider = provider
        self.timeout_ms = timeout_ms
        super().__init__(f'LLM provider "{provider}" timed out after {timeout_ms}ms.')
