"""
Generative bridge: named asynchronous text providers with timeout and fallback.

Providers are registered by name on a bridge instance and resolved lazily when
invoked, so a scenario can reference a provider that is registered later.

Usage:
    bridge = GenerativeBridge()
    bridge.register("openai", create_provider("gpt-4o-mini"))

    text = await bridge.invoke(
        provider="openai",
        prompt="Describe a stressed merchant",
        timeout_ms=2000,
        fallback="A tired merchant",
    )
"""

import asyncio
import inspect
import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional, Union

from ..errors import ProviderNotRegisteredError, ProviderTimeoutError
from ..synthetic.models import GenerationRequest, coerce_params

logger = logging.getLogger(__name__)

ProviderFn = Callable[[str, Optional[str]], Awaitable[str]]


async def _call_provider(provider_fn: ProviderFn, prompt: str, model: Optional[str]) -> Any:
    """Run the provider, accepting an already-computed value as well as an awaitable."""
    result = provider_fn(prompt, model)
    if inspect.isawaitable(result):
        result = await result
    return result


def _drain(task: "asyncio.Future") -> None:
    """Mark a finished task's outcome as retrieved."""
    if not task.cancelled():
        exc = task.exception()
        if exc is not None:
            logger.debug(f"Discarded late provider failure: {exc!r}")


def _abandon(task: "asyncio.Future") -> None:
    """Cancel a provider call that lost its race and swallow whatever it settles to."""
    task.cancel()
    task.add_done_callback(_drain)


class GenerativeBridge:
    """
    Registry of named text providers.

    Registration is last-write-wins with no locking; callers that register
    from several tasks must serialize that themselves.
    """

    def __init__(self):
        self._providers: Dict[str, ProviderFn] = {}

    def register(self, name: str, provider: Any) -> "GenerativeBridge":
        """
        Register a provider under name, replacing any previous one.

        Args:
            name: Provider identifier (e.g. 'openai')
            provider: Async callable (prompt, model) -> str, or an object
                exposing an equivalent generate(prompt, model) method

        Returns:
            self, for chaining
        """
        if not isinstance(name, str) or not name:
            raise ValueError(f"Provider name must be a non-empty string, got {name!r}")

        generate = getattr(provider, "generate", None)
        if callable(generate):
            provider_fn = generate
        elif callable(provider):
            provider_fn = provider
        else:
            raise TypeError(
                f"Provider {name!r} must be callable or expose generate(), "
                f"got {type(provider).__name__}"
            )

        if name in self._providers:
            logger.debug(f"Replacing provider {name!r}")
        self._providers[name] = provider_fn
        return self

    def unregister(self, name: str) -> None:
        """Remove a provider. Missing names are ignored."""
        self._providers.pop(name, None)

    def is_registered(self, name: str) -> bool:
        return name in self._providers

    def __contains__(self, name: str) -> bool:
        return self.is_registered(name)

    @property
    def providers(self) -> List[str]:
        """Registered provider names, sorted."""
        return sorted(self._providers)

    async def invoke(
        self,
        request: Optional[Union[GenerationRequest, Dict[str, Any]]] = None,
        **kwargs: Any,
    ) -> str:
        """
        Call a provider and apply timeout and fallback rules.

        A fallback, when set, replaces any failure: timeout, provider
        exception, or a provider call that ends cancelled on its own. Without
        one, a timeout raises ProviderTimeoutError and the provider's error
        propagates unchanged. Cancelling the caller always propagates.

        Args:
            request: GenerationRequest (or mapping of its fields); keyword
                arguments are used when request is omitted

        Returns:
            The provider's text, or the fallback

        Raises:
            ProviderNotRegisteredError: If the provider name is unknown
            ProviderTimeoutError: On timeout without a fallback
        """
        if request is None:
            request = kwargs
        request = coerce_params(GenerationRequest, request)

        provider_fn = self._providers.get(request.provider)
        if provider_fn is None:
            raise ProviderNotRegisteredError(request.provider)

        logger.debug(
            f"Invoking provider {request.provider!r} "
            f"(model={request.model}, timeout_ms={request.timeout_ms})"
        )
        task = asyncio.ensure_future(
            _call_provider(provider_fn, request.prompt, request.model)
        )
        timeout = request.timeout_ms / 1000.0 if request.timeout_ms is not None else None

        try:
            done, _ = await asyncio.wait({task}, timeout=timeout)
        except asyncio.CancelledError:
            if not task.done():
                _abandon(task)
            raise

        try:
            if task not in done:
                _abandon(task)
                raise ProviderTimeoutError(request.provider, request.timeout_ms)
            return task.result()

        except (Exception, asyncio.CancelledError) as e:
            if request.fallback is None:
                raise
            logger.warning(
                f"Provider {request.provider!r} failed ({type(e).__name__}: {e}); "
                f"using fallback"
            )
            return request.fallback
