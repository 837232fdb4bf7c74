"""Tests for GenerativeBridge registration, timeout and fallback handling."""

import asyncio
import gc
import logging
from typing import Optional

import pytest

from domain_forge.errors import (
    InvalidParameterError,
    ProviderNotRegisteredError,
    ProviderTimeoutError,
)
from domain_forge.generative import GenerativeBridge
from domain_forge.synthetic.models import GenerationRequest


def _run(coro):
    return asyncio.run(coro)


async def _echo(prompt: str, model: Optional[str] = None) -> str:
    return f"{model or 'default'}:{prompt}"


class _ObjectProvider:
    """Provider exposing generate() like the LLM adapters do."""

    def __init__(self):
        self.calls = []

    async def generate(self, prompt, model=None):
        self.calls.append((prompt, model))
        return prompt.upper()


class TestRegistration:

    def test_register_function(self):
        bridge = GenerativeBridge().register("echo", _echo)
        assert _run(bridge.invoke(provider="echo", prompt="hi")) == "default:hi"

    def test_register_object_with_generate(self):
        provider = _ObjectProvider()
        bridge = GenerativeBridge().register("obj", provider)

        assert _run(bridge.invoke(provider="obj", prompt="hi", model="m")) == "HI"
        assert provider.calls == [("hi", "m")]

    def test_model_is_passed_through(self):
        bridge = GenerativeBridge().register("echo", _echo)
        assert _run(bridge.invoke(provider="echo", prompt="p", model="gpt-4o")) == "gpt-4o:p"

    def test_last_registration_wins(self):
        async def other(prompt, model=None):
            return "other"

        bridge = GenerativeBridge().register("p", _echo).register("p", other)
        assert _run(bridge.invoke(provider="p", prompt="x")) == "other"

    def test_sync_provider_value_is_accepted(self):
        bridge = GenerativeBridge().register("sync", lambda prompt, model: f"sync:{prompt}")
        assert _run(bridge.invoke(provider="sync", prompt="x")) == "sync:x"

    def test_non_callable_provider_rejected(self):
        with pytest.raises(TypeError):
            GenerativeBridge().register("bad", 42)

    @pytest.mark.parametrize("name", ["", None])
    def test_empty_name_rejected(self, name):
        with pytest.raises(ValueError):
            GenerativeBridge().register(name, _echo)

    def test_providers_and_unregister(self):
        bridge = GenerativeBridge().register("b", _echo).register("a", _echo)
        assert bridge.providers == ["a", "b"]
        assert "a" in bridge

        bridge.unregister("a")
        bridge.unregister("missing")
        assert bridge.providers == ["b"]
        assert not bridge.is_registered("a")

    def test_bridges_are_independent(self):
        first = GenerativeBridge().register("echo", _echo)
        second = GenerativeBridge()
        assert "echo" in first
        assert "echo" not in second


class TestInvoke:

    def test_not_registered(self):
        with pytest.raises(ProviderNotRegisteredError) as exc_info:
            _run(GenerativeBridge().invoke(provider="openai", prompt="x"))

        assert exc_info.value.provider == "openai"
        assert 'register("openai"' in str(exc_info.value)

    def test_not_registered_ignores_fallback(self):
        with pytest.raises(ProviderNotRegisteredError):
            _run(GenerativeBridge().invoke(provider="missing", prompt="x", fallback="fb"))

    def test_accepts_request_object(self):
        bridge = GenerativeBridge().register("echo", _echo)
        request = GenerationRequest(provider="echo", prompt="obj", model="m")
        assert _run(bridge.invoke(request)) == "m:obj"

    def test_invalid_request_rejected(self):
        bridge = GenerativeBridge().register("echo", _echo)
        with pytest.raises(InvalidParameterError):
            _run(bridge.invoke(provider="echo", prompt=""))
        with pytest.raises(InvalidParameterError):
            _run(bridge.invoke(provider="echo", prompt="x", timeout_ms=-5))

    def test_timeout_without_fallback(self):
        async def slow(prompt, model=None):
            await asyncio.sleep(5)
            return "late"

        bridge = GenerativeBridge().register("slow", slow)
        with pytest.raises(ProviderTimeoutError) as exc_info:
            _run(bridge.invoke(provider="slow", prompt="x", timeout_ms=100))

        error = exc_info.value
        assert error.provider == "slow"
        assert error.timeout_ms == 100
        assert str(error) == 'LLM provider "slow" timed out after 100ms.'
        assert isinstance(error, TimeoutError)

    def test_timeout_with_fallback(self):
        async def slow(prompt, model=None):
            await asyncio.sleep(5)
            return "late"

        bridge = GenerativeBridge().register("slow", slow)
        assert _run(bridge.invoke(provider="slow", prompt="x", timeout_ms=50, fallback="X")) == "X"

    def test_fast_provider_within_timeout(self):
        bridge = GenerativeBridge().register("echo", _echo)
        assert _run(bridge.invoke(provider="echo", prompt="x", timeout_ms=1000)) == "default:x"

    def test_provider_exception_propagates_unchanged(self):
        error = RuntimeError("API error")

        async def failing(prompt, model=None):
            raise error

        bridge = GenerativeBridge().register("failing", failing)
        with pytest.raises(RuntimeError) as exc_info:
            _run(bridge.invoke(provider="failing", prompt="x"))
        assert exc_info.value is error

    def test_provider_exception_with_fallback(self, caplog):
        async def failing(prompt, model=None):
            raise RuntimeError("API error")

        bridge = GenerativeBridge().register("failing", failing)
        with caplog.at_level(logging.WARNING, logger="domain_forge.generative.bridge"):
            result = _run(bridge.invoke(provider="failing", prompt="x", fallback="fb"))

        assert result == "fb"
        assert "using fallback" in caplog.text
        assert "API error" in caplog.text

    def test_abandoned_call_does_not_leak_errors(self):
        """A provider that fails after losing the race is drained quietly."""
        reported = []

        async def fails_late(prompt, model=None):
            try:
                await asyncio.sleep(0.2)
            finally:
                raise RuntimeError("late failure")

        async def scenario():
            loop = asyncio.get_running_loop()
            loop.set_exception_handler(lambda _loop, context: reported.append(context))

            bridge = GenerativeBridge().register("late", fails_late)
            result = await bridge.invoke(
                provider="late", prompt="x", timeout_ms=20, fallback="fb"
            )
            await asyncio.sleep(0.3)
            gc.collect()
            return result

        assert _run(scenario()) == "fb"
        gc.collect()
        assert reported == []

    def test_caller_cancellation_propagates(self):
        async def scenario():
            gate = asyncio.Event()

            async def hang(prompt, model=None):
                gate.set()
                await asyncio.sleep(5)
                return "never"

            bridge = GenerativeBridge().register("hang", hang)
            call = asyncio.ensure_future(
                bridge.invoke(provider="hang", prompt="x", timeout_ms=5000, fallback="fb")
            )
            await gate.wait()
            call.cancel()
            with pytest.raises(asyncio.CancelledError):
                await call

        _run(scenario())

    def test_provider_cancelling_itself_uses_fallback(self):
        async def self_cancelling(prompt, model=None):
            raise asyncio.CancelledError()

        bridge = GenerativeBridge().register("cancels", self_cancelling)
        assert _run(bridge.invoke(provider="cancels", prompt="x", fallback="fb")) == "fb"

    def test_provider_cancelling_itself_without_fallback_propagates(self):
        async def self_cancelling(prompt, model=None):
            raise asyncio.CancelledError()

        async def scenario():
            bridge = GenerativeBridge().register("cancels", self_cancelling)
            with pytest.raises(asyncio.CancelledError):
                await bridge.invoke(provider="cancels", prompt="x")

        _run(scenario())
