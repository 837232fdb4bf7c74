"""
domain-forge: deterministic domain randomization and scenario fuzzing.

Usage:
    import asyncio
    from domain_forge import RandomizationEngine

    engine = RandomizationEngine(seed=42)
    scenario = asyncio.run(
        engine
        .apply_gaussian_noise("gravity", mean=9.8, std_dev=0.5)
        .apply_weighted_categorical("weather", {"rain": 0.7, "sunny": 0.3})
        .run()
    )
"""

from .errors import (
    ForgeError,
    InputError,
    EmptyInputError,
    ZeroWeightError,
    InvalidParameterError,
    EngineStateError,
    ProviderNotRegisteredError,
    ProviderTimeoutError,
)
from .synthetic import (
    RandomizationEngine,
    EngineState,
    EngineOptions,
    SeededPRNG,
    statistical,
    categorical,
    load_scenario,
    build_engine,
    WeatherModifier,
    EconomyModifier,
)
from .generative import GenerativeBridge

__version__ = "0.1.0"

__all__ = [
    # Errors
    "ForgeError",
    "InputError",
    "EmptyInputError",
    "ZeroWeightError",
    "InvalidParameterError",
    "EngineStateError",
    "ProviderNotRegisteredError",
    "ProviderTimeoutError",
    # Core
    "RandomizationEngine",
    "EngineState",
    "EngineOptions",
    "SeededPRNG",
    "statistical",
    "categorical",
    "GenerativeBridge",
    # Scenario files
    "load_scenario",
    "build_engine",
    # Modifiers
    "WeatherModifier",
    "EconomyModifier",
]
