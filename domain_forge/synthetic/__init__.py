"""
Deterministic scenario generation.

One seeded stream per engine; operations run in the order they were scheduled.
"""

from .models import (
    OperationType,
    GaussianParams,
    UniformParams,
    PoissonParams,
    GenerationRequest,
    EngineOptions,
    GaussianOperation,
    UniformOperation,
    PoissonOperation,
    CategoricalOperation,
    GenerativeOperation,
    Operation,
    ScenarioRecord,
)
from .prng import SeededPRNG, hash_string
from . import statistical, categorical
from .engine import EngineState, RandomizationEngine, set_at_path
from .scenario_loader import (
    ScenarioDefinition,
    build_engine,
    load_scenario,
    parse_operation,
    parse_scenario,
)
from .weather_modifier import WeatherBaseline, WeatherModifier, WeatherState
from .economy_modifier import EconomyItem, EconomyModifier, EconomyState

__all__ = [
    # Models
    "OperationType",
    "GaussianParams",
    "UniformParams",
    "PoissonParams",
    "GenerationRequest",
    "EngineOptions",
    "GaussianOperation",
    "UniformOperation",
    "PoissonOperation",
    "CategoricalOperation",
    "GenerativeOperation",
    "Operation",
    "ScenarioRecord",
    # Sampling
    "SeededPRNG",
    "hash_string",
    "statistical",
    "categorical",
    # Engine
    "EngineState",
    "RandomizationEngine",
    "set_at_path",
    # Scenario files
    "ScenarioDefinition",
    "build_engine",
    "load_scenario",
    "parse_operation",
    "parse_scenario",
    # Modifiers
    "WeatherBaseline",
    "WeatherModifier",
    "WeatherState",
    "EconomyItem",
    "EconomyModifier",
    "EconomyState",
]
