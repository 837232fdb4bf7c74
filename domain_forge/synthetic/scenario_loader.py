"""
ScenarioLoader: build engines from YAML scenario definitions.

A definition names an optional seed, an optional baseline record and an
ordered list of operations:

    seed: 42
    baseline:
      environment:
        temperature: 20
    operations:
      - field: gravity
        type: gaussian
        mean: 9.8
        std_dev: 0.5
      - field: weather
        type: categorical
        weights: {rain: 0.7, sunny: 0.3}
      - field: npc.personality
        type: generative
        provider: openai
        prompt: "Generate a highly stressed merchant"
        timeout_ms: 2000
        fallback: calm
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

import yaml

from ..errors import InvalidParameterError
from ..generative.bridge import GenerativeBridge
from .engine import RandomizationEngine
from .models import (
    CategoricalOperation,
    GaussianOperation,
    GaussianParams,
    GenerationRequest,
    GenerativeOperation,
    Operation,
    OperationType,
    PoissonOperation,
    PoissonParams,
    UniformOperation,
    UniformParams,
    coerce_params,
)
from .prng import Seed

logger = logging.getLogger(__name__)


@dataclass
class ScenarioDefinition:
    """A parsed scenario file."""
    name: Optional[str] = None
    seed: Optional[Seed] = None
    baseline: Optional[Dict[str, Any]] = None
    operations: List[Operation] = field(default_factory=list)


def _params_of(data: Mapping[str, Any]) -> Dict[str, Any]:
    """Operation entry without its routing keys."""
    return {k: v for k, v in data.items() if k not in ("field", "type")}


def parse_operation(data: Mapping[str, Any]) -> Operation:
    """
    Parse one operation entry.

    Args:
        data: Mapping with 'field', 'type' and the type's parameters

    Returns:
        The matching operation

    Raises:
        InvalidParameterError: On a missing field, unknown type or bad parameters
    """
    if not isinstance(data, Mapping):
        raise InvalidParameterError(f"Operation entry must be a mapping, got {data!r}")

    target = data.get("field")
    if not target:
        raise InvalidParameterError(f"Operation entry is missing 'field': {dict(data)!r}")

    try:
        kind = OperationType(data.get("type"))
    except ValueError:
        known = ", ".join(t.value for t in OperationType)
        raise InvalidParameterError(
            f"Unknown operation type {data.get('type')!r} for field {target!r}. Known: {known}"
        )

    params = _params_of(data)

    if kind == OperationType.GAUSSIAN:
        return GaussianOperation(field=target, params=coerce_params(GaussianParams, params))
    elif kind == OperationType.UNIFORM:
        return UniformOperation(field=target, params=coerce_params(UniformParams, params))
    elif kind == OperationType.POISSON:
        return PoissonOperation(field=target, params=coerce_params(PoissonParams, params))
    elif kind == OperationType.CATEGORICAL:
        weights = params.get("weights")
        if not isinstance(weights, Mapping):
            raise InvalidParameterError(
                f"Categorical operation {target!r} needs a 'weights' mapping"
            )
        return CategoricalOperation(field=target, weights=weights)
    else:
        return GenerativeOperation(
            field=target,
            request=coerce_params(GenerationRequest, params),
        )


def parse_scenario(data: Mapping[str, Any]) -> ScenarioDefinition:
    """Parse a scenario definition from already-loaded YAML/JSON data."""
    if not isinstance(data, Mapping):
        raise InvalidParameterError(
            f"Scenario definition must be a mapping, got {type(data).__name__}"
        )

    baseline = data.get("baseline")
    if baseline is not None and not isinstance(baseline, Mapping):
        raise InvalidParameterError("Scenario 'baseline' must be a mapping")

    operations = [parse_operation(entry) for entry in data.get("operations") or []]

    return ScenarioDefinition(
        name=data.get("name"),
        seed=data.get("seed"),
        baseline=dict(baseline) if baseline is not None else None,
        operations=operations,
    )


def load_scenario(path: Union[str, Path]) -> ScenarioDefinition:
    """Load a scenario definition from a YAML file."""
    path = Path(path)
    with open(path, "r") as f:
        data = yaml.safe_load(f)

    definition = parse_scenario(data or {})
    if definition.name is None:
        definition.name = path.stem
    logger.debug(f"Loaded scenario {definition.name!r} with {len(definition.operations)} operations")
    return definition


def build_engine(
    definition: ScenarioDefinition,
    bridge: Optional[GenerativeBridge] = None,
    seed: Optional[Seed] = None,
) -> RandomizationEngine:
    """
    Create an engine configured from a definition.

    Args:
        definition: Parsed scenario
        bridge: Provider registry for generative operations
        seed: Overrides the definition's seed when given

    Returns:
        Engine with baseline and operations scheduled, ready to run
    """
    engine = RandomizationEngine(
        seed=seed if seed is not None else definition.seed,
        bridge=bridge,
    )
    if definition.baseline is not None:
        engine.set_baseline(definition.baseline)
    for operation in definition.operations:
        engine.schedule(operation)
    return engine
