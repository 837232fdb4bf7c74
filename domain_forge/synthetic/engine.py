"""
RandomizationEngine: schedule field operations and run them into a record.

Operations run strictly in registration order against one generator stream,
so the output depends only on the seed and the operation sequence, never on
how long generative calls take.

Usage:
    engine = RandomizationEngine(seed=12345)
    scenario = await (
        engine
        .set_baseline({"environment": {"temperature": 20}})
        .apply_gaussian_noise("gravity", mean=9.8, std_dev=0.5)
        .apply_weighted_categorical("weather", {"rain": 0.7, "sunny": 0.3})
        .apply_generative_fuzzing(
            "npc.personality",
            provider="openai",
            prompt="Generate a highly stressed merchant",
            timeout_ms=2000,
            fallback="calm",
        )
        .run()
    )
"""

import asyncio
import copy
import logging
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from pydantic import BaseModel

from ..errors import EngineStateError
from ..generative.bridge import GenerativeBridge
from . import categorical, statistical
from .models import (
    OPERATION_CLASSES,
    CategoricalOperation,
    EngineOptions,
    GaussianOperation,
    GaussianParams,
    GenerationRequest,
    GenerativeOperation,
    Operation,
    PoissonOperation,
    PoissonParams,
    ScenarioRecord,
    UniformOperation,
    UniformParams,
    coerce_params,
    validate_field_path,
)
from .prng import Seed, SeededPRNG, default_seed

logger = logging.getLogger(__name__)

Validator = Callable[[ScenarioRecord], Any]


class EngineState(Enum):
    """Lifecycle of an engine."""
    IDLE = "idle"
    CONFIGURING = "configuring"
    RUNNING = "running"
    DONE = "done"
    FAILED = "failed"


def set_at_path(record: Dict[str, Any], path: str, value: Any) -> None:
    """
    Write value at a dot-separated path, creating intermediate dicts.

    Intermediate values that are missing or not dicts are replaced by a new
    dict. Only the final segment is assigned; sibling keys are untouched.
    """
    segments = path.split(".")
    current = record
    for segment in segments[:-1]:
        child = current.get(segment)
        if not isinstance(child, dict):
            child = {}
            current[segment] = child
        current = child
    current[segments[-1]] = value


def _normalize_validator(validator: Any) -> Validator:
    """
    Turn a pydantic model class, validator object or callable into a callable.

    A callable validate attribute is used in preference to calling the
    validator itself, including a static or class-level validate().

    Validators that return None (check-only validators) leave the record
    unchanged.
    """
    if isinstance(validator, type) and issubclass(validator, BaseModel):
        model_class = validator
        return lambda record: model_class.model_validate(record).model_dump()

    validate = getattr(validator, "validate", None)
    if callable(validate):
        check = validate
    elif callable(validator):
        check = validator
    else:
        raise TypeError(
            f"Validator must be a pydantic model class, a callable or expose validate(), "
            f"got {type(validator).__name__}"
        )

    def run_validator(record: ScenarioRecord) -> ScenarioRecord:
        result = check(record)
        return record if result is None else result

    return run_validator


class RandomizationEngine:
    """
    Builds scenario records from a seed and an ordered list of operations.

    Configuration methods return the engine for chaining. Once run() starts,
    the operation list, baseline and validator are frozen.
    """

    def __init__(
        self,
        seed: Optional[Seed] = None,
        bridge: Optional[GenerativeBridge] = None,
    ):
        """
        Initialize engine.

        Args:
            seed: Integer or string seed. When omitted, the current time in
                milliseconds is used and output is not reproducible.
            bridge: Provider registry to use. Pass the same bridge to several
                engines to share providers; a private one is created otherwise.
        """
        if seed is None:
            seed = default_seed()
            logger.debug(f"No seed given, using time-derived seed {seed}")

        self.prng = SeededPRNG(seed)
        self.bridge = bridge if bridge is not None else GenerativeBridge()
        self.state = EngineState.IDLE

        self._operations: List[Operation] = []
        self._baseline: Optional[Mapping[str, Any]] = None
        self._validator: Optional[Validator] = None
        self._frozen = False

    @classmethod
    def from_options(
        cls,
        options: Optional[Any] = None,
        bridge: Optional[GenerativeBridge] = None,
    ) -> "RandomizationEngine":
        """Create an engine from EngineOptions or a mapping of its fields."""
        options = coerce_params(EngineOptions, options or {})
        return cls(seed=options.seed, bridge=bridge)

    @property
    def seed(self) -> int:
        return self.prng.seed

    @property
    def operations(self) -> Tuple[Operation, ...]:
        return tuple(self._operations)

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def _require_configurable(self, action: str) -> None:
        if self._frozen:
            raise EngineStateError(
                f"Cannot {action} after run() has started (state={self.state.value})"
            )
        if self.state == EngineState.IDLE:
            self.state = EngineState.CONFIGURING

    def schedule(self, operation: Operation) -> "RandomizationEngine":
        """Append a prebuilt operation."""
        if not isinstance(operation, OPERATION_CLASSES):
            raise TypeError(f"Unsupported operation type: {type(operation).__name__}")
        validate_field_path(operation.field)
        self._require_configurable("schedule operations")
        self._operations.append(operation)
        return self

    def apply_gaussian_noise(self, field: str, mean: float, std_dev: float) -> "RandomizationEngine":
        params = coerce_params(GaussianParams, {"mean": mean, "std_dev": std_dev})
        return self.schedule(GaussianOperation(field=field, params=params))

    def apply_uniform(self, field: str, min: float, max: float) -> "RandomizationEngine":
        params = coerce_params(UniformParams, {"min": min, "max": max})
        return self.schedule(UniformOperation(field=field, params=params))

    def apply_poisson(self, field: str, lam: float) -> "RandomizationEngine":
        params = coerce_params(PoissonParams, {"lam": lam})
        return self.schedule(PoissonOperation(field=field, params=params))

    def apply_weighted_categorical(
        self,
        field: str,
        weights: Mapping[str, float],
    ) -> "RandomizationEngine":
        """
        Schedule a weighted category choice.

        Weights are checked when the operation runs, where an empty or
        all-zero map raises EmptyInputError / ZeroWeightError.
        """
        return self.schedule(CategoricalOperation(field=field, weights=weights))

    def apply_generative_fuzzing(
        self,
        field: str,
        provider: str,
        prompt: str,
        model: Optional[str] = None,
        timeout_ms: Optional[int] = None,
        fallback: Optional[str] = None,
    ) -> "RandomizationEngine":
        """
        Schedule a provider-generated text field.

        The provider is looked up by name when the run reaches this operation.
        """
        request = coerce_params(
            GenerationRequest,
            {
                "provider": provider,
                "prompt": prompt,
                "model": model,
                "timeout_ms": timeout_ms,
                "fallback": fallback,
            },
        )
        return self.schedule(GenerativeOperation(field=field, request=request))

    def set_baseline(self, record: Mapping[str, Any]) -> "RandomizationEngine":
        """
        Use record as the starting state of every run.

        Only a reference is stored; it is deep-copied at the start of each run.
        """
        if not isinstance(record, Mapping):
            raise TypeError(f"Baseline must be a mapping, got {type(record).__name__}")
        self._require_configurable("set the baseline")
        self._baseline = record
        return self

    def attach_validator(self, validator: Any) -> "RandomizationEngine":
        """
        Validate the assembled record before it is returned.

        Args:
            validator: A pydantic model class (record is validated and dumped
                back to a dict), an object with validate(record), or a
                callable record -> record
        """
        normalized = _normalize_validator(validator)
        self._require_configurable("attach a validator")
        self._validator = normalized
        return self

    schema = attach_validator

    def register_provider(self, name: str, provider: Any) -> "RandomizationEngine":
        """Register a generative provider on this engine's bridge."""
        self.bridge.register(name, provider)
        return self

    def reseed(self, seed: Seed) -> "RandomizationEngine":
        """Restart the generator stream. Not allowed while a run is in progress."""
        if self.state == EngineState.RUNNING:
            raise EngineStateError("Cannot reseed while a run is in progress")
        self.prng.reseed(seed)
        return self

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    async def _execute(self, operation: Operation) -> Any:
        """Produce the value for one operation."""
        if isinstance(operation, GaussianOperation):
            return statistical.gaussian(self.prng, operation.params)
        elif isinstance(operation, UniformOperation):
            return statistical.uniform(self.prng, operation.params)
        elif isinstance(operation, PoissonOperation):
            return statistical.poisson(self.prng, operation.params)
        elif isinstance(operation, CategoricalOperation):
            return categorical.sample(self.prng, operation.weights)
        elif isinstance(operation, GenerativeOperation):
            return await self.bridge.invoke(operation.request)
        else:
            raise TypeError(f"Unsupported operation type: {type(operation).__name__}")

    async def run(self) -> ScenarioRecord:
        """
        Execute all scheduled operations and return the scenario record.

        The first unrecovered error aborts the run: later operations do not
        execute and the error propagates unchanged.

        Returns:
            The assembled (and, if a validator is attached, validated) record
        """
        if self.state == EngineState.RUNNING:
            raise EngineStateError("run() is already in progress on this engine")

        self._frozen = True
        self.state = EngineState.RUNNING

        try:
            record: ScenarioRecord = (
                copy.deepcopy(dict(self._baseline)) if self._baseline is not None else {}
            )

            for index, operation in enumerate(self._operations):
                value = await self._execute(operation)
                set_at_path(record, operation.field, value)
                logger.debug(
                    f"[{index + 1}/{len(self._operations)}] "
                    f"{operation.kind.value} -> {operation.field}"
                )

            if self._validator is not None:
                record = self._validator(record)

        except BaseException:
            self.state = EngineState.FAILED
            raise

        self.state = EngineState.DONE
        logger.info(
            f"Generated scenario with {len(self._operations)} operations "
            f"(seed={self.prng.seed})"
        )
        return record

    async def run_many(self, count: int) -> List[ScenarioRecord]:
        """Run count times in sequence, continuing the same generator stream."""
        if count < 0:
            raise ValueError(f"count must be non-negative, got {count}")
        results = []
        for _ in range(count):
            results.append(await self.run())
        return results

    def run_sync(self) -> ScenarioRecord:
        """Run from synchronous code. Must not be called inside a running event loop."""
        return asyncio.run(self.run())
