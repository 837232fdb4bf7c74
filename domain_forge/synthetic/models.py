"""
Data models for scenario generation.

Distribution parameters and generation requests are frozen pydantic models so
they are validated once, when an operation is scheduled. Operations are a
closed set of frozen dataclasses tagged by OperationType.
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Type, TypeVar, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictInt,
    ValidationError,
    model_validator,
)

from ..errors import InvalidParameterError

P = TypeVar("P", bound=BaseModel)

ScenarioRecord = Dict[str, Any]


class OperationType(Enum):
    """Kinds of field-producing operations."""
    GAUSSIAN = "gaussian"
    UNIFORM = "uniform"
    POISSON = "poisson"
    CATEGORICAL = "categorical"
    GENERATIVE = "generative"


class GaussianParams(BaseModel):
    """Normal distribution N(mean, std_dev^2)."""
    model_config = ConfigDict(frozen=True)

    mean: float
    std_dev: float = Field(gt=0)


class UniformParams(BaseModel):
    """Uniform distribution over the half-open interval [min, max)."""
    model_config = ConfigDict(frozen=True)

    min: float
    max: float

    @model_validator(mode="after")
    def _check_bounds(self) -> "UniformParams":
        if self.min > self.max:
            raise ValueError(f"min ({self.min}) must not exceed max ({self.max})")
        return self


class PoissonParams(BaseModel):
    """Poisson distribution with rate lam (also accepted as 'lambda')."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    lam: float = Field(gt=0, alias="lambda")


class GenerationRequest(BaseModel):
    """A single call into the generative bridge."""
    model_config = ConfigDict(frozen=True)

    provider: str
    prompt: str = Field(min_length=1)
    model: Optional[str] = None
    timeout_ms: Optional[int] = Field(default=None, gt=0)
    fallback: Optional[str] = None


class EngineOptions(BaseModel):
    """Construction options for RandomizationEngine."""
    model_config = ConfigDict(frozen=True)

    seed: Optional[Union[StrictInt, str]] = None


def coerce_params(model_class: Type[P], value: Union[P, Mapping[str, Any]]) -> P:
    """
    Validate value into model_class.

    Args:
        model_class: Pydantic model to validate into
        value: An instance of model_class or a mapping of its fields

    Returns:
        A model_class instance

    Raises:
        InvalidParameterError: If the value does not satisfy the model
    """
    if isinstance(value, model_class):
        return value
    try:
        return model_class.model_validate(value)
    except ValidationError as e:
        raise InvalidParameterError(
            f"Invalid {model_class.__name__}: {e.errors(include_url=False)}"
        ) from e


def validate_field_path(path: str) -> str:
    """Check that path is a non-empty dot path with no empty segments."""
    if not isinstance(path, str) or not path:
        raise InvalidParameterError(f"Field path must be a non-empty string, got {path!r}")
    if any(segment == "" for segment in path.split(".")):
        raise InvalidParameterError(f"Field path has an empty segment: {path!r}")
    return path


@dataclass(frozen=True)
class GaussianOperation:
    """Gaussian noise. Params may be given as a mapping and are validated here."""
    field: str
    params: GaussianParams
    kind: OperationType = OperationType.GAUSSIAN

    def __post_init__(self):
        object.__setattr__(self, "params", coerce_params(GaussianParams, self.params))


@dataclass(frozen=True)
class UniformOperation:
    field: str
    params: UniformParams
    kind: OperationType = OperationType.UNIFORM

    def __post_init__(self):
        object.__setattr__(self, "params", coerce_params(UniformParams, self.params))


@dataclass(frozen=True)
class PoissonOperation:
    field: str
    params: PoissonParams
    kind: OperationType = OperationType.POISSON

    def __post_init__(self):
        object.__setattr__(self, "params", coerce_params(PoissonParams, self.params))


@dataclass(frozen=True)
class CategoricalOperation:
    """
    Weighted category choice.

    Weights are copied into a read-only mapping so later changes to the
    caller's dict never reach a scheduled operation.
    """
    field: str
    weights: Mapping[str, float]
    kind: OperationType = OperationType.CATEGORICAL

    def __post_init__(self):
        object.__setattr__(self, "weights", MappingProxyType(dict(self.weights)))


@dataclass(frozen=True)
class GenerativeOperation:
    field: str
    request: GenerationRequest
    kind: OperationType = OperationType.GENERATIVE

    def __post_init__(self):
        object.__setattr__(self, "request", coerce_params(GenerationRequest, self.request))


Operation = Union[
    GaussianOperation,
    UniformOperation,
    PoissonOperation,
    CategoricalOperation,
    GenerativeOperation,
]

OPERATION_CLASSES = (
    GaussianOperation,
    UniformOperation,
    PoissonOperation,
    CategoricalOperation,
    GenerativeOperation,
)
