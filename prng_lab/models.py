#!/usr/bin/env python3
"""
Engine Models - Pydantic models for requests and results
=========================================================

Provides typed models for:
- Generation methods: MixedCongruential, MultiplicativeCongruential,
  MiddleSquares (discriminated on ``method``)
- GenerationResult / GenerationStatistics
- ValidationResult / ValidationCondition
- StatisticalTestRequest / StatisticalTestResult
- RandomVariableRequest / RandomVariableResult

Results are frozen: they are built once per request and returned as-is.
"""

from enum import Enum
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator


# =============================================================================
# ENUMS
# =============================================================================

class MethodName(str, Enum):
    """Generation methods accepted by generate() and validate()."""
    MIXED_CONGRUENTIAL = "mixed_congruential"
    MULTIPLICATIVE_CONGRUENTIAL = "multiplicative_congruential"
    MIDDLE_SQUARES = "middle_squares"


class StoppedReason(str, Enum):
    """Why a generated sequence ended."""
    PERIOD_DETECTED = "period_detected"
    MAX_ITERATIONS = "max_iterations"
    DEGENERATE_ZERO = "degenerate_zero"


class TestType(str, Enum):
    """Goodness-of-fit tests against U[0,1)."""
    CHI_SQUARE = "chi_square"
    KOLMOGOROV_SMIRNOV = "kolmogorov_smirnov"


class DistributionName(str, Enum):
    """Densities registered with the acceptance-rejection sampler."""
    LINEAR = "linear"
    QUADRATIC = "quadratic"
    HYPERBOLA = "hyperbola"


# =============================================================================
# GENERATION METHODS
# =============================================================================

class MixedCongruential(BaseModel):
    """x[n+1] = (a * x[n] + b) mod m"""
    method: Literal["mixed_congruential"] = "mixed_congruential"
    x0: int = Field(..., ge=0)
    a: int = Field(..., ge=0)
    b: int = Field(..., ge=0)
    m: int = Field(..., ge=0)

    model_config = ConfigDict(frozen=True)


class MultiplicativeCongruential(BaseModel):
    """x[n+1] = (a * x[n]) mod m"""
    method: Literal["multiplicative_congruential"] = "multiplicative_congruential"
    x0: int = Field(..., ge=0)
    a: int = Field(..., ge=0)
    m: int = Field(..., ge=0)

    model_config = ConfigDict(frozen=True)


class MiddleSquares(BaseModel):
    """x[n+1] = middle ``digits`` digits of x[n]^2"""
    method: Literal["middle_squares"] = "middle_squares"
    x0: int = Field(..., ge=0)
    digits: int = Field(..., ge=1)

    model_config = ConfigDict(frozen=True)


GenerationMethod = Annotated[
    Union[MixedCongruential, MultiplicativeCongruential, MiddleSquares],
    Field(discriminator="method"),
]


class GenerationRequest(BaseModel):
    """
    Body of generate() and validate() calls.

    Parameter values stay untyped here; they arrive from text inputs and
    are coerced to integers by the service layer.
    """
    method: str
    parameters: Dict[str, Any] = Field(default_factory=dict)


# =============================================================================
# GENERATION RESULT
# =============================================================================

class GenerationStatistics(BaseModel):
    count: int
    min: float
    max: float
    mean: float
    period: Optional[int] = None
    stopped_reason: StoppedReason

    model_config = ConfigDict(frozen=True)


class GenerationResult(BaseModel):
    """
    Normalized sequence plus summary statistics.

    ``raw_numbers[i]`` is the integer iterate that ``numbers[i]`` was
    normalized from. The seed itself is never part of the sequence.
    """
    method: MethodName
    numbers: List[float]
    raw_numbers: List[int]
    statistics: GenerationStatistics

    model_config = ConfigDict(frozen=True)


# =============================================================================
# VALIDATION RESULT
# =============================================================================

class ValidationCondition(BaseModel):
    name: str
    description: str
    satisfied: bool
    details: Optional[str] = None

    model_config = ConfigDict(frozen=True)


class ValidationResult(BaseModel):
    """
    Outcome of checking a parameter set against its period theorem.

    ``applicable`` is False for methods without a governing theorem; such
    results carry no conditions and ``all_satisfied`` is False.
    """
    method: MethodName
    applicable: bool = True
    theorem: Optional[str] = None
    conditions: List[ValidationCondition] = Field(default_factory=list)
    all_satisfied: bool
    explanation: str

    model_config = ConfigDict(frozen=True)


# =============================================================================
# STATISTICAL TESTS
# =============================================================================

class StatisticalTestRequest(BaseModel):
    """Sample plus test options as received from the caller."""
    numbers: List[Any] = Field(default_factory=list)
    test_type: str
    parameters: Dict[str, Any] = Field(default_factory=dict)


class IntervalFrequency(BaseModel):
    """Observed vs expected count for one chi-square interval."""
    lower: float
    upper: float
    observed: int
    expected: float

    model_config = ConfigDict(frozen=True)


class StatisticalTestResult(BaseModel):
    """Statistic, critical value and verdict for one goodness-of-fit test."""
    test_name: str
    test_type: TestType
    calculated_value: float
    critical_value: float
    passes: bool
    significance_level: float
    sample_size: int
    degrees_of_freedom: Optional[int] = None
    p_value: Optional[float] = None
    details: str

    # Test-specific breakdowns
    frequencies: Optional[List[IntervalFrequency]] = None
    d_plus: Optional[float] = None
    d_minus: Optional[float] = None

    model_config = ConfigDict(frozen=True)


# =============================================================================
# RANDOM VARIABLES
# =============================================================================

class RandomVariableRequest(BaseModel):
    """
    Acceptance-rejection request.

    ``fx`` is accepted as an alias of ``distribution`` and ``cuadratic`` as
    an alias of ``quadratic`` for older clients.
    """
    count: Any
    distribution: str
    method: Literal["acceptance_rejection"] = "acceptance_rejection"
    seed: Optional[int] = Field(None, ge=0)

    @model_validator(mode="before")
    @classmethod
    def accept_legacy_names(cls, data):
        if isinstance(data, dict) and "distribution" not in data and "fx" in data:
            data = {**data, "distribution": data["fx"]}
        return data


class ChartData(BaseModel):
    """
    Per-trial trace for two plots of the same trials.

    Unit scale: candidate x against f(x)/M and r2, both in [0, 1].
    Density scale: (x_d, y_d) = (x, r2 * M) against the curve f sampled
    at points_x_d, on the box [a, b] x [0, M].
    """
    x: List[float]
    y: List[float]
    r2: List[float]
    accepted: List[bool]
    a: float
    b: float
    M: float

    x_d: List[float]
    y_d: List[float]
    points_x_d: List[float]
    points_fx_d: List[float]
    function_name: str

    model_config = ConfigDict(frozen=True)


class RandomVariableResult(BaseModel):
    distribution: DistributionName
    r1: List[float]
    r2: List[float]
    generated_values: List[float]
    acceptance_rate: float
    total_trials: int
    chart_data: ChartData

    model_config = ConfigDict(frozen=True)
