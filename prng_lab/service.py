#!/usr/bin/env python3
"""
Engine Service - Logical operations behind the HTTP and CLI surfaces
=====================================================================

Operations:
    generate(method, parameters)                      -> GenerationResult
    validate(method, parameters)                      -> ValidationResult
    statistical_test(numbers, test_type, parameters)  -> StatisticalTestResult
    random_variables(count, distribution, seed=None)  -> RandomVariableResult
    health()                                          -> {"status": "ok"}

Parameters arrive as decimal numbers or numeric strings typed by a user.
They are coerced to integers here; anything non-numeric, non-finite,
fractional, negative, or a zero divisor raises InvalidParameterError before
any computation starts.
"""

import logging
import math
from typing import Any, Dict, List, Optional

import numpy as np
from pydantic import ValidationError

from .config import EngineSettings
from .errors import InvalidParameterError
from .generators import generate_sequence
from .models import (
    GenerationResult,
    MethodName,
    MiddleSquares,
    MixedCongruential,
    MultiplicativeCongruential,
    RandomVariableResult,
    StatisticalTestResult,
    ValidationResult,
)
from .sampler import DENSITIES, acceptance_rejection
from .statistical_tests import run_statistical_test
from .validator import inapplicable, validate_conditions

logger = logging.getLogger(__name__)

# Keeps every user integer well below the int/str conversion limit
MAX_INTEGER_BITS = 4096


# =============================================================================
# METHOD CATALOG
# =============================================================================

METHOD_CATALOG: List[Dict[str, Any]] = [
    {
        "id": MethodName.MIXED_CONGRUENTIAL.value,
        "name": "Mixed congruential",
        "formula": "x[n+1] = (a * x[n] + b) mod m",
        "parameters": [
            {"name": "x0", "label": "Seed (x0)", "description": "Initial value of the sequence"},
            {"name": "a", "label": "Multiplier (a)", "description": "Multiplicative factor"},
            {"name": "b", "label": "Increment (b)", "description": "Additive increment"},
            {"name": "m", "label": "Modulus (m)", "description": "Modulus, greater than zero"},
        ],
    },
    {
        "id": MethodName.MULTIPLICATIVE_CONGRUENTIAL.value,
        "name": "Multiplicative congruential",
        "formula": "x[n+1] = (a * x[n]) mod m",
        "parameters": [
            {"name": "x0", "label": "Seed (x0)", "description": "Initial value, not a multiple of m"},
            {"name": "a", "label": "Multiplier (a)", "description": "Multiplicative factor"},
            {"name": "m", "label": "Modulus (m)", "description": "Modulus, greater than zero"},
        ],
    },
    {
        "id": MethodName.MIDDLE_SQUARES.value,
        "name": "Middle squares",
        "formula": "x[n+1] = middle digits of x[n]^2",
        "parameters": [
            {"name": "x0", "label": "Seed (x0)", "description": "Initial value, at most 2*digits digits"},
            {"name": "digits", "label": "Digits", "description": "Number of middle digits to keep"},
        ],
    },
]

_REQUIRED_PARAMETERS = {
    entry["id"]: [p["name"] for p in entry["parameters"]] for entry in METHOD_CATALOG
}


def list_methods() -> List[Dict[str, Any]]:
    return METHOD_CATALOG


def list_distributions() -> List[Dict[str, Any]]:
    return [density.to_dict() for density in DENSITIES.values()]


# =============================================================================
# PARAMETER COERCION
# =============================================================================

def _bounded(name: str, number: int) -> int:
    if number.bit_length() > MAX_INTEGER_BITS:
        raise InvalidParameterError(f"Parameter '{name}' is too large")
    return number


def to_integer(name: str, value: Any) -> int:
    """
    Coerce a user-supplied number to int.

    Accepts ints, integral floats (7.0) and numeric strings ("7", " 7.0 ").
    """
    if value is None:
        raise InvalidParameterError(f"Missing parameter '{name}'")
    if isinstance(value, bool):
        raise InvalidParameterError(f"Parameter '{name}' must be a number, got {value!r}")
    if isinstance(value, int):
        return _bounded(name, value)

    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise InvalidParameterError(f"Missing parameter '{name}'")
        try:
            return _bounded(name, int(text))
        except ValueError:
            pass
        try:
            value = float(text)
        except ValueError:
            raise InvalidParameterError(f"Parameter '{name}' must be a number, got {value!r}")

    if not isinstance(value, float):
        raise InvalidParameterError(f"Parameter '{name}' must be a number, got {value!r}")
    if not math.isfinite(value):
        raise InvalidParameterError(f"Parameter '{name}' must be finite, got {value!r}")
    if not value.is_integer():
        raise InvalidParameterError(f"Parameter '{name}' must be an integer, got {value!r}")
    return _bounded(name, int(value))


def _non_negative(name: str, value: Any) -> int:
    number = to_integer(name, value)
    if number < 0:
        raise InvalidParameterError(f"Parameter '{name}' must not be negative, got {number}")
    return number


def _positive(name: str, value: Any) -> int:
    number = _non_negative(name, value)
    if number == 0:
        raise InvalidParameterError(f"Parameter '{name}' must be greater than zero")
    return number


def resolve_method(method: Any) -> MethodName:
    if isinstance(method, MethodName):
        return method
    try:
        return MethodName(str(method).strip())
    except ValueError:
        supported = ", ".join(m.value for m in MethodName)
        raise InvalidParameterError(f"Unknown method {method!r}; use one of {supported}")


def parse_method(method: Any, parameters: Optional[Dict[str, Any]], for_generation: bool = True):
    """
    Build the typed method variant from a method name and raw parameters.

    With ``for_generation=False`` a zero modulus is allowed through so the
    validator can report it as a failed condition.
    """
    name = resolve_method(method)
    if parameters is None:
        parameters = {}
    if not isinstance(parameters, dict):
        raise InvalidParameterError("Parameters must be an object of name/value pairs")

    missing = [p for p in _REQUIRED_PARAMETERS[name.value] if parameters.get(p) is None]
    if missing:
        raise InvalidParameterError(
            f"Missing parameter(s) for {name.value}: {', '.join(missing)}"
        )

    modulus = _positive if for_generation else _non_negative

    if name == MethodName.MIXED_CONGRUENTIAL:
        return MixedCongruential(
            x0=_non_negative("x0", parameters["x0"]),
            a=_non_negative("a", parameters["a"]),
            b=_non_negative("b", parameters["b"]),
            m=modulus("m", parameters["m"]),
        )
    if name == MethodName.MULTIPLICATIVE_CONGRUENTIAL:
        return MultiplicativeCongruential(
            x0=_non_negative("x0", parameters["x0"]),
            a=_non_negative("a", parameters["a"]),
            m=modulus("m", parameters["m"]),
        )
    return MiddleSquares(
        x0=_non_negative("x0", parameters["x0"]),
        digits=_positive("digits", parameters["digits"]),
    )


# =============================================================================
# OPERATIONS
# =============================================================================

def generate(method: Any, parameters: Optional[Dict[str, Any]],
             settings: Optional[EngineSettings] = None) -> GenerationResult:
    return generate_sequence(parse_method(method, parameters), settings)


def validate(method: Any, parameters: Optional[Dict[str, Any]],
             settings: Optional[EngineSettings] = None) -> ValidationResult:
    name = resolve_method(method)
    if name == MethodName.MIDDLE_SQUARES:
        return inapplicable(name)
    return validate_conditions(parse_method(name, parameters, for_generation=False), settings)


def statistical_test(numbers: List[Any], test_type: str,
                     parameters: Optional[Dict[str, Any]] = None,
                     settings: Optional[EngineSettings] = None) -> StatisticalTestResult:
    return run_statistical_test(numbers, test_type, parameters, settings)


def random_variables(count: Any, distribution: str, seed: Optional[int] = None,
                     settings: Optional[EngineSettings] = None) -> RandomVariableResult:
    count = to_integer("count", count)
    if seed is not None:
        seed = _non_negative("seed", seed)
    rng = np.random.default_rng(seed)
    return acceptance_rejection(distribution, count, rng=rng, settings=settings)


def health() -> Dict[str, str]:
    return {"status": "ok"}


def describe_validation_error(error: ValidationError) -> str:
    """Flatten a pydantic ValidationError into one readable line."""
    parts = []
    for item in error.errors():
        location = ".".join(str(p) for p in item.get("loc", ())) or "request"
        parts.append(f"{location}: {item.get('msg', 'invalid value')}")
    return "; ".join(parts)
