#!/usr/bin/env python3
"""
Sequence Generator - Congruential and middle-square sequences
==============================================================

Supported methods:
- mixed_congruential:          x[n+1] = (a * x[n] + b) mod m,  r[n] = x[n] / m
- multiplicative_congruential: x[n+1] = (a * x[n]) mod m,      r[n] = x[n] / m
- middle_squares:              x[n+1] = middle digits of x[n]^2, r[n] = x[n] / 10^digits

A sequence stops when a raw value repeats (period_detected), when the
iteration ceiling is reached (max_iterations), or when it falls into the
absorbing fixed point 0 (degenerate_zero). The seed is not emitted.

Usage:
    from prng_lab.generators import generate_sequence
    from prng_lab.models import MixedCongruential

    result = generate_sequence(MixedCongruential(x0=7, a=5, b=3, m=16))
    print(result.statistics.period)   # 16
"""

import logging
from typing import Callable, Dict, List, NamedTuple, Optional, Tuple

import numpy as np

from .config import EngineSettings
from .errors import InvalidParameterError
from .models import (
    GenerationMethod,
    GenerationResult,
    GenerationStatistics,
    MethodName,
    MiddleSquares,
    MixedCongruential,
    MultiplicativeCongruential,
    StoppedReason,
)

logger = logging.getLogger(__name__)


class IterationPlan(NamedTuple):
    """How to iterate one method: step function, normalizer and limits."""
    step: Callable[[int], int]
    scale: int
    ceiling: int
    zero_absorbing: bool


# =============================================================================
# STEP FUNCTIONS
# =============================================================================

def mixed_congruential_step(x: int, a: int, b: int, m: int) -> int:
    return (a * x + b) % m


def multiplicative_congruential_step(x: int, a: int, m: int) -> int:
    return (a * x) % m


def middle_square_step(x: int, digits: int) -> int:
    """
    Take the middle ``digits`` digits of x^2.

    The square is left-padded with zeros to at least 2*digits characters,
    so 1234^2 = 1522756 becomes "01522756" and yields 5227.
    """
    square = str(x * x).zfill(digits * 2)
    start = (len(square) - digits) // 2
    return int(square[start:start + digits])


# =============================================================================
# PLANNING
# =============================================================================

def _check_modulus(m: int, settings: EngineSettings):
    if m <= 0:
        raise InvalidParameterError("Parameter 'm' must be greater than zero")
    if m.bit_length() > settings.max_modulus_bits:
        raise InvalidParameterError(
            f"Parameter 'm' must be below 2^{settings.max_modulus_bits}"
        )


def plan_iteration(method: GenerationMethod, settings: Optional[EngineSettings] = None) -> IterationPlan:
    """Resolve a generation method into its step function and limits."""
    settings = settings or EngineSettings()

    if isinstance(method, MixedCongruential):
        _check_modulus(method.m, settings)
        a, b, m = method.a, method.b, method.m
        return IterationPlan(
            step=lambda x: mixed_congruential_step(x, a, b, m),
            scale=m,
            ceiling=min(m, settings.max_congruential_iterations),
            zero_absorbing=False,
        )

    if isinstance(method, MultiplicativeCongruential):
        _check_modulus(method.m, settings)
        a, m = method.a, method.m
        return IterationPlan(
            step=lambda x: multiplicative_congruential_step(x, a, m),
            scale=m,
            ceiling=min(m, settings.max_congruential_iterations),
            zero_absorbing=True,
        )

    if isinstance(method, MiddleSquares):
        digits = method.digits
        if digits <= 0:
            raise InvalidParameterError("Parameter 'digits' must be greater than zero")
        if digits > settings.max_middle_square_digits:
            raise InvalidParameterError(
                f"Parameter 'digits' must be at most {settings.max_middle_square_digits}"
            )
        if method.x0 >= 10 ** (2 * digits):
            raise InvalidParameterError(
                f"Seed x0 has more than 2*digits = {2 * digits} digits"
            )
        return IterationPlan(
            step=lambda x: middle_square_step(x, digits),
            scale=10 ** digits,
            ceiling=settings.middle_squares_max_iterations,
            zero_absorbing=True,
        )

    raise InvalidParameterError(f"Unsupported generation method: {method!r}")


def iterate_until_stop(
    x0: int,
    plan: IterationPlan
) -> Tuple[List[int], StoppedReason, Optional[int]]:
    """
    Apply ``plan.step`` from ``x0`` until a stop condition holds.

    Returns:
        (raw values in generation order, stop reason, period or None)
    """
    first_seen: Dict[int, int] = {}
    raw: List[int] = []
    x = x0

    while True:
        x = plan.step(x)

        if x in first_seen:
            return raw, StoppedReason.PERIOD_DETECTED, len(raw) - first_seen[x]

        if len(raw) >= plan.ceiling:
            return raw, StoppedReason.MAX_ITERATIONS, None

        first_seen[x] = len(raw)
        raw.append(x)

        # 0 maps to 0 for these methods, every later value would be 0 too
        if plan.zero_absorbing and x == 0:
            return raw, StoppedReason.DEGENERATE_ZERO, 1


# =============================================================================
# PUBLIC API
# =============================================================================

def generate_sequence(method: GenerationMethod, settings: Optional[EngineSettings] = None) -> GenerationResult:
    """
    Generate the normalized sequence for a MixedCongruential,
    MultiplicativeCongruential or MiddleSquares parameter set.

    Raises:
        InvalidParameterError: m <= 0, digits <= 0, or an over-long seed
    """
    plan = plan_iteration(method, settings)
    raw, reason, period = iterate_until_stop(method.x0, plan)

    # int / int keeps full precision for large moduli before rounding to float
    numbers = [x / plan.scale for x in raw]
    values = np.asarray(numbers, dtype=float)

    statistics = GenerationStatistics(
        count=len(numbers),
        min=float(values.min()),
        max=float(values.max()),
        mean=float(values.mean()),
        period=period,
        stopped_reason=reason,
    )

    if reason == StoppedReason.DEGENERATE_ZERO:
        logger.warning(f"⚠️  {method.method} collapsed to 0 after {len(raw)} values")
    else:
        logger.info(
            f"Generated {len(raw)} values with {method.method} "
            f"({reason.value}, period={period})"
        )

    return GenerationResult(
        method=MethodName(method.method),
        numbers=numbers,
        raw_numbers=raw,
        statistics=statistics,
    )
