#!/usr/bin/env python3
"""
Condition Validator - Period theorems for congruential generators
==================================================================

Checks a parameter set against its governing theorem without running the
generator.

Mixed congruential (Hull-Dobell), period m iff:
    1. gcd(b, m) = 1
    2. a - 1 is divisible by every prime factor of m
    3. if 4 divides m, then 4 divides a - 1

Multiplicative congruential (prime modulus), maximal period m - 1 iff:
    1. m is prime
    2. a is a primitive root modulo m
    3. x0 is not a multiple of m

Middle squares has no such theorem; it gets an inapplicable result.

Degenerate parameters (m = 0, a = 0, ...) are reported as failed
conditions, never raised. Moduli beyond the configured bit length are
rejected before any factoring starts.
"""

import logging
from typing import List, Optional

from .config import EngineSettings
from .errors import InvalidParameterError
from .models import (
    GenerationMethod,
    MethodName,
    MiddleSquares,
    MixedCongruential,
    MultiplicativeCongruential,
    ValidationCondition,
    ValidationResult,
)
from .number_theory import gcd, is_prime, is_primitive_root, multiplicative_order, prime_factors

logger = logging.getLogger(__name__)

HULL_DOBELL = "Hull-Dobell theorem (full period m)"
PRIME_MODULUS = "Prime modulus with primitive root multiplier (period m - 1)"

OK = "✓"
FAIL = "✗"


def _mark(satisfied: bool) -> str:
    return OK if satisfied else FAIL


def _invalid_modulus(m: int) -> str:
    return f"m = {m} is not a valid modulus (must be positive) {FAIL}"


# =============================================================================
# MIXED CONGRUENTIAL
# =============================================================================

def _gcd_condition(b: int, m: int) -> ValidationCondition:
    name = "gcd(b, m) = 1"
    description = "The increment b and the modulus m are relatively prime"
    if m <= 0:
        return ValidationCondition(name=name, description=description,
                                   satisfied=False, details=_invalid_modulus(m))
    g = gcd(b, m)
    return ValidationCondition(
        name=name,
        description=description,
        satisfied=g == 1,
        details=f"gcd({b}, {m}) = {g} {_mark(g == 1)}",
    )


def _prime_factor_condition(a: int, m: int) -> ValidationCondition:
    name = "a - 1 divisible by every prime factor of m"
    description = "Every prime p dividing m also divides a - 1"
    if m <= 0:
        return ValidationCondition(name=name, description=description,
                                   satisfied=False, details=_invalid_modulus(m))

    factors = prime_factors(m)
    if not factors:
        return ValidationCondition(
            name=name,
            description=description,
            satisfied=True,
            details=f"m = {m} has no prime factors {OK}",
        )

    failing = [p for p in factors if (a - 1) % p != 0]
    checks = ", ".join(f"{a - 1} mod {p} = {(a - 1) % p}" for p in factors)
    return ValidationCondition(
        name=name,
        description=description,
        satisfied=not failing,
        details=f"prime factors of {m}: {factors}; {checks} {_mark(not failing)}",
    )


def _mod4_condition(a: int, m: int) -> ValidationCondition:
    name = "if 4 divides m, 4 divides a - 1"
    description = "When m is a multiple of 4, a - 1 must also be a multiple of 4"
    if m <= 0:
        return ValidationCondition(name=name, description=description,
                                   satisfied=False, details=_invalid_modulus(m))

    if m % 4 != 0:
        return ValidationCondition(
            name=name,
            description=description,
            satisfied=True,
            details=f"{m} mod 4 = {m % 4}, condition does not apply {OK}",
        )

    satisfied = (a - 1) % 4 == 0
    return ValidationCondition(
        name=name,
        description=description,
        satisfied=satisfied,
        details=f"{m} mod 4 = 0 and {a - 1} mod 4 = {(a - 1) % 4} {_mark(satisfied)}",
    )


def validate_mixed(params: MixedCongruential) -> ValidationResult:
    conditions = [
        _gcd_condition(params.b, params.m),
        _prime_factor_condition(params.a, params.m),
        _mod4_condition(params.a, params.m),
    ]
    all_satisfied = all(c.satisfied for c in conditions)

    if all_satisfied:
        explanation = (
            f"All Hull-Dobell conditions hold: the generator reaches its full "
            f"period of m = {params.m} values for any seed."
        )
    else:
        explanation = (
            f"{_failed_names(conditions)} not satisfied: the period will be "
            f"shorter than m = {params.m}."
        )

    return ValidationResult(
        method=MethodName.MIXED_CONGRUENTIAL,
        theorem=HULL_DOBELL,
        conditions=conditions,
        all_satisfied=all_satisfied,
        explanation=explanation,
    )


# =============================================================================
# MULTIPLICATIVE CONGRUENTIAL
# =============================================================================

def _prime_modulus_condition(m: int, prime: bool) -> ValidationCondition:
    name = "m is prime"
    description = "The modulus m must be a prime number"
    if m <= 0:
        return ValidationCondition(name=name, description=description,
                                   satisfied=False, details=_invalid_modulus(m))
    if prime:
        details = f"m = {m} is prime {OK}"
    else:
        details = f"m = {m} is not prime (prime factors {prime_factors(m)}) {FAIL}"
    return ValidationCondition(name=name, description=description,
                               satisfied=prime, details=details)


def _primitive_root_condition(a: int, m: int, prime: bool) -> ValidationCondition:
    name = "a is a primitive root modulo m"
    description = "The multiplicative order of a modulo m equals m - 1"
    if not prime:
        return ValidationCondition(
            name=name,
            description=description,
            satisfied=False,
            details=f"requires a prime modulus, m = {m} {FAIL}",
        )

    order = multiplicative_order(a, m)
    satisfied = is_primitive_root(a, m)
    return ValidationCondition(
        name=name,
        description=description,
        satisfied=satisfied,
        details=f"order of {a} modulo {m} = {order}, m - 1 = {m - 1} {_mark(satisfied)}",
    )


def _nonzero_seed_condition(x0: int, m: int) -> ValidationCondition:
    name = "x0 is not a multiple of m"
    description = "A seed congruent to 0 stays at 0 forever"
    if m <= 0:
        return ValidationCondition(name=name, description=description,
                                   satisfied=False, details=_invalid_modulus(m))
    satisfied = x0 % m != 0
    return ValidationCondition(
        name=name,
        description=description,
        satisfied=satisfied,
        details=f"{x0} mod {m} = {x0 % m} {_mark(satisfied)}",
    )


def validate_multiplicative(params: MultiplicativeCongruential) -> ValidationResult:
    prime = params.m > 0 and is_prime(params.m)
    conditions = [
        _prime_modulus_condition(params.m, prime),
        _primitive_root_condition(params.a, params.m, prime),
        _nonzero_seed_condition(params.x0, params.m),
    ]
    all_satisfied = all(c.satisfied for c in conditions)

    if all_satisfied:
        explanation = (
            f"m = {params.m} is prime and a = {params.a} is a primitive root: "
            f"the generator reaches its maximal period of m - 1 = {params.m - 1} values."
        )
    else:
        explanation = (
            f"{_failed_names(conditions)} not satisfied: the maximal period "
            f"m - 1 is not guaranteed."
        )

    return ValidationResult(
        method=MethodName.MULTIPLICATIVE_CONGRUENTIAL,
        theorem=PRIME_MODULUS,
        conditions=conditions,
        all_satisfied=all_satisfied,
        explanation=explanation,
    )


# =============================================================================
# DISPATCH
# =============================================================================

def _failed_names(conditions: List[ValidationCondition]) -> str:
    failed = [f"'{c.name}'" for c in conditions if not c.satisfied]
    label = "Condition" if len(failed) == 1 else "Conditions"
    return f"{label} {', '.join(failed)}"


def inapplicable(method: MethodName) -> ValidationResult:
    return ValidationResult(
        method=method,
        applicable=False,
        conditions=[],
        all_satisfied=False,
        explanation=(
            f"No period theorem applies to {method.value}; "
            f"run the generator to observe its period."
        ),
    )


def validate_conditions(params: GenerationMethod,
                        settings: Optional[EngineSettings] = None) -> ValidationResult:
    """
    Evaluate the period theorem for a generation method's parameters.

    Raises:
        InvalidParameterError: m at or above 2^settings.max_modulus_bits
    """
    settings = settings or EngineSettings()
    modulus = getattr(params, "m", 0)
    if modulus.bit_length() > settings.max_modulus_bits:
        raise InvalidParameterError(
            f"Parameter 'm' must be below 2^{settings.max_modulus_bits}"
        )

    if isinstance(params, MixedCongruential):
        result = validate_mixed(params)
    elif isinstance(params, MultiplicativeCongruential):
        result = validate_multiplicative(params)
    elif isinstance(params, MiddleSquares):
        result = inapplicable(MethodName.MIDDLE_SQUARES)
    else:
        raise InvalidParameterError(f"Unsupported generation method: {params!r}")

    logger.info(
        f"Validated {result.method.value}: "
        f"{sum(c.satisfied for c in result.conditions)}/{len(result.conditions)} conditions"
    )
    return result
