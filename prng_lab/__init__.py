"""
PRNG Lab - Pseudorandom number teaching and validation engine

Components:
    - generators: mixed/multiplicative congruential and middle-square sequences
    - validator: Hull-Dobell and prime-modulus period conditions
    - statistical_tests: chi-square and Kolmogorov-Smirnov uniformity tests
    - sampler: acceptance-rejection variates from registered densities
    - service: request-level operations shared by the HTTP API and the CLI

Usage:
    from prng_lab import generate, validate, statistical_test, random_variables

    result = generate("mixed_congruential", {"x0": 7, "a": 5, "b": 3, "m": 16})
    check = statistical_test(result.numbers, "kolmogorov_smirnov",
                             {"significance_level": 0.05})
    print(check.passes, check.details)
"""

__version__ = "1.0.0"

from .errors import (
    InvalidParameterError,
    InvalidTestInputError,
    IterationLimitExceededError,
    PrngLabError,
)
from .service import (
    generate,
    health,
    random_variables,
    statistical_test,
    validate,
)

__all__ = [
    'generate',
    'validate',
    'statistical_test',
    'random_variables',
    'health',
    'PrngLabError',
    'InvalidParameterError',
    'InvalidTestInputError',
    'IterationLimitExceededError',
]
