#!/usr/bin/env python3
"""
Condition validator and number theory tests.
"""

import pytest

from prng_lab.config import EngineSettings
from prng_lab.errors import InvalidParameterError
from prng_lab.models import (
    MethodName,
    MiddleSquares,
    MixedCongruential,
    MultiplicativeCongruential,
)
from prng_lab.number_theory import (
    is_prime,
    is_primitive_root,
    multiplicative_order,
    prime_factors,
)
from prng_lab.validator import validate_conditions


class TestNumberTheory:

    def test_prime_factors(self):
        assert prime_factors(16) == [2]
        assert prime_factors(360) == [2, 3, 5]
        assert prime_factors(97) == [97]
        assert prime_factors(1) == []
        assert prime_factors(0) == []

    def test_is_prime(self):
        assert is_prime(2)
        assert is_prime(17)
        assert not is_prime(1)
        assert not is_prime(16)

    def test_multiplicative_order(self):
        assert multiplicative_order(3, 17) == 16
        assert multiplicative_order(2, 17) == 8
        assert multiplicative_order(17, 17) == 0

    def test_primitive_root(self):
        assert is_primitive_root(3, 17)
        assert not is_primitive_root(2, 17)
        assert not is_primitive_root(0, 17)
        assert is_primitive_root(1, 2)


class TestHullDobell:
    """Mixed congruential full-period conditions."""

    def test_all_conditions_satisfied(self):
        result = validate_conditions(MixedCongruential(x0=7, a=21, b=3, m=16))

        assert result.applicable
        assert result.all_satisfied
        assert len(result.conditions) == 3
        assert all(c.satisfied for c in result.conditions)
        assert result.conditions[0].details == "gcd(3, 16) = 1 ✓"

    def test_shared_factor_fails_gcd(self):
        result = validate_conditions(MixedCongruential(x0=7, a=21, b=4, m=16))
        assert not result.all_satisfied
        assert not result.conditions[0].satisfied
        assert "gcd(4, 16) = 4" in result.conditions[0].details

    def test_mod4_condition(self):
        # a - 1 = 2: divisible by 2 but not by 4
        result = validate_conditions(MixedCongruential(x0=1, a=3, b=1, m=16))
        satisfied = [c.satisfied for c in result.conditions]
        assert satisfied == [True, True, False]
        assert not result.all_satisfied

    def test_mod4_not_applicable_when_m_not_multiple_of_4(self):
        result = validate_conditions(MixedCongruential(x0=1, a=4, b=1, m=9))
        assert result.conditions[2].satisfied
        assert "does not apply" in result.conditions[2].details

    def test_prime_factor_condition_fails(self):
        # m = 30 has prime factors 2, 3, 5; a - 1 = 6 misses 5
        result = validate_conditions(MixedCongruential(x0=1, a=7, b=1, m=30))
        assert not result.conditions[1].satisfied
        assert "prime factors of 30: [2, 3, 5]" in result.conditions[1].details

    def test_zero_modulus_reported_not_raised(self):
        result = validate_conditions(MixedCongruential(x0=1, a=5, b=3, m=0))
        assert not result.all_satisfied
        assert not any(c.satisfied for c in result.conditions)
        assert "not a valid modulus" in result.conditions[0].details

    def test_explanation_names_failed_condition(self):
        result = validate_conditions(MixedCongruential(x0=7, a=21, b=4, m=16))
        assert "gcd(b, m) = 1" in result.explanation

    def test_idempotent(self):
        params = MixedCongruential(x0=7, a=21, b=3, m=16)
        assert validate_conditions(params) == validate_conditions(params)


class TestPrimeModulus:
    """Multiplicative congruential maximal-period conditions."""

    def test_primitive_root_with_prime_modulus(self):
        result = validate_conditions(MultiplicativeCongruential(x0=1, a=3, m=17))
        assert result.all_satisfied
        assert result.method == MethodName.MULTIPLICATIVE_CONGRUENTIAL
        assert "order of 3 modulo 17 = 16" in result.conditions[1].details

    def test_non_primitive_root(self):
        result = validate_conditions(MultiplicativeCongruential(x0=1, a=2, m=17))
        assert not result.all_satisfied
        assert not result.conditions[1].satisfied

    def test_composite_modulus(self):
        result = validate_conditions(MultiplicativeCongruential(x0=1, a=5, m=16))
        satisfied = [c.satisfied for c in result.conditions]
        assert satisfied == [False, False, True]

    def test_zero_seed(self):
        result = validate_conditions(MultiplicativeCongruential(x0=34, a=3, m=17))
        assert not result.conditions[2].satisfied

    def test_zero_modulus_reported_not_raised(self):
        result = validate_conditions(MultiplicativeCongruential(x0=1, a=3, m=0))
        assert not result.all_satisfied


class TestMiddleSquaresInapplicable:

    def test_no_theorem(self):
        result = validate_conditions(MiddleSquares(x0=1234, digits=4))
        assert not result.applicable
        assert result.conditions == []
        assert not result.all_satisfied
        assert "No period theorem" in result.explanation


class TestLargeModuli:
    """Primality and factoring stay fast for moduli used in practice."""

    MERSENNE_61 = 2 ** 61 - 1

    def test_primality_matches_trial_division(self):
        def slow_is_prime(n):
            return n >= 2 and all(n % d for d in range(2, int(n ** 0.5) + 1))

        for n in range(5000):
            assert is_prime(n) == slow_is_prime(n)

    def test_factors_reconstruct_small_numbers(self):
        for n in range(2, 3000):
            factors = prime_factors(n)
            rest = n
            for p in factors:
                assert is_prime(p)
                assert rest % p == 0
                while rest % p == 0:
                    rest //= p
            assert rest == 1

    def test_mersenne_primes(self):
        assert is_prime(2 ** 31 - 1)
        assert is_prime(self.MERSENNE_61)
        assert not is_prime(2 ** 61 + 1)
        assert not is_prime(561)

    def test_factoring_beyond_trial_division(self):
        assert prime_factors(524287 * 2147483647) == [524287, 2147483647]
        assert prime_factors(self.MERSENNE_61 - 1) == [
            2, 3, 5, 7, 11, 13, 31, 41, 61, 151, 331, 1321,
        ]

    def test_validate_mersenne_modulus(self):
        m = self.MERSENNE_61
        result = validate_conditions(MultiplicativeCongruential(x0=1, a=37, m=m))

        assert result.conditions[0].satisfied
        assert result.conditions[1].satisfied == (multiplicative_order(37, m) == m - 1)
        assert result.conditions[2].satisfied

    def test_park_miller_minimal_standard(self):
        result = validate_conditions(MultiplicativeCongruential(x0=1, a=16807, m=2 ** 31 - 1))
        assert result.all_satisfied

    def test_modulus_above_bit_limit(self):
        with pytest.raises(InvalidParameterError):
            validate_conditions(MixedCongruential(x0=1, a=5, b=3, m=2 ** 64))

    def test_bit_limit_follows_settings(self):
        settings = EngineSettings(max_modulus_bits=8)
        with pytest.raises(InvalidParameterError):
            validate_conditions(MultiplicativeCongruential(x0=1, a=3, m=257), settings)
        assert validate_conditions(MultiplicativeCongruential(x0=1, a=3, m=251), settings)
