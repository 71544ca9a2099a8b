#!/usr/bin/env python3
"""
Sequence generator tests.

Covers:
1. Recurrences for each method
2. Exact period detection
3. Iteration ceilings
4. Degenerate (zero) sequences
5. Statistics over the returned values
"""

import pytest

from prng_lab.config import EngineSettings
from prng_lab.errors import InvalidParameterError
from prng_lab.generators import (
    generate_sequence,
    middle_square_step,
    mixed_congruential_step,
    multiplicative_congruential_step,
)
from prng_lab.models import (
    MiddleSquares,
    MixedCongruential,
    MultiplicativeCongruential,
    StoppedReason,
)


class TestStepFunctions:
    """Single-step recurrences."""

    def test_mixed_step(self):
        assert mixed_congruential_step(7, 5, 3, 16) == 6

    def test_multiplicative_step(self):
        assert multiplicative_congruential_step(5, 3, 17) == 15

    def test_middle_square_pads_square_to_even_width(self):
        # 1234^2 = 1522756 -> "01522756" -> middle "5227"
        assert middle_square_step(1234, 4) == 5227

    def test_middle_square_second_iterate(self):
        # 5227^2 = 27321529
        assert middle_square_step(5227, 4) == 3215

    def test_middle_square_of_zero(self):
        assert middle_square_step(0, 4) == 0


class TestMixedCongruential:
    """x[n+1] = (a x[n] + b) mod m"""

    def test_full_period_detected(self):
        result = generate_sequence(MixedCongruential(x0=7, a=5, b=3, m=16))
        stats = result.statistics

        assert stats.stopped_reason == StoppedReason.PERIOD_DETECTED
        assert stats.period is not None
        assert stats.period <= 16
        assert stats.period == 16
        assert stats.count == 16

    def test_sequence_starts_after_seed(self):
        result = generate_sequence(MixedCongruential(x0=7, a=5, b=3, m=16))
        assert result.raw_numbers[:3] == [6, 1, 8]
        assert result.numbers[:3] == [6 / 16, 1 / 16, 8 / 16]

    def test_normalized_values_in_unit_interval(self):
        result = generate_sequence(MixedCongruential(x0=1, a=13, b=7, m=97))
        assert all(0.0 <= r < 1.0 for r in result.numbers)

    def test_raw_values_are_unique(self):
        result = generate_sequence(MixedCongruential(x0=3, a=4, b=1, m=30))
        assert len(set(result.raw_numbers)) == len(result.raw_numbers)

    def test_short_period_measures_cycle_length(self):
        # a = 1, b = 2, m = 8 from x0 = 0 visits 2, 4, 6, 0 and repeats
        result = generate_sequence(MixedCongruential(x0=0, a=1, b=2, m=8))
        assert result.raw_numbers == [2, 4, 6, 0]
        assert result.statistics.period == 4

    def test_modulus_one_is_immediate_period(self):
        result = generate_sequence(MixedCongruential(x0=0, a=3, b=1, m=1))
        assert result.numbers == [0.0]
        assert result.statistics.period == 1
        assert result.statistics.stopped_reason == StoppedReason.PERIOD_DETECTED

    def test_ceiling_stops_long_sequences(self):
        settings = EngineSettings(max_congruential_iterations=10)
        result = generate_sequence(MixedCongruential(x0=7, a=5, b=3, m=16), settings)

        assert result.statistics.count == 10
        assert result.statistics.stopped_reason == StoppedReason.MAX_ITERATIONS
        assert result.statistics.period is None

    def test_zero_modulus_rejected(self):
        with pytest.raises(InvalidParameterError):
            generate_sequence(MixedCongruential(x0=1, a=1, b=1, m=0))

    def test_statistics_match_numbers(self):
        result = generate_sequence(MixedCongruential(x0=7, a=5, b=3, m=16))
        numbers = result.numbers
        stats = result.statistics

        assert stats.min == min(numbers)
        assert stats.max == max(numbers)
        assert stats.mean == pytest.approx(sum(numbers) / len(numbers))
        # full period visits every residue once
        assert stats.mean == pytest.approx(7.5 / 16)


class TestMultiplicativeCongruential:
    """x[n+1] = a x[n] mod m"""

    def test_primitive_root_reaches_m_minus_one(self):
        result = generate_sequence(MultiplicativeCongruential(x0=1, a=3, m=17))
        assert result.statistics.period == 16
        assert result.statistics.count == 16
        assert 0 not in result.raw_numbers

    def test_zero_seed_is_degenerate(self):
        result = generate_sequence(MultiplicativeCongruential(x0=0, a=3, m=17))
        assert result.raw_numbers == [0]
        assert result.statistics.stopped_reason == StoppedReason.DEGENERATE_ZERO

    def test_zero_multiplier_is_degenerate(self):
        result = generate_sequence(MultiplicativeCongruential(x0=5, a=0, m=17))
        assert result.numbers == [0.0]
        assert result.statistics.stopped_reason == StoppedReason.DEGENERATE_ZERO
        assert result.statistics.period == 1


class TestMiddleSquares:
    """x[n+1] = middle digits of x[n]^2"""

    def test_first_iterate(self):
        result = generate_sequence(MiddleSquares(x0=1234, digits=4))
        assert result.raw_numbers[0] == 5227
        assert result.numbers[0] == pytest.approx(0.5227)

    def test_terminates_with_known_reason(self):
        result = generate_sequence(MiddleSquares(x0=1234, digits=4))
        assert result.statistics.stopped_reason in (
            StoppedReason.PERIOD_DETECTED,
            StoppedReason.DEGENERATE_ZERO,
        )
        assert all(0.0 <= r < 1.0 for r in result.numbers)

    def test_zero_seed_is_degenerate(self):
        result = generate_sequence(MiddleSquares(x0=0, digits=2))
        assert result.raw_numbers == [0]
        assert result.statistics.stopped_reason == StoppedReason.DEGENERATE_ZERO

    def test_fixed_point_is_period_one(self):
        # 10^2 = 0100 -> 10
        result = generate_sequence(MiddleSquares(x0=10, digits=2))
        assert result.raw_numbers == [10]
        assert result.statistics.period == 1
        assert result.statistics.stopped_reason == StoppedReason.PERIOD_DETECTED

    def test_seed_with_too_many_digits_rejected(self):
        with pytest.raises(InvalidParameterError):
            generate_sequence(MiddleSquares(x0=123456789, digits=4))

    def test_seed_with_twice_the_digits_accepted(self):
        result = generate_sequence(MiddleSquares(x0=12345678, digits=4))
        assert result.statistics.count >= 1
        assert all(x < 10 ** 4 for x in result.raw_numbers)

    def test_ceiling(self):
        settings = EngineSettings(middle_squares_max_iterations=3)
        result = generate_sequence(MiddleSquares(x0=1234, digits=4), settings)
        assert result.statistics.count == 3
        assert result.statistics.stopped_reason == StoppedReason.MAX_ITERATIONS


class TestInputBounds:
    """Oversized inputs are rejected before any iteration starts."""

    def test_digits_above_limit(self):
        settings = EngineSettings(max_middle_square_digits=8)
        with pytest.raises(InvalidParameterError, match="digits"):
            generate_sequence(MiddleSquares(x0=1, digits=9), settings)

    def test_huge_digits_rejected_without_building_numbers(self):
        with pytest.raises(InvalidParameterError):
            generate_sequence(MiddleSquares(x0=1, digits=10_000_000))

    def test_digits_at_default_limit(self):
        settings = EngineSettings(middle_squares_max_iterations=5)
        result = generate_sequence(MiddleSquares(x0=123456789, digits=100), settings)
        assert all(0.0 <= r < 1.0 for r in result.numbers)

    def test_long_seed_with_long_digits(self):
        # 3000-digit seed is rejected by the digit limit, not by str()/int()
        with pytest.raises(InvalidParameterError):
            generate_sequence(MiddleSquares(x0=int("1" * 3000), digits=1500))

    @pytest.mark.parametrize("method", [
        MixedCongruential(x0=1, a=5, b=3, m=2 ** 64),
        MultiplicativeCongruential(x0=1, a=3, m=2 ** 64 + 13),
    ])
    def test_modulus_above_bit_limit(self, method):
        with pytest.raises(InvalidParameterError, match="2\\^64"):
            generate_sequence(method)

    def test_largest_allowed_modulus(self):
        settings = EngineSettings(max_congruential_iterations=10)
        result = generate_sequence(
            MixedCongruential(x0=1, a=6364136223846793005, b=1442695040888963407, m=2 ** 64 - 1),
            settings,
        )
        assert result.statistics.count == 10
        assert result.statistics.stopped_reason == StoppedReason.MAX_ITERATIONS
