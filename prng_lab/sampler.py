#!/usr/bin/env python3
"""
Acceptance-Rejection Sampler
=============================

Draws variates from a registered density f on [a, b] using the uniform
envelope g(x) = 1 scaled by M = max f on [a, b]:

    r1, r2 ~ U[0, 1)
    x = a + (b - a) * r1
    accept x iff r2 <= f(x) / M

Every trial is recorded for plotting, both on the unit scale (r2 against
f(x) / M) and on the density scale (r2 * M against f(x), with f sampled
over [a, b] as the curve). Sampling stops at ``count``
acceptances or after ``count * trial_factor`` trials, whichever comes first;
running out of trials raises IterationLimitExceededError.

Randomness comes from a numpy Generator created per call (or passed in),
so concurrent requests never share state.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

import numpy as np

from .config import EngineSettings
from .errors import InvalidParameterError, IterationLimitExceededError
from .models import ChartData, DistributionName, RandomVariableResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Density:
    """A target density on the closed domain [a, b] with envelope height M."""
    name: DistributionName
    formula: str
    f: Callable[[float], float]
    a: float
    b: float
    M: float

    def to_dict(self) -> Dict[str, object]:
        return {
            "name": self.name.value,
            "formula": self.formula,
            "a": self.a,
            "b": self.b,
            "M": self.M,
        }


DENSITIES: Dict[DistributionName, Density] = {
    DistributionName.LINEAR: Density(
        name=DistributionName.LINEAR,
        formula="f(x) = 2x",
        f=lambda x: 2.0 * x,
        a=0.0, b=1.0, M=2.0,
    ),
    DistributionName.QUADRATIC: Density(
        name=DistributionName.QUADRATIC,
        formula="f(x) = -(x - 2)^2 + 4",
        f=lambda x: -((x - 2.0) ** 2) + 4.0,
        a=0.0, b=4.0, M=4.0,
    ),
    DistributionName.HYPERBOLA: Density(
        name=DistributionName.HYPERBOLA,
        formula="f(x) = 1/x",
        f=lambda x: 1.0 / x,
        a=0.5, b=3.0, M=2.0,
    ),
}

# Samples of f drawn as the density curve
DENSITY_GRID_POINTS = 100

# Spellings used by older clients
DISTRIBUTION_ALIASES = {"cuadratic": DistributionName.QUADRATIC}


def get_density(name: str) -> Density:
    key = str(name).strip().lower()
    if key in DISTRIBUTION_ALIASES:
        return DENSITIES[DISTRIBUTION_ALIASES[key]]
    try:
        return DENSITIES[DistributionName(key)]
    except ValueError:
        supported = ", ".join(d.value for d in DistributionName)
        raise InvalidParameterError(f"Unknown distribution {name!r}; use one of {supported}")


def acceptance_rejection(
    distribution: str,
    count: int,
    rng: Optional[np.random.Generator] = None,
    settings: Optional[EngineSettings] = None,
) -> RandomVariableResult:
    """
    Collect ``count`` accepted variates from ``distribution``.

    Raises:
        InvalidParameterError: unknown distribution or count outside
            [1, settings.max_random_variables]
        IterationLimitExceededError: trial cap reached first
    """
    settings = settings or EngineSettings()
    density = get_density(distribution)

    if isinstance(count, bool) or not isinstance(count, int):
        raise InvalidParameterError(f"Parameter 'count' must be an integer, got {count!r}")
    if count < 1 or count > settings.max_random_variables:
        raise InvalidParameterError(
            f"Parameter 'count' must be between 1 and {settings.max_random_variables}, got {count}"
        )

    rng = rng if rng is not None else np.random.default_rng()
    max_trials = count * settings.sampler_trial_factor
    width = density.b - density.a

    r1: List[float] = []
    r2: List[float] = []
    xs: List[float] = []
    ys: List[float] = []
    accepted: List[bool] = []
    generated: List[float] = []

    while len(generated) < count:
        if len(r1) >= max_trials:
            logger.warning(
                f"❌ {density.name.value}: {len(generated)}/{count} accepted after {max_trials} trials"
            )
            raise IterationLimitExceededError(
                f"Only {len(generated)} of {count} values were accepted after "
                f"{max_trials} trials; retry with a smaller count"
            )

        u1 = float(rng.random())
        u2 = float(rng.random())
        x = density.a + width * u1
        y = density.f(x) / density.M
        ok = u2 <= y

        r1.append(u1)
        r2.append(u2)
        xs.append(x)
        ys.append(y)
        accepted.append(ok)
        if ok:
            generated.append(x)

    acceptance_rate = len(generated) / len(r1)
    grid = np.linspace(density.a, density.b, DENSITY_GRID_POINTS)
    logger.info(
        f"Sampled {count} values from {density.formula} in {len(r1)} trials "
        f"(acceptance rate {acceptance_rate:.2%})"
    )

    return RandomVariableResult(
        distribution=density.name,
        r1=r1,
        r2=r2,
        generated_values=generated,
        acceptance_rate=acceptance_rate,
        total_trials=len(r1),
        chart_data=ChartData(
            x=xs,
            y=ys,
            r2=r2,
            accepted=accepted,
            a=density.a,
            b=density.b,
            M=density.M,
            x_d=xs,
            y_d=[u * density.M for u in r2],
            points_x_d=grid.tolist(),
            points_fx_d=[float(density.f(x)) for x in grid],
            function_name=density.formula,
        ),
    )
