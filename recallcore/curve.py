"""
The forgetting curve and its inverse, the interval function.

Both are fixed by DECAY and FACTOR and need no parameter table. FACTOR is
calibrated so that interval(0.9, S) == S: stability is the number of days
after which recall probability has decayed to 90%.
"""

import math

from .constants import DECAY, FACTOR
from .exceptions import InvalidArgumentError


def _check_stability(stability: float) -> None:
    if not stability > 0:
        raise InvalidArgumentError(
            f"Stability must be positive, got {stability}."
        )


def retrievability(elapsed_days: float, stability: float) -> float:
    """
    Probability of recall after `elapsed_days` for a memory of the given stability.

    Power-law decay R = (1 + FACTOR * t / S) ** DECAY. Equals 1 at t = 0, strictly
    decreasing in t and strictly increasing in S for t > 0.

    Raises:
        InvalidArgumentError: If elapsed_days is negative, stability is not positive,
            or the ratio of the two overflows.
    """
    if not elapsed_days >= 0:
        raise InvalidArgumentError(
            f"Elapsed time must be non-negative, got {elapsed_days}."
        )
    _check_stability(stability)
    base = 1.0 + FACTOR * elapsed_days / stability
    if not math.isfinite(base):
        raise InvalidArgumentError(
            f"Elapsed time {elapsed_days} is too large for stability {stability}."
        )
    return base ** DECAY


def interval(desired_retention: float, stability: float) -> float:
    """
    Days after which retrievability decays to `desired_retention`.

    The raw real-valued inverse of retrievability(); rounding to whole days and
    minimum/maximum intervals are caller policies (see simulation.IntervalPolicy).

    Raises:
        InvalidArgumentError: If desired_retention is outside (0, 1) or stability
            is not positive.
    """
    if not 0 < desired_retention < 1:
        raise InvalidArgumentError(
            f"Desired retention must be in (0, 1), got {desired_retention}."
        )
    _check_stability(stability)
    return (stability / FACTOR) * (desired_retention ** (1.0 / DECAY) - 1.0)
