# recallcore/memory_model.py

"""
Initial-state and state-update functions of the FSRS memory model.

A MemoryModel captures one immutable ParameterTable. All methods are pure: the
card's (stability, difficulty) pair is owned by the caller and passed in on
every call.
"""

import logging
import math
from typing import Optional

from . import curve
from .constants import MAX_DIFFICULTY, MIN_DIFFICULTY, MIN_STABILITY
from .exceptions import InvalidArgumentError
from .models import Grade, MemoryState
from .parameters import DEFAULT_TABLE, ParameterTable

logger = logging.getLogger(__name__)


def clamp_difficulty(difficulty: float) -> float:
    return min(max(difficulty, MIN_DIFFICULTY), MAX_DIFFICULTY)


class MemoryModel:
    """
    Evaluates the FSRS formula set against a single parameter table.
    """

    def __init__(self, parameters: Optional[ParameterTable] = None):
        if parameters is None:
            parameters = DEFAULT_TABLE
        self.parameters = parameters

    def __repr__(self) -> str:
        return f"MemoryModel(parameters={self.parameters.name!r})"

    # ------------------------------------------------------------------
    # Forgetting curve
    # ------------------------------------------------------------------

    def retrievability(self, elapsed_days: float, stability: float) -> float:
        return curve.retrievability(elapsed_days, stability)

    def interval(self, desired_retention: float, stability: float) -> float:
        return curve.interval(desired_retention, stability)

    # ------------------------------------------------------------------
    # Initial state
    # ------------------------------------------------------------------

    def initial_stability(self, grade: Grade) -> float:
        """Stability after the first review: a direct table lookup by grade."""
        return self.parameters.initial_stability_for(Grade.parse(grade))

    def initial_difficulty(self, grade: Grade) -> float:
        """
        Difficulty after the first review.

        D0(G) = w[4] - exp(w[5] * (G - 1)) + 1, so D0(Forgot) == w[4] and better
        grades give progressively lower difficulty.
        """
        w = self.parameters
        g = Grade.parse(grade).value
        return clamp_difficulty(w[4] - math.exp(w[5] * (g - 1)) + 1)

    def initial_state(self, grade: Grade) -> MemoryState:
        return MemoryState(
            stability=self.initial_stability(grade),
            difficulty=self.initial_difficulty(grade),
        )

    # ------------------------------------------------------------------
    # State updates
    # ------------------------------------------------------------------

    def difficulty(self, difficulty: float, grade: Grade) -> float:
        """
        Difficulty after a review.

        A grade-dependent step, damped linearly as difficulty approaches 10,
        followed by mean reversion towards D0(Easy) with weight w[7].
        """
        _check_difficulty(difficulty)
        w = self.parameters
        g = Grade.parse(grade).value
        delta = -w[6] * (g - 3)
        damped = difficulty + delta * (MAX_DIFFICULTY - difficulty) / 9.0
        target = self.initial_difficulty(Grade.Easy)
        return clamp_difficulty(w[7] * target + (1.0 - w[7]) * damped)

    def stability(
        self,
        difficulty: float,
        stability: float,
        retrievability: float,
        grade: Grade,
    ) -> float:
        """
        Stability after a review at the given retrievability.

        Successful recalls grow stability multiplicatively; a lapse recomputes it.
        """
        _check_difficulty(difficulty)
        if not stability > 0:
            raise InvalidArgumentError(
                f"Stability must be positive, got {stability}."
            )
        if not 0 < retrievability <= 1:
            raise InvalidArgumentError(
                f"Retrievability must be in (0, 1], got {retrievability}."
            )
        grade = Grade.parse(grade)
        if grade.is_lapse:
            return self._stability_after_lapse(difficulty, stability, retrievability)
        return self._stability_after_recall(
            difficulty, stability, retrievability, grade
        )

    def _stability_after_recall(
        self, d: float, s: float, r: float, grade: Grade
    ) -> float:
        w = self.parameters
        hard_penalty = w[15] if grade is Grade.Hard else 1.0
        easy_bonus = w[16] if grade is Grade.Easy else 1.0
        growth = (
            math.exp(w[8])
            * (11.0 - d)
            * s ** -w[9]
            * (math.exp(w[10] * (1.0 - r)) - 1.0)
            * hard_penalty
            * easy_bonus
        )
        return s * (1.0 + growth)

    def _stability_after_lapse(self, d: float, s: float, r: float) -> float:
        w = self.parameters
        relearned = (
            w[11]
            * d ** -w[12]
            * (s + 1.0) ** w[13]
            * math.exp(w[14] * (1.0 - r))
        )
        # A lapse never increases stability.
        return max(min(relearned, s), MIN_STABILITY)

    def next_state(
        self, state: MemoryState, elapsed_days: float, grade: Grade
    ) -> MemoryState:
        """
        Apply one review `elapsed_days` after the previous one.

        Stability is updated with the pre-review difficulty, then difficulty.
        """
        grade = Grade.parse(grade)
        r = self.retrievability(elapsed_days, state.stability)
        new_state = MemoryState(
            stability=self.stability(state.difficulty, state.stability, r, grade),
            difficulty=self.difficulty(state.difficulty, grade),
        )
        logger.debug(
            f"{grade.name} after {elapsed_days:g}d (R={r:.4f}): "
            f"S {state.stability:.4f} -> {new_state.stability:.4f}, "
            f"D {state.difficulty:.4f} -> {new_state.difficulty:.4f}"
        )
        return new_state


def _check_difficulty(difficulty: float) -> None:
    if not MIN_DIFFICULTY <= difficulty <= MAX_DIFFICULTY:
        raise InvalidArgumentError(
            f"Difficulty must be in [{MIN_DIFFICULTY:g}, {MAX_DIFFICULTY:g}], got {difficulty}."
        )


# ---------------------------------------------------------------------------
# Module-level API evaluated against the default parameter table
# ---------------------------------------------------------------------------

DEFAULT_MODEL = MemoryModel()


def initial_stability(grade: Grade) -> float:
    return DEFAULT_MODEL.initial_stability(grade)


def initial_difficulty(grade: Grade) -> float:
    return DEFAULT_MODEL.initial_difficulty(grade)


def stability(
    difficulty: float, stability: float, retrievability: float, grade: Grade
) -> float:
    return DEFAULT_MODEL.stability(difficulty, stability, retrievability, grade)


def difficulty(difficulty: float, grade: Grade) -> float:
    return DEFAULT_MODEL.difficulty(difficulty, grade)


retrievability = curve.retrievability
interval = curve.interval
