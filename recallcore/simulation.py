"""
Reference review protocol: walks a card through a sequence of graded reviews.

The formula functions are stateless; this module owns the per-card loop the
way an embedding application would, holding (stability, difficulty, elapsed)
between calls and applying an explicit interval policy.
"""

import logging
import math
from typing import Iterable, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .constants import (
    DEFAULT_DESIRED_RETENTION,
    DEFAULT_MAXIMUM_INTERVAL,
    DEFAULT_MINIMUM_INTERVAL,
)
from .exceptions import InvalidArgumentError
from .memory_model import MemoryModel
from .models import Grade, MemoryState, ReviewEvent, ReviewStep

logger = logging.getLogger(__name__)


class IntervalPolicy(BaseModel):
    """
    How a raw interval is turned into a scheduled interval.

    Rounding happens first (half-up to whole days), then the result is clamped
    into [minimum_days, maximum_days].
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    round_to_days: bool = True
    minimum_days: float = Field(default=DEFAULT_MINIMUM_INTERVAL, ge=0)
    maximum_days: Optional[float] = Field(default=DEFAULT_MAXIMUM_INTERVAL, gt=0)

    @model_validator(mode="after")
    def check_bounds(self) -> "IntervalPolicy":
        if self.maximum_days is not None and self.maximum_days < self.minimum_days:
            raise ValueError("maximum_days must not be below minimum_days")
        return self

    def apply(self, raw_days: float) -> float:
        days = float(math.floor(raw_days + 0.5)) if self.round_to_days else raw_days
        days = max(days, self.minimum_days)
        if self.maximum_days is not None:
            days = min(days, self.maximum_days)
        return days


class ReviewSimulator:
    """
    Drives a MemoryModel through a card's review history.
    """

    def __init__(
        self,
        model: Optional[MemoryModel] = None,
        desired_retention: float = DEFAULT_DESIRED_RETENTION,
        policy: Optional[IntervalPolicy] = None,
    ):
        if not 0 < desired_retention < 1:
            raise InvalidArgumentError(
                f"Desired retention must be in (0, 1), got {desired_retention}."
            )
        self.model = model or MemoryModel()
        self.desired_retention = desired_retention
        self.policy = policy or IntervalPolicy()

    def next_review(
        self, state: MemoryState, desired_retention: Optional[float] = None
    ) -> float:
        """Days until the next review of a card in `state`, after policy."""
        retention = (
            self.desired_retention
            if desired_retention is None
            else desired_retention
        )
        raw = self.model.interval(retention, state.stability)
        return self.policy.apply(raw)

    def _first_step(self, grade: Grade) -> ReviewStep:
        state = self.model.initial_state(grade)
        return ReviewStep(
            elapsed=0.0,
            grade=grade,
            retrievability=1.0,
            stability=state.stability,
            difficulty=state.difficulty,
            interval=self.next_review(state),
        )

    def _advance(
        self, previous: ReviewStep, elapsed_days: float, grade: Grade
    ) -> ReviewStep:
        r = self.model.retrievability(elapsed_days, previous.stability)
        state = self.model.next_state(previous.state, elapsed_days, grade)
        return ReviewStep(
            elapsed=previous.elapsed + elapsed_days,
            grade=grade,
            retrievability=r,
            stability=state.stability,
            difficulty=state.difficulty,
            interval=self.next_review(state),
        )

    def simulate(
        self, grades: Iterable[Union[Grade, int, str]]
    ) -> List[ReviewStep]:
        """
        Review a new card with each grade in turn, always on its due day.

        The first grade sets the initial state. Every later review happens
        exactly one scheduled interval after the previous one.

        Raises:
            InvalidArgumentError: If no grades are given or a grade is invalid.
        """
        parsed = [Grade.parse(g) for g in grades]
        if not parsed:
            raise InvalidArgumentError("At least one grade is required.")

        steps = [self._first_step(parsed[0])]
        for grade in parsed[1:]:
            steps.append(self._advance(steps[-1], steps[-1].interval, grade))

        logger.debug(
            f"Simulated {len(steps)} reviews: final S={steps[-1].stability:.4f}, "
            f"D={steps[-1].difficulty:.4f}"
        )
        return steps

    def replay(self, events: Iterable[ReviewEvent]) -> List[ReviewStep]:
        """
        Rebuild a card's memory state from its real review history.

        Identical to simulate() except that the time between reviews comes from
        each event's elapsed_days rather than from the scheduled interval.
        """
        history = list(events)
        if not history:
            raise InvalidArgumentError("At least one review event is required.")

        steps = [self._first_step(history[0].grade)]
        for event in history[1:]:
            steps.append(self._advance(steps[-1], event.elapsed_days, event.grade))
        return steps

    def current_state(self, events: Iterable[ReviewEvent]) -> MemoryState:
        """The memory state after the last event of a history."""
        return self.replay(events)[-1].state
