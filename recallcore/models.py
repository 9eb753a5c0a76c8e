"""
Value types of the memory model: grades, memory states and review steps.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Union

from pydantic import BaseModel, ConfigDict, Field

from .constants import MAX_DIFFICULTY, MIN_DIFFICULTY
from .exceptions import InvalidArgumentError


class Grade(IntEnum):
    """
    The learner's self-reported recall outcome for one review,
    ordered by recall quality.
    """

    Forgot = 1
    Hard = 2
    Good = 3
    Easy = 4

    @classmethod
    def parse(cls, value: Union["Grade", int, str]) -> "Grade":
        """
        Convert a grade, an ordinal (1-4) or a case-insensitive name into a Grade.

        "again" is accepted as an alias of Forgot, matching the rating names
        used by most flashcard front-ends.

        Raises:
            InvalidArgumentError: If the value does not name one of the four grades.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            name = value.strip().lower()
            if name.isdigit():
                return cls.parse(int(name))
            if name == "again":
                return cls.Forgot
            for grade in cls:
                if grade.name.lower() == name:
                    return grade
            raise InvalidArgumentError(
                f"Invalid grade: {value!r}. Must be one of forgot, hard, good, easy."
            )
        if isinstance(value, int) and not isinstance(value, bool):
            if 1 <= value <= 4:
                return cls(value)
            raise InvalidArgumentError(
                f"Invalid grade: {value}. Must be 1-4 (1=Forgot, 2=Hard, 3=Good, 4=Easy)."
            )
        raise InvalidArgumentError(f"Invalid grade: {value!r}.")

    @property
    def is_lapse(self) -> bool:
        return self is Grade.Forgot


class MemoryState(BaseModel):
    """
    A card's memory state (S, D). Owned by the caller between reviews.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    stability: float = Field(
        ..., gt=0, description="Days until recall probability decays to 90%."
    )
    difficulty: float = Field(
        ...,
        ge=MIN_DIFFICULTY,
        le=MAX_DIFFICULTY,
        description="How hard the card is to remember, in [1, 10].",
    )


class ReviewEvent(BaseModel):
    """
    One entry of a learner's real review history.

    elapsed_days is measured since the previous review and is ignored for the
    first event of a history.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    elapsed_days: float = Field(default=0.0, ge=0)
    grade: Grade


class ReviewStep(BaseModel):
    """
    One row of a simulated or replayed review history.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    elapsed: float = Field(
        ..., ge=0, description="Cumulative days since the first review."
    )
    grade: Grade
    retrievability: float = Field(
        ...,
        gt=0,
        le=1,
        description="Recall probability at the moment of this review.",
    )
    stability: float = Field(..., gt=0)
    difficulty: float = Field(..., ge=MIN_DIFFICULTY, le=MAX_DIFFICULTY)
    interval: float = Field(
        ..., ge=0, description="Days until the next review, after policy."
    )

    @property
    def state(self) -> MemoryState:
        return MemoryState(stability=self.stability, difficulty=self.difficulty)
