"""Recallcore - the FSRS memory model as a pure calculator."""

from .models import Grade, MemoryState, ReviewEvent, ReviewStep
from .constants import DEFAULT_PARAMETERS, DEFAULT_DESIRED_RETENTION
from .exceptions import (
    RecallCoreError,
    InvalidArgumentError,
    ParameterTableError,
    ParameterFileError,
)
from .parameters import ParameterTable, DEFAULT_TABLE, load_parameter_table
from .memory_model import (
    MemoryModel,
    initial_stability,
    initial_difficulty,
    stability,
    difficulty,
    retrievability,
    interval,
)
from .simulation import IntervalPolicy, ReviewSimulator

__all__ = [
    "Grade",
    "MemoryState",
    "ReviewEvent",
    "ReviewStep",
    "DEFAULT_PARAMETERS",
    "DEFAULT_DESIRED_RETENTION",
    "RecallCoreError",
    "InvalidArgumentError",
    "ParameterTableError",
    "ParameterFileError",
    "ParameterTable",
    "DEFAULT_TABLE",
    "load_parameter_table",
    "MemoryModel",
    "initial_stability",
    "initial_difficulty",
    "stability",
    "difficulty",
    "retrievability",
    "interval",
    "IntervalPolicy",
    "ReviewSimulator",
]
