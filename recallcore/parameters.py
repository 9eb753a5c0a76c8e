"""
The Parameter Table (W): an immutable, validated vector of calibrated weights.
"""

import logging
import math
from pathlib import Path
from typing import Any, Optional, Tuple, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .constants import DEFAULT_PARAMETERS, MIN_PARAMETER_COUNT
from .exceptions import ParameterFileError, ParameterTableError
from .models import Grade

logger = logging.getLogger(__name__)


def _table_error(e: ValidationError) -> ParameterTableError:
    error_details = e.errors()[0]
    return ParameterTableError(
        f"Invalid parameter table: {error_details['msg']}", e
    )


class ParameterTable(BaseModel):
    """
    Calibrated weights evaluated by every formula of the memory model.

    Tables are frozen after construction, so several calibrations (for example
    per-user fitted weights) can be shared freely and used side by side.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    weights: Tuple[float, ...] = Field(
        default=DEFAULT_PARAMETERS,
        description=f"Ordered weights w[0..n-1]; at least {MIN_PARAMETER_COUNT} entries.",
    )
    name: Optional[str] = Field(
        default=None, description="Optional label, e.g. the calibration source."
    )

    def __init__(self, **data: Any):
        try:
            super().__init__(**data)
        except ValidationError as e:
            raise _table_error(e) from e

    @classmethod
    def model_validate(cls, obj: Any, **kwargs: Any) -> "ParameterTable":
        try:
            return super().model_validate(obj, **kwargs)
        except ValidationError as e:
            raise _table_error(e) from e

    @field_validator("weights")
    @classmethod
    def validate_weights(cls, weights: Tuple[float, ...]) -> Tuple[float, ...]:
        """Reject short tables, non-finite weights and non-positive initial stabilities."""
        if len(weights) < MIN_PARAMETER_COUNT:
            raise ValueError(
                f"expected at least {MIN_PARAMETER_COUNT} weights, got {len(weights)}"
            )
        for index, value in enumerate(weights):
            if not math.isfinite(value):
                raise ValueError(f"w[{index}] is not finite: {value}")
        for grade in Grade:
            if weights[grade - 1] <= 0:
                raise ValueError(
                    f"w[{grade - 1}] (initial stability for {grade.name}) must be positive"
                )
        return weights

    def __len__(self) -> int:
        return len(self.weights)

    def __getitem__(self, index: int) -> float:
        return self.weights[index]

    def initial_stability_for(self, grade: Grade) -> float:
        """One table slot per grade, in grade order."""
        return self.weights[Grade(grade).value - 1]


DEFAULT_TABLE = ParameterTable(name="fsrs-5-default")


def _parse_parameter_document(raw: Any, file_path: Path) -> ParameterTable:
    if isinstance(raw, list):
        return ParameterTable(weights=tuple(raw))
    if isinstance(raw, dict):
        if "weights" not in raw:
            raise ParameterFileError(
                f"{file_path}: mapping must contain a 'weights' list."
            )
        unknown = set(raw) - {"weights", "name"}
        if unknown:
            raise ParameterFileError(
                f"{file_path}: unexpected keys {sorted(unknown)}."
            )
        weights = raw["weights"]
        if not isinstance(weights, list):
            raise ParameterFileError(f"{file_path}: 'weights' must be a list.")
        return ParameterTable(
            weights=tuple(weights), name=raw.get("name") or file_path.stem
        )
    raise ParameterFileError(
        f"{file_path}: top level must be a list of weights or a mapping."
    )


def load_parameter_table(file_path: Union[str, Path]) -> ParameterTable:
    """
    Load a parameter table from a YAML file.

    The file holds either a bare list of weights or a mapping with a
    ``weights`` list and an optional ``name``.

    Raises:
        ParameterFileError: If the file is missing, unreadable, not valid YAML
            or not shaped like a parameter document.
        ParameterTableError: If the weights themselves are invalid.
    """
    file_path = Path(file_path)
    try:
        content = file_path.read_text(encoding="utf-8")
        raw = yaml.safe_load(content)
    except FileNotFoundError as e:
        raise ParameterFileError(
            f"Parameter file not found: {file_path}", e
        ) from e
    except IOError as e:
        raise ParameterFileError(
            f"Could not read parameter file {file_path}: {e}", e
        ) from e
    except yaml.YAMLError as e:
        raise ParameterFileError(
            f"Invalid YAML syntax in {file_path}: {e}", e
        ) from e

    table = _parse_parameter_document(raw, file_path)
    logger.info(
        f"Loaded parameter table '{table.name}' with {len(table)} weights from {file_path}"
    )
    return table
