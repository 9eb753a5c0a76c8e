import pytest
from pathlib import Path

import yaml

from recallcore.constants import DEFAULT_PARAMETERS
from recallcore.memory_model import MemoryModel
from recallcore.parameters import ParameterTable
from recallcore.simulation import ReviewSimulator


@pytest.fixture
def model() -> MemoryModel:
    """Provides a MemoryModel evaluated against the default parameter table."""
    return MemoryModel()


@pytest.fixture
def simulator(model: MemoryModel) -> ReviewSimulator:
    """Provides a ReviewSimulator with desired retention 0.9 and the default interval policy."""
    return ReviewSimulator(model=model)


@pytest.fixture
def custom_table() -> ParameterTable:
    """
    A second calibration that differs from the default only in the initial stabilities.
    """
    weights = list(DEFAULT_PARAMETERS)
    weights[0:4] = [0.5, 1.5, 4.0, 20.0]
    return ParameterTable(weights=tuple(weights), name="custom")


@pytest.fixture
def params_file(tmp_path: Path) -> Path:
    """
    Write a YAML parameter file in mapping form.

    Returns:
        Path: Path to "params.yaml" inside `tmp_path`, holding the default weights
        under the name "from-file".
    """
    path = tmp_path / "params.yaml"
    path.write_text(
        yaml.safe_dump({"name": "from-file", "weights": list(DEFAULT_PARAMETERS)}),
        encoding="utf-8",
    )
    return path
