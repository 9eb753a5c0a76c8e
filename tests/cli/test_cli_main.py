# Standard library imports
import re
from pathlib import Path

# Third-party imports
import pytest
import yaml
from typer.testing import CliRunner

# Local application imports
from recallcore.cli.main import app
from recallcore.constants import DEFAULT_PARAMETERS


runner = CliRunner()


def strip_ansi(text: str) -> str:
    """Remove ANSI escape sequences (color and control codes) from text."""
    ansi_escape = re.compile(r"\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])")
    return ansi_escape.sub("", text)


def normalize_output(text: str) -> str:
    """
    Normalize CLI output by removing ANSI escape sequences and collapsing consecutive whitespace into single spaces.
    """
    text = strip_ansi(text)
    return re.sub(r"\s+", " ", text).strip()


@pytest.fixture(autouse=True)
def no_params_env(monkeypatch):
    monkeypatch.delenv("RECALLCORE_PARAMS", raising=False)


class TestSimulateCommand:
    def test_simulate_good_reviews(self):
        result = runner.invoke(app, ["simulate", "good", "good", "good"])
        assert result.exit_code == 0, result.output
        output = normalize_output(result.output)
        assert "Review simulation" in output
        assert "3.17" in output
        assert "10.73" in output or "10.74" in output
        assert output.count("Good") == 3

    def test_simulate_accepts_ordinals(self):
        result = runner.invoke(app, ["simulate", "4", "4", "4"])
        assert result.exit_code == 0, result.output
        output = normalize_output(result.output)
        assert "15.69" in output
        assert "1252" in output

    def test_simulate_invalid_grade(self):
        result = runner.invoke(app, ["simulate", "good", "brilliant"])
        assert result.exit_code == 1
        assert "Invalid grade" in normalize_output(result.output)

    def test_simulate_invalid_retention(self):
        result = runner.invoke(app, ["simulate", "good", "--retention", "1.5"])
        assert result.exit_code == 1
        assert "Desired retention" in normalize_output(result.output)

    def test_simulate_without_rounding(self):
        result = runner.invoke(
            app, ["simulate", "forgot", "--no-round", "--min-interval", "0"]
        )
        assert result.exit_code == 0, result.output
        assert "0.40255" in normalize_output(result.output)

    def test_simulate_with_params_file(self, tmp_path: Path):
        weights = list(DEFAULT_PARAMETERS)
        weights[2] = 4.0
        path = tmp_path / "params.yaml"
        path.write_text(yaml.safe_dump(weights), encoding="utf-8")
        result = runner.invoke(app, ["simulate", "good", "--params", str(path)])
        assert result.exit_code == 0, result.output
        assert "4.00" in normalize_output(result.output)

    def test_simulate_with_params_env(self, tmp_path: Path, monkeypatch):
        weights = list(DEFAULT_PARAMETERS)
        weights[2] = 6.5
        path = tmp_path / "env-params.yaml"
        path.write_text(yaml.safe_dump(weights), encoding="utf-8")
        monkeypatch.setenv("RECALLCORE_PARAMS", str(path))
        result = runner.invoke(app, ["simulate", "good"])
        assert result.exit_code == 0, result.output
        assert "6.50" in normalize_output(result.output)

    def test_simulate_with_missing_params_file(self, tmp_path: Path):
        result = runner.invoke(
            app, ["simulate", "good", "--params", str(tmp_path / "nope.yaml")]
        )
        assert result.exit_code == 1
        assert "Parameter file not found" in normalize_output(result.output)


class TestCurveCommands:
    def test_interval(self):
        result = runner.invoke(app, ["interval", "20"])
        assert result.exit_code == 0, result.output
        output = normalize_output(result.output)
        assert "Raw interval: 20.0000 days" in output
        assert "Scheduled interval: 20 days" in output

    def test_interval_custom_retention(self):
        result = runner.invoke(app, ["interval", "10", "--retention", "0.8"])
        assert result.exit_code == 0, result.output
        assert "Raw interval: 23.9803 days" in normalize_output(result.output)

    def test_interval_invalid_stability(self):
        result = runner.invoke(app, ["interval", "0"])
        assert result.exit_code == 1
        assert "Stability must be positive" in normalize_output(result.output)

    def test_retrievability(self):
        result = runner.invoke(app, ["retrievability", "10", "10"])
        assert result.exit_code == 0, result.output
        assert "Retrievability: 0.9000" in normalize_output(result.output)

    def test_retrievability_zero_stability(self):
        result = runner.invoke(app, ["retrievability", "1", "0"])
        assert result.exit_code == 1
        assert "Stability must be positive" in normalize_output(result.output)


class TestParamsCommand:
    def test_default_params(self):
        result = runner.invoke(app, ["params"])
        assert result.exit_code == 0, result.output
        output = normalize_output(result.output)
        assert "fsrs-5-default" in output
        assert "w[0]" in output and "0.40255" in output
        assert "w[18]" in output

    def test_params_from_file(self, tmp_path: Path):
        path = tmp_path / "mine.yaml"
        path.write_text(
            yaml.safe_dump({"name": "mine", "weights": list(DEFAULT_PARAMETERS)}),
            encoding="utf-8",
        )
        result = runner.invoke(app, ["params", "--params", str(path)])
        assert result.exit_code == 0, result.output
        assert "Parameters: mine" in normalize_output(result.output)

    def test_short_params_file(self, tmp_path: Path):
        path = tmp_path / "short.yaml"
        path.write_text(yaml.safe_dump([1.0, 2.0]), encoding="utf-8")
        result = runner.invoke(app, ["params", "--params", str(path)])
        assert result.exit_code == 1
        assert "at least 17 weights" in normalize_output(result.output)
