"""Tests for the command-line interface, connectors and config."""

import json

import pandas as pd
import pytest
import yaml
from typer.testing import CliRunner

from cli import app
from config import RenovationConfig, load_config
from connectors.local import CSVConnector, JSONConnector, load_input, parse_input
from core.exceptions import ConnectorError, DataValidationError

runner = CliRunner()

SCENARIO_A = {
    "properties": [
        {
            "id": "P1",
            "renovations": [
                {"id": "r1", "cost": 5, "effect": 3},
                {"id": "r2", "cost": 4, "effect": 5},
                {"id": "r3", "cost": 3, "effect": 1},
            ],
        }
    ],
    "budget": 10,
}


@pytest.fixture
def input_file(tmp_path):
    path = tmp_path / "input.json"
    path.write_text(json.dumps(SCENARIO_A))
    return path


@pytest.fixture
def storage_config(tmp_path):
    """Config whose storage paths point into the temporary directory."""
    cfg = RenovationConfig()
    cfg.storage.inputs_path = tmp_path / "inputs"
    cfg.storage.outputs_path = tmp_path / "outputs"
    path = tmp_path / "config.yaml"
    cfg.to_yaml(path)
    return path, cfg.storage.outputs_path


class TestConnectors:
    """Test reading input documents."""

    def test_load_input(self, input_file):
        data = load_input(input_file)

        assert data.budget == 10
        assert [r.id for r in data.properties[0].renovations] == ["r1", "r2", "r3"]
        assert data.n_pairs == 3

    def test_parse_input_from_string(self):
        data = parse_input(json.dumps(SCENARIO_A))

        assert data.properties[0].renovations[1].effect == 5.0

    def test_invalid_json(self):
        with pytest.raises(DataValidationError):
            parse_input("{not json")

    def test_wrong_shape(self):
        """Schema errors point at the offending field."""
        with pytest.raises(DataValidationError) as exc_info:
            parse_input({"properties": [{"renovations": []}], "budget": 1})

        assert exc_info.value.field == "properties.0.id"

    def test_no_range_checks(self):
        """Negative costs and budgets are accepted as-is."""
        data = parse_input({
            "properties": [{"id": "A", "renovations": [{"id": "r", "cost": -2, "effect": 1}]}],
            "budget": -5,
        })

        assert data.budget == -5
        assert data.properties[0].renovations[0].cost == -2

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConnectorError):
            load_input(tmp_path / "missing.json")

    def test_json_and_csv_round_trip(self, tmp_path):
        """Connectors create missing parent directories on save."""
        json_path = JSONConnector().save({"budget": 3}, tmp_path / "a" / "doc.json")
        csv_path = CSVConnector().save(
            pd.DataFrame({"property": ["P1"], "cost": [4.0]}), tmp_path / "b" / "rows.csv",
        )

        assert JSONConnector().load(json_path) == {"budget": 3}
        assert CSVConnector().load(csv_path)["cost"].tolist() == [4.0]


class TestConfig:
    """Test configuration loading."""

    def test_defaults(self):
        cfg = RenovationConfig()
        options = cfg.to_run_options()

        assert options.solver == "highs"
        assert options.limits.duration == 30.0
        assert options.max_renovations_per_property == 3

    def test_solver_section(self, tmp_path):
        """The solver section holds provider, duration and a verbose flag only."""
        path = tmp_path / "config.yaml"
        RenovationConfig().to_yaml(path)

        dumped = yaml.safe_load(path.read_text())
        assert dumped["solver"] == {"provider": "highs", "duration": 30.0, "verbose": False}
        assert RenovationConfig(solver={"verbose": True}).to_run_options().verbose is True

    def test_yaml_round_trip(self, tmp_path):
        path = tmp_path / "config.yaml"
        cfg = RenovationConfig()
        cfg.solver.duration = 5.0
        cfg.to_yaml(path)

        loaded = load_config(path)

        assert loaded.solver.duration == 5.0
        assert loaded.to_run_options().limits.duration == 5.0

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConnectorError) as exc_info:
            load_config(tmp_path / "missing.yaml")

        assert exc_info.value.code == "CONNECTOR_ERROR"

    def test_wrong_type(self, tmp_path):
        """Schema errors are reported as data validation errors, not raw pydantic ones."""
        path = tmp_path / "config.yaml"
        path.write_text("solver:\n  duration: notanumber\n")

        with pytest.raises(DataValidationError) as exc_info:
            load_config(path)

        assert exc_info.value.field == "solver.duration"

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("solver: [unclosed\n")

        with pytest.raises(DataValidationError):
            load_config(path)

    def test_ensure_directories(self, tmp_path):
        cfg = RenovationConfig()
        cfg.storage.inputs_path = tmp_path / "in"
        cfg.storage.outputs_path = tmp_path / "out"

        cfg.ensure_directories()

        assert (tmp_path / "in").is_dir()
        assert (tmp_path / "out").is_dir()


class TestCLI:
    """Test CLI commands."""

    def test_solve_to_file(self, input_file, tmp_path):
        output = tmp_path / "output.json"

        result = runner.invoke(app, ["solve", "--input", str(input_file), "--output", str(output)])

        assert result.exit_code == 0
        envelope = json.loads(output.read_text())
        selected = {a["renovation_id"] for a in envelope["solutions"][0]["assignments"]}
        assert selected == {"r1", "r2"}
        assert envelope["statistics"]["result"]["custom"]["status"] == "optimal"

    def test_solve_from_stdin(self):
        result = runner.invoke(app, ["solve", "--duration", "5"], input=json.dumps(SCENARIO_A))

        assert result.exit_code == 0
        envelope = json.loads(result.stdout)
        assert envelope["options"]["limits"]["duration"] == 5.0
        assert len(envelope["solutions"][0]["assignments"]) == 2

    def test_solve_with_cap_override(self, input_file):
        result = runner.invoke(
            app, ["solve", "-i", str(input_file), "--max-per-property", "1"],
        )

        assert result.exit_code == 0
        envelope = json.loads(result.stdout)
        assert [a["renovation_id"] for a in envelope["solutions"][0]["assignments"]] == ["r2"]

    def test_solve_invalid_input(self):
        result = runner.invoke(app, ["solve"], input="{not json")

        assert result.exit_code == 1

    def test_solve_invalid_duration(self, input_file):
        result = runner.invoke(app, ["solve", "-i", str(input_file), "--duration", "0"])

        assert result.exit_code == 1

    def test_solve_unknown_solver(self, input_file):
        result = runner.invoke(app, ["solve", "-i", str(input_file), "--solver", "nope"])

        assert result.exit_code == 1

    def test_demo_then_solve(self, tmp_path):
        demo_path = tmp_path / "demo.json"

        result = runner.invoke(app, ["demo", "--output", str(demo_path), "--properties", "5"])
        assert result.exit_code == 0

        data = load_input(demo_path)
        assert len(data.properties) == 5

        result = runner.invoke(app, ["solve", "-i", str(demo_path)])
        assert result.exit_code == 0
        envelope = json.loads(result.stdout)
        assignments = envelope["solutions"][0].get("assignments", [])
        assert sum(a["cost"] for a in assignments) <= data.budget

    def test_solvers(self):
        result = runner.invoke(app, ["solvers"])

        assert result.exit_code == 0
        assert "highs" in result.stdout

    def test_solve_bad_config(self, input_file, tmp_path):
        """A config that fails validation exits with 1 instead of a traceback."""
        config_path = tmp_path / "config.yaml"
        config_path.write_text("solver:\n  duration: notanumber\n")

        result = runner.invoke(app, ["solve", "-i", str(input_file), "-c", str(config_path)])

        assert result.exit_code == 1
        assert result.exception is None or isinstance(result.exception, SystemExit)

    def test_solve_missing_config(self, input_file, tmp_path):
        result = runner.invoke(
            app, ["solve", "-i", str(input_file), "-c", str(tmp_path / "missing.yaml")],
        )

        assert result.exit_code == 1
        assert result.exception is None or isinstance(result.exception, SystemExit)

    def test_solve_save_to_outputs_path(self, input_file, storage_config):
        config_path, outputs = storage_config

        result = runner.invoke(
            app, ["solve", "-i", str(input_file), "-c", str(config_path), "--save"],
        )

        assert result.exit_code == 0
        saved = json.loads((outputs / "input_result.json").read_text())
        assert saved == json.loads(result.stdout)
        assert (outputs / "input_result.csv").exists()

    def test_demo_default_output(self, storage_config, tmp_path):
        """Without --output the demo lands in the configured inputs path."""
        config_path, _ = storage_config

        result = runner.invoke(app, ["demo", "-c", str(config_path), "-n", "3"])

        assert result.exit_code == 0
        assert len(load_input(tmp_path / "inputs" / "demo.json").properties) == 3
