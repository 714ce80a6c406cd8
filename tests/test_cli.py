#!filepath: tests/test_cli.py
import pytest
import yaml
from typer.testing import CliRunner

from activity_eda import __version__
from activity_eda.cli import app

from tests.conftest import make_raw_activity_frame

runner = CliRunner()


@pytest.fixture
def config_file(tmp_path):
    data = {
        "log": {"dir": str(tmp_path / "logs")},
        "training": {"folds": 3, "n_estimators": 10},
        "report": {"output_dir": str(tmp_path / "reports"), "dpi": 50},
    }
    p = tmp_path / "cli.yml"
    p.write_text(yaml.safe_dump(data), encoding="utf-8")
    return p


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv("EDA_DATASET_PATH", raising=False)
    monkeypatch.delenv("EDA_OUTPUT_DIR", raising=False)


def test_version():
    result = runner.invoke(app, ["version"])

    assert result.exit_code == 0
    assert __version__ in result.stdout


def test_run_command(config_file, write_csv, tmp_path):
    data = write_csv(make_raw_activity_frame(n_per_class=40))

    result = runner.invoke(
        app, ["run", str(data), "--config", str(config_file), "--run-id", "cli_run"]
    )

    assert result.exit_code == 0, result.stdout
    assert "Model comparison" in result.stdout
    assert (tmp_path / "reports" / "cli_run" / "summary.csv").exists()


def test_run_command_output_dir_option(config_file, write_csv, tmp_path):
    data = write_csv(make_raw_activity_frame(n_per_class=40))
    out = tmp_path / "elsewhere"

    result = runner.invoke(
        app, ["run", str(data), "-c", str(config_file), "--run-id", "o", "-o", str(out)]
    )

    assert result.exit_code == 0, result.stdout
    assert (out / "o" / "run.json").exists()


def test_run_command_bad_data(config_file, tmp_path):
    result = runner.invoke(
        app, ["run", str(tmp_path / "missing.csv"), "--config", str(config_file)]
    )

    assert result.exit_code == 1
    assert "Analysis failed" in result.stdout


def test_inspect_command(config_file, write_csv):
    data = write_csv(make_raw_activity_frame(n_per_class=20))

    result = runner.invoke(app, ["inspect", str(data), "--config", str(config_file)])

    assert result.exit_code == 0, result.stdout
    assert "identifiers" in result.stdout
    assert "kept: 4 feature columns" in result.stdout


def test_relative_output_dir_lands_under_cwd(config_file, write_csv, tmp_path, monkeypatch):
    data = write_csv(make_raw_activity_frame(n_per_class=40))
    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.chdir(work)

    result = runner.invoke(
        app, ["run", str(data), "-c", str(config_file), "-o", "out", "--run-id", "rel"]
    )

    assert result.exit_code == 0, result.stdout
    assert (work / "out" / "rel" / "summary.csv").exists()
    assert not (work / "out" / ".staging").exists()
