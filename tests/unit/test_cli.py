"""Tests for CLI commands."""

import json
import tomllib
from pathlib import Path

import pytest
from typer.testing import CliRunner

from contentmodel import __version__
from contentmodel._version import get_version
from contentmodel.cli import app


@pytest.fixture
def cli_runner():
    """Return a CLI test runner."""
    return CliRunner()


def write_json(tmp_path: Path, name: str, document) -> Path:
    path = tmp_path / name
    path.write_text(json.dumps(document, indent=2))
    return path


def test_version_command(cli_runner: CliRunner):
    result = cli_runner.invoke(app, ["version"])

    assert result.exit_code == 0
    assert __version__ in result.stdout


def test_version_matches_pyproject():
    pyproject = Path(__file__).resolve().parents[2] / "pyproject.toml"
    declared = tomllib.loads(pyproject.read_text(encoding="utf-8"))["project"]["version"]

    assert get_version() == declared


def test_normalize_policy(cli_runner: CliRunner, tmp_path: Path):
    path = write_json(
        tmp_path,
        "policy.json",
        {
            "constraint": {"not": {"equals": [{"doc": "sys.type"}, "Asset"]}},
            "actions": ["read"],
            "effect": "allow",
        },
    )

    result = cli_runner.invoke(app, ["normalize", "policy", str(path)])

    assert result.exit_code == 0
    assert result.stdout.strip() == (
        '{"effect":"allow","actions":["read"],'
        '"constraint":{"not":{"equals":[{"doc":"sys.type"},"Asset"]}}}'
    )


def test_normalize_validator_orders_keys(cli_runner: CliRunner, tmp_path: Path):
    path = write_json(tmp_path, "v.json", {"message": "short", "size": {"max": 8, "min": 1}})

    result = cli_runner.invoke(app, ["normalize", "validator", str(path)])

    assert result.exit_code == 0
    assert result.stdout.strip() == '{"size":{"min":1,"max":8},"message":"short"}'


def test_normalize_role_fixture(cli_runner: CliRunner, fixtures_dir: Path):
    result = cli_runner.invoke(app, ["normalize", "role", str(fixtures_dir / "SampleRole.json")])

    assert result.exit_code == 0
    assert json.loads(result.stdout)["name"] == "Developer"


def test_normalize_editor_interface_pretty(cli_runner: CliRunner, fixtures_dir: Path):
    result = cli_runner.invoke(
        app,
        ["normalize", "editor-interface", str(fixtures_dir / "EditorInterface.json"), "--pretty"],
    )

    assert result.exit_code == 0
    assert len(json.loads(result.stdout)["controls"]) == 7


def test_normalize_reports_codec_error(cli_runner: CliRunner, tmp_path: Path):
    path = write_json(tmp_path, "c.json", {"equals": [{"doc": "a"}, 1], "or": []})

    result = cli_runner.invoke(app, ["normalize", "constraint", str(path)])

    assert result.exit_code == 1
    assert "ambiguous" in result.output


def test_normalize_rejects_invalid_json(cli_runner: CliRunner, tmp_path: Path):
    path = tmp_path / "broken.json"
    path.write_text("{not json")

    result = cli_runner.invoke(app, ["normalize", "role", str(path)])

    assert result.exit_code == 1
    assert "not valid JSON" in result.output


def test_normalize_with_config(cli_runner: CliRunner, tmp_path: Path):
    config = tmp_path / "contentmodel.toml"
    config.write_text("[codec]\nmax_depth = 2\n")
    path = write_json(
        tmp_path, "c.json", {"not": {"not": {"equals": [{"doc": "a"}, 1]}}}
    )

    result = cli_runner.invoke(app, ["normalize", "constraint", str(path), "--config", str(config)])

    assert result.exit_code == 1
    assert "max_depth=2" in result.output


def test_normalize_unknown_kind(cli_runner: CliRunner, tmp_path: Path):
    path = write_json(tmp_path, "x.json", {})

    result = cli_runner.invoke(app, ["normalize", "space", str(path)])

    assert result.exit_code != 0
