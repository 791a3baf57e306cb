"""Tests for the mediamatch command-line interface."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from mediamatch import __version__
from mediamatch.cli import app


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


class TestVersion:
    def test_version(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output


class TestParseCommand:
    def test_json(self, runner: CliRunner, temp_dir: Path) -> None:
        result = runner.invoke(
            app,
            ["parse", "not screen and (min-width: 48em), print", "--json", "-c", str(temp_dir / "none.yaml")],
        )
        assert result.exit_code == 0
        assert json.loads(result.stdout) == [
            {
                "type": "screen",
                "inverse": True,
                "expressions": [{"feature": "width", "modifier": "min", "value": "48em"}],
            },
            {"type": "print", "inverse": False, "expressions": []},
        ]

    def test_table(self, runner: CliRunner, temp_dir: Path) -> None:
        result = runner.invoke(app, ["parse", "screen and (color)", "-c", str(temp_dir / "none.yaml")])
        assert result.exit_code == 0
        assert "screen" in result.output
        assert "color" in result.output

    def test_syntax_error(self, runner: CliRunner, temp_dir: Path) -> None:
        result = runner.invoke(app, ["parse", "screen and (48em)", "-c", str(temp_dir / "none.yaml")])
        assert result.exit_code == 2
        assert "Invalid CSS media query" in result.output


class TestMatchCommand:
    def test_match_with_values(self, runner: CliRunner, temp_dir: Path) -> None:
        result = runner.invoke(
            app,
            [
                "match",
                "screen and (min-width: 48em)",
                "--set",
                "type=screen",
                "--set",
                "width=1024",
                "-c",
                str(temp_dir / "none.yaml"),
            ],
        )
        assert result.exit_code == 0
        assert "match" in result.output

    def test_no_match(self, runner: CliRunner, temp_dir: Path) -> None:
        result = runner.invoke(
            app, ["match", "(min-width: 48em)", "-s", "width=320", "-c", str(temp_dir / "none.yaml")]
        )
        assert result.exit_code == 1
        assert "no match" in result.output

    def test_environment(self, runner: CliRunner, config_file: Path) -> None:
        result = runner.invoke(app, ["match", "screen and (orientation: landscape)", "-e", "desktop", "-c", str(config_file)])
        assert result.exit_code == 0

        result = runner.invoke(app, ["match", "screen and (orientation: landscape)", "-e", "phone", "-c", str(config_file)])
        assert result.exit_code == 1

    def test_set_overrides_environment(self, runner: CliRunner, config_file: Path) -> None:
        result = runner.invoke(
            app,
            ["match", "(orientation: landscape)", "-e", "phone", "-s", "orientation=landscape", "-c", str(config_file)],
        )
        assert result.exit_code == 0

    def test_unknown_environment(self, runner: CliRunner, config_file: Path) -> None:
        result = runner.invoke(app, ["match", "screen", "-e", "watch", "-c", str(config_file)])
        assert result.exit_code == 2
        assert "Unknown environment" in result.output
        assert "desktop" in result.output

    def test_bad_assignment(self, runner: CliRunner, temp_dir: Path) -> None:
        result = runner.invoke(app, ["match", "screen", "-s", "width", "-c", str(temp_dir / "none.yaml")])
        assert result.exit_code == 2

    def test_syntax_error(self, runner: CliRunner, temp_dir: Path) -> None:
        result = runner.invoke(app, ["match", "some crap", "-c", str(temp_dir / "none.yaml")])
        assert result.exit_code == 2
        assert "Invalid CSS media query" in result.output


class TestEnvsCommand:
    def test_lists_environments(self, runner: CliRunner, config_file: Path) -> None:
        result = runner.invoke(app, ["envs", "-c", str(config_file)])
        assert result.exit_code == 0
        for name in ("desktop", "phone", "printer"):
            assert name in result.output

    def test_no_environments(self, runner: CliRunner, temp_dir: Path) -> None:
        result = runner.invoke(app, ["envs", "-c", str(temp_dir / "none.yaml")])
        assert result.exit_code == 0
        assert "No environments configured" in result.output
