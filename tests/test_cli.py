"""Tests for the root CLI group."""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from blogctl import __version__
from blogctl.cli import cli

COMMANDS = ("paths", "resolve", "posts", "tags", "section")


class TestRootGroup:
    def test_no_command_shows_help(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, [])
        assert result.exit_code == 0
        for name in COMMANDS:
            assert name in result.output

    def test_version(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_global_flags_in_help(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--help"])
        for flag in ("--json", "--quiet", "--verbose", "--log-json", "--config"):
            assert flag in result.output


class TestExamples:
    def test_root_examples(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--examples"])
        assert result.exit_code == 0
        assert "blogctl paths" in result.output

    @pytest.mark.parametrize("name", COMMANDS)
    def test_command_examples(self, cli_runner: CliRunner, name: str) -> None:
        result = cli_runner.invoke(cli, [name, "--examples"])
        assert result.exit_code == 0
        assert f"Examples for 'cli {name}'" in result.output
        assert f"blogctl {name}" in result.output

    @pytest.mark.parametrize("name", COMMANDS)
    def test_help_is_short(self, cli_runner: CliRunner, name: str) -> None:
        result = cli_runner.invoke(cli, [name, "--help"])
        assert result.exit_code == 0
        assert "--examples" in result.output
