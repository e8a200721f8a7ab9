"""CLI smoke tests."""

from click.testing import CliRunner
from idl_compat_checker.cli import cli


def test_cli_displays_help() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["--help"])

    assert result.exit_code == 0
    assert "check" in result.output
    assert "generate-config" in result.output


def test_check_help_lists_comparison_options() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["check", "--help"])

    assert result.exit_code == 0
    for option in ("--config", "--include-root", "--mode", "--check-throws", "--parallel-merge"):
        assert option in result.output
