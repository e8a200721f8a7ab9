"""Command line interface entry point."""

from __future__ import annotations

import logging
import sys

import click

from idl_compat_checker.configuration import (
    COMPARISON_MODES,
    DEFAULT_CONFIG_FILENAME,
    write_placeholder_configuration,
)
from idl_compat_checker.run_execution import (
    CheckExecutionError,
    CheckRequest,
    execute_compatibility_check,
)

_LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


class CliError(Exception):
    """Custom CLI error."""


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="idl-compat-checker")
def cli() -> None:
    """Backward compatibility checker for Thrift-style IDL schemas."""


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML configuration template to write",
)
def generate_config(output_path: str) -> None:
    """Generate a YAML configuration file with the default settings."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="check")
@click.argument("old_tree", type=click.Path(path_type=str))
@click.argument("new_tree", type=click.Path(path_type=str))
@click.option(
    "--config",
    "config_path",
    required=False,
    type=click.Path(path_type=str),
    help="Path to YAML/JSON configuration file",
)
@click.option(
    "--include-root",
    "include_root",
    required=False,
    type=click.Path(path_type=str),
    help="Directory that relative declaration tree paths are resolved against",
)
@click.option(
    "--mode",
    type=click.Choice(COMPARISON_MODES),
    default=None,
    help="Compare merged documents or file by file (default: merged)",
)
@click.option(
    "--check-throws/--no-check-throws",
    default=None,
    help="Also check the exceptions thrown by each method",
)
@click.option(
    "--parallel-merge/--no-parallel-merge",
    default=None,
    help="Merge the old and new declaration trees concurrently",
)
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log progress to stderr.")
def check(  # pylint: disable=too-many-arguments
    old_tree: str,
    new_tree: str,
    config_path: str | None,
    include_root: str | None,
    mode: str | None,
    check_throws: bool | None,
    parallel_merge: bool | None,
    verbose: bool,
) -> None:
    """Check that NEW_TREE is backward compatible with OLD_TREE.

    Both arguments are declaration tree files (YAML or JSON) produced by the
    IDL parser. Prints nothing and exits 0 when compatible.
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format=_LOG_FORMAT, stream=sys.stderr)
    try:
        outcome = execute_compatibility_check(
            CheckRequest(
                old_tree_path=old_tree,
                new_tree_path=new_tree,
                config_path=config_path,
                include_root=include_root,
                mode=mode,
                check_throws=check_throws,
                parallel_merge=parallel_merge,
            )
        )
    except CheckExecutionError as exc:
        raise CliError(str(exc)) from exc
    if not outcome.verdict.compatible:
        raise CliError(f"not backwards compatible: {outcome.verdict.message}")


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), standalone_mode=False)
    except CliError as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
