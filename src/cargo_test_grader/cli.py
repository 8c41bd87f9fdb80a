"""Command line interface entry point."""

from __future__ import annotations

import logging
import sys

import click

from cargo_test_grader.configuration import (
    DEFAULT_CONFIG_FILENAME,
    write_placeholder_configuration,
)
from cargo_test_grader.run_execution import RunExecutionError, RunRequest, execute_grading_run

_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class CliError(Exception):
    """Custom CLI error."""


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="cargo-test-grader")
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    default=False,
    help="Log suite invocations and skipped output lines to stderr.",
)
def cli(verbose: bool) -> None:
    """Grade `cargo test` suites into an autograder results report."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=_LOG_FORMAT,
        stream=sys.stderr,
    )


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML grading settings template to write",
)
def generate_config(output_path: str) -> None:
    """Generate a placeholder YAML grading settings file with guidance comments."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="grade")
@click.argument("settings_path", type=click.Path(path_type=str))
@click.option(
    "--output",
    "output_path",
    required=False,
    type=click.Path(path_type=str),
    help="Also write the report to this file (e.g. /autograder/results/results.json)",
)
def grade(settings_path: str, output_path: str | None) -> None:
    """Run every configured suite and print the results report as JSON."""
    try:
        outcome = execute_grading_run(
            RunRequest(config_path=settings_path, output_path=output_path)
        )
    except RunExecutionError as exc:
        raise CliError(str(exc)) from exc
    click.echo(outcome.rendered)


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), prog_name="cargo-test-grader", standalone_mode=False)
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
