"""Command line interface entry point."""

from __future__ import annotations

import logging
import sys

import click

from schema_registry_sync.configuration import (
    DEFAULT_CONFIG_FILENAME,
    write_placeholder_configuration,
)
from schema_registry_sync.registry_access import create_registry_client
from schema_registry_sync.results_writing import print_schema_report, print_subject_report
from schema_registry_sync.sync_execution import (
    DeleteRequest,
    SyncExecutionError,
    SyncOutcome,
    SyncRequest,
    execute_delete,
    execute_download,
    execute_register,
    list_registry_subjects,
)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


class CliError(Exception):
    """Custom CLI error."""


def _config_option(func):
    return click.option(
        "--config",
        "config_path",
        required=True,
        type=click.Path(path_type=str),
        help="Path to the YAML schema registry configuration file",
    )(func)


def _dry_run_option(func):
    return click.option(
        "--dry-run",
        is_flag=True,
        default=False,
        help="Report intended registry changes without performing them.",
    )(func)


def _report_option(func):
    return click.option(
        "--report-output",
        "report_output",
        required=False,
        type=click.Path(path_type=str),
        help="Optional path of an xlsx workbook summarizing the outcomes",
    )(func)


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="schema-registry-sync")
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="INFO",
    show_default=True,
    help="Logging verbosity",
)
def cli(log_level: str) -> None:
    """Reconcile declared schemas with a schema registry."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


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
    """Generate a placeholder YAML configuration with guidance comments."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="register")
@_config_option
@_dry_run_option
@_report_option
def register(config_path: str, dry_run: bool, report_output: str | None) -> None:
    """Update compatibility and register new versions of the configured schemas."""
    try:
        outcome = execute_register(
            SyncRequest(config_path=config_path, dry_run=dry_run, report_output=report_output),
            client_factory=create_registry_client,
        )
    except SyncExecutionError as exc:
        raise CliError(str(exc)) from exc
    print_schema_report(outcome.report)
    _echo_report_path(outcome)


@cli.command(name="download")
@_config_option
@click.option(
    "--all",
    "download_all",
    is_flag=True,
    default=False,
    help="Download every subject in the registry instead of the configured ones.",
)
@_dry_run_option
@_report_option
def download(
    config_path: str, download_all: bool, dry_run: bool, report_output: str | None
) -> None:
    """Download the latest registered schemas into the schema directory."""
    try:
        outcome = execute_download(
            SyncRequest(config_path=config_path, dry_run=dry_run, report_output=report_output),
            download_all=download_all,
            client_factory=create_registry_client,
        )
    except SyncExecutionError as exc:
        raise CliError(str(exc)) from exc
    print_schema_report(outcome.report)
    _echo_report_path(outcome)


@cli.command(name="delete")
@_config_option
@click.option(
    "--subject",
    "subjects",
    multiple=True,
    help="Subject to delete in addition to the configured ones (repeatable)",
)
@click.option(
    "--prune",
    is_flag=True,
    default=False,
    help="Also delete registry subjects that are not declared in the configuration.",
)
@_dry_run_option
@_report_option
def delete(
    config_path: str,
    subjects: tuple[str, ...],
    prune: bool,
    dry_run: bool,
    report_output: str | None,
) -> None:
    """Delete subjects from the registry."""
    try:
        outcome = execute_delete(
            DeleteRequest(
                config_path=config_path,
                dry_run=dry_run,
                report_output=report_output,
                subjects=tuple(subjects),
                prune=prune,
            ),
            client_factory=create_registry_client,
        )
    except SyncExecutionError as exc:
        raise CliError(str(exc)) from exc
    print_subject_report(outcome.report)
    _echo_report_path(outcome)


@cli.command(name="list-subjects")
@_config_option
def list_subjects(config_path: str) -> None:
    """Print every subject registered in the schema registry."""
    try:
        subjects = list_registry_subjects(config_path, client_factory=create_registry_client)
    except SyncExecutionError as exc:
        raise CliError(str(exc)) from exc
    for subject in subjects:
        click.echo(subject)


def _echo_report_path(outcome: SyncOutcome) -> None:
    if outcome.report_path is not None:
        click.echo(str(outcome.report_path))


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
