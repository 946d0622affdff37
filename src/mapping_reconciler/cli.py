"""Command line interface entry point."""

from __future__ import annotations

import sys

import click

from mapping_reconciler.configuration import (
    DEFAULT_CONFIG_FILENAME,
    Configuration,
    ConfigurationError,
    load_configuration,
    write_placeholder_configuration,
)
from mapping_reconciler.reconciliation import (
    IncompatibleIndexShapeError,
    NoAction,
    ReconciliationState,
    plan_index_mapping,
    reconcile_index_mapping,
)
from mapping_reconciler.schema_management import SchemaError
from mapping_reconciler.store_access import HttpDocumentStoreClient, TransportFailure


class CliError(Exception):
    """Custom CLI error."""


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="mapping-reconciler")
def cli() -> None:
    """Additive index mapping reconciler for startup health checks."""


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML reconciler configuration template to write",
)
def generate_config(output_path: str) -> None:
    """Generate a placeholder YAML reconciler configuration with guidance comments."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="check")
@click.option(
    "--config",
    "config_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to YAML reconciler configuration file",
)
def check(config_path: str) -> None:
    """Add missing properties to the configured index mapping."""
    configuration = _load(config_path)
    index_name = configuration.index.name
    try:
        with HttpDocumentStoreClient(configuration.store) as client:
            outcome = reconcile_index_mapping(
                client,
                index_name,
                configuration.index.desired_mapping,
                log=_echo_notice,
            )
    except (IncompatibleIndexShapeError, SchemaError, TransportFailure) as exc:
        raise CliError(f"{index_name}: {_failure_label(exc)}: {exc}") from exc
    click.echo(_format_result(index_name, outcome.state, outcome.added_keys))


@cli.command(name="plan")
@click.option(
    "--config",
    "config_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to YAML reconciler configuration file",
)
def plan(config_path: str) -> None:
    """Show what check would do without writing to the index."""
    configuration = _load(config_path)
    index_name = configuration.index.name
    try:
        with HttpDocumentStoreClient(configuration.store) as client:
            reconciliation_plan = plan_index_mapping(
                client, index_name, configuration.index.desired_mapping
            )
    except (IncompatibleIndexShapeError, SchemaError, TransportFailure) as exc:
        raise CliError(f"{index_name}: {_failure_label(exc)}: {exc}") from exc

    if isinstance(reconciliation_plan, NoAction):
        click.echo(_format_result(index_name, reconciliation_plan.state, ()))
        return
    click.echo(
        _format_result(index_name, ReconciliationState.PATCHED, reconciliation_plan.added_keys)
        + " (dry run)"
    )


def _load(config_path: str) -> Configuration:
    try:
        return load_configuration(config_path)
    except (ConfigurationError, OSError, UnicodeDecodeError) as exc:
        raise CliError(str(exc)) from exc


def _echo_notice(message: str) -> None:
    click.echo(message, err=True)


def _failure_label(exc: Exception) -> str:
    if isinstance(exc, IncompatibleIndexShapeError):
        return exc.state.value
    if isinstance(exc, SchemaError):
        return "unrecognized_mapping"
    return "transport_failure"


def _format_result(
    index_name: str, state: ReconciliationState, added_keys: tuple[str, ...]
) -> str:
    line = f"{index_name}: {state.value}"
    if added_keys:
        line += f" (added: {', '.join(added_keys)})"
    return line


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
