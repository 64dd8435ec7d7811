"""Command line interface entry point."""

from __future__ import annotations

import logging
import sys

import click
from click.core import ParameterSource

from openapi_downgrader.configuration import (
    DEFAULT_CONFIG_FILENAME,
    write_placeholder_configuration,
)
from openapi_downgrader.document_io import OUTPUT_FORMATS
from openapi_downgrader.run_execution import (
    ConversionRequest,
    RunExecutionError,
    SettingsOverrides,
    execute_conversion_run,
)


class CliError(Exception):
    """Custom CLI error."""


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="openapi-downgrader")
@click.option("--verbose", is_flag=True, default=False, help="Log pipeline progress to stderr.")
def cli(verbose: bool) -> None:
    """Convert OpenAPI 3.x documents to Swagger 2.0."""
    if verbose:
        _enable_debug_logging()


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML settings template to write",
)
def generate_config(output_path: str) -> None:
    """Generate a YAML settings file with the defaults and guidance comments."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="convert")
@click.pass_context
@click.argument("source", type=click.Path(path_type=str))
@click.option(
    "--output",
    "output_path",
    required=False,
    type=click.Path(path_type=str),
    help="File to write the Swagger 2.0 document to; stdout when omitted",
)
@click.option(
    "--config",
    "config_path",
    required=False,
    type=click.Path(path_type=str),
    help="Path to the YAML/JSON settings file",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(OUTPUT_FORMATS, case_sensitive=False),
    default=None,
    help="Output format [default: json]",
)
@click.option("--pretty", is_flag=True, default=False, help="Indent JSON output.")
@click.option(
    "--strict/--no-strict",
    default=True,
    help="Flatten allOf and drop draft-4 incompatible keywords [default: strict]",
)
@click.option(
    "--deref/--no-deref",
    default=True,
    help="Inline every local $ref [default: deref]",
)
@click.option(
    "--keep-extensions",
    is_flag=True,
    default=False,
    help="Keep x- extension keys on schemas in strict mode.",
)
@click.option(
    "--drop-definitions",
    is_flag=True,
    default=False,
    help="Remove definitions, parameters and responses after inlining.",
)
@click.option(
    "--diagnostics",
    is_flag=True,
    default=False,
    help="Collect conversion warnings and add an x-conversion-info block.",
)
def convert(  # pylint: disable=too-many-arguments
    ctx: click.Context,
    source: str,
    output_path: str | None,
    config_path: str | None,
    output_format: str | None,
    pretty: bool,
    strict: bool,
    deref: bool,
    keep_extensions: bool,
    drop_definitions: bool,
    diagnostics: bool,
) -> None:
    """Convert the OpenAPI 3.x document at SOURCE to Swagger 2.0."""
    overrides = SettingsOverrides(
        strict=_given(ctx, "strict", strict),
        deref=_given(ctx, "deref", deref),
        strip_extensions=False if keep_extensions else None,
        drop_definitions=_given(ctx, "drop_definitions", drop_definitions),
        collect_warnings=_given(ctx, "diagnostics", diagnostics),
        output_format=output_format.lower() if output_format else None,
        pretty=_given(ctx, "pretty", pretty),
    )
    try:
        outcome = execute_conversion_run(
            ConversionRequest(
                source_path=source,
                output_path=output_path,
                config_path=config_path,
                overrides=overrides,
            )
        )
    except RunExecutionError as exc:
        raise CliError(str(exc)) from exc

    for warning in outcome.warnings:
        click.echo(f"warning: {warning}", err=True)
    if outcome.output_path is not None:
        click.echo(str(outcome.output_path))
    else:
        click.echo(outcome.rendered)


def _given(ctx: click.Context, name: str, value: bool) -> bool | None:
    """Return `value` only when it was typed on the command line."""
    if ctx.get_parameter_source(name) is ParameterSource.COMMANDLINE:
        return value
    return None


def _enable_debug_logging() -> None:
    logger = logging.getLogger("openapi_downgrader")
    logger.setLevel(logging.DEBUG)
    if any(isinstance(existing, logging.StreamHandler) for existing in logger.handlers):
        return
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(name)s %(levelname)s %(message)s"))
    logger.addHandler(handler)


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
