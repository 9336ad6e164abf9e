import logging
from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError

from clinlogix.config import (
    BASE_URL_ENVVAR,
    DEFAULT_BASE_URL,
    DEFAULT_TIMEOUT_SEC,
    TIMEOUT_ENVVAR,
    ClientSettings,
)
from clinlogix.errors import ClinLogixError
from clinlogix.scan import format_scan_json, format_scan_report, scan_log
from clinlogix.validate.pipeline import run_validate
from clinlogix.validate.report import print_report

app = typer.Typer(
    help="Analyze clinical and system logs, and validate FHIR resources."
)


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging"),
    ] = False,
) -> None:
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )


@app.command()
def scan(
    logfile: Annotated[Path, typer.Argument(help="Path to the log file")],
    errors_only: Annotated[
        bool, typer.Option("--errors-only", help="Print only error lines")
    ] = False,
    json_output: Annotated[
        bool, typer.Option("--json", help="Output summary as JSON")
    ] = False,
) -> None:
    """Count error and warning lines in a log file."""
    try:
        summary = scan_log(logfile, collect_errors=errors_only)
    except (OSError, UnicodeDecodeError) as err:
        typer.echo(f"Error: cannot read {logfile}: {err}", err=True)
        raise typer.Exit(1) from err

    if errors_only:
        for line in summary.error_lines:
            typer.echo(line)
        return

    if json_output:
        typer.echo(format_scan_json(summary))
    else:
        typer.echo(format_scan_report(summary))


@app.command()
def validate(
    fhir_file: Annotated[
        Path, typer.Argument(help="FHIR resource JSON file to validate")
    ],
    base_url: Annotated[
        str,
        typer.Option(
            "--base-url", envvar=BASE_URL_ENVVAR, help="FHIR server base URL"
        ),
    ] = DEFAULT_BASE_URL,
    timeout: Annotated[
        float,
        typer.Option(
            "--timeout", envvar=TIMEOUT_ENVVAR, help="Request timeout (s)"
        ),
    ] = DEFAULT_TIMEOUT_SEC,
) -> None:
    """Submit a resource to the server's $validate operation."""
    try:
        settings = ClientSettings(base_url=base_url, timeout_sec=timeout)
    except ValidationError as err:
        first_error = err.errors(include_url=False)[0]
        loc = ".".join(str(item) for item in first_error["loc"])
        typer.echo(f"Error: invalid {loc}: {first_error['msg']}", err=True)
        raise typer.Exit(1) from err

    try:
        run = run_validate(fhir_file, settings)
    except ClinLogixError as err:
        typer.echo(f"Error: {err}", err=True)
        raise typer.Exit(1) from err

    print_report(run.report)
    if not run.passed:
        typer.echo("Error: FHIR validation failed", err=True)
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
