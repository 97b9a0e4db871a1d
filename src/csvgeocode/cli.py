"""
csvgeocode — CLI Entry Point
=============================
Installed as the ``csvgeocode`` command via ``pyproject.toml``.

Usage:
    csvgeocode data/addresses.csv output/geocoded.csv \\
        --url "https://maps.googleapis.com/maps/api/geocode/json?address={{address}}&key=KEY" \\
        --handler google --location location

    # no OUTPUT: CSV goes to stdout, the summary to stderr
    csvgeocode data/addresses.csv --url "..." --test --verbose
"""

from __future__ import annotations

import sys
from pathlib import Path

import click

from csvgeocode.geocoder import CsvGeocoder
from csvgeocode.handlers import available_handlers
from shared.python.exceptions import CsvGeocodeError


@click.command(
    name="csvgeocode",
    help="Geocode the rows of INPUT through a geocoding API URL template "
         "and write the augmented CSV to OUTPUT (stdout if omitted).",
)
@click.argument(
    "input_path",
    type=click.Path(exists=True, file_okay=True, dir_okay=False, path_type=Path),
)
@click.argument(
    "output_path",
    required=False,
    type=click.Path(file_okay=True, dir_okay=False, path_type=Path),
)
@click.option(
    "--url",
    required=True,
    envvar="CSVGEOCODE_URL",
    help="Request URL template; {{column}} is replaced with the row's value. "
         "Can also be set via the CSVGEOCODE_URL environment variable.",
)
@click.option(
    "--handler",
    type=click.Choice(available_handlers(), case_sensitive=False),
    default="google",
    show_default=True,
    help="Response handler for the geocoding provider.",
)
@click.option("--lat", default=None, help="Latitude column (auto-detected if omitted).")
@click.option("--lng", default=None, help="Longitude column (auto-detected if omitted).")
@click.option(
    "--location",
    default=None,
    help="Column to receive address metadata (formatted address, postal code, ...).",
)
@click.option(
    "--delay",
    default=250,
    show_default=True,
    type=click.FloatRange(min=0),
    help="Milliseconds to wait after each geocoding request.",
)
@click.option(
    "--concurrency",
    default=1,
    show_default=True,
    type=click.IntRange(min=1),
    help="Maximum rows geocoded at once.",
)
@click.option("--force", is_flag=True, default=False, help="Re-geocode rows that already have coordinates.")
@click.option("--test", is_flag=True, default=False, help="Geocode but do not write any output.")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Print every row's result and enable debug logging.")
def main(
    input_path: Path,
    output_path: Path | None,
    url: str,
    handler: str,
    lat: str | None,
    lng: str | None,
    location: str | None,
    delay: float,
    concurrency: int,
    force: bool,
    test: bool,
    verbose: bool,
) -> None:
    """CLI entry point — wires Click options into CsvGeocoder."""
    tool = CsvGeocoder(
        input_path,
        output_path,
        url=url,
        handler=handler,
        lat=lat,
        lng=lng,
        location=location,
        delay=delay,
        concurrency=concurrency,
        force=force,
        test=test,
        verbose=verbose,
    )

    try:
        for outcome in tool.iter_outcomes():
            if not outcome.ok:
                click.echo(f"Row {outcome.index + 1}: {outcome.error}", err=True)
            elif verbose:
                opts = tool.options
                click.echo(
                    f"Row {outcome.index + 1}: {outcome.status.value} "
                    f"({outcome.row.get(opts.lat)}, {outcome.row.get(opts.lng)})",
                    err=True,
                )
    except CsvGeocodeError as exc:
        click.echo(f"Error: {exc.message}", err=True)
        sys.exit(1)

    summary = tool.summary
    if output_path is not None and not test:
        click.echo(f"\nCSV written to: {output_path}", err=True)
    click.echo(
        f"Geocoded: {summary.successes}/{summary.total} rows successfully "
        f"({summary.failures} failed, {summary.time / 1000:.2f}s).",
        err=True,
    )


if __name__ == "__main__":
    main()
