"""
par-transformer — CLI Entry Point
==================================
Command-line interface built with Click.  Installed as the
``par-transform`` command via ``pyproject.toml``.

Usage:
    par-transform --par SemiDyna2024.par --format SemiDynaEXE \\
                  --input points.csv --output points_2024.csv

Run ``par-transform --help`` for a full list of options.
"""

from __future__ import annotations

import sys
from pathlib import Path

import click

from par_transformer.batch import (
    DIRECTIONS,
    BatchParTransformer,
    BatchTransformConfig,
)
from par_transformer.exceptions import ParTransformerError
from par_transformer.formats import Format


@click.command(
    name="par-transform",
    help=(
        "Transform the coordinates of a CSV file between datums using a "
        "par file.\n\n"
        "Reads INPUT_FILE, moves every row's latitude/longitude (and "
        "optionally altitude) by the corrections in PAR_FILE, and writes "
        "the result to OUTPUT_FILE."
    ),
)
# ---------------------------------------------------------------------------
# Required arguments
# ---------------------------------------------------------------------------
@click.option(
    "--par", "-p",
    "par_path",
    required=True,
    type=click.Path(exists=True, file_okay=True, dir_okay=False, path_type=Path),
    help="Path to the par file.",
)
@click.option(
    "--format", "-f",
    "par_format",
    required=True,
    type=click.Choice([f.value for f in Format]),
    help="Format of the par file.",
)
@click.option(
    "--input", "-i",
    "input_path",
    required=True,
    type=click.Path(exists=True, file_okay=True, dir_okay=False, path_type=Path),
    help="Path to the input CSV file of points.",
)
@click.option(
    "--output", "-o",
    "output_path",
    required=True,
    type=click.Path(file_okay=True, dir_okay=False, path_type=Path),
    help="Path for the output file. Parent directories are created if absent.",
)
# ---------------------------------------------------------------------------
# Optional arguments
# ---------------------------------------------------------------------------
@click.option(
    "--direction", "-d",
    type=click.Choice(list(DIRECTIONS)),
    default="forward",
    show_default=True,
    help="'backward' is the exact inverse; 'backward-compat' matches the "
         "GIAJ web service.",
)
@click.option(
    "--lat-col",
    default="latitude",
    show_default=True,
    help="Column name containing latitudes [deg].",
)
@click.option(
    "--lon-col",
    default="longitude",
    show_default=True,
    help="Column name containing longitudes [deg].",
)
@click.option(
    "--alt-col",
    default=None,
    help="Column name containing altitudes [m]. Omit to ignore altitude.",
)
@click.option(
    "--output-format",
    type=click.Choice(["csv", "geojson"], case_sensitive=False),
    default="csv",
    show_default=True,
    help="Output file format.",
)
@click.option(
    "--encoding",
    default="utf-8",
    show_default=True,
    help="Text encoding of the par file (e.g. cp932 for GIAJ distributions).",
)
@click.option(
    "--description",
    default=None,
    help="Description overriding the par file header.",
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    default=False,
    help="Enable debug-level logging output.",
)
def main(
    par_path: Path,
    par_format: str,
    input_path: Path,
    output_path: Path,
    direction: str,
    lat_col: str,
    lon_col: str,
    alt_col: str | None,
    output_format: str,
    encoding: str,
    description: str | None,
    verbose: bool,
) -> None:
    """CLI entry point — wires Click options into BatchParTransformer."""
    config = BatchTransformConfig(
        par_path=par_path,
        format=par_format,
        direction=direction,  # type: ignore[arg-type]
        lat_col=lat_col,
        lon_col=lon_col,
        alt_col=alt_col,
        output_format=output_format.lower(),  # type: ignore[arg-type]
        encoding=encoding,
        description=description,
    )

    tool = BatchParTransformer(
        input_path=input_path,
        output_path=output_path,
        config=config,
        verbose=verbose,
    )

    try:
        result = tool.run()
    except ParTransformerError as exc:
        # User-facing errors: print a clean message, no stack trace
        click.echo(f"Error: {exc.message}", err=True)
        sys.exit(1)

    click.echo(result.summary())


if __name__ == "__main__":
    main()
