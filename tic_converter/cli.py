#!/usr/bin/env python3
"""
TiC Converter CLI - Entry point for tic-convert command
"""

import sys
import logging
import click

from .types import ConversionError
from .converter import convert_file
from .reporters import to_human, to_json

DEFAULT_INPUT = "Pricing_Transparency_file_Nov_2025_GA_Facility_.csv"
DEFAULT_OUTPUT = "in_network_rates.json"


def _setup_logging(verbose: bool, stream=None) -> logging.Logger:
    log = logging.getLogger("tic_converter")
    log.handlers.clear()
    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(logging.Formatter("%(message)s"))
    log.addHandler(handler)
    log.setLevel(logging.DEBUG if verbose else logging.INFO)
    log.propagate = False
    return log


@click.command()
@click.argument("input_csv", required=False, default=DEFAULT_INPUT, type=click.Path(dir_okay=False))
@click.argument("output_json", required=False, default=DEFAULT_OUTPUT, type=click.Path(dir_okay=False))
@click.option("--encoding", default=None, help="Source encoding of the CSV (default: latin-1)")
@click.option("--validate/--no-validate", default=True, help="Check the document against the bundled schema before writing")
@click.option("--format", "fmt", type=click.Choice(["text", "human", "json"]), default="text",
              help="text: progress lines only; human: add a summary table; json: add a JSON summary")
@click.option("-v", "--verbose", is_flag=True, help="Log skipped rows")
def main(input_csv, output_json, encoding, validate, fmt, verbose):
    """Convert a hospital pricing-transparency CSV into In-Network Rates JSON."""

    # keep stdout clean for the JSON summary
    log = _setup_logging(verbose, sys.stderr if fmt == "json" else None)

    try:
        summary, validation = convert_file(input_csv, output_json, encoding=encoding, validate=validate, log=log)
    except (ConversionError, OSError) as e:
        click.echo(f"Error during conversion: {e}", err=True)
        sys.exit(1)

    if fmt == "human":
        to_human(summary, validation)
    elif fmt == "json":
        print(to_json(summary, validation))

    sys.exit(0)


if __name__ == "__main__":
    main()
