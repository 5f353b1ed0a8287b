"""
Command line interface.

Usage:
    swagger-modifier -i api/swagger.yaml -o build/swagger.json
    swagger-modifier -i swagger.json -o out/swagger.json -c mapping.json -oc out/config.json
"""

import logging
import sys

import click
from rich.console import Console

from . import __version__
from .config import load_config_mapping
from .exceptions import SwaggerModifierError
from .pipeline import modify_swagger_file

console = Console(stderr=True)
logger = logging.getLogger("swagger_modifier")


def setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


@click.command()
@click.version_option(__version__, "-v", "--version", message="v%(version)s")
@click.option("--input", "-i", "input_path", type=click.Path(), help="Path to the input Swagger file")
@click.option("--output", "-o", "output_path", type=click.Path(), help="Path to the output file")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(),
    help="Path to the JSON file mapping paths and methods to prefix and suffix",
)
@click.option(
    "--open-api-config-output-path",
    "-oc",
    "openapi_config_output_path",
    type=click.Path(),
    help="Path to the output OpenAPI generator config file",
)
@click.option("--strict/--lenient", default=False, help="Fail on dangling or malformed references")
@click.option("--verbose", is_flag=True, help="Enable debug logging")
def main(input_path, output_path, config_path, openapi_config_output_path, strict, verbose):
    """Bundle a Swagger file and rewrite its models for code generation."""
    if not input_path or not output_path:
        console.print("[red]Error: Input file path and output file path required.[/red]")
        sys.exit(1)

    setup_logging(verbose)

    try:
        mapping = load_config_mapping(config_path) if config_path else None
        modify_swagger_file(input_path, output_path, mapping, openapi_config_output_path, strict)
    except SwaggerModifierError as e:
        logger.error("Error modifying Swagger file: %s", e)
        console.print(f"[red]✗ {e}[/red]")
        sys.exit(1)

    console.print(f"[green]✓ Wrote {output_path}[/green]")
    if openapi_config_output_path:
        console.print(f"[green]✓ Wrote {openapi_config_output_path}[/green]")


if __name__ == "__main__":
    main()
