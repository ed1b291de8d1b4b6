"""nodegen command group."""

import logging

import click

from cli.commands.generate import batch, generate
from cli.commands.inspect import inspect
from cli.utils.config import OUTPUT_FORMATS, CLIConfig, set_config
from node_generator.config import cfg


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.option(
    "--format", "-f",
    "output_format",
    type=click.Choice(OUTPUT_FORMATS),
    default="text",
    help="Output format."
)
def cli(verbose: bool, output_format: str):
    """Generate typed C# node accessors from Godot scene files."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else cfg.log_level,
        format="%(name)s %(levelname)s: %(message)s",
        force=True,
    )
    set_config(CLIConfig(format=output_format, verbose=verbose))


cli.add_command(generate)
cli.add_command(batch)
cli.add_command(inspect)


if __name__ == "__main__":
    cli()
