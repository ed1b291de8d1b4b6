"""Scene inspection CLI command."""

import sys

import click

from cli.utils.config import get_config
from cli.utils.output import format_output, format_table, print_error, print_info
from node_generator import SceneNotFoundError, load_scene_file


@click.command("inspect")
@click.argument("scene_file")
def inspect(scene_file: str):
    """List every node of a scene with its type, path and script.

    \b
    Examples:
        nodegen inspect scenes/Player.tscn
        nodegen --format json inspect scenes/Player.tscn
    """
    config = get_config()

    try:
        scene = load_scene_file(scene_file)
    except SceneNotFoundError as e:
        print_error(str(e))
        sys.exit(1)

    if config.format == "json":
        click.echo(format_output(scene, config.format))
        return

    if not scene.nodes:
        print_info(f"No nodes found in {scene_file}")
        return

    rows = [[n.name, n.type, n.path, n.script or ""] for n in scene.nodes]
    click.echo(format_table(rows, ["NAME", "TYPE", "PATH", "SCRIPT"]))
    if scene.synthesized:
        print_info("No node declarations; showing the synthesized root node")
