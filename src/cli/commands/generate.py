"""Generation CLI commands."""

import json
import sys
from pathlib import Path
from typing import Optional

import click
from pydantic import TypeAdapter, ValidationError

from cli.utils.config import get_config
from cli.utils.output import format_output, print_error, print_info, print_success, print_warning
from node_generator import (
    GenerationRequest,
    GenerationResult,
    SceneSource,
    generate_accessors,
    generate_batch,
    load_scene_sources,
)
from node_generator.config import cfg

_REQUESTS = TypeAdapter(list[GenerationRequest])


def collect_sources(scene_dirs: tuple[str, ...], scene: Optional[str] = None) -> list[SceneSource]:
    """Candidate scenes: an explicit scene file first, then every scene under the dirs."""
    sources: list[SceneSource] = []
    if scene and Path(scene).is_file():
        sources.extend(load_scene_sources(scene))
    for directory in scene_dirs or (".",):
        sources.extend(load_scene_sources(directory))
    return sources


def report_diagnostics(result: GenerationResult) -> None:
    for diagnostic in result.diagnostics:
        print_warning(str(diagnostic))


def _summary(result: GenerationResult, output: Optional[Path] = None) -> dict:
    return {
        "class_name": result.class_name,
        "scene_path": result.scene_path,
        "hint_name": result.hint_name,
        "success": result.success,
        "node_count": len(result.nodes),
        "output": output.as_posix() if output else None,
        "diagnostics": result.diagnostics,
    }


@click.command("generate")
@click.argument("class_name")
@click.option(
    "--scene", "-s",
    default=None,
    help="Scene to read; defaults to <CLASS_NAME> plus the scene extension."
)
@click.option(
    "--namespace", "-n",
    default="",
    help="Namespace of the partial class. Omit for the global namespace."
)
@click.option(
    "--scene-dir", "-d",
    "scene_dirs",
    multiple=True,
    type=click.Path(exists=True, file_okay=False),
    help="Directory searched recursively for scenes (repeatable, default: .)."
)
@click.option(
    "--output", "-o",
    default=None,
    type=click.Path(dir_okay=False),
    help="Write the generated source here instead of stdout."
)
def generate(
    class_name: str,
    scene: Optional[str],
    namespace: str,
    scene_dirs: tuple[str, ...],
    output: Optional[str],
):
    """Generate node accessors for one class.

    \b
    Examples:
        nodegen generate Player
        nodegen generate UIController --scene ui/MainMenu.tscn --namespace Game.UI
        nodegen generate Player -d scenes -o Player.g.cs
    """
    config = get_config()

    try:
        request = GenerationRequest(class_name=class_name, namespace=namespace, scene_path=scene)
    except ValidationError as e:
        print_error(f"Invalid request: {e.errors()[0]['msg']}")
        sys.exit(1)

    result = generate_accessors(request, collect_sources(scene_dirs, scene))
    report_diagnostics(result)
    if not result.success:
        if config.format == "json":
            click.echo(format_output(_summary(result), config.format))
        sys.exit(1)

    if output:
        path = Path(output)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(result.source, encoding="utf-8", newline="\n")
        if config.format == "json":
            click.echo(format_output(_summary(result, path), config.format))
        else:
            print_success(f"Wrote {result.hint_name} ({len(result.nodes)} nodes) to {path}")
        return

    if config.format == "json":
        click.echo(format_output(result, config.format))
    else:
        click.echo(result.source, nl=False)


@click.command("batch")
@click.argument("manifest", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--scene-dir", "-d",
    "scene_dirs",
    multiple=True,
    type=click.Path(exists=True, file_okay=False),
    help="Directory searched recursively for scenes (repeatable, default: .)."
)
@click.option(
    "--output-dir", "-o",
    default=".",
    type=click.Path(file_okay=False),
    help="Directory receiving one <ClassName>.g.cs per successful request."
)
def batch(manifest: str, scene_dirs: tuple[str, ...], output_dir: str):
    """Generate accessors for every request in a JSON manifest.

    The manifest is a list of objects with class_name and optional
    namespace and scene_path. A failing request never stops the others.

    \b
    Examples:
        nodegen batch nodes.json
        nodegen batch nodes.json -d scenes -o generated
    """
    config = get_config()

    try:
        raw = json.loads(Path(manifest).read_text(encoding="utf-8"))
        requests = _REQUESTS.validate_python(raw)
    except json.JSONDecodeError as e:
        print_error(f"Manifest is not valid JSON: {e}")
        sys.exit(1)
    except ValidationError as e:
        print_error(f"Invalid manifest: {e}")
        sys.exit(1)

    results = generate_batch(requests, collect_sources(scene_dirs))

    out_dir = Path(output_dir)
    summaries = []
    for result in results:
        report_diagnostics(result)
        path = None
        if result.success:
            out_dir.mkdir(parents=True, exist_ok=True)
            path = out_dir / result.hint_name
            path.write_text(result.source, encoding="utf-8", newline="\n")
            if config.format != "json":
                print_success(f"Wrote {path}")
        summaries.append(_summary(result, path))

    failed = sum(1 for result in results if not result.success)
    if config.format == "json":
        click.echo(format_output(summaries, config.format))
    else:
        print_info(f"{len(results) - failed} generated, {failed} skipped (scene extension {cfg.scene_extension})")
    if failed:
        sys.exit(1)
