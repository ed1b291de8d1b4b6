"""Output formatting for CLI commands."""
from __future__ import annotations

import json
from typing import Any

import click
from pydantic import BaseModel


def _jsonable(data: Any) -> Any:
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json")
    if isinstance(data, (list, tuple)):
        return [_jsonable(item) for item in data]
    if isinstance(data, dict):
        return {key: _jsonable(value) for key, value in data.items()}
    return data


def format_output(data: Any, fmt: str = "text") -> str:
    """Render a command result as JSON or as plain text."""
    data = _jsonable(data)
    if fmt == "json":
        return json.dumps(data, indent=2, ensure_ascii=False)
    if isinstance(data, str):
        return data
    if isinstance(data, dict):
        return "\n".join(f"{key}: {value}" for key, value in data.items())
    if isinstance(data, list):
        return "\n".join(str(item) for item in data)
    return str(data)


def format_table(rows: list[list[str]], headers: list[str]) -> str:
    widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(cell))
    lines = ["  ".join(h.ljust(widths[i]) for i, h in enumerate(headers)).rstrip()]
    lines.append("  ".join("-" * w for w in widths))
    for row in rows:
        lines.append("  ".join(cell.ljust(widths[i]) for i, cell in enumerate(row)).rstrip())
    return "\n".join(lines)


def print_error(message: str) -> None:
    click.echo(click.style(f"✗ {message}", fg="red"), err=True)


def print_warning(message: str) -> None:
    click.echo(click.style(f"! {message}", fg="yellow"), err=True)


def print_success(message: str) -> None:
    click.echo(click.style(f"✓ {message}", fg="green"))


def print_info(message: str) -> None:
    click.echo(click.style(f"ℹ {message}", fg="blue"))
