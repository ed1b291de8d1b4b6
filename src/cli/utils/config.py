"""CLI-level configuration shared between the root group and subcommands."""
from __future__ import annotations

from dataclasses import dataclass

OUTPUT_FORMATS = ("text", "json")


@dataclass
class CLIConfig:
    format: str = "text"
    verbose: bool = False


_config = CLIConfig()


def get_config() -> CLIConfig:
    return _config


def set_config(config: CLIConfig) -> None:
    global _config
    _config = config
