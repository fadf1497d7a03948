# src/pretraffic_gate/cli/commands/config.py
# Implementation of `ptgate config` command.
"""
Shows the configuration the gate would run with, after the YAML file and
environment variables have been applied.
"""

from pathlib import Path
from typing import Optional

import typer
import yaml
from rich.console import Console
from rich.table import Table

from pretraffic_gate.core.config import load_config
from pretraffic_gate.errors import ConfigError

console = Console()


def config_command(
    path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Path to .ptgate.yaml"
    ),
    as_yaml: bool = typer.Option(False, "--yaml", help="Print as YAML"),
) -> None:
    """Show resolved gate configuration."""
    try:
        config = load_config(path)
    except ConfigError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    data = config.model_dump()
    if as_yaml:
        typer.echo(yaml.safe_dump(data, sort_keys=False))
        return

    table = Table(title="Gate Configuration")
    table.add_column("Setting", style="cyan", no_wrap=True)
    table.add_column("Value", style="green")

    for key, value in data.items():
        if isinstance(value, dict):
            for sub_key, sub_value in value.items():
                table.add_row(f"{key}.{sub_key}", str(sub_value))
        else:
            table.add_row(key, str(value))

    console.print(table)
