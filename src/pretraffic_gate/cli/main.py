# src/pretraffic_gate/cli/main.py
# Main CLI entrypoint for the pre-traffic gate.
"""
Main Typer application with all sub-commands.

Usage:
    ptgate run -d <deployment-id> -e <hook-execution-id>   # Validate and report
    ptgate run --no-report                                 # Validate only
    ptgate probe                                           # Show probe payload
    ptgate config                                          # Show configuration
"""

import typer
from rich.console import Console

from pretraffic_gate import __version__
from pretraffic_gate.cli.commands import config, gate

app = typer.Typer(
    name="ptgate",
    help="ptgate - CodeDeploy pre-traffic validation for the books API",
    no_args_is_help=True,
    rich_markup_mode="rich",
)
console = Console()

app.command("run")(gate.run_command)
app.command("probe")(gate.probe_command)
app.command("config")(config.config_command)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(False, "--version", "-v", help="Show version and exit"),
) -> None:
    """ptgate - pre-traffic gate CLI."""
    if version:
        console.print(f"[bold]ptgate[/bold] version {__version__}")
        raise typer.Exit()
    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())


if __name__ == "__main__":
    app()
