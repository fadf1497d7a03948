# src/pretraffic_gate/cli/commands/gate.py
"""
Commands for running the pre-traffic gate by hand.

Usage:
    ptgate run --deployment-id d-123 --hook-execution-id abc   # Validate and report
    ptgate run --no-report                                     # Validate only
    ptgate probe                                               # Show probe payload
"""

import json
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.tree import Tree

from pretraffic_gate.core.config import load_config
from pretraffic_gate.core.log import configure_cli_logging
from pretraffic_gate.errors import ConfigError, ReportingError
from pretraffic_gate.gates.models import HookStatus, StepStatus
from pretraffic_gate.gates.runner import PreTrafficGate
from pretraffic_gate.models import InvocationContext, ProbeRecord

console = Console()

LOCAL_ID = "local"


def _status_style(status: StepStatus) -> str:
    """Get rich style for status."""
    return {
        StepStatus.PASSED: "green",
        StepStatus.FAILED: "red",
        StepStatus.SKIPPED: "yellow",
    }.get(status, "white")


def _status_icon(status: StepStatus) -> str:
    """Get icon for status."""
    return {
        StepStatus.PASSED: "✓",
        StepStatus.FAILED: "✗",
        StepStatus.SKIPPED: "−",
    }.get(status, "?")


def run_command(
    deployment_id: Optional[str] = typer.Option(
        None, "--deployment-id", "-d", help="CodeDeploy deployment ID"
    ),
    hook_execution_id: Optional[str] = typer.Option(
        None, "--hook-execution-id", "-e", help="Lifecycle event hook execution ID"
    ),
    function: Optional[str] = typer.Option(
        None, "--function", "-f", help="Function version or alias to test"
    ),
    table: Optional[str] = typer.Option(
        None, "--table", "-t", help="Books table name"
    ),
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Path to .ptgate.yaml"
    ),
    no_report: bool = typer.Option(
        False, "--no-report", help="Validate without reporting to CodeDeploy"
    ),
    json_only: bool = typer.Option(
        False, "--json", help="Output JSON only, no console"
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-V", help="Show gate logs"
    ),
) -> None:
    """
    Run the pre-traffic validation against a function version.

    Examples:
        ptgate run -d d-ABC123 -e hook-1              # Validate and report
        ptgate run --no-report --function books-create:live
    """
    # Keep --json output machine-readable
    if verbose:
        configure_cli_logging("INFO")
    else:
        configure_cli_logging("CRITICAL" if json_only else "WARNING")

    try:
        config = load_config(config_path)
    except ConfigError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    updates = {}
    if function:
        updates["function_name"] = function
    if table:
        updates["table_name"] = table
    if updates:
        config = config.model_copy(update=updates)

    if not no_report and not (deployment_id and hook_execution_id):
        console.print(
            "[red]Error: --deployment-id and --hook-execution-id are required "
            "unless --no-report is set[/red]"
        )
        raise typer.Exit(1)

    ctx = InvocationContext(
        new_version_id=config.function_name,
        deployment_id=deployment_id or LOCAL_ID,
        hook_execution_id=hook_execution_id or LOCAL_ID,
    )
    gate = PreTrafficGate.from_config(config)

    if not json_only:
        console.print(Panel(
            f"[bold]Pre-traffic validation[/bold]\n"
            f"Function: {config.function_name}\n"
            f"Table: {config.table_name}\n"
            f"Deployment: {ctx.deployment_id}\n"
            f"Report to CodeDeploy: {'no' if no_report else 'yes'}",
            title="ptgate",
        ))

    try:
        verdict = gate.evaluate(ctx) if no_report else gate.run_validation(ctx)
    except ReportingError as e:
        console.print(f"[red bold]Reporting failed: {e}[/red bold]")
        raise typer.Exit(2)

    exit_code = 0 if verdict.status == HookStatus.SUCCEEDED else 1

    if json_only:
        typer.echo(json.dumps(verdict.to_dict(), indent=2))
        raise typer.Exit(exit_code)

    tree = Tree(f"[bold]{ctx.new_version_id}[/bold]")
    for check in verdict.checks:
        style = _status_style(check.status)
        icon = _status_icon(check.status)
        tree.add(f"[{style}]{icon}[/{style}] {check.name}: {check.message[:80]}")
    console.print(tree)

    overall_style = "green" if exit_code == 0 else "red"
    console.print(Panel(
        f"[{overall_style} bold]{verdict.status.value}[/{overall_style} bold]\n\n"
        f"Duration: {verdict.duration_ms:.0f}ms"
        + (f"\nReason: {verdict.message}" if verdict.message else ""),
        title="Verdict",
    ))

    raise typer.Exit(exit_code)


def probe_command(
    isbn: Optional[str] = typer.Option(None, "--isbn", help="Override the probe isbn"),
) -> None:
    """Show the request payload sent to the function under test."""
    probe = ProbeRecord(isbn=isbn) if isbn else ProbeRecord(isbn=load_config().probe_isbn)
    typer.echo(json.dumps(probe.to_request(), indent=2))
