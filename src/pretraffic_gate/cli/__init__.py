# src/pretraffic_gate/cli/__init__.py
# CLI package for the pre-traffic gate.
"""
CLI module providing the `ptgate` command-line interface.

Commands:
- ptgate run: Validate a function version and report to CodeDeploy
- ptgate probe: Show the probe request payload
- ptgate config: Show resolved configuration
"""

from pretraffic_gate.cli.main import app

__all__ = ["app"]
