# src/pretraffic_gate/core/log.py
# Logging setup for Lambda and CLI entrypoints.

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

LOG_FORMAT = "[%(levelname)s] %(name)s: %(message)s"


def configure_lambda_logging(level: str = "INFO") -> None:
    """
    Set the log level on the root logger.

    The Lambda runtime installs its own handler that ships records to
    CloudWatch; one is only added when running outside Lambda.
    """
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(format=LOG_FORMAT)
    root.setLevel(level.upper())


def configure_cli_logging(level: str = "WARNING", console: Optional[Console] = None) -> None:
    """Route log records through rich for terminal output."""
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console or Console(stderr=True), show_path=False)],
        force=True,
    )
