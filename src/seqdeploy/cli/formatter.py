import json
import typer
from typing import Any, Dict, List, Optional
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from seqdeploy.core.models import DeployResult

# Create a stderr console for logging
error_console = Console(stderr=True)

class OutputFormatter:
    """
    Handles operator-facing output for the CLI.
    Ensures separation of concerns between progress notices (stderr) and data (stdout).
    """

    @staticmethod
    def log(message: str, severity: str = "info") -> None:
        """
        Print progress and outcome notices to stderr with color coding.
        """
        style = "white"
        prefix = "[DEPLOY]"

        if severity == "warning":
            style = "yellow"
        elif severity == "error":
            style = "red"
            prefix = "✗"
        elif severity == "critical":
            style = "bold red"
        elif severity == "success":
            style = "green"
            prefix = "✓"

        error_console.print(f"[{style}]{prefix} {escape(message)}[/{style}]", highlight=False, soft_wrap=True)

    @staticmethod
    def print_result(result: DeployResult, env: Optional[str] = None) -> None:
        """
        Prints a one-row summary table of a finished deploy.
        """
        color = "green" if result.ok else "red"
        title = f"Deploy Summary ({escape(env)})" if env else "Deploy Summary"
        table = Table(title=title, border_style=color, header_style=f"bold {color}")
        table.add_column("Actor")
        table.add_column("Outcome", style="bold")
        table.add_column("Failed Step")
        table.add_column("Runner PID")

        table.add_row(
            escape(result.actor),
            f"[{color}]{result.outcome.value.upper()}[/{color}]",
            result.failed_step or "-",
            str(result.runner_pid) if result.runner_pid is not None else "-",
        )

        error_console.print(table)

    @staticmethod
    def print_lines(lines: List[str]) -> None:
        """
        Print raw log lines to stdout, unstyled.
        """
        for line in lines:
            typer.echo(line)

    @staticmethod
    def print_data(data: Dict[str, Any]) -> None:
        """
        Print a report to stdout as JSON.
        """
        typer.echo(json.dumps(data, indent=2))
