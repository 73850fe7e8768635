import logging

import typer
from rich.console import Console
from rich.panel import Panel
from rich.text import Text
from rich.padding import Padding

from sitefilters.core.exceptions import SiteFiltersError

console = Console(stderr=True)
logger = logging.getLogger(__name__)


def handle_error(err: SiteFiltersError):
    """Handles SiteFiltersError exceptions, formats them, and prints them to the console."""
    logger.debug("Command failed", exc_info=err)

    console.print()
    body = Text(err.message)
    body.append(f"\n\nError code: {err.error_code.value} ({err.error_code.name})", style="dim")
    error_panel = Panel(
        body,
        title="[bold red]Error[/bold red]",
        border_style="red",
        expand=False
    )
    console.print(error_panel)

    if err.suggestions:
        console.print("\n[bold green]Suggested solutions:[/bold green]")
        for i, suggestion in enumerate(err.suggestions, 1):
            suggestion_text = Text(f"{i}. {suggestion.action}: {suggestion.description}\n")
            if suggestion.command:
                suggestion_text.append("   Run: ", style="bold")
                suggestion_text.append(suggestion.command, style="cyan")
            console.print(Padding(suggestion_text, (0, 1)))

    if err.context.correlation_id:
        console.print(Padding(f"Trace ID: [yellow]{err.context.correlation_id}[/yellow]", (1, 0, 0, 0)))

    raise typer.Exit(code=1)
