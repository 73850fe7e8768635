#!/usr/bin/env python3
"""
SiteFilters CLI Main Application

Typer-based command-line interface for trying filters on text, rendering
templates with the registered filters, and listing what is registered.
"""

import sys
from pathlib import Path
from typing import List, Optional

import jinja2
import typer
from rich.table import Table

from sitefilters.cli import __version__
from sitefilters.cli.error_handling import handle_error
from sitefilters.cli.utils import (
    Runtime,
    build_runtime,
    console,
    load_config_from_cli,
    parse_vars,
    setup_logging,
)
from sitefilters.core.exceptions import ErrorCode, SiteFiltersError, TemplateRenderError
from sitefilters.filters.text import TITLE_CASE_FILTER_NAMES

app = typer.Typer(
    name="sitefilters",
    help="Template filters for static site rendering",
    context_settings={"help_option_names": ["-h", "--help"]},
    rich_markup_mode="rich",
    no_args_is_help=True,
)


def version_callback(value: bool):
    """Show version information."""
    if value:
        console.print(f"[bold cyan]SiteFilters[/bold cyan] version [green]{__version__}[/green]")
        raise typer.Exit()


def _runtime(ctx: typer.Context, template_dir: Optional[Path] = None) -> Runtime:
    config = ctx.obj
    template_config = None
    if template_dir is not None:
        template_config = config.templates.model_copy(
            update={'search_paths': [template_dir, *config.templates.search_paths]}
        )
    return build_runtime(config, template_config)


@app.callback()
def app_callback(
    ctx: typer.Context,
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version information and exit"
    ),
    config: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Configuration file (YAML or JSON)"
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug logging"
    ),
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="Logging level name"
    ),
    alias: Optional[List[str]] = typer.Option(
        None, "--alias", help="Extra name for the title-case filter (repeatable)"
    ),
    no_plugins: bool = typer.Option(
        False, "--no-plugins", help="Skip entry point filter plugins"
    ),
):
    """
    SiteFilters - title-case and other template filters.

    [bold]Quick Start:[/bold]

    • Apply a filter: [cyan]sitefilters apply "the quick brown fox"[/cyan]
    • Render a template: [cyan]sitefilters render "{{ t|TitleCase }}" --var t="hello world"[/cyan]
    • List filters: [cyan]sitefilters filters[/cyan]
    """
    # Unset flags stay None so file and environment values are kept
    cli_args = {
        'verbose': True if verbose else None,
        'log_level': log_level,
        'aliases': alias or None,
        'load_entry_points': False if no_plugins else None,
    }

    try:
        app_config = load_config_from_cli(str(config) if config else None, cli_args)
    except SiteFiltersError as e:
        handle_error(e)

    setup_logging(app_config.get_log_level())
    ctx.obj = app_config


@app.command("apply")
def apply_command(
    ctx: typer.Context,
    text: str = typer.Argument(..., help="Text to transform, or '-' to read stdin"),
    filter_name: str = typer.Option(
        TITLE_CASE_FILTER_NAMES[0], "--filter", "-f", help="Registered filter name"
    ),
):
    """Apply a registered filter to TEXT and print the result."""
    if text == "-":
        text = sys.stdin.read()

    try:
        runtime = _runtime(ctx)
        result = runtime.engine.apply_filter(filter_name, text)
    except SiteFiltersError as e:
        handle_error(e)

    typer.echo(result)


@app.command("render")
def render_command(
    ctx: typer.Context,
    template: str = typer.Argument(..., help="Template source, or a template path with --file"),
    var: Optional[List[str]] = typer.Option(
        None, "--var", help="Template variable as key=value (repeatable)"
    ),
    from_file: bool = typer.Option(
        False, "--file", help="Treat TEMPLATE as a path to a template file"
    ),
):
    """Render a template with the registered filters installed."""
    variables = parse_vars(var)

    try:
        if from_file:
            path = Path(template)
            if not path.is_file():
                raise TemplateRenderError(
                    f"Template file not found: {path}",
                    error_code=ErrorCode.TEMPLATE_NOT_FOUND,
                    template=str(path)
                )
            runtime = _runtime(ctx, template_dir=path.parent)
            output = runtime.engine.render_file(path.name, variables)
        else:
            runtime = _runtime(ctx)
            output = runtime.engine.render(template, variables)
    except jinja2.TemplateSyntaxError as e:
        handle_error(TemplateRenderError(
            f"Template syntax error: {e}",
            error_code=ErrorCode.TEMPLATE_SYNTAX,
            template=template,
            cause=e
        ))
    except jinja2.UndefinedError as e:
        handle_error(TemplateRenderError(
            f"Missing template variable: {e}",
            error_code=ErrorCode.TEMPLATE_UNDEFINED,
            template=template,
            cause=e
        ))
    except SiteFiltersError as e:
        handle_error(e)

    typer.echo(output)


@app.command("filters")
def filters_command(ctx: typer.Context):
    """List registered filters."""
    try:
        runtime = _runtime(ctx)
    except SiteFiltersError as e:
        handle_error(e)

    table = Table(title="Registered Filters")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Source", style="green")
    table.add_column("Description")

    for entry in runtime.registry.entries():
        table.add_row(entry.name, entry.source, entry.description)

    console.print(table)


def main():
    """Entry point for the sitefilters console script."""
    try:
        app()
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        sys.exit(1)


if __name__ == "__main__":
    main()
