"""CLI entry point for the page test planner."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import click
from playwright.async_api import Error as PlaywrightError
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from src.inspector.snapshot_parser import ExtractionError
from src.models.config import InspectorConfig
from src.orchestrator import Orchestrator
from src.reporter.markdown_report import render_test_plan
from src.tools.types import ToolError

console = Console(stderr=True)

DEFAULT_CONFIG = "inspector-config.json"


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


def _load_config(path: str) -> InspectorConfig:
    try:
        return InspectorConfig.load(path)
    except FileNotFoundError:
        if path != DEFAULT_CONFIG:
            raise
        return InspectorConfig()


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """Inspect a web page and derive a prioritized test plan."""
    setup_logging(verbose)


@cli.command()
@click.argument("url")
@click.option("--timeout", "-t", type=click.IntRange(min=1), default=None, help="Navigation timeout in ms")
@click.option("--config", "-c", default=DEFAULT_CONFIG, help="Config file path")
@click.option("--output-dir", "-o", default=None, help="Report output directory")
@click.option("--print/--no-print", "print_plan", default=True, help="Print the Markdown plan")
def inspect(url: str, timeout: int | None, config: str, output_dir: str | None, print_plan: bool) -> None:
    """Inspect URL and generate a test plan: inspect → plan → report."""
    try:
        cfg = _load_config(config)
    except FileNotFoundError:
        console.print(f"[red]Config file not found: {config}[/red]")
        sys.exit(1)
    if timeout is not None:
        cfg.navigation_timeout_ms = timeout
    if output_dir:
        cfg.report_output_dir = output_dir

    orchestrator = Orchestrator(cfg)
    try:
        results = orchestrator.run_full_pipeline(url)
    except (ExtractionError, ToolError, PlaywrightError, json.JSONDecodeError) as e:
        console.print(f"[red]Failed to generate test plan:[/red] {e}")
        sys.exit(1)

    if print_plan:
        click.echo(render_test_plan(results["plan"]))

    table = Table(title="Reports")
    table.add_column("Format", style="bold")
    table.add_column("Path")
    for fmt, path in results["reports"].items():
        table.add_row(fmt.upper(), f"[blue]{path}[/blue]")
    console.print(table)


@cli.command()
@click.argument("snapshot_file")
@click.option("--config", "-c", default=DEFAULT_CONFIG, help="Config file path")
def plan(snapshot_file: str, config: str) -> None:
    """Rebuild a test plan from a saved snapshot JSON file."""
    cfg = _load_config(config)
    orchestrator = Orchestrator(cfg)
    try:
        test_plan = orchestrator.run_plan_only(snapshot_file)
    except (FileNotFoundError, json.JSONDecodeError) as e:
        console.print(f"[red]Failed to generate test plan:[/red] {e}")
        sys.exit(1)
    click.echo(render_test_plan(test_plan))


@cli.command()
@click.option("--target", "-t", prompt="Target URL", help="Website URL to inspect")
def init(target: str) -> None:
    """Create a default configuration file."""
    config_path = Path(DEFAULT_CONFIG)
    if config_path.exists():
        if not click.confirm(f"{DEFAULT_CONFIG} already exists. Overwrite?"):
            return

    cfg = InspectorConfig(target_url=target)
    cfg.save(config_path)
    console.print(f"[green]Created {config_path}[/green]")
    console.print("\nYou can now customize this file and run:")
    console.print(f"  [blue]page-test-planner inspect {target}[/blue]")


if __name__ == "__main__":
    cli()
