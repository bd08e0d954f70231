"""CLI interface for deployrules using Typer framework."""

import json as jsonlib
import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from deployrules import __description__, __version__
from deployrules.config import DeployRulesConfig, LogLevel, OutputFormat, load_config
from deployrules.constants import RULE_SET_FILE_NAME
from deployrules.models import Rule
from deployrules.netutil import is_localhost_or_loopback, is_url_localhost_or_loopback
from deployrules.parser import RulesetParser

app = typer.Typer(
    name="deployrules",
    help=__description__,
    add_completion=False,
    rich_markup_mode="rich"
)

console = Console()

_LOG_LEVELS = {
    LogLevel.ERROR: logging.ERROR,
    LogLevel.WARN: logging.WARNING,
    LogLevel.INFO: logging.INFO,
    LogLevel.DEBUG: logging.DEBUG,
}


def version_callback(value: bool) -> None:
    """Show version information and exit."""
    if value:
        console.print(f"deployrules version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option("--version", callback=version_callback, help="Show version and exit")
    ] = False,
) -> None:
    """deployrules - Deployment rule set parser."""


def _load_cli_config(config: Optional[Path], verbose: bool) -> DeployRulesConfig:
    """Load configuration and set up logging, exiting on invalid config."""
    try:
        cfg = load_config(config)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    level = logging.DEBUG if verbose else _LOG_LEVELS[LogLevel(cfg.logging.level)]
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
    return cfg


def _render_rules_table(rules: list[Rule], title: str) -> Table:
    table = Table(title=title)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Location", style="cyan")
    table.add_column("Certificate hash")
    table.add_column("Permission", style="green")
    table.add_column("Version")

    for position, rule in enumerate(rules, start=1):
        if rule.has_identity:
            location = rule.location or "-"
            cert_hash = rule.certificate.hash or "-"
        else:
            location = cert_hash = "[dim]no <id>[/dim]"
        if rule.has_action:
            permission = rule.action.permission or "-"
            version = rule.action.version or "-"
        else:
            permission = version = "[dim]no <action>[/dim]"
        table.add_row(str(position), location, cert_hash, permission, version)
    return table


@app.command()
def rules(
    path: Annotated[
        Path,
        typer.Argument(help="Path to ruleset.xml")
    ] = Path(RULE_SET_FILE_NAME),
    format: Annotated[
        Optional[OutputFormat],
        typer.Option("--format", "-f", help="Output format: table, json (default: from config)")
    ] = None,
    config: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Configuration file path (default: search for .deployrules.json)")
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging")
    ] = False,
) -> None:
    """Parse a deployment rule set and list its rules in order."""
    cfg = _load_cli_config(config, verbose)

    if not path.exists():
        console.print(f"[red]Error:[/red] File not found: {path}")
        raise typer.Exit(1)

    parser = RulesetParser(cfg.parser)
    result = parser.parse_file(path)

    if not result.success:
        for error in result.errors:
            console.print(f"[red]Error:[/red] {error}")
        raise typer.Exit(1)

    output_format = OutputFormat(format or cfg.output.format)
    if output_format is OutputFormat.JSON:
        payload = {
            "file": result.file_path,
            "totalRules": result.total_rules,
            "rules": [rule.model_dump() for rule in result.rules],
        }
        print(jsonlib.dumps(payload, indent=2))
    else:
        console.print(_render_rules_table(result.rules, f"Rules in {path}"))
        console.print(f"[dim]{result.total_rules} rule(s) parsed in {result.parse_time_ms:.1f} ms[/dim]")


@app.command("check-host")
def check_host(
    target: Annotated[
        str,
        typer.Argument(help="Host name, IP address or URL")
    ],
    config: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Configuration file path (default: search for .deployrules.json)")
    ] = None,
    no_resolve: Annotated[
        bool,
        typer.Option("--no-resolve", help="Do not resolve host names")
    ] = False,
) -> None:
    """Tell whether a host or URL points to the local machine."""
    cfg = _load_cli_config(config, verbose=False)
    resolve = cfg.network.resolve_hostnames and not no_resolve

    if "://" in target:
        is_local = is_url_localhost_or_loopback(target, resolve=resolve)
    else:
        is_local = is_localhost_or_loopback(target, resolve=resolve)

    if is_local:
        console.print(f"[green]local[/green] {target}")
    else:
        console.print(f"[yellow]remote[/yellow] {target}")
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
