"""Command-line interface for mediamatch.

Provides commands to inspect parsed media queries and to check them against
ad hoc or configured environments.
"""

from __future__ import annotations

import json
from dataclasses import asdict
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from mediamatch import __version__

# Create Typer app
app = typer.Typer(
    name="mediamatch",
    help="Parse CSS media queries and check whether they match a given environment.",
    add_completion=False,
    no_args_is_help=True,
)

# Rich console for pretty output
console = Console()

ConfigOption = Annotated[
    Path,
    typer.Option(
        "--config",
        "-c",
        help="Path to configuration file.",
    ),
]


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]mediamatch[/bold blue] version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        Optional[bool],
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """mediamatch - Evaluate CSS media queries outside the browser."""
    pass


def _load(config_path: Path):
    """Load settings and apply logging and unit configuration."""
    from mediamatch.config import get_settings
    from mediamatch.logging import setup_logging
    from mediamatch.matcher.units import configure_units

    settings = get_settings(config_path)
    setup_logging(settings.logging)
    configure_units(settings.units)
    return settings


def _parse_assignment(assignment: str) -> tuple[str, str]:
    """Split a ``feature=value`` command-line assignment."""
    feature, sep, value = assignment.partition("=")
    if not sep or not feature.strip():
        raise typer.BadParameter(f"Expected feature=value, got {assignment!r}", param_hint="--set")
    return feature.strip().lower(), value.strip()


@app.command("parse")
def parse_command(
    query: Annotated[str, typer.Argument(help="Media query list to parse.")],
    as_json: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Print the parsed query as JSON.",
        ),
    ] = False,
    config_path: ConfigOption = Path("mediamatch.yaml"),
) -> None:
    """Show how a media query list is parsed."""
    from mediamatch.logging import get_logger
    from mediamatch.matcher import MediaQuerySyntaxError, parse

    _load(config_path)
    log = get_logger("mediamatch.cli")

    try:
        ast = parse(query)
    except MediaQuerySyntaxError as e:
        log.info("Rejected media query", query=query, clause=e.clause)
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(2)

    if as_json:
        typer.echo(json.dumps([asdict(node) for node in ast], indent=2))
        return

    table = Table(title="Parsed Media Query")
    table.add_column("#", style="dim")
    table.add_column("Not", style="red")
    table.add_column("Type", style="cyan")
    table.add_column("Feature", style="green")
    table.add_column("Modifier", style="blue")
    table.add_column("Value", style="yellow")

    for index, node in enumerate(ast, start=1):
        inverse = "not" if node.inverse else ""
        if not node.expressions:
            table.add_row(str(index), inverse, node.type, "-", "-", "-")
            continue
        for expr in node.expressions:
            table.add_row(
                str(index),
                inverse,
                node.type,
                expr.feature,
                expr.modifier.value if expr.modifier else "-",
                escape(expr.value) if expr.value is not None else "-",
            )

    console.print(table)


@app.command("match")
def match_command(
    query: Annotated[str, typer.Argument(help="Media query list to evaluate.")],
    env: Annotated[
        Optional[str],
        typer.Option(
            "--env",
            "-e",
            help="Name of a configured environment to match against.",
        ),
    ] = None,
    assignments: Annotated[
        Optional[list[str]],
        typer.Option(
            "--set",
            "-s",
            help="Environment value as feature=value (repeatable, overrides --env).",
        ),
    ] = None,
    config_path: ConfigOption = Path("mediamatch.yaml"),
) -> None:
    """Check whether a media query list matches an environment.

    Exits with status 0 on a match and 1 otherwise.
    """
    from mediamatch.matcher import MediaQuerySyntaxError, match

    settings = _load(config_path)

    values: dict[str, str | int | float] = {}
    if env is not None:
        environment = settings.environments.get(env)
        if environment is None:
            console.print(f"[red]Unknown environment: {escape(env)}[/red]")
            available = ", ".join(sorted(settings.environments)) or "none configured"
            console.print(f"Available environments: {escape(available)}")
            raise typer.Exit(2)
        values.update(environment.as_bag())

    for assignment in assignments or []:
        feature, value = _parse_assignment(assignment)
        values[feature] = value

    try:
        matched = match(query, values)
    except MediaQuerySyntaxError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(2)

    if matched:
        console.print("[green]match[/green]")
    else:
        console.print("[yellow]no match[/yellow]")
        raise typer.Exit(1)


@app.command("envs")
def list_environments(config_path: ConfigOption = Path("mediamatch.yaml")) -> None:
    """List configured environments."""
    settings = _load(config_path)

    if not settings.environments:
        console.print("[yellow]No environments configured.[/yellow]")
        console.print("Add environments to your mediamatch.yaml file.")
        return

    table = Table(title="Environments")
    table.add_column("Name", style="cyan")
    table.add_column("Values", style="green")

    for name, environment in sorted(settings.environments.items()):
        bag = environment.as_bag()
        table.add_row(name, escape(", ".join(f"{k}={v}" for k, v in bag.items())))

    console.print(table)


if __name__ == "__main__":
    app()
