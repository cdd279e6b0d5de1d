"""Output utilities.

Command results are written as JSON or YAML on stdout; status lines go
through rich on stderr so that piped output stays parseable.
"""

import json
from typing import Any

import click
import yaml
from rich.console import Console
from rich.markup import escape

from numinv.models import BaseModel

console = Console(stderr=True)


def to_plain(data: Any) -> Any:
    """Convert models (or lists of them) to plain dictionaries."""
    if isinstance(data, BaseModel):
        return data.to_dict()
    if isinstance(data, (list, tuple)):
        return [to_plain(item) for item in data]
    return data


def format_output(data: Any, format_type: str = "json") -> None:
    """Print data in the requested format."""
    if format_type == "yaml":
        print_yaml(data)
    else:
        print_json(data)


def print_json(data: Any) -> None:
    """Print data as indented JSON."""
    click.echo(json.dumps(to_plain(data), indent=2, default=str))


def print_yaml(data: Any) -> None:
    """Print data as YAML."""
    click.echo(yaml.safe_dump(to_plain(data), default_flow_style=False, sort_keys=False), nl=False)


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]✓[/green] {escape(message)}")


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[red]✗[/red] {escape(message)}")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]![/yellow] {escape(message)}")
