"""Number range commands."""

import sys

import click

from numinv import InventoryError

from ..utils.client import get_client
from ..utils.output import format_output, print_error
from .options import system_id_option


@click.group()
def ranges():
    """Look up number ranges.

    \b
    Examples:
      numinv ranges list --system-id 3
      numinv ranges get --system-id 3 Main
    """
    pass


@ranges.command("list")
@system_id_option
@click.pass_context
def list_ranges(ctx: click.Context, system_id: int):
    """List the ranges of a system."""
    try:
        with get_client(ctx.obj) as client:
            result = client.ranges.list(system_id)
    except InventoryError as e:
        print_error(f"Failed to list ranges: {e}")
        sys.exit(1)

    format_output(result, ctx.obj["output"])


@ranges.command("get")
@system_id_option
@click.argument("range_name")
@click.pass_context
def get_range(ctx: click.Context, system_id: int, range_name: str):
    """Get one range by name."""
    try:
        with get_client(ctx.obj) as client:
            result = client.ranges.get(system_id, range_name)
    except InventoryError as e:
        print_error(f"Failed to get range: {e}")
        sys.exit(1)

    format_output(result, ctx.obj["output"])
