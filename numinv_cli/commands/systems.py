"""Telephony system commands."""

import sys

import click

from numinv import InventoryError

from ..utils.client import get_client
from ..utils.output import format_output, print_error


@click.group()
def systems():
    """Look up telephony systems.

    \b
    Examples:
      numinv systems list
      numinv systems get 3
    """
    pass


@systems.command("list")
@click.pass_context
def list_systems(ctx: click.Context):
    """List the systems managed by the server."""
    try:
        with get_client(ctx.obj) as client:
            result = client.systems.list()
    except InventoryError as e:
        print_error(f"Failed to list systems: {e}")
        sys.exit(1)

    format_output(result, ctx.obj["output"])


@systems.command("get")
@click.argument("system_id", type=int)
@click.pass_context
def get_system(ctx: click.Context, system_id: int):
    """Get details for a specific system."""
    try:
        with get_client(ctx.obj) as client:
            result = client.systems.get(system_id)
    except InventoryError as e:
        print_error(f"Failed to get system: {e}")
        sys.exit(1)

    format_output(result, ctx.obj["output"])
