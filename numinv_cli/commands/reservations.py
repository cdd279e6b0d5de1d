"""Reservation management commands."""

import sys
from typing import Optional

import click

from numinv import InventoryError, SystemType
from numinv.config import Limits

from ..utils.client import get_client
from ..utils.output import format_output, print_success, print_error
from .options import system_id_option, system_type_option


@click.group()
def reservations():
    """Manage number reservations.

    \b
    Examples:
      numinv reservations list --system-id 3 --system-type SfB
      numinv reservations create --system-id 3 --system-type Cisco \\
          --range Main --reason "New hire" --never-expires
      numinv reservations create --system-id 3 --system-type Cisco \\
          --number 5551011 --range Main --reason Lease --expires-on 2027-01-31
      numinv reservations delete --system-id 3 --system-type Cisco 5551011
    """
    pass


@reservations.command("list")
@system_id_option
@system_type_option
@click.pass_context
def list_reservations(ctx: click.Context, system_id: int, system_type: SystemType):
    """List the reservations of a system."""
    try:
        with get_client(ctx.obj) as client:
            result = client.reservations.list(system_id, system_type)
    except InventoryError as e:
        print_error(f"Failed to list reservations: {e}")
        sys.exit(1)

    format_output(result, ctx.obj["output"])


@reservations.command("get")
@system_id_option
@system_type_option
@click.argument("number")
@click.pass_context
def get_reservation(ctx: click.Context, system_id: int, system_type: SystemType, number: str):
    """Get the reservation of a number."""
    try:
        with get_client(ctx.obj) as client:
            result = client.reservations.get(system_id, system_type, number)
    except InventoryError as e:
        print_error(f"Failed to get reservation: {e}")
        sys.exit(1)

    format_output(result, ctx.obj["output"])


@reservations.command("create")
@system_id_option
@system_type_option
@click.option("--range", "-r", "range_name", required=True,
              help="Range to draw numbers (and fallbacks on conflict) from")
@click.option("--number", help="Number to try first; defaults to the first available")
@click.option("--reason", required=True, help="Reason stored with the reservation")
@click.option("--description", help="Optional description")
@click.option("--never-expires", is_flag=True, help="Keep until deleted")
@click.option("--expires-on", type=click.DateTime(formats=["%Y-%m-%d"]),
              help="Expiration date (YYYY-MM-DD)")
@click.option("--max-attempts", type=click.IntRange(Limits.MIN_RESERVE_ATTEMPTS,
                                                    Limits.MAX_RESERVE_ATTEMPTS),
              default=Limits.DEFAULT_RESERVE_ATTEMPTS, help="Attempts before giving up")
@click.option("--deadline", type=float, help="Seconds allowed for the whole operation")
@click.pass_context
def create_reservation(
    ctx: click.Context,
    system_id: int,
    system_type: SystemType,
    range_name: str,
    number: Optional[str],
    reason: str,
    description: Optional[str],
    never_expires: bool,
    expires_on,
    max_attempts: int,
    deadline: Optional[float],
):
    """Reserve a number, retrying with other numbers on conflict."""
    options = dict(
        reason=reason,
        description=description,
        never_expires=never_expires,
        expires_on=expires_on.date() if expires_on else None,
        max_attempts=max_attempts,
        deadline=deadline,
    )
    try:
        with get_client(ctx.obj) as client:
            if number:
                result = client.reservations.reserve(
                    system_id, system_type, number, range_name, **options
                )
            else:
                result = client.reservations.reserve_next_available(
                    system_id, system_type, range_name, **options
                )
    except InventoryError as e:
        print_error(f"Failed to reserve a number: {e}")
        sys.exit(1)

    print_success(f"Reserved {result.number} ({result.handle.canonical})")
    format_output(result, ctx.obj["output"])


@reservations.command("delete")
@system_id_option
@system_type_option
@click.argument("number")
@click.pass_context
def delete_reservation(ctx: click.Context, system_id: int, system_type: SystemType, number: str):
    """Delete the reservation of a number."""
    try:
        with get_client(ctx.obj) as client:
            client.reservations.delete(system_id, system_type, number)
    except InventoryError as e:
        print_error(f"Failed to delete reservation: {e}")
        sys.exit(1)

    print_success(f"Deleted reservation for {number}")
