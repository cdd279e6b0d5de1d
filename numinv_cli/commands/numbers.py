"""Number discovery and normalization commands."""

import sys

import click

from numinv import InventoryError, SystemType, parse_number
from numinv.config import Limits

from ..utils.client import get_client
from ..utils.output import format_output, print_error, print_warning
from .options import system_id_option, system_type_option


@click.group()
def numbers():
    """Discover available numbers.

    \b
    Examples:
      numinv numbers available --system-id 3 --system-type Cisco --range Main
      numinv numbers normalize "(320) 555-1011"
    """
    pass


@numbers.command("available")
@system_id_option
@system_type_option
@click.option("--range", "-r", "range_name", required=True, help="Range to draw from")
@click.option("--count", "-n", type=click.IntRange(1, Limits.MAX_AVAILABLE_COUNT),
              default=Limits.DEFAULT_AVAILABLE_COUNT, help="Number of candidates")
@click.pass_context
def available(
    ctx: click.Context,
    system_id: int,
    system_type: SystemType,
    range_name: str,
    count: int,
):
    """List available numbers in a range, in server order."""
    try:
        with get_client(ctx.obj) as client:
            result = client.available.query(system_id, system_type, range_name, count=count)
    except InventoryError as e:
        print_error(f"Failed to query available numbers: {e}")
        sys.exit(1)

    format_output(result, ctx.obj["output"])


@numbers.command("normalize")
@click.argument("raw_numbers", nargs=-1, required=True)
@click.pass_context
def normalize(ctx: click.Context, raw_numbers):
    """Convert raw numbers to E.164. Works offline."""
    results = [parse_number(raw) for raw in raw_numbers]
    for result in results:
        if result.diagnostic is not None:
            print_warning(f"{result.raw}: {result.diagnostic.value}")

    format_output(
        [
            {
                "raw": r.raw,
                "canonical": r.canonical,
                "diagnostic": r.diagnostic.value if r.diagnostic else None,
            }
            for r in results
        ],
        ctx.obj["output"],
    )
