"""Options shared by several command groups."""

import click

from numinv import SystemType


def system_id_option(f):
    return click.option("--system-id", "-s", type=int, required=True,
                        help="Numeric ID of the telephony system")(f)


def system_type_option(f):
    return click.option("--system-type", "-t", required=True,
                        type=click.Choice([t.value for t in SystemType], case_sensitive=False),
                        callback=lambda ctx, param, value: SystemType.parse(value),
                        help="Platform of the system")(f)
