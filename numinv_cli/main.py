"""numinv CLI - Main entry point."""

import sys
from typing import Optional

import click
from keyring.errors import KeyringError

from numinv import InventoryError

from . import __version__
from .utils.config import Config, load_config, save_config, clear_config
from .utils.client import get_client
from .utils.output import print_success, print_error
from .commands import (
    systems,
    ranges,
    numbers,
    reservations,
    config as config_cmd,
)


@click.group()
@click.version_option(version=__version__, prog_name="numinv")
@click.option("--api-key", envvar="NUMINV_API_KEY", help="API key for authentication")
@click.option("--username", envvar="NUMINV_USERNAME", help="Account name for token login")
@click.option("--password", envvar="NUMINV_PASSWORD", help="Account password for token login")
@click.option("--base-url", envvar="NUMINV_BASE_URL", help="Inventory server URL")
@click.option("--output", "-o", type=click.Choice(["json", "yaml"]), default=None,
              help="Output format")
@click.option("--insecure", is_flag=True, help="Skip TLS certificate verification")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(
    ctx: click.Context,
    api_key: Optional[str],
    username: Optional[str],
    password: Optional[str],
    base_url: Optional[str],
    output: Optional[str],
    insecure: bool,
    debug: bool,
):
    """numinv - Telephone number inventory from the command line.

    \b
    Examples:
      numinv ranges list --system-id 3
      numinv numbers available --system-id 3 --system-type Cisco --range Main
      numinv reservations create --system-id 3 --system-type Cisco \\
          --range Main --reason "New hire" --never-expires
    """
    ctx.ensure_object(dict)

    # Options and environment win over the config file
    config = load_config()
    if not api_key and not username:
        api_key = config.api_key
        username = config.username
    if not password:
        password = config.password

    ctx.obj["api_key"] = api_key
    ctx.obj["username"] = username
    ctx.obj["password"] = password
    ctx.obj["base_url"] = base_url or config.base_url
    ctx.obj["output"] = output or config.default_output
    ctx.obj["verify_ssl"] = not insecure
    ctx.obj["match_conflict_message"] = config.match_conflict_message
    ctx.obj["debug"] = debug
    ctx.obj["config"] = config


@cli.command("login")
@click.option("--api-key", "-k", help="Your inventory API key")
@click.option("--username", "-u", help="Account name (token login)")
@click.option("--password", "-p", help="Account password (token login)")
@click.option("--base-url", required=True, help="Inventory server URL")
@click.pass_context
def login(
    ctx: click.Context,
    api_key: Optional[str],
    username: Optional[str],
    password: Optional[str],
    base_url: str,
):
    """Verify credentials and store them.

    Settings go to the user config directory, secrets to the OS keyring.
    """
    if not api_key and not (username and password):
        print_error("Provide --api-key, or --username and --password.")
        sys.exit(1)

    settings = dict(ctx.obj, api_key=api_key, username=username, password=password,
                    base_url=base_url)
    try:
        with get_client(settings) as client:
            found = client.systems.list()

        config = ctx.obj["config"]
        save_config(Config(
            base_url=base_url,
            username=username,
            default_output=config.default_output,
            match_conflict_message=config.match_conflict_message,
            api_key=api_key,
            password=password,
        ))
    except (InventoryError, KeyringError) as e:
        print_error(f"Login failed: {e}")
        sys.exit(1)

    print_success(f"Logged in to {base_url} ({len(found)} systems visible)")


@cli.command("logout")
def logout():
    """Remove stored settings and credentials."""
    if clear_config():
        print_success("Logged out successfully")
    else:
        print_success("Not logged in")


# Register command groups
cli.add_command(systems)
cli.add_command(ranges)
cli.add_command(numbers)
cli.add_command(reservations)
cli.add_command(config_cmd)


def main():
    """Main entry point for the CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()
