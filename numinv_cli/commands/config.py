"""Configuration management commands."""

import sys

import click
from keyring.errors import KeyringError

from ..utils.config import load_config, save_config, get_config_path
from ..utils.output import format_output, print_success, print_error

SETTABLE = {
    "base_url": str,
    "username": str,
    "default_output": click.Choice(["json", "yaml"]),
    "match_conflict_message": bool,
}


@click.group()
def config():
    """Manage CLI configuration.

    \b
    Examples:
      numinv config show
      numinv config set default_output yaml
      numinv config path
    """
    pass


@config.command("show")
@click.pass_context
def show_config(ctx: click.Context):
    """Show the stored configuration. Secrets are masked."""
    cfg = load_config()
    data = {
        "config_path": str(get_config_path()),
        "base_url": cfg.base_url,
        "username": cfg.username,
        "default_output": cfg.default_output,
        "match_conflict_message": cfg.match_conflict_message,
        "api_key": _mask(cfg.api_key),
        "password": "****" if cfg.password else None,
    }
    format_output(data, ctx.obj["output"])


@config.command("set")
@click.argument("key", type=click.Choice(sorted(SETTABLE)))
@click.argument("value")
def set_config(key: str, value: str):
    """Set a configuration value."""
    param_type = click.types.convert_type(SETTABLE[key])
    try:
        converted = param_type.convert(value, None, None)
    except click.BadParameter as e:
        print_error(f"Invalid value for {key}: {e.message}")
        sys.exit(1)

    cfg = load_config()
    setattr(cfg, key, converted)
    try:
        save_config(cfg)
    except KeyringError as e:
        print_error(f"Failed to save configuration: {e}")
        sys.exit(1)

    print_success(f"Set {key} = {converted}")


@config.command("path")
def config_path():
    """Print the configuration file path."""
    click.echo(str(get_config_path()))


def _mask(secret):
    if not secret:
        return None
    if len(secret) <= 12:
        return "****"
    return secret[:4] + "..." + secret[-4:]
