"""
cycleguard config - show the effective guard configuration.

Usage:
    cycleguard config                          From the environment
    cycleguard config --config guard.yaml      From a YAML file
    cycleguard config --format json            Machine-readable JSON

Exit codes:
    0  Configuration loaded
    2  Error (unreadable file, malformed YAML, invalid value)
"""

import sys
from typing import Optional

import click

from cycleguard.cli._output import _Color, _emit_error, _emit_json, _row_info
from cycleguard.core.config import GuardConfig, init_mode_from_env
from cycleguard.core.exceptions import GuardConfigError


@click.command(name="config")
@click.option(
    "--config", "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    metavar="PATH",
    help="Load configuration from a YAML file instead of the environment.",
)
@click.option(
    "--format", "fmt",
    type=click.Choice(["human", "json"], case_sensitive=False),
    default="human",
    show_default=True,
    help="Output format.",
)
@click.option(
    "--no-color",
    is_flag=True,
    default=False,
    help="Disable ANSI color output.",
)
def config_command(config_path: Optional[str], fmt: str, no_color: bool) -> None:
    """
    Print the configuration new guards will use.

    \b
    Environment:
      CYCLEGUARD_MODE             relaxed | strict
      CYCLEGUARD_DEFAULT_ACTION   default release operation name
      CYCLEGUARD_CONFIG           path to a YAML config file
    """
    _Color.configure(not no_color)
    fmt = fmt.lower()

    try:
        if config_path:
            config = GuardConfig.from_yaml(config_path)
            source = config_path
        else:
            config = init_mode_from_env()
            source = "environment"
    except GuardConfigError as e:
        _emit_error(str(e), fmt)
        sys.exit(2)

    if fmt == "json":
        payload = config.to_dict()
        payload["source"] = source
        payload["warns_on_implicit_release"] = config.warns_on_implicit_release
        _emit_json(payload)
        return

    click.echo(_Color.bold("cycleguard configuration"))
    click.echo(_row_info("source", source))
    click.echo(_row_info("mode", config.mode.value))
    click.echo(_row_info("default action", config.default_action))
    click.echo(_row_info(
        "implicit release",
        "ResourceWarning" if config.warns_on_implicit_release else "silent",
    ))
