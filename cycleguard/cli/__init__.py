"""
cycleguard/cli/__init__.py

cycleguard CLI - root Click command group.

Registered in pyproject.toml as:

    [project.scripts]
    cycleguard = "cycleguard.cli:cli"

Adding a new command:
    1. Create cycleguard/cli/your_command.py with a @click.command()
    2. Import it here
    3. cli.add_command(your_command)
"""

import click

from cycleguard.cli.config import config_command
from cycleguard.cli.demo import demo_command


@click.group()
@click.version_option(package_name="cycleguard")
def cli() -> None:
    """
    cycleguard - deterministic release for reference cycles.

    \b
    Commands:
      config    Show the configuration new guards will use.
      demo      Watch a guard break a parent/child cycle.

    \b
    Quick start:
      cycleguard demo
      cycleguard demo --dismiss
      cycleguard config --format json
    """
    pass


cli.add_command(config_command)
cli.add_command(demo_command)
