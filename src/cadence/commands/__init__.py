"""Subcommand modules for cadence.

Provides register_commands() which uses deferred imports to keep
``cadence --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from cadence.commands.next_cmd import next_cmd
    from cadence.commands.parse import parse
    from cadence.commands.plan import plan
    from cadence.commands.upcoming import upcoming
    from cadence.commands.vocabulary import vocabulary

    cli.add_command(parse)
    cli.add_command(next_cmd)
    cli.add_command(upcoming)
    cli.add_command(plan)
    cli.add_command(vocabulary)
