"""Command: list several upcoming occurrences of a rule."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

import click

from cadence.commands._base import AFTER_OPTION, CadenceCommand

if TYPE_CHECKING:
    from cadence.commands._context import AppContext


@click.command(
    cls=CadenceCommand,
    examples="""\
  cadence upcoming "0 9 * * *"
  cadence upcoming "0 */6 * * *" -n 10
  cadence -q upcoming "0 9 * * 5" --after 2025-03-04T00:00""",
)
@click.argument("rule")
@AFTER_OPTION
@click.option(
    "-n",
    "--count",
    type=click.IntRange(min=1),
    default=None,
    help="How many occurrences (default from [schedule] upcoming_count).",
)
@click.pass_obj
def upcoming(app: AppContext, rule: str, after: datetime | None, count: int | None) -> None:
    """List the next occurrences of RULE in order."""
    app.emit(app.schedule.upcoming(rule, after, count))
