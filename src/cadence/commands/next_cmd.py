"""Command: next occurrence of a rule."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

import click

from cadence.commands._base import AFTER_OPTION, CadenceCommand

if TYPE_CHECKING:
    from cadence.commands._context import AppContext


@click.command(
    "next",
    cls=CadenceCommand,
    examples="""\
  cadence next "0 9 * * 1"
  cadence next "0 */2 * * *" --after 2025-03-04T10:15
  cadence -q next "0 9 1 * *" --after 2025-03-15T12:00+01:00""",
)
@click.argument("rule")
@AFTER_OPTION
@click.pass_obj
def next_cmd(app: AppContext, rule: str, after: datetime | None) -> None:
    """Show the first time RULE fires after a reference instant."""
    app.emit(app.schedule.next_occurrence(rule, after))
