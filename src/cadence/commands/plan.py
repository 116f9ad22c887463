"""Command: phrase to rule to first run, in one step."""

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
  cadence plan every morning
  cadence plan "every 3 hours" --after 2025-03-04T10:15
  cadence --json plan monthly""",
)
@click.argument("text", nargs=-1, required=True)
@AFTER_OPTION
@click.pass_obj
def plan(app: AppContext, text: tuple[str, ...], after: datetime | None) -> None:
    """Recognize a phrase and show when it would first fire."""
    app.emit(app.schedule.plan(" ".join(text), after))
