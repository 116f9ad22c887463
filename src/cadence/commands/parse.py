"""Command: recognize a recurrence phrase."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from cadence.commands._base import CadenceCommand

if TYPE_CHECKING:
    from cadence.commands._context import AppContext


@click.command(
    cls=CadenceCommand,
    examples="""\
  cadence parse every monday
  cadence parse "every 6 hours"
  cadence -q parse daily
  cadence --json parse "every evening" """,
)
@click.argument("text", nargs=-1, required=True)
@click.pass_obj
def parse(app: AppContext, text: tuple[str, ...]) -> None:
    """Turn a phrase like "every friday" into a recurrence rule."""
    app.emit(app.schedule.recognize(" ".join(text)))
