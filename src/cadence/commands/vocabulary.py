"""Command: list the recognized phrases."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from cadence.commands._base import CadenceCommand

if TYPE_CHECKING:
    from cadence.commands._context import AppContext


@click.command(cls=CadenceCommand, examples="  cadence vocabulary\n  cadence -q vocabulary")
@click.pass_obj
def vocabulary(app: AppContext) -> None:
    """List every phrase the recognizer understands, highest priority first."""
    app.emit(app.schedule.vocabulary())
