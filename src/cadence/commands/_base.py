"""Custom Click base classes and parameter types.

CadenceCommand and CadenceGroup accept an ``examples`` parameter.  When
``--examples`` is passed, the command prints usage examples and exits,
keeping ``--help`` concise.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

import click


def _add_examples_option(cmd: click.Command, examples: str) -> None:
    """Attach an eager ``--examples`` flag to a Click command or group."""

    def show_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(examples)
        ctx.exit(0)

    cmd.params.append(
        click.Option(
            ["--examples"],
            is_flag=True,
            expose_value=False,
            is_eager=True,
            callback=show_examples,
            help="Show usage examples.",
        )
    )


class CadenceCommand(click.Command):
    """Click Command subclass that supports an ``--examples`` flag."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            _add_examples_option(self, examples)


class CadenceGroup(click.Group):
    """Click Group whose subcommands default to :class:`CadenceCommand`."""

    command_class = CadenceCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            _add_examples_option(self, examples)


class IsoDateTime(click.ParamType):
    """ISO-8601 timestamp, e.g. ``2025-03-04T10:15`` or ``2025-03-04T10:15+01:00``.

    Naive values stay naive and are read as local wall-clock time.
    """

    name = "datetime"

    def convert(
        self, value: Any, param: click.Parameter | None, ctx: click.Context | None
    ) -> datetime:
        if isinstance(value, datetime):
            return value
        try:
            return datetime.fromisoformat(value)
        except ValueError:
            self.fail(f"{value!r} is not an ISO-8601 timestamp", param, ctx)


ISO_DATETIME = IsoDateTime()

AFTER_OPTION = click.option(
    "--after",
    type=ISO_DATETIME,
    default=None,
    help="Reference instant (ISO-8601). Defaults to now.",
)
