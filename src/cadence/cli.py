"""Root CLI group for cadence with global flags and command registration."""

from __future__ import annotations

import click

from cadence import __version__
from cadence.commands import register_commands
from cadence.commands._base import CadenceGroup
from cadence.commands._context import AppContext
from cadence.config.settings import CadenceSettings


@click.group(
    cls=CadenceGroup,
    invoke_without_command=True,
    examples="""\
  cadence parse every friday
  cadence next "0 9 * * 5"
  cadence upcoming "0 */4 * * *" -n 6
  cadence plan every evening""",
)
@click.version_option(version=__version__, prog_name="cadence")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """cadence — recurring reminder rules from plain English."""
    settings = CadenceSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
