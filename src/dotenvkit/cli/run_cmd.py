# Copyright (c) 2026 Ramin Firoozye
# SPDX-License-Identifier: AGPL-3.0-or-later

"""``dotenvkit run`` -- spawn a command with dotenv values in its environment."""

from __future__ import annotations

import os
import subprocess

import click

from dotenvkit.cli import _parse_values, cli, console


@cli.command(
    "run",
    context_settings={"ignore_unknown_options": True, "allow_interspersed_args": False},
)
@click.argument("command", nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def run(ctx: click.Context, command: tuple[str, ...]) -> None:
    """Run COMMAND with the parsed variables added to its environment.

    Values already set in the environment are kept. Without a COMMAND the
    files are only parsed, which checks them for errors.

    \b
    Examples:
      dotenvkit -f .env -f .another.env run -- some_command -a args
      dotenvkit -e development -p ../devcfg run -- some_command -a args
    """
    values = _parse_values(ctx)
    if not command:
        console.print(f"[green]Parsed {len(values)} variable(s)[/green]")
        return

    env = {**os.environ, **values}
    try:
        completed = subprocess.run(list(command), env=env, cwd=os.getcwd())
    except OSError as e:
        raise click.ClickException(f"encountered an error spawning command: {e}")
    ctx.exit(completed.returncode)
