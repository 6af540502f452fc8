# Copyright (c) 2026 Ramin Firoozye
# SPDX-License-Identifier: AGPL-3.0-or-later

"""``dotenvkit check`` -- dry-run a load and verify required keys."""

from __future__ import annotations

import os

import click

from dotenvkit.cli import _load_options, cli, console
from dotenvkit.environ import MappingEnviron
from dotenvkit.errors import DotenvError
from dotenvkit.sdk import load


@cli.command("check")
@click.option(
    "--required", "-r", "required", multiple=True,
    help="Key that must be set after loading (repeatable). Default: required_keys from config.",
)
@click.option("--overload", is_flag=True, help="Let file values replace variables that are already set.")
@click.pass_context
def check(ctx: click.Context, required: tuple[str, ...], overload: bool) -> None:
    """Load the files into a copy of the environment and check required keys.

    The real environment is never modified. All missing keys are reported
    together.
    """
    cfg = ctx.obj["config"]
    keys = list(required) if required else list(cfg.required_keys)
    options = _load_options(ctx, keys, overload or cfg.overload)
    environ = MappingEnviron(os.environ)
    try:
        written = load(options, environ=environ)
    except DotenvError as e:
        raise click.ClickException(str(e))
    console.print(f"[green]OK: {written} variable(s) would be set[/green]")
    if keys:
        console.print(f"[green]All {len(keys)} required key(s) present[/green]")
