# Copyright (c) 2026 Ramin Firoozye
# SPDX-License-Identifier: AGPL-3.0-or-later

"""dotenvkit CLI -- run commands with dotenv files, or export/inspect them.

The CLI is split into per-command modules under this package.  The ``cli``
click group and shared helpers (``console``, ``_parse_options``,
``_parse_values``, etc.) live here so every command module can import them.
"""

from __future__ import annotations

import logging
import os

import click
from rich.console import Console
from rich.logging import RichHandler

from dotenvkit import __version__
from dotenvkit.config import DotenvkitConfig, load_config
from dotenvkit.errors import DotenvError
from dotenvkit.options import LoadOptions, ParseOptions, environment_files
from dotenvkit.sdk import parse

try:
    import yaml
    HAS_YAML = True
except ImportError:
    HAS_YAML = False

console = Console(stderr=True)


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------

def _mask(value: str) -> str:
    if len(value) <= 6:
        return "****"
    return value[:3] + "****" + value[-3:]


def _resolve_files(ctx: click.Context) -> list[str]:
    """Pick the files to read.

    Order: --env, --file, DOTENVKIT_ENV, then config (environment, then files).
    """
    cfg: DotenvkitConfig = ctx.obj["config"]
    if ctx.obj["env_name"]:
        return environment_files(ctx.obj["env_name"])
    if ctx.obj["files"]:
        return list(ctx.obj["files"])
    env_name = os.environ.get("DOTENVKIT_ENV")
    if env_name:
        return environment_files(env_name)
    return cfg.resolve_files()


def _resolve_paths(ctx: click.Context) -> list[str]:
    cfg: DotenvkitConfig = ctx.obj["config"]
    if ctx.obj["paths"]:
        return list(ctx.obj["paths"])
    return cfg.resolve_paths()


def _parse_options(ctx: click.Context) -> ParseOptions:
    return ParseOptions(
        files=_resolve_files(ctx),
        paths=_resolve_paths(ctx),
        all_files_required=ctx.obj["all_files_required"],
    )


def _load_options(
    ctx: click.Context,
    required_keys: list[str],
    overload: bool,
) -> LoadOptions:
    return LoadOptions(
        files=_resolve_files(ctx),
        paths=_resolve_paths(ctx),
        overload=overload,
        required_keys=required_keys,
        all_files_required=ctx.obj["all_files_required"],
    )


def _parse_values(ctx: click.Context) -> dict[str, str]:
    """Parse the configured sources, turning failures into click errors."""
    try:
        return parse(_parse_options(ctx))
    except DotenvError as e:
        raise click.ClickException(f"loading environment files errored: {e}")


def _setup_logging(verbose: bool) -> None:
    if not verbose:
        return
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


# ---------------------------------------------------------------------------
# Top-level click group
# ---------------------------------------------------------------------------

@click.group()
@click.option(
    "--file", "-f", "files", multiple=True,
    help="File with KEY=value pairs to read (repeatable). Default: from config, else .env.",
)
@click.option(
    "--env", "-e", "env_name", default=None,
    help="Environment name; reads the .env.<env>.local/.env.local/.env.<env>/.env suite.",
)
@click.option(
    "--path", "-p", "paths", multiple=True,
    help="Directory to search for files (repeatable). Default: from config, else current directory.",
)
@click.option("--all-files-required", is_flag=True, help="Fail when a file is missing.")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output.")
@click.version_option(__version__)
@click.pass_context
def cli(
    ctx: click.Context,
    files: tuple[str, ...],
    env_name: str | None,
    paths: tuple[str, ...],
    all_files_required: bool,
    verbose: bool,
) -> None:
    """Load dotenv files into a command's environment, or export/inspect them."""
    _setup_logging(verbose)
    cfg = load_config()
    ctx.ensure_object(dict)
    ctx.obj["config"] = cfg
    ctx.obj["files"] = files
    ctx.obj["env_name"] = env_name
    ctx.obj["paths"] = paths
    ctx.obj["all_files_required"] = all_files_required or cfg.all_files_required


# ---------------------------------------------------------------------------
# Register all command modules (import triggers @cli.command registration)
# ---------------------------------------------------------------------------

from dotenvkit.cli import (  # noqa: E402, F401
    run_cmd,
    export_cmd,
    list_cmd,
    check_cmd,
)
