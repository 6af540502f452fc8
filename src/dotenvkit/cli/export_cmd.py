# Copyright (c) 2026 Ramin Firoozye
# SPDX-License-Identifier: AGPL-3.0-or-later

"""``dotenvkit export`` and ``dotenvkit unexport`` commands."""

from __future__ import annotations

import json
import re
import sys
from pathlib import Path
from typing import IO

import click

from dotenvkit.cli import HAS_YAML, _parse_values, cli, console

if HAS_YAML:
    import yaml

_PLAIN_VALUE_RE = re.compile(r"[\w.,:/@%+=-]*", re.ASCII)


# ---------------------------------------------------------------------------
# export
# ---------------------------------------------------------------------------

@cli.command("export")
@click.option(
    "--format", "fmt",
    type=click.Choice(["dotenv", "unix", "win", "json", "yaml"]),
    default="dotenv",
    help="Output format: dotenv (default, KEY=value), unix (export KEY=value), win (PowerShell), json, yaml.",
)
@click.option(
    "--output", "-o",
    type=click.Path(exists=False),
    default=None,
    help="Output file path (default: stdout).",
)
@click.pass_context
def export(ctx: click.Context, fmt: str, output: str | None) -> None:
    """Export parsed variables to stdout or file.

    Default format is dotenv (KEY=value, no "export"), quoted so the output
    parses back to the same values. Use --format unix for shell sourcing:
    eval "$(dotenvkit export --format unix)". Use --format win for
    PowerShell: dotenvkit export --format win | Invoke-Expression (or iex).
    """
    pairs = _parse_values(ctx)

    if fmt == "yaml" and not HAS_YAML:
        raise click.ClickException("PyYAML is not installed. Install with: pip install pyyaml")

    if output:
        path = Path(output)
        with path.open("w") as f:
            _write_pairs(f, pairs, fmt)
        console.print(f"[green]Exported {len(pairs)} variable(s) to {output}[/green]")
    else:
        _write_pairs(sys.stdout, pairs, fmt)


def _write_pairs(stream: IO[str], pairs: dict[str, str], fmt: str) -> None:
    if fmt == "json":
        stream.write(json.dumps(pairs, indent=2, sort_keys=True))
        stream.write("\n")
    elif fmt == "yaml":
        yaml.dump(pairs, stream, default_flow_style=False, sort_keys=True)
    else:
        for line in _format_export_lines(pairs, fmt):
            stream.write(line + "\n")


def _dotenv_quote(value: str) -> str:
    """Quote a value so the dotenv parser reads it back unchanged."""
    if _PLAIN_VALUE_RE.fullmatch(value):
        return value
    if "'" not in value:
        return "'" + value + "'"
    escaped = (
        value.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("$", "\\$")
        .replace("\n", "\\n")
        .replace("\r", "\\r")
    )
    return '"' + escaped + '"'


def _shell_escape(value: str) -> str:
    """Escape for Unix sh: single-quote wrapped, internal ' -> '\\''."""
    if not value or any(c in value for c in " \t\n'\"\\$`!#&|;(){}<>*?~"):
        return "'" + value.replace("'", "'\\''") + "'"
    return value


def _powershell_escape(value: str) -> str:
    """Escape for PowerShell single-quoted string: ' -> ''."""
    return value.replace("'", "''")


def _format_export_lines(pairs: dict[str, str], fmt: str) -> list[str]:
    lines: list[str] = []
    for key, value in sorted(pairs.items()):
        if fmt == "unix":
            lines.append(f"export {key}={_shell_escape(value)}")
        elif fmt == "win":
            lines.append(f"$env:{key} = '{_powershell_escape(value)}'")
        else:
            lines.append(f"{key}={_dotenv_quote(value)}")
    return lines


# ---------------------------------------------------------------------------
# unexport
# ---------------------------------------------------------------------------

@cli.command("unexport")
@click.option(
    "--format", "fmt",
    type=click.Choice(["unix", "win"]),
    default="unix",
    help="Output format. Default: unix (unset KEY). Use win for PowerShell (Remove-Item Env:KEY).",
)
@click.pass_context
def unexport(ctx: click.Context, fmt: str) -> None:
    """Output shell unset commands for all variables that export would set.

    Unix: eval "$(dotenvkit export --format unix)" then
    eval "$(dotenvkit unexport)". Win: pipe export to Invoke-Expression, then
    dotenvkit unexport --format win | Invoke-Expression (or iex).
    """
    pairs = _parse_values(ctx)
    for key in sorted(pairs):
        if fmt == "win":
            click.echo(f"Remove-Item Env:{key} -ErrorAction SilentlyContinue")
        else:
            click.echo(f"unset {key}")
