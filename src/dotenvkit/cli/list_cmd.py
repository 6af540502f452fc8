# Copyright (c) 2026 Ramin Firoozye
# SPDX-License-Identifier: AGPL-3.0-or-later

"""``dotenvkit list`` command."""

from __future__ import annotations

import click
from rich.markup import escape
from rich.table import Table

from dotenvkit.cli import _mask, _parse_values, _resolve_files, cli, console


@cli.command("list")
@click.option("--show-values", is_flag=True, help="Print values unmasked.")
@click.pass_context
def list_keys(ctx: click.Context, show_values: bool) -> None:
    """List parsed variable names with masked values."""
    values = _parse_values(ctx)
    table = Table(title=f"Variables ({', '.join(_resolve_files(ctx))})")
    table.add_column("Key", style="white")
    table.add_column("Value" if show_values else "Value (masked)", style="dim")
    if not values:
        table.add_row("(empty)", "(empty)")
    else:
        for key, val in sorted(values.items()):
            if show_values:
                display = val
            else:
                display = _mask(val) if val else "(empty)"
            table.add_row(escape(key), escape(display))
    console.print(table)
