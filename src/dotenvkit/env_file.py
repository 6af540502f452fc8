# Copyright (c) 2026 Ramin Firoozye
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Parse dotenv content into key-value dicts.

Handles:
  - blank lines, ``#`` comment lines and inline comments
  - ``export KEY=VALUE`` prefix and YAML-style ``KEY: VALUE``
  - single-quoted (literal), double-quoted and unquoted values
  - quoted values spanning several lines
  - ``$VAR`` / ``${VAR}`` substitution from earlier keys and the environment
  - bare ``export KEY`` lines, which must name a key assigned in the same source

Lines that are not assignments are skipped silently.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from pathlib import Path
from typing import IO

from dotenvkit.environ import OsEnviron, substitution_context
from dotenvkit.errors import UnsetExportError
from dotenvkit.expand import resolve_value

# Whitespace is [ \t\n\f\r]; a vertical tab is not whitespace in dotenv files.
ASSIGNMENT_RE = re.compile(
    r"""
    (?:^|\A)
    [ \t\n\f\r]*
    (?:export[ \t\n\f\r]+)?             # optional export prefix
    ([\w.]+)                            # key
    (?:
        [ \t\n\f\r]*=[ \t\n\f\r]*?      # separator: =
      | :[ \t\n\f\r]+?                  # or YAML-style ': '
    )
    (                                   # raw value, first alternative wins
        [ \t\n\f\r]*'(?:\\'|[^'])*'
      | [ \t\n\f\r]*"(?:\\"|[^"])*"
      | (?:[^ \t\n\f\r]|[ \t]+\w)+
    )?
    [ \t\n\f\r]*?
    (?:\#.*)?                           # inline comment
    (?:$|\Z)
    """,
    re.VERBOSE | re.MULTILINE | re.ASCII,
)

BARE_EXPORT_RE = re.compile(
    r"""
    (?:^|\A)
    [ \t\n\f\r]*
    export[ \t\n\f\r]+
    ([\w.]+)
    [ \t\n\f\r]*
    (?:\#.*)?
    (?:$|\Z)
    """,
    re.VERBOSE | re.MULTILINE | re.ASCII,
)


def match_assignments(content: str) -> list[re.Match[str]]:
    """Return every assignment in *content*, in source order."""
    return list(ASSIGNMENT_RE.finditer(content))


def leftover_text(content: str, matches: list[re.Match[str]]) -> str:
    """Return *content* with the span of every match cut out."""
    pieces: list[str] = []
    pos = 0
    for m in matches:
        pieces.append(content[pos:m.start()])
        pos = m.end()
    pieces.append(content[pos:])
    return "".join(pieces)


def find_bare_exports(leftover: str) -> list[tuple[str, str]]:
    """Return ``(name, line)`` for each ``export NAME`` declaration in *leftover*."""
    return [(m.group(1), m.group(0).strip()) for m in BARE_EXPORT_RE.finditer(leftover)]


def parse_string(
    content: str,
    environ: Mapping[str, str] | None = None,
    overload: bool = False,
) -> dict[str, str]:
    """Parse dotenv *content* and return its key-value pairs.

    Parameters
    ----------
    content : str
        Raw text of one source.
    environ : mapping, optional
        Environment used for ``$VAR`` lookups. Defaults to a snapshot of
        ``os.environ``.
    overload : bool, default False
        If True, keys parsed earlier in *content* win over *environ* during
        substitution. If False, *environ* wins.

    Raises
    ------
    UnsetExportError
        A bare ``export NAME`` line names a key not assigned in *content*.
        The error carries the values parsed so far.
    """
    env = OsEnviron().snapshot() if environ is None else environ
    matches = match_assignments(content)

    values: dict[str, str] = {}
    context = substitution_context(values, env, overload)
    for m in matches:
        values[m.group(1)] = resolve_value(m.group(2) or "", context)

    for name, line in find_bare_exports(leftover_text(content, matches)):
        if name not in values:
            raise UnsetExportError(line, values)
    return values


def parse_stream(
    stream: IO[str],
    environ: Mapping[str, str] | None = None,
    overload: bool = False,
) -> dict[str, str]:
    """Parse dotenv content read from a text stream."""
    return parse_string(stream.read(), environ=environ, overload=overload)


def parse_env_file(
    path: str | Path,
    environ: Mapping[str, str] | None = None,
    overload: bool = False,
    encoding: str = "utf-8",
) -> dict[str, str]:
    """Read a .env file and return a dict of key-value pairs."""
    return parse_string(
        Path(path).read_text(encoding=encoding), environ=environ, overload=overload
    )
