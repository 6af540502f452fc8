# Copyright (c) 2026 Ramin Firoozye
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Resolve a raw captured value: quotes, escapes and ``$VAR`` substitution.

Quoting decides the pipeline:
  - ``"double"``: ``\\n``/``\\r`` become real newline/carriage return, then
    backslash escapes are removed, then variables are expanded
  - unquoted: backslash escapes are removed, then variables are expanded
  - ``'single'``: used verbatim
"""

from __future__ import annotations

import re
from collections.abc import Mapping

# Re-examines a captured value to find the quote character that closes it.
_QUOTE_RE = re.compile(
    r"""
    (?:^|\A)
    (?:
        '(?:\\'|[^'])*          # single-quoted body
      | "(?:\\"|[^"])*          # double-quoted body
      | (?:[^ \t\n\f\r]|[ \t]+\w)+  # unquoted run
    )?
    (["'])?                     # closing quote
    (?:$|\Z)
    """,
    re.VERBOSE | re.MULTILINE | re.ASCII,
)

_UNESCAPE_RE = re.compile(r"\\([^$])")

_SUBSTITUTION_RE = re.compile(
    r"""
    (\\)?           # escaped marker
    \$
    \{?(\w+)?\}?    # $NAME or ${NAME}
    """,
    re.VERBOSE | re.ASCII,
)

SINGLE_QUOTE = "'"
DOUBLE_QUOTE = '"'


def detect_quote(value: str) -> str:
    """Return the quote character closing *value*, or ``""`` when unquoted."""
    m = _QUOTE_RE.search(value)
    if m is None or m.group(1) is None:
        return ""
    return m.group(1)


def strip_quotes(value: str, quote: str) -> str:
    """Remove one *quote* character from each end of *value*."""
    if not quote:
        return value
    if value.startswith(quote):
        value = value[1:]
    if value.endswith(quote):
        value = value[:-1]
    return value


def unescape(value: str) -> str:
    """Drop the backslash from ``\\X`` for every ``X`` except ``$``."""
    return _UNESCAPE_RE.sub(r"\1", value)


def expand_variables(value: str, context: Mapping[str, str]) -> str:
    """Expand ``$NAME`` and ``${NAME}`` using *context*.

    Undefined names expand to the empty string. ``\\$NAME`` yields a literal
    ``$NAME``, and a ``$`` with no name after it is left alone.
    """

    def _replace(m: re.Match[str]) -> str:
        escaped, name = m.group(1), m.group(2)
        if escaped:
            return m.group(0)[1:]
        if name is None:
            return m.group(0)
        return context.get(name, "")

    return _SUBSTITUTION_RE.sub(_replace, value)


def resolve_value(raw: str, context: Mapping[str, str]) -> str:
    """Turn a raw captured value into its final string."""
    value = raw.strip(" \t\f")
    quote = detect_quote(value)
    value = strip_quotes(value, quote)
    if quote == SINGLE_QUOTE:
        return value
    if quote == DOUBLE_QUOTE:
        value = value.replace("\\n", "\n").replace("\\r", "\r")
    return expand_variables(unescape(value), context)
