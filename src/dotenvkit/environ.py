# Copyright (c) 2026 Ramin Firoozye
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Access to the process environment and merge rules for substitution contexts.

All reads and writes of the host environment go through an :class:`Environ`
so the loader can be exercised against a plain dict in tests.
"""

from __future__ import annotations

import os
from collections import ChainMap
from collections.abc import Mapping
from typing import Protocol


class Environ(Protocol):
    """Minimal environment table interface used by the loader."""

    def snapshot(self) -> dict[str, str]:
        """Return a copy of every variable as it is right now."""
        ...

    def get(self, key: str) -> str | None:
        ...

    def set(self, key: str, value: str) -> None:
        ...


class OsEnviron:
    """The real process environment (``os.environ``)."""

    def snapshot(self) -> dict[str, str]:
        return dict(os.environ)

    def get(self, key: str) -> str | None:
        return os.environ.get(key)

    def set(self, key: str, value: str) -> None:
        os.environ[key] = value


class MappingEnviron:
    """An environment backed by a dict; writes land in ``data``."""

    def __init__(self, data: Mapping[str, str] | None = None) -> None:
        self.data: dict[str, str] = dict(data or {})

    def snapshot(self) -> dict[str, str]:
        return dict(self.data)

    def get(self, key: str) -> str | None:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value


def merge_envs(*envs: Mapping[str, str]) -> dict[str, str]:
    """Merge mappings left to right; later mappings win."""
    merged: dict[str, str] = {}
    for env in envs:
        merged.update(env)
    return merged


def substitution_context(
    parsed: Mapping[str, str],
    environ: Mapping[str, str],
    overload: bool = False,
) -> ChainMap[str, str]:
    """Build the lookup table used to expand ``$VAR`` references.

    Without *overload* the environment wins over values parsed so far, so a
    file never observes its own value for a variable that is already set.
    With *overload* the parsed values win. The result is a live view, so
    values added to *parsed* later are visible through it.
    """
    if overload:
        return ChainMap(parsed, environ)  # type: ignore[arg-type]
    return ChainMap(environ, parsed)  # type: ignore[arg-type]
