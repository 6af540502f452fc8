# Copyright (c) 2026 Ramin Firoozye
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Option sets for :func:`dotenvkit.load` and :func:`dotenvkit.parse`.

``LoadOptions`` may overload existing variables and check required keys.
``ParseOptions`` never touches the environment, so it has neither field.
"""

from __future__ import annotations

from dataclasses import dataclass, field

DEFAULT_FILES = (".env",)
DEFAULT_PATHS = (".",)


def environment_files(environment: str) -> list[str]:
    """Return the file suite for *environment*, highest priority first.

    ``.env.<environment>.local``, ``.env.local``, ``.env.<environment>``,
    ``.env``. The shared ``.env.local`` is left out for ``test`` so test runs
    stay reproducible.
    """
    if environment == "test":
        return [f".env.{environment}.local", f".env.{environment}", ".env"]
    return [
        f".env.{environment}.local",
        ".env.local",
        f".env.{environment}",
        ".env",
    ]


@dataclass
class ParseOptions:
    """Sources to read for :func:`dotenvkit.parse`."""

    files: list[str] = field(default_factory=lambda: list(DEFAULT_FILES))
    paths: list[str] = field(default_factory=lambda: list(DEFAULT_PATHS))
    all_files_required: bool = False


@dataclass
class LoadOptions:
    """Sources and apply rules for :func:`dotenvkit.load`."""

    files: list[str] = field(default_factory=lambda: list(DEFAULT_FILES))
    paths: list[str] = field(default_factory=lambda: list(DEFAULT_PATHS))
    overload: bool = False
    required_keys: list[str] = field(default_factory=list)
    all_files_required: bool = False
