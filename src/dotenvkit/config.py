# Copyright (c) 2026 Ramin Firoozye
# SPDX-License-Identifier: AGPL-3.0-or-later

""".dotenvkit.toml configuration loading.

Searches upward from cwd for ``.dotenvkit.toml`` and merges with CLI flags.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from dotenvkit.options import DEFAULT_FILES, DEFAULT_PATHS, LoadOptions, ParseOptions, environment_files

if sys.version_info >= (3, 11):
    import tomllib
else:
    try:
        import tomllib  # type: ignore[import-not-found]
    except ModuleNotFoundError:
        import tomli as tomllib  # type: ignore[no-redef]

CONFIG_FILE_NAME = ".dotenvkit.toml"


@dataclass
class DotenvkitConfig:
    """Resolved configuration for the current invocation."""

    files: list[str] = field(default_factory=lambda: list(DEFAULT_FILES))
    paths: list[str] = field(default_factory=lambda: list(DEFAULT_PATHS))
    environment: str | None = None
    required_keys: list[str] = field(default_factory=list)
    overload: bool = False
    all_files_required: bool = False
    config_path: Path | None = None

    def resolve_files(self) -> list[str]:
        """Files to read: the environment suite when one is set, else ``files``."""
        if self.environment:
            return environment_files(self.environment)
        return list(self.files)

    def resolve_paths(self) -> list[str]:
        """Search paths; relative entries are taken from the config file's directory."""
        if self.config_path is None:
            return list(self.paths)
        base = self.config_path.parent
        return [str(base / p) for p in self.paths]

    def load_options(self) -> LoadOptions:
        return LoadOptions(
            files=self.resolve_files(),
            paths=self.resolve_paths(),
            overload=self.overload,
            required_keys=list(self.required_keys),
            all_files_required=self.all_files_required,
        )

    def parse_options(self) -> ParseOptions:
        return ParseOptions(
            files=self.resolve_files(),
            paths=self.resolve_paths(),
            all_files_required=self.all_files_required,
        )


def find_config_file(start: Path | None = None) -> Path | None:
    """Walk upward from *start* (default cwd) looking for ``.dotenvkit.toml``."""
    cur = (start or Path.cwd()).resolve()
    while True:
        candidate = cur / CONFIG_FILE_NAME
        if candidate.is_file():
            return candidate
        if cur.parent == cur:
            return None
        cur = cur.parent


def _str_list(section: dict[str, Any], key: str, default: tuple[str, ...] | list[str]) -> list[str]:
    value = section.get(key)
    if value is None:
        return list(default)
    if isinstance(value, str):
        return [value]
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ValueError(f"{CONFIG_FILE_NAME}: '{key}' must be a string or a list of strings")
    return list(value)


def load_config(path: Path | None = None) -> DotenvkitConfig:
    """Load and return config.  Returns defaults if no file found."""
    if path is None:
        path = find_config_file()
    if path is None:
        return DotenvkitConfig()

    raw: dict[str, Any] = tomllib.loads(path.read_text())
    section = raw.get("dotenvkit", {})

    return DotenvkitConfig(
        files=_str_list(section, "files", DEFAULT_FILES),
        paths=_str_list(section, "paths", DEFAULT_PATHS),
        environment=section.get("environment"),
        required_keys=_str_list(section, "required_keys", []),
        overload=bool(section.get("overload", False)),
        all_files_required=bool(section.get("all_files_required", False)),
        config_path=path,
    )
