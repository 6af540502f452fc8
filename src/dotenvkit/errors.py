# Copyright (c) 2026 Ramin Firoozye
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Exceptions raised while loading or parsing dotenv sources."""

from __future__ import annotations

from collections.abc import Iterable


class DotenvError(Exception):
    """Base class for every dotenvkit failure."""


class UnsetExportError(DotenvError):
    """A bare ``export NAME`` line names a variable never assigned in the same source.

    ``values`` holds whatever was resolved before validation failed. It is for
    diagnostics only.
    """

    def __init__(self, line: str, values: dict[str, str] | None = None) -> None:
        self.line = line
        self.values = dict(values or {})
        super().__init__(f"line {line} has an unset variable")


class MissingKeysError(DotenvError):
    """One or more required keys are absent after all sources were applied."""

    def __init__(self, keys: Iterable[str]) -> None:
        self.keys = list(keys)
        super().__init__(
            f"missing required configuration key(s): {', '.join(self.keys)}"
        )


class SourceNotFoundError(DotenvError, FileNotFoundError):
    """A source file is missing and all sources were required."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"environment variables file was not found: {path}")


class InvalidPathError(DotenvError, NotADirectoryError):
    """A search path does not exist or is not a directory."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"path does not exist or is not a directory: {path}")


class SourceReadError(DotenvError):
    """A source file exists but could not be read or decoded."""

    def __init__(self, path: str, reason: BaseException) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"could not read environment variables file {path}: {reason}")
