# Copyright (c) 2026 Ramin Firoozye
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Locate and read dotenv source files."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from dotenvkit.errors import InvalidPathError, SourceNotFoundError, SourceReadError

logger = logging.getLogger(__name__)


def build_file_list(files: Iterable[str], paths: Iterable[str]) -> list[Path]:
    """Join every file name onto every search path, paths first.

    Raises :class:`InvalidPathError` when a path does not exist or is not a
    directory, whether or not the files themselves are required.
    """
    names = list(files)
    result: list[Path] = []
    for path in paths:
        directory = Path(path).absolute()
        if not directory.is_dir():
            raise InvalidPathError(str(path))
        result.extend(directory / name for name in names)
    return result


def read_source(path: Path, required: bool = False, encoding: str = "utf-8") -> str | None:
    """Return the text of *path*, or ``None`` when there is nothing to read.

    A missing file raises :class:`SourceNotFoundError` when *required*.
    A directory in place of the file is always skipped. A file that cannot be
    read or decoded raises :class:`SourceReadError`.
    """
    if not path.exists():
        if required:
            raise SourceNotFoundError(str(path))
        logger.debug("Skipping missing source %s", path)
        return None
    if path.is_dir():
        logger.debug("Skipping directory %s", path)
        return None
    try:
        return path.read_text(encoding=encoding)
    except (OSError, UnicodeDecodeError) as e:
        raise SourceReadError(str(path), e) from e
