# Copyright (c) 2026 Ramin Firoozye
# SPDX-License-Identifier: AGPL-3.0-or-later

"""SDK for loading dotenv files into the environment (python-dotenv style)."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from pathlib import Path

from dotenvkit.env_file import parse_string
from dotenvkit.environ import Environ, OsEnviron, merge_envs
from dotenvkit.errors import MissingKeysError
from dotenvkit.options import LoadOptions, ParseOptions
from dotenvkit.sources import build_file_list, read_source

logger = logging.getLogger(__name__)


def _iter_sources(
    files: Iterable[str],
    paths: Iterable[str],
    required: bool,
) -> Iterator[tuple[Path, str]]:
    """Yield ``(path, content)`` for each source that exists, in order."""
    for path in build_file_list(files, paths):
        content = read_source(path, required=required)
        if content is not None:
            yield path, content


def apply_values(values: Mapping[str, str], environ: Environ, overload: bool = False) -> int:
    """Set *values* in *environ*; existing keys are kept unless *overload*.

    Returns the number of keys written.
    """
    count = 0
    for key, value in values.items():
        if not overload and environ.get(key) is not None:
            logger.debug("Keeping existing value for %s", key)
            continue
        environ.set(key, value)
        count += 1
    return count


def compose_values(
    accumulated: Mapping[str, str],
    values: Mapping[str, str],
    environ: Mapping[str, str],
) -> dict[str, str]:
    """Add *values* to *accumulated* without replacing anything already known.

    A key present in *environ* or *accumulated* keeps that value, the
    environment taking precedence. Only new keys take their value from
    *values*.
    """
    current = merge_envs(accumulated, environ)
    result = dict(accumulated)
    for key, value in values.items():
        result[key] = current.get(key, value)
    return result


def check_required_keys(keys: Iterable[str], environ: Mapping[str, str]) -> None:
    """Raise :class:`MissingKeysError` naming every key absent from *environ*."""
    missing = [key for key in keys if key not in environ]
    if missing:
        raise MissingKeysError(missing)


def load(options: LoadOptions | None = None, *, environ: Environ | None = None) -> int:
    """Load dotenv sources into the environment.

    Sources are handled one at a time, in order. Each is parsed against the
    environment as it stands after the previous sources were applied, then
    its keys are set when absent (or always, with ``overload``). Required keys
    are checked once all sources are applied.

    Returns
    -------
    int
        Number of keys written to the environment.

    Raises
    ------
    UnsetExportError, MissingKeysError, SourceNotFoundError, SourceReadError, InvalidPathError
        The first failure stops loading; sources applied before it stay applied.
    """
    opts = options or LoadOptions()
    env = OsEnviron() if environ is None else environ
    total = 0
    for path, content in _iter_sources(opts.files, opts.paths, opts.all_files_required):
        values = parse_string(content, env.snapshot(), overload=opts.overload)
        written = apply_values(values, env, overload=opts.overload)
        logger.debug("Applied %d of %d key(s) from %s", written, len(values), path)
        total += written
    check_required_keys(opts.required_keys, env.snapshot())
    return total


def parse(options: ParseOptions | None = None, *, environ: Environ | None = None) -> dict[str, str]:
    """Parse dotenv sources into a dict without modifying the environment.

    Each source sees the values accumulated from earlier sources, overlaid by
    the environment, during ``$VAR`` substitution. When several sources
    define a key, the first one wins; a key already set in the environment
    keeps the environment's value.
    """
    opts = options or ParseOptions()
    env = OsEnviron() if environ is None else environ
    result: dict[str, str] = {}
    for path, content in _iter_sources(opts.files, opts.paths, opts.all_files_required):
        snapshot = env.snapshot()
        values = parse_string(content, merge_envs(result, snapshot))
        logger.debug("Parsed %d key(s) from %s", len(values), path)
        result = compose_values(result, values, snapshot)
    return result


def load_dotenv(
    *files: str,
    paths: Iterable[str] | None = None,
    override: bool = False,
    required_keys: Iterable[str] | None = None,
    all_files_required: bool = False,
) -> bool:
    """Load dotenv files into os.environ (python-dotenv compatible API).

    Parameters
    ----------
    *files : str
        File names to read, highest priority first. Defaults to ``.env``.
    paths : iterable of str, optional
        Directories to search for *files*. Defaults to the current directory.
    override : bool, default False
        If True, overwrite existing keys in os.environ. If False, only set
        keys that are not already set.
    required_keys : iterable of str, optional
        Keys that must be present in os.environ once loading is done.
    all_files_required : bool, default False
        If True, a missing file is an error instead of being skipped.

    Returns
    -------
    bool
        True if at least one variable was set, False otherwise.

    Examples
    --------
    >>> from dotenvkit import load_dotenv
    >>> load_dotenv()  # .env in the current directory
    True
    >>> load_dotenv(".env.local", ".env", override=True)
    True
    """
    options = LoadOptions(
        overload=override,
        required_keys=list(required_keys or []),
        all_files_required=all_files_required,
    )
    if files:
        options.files = list(files)
    if paths is not None:
        options.paths = list(paths)
    return load(options) > 0


def dotenv_values(
    *files: str,
    paths: Iterable[str] | None = None,
    all_files_required: bool = False,
) -> dict[str, str]:
    """Return dotenv values as a dict without modifying os.environ.

    Same file and path handling as :func:`load_dotenv`.
    """
    options = ParseOptions(all_files_required=all_files_required)
    if files:
        options.files = list(files)
    if paths is not None:
        options.paths = list(paths)
    return parse(options)
