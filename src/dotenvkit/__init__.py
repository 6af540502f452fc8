# Copyright (c) 2026 Ramin Firoozye
# SPDX-License-Identifier: AGPL-3.0-or-later

"""dotenvkit -- load dotenv files into the environment, or parse them into a dict."""

from dotenvkit.env_file import parse_env_file, parse_stream, parse_string
from dotenvkit.errors import (
    DotenvError,
    InvalidPathError,
    MissingKeysError,
    SourceNotFoundError,
    SourceReadError,
    UnsetExportError,
)
from dotenvkit.options import LoadOptions, ParseOptions, environment_files
from dotenvkit.sdk import dotenv_values, load, load_dotenv, parse

__all__ = [
    "__version__",
    "load",
    "parse",
    "load_dotenv",
    "dotenv_values",
    "parse_string",
    "parse_stream",
    "parse_env_file",
    "LoadOptions",
    "ParseOptions",
    "environment_files",
    "DotenvError",
    "UnsetExportError",
    "MissingKeysError",
    "SourceNotFoundError",
    "SourceReadError",
    "InvalidPathError",
]
__version__ = "0.1.0"
