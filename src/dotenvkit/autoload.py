# Copyright (c) 2026 Ramin Firoozye
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Load ``.env`` from the current directory on import.

    import dotenvkit.autoload  # noqa: F401

Exits the program with status 1 when loading fails.
"""

from __future__ import annotations

import sys

from dotenvkit.errors import DotenvError
from dotenvkit.sdk import load


def autoload() -> None:
    try:
        load()
    except DotenvError as e:
        sys.stderr.write(f"dotenv failed to autoload: {e}\n")
        sys.exit(1)


autoload()
