# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Configuration for the command line front-end.

Database file resolution, in order of precedence:

1. The ``--file`` command line option
2. The ``MULTIKEY_DB_FILE`` environment variable
3. ``<data dir>/KV_DB/.kv.db`` where the data dir follows the platform:
   ``$XDG_DATA_HOME`` or ``~/.local/share`` on Linux,
   ``~/Library/Application Support`` on macOS, ``%APPDATA%`` on Windows
4. ``.kv.db`` in the current directory, if the data dir cannot be created
"""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

from .key import DEFAULT_DIVIDER

logger = logging.getLogger(__name__)

DB_FILE_NAME = '.kv.db'
DATA_SUBDIR = 'KV_DB'
ENV_DB_FILE = 'MULTIKEY_DB_FILE'

# 'trace' has no stdlib level and maps to DEBUG
LOG_LEVELS: dict[str, int] = {
    'error': logging.ERROR,
    'warn': logging.WARNING,
    'info': logging.INFO,
    'debug': logging.DEBUG,
    'trace': logging.DEBUG,
}


def data_dir(environ: Mapping[str, str] | None = None) -> Path:
    """Return the per-user data directory for the current platform."""
    if environ is None:
        environ = os.environ
    home = Path.home()
    if sys.platform.startswith('win'):
        appdata = environ.get('APPDATA')
        return Path(appdata) if appdata else home / 'AppData' / 'Roaming'
    if sys.platform == 'darwin':
        return home / 'Library' / 'Application Support'
    xdg = environ.get('XDG_DATA_HOME')
    return Path(xdg) if xdg else home / '.local' / 'share'


def default_db_file(environ: Mapping[str, str] | None = None) -> Path:
    """Resolve the database file used when no --file option is given.

    Args:
        environ: Environment mapping, defaults to os.environ.

    Returns:
        Path to the database file. Its directory exists unless the
        fallback in the current directory was chosen.
    """
    if environ is None:
        environ = os.environ
    override = environ.get(ENV_DB_FILE)
    if override:
        return Path(override)

    directory = data_dir(environ) / DATA_SUBDIR
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.warning("Cannot create %s (%s), using %s", directory, e, DB_FILE_NAME)
        return Path(DB_FILE_NAME)
    return directory / DB_FILE_NAME


@dataclass
class DBConfig:
    """Settings for one command line invocation.

    Attributes:
        db_file: Database file to load and save.
        divider: Divider used to parse keys typed by the user.
        log_level: One of LOG_LEVELS, or None to disable logging output.
    """

    db_file: Path = field(default_factory=default_db_file)
    divider: str = DEFAULT_DIVIDER
    log_level: str | None = None

    def __post_init__(self) -> None:
        self.db_file = Path(self.db_file)
        if self.log_level is not None and self.log_level not in LOG_LEVELS:
            raise ValueError(
                f"log_level must be one of {sorted(LOG_LEVELS)}, not {self.log_level!r}"
            )

    def configure_logging(self) -> None:
        """Set up root logging for the chosen level.

        Without a level nothing is configured and the package's NullHandler
        keeps log output off.
        """
        if self.log_level is None:
            return
        logging.basicConfig(
            level=LOG_LEVELS[self.log_level],
            format="%(levelname)s %(name)s: %(message)s",
        )
