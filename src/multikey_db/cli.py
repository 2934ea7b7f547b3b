# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Command line front-end for MultiKey DB.

Usage:
    multikey-db [-f FILE] [-l LEVEL] add -k work.team.git -v github.com/example-repo
    multikey-db get -k work.team
    multikey-db remove -k work.team.git
    multikey-db print
    multikey-db -i

The database file is loaded before the command runs and saved again after
commands that change it.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Sequence

from . import __version__, commands
from .config import LOG_LEVELS, DBConfig
from .exceptions import MultiKeyDBError
from .key import MultiKey
from .prompt import run_prompt
from .serializer import load_file, save_file

logger = logging.getLogger(__name__)

ADD = 'add'
GET = 'get'
REMOVE = 'remove'
PRINT = 'print'


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser with its subcommands."""
    parser = argparse.ArgumentParser(
        prog='multikey-db',
        description='A Command Line Key Value Store Database',
    )
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument(
        '-i', '--interactive', action='store_true',
        help='Interactive Database mode',
    )
    parser.add_argument(
        '-f', '--file', metavar='FILE',
        help='Sets the db file for database',
    )
    parser.add_argument(
        '-l', '--log', choices=list(LOG_LEVELS),
        help='Sets the level of logging to output, default is off',
    )

    subparsers = parser.add_subparsers(dest='command', metavar='SUBCOMMAND')

    key_help = 'Multi key, components delimited by period: This.Is.A.Multi.Key'

    add_parser = subparsers.add_parser(ADD, help='Add new key value to database')
    add_parser.add_argument('-k', '--key', required=True, help=key_help)
    add_parser.add_argument('-v', '--value', required=True, help='Value to be added')

    get_parser = subparsers.add_parser(GET, help='Get value(s) from the database')
    get_parser.add_argument('-k', '--key', required=True, help=key_help)

    remove_parser = subparsers.add_parser(REMOVE, help='Remove value from the database')
    remove_parser.add_argument('-k', '--key', required=True, help=key_help)

    subparsers.add_parser(PRINT, help='Print Database to standard out')

    return parser


def _make_config(args: argparse.Namespace) -> DBConfig:
    if args.file:
        return DBConfig(db_file=args.file, log_level=args.log)
    return DBConfig(log_level=args.log)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command line interface.

    Args:
        argv: Arguments without the program name, defaults to sys.argv[1:].

    Returns:
        Process exit status.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None and not args.interactive:
        parser.print_help()
        return 0

    config = _make_config(args)
    config.configure_logging()
    logger.debug("Database File Location: %s", config.db_file)

    try:
        store = load_file(config.db_file)
    except MultiKeyDBError as e:
        logger.error("Database creation error: %s", e)
        print(f"Database creation error: {e}", file=sys.stderr)
        return 1

    modified = False
    try:
        if args.interactive:
            run_prompt(store, config.divider)
            modified = True
        elif args.command == PRINT:
            commands.print_store(store)
        else:
            key = MultiKey.parse(args.key, config.divider)
            if args.command == ADD:
                commands.add(store, key, args.value)
                modified = True
            elif args.command == GET:
                commands.get(store, key, divider=config.divider)
            elif args.command == REMOVE:
                modified = commands.remove(store, key) is not None
    except MultiKeyDBError as e:
        logger.error("Database %s error: %s", args.command or 'interactive', e)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if modified:
        try:
            save_file(store, config.db_file)
        except MultiKeyDBError as e:
            logger.error("Database writing to disk failure: %s", e)
            print(f"Database writing to disk failure: {e}", file=sys.stderr)
            return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
