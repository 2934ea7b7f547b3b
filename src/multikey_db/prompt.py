# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Interactive prompt over an open Store.

Supported commands::

    add    -k <key> -v <value>
    get    -k <key>
    remove -k <key>
    print
    exit

Arguments are split with shell quoting rules, so values containing spaces
can be quoted. Usage errors and store errors are reported on stderr and the
session continues; 'exit' or end of input ends it.
"""

from __future__ import annotations

import logging
import shlex
import sys
from typing import TextIO

from . import commands
from .exceptions import MultiKeyDBError
from .key import DEFAULT_DIVIDER, MultiKey
from .store import Store

logger = logging.getLogger(__name__)

PROMPT = '[kv db]'

HELP = (
    "Support Commands:\n"
    "Add    -k <key> -v <value>\n"
    "Get    -k <key>\n"
    "Remove -k <key>\n"
    "Print\n"
    "Exit\n"
)


class UsageError(Exception):
    """Raised when a prompt command line is malformed."""

    pass


def _key_arg(args: list[str], usage: str, divider: str) -> MultiKey:
    if len(args) != 2 or args[0] != '-k':
        raise UsageError(usage)
    return MultiKey.parse(args[1], divider)


def run_command(
    store: Store,
    line: str,
    out: TextIO,
    divider: str = DEFAULT_DIVIDER,
) -> bool:
    """Execute one prompt line against store.

    Returns:
        False when the session should end, True otherwise.

    Raises:
        UsageError: If the line is not a valid command.
        MultiKeyDBError: If the store rejects the operation.
    """
    try:
        tokens = shlex.split(line)
    except ValueError as e:
        raise UsageError(str(e)) from e
    if not tokens:
        raise UsageError("No Command Entered")

    command, args = tokens[0].lower(), tokens[1:]
    if command == 'exit':
        return False
    if command == 'add':
        if len(args) != 4 or args[0] != '-k' or args[2] != '-v':
            raise UsageError("Add requires -k <key> -v <value>")
        commands.add(store, MultiKey.parse(args[1], divider), args[3])
    elif command == 'get':
        commands.get(store, _key_arg(args, "Get requires -k <key>", divider), out, divider)
    elif command == 'remove':
        commands.remove(store, _key_arg(args, "Remove requires -k <key>", divider), out)
    elif command == 'print':
        commands.print_store(store, out)
    else:
        raise UsageError(f"Unsupported command {tokens[0]}")
    return True


def run_prompt(
    store: Store,
    divider: str = DEFAULT_DIVIDER,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
    stderr: TextIO | None = None,
) -> None:
    """Read commands from stdin until 'exit' or end of input."""
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr

    stdout.write(HELP)
    while True:
        stdout.write(PROMPT)
        stdout.flush()
        line = stdin.readline()
        if not line:
            stdout.write("\n")
            return
        try:
            if not run_command(store, line, stdout, divider):
                return
        except UsageError as e:
            stderr.write(f"{e}\n")
        except MultiKeyDBError as e:
            logger.error("Command failed: %s", e)
            stderr.write(f"Error: {e}\n")
