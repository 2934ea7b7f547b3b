# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Line-oriented text format for Store snapshots.

Format::

    split:<divider>             optional, exactly 'split:' + 1 character
    <key text>\\t<value text>    one line per stored value
    # comment                   blank and '#' lines are ignored on read

The header is written only when the divider differs from the default '.'.
The writer emits lines in flatten() order; the reader accepts any order and
rebuilds the tree through Store.insert, so a file that uses a key both as a
value and as a subtree prefix fails with the matching insert error.

Example:
    >>> store = Store()
    >>> store.insert('work.team.git', 'github.com/example-repo')
    >>> dumps(store)
    'work.team.git\\tgithub.com/example-repo\\n'
    >>> loads(dumps(store)).get('work.team.git')
    'github.com/example-repo'
"""

from __future__ import annotations

import io
import logging
import os
import stat
import tempfile
from pathlib import Path
from typing import Any, Callable, Iterable, TextIO

from .exceptions import CorruptFileError, ParseError, StorageIOError
from .key import DEFAULT_DIVIDER, MultiKey
from .store import Store

logger = logging.getLogger(__name__)

SPLIT_SETTING = 'split:'
COMMENT_PREFIX = '#'

# TAB and line breaks belong to the line format
_FORBIDDEN_DIVIDERS = ('\t', '\n', '\r')


def _check_divider(divider: str) -> None:
    if not isinstance(divider, str) or len(divider) != 1 or divider in _FORBIDDEN_DIVIDERS:
        raise ValueError(f"divider must be a single printable character, not {divider!r}")


def dumps(store: Store, divider: str | None = None) -> str:
    """Serialize store to text.

    Args:
        store: The Store to serialize.
        divider: Character joining key components. Defaults to store.divider.

    Returns:
        The serialized text.

    Raises:
        ValueError: If divider is not a single character, or is TAB or a line break.
    """
    if divider is None:
        divider = store.divider
    _check_divider(divider)
    lines = []
    if divider != DEFAULT_DIVIDER:
        lines.append(f"{SPLIT_SETTING}{divider}\n")
    for key, value in store.iter_flatten():
        lines.append(f"{key.to_string(divider)}\t{value}\n")
    return ''.join(lines)


def dump(store: Store, fp: TextIO, divider: str | None = None) -> None:
    """Serialize store and write it to a text stream.

    Raises:
        StorageIOError: If writing to fp fails.
    """
    contents = dumps(store, divider)
    try:
        fp.write(contents)
        fp.flush()
    except OSError as e:
        raise StorageIOError(f"Could not write database: {e}") from e
    logger.debug("Flushed %d bytes", len(contents))


def _parse_lines(
    lines: Iterable[str],
    key_type: Callable[[str], Any],
    value_type: Callable[[str], Any],
) -> Store:
    """Build a Store from an iterable of text lines."""
    store = Store(key_type=key_type, value_type=value_type)
    divider = DEFAULT_DIVIDER
    header_allowed = True

    for lineno, line in enumerate(lines, start=1):
        line = line.rstrip('\r\n')
        if not line or line.startswith(COMMENT_PREFIX):
            continue

        # data lines always carry a TAB, a header never does
        if header_allowed and '\t' not in line and line.startswith(SPLIT_SETTING):
            if len(line) != len(SPLIT_SETTING) + 1:
                raise CorruptFileError(f"Line {lineno}: invalid split setting {line!r}")
            divider = line[-1]
            store.divider = divider
            header_allowed = False
            continue
        header_allowed = False

        key_text, tab, value_text = line.partition('\t')
        if not tab:
            raise CorruptFileError(f"Line {lineno}: missing tab separator")

        try:
            value = value_type(value_text)
        except (ValueError, TypeError) as e:
            logger.error("Parse error, value: %r", value_text)
            raise ParseError(f"Line {lineno}: could not parse value {value_text!r}") from e

        store.insert(MultiKey.parse(key_text, divider, key_type), value)

    return store


def loads(
    text: str,
    key_type: Callable[[str], Any] = str,
    value_type: Callable[[str], Any] = str,
) -> Store:
    """Parse serialized text into a new Store.

    Args:
        text: Serialized store.
        key_type: Converter for key components.
        value_type: Converter for values.

    Returns:
        The rebuilt Store.

    Raises:
        CorruptFileError: On a malformed split header or a line without tab.
        ParseError: If a key component or value cannot be converted.
        InsertError: If two lines violate leaf/subtree exclusivity.
    """
    return _parse_lines(io.StringIO(text), key_type, value_type)


def load(
    fp: TextIO,
    key_type: Callable[[str], Any] = str,
    value_type: Callable[[str], Any] = str,
) -> Store:
    """Read a serialized Store from a text stream.

    Raises:
        StorageIOError: If reading from fp fails.
        See loads() for the format errors.
    """
    try:
        text = fp.read()
    except (OSError, UnicodeDecodeError) as e:
        raise StorageIOError(f"Could not read database: {e}") from e
    store = loads(text, key_type, value_type)
    logger.debug("Database created from stream")
    return store


def load_file(
    path: str | os.PathLike[str],
    key_type: Callable[[str], Any] = str,
    value_type: Callable[[str], Any] = str,
) -> Store:
    """Load a Store from path, or return an empty Store if path is missing.

    Raises:
        StorageIOError: If the file exists but cannot be read.
    """
    path = Path(path)
    try:
        fp = path.open('r', encoding='utf-8', newline='')
    except FileNotFoundError:
        logger.warning("File not found, empty database created: %s", path)
        return Store(key_type=key_type, value_type=value_type)
    except OSError as e:
        raise StorageIOError(f"Could not open database {path}: {e}") from e
    with fp:
        return load(fp, key_type, value_type)


def _target_mode(path: Path) -> int:
    """Permission bits for path: kept from the existing file, else from the umask."""
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def save_file(
    store: Store,
    path: str | os.PathLike[str],
    divider: str | None = None,
) -> None:
    """Write store to path, replacing the previous contents in one step.

    The text goes to a temporary file in the same directory, which is then
    renamed over path. An existing file keeps its permission bits.

    Raises:
        StorageIOError: If the file cannot be written or replaced.
    """
    path = Path(path)
    contents = dumps(store, divider)
    try:
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{path.name}.", suffix='.tmp', dir=path.parent
        )
    except OSError as e:
        raise StorageIOError(f"Could not write database {path}: {e}") from e
    try:
        with os.fdopen(fd, 'w', encoding='utf-8', newline='') as fp:
            fp.write(contents)
        os.chmod(tmp_name, _target_mode(path))
        os.replace(tmp_name, path)
    except OSError as e:
        Path(tmp_name).unlink(missing_ok=True)
        raise StorageIOError(f"Could not write database {path}: {e}") from e
    logger.debug("Saved database to %s", path)
