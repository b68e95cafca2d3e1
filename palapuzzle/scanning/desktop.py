import logging
import re
import tarfile
import zlib
from typing import BinaryIO

from .. import config
from ..exceptions import PuzzleScanError
from ..models import PuzzleInfo

KEY_VALUE_RE = re.compile(config.KEY_VALUE_PATTERN)
INTEGER_RE = re.compile(config.INTEGER_PATTERN)


def scan_desktop_file(stream: BinaryIO, info: PuzzleInfo) -> None:
    """
    Reads a pala.desktop member line by line and fills in the fields of `info`
    that it recognises.

    Malformed values become warnings on `info`; only a failure of the stream
    itself raises. The raised error carries a placeholder path which the
    caller replaces with the archive's path.
    """
    try:
        for lineno, raw in enumerate(stream, start=1):
            _scan_line(raw, lineno, info)
    except (OSError, EOFError, zlib.error, tarfile.TarError) as e:
        raise PuzzleScanError(f'read "{config.DESKTOP_MEMBER}" member in', "?", e) from e


def _scan_line(raw: bytes, lineno: int, info: PuzzleInfo) -> None:
    raw = raw.rstrip(b"\n")
    if raw.endswith(b"\r"):
        raw = raw[:-1]

    try:
        line = raw.decode("utf-8")
    except UnicodeDecodeError:
        # Still used; bad bytes become U+FFFD
        info.warnings.append(f'undecodable line {lineno} in "{config.DESKTOP_MEMBER}"')
        line = raw.decode("utf-8", errors="replace")

    m = KEY_VALUE_RE.match(line)
    if not m:
        # Group headers, blank lines, comments
        return

    key, value = m.group(1), m.group(2).strip()
    if key == config.TITLE_KEY:
        info.title = value
    elif key == config.AUTHOR_KEY:
        info.author = value
    elif key == config.COMMENT_KEY:
        info.comment = value
    elif key in config.PIECE_COUNT_KEYS:
        info.declared_piece_count = _parse_piece_count(value, info)
    else:
        logging.debug(f"Ignoring descriptor key {key!r}")


def _parse_piece_count(value: str, info: PuzzleInfo) -> int:
    if INTEGER_RE.fullmatch(value):
        n = int(value)
        if config.PIECE_COUNT_MIN <= n <= config.PIECE_COUNT_MAX:
            return n
    info.warnings.append(f'bad PieceCount "{value}"')
    return config.BAD_PIECE_COUNT
