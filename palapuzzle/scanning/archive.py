import gzip
import logging
import os
import re
import tarfile
import zlib
from contextlib import nullcontext
from typing import List

from tqdm import tqdm

from .. import config
from ..exceptions import PuzzleScanError
from ..models import PuzzleInfo
from .desktop import scan_desktop_file

PIECE_NAME_RE = re.compile(config.PIECE_NAME_PATTERN)

# Errors coming out of the gzip layer rather than the tar framing
DECOMPRESS_ERRORS = (gzip.BadGzipFile, EOFError, zlib.error)


def scan_puzzle(path: str, progress: bool = False) -> PuzzleInfo:
    """
    Reads a .puzzle file in a single pass and returns what it found.

    Either a complete PuzzleInfo is returned or PuzzleScanError is raised,
    never both. Anomalies that don't stop the scan (missing or duplicate
    pieces, a bad PieceCount) are collected in PuzzleInfo.warnings.

    Args:
        path: The .puzzle (gzip-compressed tar) file to read.
        progress: Show a tqdm progress bar over the compressed bytes read.
    """
    path = os.fspath(path)
    info = PuzzleInfo()

    try:
        f = open(path, "rb")
    except OSError as e:
        raise PuzzleScanError("open", path, e) from e

    with f:
        info.directory, info.filename = os.path.split(path)
        try:
            info.puzzle_file_size = os.fstat(f.fileno()).st_size
        except OSError as e:
            raise PuzzleScanError("examine", path, e) from e  # Should never happen

        if progress:
            reader = tqdm.wrapattr(f, "read", total=info.puzzle_file_size,
                                   desc=info.filename, leave=False)
        else:
            reader = nullcontext(f)

        with reader as stream:
            _scan_stream(stream, path, info)

    logging.info(f"Scanned {path}: {info.piece_file_count} piece files, "
                 f"{len(info.warnings)} warnings")
    return info


def _scan_stream(stream, path: str, info: PuzzleInfo) -> None:
    with gzip.GzipFile(fileobj=stream, mode="rb") as zf:
        try:
            # GzipFile reads its header lazily; force it so a bad header is
            # reported as a decompression failure up front.
            head = zf.peek(1)
        except (OSError, EOFError, zlib.error) as e:
            raise PuzzleScanError("decompress", path, e) from e
        if not head:
            if info.puzzle_file_size == 0:
                raise PuzzleScanError("decompress", path, EOFError("empty file"))
            # Valid gzip holding nothing: an archive with no members
            logging.debug(f"{path} decompresses to nothing")
            return

        tally = PieceTally()
        try:
            with tarfile.open(fileobj=zf, mode="r|", tarinfo=StrictTarInfo) as tar:
                for member in tar:
                    _scan_member(tar, member, path, info, tally)
        except PuzzleScanError:
            raise
        except Exception as e:
            if _is_decompress_error(e):
                raise PuzzleScanError("decompress", path, e) from e
            if isinstance(e, tarfile.TarError):
                raise PuzzleScanError("read decompressed TAR file", path, e) from e
            raise

    info.warnings.extend(tally.warnings())
    info.piece_file_count = tally.max_index + 1


def _scan_member(tar: tarfile.TarFile, member: tarfile.TarInfo, path: str,
                 info: PuzzleInfo, tally: "PieceTally") -> None:
    if member.isdir():
        # tarfile drops the trailing "/", so "3.png/" would otherwise look like a piece
        return
    m = PIECE_NAME_RE.fullmatch(member.name)
    if m:
        i = int(m.group(1))
        if i > config.MAX_PIECE_INDEX:
            err = ValueError(f"piece number {i} exceeds {config.MAX_PIECE_INDEX}")
            raise PuzzleScanError(f'parse member name "{member.name}" in', path, err)
        tally.add(i)
    elif member.name == config.IMAGE_MEMBER:
        info.image_file_size = member.size
    elif member.name == config.DESKTOP_MEMBER:
        logging.debug(f"Reading {member.name} from {path}")
        stream = tar.extractfile(member)
        if stream is None:
            # Not a regular file (e.g. a directory named pala.desktop)
            return
        try:
            with stream:
                scan_desktop_file(stream, info)
        except PuzzleScanError as e:
            e.file_path = path
            raise


def _is_decompress_error(e: BaseException) -> bool:
    if isinstance(e, DECOMPRESS_ERRORS):
        return True
    # tarfile re-raises zlib errors as ReadError, leaving the original as context
    return isinstance(e, tarfile.ReadError) and isinstance(e.__context__, zlib.error)


class TarFramingError(tarfile.TarError):
    """A member header that is cut short or corrupt."""


class StrictTarInfo(tarfile.TarInfo):
    """
    TarInfo that reports broken member headers.

    In stream mode TarFile.next() takes a truncated or invalid header past the
    first member as the end of the archive, silently dropping whatever
    followed. Raising an error it doesn't catch makes those fatal.
    """

    @classmethod
    def fromtarfile(cls, tar):
        try:
            return super().fromtarfile(tar)
        except (tarfile.TruncatedHeaderError, tarfile.InvalidHeaderError) as e:
            raise TarFramingError(f"{e} at offset {tar.offset}") from e


class PieceTally:
    """
    Counts how many members were seen for each piece number.

    Indexed directly by piece number; the list grows (at least doubling) when
    a larger number turns up.
    """

    def __init__(self, size: int = config.INITIAL_TALLY_SIZE):
        self.counts: List[int] = [0] * size
        self.max_index = -1

    def add(self, i: int) -> None:
        if i >= len(self.counts):
            new_size = max(2 * len(self.counts), i + 1)
            self.counts.extend([0] * (new_size - len(self.counts)))
        self.counts[i] += 1
        if i > self.max_index:
            self.max_index = i

    def warnings(self) -> List[str]:
        """Missing and duplicated piece numbers below the highest one, in ascending order."""
        out = []
        for i in range(self.max_index):
            n = self.counts[i]
            if n == 0:
                out.append(f'missing "{i}.png"')
            elif n > 1:
                out.append(f'{n} members named "{i}.png"')
        return out
