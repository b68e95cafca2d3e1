import gzip
import io
import tarfile
import pytest


def desktop_text(**fields) -> bytes:
    """Builds a pala.desktop body with the usual group header."""
    lines = ["[Desktop Entry]"]
    lines += [f"{k}={v}" for k, v in fields.items()]
    return ("\n".join(lines) + "\n").encode("utf-8")


def tar_bytes(members) -> bytes:
    """
    Uncompressed tar data for (name, data) pairs, in order.
    A data of None makes a directory entry.
    """
    buf = io.BytesIO()
    with tarfile.open(fileobj=buf, mode="w") as tar:
        for member_name, data in members:
            info = tarfile.TarInfo(member_name)
            if data is None:
                info.type = tarfile.DIRTYPE
                tar.addfile(info)
            else:
                info.size = len(data)
                tar.addfile(info, io.BytesIO(data))
    return buf.getvalue()


@pytest.fixture
def write_puzzle(tmp_path):
    """Returns a function that gzips raw bytes into a .puzzle file."""
    def _write(raw: bytes, name="test.puzzle"):
        path = tmp_path / name
        path.write_bytes(gzip.compress(raw))
        return path
    return _write


@pytest.fixture
def make_puzzle(write_puzzle):
    """
    Returns a function that writes a .puzzle file from (name, data) pairs.
    Members are written in the given order; repeated names are kept.
    """
    def _make(members, name="test.puzzle"):
        return write_puzzle(tar_bytes(members), name)
    return _make


@pytest.fixture
def pieces():
    """Returns (name, data) pairs for N.png members."""
    def _pieces(*numbers):
        return [(f"{n}.png", b"\x89PNG fake") for n in numbers]
    return _pieces
