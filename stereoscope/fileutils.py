"""File helpers used when preparing and fingerprinting image fixtures."""

from __future__ import annotations

import hashlib
import os
import shutil
import stat
from typing import Iterator


def copy_file(src: str, dst: str) -> None:
    """Copy the contents of one file to another, creating or truncating the target."""
    with open(src, "rb") as fin, open(dst, "wb") as fout:
        shutil.copyfileobj(fin, fout)


def file_or_dir_exists(filename: str) -> bool:
    """Tell whether anything exists at the path."""
    try:
        os.stat(filename)
    except FileNotFoundError:
        return False
    except OSError:
        return True
    return True


def _regular_files(path: str) -> Iterator[str]:
    """Yield regular files under a path in lexical depth-first order, following links to directories."""
    info = os.lstat(path)
    if stat.S_ISLNK(info.st_mode):
        target = os.path.realpath(path, strict=True)
        if os.path.isdir(target):
            yield from _regular_files_in_dir(path)
        return
    if stat.S_ISDIR(info.st_mode):
        yield from _regular_files_in_dir(path)
    elif stat.S_ISREG(info.st_mode):
        yield path


def _regular_files_in_dir(directory: str) -> Iterator[str]:
    for name in sorted(os.listdir(directory)):
        yield from _regular_files(os.path.join(directory, name))


def dir_hash(root: str) -> str:
    """Return the hex SHA-256 of the contents of every regular file under root, in walk order.

    Links to directories are followed; links to files are skipped; a dangling link raises OSError.
    """
    hasher = hashlib.sha256()
    for path in _regular_files(root):
        with open(path, "rb") as f:
            for chunk in iter(lambda: f.read(65536), b""):
                hasher.update(chunk)
    return hasher.hexdigest()