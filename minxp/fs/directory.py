"""Creating, listing and removing directories."""

from __future__ import annotations

import os
import shutil
import threading
from typing import Iterator, Optional

from minxp.fs.metadata import AnyPath, Metadata, _native, absolute, canonicalize, metadata
from minxp.io import Error
from minxp.osstr import OsString
from minxp.path import Path, PathBuf

__all__ = [
    "DirEntry",
    "create_dir",
    "create_dir_all",
    "read_dir",
    "remove_dir",
    "remove_dir_all",
]


def _as_path(path: AnyPath) -> Path:
    return Path(_native(path))


def create_dir(path: AnyPath) -> None:
    """Create one directory; its parent must already exist."""
    try:
        os.mkdir(_native(path))
    except OSError as exc:
        raise Error(f"failed to create directory: {exc}") from exc


def create_dir_all(path: AnyPath) -> None:
    """Create a directory together with every missing ancestor."""
    target = _as_path(path)
    chain = [*reversed(list(target.ancestors())), target]
    for directory in chain:
        if not directory.to_str():
            continue
        if not directory.exists():
            create_dir(directory)


class DirEntry:
    """One entry found while listing a directory."""

    __slots__ = ("_base", "_name", "_joined", "_lock")

    def __init__(self, base: Path, name: str) -> None:
        self._base = base
        self._name = name
        self._joined: Optional[PathBuf] = None
        self._lock = threading.Lock()

    def _get_path(self) -> PathBuf:
        with self._lock:
            if self._joined is None:
                self._joined = self._base.join(self._name)
            return self._joined

    def path(self) -> PathBuf:
        """The listed directory joined with the entry's name."""
        return self._get_path().to_path_buf()

    def file_name(self) -> OsString:
        return OsString(self._name)

    def metadata(self) -> Metadata:
        """Metadata of the entry, looked up with the host's own path rules."""
        return metadata(os.path.join(os.fspath(self._base), self._name))

    def __repr__(self) -> str:
        return f"DirEntry({self._get_path().to_str()!r})"


def read_dir(path: AnyPath) -> Iterator[DirEntry]:
    """List the entries of a directory, leaving out ``.`` and ``..``."""
    base = _as_path(path).to_path_buf()
    resolved = canonicalize(base)
    try:
        names = os.listdir(os.fspath(resolved))
    except OSError as exc:
        raise Error(f"cannot traverse directory: {exc}") from exc
    return (DirEntry(base, name) for name in names if name not in (".", "..", ""))


def remove_dir(path: AnyPath) -> None:
    """Remove an empty directory."""
    target = absolute(path)
    try:
        os.rmdir(os.fspath(target))
    except OSError as exc:
        raise Error(f"failed to delete directory: {exc}") from exc


def remove_dir_all(path: AnyPath) -> None:
    """Remove a directory and everything inside it."""
    target = _as_path(path)
    if not target.is_dir():
        raise Error("cannot remove all dir: not a directory")
    full = absolute(target)
    try:
        shutil.rmtree(os.fspath(full))
    except OSError as exc:
        raise Error(f"failed to remove all dir: {exc}") from exc