"""File metadata, existence checks and path resolution."""

from __future__ import annotations

import os
import stat
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Union

from minxp.io import Error
from minxp.osstr import OsString
from minxp.path import Path, PathBuf

__all__ = [
    "FILE_ATTRIBUTE_READONLY",
    "FILE_ATTRIBUTE_DIRECTORY",
    "FILE_ATTRIBUTE_REPARSE_POINT",
    "FileType",
    "Metadata",
    "Permissions",
    "absolute",
    "canonicalize",
    "exists",
    "metadata",
    "symlink_metadata",
]

FILE_ATTRIBUTE_READONLY = 0x1
FILE_ATTRIBUTE_DIRECTORY = 0x10
FILE_ATTRIBUTE_REPARSE_POINT = 0x400

AnyPath = Union[str, OsString, Path, "os.PathLike[str]"]


def _native(path: AnyPath) -> str:
    """Text of ``path`` for the operating system, verbatim prefix removed."""
    if not isinstance(path, (str, OsString, Path)):
        path = os.fspath(path)
        if isinstance(path, bytes):
            raise TypeError("byte paths are not supported")
    return os.fspath(Path(path))


def _attributes_of(info: os.stat_result) -> int:
    """File attribute bits for ``info``, derived from the mode where needed."""
    native = getattr(info, "st_file_attributes", None)
    if native is not None:
        return int(native)
    attributes = 0
    if stat.S_ISDIR(info.st_mode):
        attributes |= FILE_ATTRIBUTE_DIRECTORY
    if stat.S_ISLNK(info.st_mode):
        attributes |= FILE_ATTRIBUTE_REPARSE_POINT
    if not info.st_mode & stat.S_IWUSR:
        attributes |= FILE_ATTRIBUTE_READONLY
    return attributes


@dataclass(frozen=True)
class FileType:
    """The kind of a file, read from its attribute bits."""

    attributes: int

    def is_dir(self) -> bool:
        return bool(self.attributes & FILE_ATTRIBUTE_DIRECTORY)

    def is_file(self) -> bool:
        return not self.is_dir()

    def is_symlink(self) -> bool:
        return bool(self.attributes & FILE_ATTRIBUTE_REPARSE_POINT)


@dataclass
class Permissions:
    """Access permissions of a file; only the read-only flag is tracked."""

    read_only: bool = False

    def readonly(self) -> bool:
        return self.read_only

    def set_readonly(self, read_only: bool) -> None:
        self.read_only = bool(read_only)


def _utc(timestamp: float) -> datetime:
    return datetime.fromtimestamp(timestamp, tz=timezone.utc)


class Metadata:
    """Information about a file: its type, size, permissions and times."""

    __slots__ = ("_info", "_attributes")

    def __init__(self, info: os.stat_result) -> None:
        self._info = info
        self._attributes = _attributes_of(info)

    def file_type(self) -> FileType:
        return FileType(self._attributes)

    def is_dir(self) -> bool:
        return self.file_type().is_dir()

    def is_file(self) -> bool:
        return self.file_type().is_file()

    def is_symlink(self) -> bool:
        return self.file_type().is_symlink()

    def len(self) -> int:
        """Size of the file in bytes."""
        return self._info.st_size

    def permissions(self) -> Permissions:
        return Permissions(bool(self._attributes & FILE_ATTRIBUTE_READONLY))

    def modified(self) -> datetime:
        """Time of the last write, in UTC."""
        return _utc(self._info.st_mtime)

    def accessed(self) -> datetime:
        """Time of the last access, in UTC."""
        return _utc(self._info.st_atime)

    def created(self) -> datetime:
        """Creation time in UTC, where the platform records one."""
        return _utc(getattr(self._info, "st_birthtime", self._info.st_ctime))

    def __repr__(self) -> str:
        return (
            f"Metadata(attributes={self._attributes:#x}, len={self.len()})"
        )


def _stat(path: AnyPath, follow_symlinks: bool) -> os.stat_result:
    try:
        return os.stat(_native(path), follow_symlinks=follow_symlinks)
    except OSError as exc:
        raise Error(f"failed to open file for metadata: {exc}") from exc


def metadata(path: AnyPath) -> Metadata:
    """Metadata of ``path``, following symbolic links."""
    return Metadata(_stat(path, True))


def symlink_metadata(path: AnyPath) -> Metadata:
    """Metadata of ``path`` itself, without following a symbolic link."""
    return Metadata(_stat(path, False))


def exists(path: AnyPath) -> bool:
    """Return whether ``path`` exists; raise :class:`Error` if that cannot be told."""
    try:
        os.stat(_native(path))
    except FileNotFoundError:
        return False
    except OSError as exc:
        raise Error(f"unable to check if a file exists: {exc}") from exc
    return True


def canonicalize(path: AnyPath) -> PathBuf:
    """Resolve ``path`` to an absolute path with every symbolic link resolved."""
    native = _native(path)
    _stat(native, True)
    try:
        resolved = os.path.realpath(native, strict=True)
    except OSError as exc:
        raise Error(f"failed to get final path name: {exc}") from exc
    return PathBuf(resolved)


def absolute(path: AnyPath) -> PathBuf:
    """Return ``path`` unchanged if it is absolute, else made absolute from the cwd."""
    as_path = Path(_native(path))
    if as_path.is_absolute():
        return as_path.to_path_buf()
    text = os.fspath(as_path)
    if not text:
        raise Error("failed to get absolute path: empty path")
    try:
        return PathBuf(os.path.abspath(text))
    except OSError as exc:
        raise Error(f"failed to get absolute path: {exc}") from exc