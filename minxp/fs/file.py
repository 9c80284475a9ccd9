"""Opening, reading, writing and removing files."""

from __future__ import annotations

import os
import shutil
from typing import Optional, Union

from minxp.fs.metadata import AnyPath, Metadata, _native, metadata
from minxp.io import Error, Read, Seek, SeekFrom, Write

__all__ = [
    "File",
    "OpenOptions",
    "copy",
    "read",
    "read_to_string",
    "remove_file",
    "write",
]

_BINARY = getattr(os, "O_BINARY", 0)
_READ_CHUNK = 64 * 1024


class File(Read, Write, Seek):
    """An open file. Use it as a context manager to close it when done."""

    __slots__ = ("_fd",)

    def __init__(self, fd: int) -> None:
        self._fd: Optional[int] = fd

    @classmethod
    def open(cls, path: AnyPath) -> File:
        """Open an existing file for reading."""
        return cls.options().read(True).open(path)

    @classmethod
    def create(cls, path: AnyPath) -> File:
        """Create a file, or empty an existing one, for reading and writing."""
        return cls.options().read(True).write(True).create(True).open(path)

    @classmethod
    def create_new(cls, path: AnyPath) -> File:
        """Create a file that must not exist yet, for reading and writing."""
        return cls.options().read(True).write(True).create_new(True).open(path)

    @classmethod
    def options(cls) -> OpenOptions:
        return OpenOptions()

    @property
    def _handle(self) -> int:
        if self._fd is None:
            raise Error("file is closed")
        return self._fd

    def metadata(self) -> Metadata:
        try:
            return Metadata(os.fstat(self._handle))
        except OSError as exc:
            raise Error(f"failed to get metadata for an open file: {exc}") from exc

    def _remaining(self) -> int:
        position = self.seek_position()
        end = self.seek(SeekFrom.end(0))
        self.seek(SeekFrom.start(position))
        return max(end - position, 0)

    def read(self, size: int) -> bytes:
        try:
            return os.read(self._handle, size)
        except OSError as exc:
            raise Error(f"failed to read file: {exc}") from exc

    def read_to_end(self) -> bytes:
        """Read from the current position to the end of the file."""
        remaining = self._remaining()
        chunks = []
        collected = 0
        while collected < remaining:
            chunk = self.read(min(remaining - collected, _READ_CHUNK))
            if not chunk:
                break
            chunks.append(chunk)
            collected += len(chunk)
        return b"".join(chunks)

    def read_exact(self, size: int) -> bytes:
        """Read exactly ``size`` bytes in one read, or raise :class:`Error`."""
        data = self.read(size)
        if len(data) != size:
            raise Error("file smaller than buffer")
        return data

    def write(self, buf: bytes) -> int:
        try:
            return os.write(self._handle, bytes(buf))
        except OSError as exc:
            raise Error(f"failed to write to file: {exc}") from exc

    def flush(self) -> None:
        try:
            os.fsync(self._handle)
        except OSError as exc:
            raise Error(f"failed to flush file: {exc}") from exc

    def seek(self, pos: SeekFrom) -> int:
        try:
            return os.lseek(self._handle, pos.offset, int(pos.whence))
        except OSError as exc:
            raise Error(f"failed to seek: {exc}") from exc

    def close(self) -> None:
        """Close the file; closing twice does nothing."""
        fd, self._fd = self._fd, None
        if fd is not None:
            os.close(fd)

    def __enter__(self) -> File:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __del__(self) -> None:
        try:
            self.close()
        except OSError:
            pass

    def __repr__(self) -> str:
        state = "closed" if self._fd is None else f"fd={self._fd}"
        return f"File({state})"


class OpenOptions:
    """Builder for the ways a file can be opened."""

    __slots__ = ("_read", "_write", "_append", "_truncate", "_create", "_create_new")

    def __init__(self) -> None:
        self._read = False
        self._write = False
        self._append = False
        self._truncate = False
        self._create = False
        self._create_new = False

    def read(self, read: bool) -> OpenOptions:
        self._read = bool(read)
        return self

    def write(self, write: bool) -> OpenOptions:
        self._write = bool(write)
        return self

    def append(self, append: bool) -> OpenOptions:
        self._append = bool(append)
        return self

    def truncate(self, truncate: bool) -> OpenOptions:
        self._truncate = bool(truncate)
        return self

    def create(self, create: bool) -> OpenOptions:
        self._create = bool(create)
        return self

    def create_new(self, create_new: bool) -> OpenOptions:
        self._create_new = bool(create_new)
        return self

    def _flags(self) -> int:
        writable = self._write or self._append
        if not writable and self._create:
            raise Error("open with create but not write or append")
        if not writable and self._create_new:
            raise Error("open with create_new but not write or append")
        if not writable and self._truncate:
            raise Error("cannot open file: truncate requires write access")

        if writable and self._read:
            flags = os.O_RDWR
        elif writable:
            flags = os.O_WRONLY
        else:
            flags = os.O_RDONLY
        if self._append and not self._write:
            flags |= os.O_APPEND

        if self._create_new:
            flags |= os.O_CREAT | os.O_EXCL
        elif self._create:
            flags |= os.O_CREAT | os.O_TRUNC
        elif self._truncate:
            flags |= os.O_TRUNC
        return flags | _BINARY

    def open(self, path: AnyPath) -> File:
        flags = self._flags()
        try:
            fd = os.open(_native(path), flags, 0o666)
        except OSError as exc:
            raise Error(f"cannot open file: {exc}") from exc
        return File(fd)

    def __repr__(self) -> str:
        fields = ", ".join(f"{name[1:]}={getattr(self, name)}" for name in self.__slots__)
        return f"OpenOptions({fields})"


def write(path: AnyPath, contents: Union[bytes, bytearray, memoryview, str]) -> None:
    """Create or empty ``path`` and write ``contents`` to it."""
    data = contents.encode("utf-8") if isinstance(contents, str) else bytes(contents)
    with File.create(path) as file:
        file.write_all(data)


def read(path: AnyPath) -> bytes:
    """Return the whole contents of ``path``."""
    with File.open(path) as file:
        return file.read_to_end()


def read_to_string(path: AnyPath) -> str:
    """Return the contents of ``path`` decoded as UTF-8."""
    data = read(path)
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise Error(
            f"cannot read_to_string due to UTF-8 parsing error: {exc!r}"
        ) from exc


def copy(source: AnyPath, destination: AnyPath) -> int:
    """Copy a file with its attributes and return the size of the copy."""
    src = _native(source)
    dst = _native(destination)
    try:
        shutil.copyfile(src, dst)
        shutil.copystat(src, dst)
    except OSError as exc:
        raise Error(f"failed to copy: {exc}") from exc
    return metadata(dst).len()


def remove_file(path: AnyPath) -> None:
    """Delete the file at ``path``."""
    try:
        os.remove(_native(path))
    except OSError as exc:
        raise Error(f"failed to delete file: {exc}") from exc