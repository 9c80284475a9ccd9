"""Error type and the read, write and seek protocols shared by streams."""

from __future__ import annotations

import enum
import os
from abc import ABC, abstractmethod
from dataclasses import dataclass

__all__ = ["Error", "Whence", "SeekFrom", "Write", "Read", "Seek"]

_READ_CHUNK = 64 * 1024


class Error(Exception):
    """An I/O failure, carrying a human readable reason."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason

    def __repr__(self) -> str:
        return f"Error(reason={self.reason!r})"


class Whence(enum.IntEnum):
    """The point a seek offset is measured from."""

    START = os.SEEK_SET
    CURRENT = os.SEEK_CUR
    END = os.SEEK_END


@dataclass(frozen=True)
class SeekFrom:
    """A seek target: an offset relative to the start, the end or the current position."""

    whence: Whence
    offset: int

    @classmethod
    def start(cls, offset: int) -> SeekFrom:
        if offset < 0:
            raise ValueError("an offset from the start cannot be negative")
        return cls(Whence.START, offset)

    @classmethod
    def end(cls, offset: int) -> SeekFrom:
        return cls(Whence.END, offset)

    @classmethod
    def current(cls, offset: int) -> SeekFrom:
        return cls(Whence.CURRENT, offset)


class Write(ABC):
    """A byte sink."""

    @abstractmethod
    def write(self, buf: bytes) -> int:
        """Write some of ``buf`` and return how many bytes were taken."""

    @abstractmethod
    def flush(self) -> None:
        """Push buffered data to its destination."""

    def write_all(self, buf: bytes) -> None:
        """Write every byte of ``buf``, calling :meth:`write` as often as needed."""
        view = memoryview(bytes(buf))
        while view:
            written = self.write(bytes(view))
            if written <= 0:
                raise Error("failed to write whole buffer")
            view = view[written:]

    def write_fmt(self, text: object) -> None:
        """Write ``text`` as UTF-8; failures of the underlying sink are ignored."""
        try:
            self.write_all(str(text).encode("utf-8"))
        except Error:
            pass


class Read(ABC):
    """A byte source."""

    @abstractmethod
    def read(self, size: int) -> bytes:
        """Read up to ``size`` bytes; an empty result means nothing is left."""

    def read_to_end(self) -> bytes:
        """Read everything that remains."""
        chunks = []
        while chunk := self.read(_READ_CHUNK):
            chunks.append(chunk)
        return b"".join(chunks)

    def read_exact(self, size: int) -> bytes:
        """Read exactly ``size`` bytes in one read, or raise :class:`Error`."""
        data = self.read(size)
        if len(data) != size:
            raise Error("file smaller than buffer")
        return data


class Seek(ABC):
    """A stream with a movable position."""

    @abstractmethod
    def seek(self, pos: SeekFrom) -> int:
        """Move to ``pos`` and return the new absolute position."""

    def seek_position(self) -> int:
        """Return the current absolute position."""
        return self.seek(SeekFrom.current(0))

    def seek_relative(self, offset: int) -> int:
        """Move by ``offset`` bytes and return the new absolute position."""
        return self.seek(SeekFrom.current(offset))