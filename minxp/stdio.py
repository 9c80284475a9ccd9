"""Shared handles to standard output and standard error, and print helpers."""

from __future__ import annotations

import sys
import threading
from typing import Callable, Optional, TextIO

from minxp.io import Write

__all__ = [
    "Stderr",
    "Stdout",
    "eprint",
    "eprintln",
    "print",
    "println",
    "stderr",
    "stdout",
]


class _ConsoleSink:
    """Writes bytes to the stream that ``locate`` returns at call time."""

    def __init__(self, locate: Callable[[], Optional[TextIO]]) -> None:
        self._locate = locate
        self.lock = threading.RLock()

    def write(self, buf: bytes) -> int:
        data = bytes(buf)
        stream = self._locate()
        if stream is None:
            return 0
        try:
            binary = getattr(stream, "buffer", None)
            if binary is not None:
                stream.flush()
                written = binary.write(data)
                return len(data) if written is None else written
            stream.write(data.decode("utf-8", errors="replace"))
            return len(data)
        except (OSError, ValueError):
            return 0

    def flush(self) -> None:
        stream = self._locate()
        if stream is None:
            return
        try:
            stream.flush()
        except (OSError, ValueError):
            pass


_STDOUT_SINK = _ConsoleSink(lambda: sys.stdout)
_STDERR_SINK = _ConsoleSink(lambda: sys.stderr)


class _ConsoleLock(Write):
    """Holds a console stream exclusively for the length of a ``with`` block."""

    __slots__ = ("_sink",)

    def __init__(self, sink: _ConsoleSink) -> None:
        self._sink = sink

    def write(self, buf: bytes) -> int:
        return self._sink.write(buf)

    def write_all(self, buf: bytes) -> None:
        self._sink.write(buf)

    def flush(self) -> None:
        self._sink.flush()

    def __enter__(self) -> _ConsoleLock:
        self._sink.lock.acquire()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self._sink.lock.release()


class Stdout(Write):
    """Handle to standard output; writes never raise."""

    __slots__ = ("_sink",)

    def __init__(self, sink: _ConsoleSink) -> None:
        self._sink = sink

    def write(self, buf: bytes) -> int:
        """Write ``buf`` and return how many bytes went out (0 without a stream)."""
        with self._sink.lock:
            return self._sink.write(buf)

    def write_all(self, buf: bytes) -> None:
        with self._sink.lock:
            self._sink.write(buf)

    def flush(self) -> None:
        with self._sink.lock:
            self._sink.flush()

    def lock(self) -> _ConsoleLock:
        """Return a guard; use it in ``with`` to keep other threads out."""
        return _ConsoleLock(self._sink)


class Stderr(Write):
    """Handle to standard error; writes never raise."""

    __slots__ = ("_sink",)

    def __init__(self, sink: _ConsoleSink) -> None:
        self._sink = sink

    def write(self, buf: bytes) -> int:
        """Write ``buf`` and return how many bytes went out (0 without a stream)."""
        with self._sink.lock:
            return self._sink.write(buf)

    def write_all(self, buf: bytes) -> None:
        with self._sink.lock:
            self._sink.write(buf)

    def flush(self) -> None:
        with self._sink.lock:
            self._sink.flush()

    def lock(self) -> _ConsoleLock:
        """Return a guard; use it in ``with`` to keep other threads out."""
        return _ConsoleLock(self._sink)


def stdout() -> Stdout:
    return Stdout(_STDOUT_SINK)


def stderr() -> Stderr:
    return Stderr(_STDERR_SINK)


def print(text: object) -> None:  # noqa: A001
    """Write ``text`` to standard output."""
    stdout().write(str(text).encode("utf-8"))


def println(text: object = "") -> None:
    """Write ``text`` and a newline to standard output."""
    out = stdout()
    out.write_fmt(text)
    out.write(b"\n")


def eprint(text: object) -> None:
    """Write ``text`` to standard error."""
    stderr().write(str(text).encode("utf-8"))


def eprintln(text: object = "") -> None:
    """Write ``text`` and a newline to standard error."""
    err = stderr()
    err.write_fmt(text)
    err.write(b"\n")