"""Spawning, naming, parking and joining threads."""

from __future__ import annotations

import os
import threading
import time
from dataclasses import dataclass
from datetime import timedelta
from typing import Callable, Dict, Generic, Optional, TypeVar, Union

from minxp.io import Error

__all__ = [
    "Builder",
    "JoinHandle",
    "Thread",
    "ThreadId",
    "available_parallelism",
    "current",
    "park",
    "park_timeout",
    "sleep",
    "spawn",
    "yield_now",
]

T = TypeVar("T")
Duration = Union[int, float, timedelta]

_MAX_MILLIS = 0xFFFFFFFF
_MIN_STACK = 32 * 1024
_STACK_GRANULARITY = 4096


def _millis(duration: Duration) -> int:
    """Whole milliseconds in ``duration``, capped at the 32-bit maximum."""
    seconds = duration.total_seconds() if isinstance(duration, timedelta) else float(duration)
    if seconds < 0:
        raise ValueError("duration cannot be negative")
    return min(int(seconds * 1000), _MAX_MILLIS)


@dataclass(frozen=True)
class ThreadId:
    """Identifier of a thread, unique among the threads alive at one time."""

    value: int


class _ThreadInner:
    __slots__ = ("name", "ident", "parked", "condition")

    def __init__(self, name: Optional[str], ident: int) -> None:
        self.name = name
        self.ident = ident
        self.parked = False
        self.condition = threading.Condition()


class Thread:
    """A handle to a thread; copies of the handle refer to the same thread."""

    __slots__ = ("_inner",)

    def __init__(self, name: Optional[str] = None, ident: int = 0) -> None:
        self._inner = _ThreadInner(name, ident)

    def unpark(self) -> None:
        """Wake the thread if it is parked; a wake-up with no one parked is lost."""
        inner = self._inner
        with inner.condition:
            inner.parked = False
            inner.condition.notify_all()

    def id(self) -> ThreadId:
        return ThreadId(self._inner.ident)

    def name(self) -> Optional[str]:
        return self._inner.name

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Thread):
            return self._inner is other._inner
        return NotImplemented

    def __hash__(self) -> int:
        return id(self._inner)

    def __repr__(self) -> str:
        return f"Thread(name={self._inner.name!r}, id={self._inner.ident})"


_THREAD_MAP: Dict[int, Thread] = {}
_THREAD_MAP_LOCK = threading.Lock()
_SPAWN_LOCK = threading.Lock()


def current() -> Thread:
    """Return the handle of the calling thread, registering it if needed."""
    ident = threading.get_ident()
    with _THREAD_MAP_LOCK:
        found = _THREAD_MAP.get(ident)
        if found is None:
            found = Thread(None, ident)
            _THREAD_MAP[ident] = found
        return found


class JoinHandle(Generic[T]):
    """Owns a spawned thread's result."""

    __slots__ = ("_thread", "_native", "_done", "_value", "_error")

    def __init__(self, thread: Thread) -> None:
        self._thread = thread
        self._native: Optional[threading.Thread] = None
        self._done = threading.Event()
        self._value: Optional[T] = None
        self._error: Optional[BaseException] = None

    def thread(self) -> Thread:
        return self._thread

    def join(self) -> T:
        """Wait for the thread and return its result; an exception it raised is re-raised."""
        self._done.wait()
        if self._native is not None:
            self._native.join()
        if self._error is not None:
            raise self._error
        return self._value  # type: ignore[return-value]

    def is_finished(self) -> bool:
        return self._done.is_set()

    def _run(self, function: Callable[[], T]) -> None:
        ident = threading.get_ident()
        self._thread._inner.ident = ident
        with _THREAD_MAP_LOCK:
            _THREAD_MAP[ident] = self._thread
        try:
            self._value = function()
        except Exception as exc:  # handed to the joining thread
            self._error = exc
        finally:
            self._done.set()
            with _THREAD_MAP_LOCK:
                if _THREAD_MAP.get(ident) is self._thread:
                    del _THREAD_MAP[ident]


def _stack_bytes(size: int) -> int:
    size = max(size, _MIN_STACK)
    return -(-size // _STACK_GRANULARITY) * _STACK_GRANULARITY


class Builder:
    """Configures a thread before it is spawned."""

    __slots__ = ("_name", "_stack_size")

    def __init__(self) -> None:
        self._name: Optional[str] = None
        self._stack_size = 0

    def name(self, name: str) -> Builder:
        self._name = str(name)
        return self

    def stack_size(self, size: int) -> Builder:
        """Request a stack of ``size`` bytes; 0 means the platform default."""
        if size < 0:
            raise ValueError("stack size cannot be negative")
        self._stack_size = int(size)
        return self

    def spawn(self, f: Callable[[], T]) -> JoinHandle[T]:
        """Start ``f`` on a new thread; raise :class:`Error` if it cannot start."""
        handle: JoinHandle[T] = JoinHandle(Thread(self._name, 0))
        native = threading.Thread(
            target=handle._run, args=(f,), name=self._name, daemon=True
        )
        handle._native = native
        try:
            with _SPAWN_LOCK:
                if self._stack_size:
                    previous = threading.stack_size(_stack_bytes(self._stack_size))
                    try:
                        native.start()
                    finally:
                        threading.stack_size(previous)
                else:
                    native.start()
        except (RuntimeError, ValueError) as exc:
            raise Error(f"Failed to spawn a thread: {exc}") from exc
        if native.ident is not None:
            handle._thread._inner.ident = native.ident
        return handle


def spawn(f: Callable[[], T]) -> JoinHandle[T]:
    """Start ``f`` on a new thread with default settings."""
    return Builder().spawn(f)


def sleep(duration: Duration) -> None:
    """Block for ``duration`` (seconds or a timedelta), counted in whole milliseconds."""
    time.sleep(_millis(duration) / 1000)


def yield_now() -> None:
    """Give up the rest of this thread's time slice."""
    time.sleep(0)


def _park(timeout_ms: Optional[int]) -> None:
    inner = current()._inner
    with inner.condition:
        inner.parked = True
        deadline = None if timeout_ms is None else time.monotonic() + timeout_ms / 1000
        while inner.parked:
            if deadline is None:
                inner.condition.wait()
                continue
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                break
            inner.condition.wait(remaining)
        inner.parked = False


def park() -> None:
    """Block until another thread unparks this one."""
    _park(None)


def park_timeout(timeout: Duration) -> None:
    """Block until unparked or until ``timeout`` has passed."""
    _park(_millis(timeout))


def available_parallelism() -> int:
    """Number of logical processors; raise :class:`Error` if it is unknown."""
    count = os.cpu_count()
    if not count:
        raise Error("Unknown number of processor threads")
    return count