"""Ending the current process."""

from __future__ import annotations

import os
import sys
from typing import NoReturn

__all__ = ["abort", "exit"]

_ABORT_CODE = 197
_I32_MIN = -(2**31)
_I32_MAX = 2**31 - 1


def abort() -> NoReturn:
    """End the process at once with exit code 197, without any cleanup."""
    os._exit(_ABORT_CODE)


def exit(exit_code: int) -> NoReturn:  # noqa: A001
    """End the process at once with ``exit_code`` after flushing standard streams."""
    if not _I32_MIN <= exit_code <= _I32_MAX:
        raise ValueError("exit code must fit in a signed 32-bit integer")
    for stream in (sys.stdout, sys.stderr):
        if stream is None:
            continue
        try:
            stream.flush()
        except (OSError, ValueError):
            pass
    os._exit(exit_code)