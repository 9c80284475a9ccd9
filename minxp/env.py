"""Process environment: working directory, variables, search paths and arguments."""

from __future__ import annotations

import os
import platform
import sys
import tempfile
from typing import Iterable, Iterator, Optional, Tuple, Union

from minxp.io import Error
from minxp.osstr import OsString
from minxp.path import MAX_PATH_EXTENDED, Path, PathBuf

__all__ = [
    "ARCH",
    "DLL_EXTENSION",
    "DLL_PREFIX",
    "DLL_SUFFIX",
    "EXE_EXTENSION",
    "EXE_SUFFIX",
    "FAMILY",
    "OS",
    "JoinPathsError",
    "VarError",
    "args",
    "args_os",
    "current_dir",
    "current_exe",
    "home_dir",
    "join_paths",
    "remove_var",
    "set_current_dir",
    "set_var",
    "split_paths",
    "temp_dir",
    "var",
    "var_os",
    "vars",
    "vars_os",
]

_ARCH_NAMES = {
    "amd64": "x86_64",
    "x86_64": "x86_64",
    "x64": "x86_64",
    "x86": "x86",
    "i386": "x86",
    "i486": "x86",
    "i586": "x86",
    "i686": "x86",
    "arm64": "aarch64",
    "aarch64": "aarch64",
    "arm": "arm",
}


def _detect_arch() -> str:
    machine = platform.machine().lower()
    return _ARCH_NAMES.get(machine, machine)


ARCH = _detect_arch()
DLL_EXTENSION = "dll"
DLL_PREFIX = ""
DLL_SUFFIX = ".dll"
EXE_EXTENSION = "exe"
EXE_SUFFIX = ".exe"
FAMILY = "windows"
OS = "windows"

_Text = Union[str, OsString, Path]


class JoinPathsError(ValueError):
    """Raised when a path cannot be put into a search-path list."""

    def __init__(self) -> None:
        super().__init__("an error occurred when joining paths")


class VarError(LookupError):
    """Raised when an environment variable is not present."""

    def __init__(self) -> None:
        super().__init__("NotPresent")


# -- directories ---------------------------------------------------------------


def current_exe() -> PathBuf:
    """Return the path of the running executable."""
    executable = sys.executable
    if not executable:
        raise Error("current_exe() failed: executable path unknown")
    return PathBuf(executable)


def current_dir() -> PathBuf:
    """Return the current working directory."""
    try:
        return PathBuf(os.getcwd())
    except OSError as exc:
        raise Error(f"current_dir() failed: {exc}") from exc


def set_current_dir(path: _Text) -> None:
    """Change the current working directory, raising :class:`Error` on failure."""
    try:
        os.chdir(str(path))
    except OSError as exc:
        raise Error(f"Cannot set path: {exc}") from exc


def home_dir() -> Optional[PathBuf]:
    """Return the user's profile directory, or ``None`` if it cannot be found."""
    try:
        return PathBuf(var("USERPROFILE"))
    except VarError:
        pass
    home = os.path.expanduser("~")
    if not home or home == "~":
        return None
    return PathBuf(home)


def temp_dir() -> PathBuf:
    """Return the directory for temporary files."""
    return PathBuf(tempfile.gettempdir())


# -- search paths ----------------------------------------------------------------


def join_paths(paths: Iterable[_Text]) -> OsString:
    """Join paths with ``;``, quoting any that contain a semicolon.

    A path containing a double quote cannot be represented and raises
    :class:`JoinPathsError`.
    """
    joined = ""
    for index, item in enumerate(paths):
        text = str(item)
        if '"' in text:
            raise JoinPathsError()
        if index:
            joined += ";"
        joined += f'"{text}"' if ";" in text else text
    return OsString(joined)


def split_paths(unparsed: _Text) -> Iterator[PathBuf]:
    """Split a ``;`` separated list; semicolons inside double quotes do not split."""
    remaining: Optional[str] = str(unparsed)
    while remaining is not None:
        string = remaining
        offset = 0
        while True:
            search = string[offset:]
            semicolon = search.find(";")
            if semicolon < 0:
                found, remaining = string, None
                break
            quote = search.find('"')
            if 0 <= quote < semicolon:
                offset += quote + 1
                end = string.find('"', offset)
                if end < 0:
                    found, remaining = string, None
                    break
                offset = end + 1
                continue
            cut = offset + semicolon
            found, remaining = string[:cut], string[cut + 1:]
            break
        yield PathBuf(found.replace('"', ""))


# -- variables -------------------------------------------------------------------


def _check_key(key: str) -> None:
    if not key:
        raise ValueError("key cannot be empty")
    if "=" in key:
        raise ValueError("key cannot contain an equals sign")
    if "\x00" in key:
        raise ValueError("key cannot contain a NUL char")


def vars() -> Iterator[Tuple[str, str]]:  # noqa: A001 - mirrors the public name
    """Yield a snapshot of every ``(key, value)`` pair in the environment."""
    return iter(list(os.environ.items()))


def vars_os() -> Iterator[Tuple[OsString, OsString]]:
    """Like :func:`vars`, with :class:`OsString` keys and values."""
    return iter([(OsString(k), OsString(v)) for k, v in os.environ.items()])


def var(key: str) -> str:
    """Return the value of ``key``; missing or empty values raise :class:`VarError`."""
    value = os.environ.get(str(key))
    if not value:
        raise VarError()
    return value


def var_os(key: Union[str, OsString]) -> str:
    """Like :func:`var`, accepting an :class:`OsString` key."""
    return var(str(key))


def set_var(key: str, value: str) -> None:
    """Set ``key`` to ``value`` in the environment of this process."""
    key = str(key)
    value = str(value)
    _check_key(key)
    if "\x00" in value:
        raise ValueError("value cannot contain a NUL char")
    if len(value.encode("utf-16-le")) // 2 + 1 >= MAX_PATH_EXTENDED:
        raise ValueError("value exceeds the maximum environment value length")
    os.environ[key] = value


def remove_var(key: str) -> None:
    """Remove ``key`` from the environment of this process."""
    key = str(key)
    _check_key(key)
    os.environ.pop(key, None)


# -- arguments -------------------------------------------------------------------


def args() -> Iterator[str]:
    """Yield the command line arguments, program name first."""
    return iter(list(sys.argv))


def args_os() -> Iterator[OsString]:
    """Like :func:`args`, yielding :class:`OsString` values."""
    return iter([OsString(arg) for arg in sys.argv])