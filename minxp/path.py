"""Windows-style path handling: borrowed paths and owned, growable paths."""

from __future__ import annotations

import re
from functools import total_ordering
from typing import Iterator, Optional, Tuple, Union

from minxp.io import Error
from minxp.osstr import OsString

__all__ = [
    "MAIN_SEPARATOR",
    "MAIN_SEPARATOR_STR",
    "MAX_PATH",
    "MAX_PATH_EXTENDED",
    "Path",
    "PathBuf",
    "StripPrefixError",
    "is_separator",
]

MAIN_SEPARATOR = "\\"
MAIN_SEPARATOR_STR = "\\"

MAX_PATH = 260
MAX_PATH_EXTENDED = 32767

_VERBATIM_PREFIX = "\\\\?\\"
_SEPARATORS = re.compile(r"[\\/]")
_Span = Tuple[int, int, str]


def is_separator(c: str) -> bool:
    """Return whether ``c`` is a path separator (a backslash or a slash)."""
    return c == MAIN_SEPARATOR or c == "/"


class StripPrefixError(ValueError):
    """Raised when a path does not start with the prefix to be stripped."""


def _text_of(value: object) -> str:
    """Plain text of ``value``, cut at the first NUL character."""
    if isinstance(value, Path):
        return value._text
    if isinstance(value, (str, OsString)):
        text = str(value)
    else:
        raise TypeError(f"expected str, OsString or Path, got {type(value).__name__}")
    nul = text.find("\x00")
    return text if nul < 0 else text[:nul]


def _split_spans(text: str, base: int = 0) -> Iterator[_Span]:
    """Yield ``(start, end, part)`` for every separator-delimited part."""
    start = 0
    for match in _SEPARATORS.finditer(text):
        yield base + start, base + match.start(), text[start:match.start()]
        start = match.end()
    yield base + start, base + len(text), text[start:]


def _component_spans(text: str, base: int = 0) -> list[_Span]:
    return [span for span in _split_spans(text, base) if span[2] not in ("", ".")]


PathLike = Union[str, OsString, "Path"]


@total_ordering
class Path:
    """A path, kept as text and interpreted with Windows rules.

    A leading ``\\\\?\\`` verbatim prefix is removed on construction.
    """

    __slots__ = ("_text",)

    def __init__(self, text: PathLike = "") -> None:
        value = _text_of(text)
        if value.startswith(_VERBATIM_PREFIX):
            value = value[len(_VERBATIM_PREFIX):]
        self._text = value

    @classmethod
    def _raw(cls, text: str) -> Path:
        obj = cls.__new__(cls)
        obj._text = text
        return obj

    # -- conversions ---------------------------------------------------------

    def as_os_str(self) -> OsString:
        return OsString(self._text)

    def to_str(self) -> str:
        return self._text

    def to_string_lossy(self) -> str:
        return self._text

    def to_path_buf(self) -> PathBuf:
        return PathBuf._raw(self._text)

    def display(self) -> str:
        return self._text

    # -- classification ------------------------------------------------------

    def has_drive_letter(self) -> bool:
        """Return whether the path begins with a letter and a colon, as in ``C:``."""
        first = _SEPARATORS.split(self._text, maxsplit=1)[0]
        if len(first) < 2 or first[1] != ":":
            return False
        letter = first[0]
        return letter.isascii() and letter.isalpha()

    def is_absolute(self) -> bool:
        text = self._text
        if self.has_drive_letter() and len(text) > 2 and is_separator(text[2]):
            return True
        parts = _SEPARATORS.split(text)
        # An absolute path without a drive looks like "\\server\...".
        return (
            len(parts) >= 4
            and parts[0] == ""
            and parts[1] == ""
            and parts[2] != ""
        )

    def is_relative(self) -> bool:
        return not self.is_absolute()

    def has_root(self) -> bool:
        return self.is_absolute() or (bool(self._text) and is_separator(self._text[0]))

    # -- structure -----------------------------------------------------------

    def relative_to_root(self) -> Path:
        """Return the part of the path after its drive or server root."""
        text = self._text
        if not text:
            return self
        if is_separator(text[0]):
            if self.is_absolute():
                rest = text[2:]
                index = next(i for i, c in enumerate(rest) if is_separator(c))
                return Path._raw(rest[index + 1:])
            return Path._raw(text[1:]).relative_to_root()
        if self.has_drive_letter():
            return Path._raw(text[3:] if self.is_absolute() else text[2:])
        return self

    def _rooted_components(self) -> list[_Span]:
        rel = self.relative_to_root()._text
        return _component_spans(rel, len(self._text) - len(rel))

    def parent(self) -> Optional[Path]:
        spans = self._rooted_components()
        if not spans:
            return None
        if len(spans) >= 2:
            return Path._raw(self._text[:spans[-2][1]])
        return Path._raw(self._text[:spans[-1][0]])

    def ancestors(self) -> Iterator[Path]:
        """Yield the parent, the parent's parent and so on, up to the root."""
        path: Optional[Path] = self.parent()
        while path is not None:
            yield path
            path = path.parent()

    def file_name(self) -> Optional[str]:
        spans = self._rooted_components()
        if not spans or spans[-1][2] == "..":
            return None
        return spans[-1][2]

    def _stem_and_extension(self) -> Optional[Tuple[str, Optional[str]]]:
        name = self.file_name()
        if name is None:
            return None
        dot = name.rfind(".")
        if dot <= 0:
            return name, None
        return name[:dot], name[dot + 1:]

    def file_stem(self) -> Optional[str]:
        split = self._stem_and_extension()
        return None if split is None else split[0]

    def extension(self) -> Optional[str]:
        split = self._stem_and_extension()
        return None if split is None else split[1]

    def iter(self) -> Iterator[str]:
        """Yield every separator-delimited part, empty ones and ``.`` included."""
        return (part for _, _, part in _split_spans(self._text))

    def components(self) -> Iterator[str]:
        """Yield the meaningful parts, skipping empty parts and ``.``."""
        return (part for _, _, part in _component_spans(self._text))

    def __iter__(self) -> Iterator[str]:
        return self.iter()

    # -- comparisons by component -------------------------------------------

    def strip_prefix(self, base: PathLike) -> Path:
        """Return what follows ``base``; raise :class:`StripPrefixError` otherwise."""
        ours = _component_spans(self._text)
        theirs = list(_coerce(base).components())
        if len(theirs) >= len(ours):
            raise StripPrefixError("prefix not found")
        for (_, _, mine), other in zip(ours, theirs):
            if mine != other:
                raise StripPrefixError("prefix not found")
        return Path._raw(self._text[ours[len(theirs)][0]:])

    def starts_with(self, base: PathLike) -> bool:
        ours = list(self.components())
        theirs = list(_coerce(base).components())
        if any(a != b for a, b in zip(ours, theirs)):
            return False
        return len(theirs) <= len(ours)

    def ends_with(self, child: PathLike) -> bool:
        ours = list(self.components())
        theirs = list(_coerce(child).components())
        if any(a != b for a, b in zip(reversed(ours), reversed(theirs))):
            return False
        return len(theirs) <= len(ours)

    # -- derived paths -------------------------------------------------------

    def join(self, path: PathLike) -> PathBuf:
        result = self.to_path_buf()
        result.push(path)
        return result

    def with_file_name(self, file_name: PathLike) -> PathBuf:
        result = self.to_path_buf()
        result.set_file_name(file_name)
        return result

    def with_extension(self, extension: PathLike) -> PathBuf:
        result = self.to_path_buf()
        result.set_extension(extension)
        return result

    def remove_extraneous_suffixes(self) -> Path:
        """Drop trailing separators and ``.`` parts after the last component."""
        spans = self._rooted_components()
        if not spans:
            return Path._raw(self._text)
        return Path._raw(self._text[:spans[-1][1]])

    def encode_for_win32(self) -> bytes:
        """Return the normalised path as NUL-terminated UTF-16-LE."""
        if self._text in (".", ".."):
            # Imported here: the environment module depends on this one.
            from minxp.env import current_dir

            cwd = PathBuf(current_dir())
            if self._text == ".":
                return cwd.encode_for_win32()
            parent = cwd.parent()
            if parent is None:
                return "..\x00".encode("utf-16-le")
            return parent.encode_for_win32()
        joined = MAIN_SEPARATOR.join(self.components())
        return (joined + "\x00").encode("utf-16-le")

    # -- file system queries -------------------------------------------------
    # The file system modules import this one, so they are imported on use.

    def metadata(self):
        from minxp.fs.metadata import metadata

        return metadata(self)

    def symlink_metadata(self):
        from minxp.fs.metadata import symlink_metadata

        return symlink_metadata(self)

    def canonicalize(self) -> PathBuf:
        from minxp.fs.metadata import canonicalize

        return canonicalize(self)

    def read_dir(self):
        from minxp.fs.directory import read_dir

        return read_dir(self)

    def try_exists(self) -> bool:
        from minxp.fs.metadata import exists

        return exists(self)

    def exists(self) -> bool:
        try:
            return self.try_exists()
        except (Error, OSError):
            return False

    def is_file(self) -> bool:
        try:
            return self.metadata().is_file()
        except (Error, OSError):
            return False

    def is_dir(self) -> bool:
        try:
            return self.metadata().is_dir()
        except (Error, OSError):
            return False

    def is_symlink(self) -> bool:
        """Return whether metadata for the link itself could be read."""
        try:
            self.symlink_metadata()
        except (Error, OSError):
            return False
        return True

    # -- dunder protocols ----------------------------------------------------

    def __fspath__(self) -> str:
        return self._text

    def __str__(self) -> str:
        return self._text

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._text!r})"

    def __len__(self) -> int:
        return len(self._text)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Path):
            return self._text == other._text
        return NotImplemented

    def __lt__(self, other: object) -> bool:
        if isinstance(other, Path):
            return self._text < other._text
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._text)


def _coerce(value: PathLike) -> Path:
    if isinstance(value, Path):
        return value
    return Path._raw(_text_of(value))


class PathBuf(Path):
    """An owned path that can be changed in place."""

    __slots__ = ()
    __hash__ = None  # type: ignore[assignment]

    def as_path(self) -> Path:
        return Path._raw(self._text)

    def push(self, part: PathLike) -> None:
        """Append ``part``; an absolute part or one with a drive replaces the path."""
        part_path = _coerce(part)
        if part_path.is_absolute() or part_path.has_drive_letter():
            self._text = part_path._text
            return
        if not (self._text and is_separator(self._text[-1])):
            self._text += MAIN_SEPARATOR_STR
        self._text += part_path._text

    def pop(self) -> bool:
        """Cut the path back to its parent; return ``False`` if it has none."""
        parent = self.parent()
        if parent is None:
            return False
        self._text = self._text[:len(parent._text)]
        return True

    def truncate_extraneous_suffixes(self) -> None:
        self._text = self.remove_extraneous_suffixes()._text

    def set_file_name(self, file_name: PathLike) -> None:
        self.truncate_extraneous_suffixes()
        if self.file_name() is not None:
            self.pop()
        self.push(file_name)

    def set_extension(self, extension: PathLike) -> bool:
        """Replace or add the extension; return ``False`` if there is no file name."""
        if self.file_name() is None:
            return False
        self.truncate_extraneous_suffixes()
        current = self.extension()
        if current is not None:
            self._text = self._text[:len(self._text) - len(current)]
        else:
            self._text += "."
        self._text += _text_of(extension)
        return True

    def into_os_string(self) -> OsString:
        return OsString(self._text)

    def clear(self) -> None:
        self._text = ""