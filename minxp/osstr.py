"""A mutable, operating-system flavoured string."""

from __future__ import annotations

from functools import total_ordering

__all__ = ["OsString"]

_ASCII_LOWER = str.maketrans(
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ", "abcdefghijklmnopqrstuvwxyz"
)
_ASCII_UPPER = str.maketrans(
    "abcdefghijklmnopqrstuvwxyz", "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
)


def _borrowed(value: object) -> str:
    """View ``value`` as a plain string, cut at the first NUL character."""
    if isinstance(value, OsString):
        text = value._text
    elif isinstance(value, str):
        text = value
    else:
        raise TypeError(f"expected str or OsString, got {type(value).__name__}")
    nul = text.find("\x00")
    return text if nul < 0 else text[:nul]


@total_ordering
class OsString:
    """A growable string used for paths and environment data.

    Lengths and truncation count characters.
    """

    __slots__ = ("_text",)
    __hash__ = None  # type: ignore[assignment]

    def __init__(self, text: str | OsString = "") -> None:
        if isinstance(text, OsString):
            text = text._text
        if not isinstance(text, str):
            raise TypeError(f"expected str or OsString, got {type(text).__name__}")
        self._text = text

    @classmethod
    def from_encoded_bytes(cls, data: bytes) -> OsString:
        """Build from UTF-8 bytes; invalid UTF-8 raises ``UnicodeDecodeError``."""
        return cls(bytes(data).decode("utf-8"))

    def as_encoded_bytes(self) -> bytes:
        return self._text.encode("utf-8")

    def into_string(self) -> str:
        return self._text

    def to_str(self) -> str:
        return self._text

    def push(self, what: str | OsString) -> None:
        """Append ``what``; anything from its first NUL on is dropped."""
        self._text += _borrowed(what)

    def clear(self) -> None:
        self._text = ""

    def truncate(self, new_len: int) -> None:
        """Shorten to ``new_len`` characters; longer lengths change nothing."""
        if new_len < 0:
            raise ValueError("length cannot be negative")
        self._text = self._text[:new_len]

    def is_empty(self) -> bool:
        return not self._text

    def to_ascii_lowercase(self) -> OsString:
        return OsString(self._text.translate(_ASCII_LOWER))

    def to_ascii_uppercase(self) -> OsString:
        return OsString(self._text.translate(_ASCII_UPPER))

    def make_ascii_lowercase(self) -> None:
        self._text = self._text.translate(_ASCII_LOWER)

    def make_ascii_uppercase(self) -> None:
        self._text = self._text.translate(_ASCII_UPPER)

    def is_ascii(self) -> bool:
        return self._text.isascii()

    def eq_ignore_ascii_case(self, other: str | OsString) -> bool:
        return (
            self._text.translate(_ASCII_LOWER)
            == _borrowed(other).translate(_ASCII_LOWER)
        )

    def display(self) -> str:
        return self._text

    def __len__(self) -> int:
        return len(self._text)

    def __str__(self) -> str:
        return self._text

    def __repr__(self) -> str:
        return repr(self._text)

    def __iadd__(self, other: str | OsString) -> OsString:
        self.push(other)
        return self

    def __eq__(self, other: object) -> bool:
        if isinstance(other, OsString):
            return self._text == other._text
        if isinstance(other, str):
            return self._text == other
        return NotImplemented

    def __lt__(self, other: object) -> bool:
        if isinstance(other, OsString):
            return self._text < other._text
        if isinstance(other, str):
            return self._text < other
        return NotImplemented