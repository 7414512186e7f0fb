"""
In-memory text sink used by the generators.
"""

from typing import Iterable, List, Optional, Union

TextLike = Union[str, int, Iterable[str]]


class StringSinkWriter:
    """
    A writer that accumulates everything written to it in memory.

    Writes are appended verbatim; escaping is the markup writer's job.
    This is not thread safe.
    """

    def __init__(self, initial_size: int = 512):
        # Size is only a hint; the buffer grows as needed
        self.initial_size = initial_size
        self._parts: List[str] = []

    def write(self, text: TextLike, offset: Optional[int] = None, length: Optional[int] = None) -> int:
        """
        Append text to the buffer.

        Args:
            text: A string, a single code point, or a sequence of characters
            offset: Start of the slice of ``text`` to write
            length: Number of characters of the slice to write

        Returns:
            Number of characters written
        """
        value = _as_text(text)
        if offset is not None or length is not None:
            start = offset or 0
            value = _slice(value, start, None if length is None else start + length)
        self._parts.append(value)
        return len(value)

    def append(self, text: TextLike, start: Optional[int] = None, end: Optional[int] = None) -> "StringSinkWriter":
        """Append ``text[start:end]`` and return the writer for chaining."""
        value = _as_text(text)
        if start is not None or end is not None:
            value = _slice(value, start or 0, end)
        self._parts.append(value)
        return self

    def getvalue(self) -> str:
        """Return everything written so far without consuming it."""
        if len(self._parts) > 1:
            self._parts = ["".join(self._parts)]
        return self._parts[0] if self._parts else ""

    def flush(self) -> None:
        # nothing buffered outside memory
        pass

    def close(self) -> None:
        # no underlying resource
        pass

    def __str__(self) -> str:
        return self.getvalue()

    def __len__(self) -> int:
        return len(self.getvalue())


def _slice(value: str, start: int, end: Optional[int]) -> str:
    end = len(value) if end is None else end
    if start < 0 or end > len(value) or start > end:
        raise IndexError(f"Invalid slice [{start}, {end}) for {len(value)} characters")
    return value[start:end]


def _as_text(text: TextLike) -> str:
    if isinstance(text, str):
        return text
    if isinstance(text, int):
        return chr(text)
    return "".join(text)
