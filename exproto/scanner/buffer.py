"""
Text Buffer

Append-only accumulator used for comment, declaration and body text.
"""


class TextBuffer:
    """Growable character buffer (list of chunks, joined on demand)"""

    __slots__ = ("_chunks", "_length")

    def __init__(self, initial: str = ""):
        self._chunks = []
        self._length = 0
        if initial:
            self.append(initial)

    def append(self, text: str) -> None:
        if text:
            self._chunks.append(text)
            self._length += len(text)

    def set(self, text: str) -> None:
        """Replace the contents with <text>."""
        self.clear()
        self.append(text)

    def clear(self) -> None:
        self._chunks.clear()
        self._length = 0

    def text(self) -> str:
        if len(self._chunks) > 1:
            self._chunks[:] = ["".join(self._chunks)]
        return self._chunks[0] if self._chunks else ""

    def strip(self) -> str:
        """Contents with leading and trailing whitespace trimmed."""
        return self.text().strip()

    def __len__(self) -> int:
        return self._length

    def __bool__(self) -> bool:
        return self._length > 0

    def __str__(self) -> str:
        return self.text()

    def __repr__(self) -> str:
        return f"TextBuffer({self.text()!r})"
