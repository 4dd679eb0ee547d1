"""
Character Stream

Single-direction character source with a one-slot push-back.
"""

import io
from typing import Optional, TextIO, Union

EOF = ""


class CharStream:
    """
    Reads one character at a time from a text stream.

    read() returns EOF ("") once the input is exhausted. unread() pushes a
    single character back; it is returned by the next read().
    """

    def __init__(self, source: Union[TextIO, str]):
        if isinstance(source, str):
            source = io.StringIO(source)
        self._source = source
        self._pushback: Optional[str] = None
        self.line = 1

    def read(self) -> str:
        if self._pushback is not None:
            c = self._pushback
            self._pushback = None
        else:
            c = self._source.read(1)
        if c == "\n":
            self.line += 1
        return c

    def unread(self, c: str) -> None:
        """Push back one character. Pushing back EOF is a no-op."""
        if c == EOF:
            return
        if self._pushback is not None:
            raise RuntimeError("CharStream supports a single character of push-back")
        self._pushback = c
        if c == "\n":
            self.line -= 1

    def peek(self) -> str:
        c = self.read()
        self.unread(c)
        return c

    def __iter__(self):
        while True:
            c = self.read()
            if c == EOF:
                return
            yield c
