"""
C Source Scanners

Character-level handlers for the constructs that confuse a naive
brace/semicolon counter: literals, comments, compound statements and
preprocessor lines. Every scanner consumes from a CharStream and stops
quietly at end of input; unterminated constructs are consumed to EOF.
"""

from dataclasses import dataclass
from typing import Optional

from .buffer import TextBuffer
from .stream import CharStream, EOF

QUOTES = ('"', "'")


@dataclass
class LineMarker:
    """A GNU line marker: # <line> "<file>" [flags]"""

    line: int  # Diagnostic only; prototypes report lines of the scanned stream
    filename: Optional[str] = None


def scan_literal(stream: CharStream, buf: TextBuffer, terminator: str) -> bool:
    """
    Read a string or character literal into <buf>.

    The opening quote is already in <buf>. Consumed characters, including the
    closing <terminator>, are appended. A backslash always takes the next
    character with it, so escaped quotes never end the literal.

    Returns:
        True if the terminator was found, False if input ran out first
    """
    while True:
        c = stream.read()
        if c == EOF:
            return False
        buf.append(c)

        if c == "\\":
            c = stream.read()
            if c == EOF:
                return False
            buf.append(c)
        elif c == terminator:
            return True


def _scan_block_comment(stream: CharStream, buf: TextBuffer) -> None:
    while True:
        c = stream.read()
        if c == EOF:
            return
        buf.append(c)

        if c == "*":
            c = stream.read()
            if c == "/":
                buf.append(c)
                return
            stream.unread(c)


def _scan_line_comment(stream: CharStream, buf: TextBuffer) -> None:
    while True:
        c = stream.read()
        if c == EOF:
            return
        buf.append(c)
        if c == "\n":
            return


def scan_comment(stream: CharStream, buf: TextBuffer) -> bool:
    """
    Read a comment into <buf>, which already holds the leading slash.

    Returns:
        True if a block or line comment was consumed. False if the slash did
        not start a comment; the look-ahead character is pushed back.
    """
    c = stream.read()

    if c == "*":
        buf.append(c)
        _scan_block_comment(stream, buf)
        return True
    elif c == "/":
        buf.append(c)
        _scan_line_comment(stream, buf)
        return True

    stream.unread(c)
    return False


def scan_compound(stream: CharStream, buf: TextBuffer) -> None:
    """
    Read a compound statement body into <buf>, up to the matching close brace.

    Called after the opening brace has been consumed. Nested braces are
    tracked with a depth counter; literals and comments are skipped as units
    so the braces and quotes inside them do not count.
    """
    depth = 1

    while True:
        c = stream.read()
        if c == EOF:
            return
        buf.append(c)

        if c == "}":
            depth -= 1
            if depth == 0:
                return
        elif c == "{":
            depth += 1
        elif c in QUOTES:
            scan_literal(stream, buf, c)
        elif c == "/":
            scan_comment(stream, buf)


def _skip_rest_of_line(stream: CharStream, c: str) -> None:
    """Consume through the end of the current line, starting at <c>.

    A backslash-newline pair continues the line.
    """
    while c != EOF and c != "\n":
        if c == "\\" and stream.read() == EOF:
            return
        c = stream.read()


def scan_preprocessor_line(stream: CharStream) -> Optional[LineMarker]:
    """
    Consume a preprocessor line whose '#' has already been read.

    If the directive is a line marker, return its line number and, when one
    is given, the quoted filename (escape sequences kept as written).
    Any other directive returns None. Either way the rest of the line,
    including continuation lines, is consumed.
    """
    c = stream.read()
    while c in (" ", "\t"):
        c = stream.read()

    digits = []
    while c != EOF and c in "0123456789":
        digits.append(c)
        c = stream.read()

    if not digits:
        _skip_rest_of_line(stream, c)
        return None

    marker = LineMarker(line=int("".join(digits)))

    # Look for the opening quote of the filename on the same logical line
    while c != EOF and c != '"' and c != "\n":
        if c == "\\":
            c = stream.read()
            if c == EOF:
                break
        c = stream.read()

    if c == '"':
        name = TextBuffer()
        if scan_literal(stream, name, '"'):
            marker.filename = name.text()[:-1]
        else:
            marker.filename = name.text()
        c = stream.read()

    _skip_rest_of_line(stream, c)
    return marker


def scan_declaration(stream: CharStream, decl: TextBuffer, comment: TextBuffer) -> bool:
    """
    Read a declaration into <decl> up to a semicolon or an opening brace.

    A terminating semicolon is appended. An opening brace is not; the body it
    opens is consumed and thrown away. Comments stay in the declaration text,
    and the last one seen also replaces the contents of <comment>.

    Returns:
        True if a function body was skipped
    """
    while True:
        c = stream.read()
        if c == EOF:
            return False

        if c == ";":
            decl.append(c)
            return False
        elif c == "{":
            scan_compound(stream, TextBuffer())
            return True
        elif c == "/":
            captured = TextBuffer(c)
            if scan_comment(stream, captured):
                comment.set(captured.text())
            decl.append(captured.text())
        elif c in QUOTES:
            decl.append(c)
            scan_literal(stream, decl, c)
        else:
            decl.append(c)
