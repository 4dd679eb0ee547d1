"""
Prototype Filter

Decides which declaration candidates are emitted, and formats them.
The static check is textual: "static" counts as the keyword only when it
starts the text or sits between whitespace.
"""

from .models import Prototype

STATIC = "static"


def _starts_like_declaration(text: str) -> bool:
    c = text[:1]
    return c == "_" or (c.isascii() and c.isalpha())


def is_static(text: str) -> bool:
    """Whether the first "static" in <text> is used as a keyword."""
    pos = text.find(STATIC)
    if pos < 0:
        return False

    after = text[pos + len(STATIC):pos + len(STATIC) + 1]
    followed_by_space = after.isspace()

    if pos == 0:
        return followed_by_space

    return text[pos - 1].isspace() and followed_by_space


def accept_declaration(text: str, include_statics: bool = False) -> bool:
    """
    Apply the prototype filter to a declaration candidate.

    Args:
        text: Declaration text (trimmed here if needed)
        include_statics: Accept static functions too

    Returns:
        True if the declaration should be emitted
    """
    text = text.strip()

    if not _starts_like_declaration(text):
        return False

    if include_statics:
        return True

    return not is_static(text)


def terminate(text: str) -> str:
    """Trim <text> and make sure it ends with exactly the one ';' it needs."""
    text = text.strip()
    if not text.endswith(";"):
        text += ";"
    return text


def format_prototype(prototype: Prototype, include_comments: bool = False) -> str:
    """Text block for one prototype: blank line, optional comment, declaration."""
    parts = ["\n"]

    if include_comments and prototype.comment:
        parts.append(prototype.comment)
        parts.append("\n")

    parts.append(terminate(prototype.text))
    parts.append("\n")

    return "".join(parts)
