"""
C Prototype Scanner

Single-pass character scanner that separates function bodies and comments
from top-level declarations, and a filter that picks out the prototypes.
"""

from .stream import CharStream, EOF
from .buffer import TextBuffer
from .scanners import (
    LineMarker,
    scan_literal,
    scan_comment,
    scan_compound,
    scan_preprocessor_line,
    scan_declaration,
)
from .prototype_filter import accept_declaration, is_static, format_prototype
from .models import Prototype, ScanResult
from .driver import (
    PrototypeExtractor,
    extract_prototypes,
    extract_from_file,
    write_prototypes,
)

__all__ = [
    "CharStream",
    "EOF",
    "TextBuffer",
    "LineMarker",
    "scan_literal",
    "scan_comment",
    "scan_compound",
    "scan_preprocessor_line",
    "scan_declaration",
    "accept_declaration",
    "is_static",
    "format_prototype",
    "Prototype",
    "ScanResult",
    "PrototypeExtractor",
    "extract_prototypes",
    "extract_from_file",
    "write_prototypes",
]
