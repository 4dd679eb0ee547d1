"""
exproto - C Prototype Extractor

Scans C source text character by character, skips function bodies,
comments and literals, and emits the top-level function prototypes.
"""

__version__ = "1.0.0"

from .core import Config
from .scanner import Prototype, PrototypeExtractor, extract_prototypes, extract_from_file

__all__ = [
    "Config",
    "Prototype",
    "PrototypeExtractor",
    "extract_prototypes",
    "extract_from_file",
]
