"""
Prototype Extraction Driver

Top-level loop over a C character stream. Each top-level character starts
a preprocessor line, a comment or a declaration; declarations that pass the
prototype filter come out as Prototype records.
"""

import json
from pathlib import Path
from typing import Iterator, List, Optional, TextIO, Union

from loguru import logger

from ..core.config import Config
from ..core.exceptions import InputOpenError
from .buffer import TextBuffer
from .models import Prototype, ScanResult
from .prototype_filter import accept_declaration, format_prototype, terminate
from .scanners import scan_comment, scan_declaration, scan_preprocessor_line
from .stream import CharStream, EOF

Source = Union[CharStream, TextIO, str]


class PrototypeExtractor:
    """
    Extracts prototypes from one input.

    <input_name> is the name line markers must carry for a declaration to be
    emitted. Without line markers in the input every declaration counts as
    coming from the input itself.
    """

    def __init__(self, config: Optional[Config] = None, input_name: Optional[str] = None):
        self.config = config or Config()
        self.input_name = input_name or self.config.input_name

    def iter_prototypes(self, source: Source, result: Optional[ScanResult] = None) -> Iterator[Prototype]:
        """
        Scan <source> and yield accepted prototypes as they are found.

        Args:
            source: CharStream, text file object or string
            result: Optional ScanResult whose counters are updated while scanning
        """
        stream = source if isinstance(source, CharStream) else CharStream(source)
        if result is None:
            result = ScanResult()

        current_file = self.input_name
        pending_comment = TextBuffer()

        while True:
            c = stream.read()
            if c == EOF:
                break

            if c == "#":
                marker = scan_preprocessor_line(stream)
                result.directives += 1
                if marker is not None and marker.filename is not None and marker.filename != current_file:
                    logger.trace(f"Line marker: now in {marker.filename} (line {marker.line})")
                    current_file = marker.filename
                pending_comment = TextBuffer()

            elif c == "/":
                comment = TextBuffer(c)
                if scan_comment(stream, comment):
                    pending_comment = comment

            elif not c.isspace() and c != ";":
                stream.unread(c)
                start_line = stream.line

                decl = TextBuffer()
                inner_comment = TextBuffer()
                is_definition = scan_declaration(stream, decl, inner_comment)
                result.declarations_seen += 1

                prototype = self._classify(
                    decl, pending_comment, inner_comment, current_file, start_line, is_definition, result
                )
                pending_comment = TextBuffer()

                if prototype is not None:
                    yield prototype

    def _classify(
        self,
        decl: TextBuffer,
        pending_comment: TextBuffer,
        inner_comment: TextBuffer,
        current_file: str,
        line: int,
        is_definition: bool,
        result: ScanResult,
    ) -> Optional[Prototype]:
        if current_file != self.input_name:
            return None

        text = decl.strip()
        if "(" not in text:
            return None

        if not accept_declaration(text, self.config.include_statics):
            logger.debug(f"Rejected declaration at line {line}: {text[:60]!r}")
            result.rejected += 1
            return None

        # A comment inside the declaration is more recent than the one before it
        inner = inner_comment.strip() or None

        return Prototype(
            text=terminate(text),
            file=current_file,
            line=line,
            comment=inner or pending_comment.strip() or None,
            inner_comment=inner,
            is_definition=is_definition,
        )

    def extract(self, source: Source) -> ScanResult:
        """Scan <source> completely and collect the prototypes."""
        result = ScanResult()
        for prototype in self.iter_prototypes(source, result):
            result.prototypes.append(prototype)
        logger.info(f"{self.input_name}: {result.summary}")
        return result

    def extract_to(self, source: Source, out: TextIO) -> ScanResult:
        """
        Scan <source> and write prototypes to <out> in the configured format.

        Text output is streamed as each prototype is accepted; JSON output is
        written once the scan is complete.
        """
        if self.config.output_format == "json":
            result = self.extract(source)
            write_prototypes(result.prototypes, out, self.config)
            return result

        result = ScanResult()
        for prototype in self.iter_prototypes(source, result):
            result.prototypes.append(prototype)
            out.write(format_prototype(prototype, self.config.include_comments))
        logger.info(f"{self.input_name}: {result.summary}")
        return result


def write_prototypes(prototypes: List[Prototype], out: TextIO, config: Optional[Config] = None) -> None:
    """Write <prototypes> to <out> as text blocks or as a JSON array."""
    config = config or Config()

    if config.output_format == "json":
        records = []
        for prototype in prototypes:
            record = prototype.to_dict()
            if not config.include_comments:
                record.pop("comment")
            records.append(record)
        json.dump(records, out, indent=2)
        out.write("\n")
        return

    for prototype in prototypes:
        out.write(format_prototype(prototype, config.include_comments))


def extract_prototypes(source: Source, config: Optional[Config] = None, input_name: str = "<stdin>") -> List[Prototype]:
    """
    Extract prototypes from C source text.

    Args:
        source: The source code as a string, text stream or CharStream
        config: Filter configuration (defaults apply when None)
        input_name: Name line markers must carry for output to be emitted

    Returns:
        List of Prototype objects
    """
    return PrototypeExtractor(config, input_name).extract(source).prototypes


def extract_from_file(file_path: Union[str, Path], config: Optional[Config] = None) -> List[Prototype]:
    """
    Extract prototypes from a C source file (no preprocessing).

    Args:
        file_path: Path to the C source file; also the expected line marker name

    Returns:
        List of Prototype objects
    """
    try:
        f = open(file_path, "r", encoding="utf-8", errors="replace")
    except OSError as e:
        raise InputOpenError(f"Cannot open input: {e.strerror}", path=str(file_path)) from e

    with f:
        return PrototypeExtractor(config, str(file_path)).extract(f).prototypes
