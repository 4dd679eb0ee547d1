"""
External Preprocessor

Runs the C preprocessor (cpp -C by default, which keeps comments) and
exposes its standard output as a text stream for the scanner.
"""

import subprocess
from contextlib import contextmanager
from typing import Iterator, List, Optional, TextIO

from loguru import logger

from .core.exceptions import PreprocessorError


def build_command(cpp_command: List[str], input_path: Optional[str] = None, extra_args: Optional[List[str]] = None) -> List[str]:
    """Preprocessor argv: command, pass-through options, then the input file if any."""
    cmd = list(cpp_command) + list(extra_args or [])
    if input_path and input_path != "-":
        cmd.append(input_path)
    return cmd


@contextmanager
def run_preprocessor(
    cpp_command: List[str],
    input_path: Optional[str] = None,
    extra_args: Optional[List[str]] = None,
) -> Iterator[TextIO]:
    """
    Start the preprocessor and yield its standard output.

    Without <input_path> the preprocessor reads our standard input.

    Raises:
        PreprocessorError: the process could not be started
    """
    cmd = build_command(cpp_command, input_path, extra_args)
    logger.info(f"Preprocessor command: {' '.join(cmd)}")

    try:
        process = subprocess.Popen(
            cmd,
            stdout=subprocess.PIPE,
            text=True,
            errors="replace",
        )
    except OSError as e:
        raise PreprocessorError(f"Cannot start preprocessor: {e.strerror or e}", command=cmd) from e

    try:
        yield process.stdout
    finally:
        process.stdout.close()
        returncode = process.wait()
        if returncode != 0:
            logger.warning(f"Preprocessor exited with code {returncode}")
