"""
exproto - Main Entry Point

Extracts function prototypes from C files.

Usage:
    exproto [options] [input-file]
    python -m exproto [options] [input-file]

If <input-file> is not given or is '-', input is read from stdin.
All options not listed below are passed on as-is to the preprocessor.
"""

import argparse
import sys
from contextlib import ExitStack, contextmanager
from typing import Iterator, List, Optional, TextIO, Tuple

from .core import (
    Config,
    ExprotoError,
    InputOpenError,
    OutputOpenError,
    OUTPUT_FORMATS,
    LOG_LEVELS,
    logger,
    setup_logging,
    install_exception_hook,
)
from .preprocess import run_preprocessor
from .scanner import PrototypeExtractor, ScanResult


# Options that take a value, and plain flags. Anything else starting with
# '-' belongs to the preprocessor.
_VALUE_OPTIONS = {"-o", "--output", "--format", "--config", "--log-level", "--log-file"}
_FLAG_OPTIONS = {"-h", "--help", "-p", "--cpp", "-c", "--comments", "-s", "--statics"}


# =============================================================================
# Argument Parsing
# =============================================================================

def split_passthrough(argv: List[str]) -> Tuple[List[str], List[str]]:
    """
    Separate our own arguments from preprocessor options.

    Returns:
        (own arguments, pass-through options)
    """
    own, passthrough = [], []
    i = 0
    while i < len(argv):
        arg = argv[i]
        if arg in _VALUE_OPTIONS:
            own.extend(argv[i:i + 2])
            i += 2
            continue
        if arg in _FLAG_OPTIONS or arg == "-" or not arg.startswith("-"):
            own.append(arg)
        elif arg.startswith("--") and arg.split("=", 1)[0] in _VALUE_OPTIONS:
            own.append(arg)
        else:
            passthrough.append(arg)
        i += 1
    return own, passthrough


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="exproto",
        description="Extracts prototypes from C files.",
        epilog=(
            "All other options are passed on as-is to cpp (if it is run).\n"
            "If <input-file> is not given or if it is '-', input is read from stdin."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        allow_abbrev=False,
    )

    parser.add_argument("input", nargs="*", metavar="input-file", help="C source file (default: stdin)")
    parser.add_argument("-o", "--output", type=str, help="Send output to this file")
    parser.add_argument("-p", "--cpp", action="store_true", help="Run cpp to pre-process source files")
    parser.add_argument("-c", "--comments", action="store_true", help="Include function comments in output")
    parser.add_argument("-s", "--statics", action="store_true", help="Include static functions")
    parser.add_argument("--format", type=str, choices=OUTPUT_FORMATS, help="Output format (default: text)")
    parser.add_argument("--config", type=str, help="JSON configuration file path")
    parser.add_argument("--log-level", type=str, help="Console log level (default: WARNING)")
    parser.add_argument("--log-file", type=str, help="Append a debug log to this file")

    return parser


def parse_args(argv: Optional[List[str]] = None) -> Tuple[argparse.Namespace, List[str]]:
    """Parse command line arguments; returns (namespace, pass-through options)"""
    if argv is None:
        argv = sys.argv[1:]

    own, passthrough = split_passthrough(argv)
    parser = build_parser()
    args = parser.parse_args(own)

    if len(args.input) > 1:
        parser.error("Multiple input files specified")

    return args, passthrough


def create_config_from_args(args: argparse.Namespace, passthrough: List[str]) -> Config:
    """Create Config from environment, optional JSON file and parsed arguments"""
    config = Config.from_env()

    if args.config:
        config.merge(Config.from_json(args.config))

    if args.input:
        config.input_path = args.input[0]
    if args.output:
        config.output_path = args.output
    if args.cpp:
        config.use_cpp = True
    if args.comments:
        config.include_comments = True
    if args.statics:
        config.include_statics = True
    if args.format:
        config.output_format = args.format
    if args.log_level:
        config.log_level = args.log_level.upper()
    if args.log_file:
        config.log_file = args.log_file
    if passthrough:
        config.cpp_args = config.cpp_args + passthrough

    return config


# =============================================================================
# Input / Output
# =============================================================================

@contextmanager
def open_input(config: Config) -> Iterator[TextIO]:
    """Yield the character source: preprocessor output, stdin or the input file."""
    if config.use_cpp:
        input_path = None if config.reads_stdin else config.input_path
        with run_preprocessor(config.cpp_command, input_path, config.cpp_args) as stream:
            yield stream
        return

    if config.reads_stdin:
        yield sys.stdin
        return

    try:
        f = open(config.input_path, "r", encoding="utf-8", errors="replace")
    except OSError as e:
        raise InputOpenError(f"Cannot open input: {e.strerror}", path=config.input_path) from e

    with f:
        yield f


@contextmanager
def open_output(config: Config) -> Iterator[TextIO]:
    if config.output_path is None:
        yield sys.stdout
        sys.stdout.flush()
        return

    try:
        f = open(config.output_path, "w", encoding="utf-8")
    except OSError as e:
        raise OutputOpenError(f"Cannot create output: {e.strerror}", path=config.output_path) from e

    with f:
        yield f


def run(config: Config) -> ScanResult:
    """Extract prototypes according to <config>. Input is opened before output."""
    with ExitStack() as stack:
        source = stack.enter_context(open_input(config))
        out = stack.enter_context(open_output(config))
        return PrototypeExtractor(config).extract_to(source, out)


# =============================================================================
# Main
# =============================================================================

def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point; returns the process exit status"""
    args, passthrough = parse_args(argv)

    try:
        config = create_config_from_args(args, passthrough)
    except (OSError, ValueError) as e:
        setup_logging()
        logger.error(f"Cannot load configuration: {e}")
        return 2

    setup_logging(config.log_level if config.log_level in LOG_LEVELS else "WARNING", config.log_file)
    install_exception_hook()

    errors = config.validate()
    if errors:
        for error in errors:
            logger.error(error)
        return 2

    if config.cpp_args and not config.use_cpp:
        logger.warning(f"Ignoring preprocessor options without --cpp: {' '.join(config.cpp_args)}")

    logger.debug(f"Configuration: {config.to_dict()}")

    try:
        run(config)
    except ExprotoError as e:
        logger.error(str(e))
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
