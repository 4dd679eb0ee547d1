"""Shared fixtures for exproto tests."""

import io

import pytest
from loguru import logger

from exproto.core.config import Config
from exproto.scanner import PrototypeExtractor


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep EXPROTO_* variables from the outer environment out of tests."""
    for name in (
        "EXPROTO_COMMENTS",
        "EXPROTO_STATICS",
        "EXPROTO_CPP",
        "EXPROTO_CPP_COMMAND",
        "EXPROTO_FORMAT",
        "EXPROTO_LOG_LEVEL",
        "EXPROTO_LOG_FILE",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def reset_logger():
    """Drop sinks added by the CLI so they never outlive a captured stream."""
    yield
    logger.remove()


@pytest.fixture
def run_text():
    """Run the extractor over a string and return the text output."""

    def _run(source: str, input_name: str = "orig.c", **options) -> str:
        out = io.StringIO()
        PrototypeExtractor(Config(**options), input_name).extract_to(source, out)
        return out.getvalue()

    return _run


@pytest.fixture
def c_file(tmp_path):
    """Write C source to a temporary file and return its path."""

    def _write(source: str, name: str = "sample.c"):
        path = tmp_path / name
        path.write_text(source, encoding="utf-8")
        return path

    return _write
