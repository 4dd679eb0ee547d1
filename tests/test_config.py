"""
Unit tests for exproto configuration.

Run with: pytest tests/test_config.py -v
"""

import json

from exproto.core.config import Config, DEFAULT_CPP_COMMAND


class TestConfigSources:
    """Environment, JSON and merge layering."""

    def test_defaults(self):
        """Default Config scans plain source and emits text."""
        config = Config()
        assert config.include_comments is False
        assert config.include_statics is False
        assert config.use_cpp is False
        assert config.cpp_command == DEFAULT_CPP_COMMAND
        assert config.output_format == "text"
        assert config.validate() == []

    def test_from_env(self, monkeypatch):
        """EXPROTO_* variables populate the config."""
        monkeypatch.setenv("EXPROTO_COMMENTS", "true")
        monkeypatch.setenv("EXPROTO_STATICS", "1")
        monkeypatch.setenv("EXPROTO_FORMAT", "json")
        monkeypatch.setenv("EXPROTO_LOG_LEVEL", "debug")

        config = Config.from_env()

        assert config.include_comments is True
        assert config.include_statics is True
        assert config.use_cpp is False
        assert config.output_format == "json"
        assert config.log_level == "DEBUG"

    def test_from_json(self, tmp_path):
        """A JSON file populates the config; string commands are split."""
        path = tmp_path / "exproto.json"
        path.write_text(json.dumps({
            "use_cpp": True,
            "cpp_command": "clang -E -C",
            "cpp_args": ["-Iinclude"],
            "input": "src/main.c",
        }))

        config = Config.from_json(str(path))

        assert config.use_cpp is True
        assert config.cpp_command == ["clang", "-E", "-C"]
        assert config.cpp_args == ["-Iinclude"]
        assert config.input_name == "src/main.c"

    def test_merge_prefers_non_default_values(self):
        """merge only overrides fields set away from their defaults."""
        base = Config(include_comments=True, output_format="json")
        base.merge(Config(include_statics=True))

        assert base.include_comments is True
        assert base.include_statics is True
        assert base.output_format == "json"

    def test_to_dict_round_trips_through_json(self, tmp_path):
        """to_dict output loads back into an equal Config."""
        config = Config(include_comments=True, use_cpp=True, cpp_args=["-DNDEBUG"])
        path = tmp_path / "saved.json"
        path.write_text(json.dumps(config.to_dict()))
        assert Config.from_json(str(path)) == config


class TestConfigValidation:
    """validate() error reporting."""

    def test_invalid_format(self):
        """An unknown output format is reported."""
        assert Config(output_format="xml").validate() == ["Invalid output_format: xml"]

    def test_invalid_log_level(self):
        """An unknown log level is reported."""
        assert Config(log_level="LOUD").validate() == ["Invalid log_level: LOUD"]

    def test_cpp_requires_command(self):
        """use_cpp with an empty command is reported."""
        errors = Config(use_cpp=True, cpp_command=[]).validate()
        assert errors == ["use_cpp requires a non-empty cpp_command"]


class TestInputName:
    """Name used to match line markers."""

    def test_stdin(self):
        """No input path or a dash means stdin."""
        assert Config().input_name == "<stdin>"
        assert Config(input_path="-").input_name == "<stdin>"
        assert Config().reads_stdin is True

    def test_file(self):
        """A file input path is used as the input name."""
        config = Config(input_path="lib/util.c")
        assert config.input_name == "lib/util.c"
        assert config.reads_stdin is False
