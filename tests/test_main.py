"""
Tests for the command line interface.

Mocks subprocess.Popen so no real preprocessor is needed.
Run with: pytest tests/test_main.py -v
"""

import io
import json
from unittest.mock import MagicMock, patch

import pytest

from exproto.main import main, parse_args, split_passthrough


def _fake_process(output: str, returncode: int = 0) -> MagicMock:
    process = MagicMock()
    process.stdout = io.StringIO(output)
    process.wait.return_value = returncode
    return process


class TestSplitPassthrough:
    """Tests for separating preprocessor options."""

    def test_unknown_options_pass_through(self):
        """Unrecognized dash options are collected for the preprocessor."""
        own, passthrough = split_passthrough(
            ["-Iinc", "-DX=1", "-c", "a.c", "-o", "out.h", "--std=c99", "--format=json"]
        )
        assert own == ["-c", "a.c", "-o", "out.h", "--format=json"]
        assert passthrough == ["-Iinc", "-DX=1", "--std=c99"]

    def test_dash_is_an_input(self):
        """A lone dash names standard input, not an option."""
        own, passthrough = split_passthrough(["-"])
        assert own == ["-"]
        assert passthrough == []

    def test_multiple_inputs_is_usage_error(self):
        """More than one input file exits with a usage error."""
        with pytest.raises(SystemExit) as exc_info:
            parse_args(["a.c", "b.c"])
        assert exc_info.value.code == 2

    def test_help_exits_cleanly(self, capsys):
        """--help prints the usage banner and exits with status 0."""
        with pytest.raises(SystemExit) as exc_info:
            parse_args(["--help"])
        assert exc_info.value.code == 0
        assert "Extracts prototypes from C files." in capsys.readouterr().out


class TestMainFiles:
    """Reading files and writing output."""

    def test_reads_file_writes_stdout(self, c_file, capsys):
        """A file argument is scanned and prototypes go to stdout."""
        path = c_file("int f(void) { return 0; }\nstatic int g(void);\n")
        assert main([str(path)]) == 0
        assert capsys.readouterr().out == "\nint f(void);\n"

    def test_flags(self, c_file, capsys):
        """-c and -s turn on comments and static functions."""
        path = c_file("/* Doc. */\nstatic int g(void);\n")
        assert main(["-c", "-s", str(path)]) == 0
        assert capsys.readouterr().out == "\n/* Doc. */\nstatic int g(void);\n"

    def test_output_file(self, c_file, tmp_path):
        """-o writes the prototypes to the named file."""
        path = c_file("int f(void);\n")
        out = tmp_path / "protos.h"
        assert main(["-o", str(out), str(path)]) == 0
        assert out.read_text() == "\nint f(void);\n"

    def test_reads_stdin(self, monkeypatch, capsys):
        """A dash input reads the source from stdin."""
        monkeypatch.setattr("sys.stdin", io.StringIO("char *name(void);\n"))
        assert main(["-"]) == 0
        assert capsys.readouterr().out == "\nchar *name(void);\n"

    def test_json_format(self, c_file, capsys):
        """--format json emits records tagged with the input path."""
        path = c_file("int f(void);\n")
        assert main(["--format", "json", str(path)]) == 0
        records = json.loads(capsys.readouterr().out)
        assert [r["text"] for r in records] == ["int f(void);"]
        assert records[0]["file"] == str(path)

    def test_missing_input(self, tmp_path, capsys):
        """An unreadable input file exits with status 1."""
        assert main([str(tmp_path / "missing.c")]) == 1
        assert "Cannot open input" in capsys.readouterr().err

    def test_uncreatable_output(self, c_file, tmp_path, capsys):
        """An output path that cannot be created exits with status 1."""
        path = c_file("int f(void);\n")
        assert main(["-o", str(tmp_path / "no" / "such" / "dir.h"), str(path)]) == 1
        assert "Cannot create output" in capsys.readouterr().err

    def test_log_file(self, c_file, tmp_path):
        """--log-file creates the log file and its directory."""
        path = c_file("int f(void);\n")
        log_file = tmp_path / "logs" / "exproto.log"
        assert main(["--log-file", str(log_file), "--log-level", "error", str(path)]) == 0
        assert log_file.exists()

    def test_config_file(self, c_file, tmp_path, capsys):
        """Options from a JSON config file apply to the run."""
        path = c_file("static int g(void);\n")
        config_path = tmp_path / "exproto.json"
        config_path.write_text(json.dumps({"include_statics": True}))
        assert main(["--config", str(config_path), str(path)]) == 0
        assert capsys.readouterr().out == "\nstatic int g(void);\n"

    def test_bad_config_file(self, tmp_path, capsys):
        """A missing config file exits with status 2."""
        assert main(["--config", str(tmp_path / "missing.json")]) == 2
        assert "Cannot load configuration" in capsys.readouterr().err

    def test_invalid_log_level(self, c_file):
        """An unknown log level fails validation with status 2."""
        path = c_file("int f(void);\n")
        assert main(["--log-level", "loud", str(path)]) == 2


class TestMainPreprocessor:
    """Running the external preprocessor."""

    @patch("exproto.preprocess.subprocess.Popen")
    def test_cpp_output_filtered_by_line_markers(self, mock_popen, capsys):
        """Header declarations in preprocessor output are dropped."""
        mock_popen.return_value = _fake_process(
            '# 1 "/usr/include/stdio.h"\n'
            "int printf(const char *, ...);\n"
            '# 3 "a.c" 2\n'
            "int f(void) { return printf(\"x\"); }\n"
        )

        assert main(["-p", "-Iinc", "a.c"]) == 0

        assert capsys.readouterr().out == "\nint f(void);\n"
        cmd = mock_popen.call_args[0][0]
        assert cmd == ["cpp", "-C", "-Iinc", "a.c"]

    @patch("exproto.preprocess.subprocess.Popen")
    def test_cpp_from_stdin(self, mock_popen, capsys):
        """Without an input file the preprocessor gets no file argument."""
        mock_popen.return_value = _fake_process('# 1 "<stdin>"\nint f(void);\n')

        assert main(["--cpp"]) == 0

        assert capsys.readouterr().out == "\nint f(void);\n"
        assert mock_popen.call_args[0][0] == ["cpp", "-C"]

    @patch("exproto.preprocess.subprocess.Popen")
    def test_cpp_command_from_env(self, mock_popen, monkeypatch, capsys):
        """EXPROTO_CPP_COMMAND replaces the default preprocessor command."""
        monkeypatch.setenv("EXPROTO_CPP_COMMAND", "gcc -E -C")
        mock_popen.return_value = _fake_process("")

        assert main(["-p", "a.c"]) == 0
        assert mock_popen.call_args[0][0] == ["gcc", "-E", "-C", "a.c"]

    @patch("exproto.preprocess.subprocess.Popen")
    def test_cpp_cannot_start(self, mock_popen, capsys):
        """A preprocessor that cannot be started exits with status 1."""
        mock_popen.side_effect = FileNotFoundError(2, "No such file or directory")

        assert main(["-p", "a.c"]) == 1
        assert "Cannot start preprocessor" in capsys.readouterr().err

    @patch("exproto.preprocess.subprocess.Popen")
    def test_cpp_nonzero_exit_still_writes_output(self, mock_popen, capsys):
        """A failing preprocessor only warns; its output is still scanned."""
        mock_popen.return_value = _fake_process('# 1 "a.c"\nint f(void);\n', returncode=1)

        assert main(["-p", "a.c"]) == 0
        assert capsys.readouterr().out == "\nint f(void);\n"
