# =============================================================================
# test_cli.py - qslex Command-Line Tests
# =============================================================================

import json
from pathlib import Path

from click.testing import CliRunner

from qscript import __version__
from qscript.cli.errors import ExitCode
from qscript.cli.qslex import main
from qscript.scanner import tokenize


class TestQslex:
    """Token dump tool."""

    def test_text_output(self):
        runner = CliRunner()
        with runner.isolated_filesystem():
            Path("orders.qs").write_text("let x = 10;")
            result = runner.invoke(main, ["orders.qs"])

            assert result.exit_code == 0, result.output
            lines = result.output.splitlines()
            assert len(lines) == 6
            assert "LET" in lines[0]
            assert "'let'" in lines[0]
            assert lines[1].startswith("1:5")
            assert "EOF" in lines[-1]

    def test_json_output(self):
        runner = CliRunner()
        with runner.isolated_filesystem():
            Path("orders.qs").write_text("select name\nfrom people")
            result = runner.invoke(main, ["--format", "json", "orders.qs"])

            assert result.exit_code == 0, result.output
            tokens = json.loads(result.output)
            assert tokens[0] == {"kind": "SELECT", "text": "select", "line": 1, "column": 1}
            assert tokens[2] == {"kind": "FROM", "text": "from", "line": 2, "column": 1}
            assert tokens[-1]["kind"] == "EOF"

    def test_lexical_error(self):
        runner = CliRunner()
        with runner.isolated_filesystem():
            Path("bad.qs").write_text("let x = @;")
            result = runner.invoke(main, ["bad.qs"])

            assert result.exit_code == ExitCode.SCAN_ERROR
            assert "bad.qs:1:9: error: unrecognized character" in result.output

    def test_unterminated_string(self):
        runner = CliRunner()
        with runner.isolated_filesystem():
            Path("bad.qs").write_text('let s = "open')
            result = runner.invoke(main, ["bad.qs"])

            assert result.exit_code == ExitCode.SCAN_ERROR
            assert "unterminated string literal" in result.output

    def test_legacy_flag(self):
        runner = CliRunner()
        with runner.isolated_filesystem():
            Path("bad.qs").write_text("let x = @;")
            result = runner.invoke(main, ["--legacy", "bad.qs"])

            assert result.exit_code == 0, result.output
            assert "'@'" in result.output

    def test_legacy_from_environment(self):
        runner = CliRunner()
        with runner.isolated_filesystem():
            Path("colon.qs").write_text("a:b")
            result = runner.invoke(main, ["colon.qs"], env={"QSCRIPT_LEGACY": "1"})

            assert result.exit_code == 0, result.output
            assert "DOT" in result.output
            assert "COLON" not in result.output

    def test_no_legacy_overrides_environment(self):
        runner = CliRunner()
        with runner.isolated_filesystem():
            Path("colon.qs").write_text("a:b")
            result = runner.invoke(
                main, ["--no-legacy", "colon.qs"], env={"QSCRIPT_LEGACY": "1"}
            )

            assert result.exit_code == 0, result.output
            assert "COLON" in result.output

    def test_missing_file(self):
        runner = CliRunner()
        with runner.isolated_filesystem():
            result = runner.invoke(main, ["missing.qs"])
            assert result.exit_code == ExitCode.INVALID_ARGS

    def test_invalid_utf8(self):
        runner = CliRunner()
        with runner.isolated_filesystem():
            Path("binary.qs").write_bytes(b"let x = \xff\xfe;")
            result = runner.invoke(main, ["binary.qs"])

            assert result.exit_code == ExitCode.INVALID_ARGS
            assert "Error:" in result.output

    def test_carriage_return_keeps_line(self):
        """A lone \\r is whitespace, not a line break."""
        runner = CliRunner()
        with runner.isolated_filesystem():
            Path("cr.qs").write_bytes(b"a\rb")
            result = runner.invoke(main, ["--format", "json", "cr.qs"])

            assert result.exit_code == 0, result.output
            tokens = json.loads(result.output)
            assert tokens[1] == {"kind": "IDENTIFIER", "text": "b", "line": 1, "column": 3}

    def test_crlf_positions_match_scanner(self):
        runner = CliRunner()
        with runner.isolated_filesystem():
            Path("crlf.qs").write_bytes(b"let a = 1;\r\n  if a")
            result = runner.invoke(main, ["--format", "json", "crlf.qs"])

            assert result.exit_code == 0, result.output
            positions = [(t["line"], t["column"]) for t in json.loads(result.output)]
            expected = [(t.line, t.column) for t in tokenize("let a = 1;\r\n  if a")]
            assert positions == expected

    def test_verbose_summary(self):
        runner = CliRunner()
        with runner.isolated_filesystem():
            Path("ok.qs").write_text("a b")
            result = runner.invoke(main, ["-v", "ok.qs"])

            assert result.exit_code == 0, result.output
            assert "Scanned 3 tokens from ok.qs" in result.output

    def test_version(self):
        result = CliRunner().invoke(main, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output
