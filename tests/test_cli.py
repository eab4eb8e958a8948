from __future__ import annotations

import textwrap
from pathlib import Path

from unminify.cli import cli


def _write(tmp_path: Path, filename: str, content: str) -> Path:
    path = tmp_path / filename
    path.write_text(content, encoding="utf-8")
    return path


def _write_pyproject(base: Path, body: str) -> Path:
    path = base / "pyproject.toml"
    path.write_text(textwrap.dedent(body).lstrip(), encoding="utf-8")
    return path


def test_cli_formats_css(cli_runner, tmp_path):
    source = _write(tmp_path, "site.min.css", "a{color:red;margin:0;padding:0}")
    target = tmp_path / "site.css"

    result = cli_runner.invoke(cli, ["-i", str(source), "-o", str(target), "-n", "2"])

    assert result.exit_code == 0
    assert target.read_text(encoding="utf-8") == "a {\n  color: red; margin: 0; padding: 0;\n}\n"
    assert "[INFO] Formatting" in result.output
    assert "CSS" in result.output
    assert f"[SUCCESS] Formatted output written to {target}" in result.output


def test_cli_formats_javascript_with_long_options(cli_runner, tmp_path):
    source = _write(tmp_path, "app.min.js", "function f(a,b){return a+b;}")
    target = tmp_path / "app.js"

    result = cli_runner.invoke(
        cli,
        ["--input", str(source), "--output", str(target), "--indent", "2", "--line-length", "100"],
    )

    assert result.exit_code == 0
    assert target.read_text(encoding="utf-8") == "function f(a, b) {\n  return a + b;\n}\n"
    assert "line length: 100" in result.output


def test_cli_uses_default_settings(cli_runner, tmp_path):
    source = _write(tmp_path, "page.html", "<p>a</p>")
    target = tmp_path / "out.html"

    result = cli_runner.invoke(cli, ["-i", str(source), "-o", str(target)])

    assert result.exit_code == 0
    assert "indent: 4, line length: 80" in result.output
    assert target.read_text(encoding="utf-8") == "<p>\n    a</p>\n"


def test_cli_reads_config_from_pyproject(cli_runner, tmp_path):
    _write_pyproject(
        tmp_path,
        """
        [tool.unminify]
        indent = 2
        """,
    )
    source = _write(tmp_path, "a.css", "a{color:red}")
    target = tmp_path / "b.css"

    result = cli_runner.invoke(cli, ["-i", str(source), "-o", str(target)])

    assert result.exit_code == 0
    assert target.read_text(encoding="utf-8") == "a {\n  color: red;\n}\n"


def test_cli_flags_override_config(cli_runner, tmp_path):
    _write_pyproject(
        tmp_path,
        """
        [tool.unminify]
        indent = 2
        """,
    )
    source = _write(tmp_path, "a.css", "a{color:red}")
    target = tmp_path / "b.css"

    result = cli_runner.invoke(cli, ["-i", str(source), "-o", str(target), "-n", "3"])

    assert result.exit_code == 0
    assert target.read_text(encoding="utf-8") == "a {\n   color: red;\n}\n"


def test_cli_rejects_unsupported_extension(cli_runner, tmp_path):
    source = _write(tmp_path, "notes.txt", "hello")
    target = tmp_path / "out.txt"

    result = cli_runner.invoke(cli, ["-i", str(source), "-o", str(target)])

    assert result.exit_code != 0
    assert "unsupported file type 'txt'" in result.output
    assert not target.exists()


def test_cli_rejects_missing_extension(cli_runner, tmp_path):
    source = _write(tmp_path, "Makefile", "all:")

    result = cli_runner.invoke(cli, ["-i", str(source), "-o", str(tmp_path / "out")])

    assert result.exit_code != 0
    assert "no file extension" in result.output


def test_cli_reports_missing_input(cli_runner, tmp_path):
    source = tmp_path / "missing.js"

    result = cli_runner.invoke(cli, ["-i", str(source), "-o", str(tmp_path / "out.js")])

    assert result.exit_code != 0
    assert "Cannot read input file" in result.output
    assert "missing.js" in result.output


def test_cli_reports_unwritable_output(cli_runner, tmp_path):
    source = _write(tmp_path, "a.js", "x=1;")
    target = tmp_path / "missing-dir" / "a.js"

    result = cli_runner.invoke(cli, ["-i", str(source), "-o", str(target)])

    assert result.exit_code != 0
    assert "Cannot write output file" in result.output


def test_cli_rejects_invalid_indent(cli_runner, tmp_path):
    source = _write(tmp_path, "a.css", "a{}")

    result = cli_runner.invoke(cli, ["-i", str(source), "-o", str(tmp_path / "b.css"), "-n", "99"])

    assert result.exit_code != 0
    assert "`indent` must be between 0 and 16" in result.output


def test_cli_file_size_limit_enforced(cli_runner, tmp_path, monkeypatch):
    monkeypatch.setenv("UNMINIFY_MAX_FILE_SIZE", "10")
    source = _write(tmp_path, "big.js", "x" * 20)

    result = cli_runner.invoke(cli, ["-i", str(source), "-o", str(tmp_path / "out.js")])

    assert result.exit_code != 0
    assert "maximum allowed size" in result.output


def test_cli_requires_input_and_output(cli_runner):
    result = cli_runner.invoke(cli, [])

    assert result.exit_code != 0
    assert "Missing option" in result.output


def test_cli_verbose_flag(cli_runner, tmp_path):
    source = _write(tmp_path, "a.ts", "let x=1")
    target = tmp_path / "b.ts"

    result = cli_runner.invoke(cli, ["-i", str(source), "-o", str(target), "-v"])

    assert result.exit_code == 0
    assert target.read_text(encoding="utf-8") == "let x = 1;\n"
