#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for the html-injector command-line interface."""

import io
import json
import logging

import pytest
from bs4.exceptions import FeatureNotFound

from html_injector import parser as parser_module
from html_injector.cli import create_parser, main
from html_injector.logging_utils import PACKAGE_LOGGER_NAME


@pytest.fixture(autouse=True)
def _restore_package_logger():
    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    handlers, level, propagate = package_logger.handlers[:], package_logger.level, package_logger.propagate
    yield
    for handler in package_logger.handlers:
        if handler not in handlers:
            handler.close()
    package_logger.handlers[:] = handlers
    package_logger.setLevel(level)
    package_logger.propagate = propagate


@pytest.fixture
def markup_file(tmp_path):
    path = tmp_path / "input.html"
    path.write_text('<p class="note" onclick="alert(1)">Hi</p>', encoding="utf-8")
    return path


@pytest.mark.unit
@pytest.mark.cli
class TestCreateParser:
    """Test argument parsing."""

    def test_defaults(self):
        """Defaults read stdin and write JSON."""
        args = create_parser().parse_args([])
        assert args.input == "-"
        assert args.format == "json"
        assert args.parser == "html5lib"
        assert args.no_sanitize is False
        assert args.trailing_space is False
        assert args.indent == 2
        assert args.log_level == "WARNING"

    def test_invalid_format(self):
        """Unknown formats are usage errors."""
        with pytest.raises(SystemExit) as exc_info:
            create_parser().parse_args(["--format", "xml"])
        assert exc_info.value.code == 2

    def test_invalid_parser(self):
        """Unknown tree builders are usage errors."""
        with pytest.raises(SystemExit) as exc_info:
            create_parser().parse_args(["--parser", "html6lib"])
        assert exc_info.value.code == 2


@pytest.mark.unit
@pytest.mark.cli
class TestMain:
    """Test main."""

    def test_json_output(self, markup_file, capsys):
        """The tree is printed as JSON."""
        assert main([str(markup_file)]) == 0

        data = json.loads(capsys.readouterr().out)
        paragraph = data["children"][0]
        assert data["tag"] == "div"
        assert data["key"] == 1
        assert paragraph["props"] == {"className": "note"}
        assert paragraph["children"] == [{"type": "text", "content": "Hi"}]

    def test_html_output(self, markup_file, capsys):
        """The tree can be re-rendered as HTML."""
        assert main([str(markup_file), "--format", "html"]) == 0
        assert capsys.readouterr().out == '<div><p class="note">Hi</p></div>\n'

    def test_trailing_space(self, markup_file, capsys):
        """--trailing-space appends a blank text node."""
        assert main([str(markup_file), "-f", "html", "--trailing-space"]) == 0
        assert capsys.readouterr().out == '<div><p class="note">Hi</p> </div>\n'

    def test_compact_json(self, markup_file, capsys):
        """--indent 0 prints compact JSON on one line."""
        assert main([str(markup_file), "--indent", "0"]) == 0
        out = capsys.readouterr().out
        assert out.count("\n") == 1
        assert json.loads(out)["tag"] == "div"

    def test_negative_indent(self, markup_file, capsys):
        """Negative indentation is a usage error."""
        assert main([str(markup_file), "--indent", "-1"]) == 2
        assert "--indent" in capsys.readouterr().err

    def test_stdin(self, monkeypatch, capsys):
        """Markup is read from standard input by default."""
        monkeypatch.setattr("sys.stdin", io.StringIO("<b>bold</b>"))
        assert main(["--format", "html"]) == 0
        assert capsys.readouterr().out == "<div><b>bold</b></div>\n"

    def test_no_sanitize(self, tmp_path, capsys):
        """Handlers are still dropped without the sanitizer."""
        path = tmp_path / "raw.html"
        path.write_text('<button onclick="x()" class="btn">Go</button>', encoding="utf-8")
        assert main([str(path), "--no-sanitize", "-f", "html"]) == 0
        assert capsys.readouterr().out == '<div><button class="btn">Go</button></div>\n'

    def test_no_content(self, tmp_path, capsys):
        """Input without markup exits with 1 and prints nothing."""
        path = tmp_path / "empty.html"
        path.write_text("   \n\t", encoding="utf-8")
        assert main([str(path)]) == 1
        assert capsys.readouterr().out == ""

    def test_missing_file(self, tmp_path, capsys):
        """An unreadable input file is a usage error."""
        assert main([str(tmp_path / "missing.html")]) == 2
        assert "Could not read input" in capsys.readouterr().err

    def test_missing_parser_backend(self, markup_file, monkeypatch, capsys):
        """An unavailable tree builder is reported as a usage error."""

        def _missing(*args, **kwargs):
            raise FeatureNotFound("lxml")

        monkeypatch.setattr(parser_module, "BeautifulSoup", _missing)
        assert main([str(markup_file), "--parser", "lxml"]) == 2
        assert "lxml" in capsys.readouterr().err

    def test_version(self, capsys):
        """--version prints the version and exits cleanly."""
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0
        assert "html-injector" in capsys.readouterr().out

    def test_log_file(self, markup_file, tmp_path):
        """--log-file with --trace writes debug messages to the file."""
        log_file = tmp_path / "trace.log"
        assert main([str(markup_file), "--trace", "--log-file", str(log_file)]) == 0
        for handler in logging.getLogger(PACKAGE_LOGGER_NAME).handlers:
            handler.flush()
        assert "html_injector" in log_file.read_text(encoding="utf-8")
