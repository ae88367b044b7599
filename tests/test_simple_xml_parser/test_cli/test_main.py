"""Tests for the CLI main module."""

import io
import json
import tempfile
from pathlib import Path
from unittest.mock import patch

import pytest

from simple_xml_parser.cli.main import (
    EXIT_FAILURE,
    EXIT_OK,
    EXIT_USAGE,
    create_argument_parser,
    format_check_results,
    main,
)


@pytest.fixture
def workdir():
    """Temporary directory holding one valid and one broken document."""
    with tempfile.TemporaryDirectory() as tmp:
        root = Path(tmp)
        (root / "good.xml").write_text(
            '<?xml version="1.0"?>\n<a x="1">hi<b/><!-- c --></a>\n', encoding="utf-8"
        )
        (root / "bad.xml").write_text("<a>\n</b>\n", encoding="utf-8")
        yield root


class TestArgumentParser:
    """Test argument parsing."""

    def test_subcommands(self):
        parser = create_argument_parser()
        args = parser.parse_args(["format", "doc.xml", "--indent", "2", "--no-declaration"])
        assert args.command == "format"
        assert args.indent == 2
        assert args.no_declaration is True

    def test_check_accepts_many_paths(self):
        args = create_argument_parser().parse_args(["check", "a.xml", "b.xml"])
        assert [str(p) for p in args.paths] == ["a.xml", "b.xml"]

    def test_no_command_prints_help(self, capsys):
        assert main([]) == EXIT_USAGE
        assert "usage" in capsys.readouterr().out


class TestCommands:
    """Test the individual commands end to end."""

    def test_events(self, workdir, capsys):
        assert main(["events", str(workdir / "good.xml")]) == EXIT_OK
        out = capsys.readouterr().out
        assert out.splitlines() == [
            "BEGIN TAG: a",
            "  ATTRIBUTE: x=1",
            "  TEXT: hi",
            "  BEGIN TAG: b",
            "  END TAG: b",
            "  COMMENT: c",
            "END TAG: a",
        ]

    def test_events_failure(self, workdir, capsys):
        assert main(["events", str(workdir / "bad.xml")]) == EXIT_FAILURE
        assert "at input line 2" in capsys.readouterr().err

    def test_tree_text(self, workdir, capsys):
        assert main(["tree", str(workdir / "good.xml")]) == EXIT_OK
        assert capsys.readouterr().out.startswith("DOCUMENT\n  TAG: a\n")

    def test_tree_json(self, workdir, capsys):
        assert main(["tree", "--format", "json", str(workdir / "good.xml")]) == EXIT_OK
        data = json.loads(capsys.readouterr().out)
        assert data["children"][0]["name"] == "a"

    def test_format_to_stdout(self, workdir, capsys):
        assert main(["format", "--no-declaration", str(workdir / "good.xml")]) == EXIT_OK
        assert capsys.readouterr().out == '<a x="1">hi<b/><!-- c --></a>\n'

    def test_format_to_file(self, workdir):
        output = workdir / "out.xml"
        code = main(["format", str(workdir / "good.xml"), "-o", str(output), "-i", "2"])
        assert code == EXIT_OK
        assert output.read_text(encoding="utf-8").startswith('<?xml version="1.0"?>\n<a')

    def test_format_rejects_negative_indent(self, workdir, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["format", "--indent", "-1", str(workdir / "good.xml")])
        assert exc_info.value.code == EXIT_USAGE
        assert "must be >= 0" in capsys.readouterr().err

    def test_format_unserializable_tree(self, workdir, capsys):
        config_path = workdir / "config.json"
        config_path.write_text(
            '{"parser": {"strip_comment_whitespace": false}}', encoding="utf-8"
        )
        code = main(["--config", str(config_path), "format", str(workdir / "good.xml")])
        assert code == EXIT_FAILURE
        assert "whitespace" in capsys.readouterr().err

    def test_format_from_stdin(self, capsys):
        with patch("sys.stdin", io.StringIO("<r/>")):
            assert main(["format", "--no-declaration", "-"]) == EXIT_OK
        assert capsys.readouterr().out == "<r/>\n"

    def test_check_text(self, workdir, capsys):
        code = main(["check", str(workdir / "good.xml"), str(workdir / "bad.xml")])
        out = capsys.readouterr().out
        assert code == EXIT_FAILURE
        assert "Checked 2 files, 1 valid" in out
        assert "line 2:" in out

    def test_check_json(self, workdir, capsys):
        assert main(["check", "-f", "json", str(workdir / "good.xml")]) == EXIT_OK
        results = json.loads(capsys.readouterr().out)
        assert results[0]["valid"] is True
        assert results[0]["declaration"] == {"version": "1.0"}

    def test_check_missing_file(self, workdir, capsys):
        code = main(["check", str(workdir / "missing.xml")])
        assert code == EXIT_FAILURE
        assert "FAIL" in capsys.readouterr().out

    def test_missing_input(self, workdir, capsys):
        assert main(["tree", str(workdir / "missing.xml")]) == EXIT_FAILURE
        assert "Error:" in capsys.readouterr().err

    def test_profile(self, workdir, capsys):
        assert main(["profile", "-n", "3", str(workdir / "good.xml")]) == EXIT_OK
        report = json.loads(capsys.readouterr().out)
        assert report["iterations"] == 3
        assert report["success"] is True

    def test_profile_rejects_zero_iterations(self, workdir):
        assert main(["profile", "-n", "0", str(workdir / "good.xml")]) == EXIT_USAGE

    def test_bad_config_file(self, workdir, capsys):
        config_path = workdir / "config.json"
        config_path.write_text('{"parser": {"max_depth": -1}}', encoding="utf-8")
        assert main(["--config", str(config_path), "tree", str(workdir / "good.xml")]) == EXIT_USAGE
        assert "Error loading configuration" in capsys.readouterr().err

    def test_config_file_is_applied(self, workdir, capsys):
        config_path = workdir / "config.json"
        config_path.write_text('{"parser": {"max_depth": 1}}', encoding="utf-8")
        code = main(["--config", str(config_path), "check", str(workdir / "good.xml")])
        assert code == EXIT_FAILURE
        assert "maximum nesting depth" in capsys.readouterr().out


class TestFormatCheckResults:
    """Test check result formatting."""

    def test_text_summary(self):
        results = [
            {"file": "a.xml", "valid": True},
            {"file": "b.xml", "valid": False, "error": "No such file"},
        ]
        text = format_check_results(results, "text")
        assert text.splitlines()[0] == "Checked 2 files, 1 valid"
        assert "     No such file" in text
