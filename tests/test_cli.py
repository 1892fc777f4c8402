"""Tests for the api-syntax command line interface."""

import json

import pytest

from api_syntax.cli import create_parser, main

WIDGET = {
    "id": "T:Contoso.Widget",
    "kind": "type",
    "subkind": "class",
    "name": "Widget",
    "containing_namespace": "N:Contoso",
}
BROKEN = {"id": "T:Contoso.Broken", "kind": "type", "name": "Broken"}


@pytest.fixture
def entities_file(tmp_path):
    path = tmp_path / "entities.json"
    path.write_text(json.dumps([WIDGET]))
    return path


class TestParser:
    def test_render_requires_language(self):
        with pytest.raises(SystemExit):
            create_parser().parse_args(["render", "entities.json"])

    def test_languages_accumulate(self):
        args = create_parser().parse_args(["render", "e.json", "-l", "cs", "--language", "vb"])
        assert args.language == ["cs", "vb"]


class TestInformation:
    def test_no_arguments_prints_help(self, capsys):
        assert main([]) == 0
        assert "usage:" in capsys.readouterr().out

    def test_list_languages(self, capsys):
        assert main(["--list-languages"]) == 0

        output = capsys.readouterr().out
        for language in ("csharp", "visualbasic", "aspnet", "javascript"):
            assert language in output

    def test_language_info(self, capsys):
        assert main(["--language-info", "vb"]) == 0

        output = capsys.readouterr().out
        assert "VisualBasic" in output
        assert "include_line_continuation" in output

    def test_unknown_language_info(self, capsys):
        assert main(["--language-info", "klingon"]) == 1
        assert "not supported" in capsys.readouterr().out


class TestRender:
    def test_plain_output(self, entities_file, capsys):
        assert main(["render", str(entities_file), "-l", "cs", "-l", "vb", "--plain"]) == 0

        assert capsys.readouterr().out == (
            "# T:Contoso.Widget [csharp]\npublic class Widget\n\n"
            "# T:Contoso.Widget [visualbasic]\nPublic Class Widget\n"
        )

    def test_rich_output(self, entities_file, capsys):
        assert main(["render", str(entities_file), "-l", "js"]) == 0
        assert "Type.createClass(" in capsys.readouterr().out

    def test_output_file(self, entities_file, tmp_path, capsys):
        output = tmp_path / "syntax.txt"

        assert main(["render", str(entities_file), "-l", "csharp", "-o", str(output)]) == 0
        assert output.read_text(encoding="utf-8") == (
            "# T:Contoso.Widget [csharp]\npublic class Widget\n"
        )
        assert "Syntax written" in capsys.readouterr().out

    def test_wrap_column_override(self, tmp_path, capsys):
        path = tmp_path / "generic.json"
        path.write_text(
            json.dumps(
                dict(
                    WIDGET,
                    generic_parameters=[{"name": "TFirst"}, {"name": "TSecond"}],
                )
            )
        )

        assert main(["render", str(path), "-l", "cs", "--plain", "--wrap-column", "25"]) == 0
        assert "TFirst, \n\tTSecond>" in capsys.readouterr().out

    def test_invalid_wrap_column(self, entities_file, capsys):
        assert main(["render", str(entities_file), "-l", "cs", "--wrap-column", "0"]) == 1
        assert "must be positive" in capsys.readouterr().out

    def test_missing_file(self, tmp_path, capsys):
        assert main(["render", str(tmp_path / "nope.json"), "-l", "cs"]) == 1
        assert "File not found" in capsys.readouterr().out

    def test_unknown_language(self, entities_file, capsys):
        assert main(["render", str(entities_file), "-l", "klingon"]) == 1
        assert "No generator registered" in capsys.readouterr().out

    def test_failed_render_sets_exit_code(self, tmp_path, capsys):
        path = tmp_path / "broken.json"
        path.write_text(json.dumps([BROKEN, WIDGET]))

        assert main(["render", str(path), "-l", "cs", "--plain"]) == 1

        output = capsys.readouterr().out
        assert "# T:Contoso.Broken [csharp]\nERROR: Syntax generation failed" in output
        assert "public class Widget" in output

    def test_config_file(self, tmp_path, capsys):
        config = tmp_path / "config.json"
        config.write_text(json.dumps({"language_name": "CS"}))
        path = tmp_path / "varargs.json"
        path.write_text(
            json.dumps(
                {
                    "id": "M:Contoso.Widget.Print",
                    "kind": "member",
                    "subkind": "method",
                    "name": "Print",
                    "modifiers": ["varargs"],
                }
            )
        )

        assert main(["render", str(path), "-l", "cs", "--plain", "--config", str(config)]) == 0
        assert "Variable argument lists are not supported in CS." in capsys.readouterr().out
