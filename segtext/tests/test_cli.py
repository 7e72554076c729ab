"""Tests for the segtext command line interface."""

import json

import pytest
import typer
from typer.testing import CliRunner

from segtext import __version__
from segtext.cli import app, parse_token_args

runner = CliRunner()

TEMPLATE = "\n".join([
    "### Open",
    "    class <#+name#>:",
    "### Method",
    "@=1 def <#method#>(self):",
    "@+1 pass",
    "",
])


@pytest.fixture
def template(tmp_path):
    path = tmp_path / "class.tt"
    path.write_text(TEMPLATE, encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ["SEGTEXT_TAB_SIZE", "SEGTEXT_TOKEN_START", "SEGTEXT_TOKEN_END", "SEGTEXT_TOKEN_ESCAPE"]:
        monkeypatch.delenv(name, raising=False)


class TestParseTokenArgs:
    def test_pairs(self):
        assert parse_token_args(["a=1", "b=x=y", "c="]) == {"a": "1", "b": "x=y", "c": ""}

    @pytest.mark.parametrize("item", ["novalue", "=1"])
    def test_bad_pairs(self, item):
        with pytest.raises(typer.BadParameter):
            parse_token_args([item])


class TestRender:
    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_render_to_stdout(self, template):
        result = runner.invoke(
            app,
            ["render", str(template), "Open", "Method", "-t", "name=customer", "-t", "method=save"],
        )
        assert result.exit_code == 0
        assert result.stdout.splitlines() == [
            "class Customer:",
            "    def save(self):",
            "        pass",
        ]

    def test_token_file(self, template, tmp_path):
        tokens = tmp_path / "tokens.json"
        tokens.write_text(json.dumps({"Open": {"name": "order"}, "Method": {"method": "total"}}))
        result = runner.invoke(app, ["render", str(template), "Open", "Method", "--tokens", str(tokens)])
        assert result.exit_code == 0
        assert "class Order:" in result.stdout
        assert "    def total(self):" in result.stdout

    def test_tab_size_option(self, template):
        result = runner.invoke(app, ["render", str(template), "Method", "-t", "method=m", "--tab-size", "2"])
        assert result.exit_code == 0
        assert result.stdout.splitlines() == ["  def m(self):", "    pass"]

    def test_custom_delimiters(self, tmp_path):
        path = tmp_path / "t.tt"
        path.write_text("### A\n    Hi {{who}}\n")
        result = runner.invoke(
            app,
            ["render", str(path), "A", "-t", "who=Bob", "--token-start", "{{", "--token-end", "}}"],
        )
        assert result.exit_code == 0
        assert result.stdout.splitlines() == ["Hi Bob"]

    def test_invalid_delimiters(self, template):
        result = runner.invoke(app, ["render", str(template), "Open", "--token-start", "%%", "--token-end", "%%"])
        assert result.exit_code == 1
        assert "must not be the same" in result.output

    def test_write_output_file(self, template, tmp_path):
        out = tmp_path / "out" / "class.py"
        result = runner.invoke(app, ["render", str(template), "Open", "-t", "name=a", "-o", str(out)])
        assert result.exit_code == 0
        assert out.read_text() == "class A:\n"

    def test_unknown_segment_is_reported(self, template):
        result = runner.invoke(app, ["render", str(template), "Open", "Nope", "-t", "name=a"])
        assert result.exit_code == 0
        assert "class A:" in result.output
        assert "Nope" in result.output

    def test_missing_template(self, tmp_path):
        result = runner.invoke(app, ["render", str(tmp_path / "missing.tt"), "Open"])
        assert result.exit_code == 1
        assert "was not found" in result.output

    def test_syntax_error(self, tmp_path):
        path = tmp_path / "bad.tt"
        path.write_text("### A\n#?# oops\n")
        result = runner.invoke(app, ["render", str(path), "A"])
        assert result.exit_code == 1
        assert "Loading stopped at line 2" in result.output

    def test_bad_token_argument(self, template):
        result = runner.invoke(app, ["render", str(template), "Open", "-t", "novalue"])
        assert result.exit_code == 2


class TestCheck:
    def test_lists_segments(self, tmp_path):
        path = tmp_path / "t.tt"
        path.write_text("### Sep\n    ,\n### Item FTI=2 PAD=Sep TAB=3\n    x\n")
        result = runner.invoke(app, ["check", str(path)])
        assert result.exit_code == 0
        assert "Sep" in result.output
        assert "Item" in result.output

    def test_reports_problems(self, tmp_path):
        path = tmp_path / "t.tt"
        path.write_text("### A\n    a\n### A\n    b\n")
        result = runner.invoke(app, ["check", str(path)])
        assert result.exit_code == 0
        assert "DefaultSegment1" in result.output
        assert "more than once" in result.output

    def test_fails_on_bad_template(self, tmp_path):
        path = tmp_path / "t.tt"
        path.write_text("### A\n@+1x\n")
        result = runner.invoke(app, ["check", str(path)])
        assert result.exit_code == 1
