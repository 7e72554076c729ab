"""Tests for template file reading and output writing."""

import pytest

from segtext.files import read_template_lines, write_text_lines
from segtext.logbook import MessageLog


@pytest.fixture
def log():
    return MessageLog()


class TestReadTemplateLines:
    def test_reads_lines(self, log, tmp_path):
        path = tmp_path / "t.tt"
        path.write_text("### A\n    a\r\n    b", encoding="utf-8")
        assert read_template_lines(path, log) == ["### A", "    a", "    b"]
        assert log.entries == []

    def test_accepts_string_path(self, log, tmp_path):
        path = tmp_path / "t.tt"
        path.write_text("### A\n", encoding="utf-8")
        assert read_template_lines(str(path), log) == ["### A"]

    def test_empty_file_gives_no_lines(self, log, tmp_path):
        path = tmp_path / "t.tt"
        path.write_text("", encoding="utf-8")
        assert read_template_lines(path, log) == []
        assert log.entries == []

    @pytest.mark.parametrize("path", ["", "   ", None])
    def test_blank_path(self, log, path):
        assert read_template_lines(path, log) is None
        assert "must not be empty" in log.messages()[0]

    def test_missing_file(self, log, tmp_path):
        assert read_template_lines(tmp_path / "nope.tt", log) is None
        assert "was not found" in log.messages()[0]

    def test_directory_is_not_a_template(self, log, tmp_path):
        assert read_template_lines(tmp_path, log) is None
        assert "was not found" in log.messages()[0]

    def test_undecodable_file(self, log, tmp_path):
        path = tmp_path / "t.tt"
        path.write_bytes(b"### A\n    \xff\xfe\n")
        assert read_template_lines(path, log) is None
        assert "error occurred while reading" in log.messages()[0]


class TestWriteTextLines:
    def test_writes_one_line_each(self, log, tmp_path):
        path = tmp_path / "out.txt"
        assert write_text_lines(path, ["a", "  b", ""], log) is True
        assert path.read_text(encoding="utf-8") == "a\n  b\n\n"
        assert 'Writing generated text to file' in log.messages()[0]
        assert not log.has_warnings

    def test_creates_parent_directories(self, log, tmp_path):
        path = tmp_path / "x" / "y" / "out.txt"
        assert write_text_lines(path, ["a"], log)
        assert path.exists()

    def test_overwrites_existing_file(self, log, tmp_path):
        path = tmp_path / "out.txt"
        path.write_text("old\nstuff\n")
        write_text_lines(path, ["new"], log)
        assert path.read_text() == "new\n"

    def test_empty_buffer_is_not_written(self, log, tmp_path):
        path = tmp_path / "out.txt"
        assert write_text_lines(path, [], log) is False
        assert not path.exists()
        assert log.has_warnings

    def test_unwritable_target(self, log, tmp_path):
        """Writing over a directory fails and is logged."""
        assert write_text_lines(tmp_path, ["a"], log) is False
        assert "Unable to write to output file" in log.messages()[-1]
