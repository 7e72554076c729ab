"""Fixed-column classification and parsing of template lines.

Columns 1-3 of every line hold a control code and column 4 must be blank:

    ###  segment header, the name starts in column 5
    ///  comment
         (three blanks) text line that keeps the current indent
    @+n  text line, indent n tabs right of the current column
    @-n  text line, indent n tabs left of the current column
    @=n  text line, indent exactly n tabs
    O+n  like @+n but only for this line (also O-n and O=n)

Text starts in column 5.
"""

import re
from enum import Enum

from .logbook import LogCategory, MessageLog
from .messages import (MSG_FOURTH_CHARACTER_MUST_BE_BLANK,
                       MSG_INVALID_CONTROL_CODE, MSG_MINIMUM_LINE_LENGTH)
from .models import TextItem

SEGMENT_HEADER_CODE = "###"
COMMENT_CODE = "///"
NO_INDENT_CODE = "   "
NORMAL_INDENT_CODE = "@"
ONE_TIME_INDENT_CODE = "O"
ABSOLUTE_INDENT_CODE = "="

_INDENT_KIND = rf"[{NORMAL_INDENT_CODE}{ONE_TIME_INDENT_CODE}]"
_INDENT_DIRECTION = r"[=+\-]"
_INDENT_CODE = rf"{_INDENT_KIND}{_INDENT_DIRECTION}[0-9]"

VALID_TEMPLATE_LINE = re.compile(
    rf"^(?:{NO_INDENT_CODE}|{SEGMENT_HEADER_CODE}|{COMMENT_CODE}|{_INDENT_CODE})"
)
VALID_TEXT_LINE = re.compile(rf"^(?:{NO_INDENT_CODE}|{_INDENT_CODE})")

MIN_LINE_LENGTH = 3
TEXT_COLUMN = 4


class LineKind(Enum):
    HEADER = "header"
    COMMENT = "comment"
    TEXT = "text"
    # too short to carry a control code; skipped
    SHORT = "short"
    # bad control code or non-blank fourth column; stops the load
    INVALID = "invalid"


class TextLineParser:
    def __init__(self, log: MessageLog):
        self.log = log

    def is_comment_line(self, line: str) -> bool:
        return line.startswith(COMMENT_CODE)

    def is_segment_header(self, line: str) -> bool:
        return line.startswith(SEGMENT_HEADER_CODE)

    def is_text_line(self, line: str) -> bool:
        return VALID_TEXT_LINE.match(line) is not None

    def classify(self, line: str) -> LineKind:
        """Work out what kind of line this is, logging anything malformed."""
        if len(line) < MIN_LINE_LENGTH:
            self.log.log(LogCategory.PARSING, MSG_MINIMUM_LINE_LENGTH)
            return LineKind.SHORT

        if len(line) > MIN_LINE_LENGTH and line[MIN_LINE_LENGTH] != " ":
            self.log.error(LogCategory.PARSING, MSG_FOURTH_CHARACTER_MUST_BE_BLANK, line)
            return LineKind.INVALID

        if not VALID_TEMPLATE_LINE.match(line):
            self.log.error(LogCategory.PARSING, MSG_INVALID_CONTROL_CODE, line)
            return LineKind.INVALID

        if self.is_comment_line(line):
            return LineKind.COMMENT
        if self.is_segment_header(line):
            return LineKind.HEADER
        return LineKind.TEXT

    def parse_text_line(self, line: str) -> TextItem:
        """Build a TextItem from a line already classified as text."""
        code = line[:MIN_LINE_LENGTH]
        text = line[TEXT_COLUMN:] if len(line) > TEXT_COLUMN else ""

        if code == NO_INDENT_CODE:
            return TextItem(0, True, False, text)

        is_one_time = code[0] == ONE_TIME_INDENT_CODE
        is_relative = code[1] != ABSOLUTE_INDENT_CODE
        indent = int(code[2])
        if code[1] == "-":
            indent = -indent

        return TextItem(indent, is_relative, is_one_time, text)
