"""Segment header parsing.

A header looks like:

    ### SegmentName FTI=1 PAD=Separator TAB=2

Options are KEY=VALUE pairs separated by blanks or commas. Problems with the
name or an option are logged and a default is used; a header never stops the
load.
"""

import re
from typing import Container, List, NamedTuple, Optional, Tuple

from .indent import IndentProcessor
from .logbook import LogCategory, MessageLog
from .messages import (MSG_DUPLICATE_OPTION, MSG_FIRST_TIME_INDENT_SET_TO_ZERO,
                       MSG_INVALID_FORM_OF_OPTION, MSG_INVALID_PAD_SEGMENT_NAME,
                       MSG_INVALID_SEGMENT_NAME,
                       MSG_OPTION_NAME_MUST_PRECEDE_EQUALS,
                       MSG_OPTION_VALUE_MUST_FOLLOW_EQUALS,
                       MSG_SEGMENT_NAME_MUST_START_IN_COLUMN_5,
                       MSG_UNKNOWN_SEGMENT_OPTION)
from .models import ControlItem, Position
from .validation import DefaultSegmentNamer, NameValidator

FIRST_TIME_INDENT_OPTION = "FTI"
PAD_SEGMENT_OPTION = "PAD"
TAB_SIZE_OPTION = "TAB"
SEGMENT_OPTIONS = (FIRST_TIME_INDENT_OPTION, PAD_SEGMENT_OPTION, TAB_SIZE_OPTION)

NAME_COLUMN = 4
FIELD_SEPARATORS = re.compile(r"[ ,]")


class ParsedHeader(NamedTuple):
    name: str
    control: ControlItem


class SegmentHeaderParser:
    def __init__(
        self,
        log: MessageLog,
        position: Position,
        namer: DefaultSegmentNamer,
        validator: NameValidator,
        indent_processor: IndentProcessor,
    ):
        self.log = log
        self.position = position
        self.namer = namer
        self.validator = validator
        self.indent_processor = indent_processor

    def parse_segment_header(self, line: str, taken: Container[str] = ()) -> ParsedHeader:
        """Extract the segment name and options from a header line.

        Default names skip anything in `taken`. The chosen name also becomes
        the current position's segment so later messages point at it.
        """
        if len(line) <= NAME_COLUMN:
            name = self._use_default_name(taken)
            self.log.log(LogCategory.PARSING, MSG_SEGMENT_NAME_MUST_START_IN_COLUMN_5, name)
            return ParsedHeader(name, ControlItem())

        fields = [f for f in FIELD_SEPARATORS.split(line) if f]

        if line[NAME_COLUMN] == " " or len(fields) < 2:
            name = self._use_default_name(taken)
            self.log.log(LogCategory.PARSING, MSG_SEGMENT_NAME_MUST_START_IN_COLUMN_5, name)
            options = fields[1:]
        else:
            name = fields[1]
            options = fields[2:]
            if self.validator.is_valid_name(name):
                self.position.segment = name
            else:
                default_name = self._use_default_name(taken)
                self.log.log(LogCategory.PARSING, MSG_INVALID_SEGMENT_NAME, name, default_name)
                name = default_name

        return ParsedHeader(name, self.parse_segment_options(options))

    def _use_default_name(self, taken: Container[str]) -> str:
        name = self.namer.next(taken)
        self.position.segment = name
        return name

    def parse_segment_options(self, options: List[str]) -> ControlItem:
        control = ControlItem()
        found = set()

        for option in options:
            parsed = self.parse_segment_option(option)
            if parsed is None:
                continue
            option_name, option_value = parsed

            if option_name in found:
                self.log.log(LogCategory.PARSING, MSG_DUPLICATE_OPTION, self.position.segment, option_name)
                continue
            found.add(option_name)

            if option_name == FIRST_TIME_INDENT_OPTION:
                self._set_first_time_indent(control, option_value)
            elif option_name == PAD_SEGMENT_OPTION:
                self._set_pad_segment(control, option_value)
            elif option_name == TAB_SIZE_OPTION:
                self._set_tab_size(control, option_value)

        return control

    def parse_segment_option(self, option: str) -> Optional[Tuple[str, str]]:
        """Split `KEY=VALUE`, returning None (after logging) if malformed or unknown."""
        segment = self.position.segment

        if "=" not in option:
            self.log.log(LogCategory.PARSING, MSG_INVALID_FORM_OF_OPTION, segment, option)
            return None

        key, _, value = option.partition("=")
        if not key:
            self.log.log(LogCategory.PARSING, MSG_OPTION_NAME_MUST_PRECEDE_EQUALS, segment)
            return None

        key = key.upper()
        if key not in SEGMENT_OPTIONS:
            self.log.log(LogCategory.PARSING, MSG_UNKNOWN_SEGMENT_OPTION, segment, option)
            return None

        if not value:
            self.log.log(LogCategory.PARSING, MSG_OPTION_VALUE_MUST_FOLLOW_EQUALS, segment, key)
            return None

        return key, value

    def _set_first_time_indent(self, control: ControlItem, value: str) -> None:
        is_valid, indent = self.indent_processor.is_valid_indent_value(value)
        if not is_valid:
            return
        if indent == 0:
            self.log.log(LogCategory.PARSING, MSG_FIRST_TIME_INDENT_SET_TO_ZERO, self.position.segment)
        control.first_time_indent = indent

    def _set_pad_segment(self, control: ControlItem, value: str) -> None:
        if self.validator.is_valid_name(value):
            control.pad_segment = value
        else:
            self.log.log(LogCategory.PARSING, MSG_INVALID_PAD_SEGMENT_NAME, self.position.segment, value)

    def _set_tab_size(self, control: ControlItem, value: str) -> None:
        tab_size = self.indent_processor.tab_size_from_option(value)
        if tab_size is not None:
            control.tab_size = tab_size
