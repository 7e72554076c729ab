"""Indent processing.

The processor keeps a running column position (`current_indent`) that carries
over from one generated line to the next and from one segment to the next.
Indent values on text lines are in tab units and are multiplied by the active
tab size.
"""

import logging
from typing import List, Optional, Tuple

from .logbook import LogCategory, MessageLog
from .messages import (MSG_FIRST_TIME_INDENT_TRUNCATED,
                       MSG_INDENT_VALUE_NOT_A_NUMBER,
                       MSG_INDENT_VALUE_OUT_OF_RANGE,
                       MSG_LEFT_INDENT_TRUNCATED, MSG_TAB_SIZE_NOT_A_NUMBER,
                       MSG_TAB_SIZE_OUT_OF_RANGE, MSG_TAB_SIZE_TOO_LARGE,
                       MSG_TAB_SIZE_TOO_SMALL)
from .models import Position, TextItem
from .validation import parse_int

logger = logging.getLogger(__name__)

DEFAULT_TAB_SIZE = 4
MIN_INDENT_VALUE = -9
MAX_INDENT_VALUE = 9
MIN_TAB_SIZE = 1
MAX_TAB_SIZE = 9


class IndentProcessor:
    def __init__(self, log: MessageLog, position: Position, tab_size: int = DEFAULT_TAB_SIZE):
        self.log = log
        self.position = position
        self.default_tab_size = tab_size
        self.current_indent = 0
        self.tab_size = tab_size
        self._saved: List[Tuple[int, int]] = []

    def get_indent(self, text_item: TextItem) -> int:
        """Column for `text_item`, updating the running column unless one-time."""
        if text_item.is_relative:
            indent = self.current_indent + text_item.indent * self.tab_size
        else:
            indent = text_item.indent * self.tab_size

        if indent < 0:
            self.log.log(LogCategory.GENERATING, MSG_LEFT_INDENT_TRUNCATED, self.position.segment)
            indent = 0

        if not text_item.is_one_time:
            self.current_indent = indent

        return indent

    def get_first_time_indent(self, first_time_indent: int, text_item: TextItem) -> int:
        """Column for the first line of a segment's first render.

        A zero first-time indent means the option is off and the line is handled
        like any other. Otherwise the column is `first_time_indent` tabs from the
        left margin, whatever the previous segment left behind.
        """
        if first_time_indent == 0:
            return self.get_indent(text_item)

        indent = first_time_indent * self.tab_size
        if indent < 0:
            self.log.log(LogCategory.GENERATING, MSG_FIRST_TIME_INDENT_TRUNCATED, self.position.segment)
            indent = 0

        self.current_indent = indent
        return indent

    def is_valid_indent_value(self, text: str) -> Tuple[bool, int]:
        value = parse_int(text)
        if value is None:
            self.log.log(LogCategory.PARSING, MSG_INDENT_VALUE_NOT_A_NUMBER, text)
        elif MIN_INDENT_VALUE <= value <= MAX_INDENT_VALUE:
            return True, value
        else:
            self.log.log(LogCategory.PARSING, MSG_INDENT_VALUE_OUT_OF_RANGE, str(value))
        return False, 0

    def is_valid_tab_size_value(self, text: str) -> Tuple[bool, int]:
        value = parse_int(text)
        if value is None:
            self.log.log(LogCategory.PARSING, MSG_TAB_SIZE_NOT_A_NUMBER, text)
        elif MIN_TAB_SIZE <= value <= MAX_TAB_SIZE:
            return True, value
        else:
            self.log.log(LogCategory.PARSING, MSG_TAB_SIZE_OUT_OF_RANGE, str(value))
        return False, 0

    def tab_size_from_option(self, text: str) -> Optional[int]:
        """Tab size for a `TAB=` header option.

        Non-numeric values are rejected; numbers outside 1..9 are pulled back to
        the nearest bound.
        """
        value = parse_int(text)
        if value is None:
            self.log.log(LogCategory.PARSING, MSG_TAB_SIZE_NOT_A_NUMBER, text)
            return None
        return self._clamp_tab_size(value, LogCategory.PARSING)

    def set_tab_size(self, tab_size: int) -> None:
        self.tab_size = self._clamp_tab_size(tab_size, LogCategory.SETUP)

    def _clamp_tab_size(self, tab_size: int, category: LogCategory) -> int:
        if tab_size < MIN_TAB_SIZE:
            self.log.log(category, MSG_TAB_SIZE_TOO_SMALL, str(MIN_TAB_SIZE))
            return MIN_TAB_SIZE
        if tab_size > MAX_TAB_SIZE:
            self.log.log(category, MSG_TAB_SIZE_TOO_LARGE, str(MAX_TAB_SIZE))
            return MAX_TAB_SIZE
        return tab_size

    def save_state(self) -> None:
        self._saved.append((self.current_indent, self.tab_size))

    def restore_state(self) -> None:
        if not self._saved:
            logger.debug("restore_state called with nothing saved")
            return
        self.current_indent, self.tab_size = self._saved.pop()

    @property
    def saved_depth(self) -> int:
        return len(self._saved)

    def reset(self) -> None:
        self.current_indent = 0
        self.tab_size = self.default_tab_size
        self._saved.clear()
