"""Builds the segment and control registries from template lines."""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, List, Optional

from .errors import DefaultNameLimitError
from .header_parser import SegmentHeaderParser
from .line_parser import LineKind, TextLineParser
from .logbook import LogCategory, MessageLog
from .messages import (MSG_DEFAULT_NAME_LIMIT, MSG_DUPLICATE_SEGMENT_NAME,
                       MSG_FATAL_SYNTAX_ERROR, MSG_MISSING_INITIAL_HEADER,
                       MSG_MULTIPLE_LEVELS_OF_PAD_SEGMENTS,
                       MSG_NO_TEXT_LINES_FOLLOWING_HEADER,
                       MSG_PAD_SEGMENT_MUST_BE_DEFINED_EARLIER,
                       MSG_PAD_SEGMENT_SAME_AS_HEADER, MSG_SEGMENT_ADDED)
from .models import ControlItem, Position, TextItem
from .tokens import TokenProcessor
from .validation import DefaultSegmentNamer

logger = logging.getLogger(__name__)


class LoadErrorKind(str, Enum):
    SYNTAX = "syntax"
    NAME_LIMIT = "name_limit"
    UNREADABLE = "unreadable"
    EMPTY = "empty"


@dataclass
class LoadResult:
    segments: Dict[str, List[TextItem]] = field(default_factory=dict)
    controls: Dict[str, ControlItem] = field(default_factory=dict)
    error: Optional[LoadErrorKind] = None
    line_number: int = 0

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def failed(cls, error: LoadErrorKind, line_number: int = 0) -> "LoadResult":
        return cls(error=error, line_number=line_number)


class TemplateLoader:
    def __init__(
        self,
        log: MessageLog,
        position: Position,
        namer: DefaultSegmentNamer,
        header_parser: SegmentHeaderParser,
        line_parser: TextLineParser,
        token_processor: TokenProcessor,
    ):
        self.log = log
        self.position = position
        self.namer = namer
        self.header_parser = header_parser
        self.line_parser = line_parser
        self.token_processor = token_processor
        self._segments: Dict[str, List[TextItem]] = {}
        self._controls: Dict[str, ControlItem] = {}

    def load_template(self, lines: Iterable[str]) -> LoadResult:
        """Parse every line. Content problems are logged; syntax errors fail the load."""
        self._segments = {}
        self._controls = {}
        self.position.reset()

        try:
            for line in lines:
                self.position.line_number += 1
                kind = self.line_parser.classify(line)

                if kind == LineKind.INVALID:
                    self.log.error(LogCategory.PARSING, MSG_FATAL_SYNTAX_ERROR, str(self.position.line_number))
                    return LoadResult.failed(LoadErrorKind.SYNTAX, self.position.line_number)
                if kind == LineKind.HEADER:
                    self._close_segment()
                    self._add_segment(line)
                elif kind == LineKind.TEXT:
                    self._add_text_line(line)
        except DefaultNameLimitError as e:
            self.log.error(LogCategory.PARSING, MSG_DEFAULT_NAME_LIMIT, str(e))
            return LoadResult.failed(LoadErrorKind.NAME_LIMIT, self.position.line_number)

        self._close_segment()
        logger.debug(f"Loaded {len(self._segments)} segments")
        return LoadResult(self._segments, self._controls, line_number=self.position.line_number)

    def _add_segment(self, line: str) -> None:
        name, control = self.header_parser.parse_segment_header(line, self._controls)

        if name in self._controls:
            default_name = self.namer.next(self._controls)
            self.position.segment = default_name
            self.log.log(LogCategory.PARSING, MSG_DUPLICATE_SEGMENT_NAME, name, default_name)
            name = default_name

        if control.pad_segment:
            self._check_pad_segment(name, control)

        self._controls[name] = control
        self._segments[name] = []
        self.log.info(LogCategory.PARSING, MSG_SEGMENT_ADDED, name)

    def _check_pad_segment(self, name: str, control: ControlItem) -> None:
        pad = control.pad_segment
        if pad == name:
            self.log.log(LogCategory.PARSING, MSG_PAD_SEGMENT_SAME_AS_HEADER, name)
        elif pad not in self._controls:
            self.log.log(LogCategory.PARSING, MSG_PAD_SEGMENT_MUST_BE_DEFINED_EARLIER, name, pad)
        elif self._controls[pad].pad_segment:
            self.log.log(LogCategory.PARSING, MSG_MULTIPLE_LEVELS_OF_PAD_SEGMENTS, name, pad)
        else:
            return
        control.pad_segment = ""

    def _add_text_line(self, line: str) -> None:
        if not self.position.has_segment:
            name = self.namer.next(self._controls)
            self.position.segment = name
            self._controls[name] = ControlItem()
            self._segments[name] = []
            self.log.log(LogCategory.PARSING, MSG_MISSING_INITIAL_HEADER, name)

        text_item = self.line_parser.parse_text_line(line)
        self._segments[self.position.segment].append(text_item)
        self.token_processor.extract_tokens(self.position.segment, text_item.text)

    def _close_segment(self) -> None:
        """Drop the current segment if no text lines followed its header."""
        name = self.position.segment
        if name and not self._segments.get(name):
            self.log.log(LogCategory.PARSING, MSG_NO_TEXT_LINES_FOLLOWING_HEADER, name)
            self._segments.pop(name, None)
            self._controls.pop(name, None)
