"""The text template processor: loads a template and generates segments on demand.

Example:
    processor = build_processor()
    processor.load_template([
        "### Greeting",
        "    Hello <#name#>!",
    ])
    processor.generate_segment("Greeting", {"name": "Bob"})
    processor.generated_text  # ["Hello Bob!"]
"""

import logging
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, Union

from .config import Settings, load_settings
from .files import read_template_lines, write_text_lines
from .header_parser import SegmentHeaderParser
from .indent import IndentProcessor
from .line_parser import TextLineParser
from .loader import LoadErrorKind, LoadResult, TemplateLoader
from .logbook import LogCategory, MessageLog
from .messages import (MSG_ATTEMPT_TO_LOAD_MORE_THAN_ONCE,
                       MSG_GENERATE_BEFORE_LOAD,
                       MSG_GENERATED_TEXT_HAS_BEEN_RESET, MSG_INVALID_DELIMITERS,
                       MSG_LOADING_TEMPLATE, MSG_NEXT_LOAD_BEFORE_WRITE,
                       MSG_PROCESSING_SEGMENT, MSG_SEGMENT_HAS_BEEN_RESET,
                       MSG_SEGMENT_HAS_NO_TEXT_LINES, MSG_SEGMENT_NAME_IS_BLANK,
                       MSG_TEMPLATE_HAS_BEEN_RESET, MSG_TEMPLATE_IS_EMPTY,
                       MSG_TEMPLATE_LOAD_FAILED, MSG_UNABLE_TO_RESET_SEGMENT,
                       MSG_UNKNOWN_SEGMENT_NAME)
from .models import ControlItem, Position, TextItem
from .tokens import TokenProcessor
from .validation import DefaultSegmentNamer, NameValidator

logger = logging.getLogger(__name__)

INLINE_TEMPLATE_NAME = "<lines>"


class TextTemplateProcessor:
    def __init__(
        self,
        log: MessageLog,
        position: Position,
        namer: DefaultSegmentNamer,
        indent_processor: IndentProcessor,
        token_processor: TokenProcessor,
        loader: TemplateLoader,
    ):
        self.log = log
        self.position = position
        self.namer = namer
        self.indent_processor = indent_processor
        self.token_processor = token_processor
        self.loader = loader
        self._segments: Dict[str, List[TextItem]] = {}
        self._controls: Dict[str, ControlItem] = {}
        self._generated_text: List[str] = []
        self.is_template_loaded = False
        self.is_output_written = False
        self.template_path: Optional[Path] = None
        self.last_load_error: Optional[LoadErrorKind] = None

    @property
    def generated_text(self) -> List[str]:
        return list(self._generated_text)

    @property
    def segments(self) -> Dict[str, List[TextItem]]:
        return {name: list(items) for name, items in self._segments.items()}

    @property
    def controls(self) -> Dict[str, ControlItem]:
        return dict(self._controls)

    @property
    def current_indent(self) -> int:
        return self.indent_processor.current_indent

    @property
    def tab_size(self) -> int:
        return self.indent_processor.tab_size

    @property
    def current_segment(self) -> str:
        return self.position.segment

    @property
    def line_number(self) -> int:
        return self.position.line_number

    @property
    def template_name(self) -> str:
        return self.template_path.name if self.template_path else INLINE_TEMPLATE_NAME

    # loading

    def load_template(self, lines: Iterable[str], name: str = INLINE_TEMPLATE_NAME) -> bool:
        """Load template lines, replacing whatever was loaded before.

        Returns True if the template loaded. Failures are logged and leave the
        processor empty.
        """
        lines = list(lines)
        self._clear()

        if not lines or (len(lines) == 1 and not lines[0].strip()):
            self.log.log(LogCategory.LOADING, MSG_TEMPLATE_IS_EMPTY, name)
            self.last_load_error = LoadErrorKind.EMPTY
            return False

        self.log.info(LogCategory.LOADING, MSG_LOADING_TEMPLATE, name)
        result = self.loader.load_template(lines)
        return self._apply_load_result(result, name)

    def _apply_load_result(self, result: LoadResult, name: str) -> bool:
        if not result.ok:
            self._clear()
            self.log.error(LogCategory.LOADING, MSG_TEMPLATE_LOAD_FAILED, name, f"({result.error.value} error at line {result.line_number})")
            self.last_load_error = result.error
            return False

        self._segments = result.segments
        self._controls = result.controls
        self.is_template_loaded = True
        self.is_output_written = False
        self.last_load_error = None
        return True

    def load_template_file(self, path: Union[str, Path]) -> bool:
        """Load a template from a file.

        Loading the file that is already loaded is ignored.
        """
        new_path = Path(path).expanduser().resolve() if str(path).strip() else None
        previous_path = self.template_path

        if new_path is not None and self.is_template_loaded and new_path == previous_path:
            self.log.log(LogCategory.LOADING, MSG_ATTEMPT_TO_LOAD_MORE_THAN_ONCE, new_path.name)
            return True

        if previous_path is not None and self._generated_text and not self.is_output_written:
            self.log.log(LogCategory.LOADING, MSG_NEXT_LOAD_BEFORE_WRITE, str(path), previous_path.name)

        lines = read_template_lines(path, self.log)
        if lines is None:
            self._clear()
            self.template_path = None
            self.last_load_error = LoadErrorKind.UNREADABLE
            return False

        loaded = self.load_template(lines, name=new_path.name)
        self.template_path = new_path if loaded else None
        return loaded

    # generating

    def generate_segment(self, segment_name: str, token_values: Optional[Mapping[str, Optional[str]]] = None) -> None:
        """Append the lines of a segment to the generated text."""
        self.position.segment = segment_name or ""
        self.position.line_number = 0

        if not self._segment_can_be_generated(self.position.segment):
            return

        self._generate(self.position.segment, token_values)
        self.is_output_written = False

    def _segment_can_be_generated(self, segment_name: str) -> bool:
        if not segment_name.strip():
            self.log.log(LogCategory.GENERATING, MSG_SEGMENT_NAME_IS_BLANK)
            return False
        if not self.is_template_loaded:
            self.log.log(LogCategory.GENERATING, MSG_GENERATE_BEFORE_LOAD, segment_name)
            return False
        if segment_name not in self._controls:
            self.log.log(LogCategory.GENERATING, MSG_UNKNOWN_SEGMENT_NAME, segment_name)
            return False
        if not self._segments.get(segment_name):
            self.log.log(LogCategory.GENERATING, MSG_SEGMENT_HAS_NO_TEXT_LINES, segment_name)
            return False
        return True

    def _generate(self, segment_name: str, token_values: Optional[Mapping[str, Optional[str]]] = None) -> None:
        self.position.segment = segment_name
        self.position.line_number = 0
        self.log.info(LogCategory.GENERATING, MSG_PROCESSING_SEGMENT, segment_name)

        control = self._controls[segment_name]

        if token_values is not None:
            self.token_processor.load_token_values(segment_name, token_values)

        if control.should_generate_pad_segment:
            self._generate_pad_segment(control.pad_segment)

        if control.tab_size is not None:
            self.indent_processor.set_tab_size(control.tab_size)

        for text_item in self._segments[segment_name]:
            self.position.line_number += 1
            self._generate_text_line(segment_name, control, text_item)

    def _generate_pad_segment(self, pad_segment: str) -> None:
        """Generate the pad segment without disturbing the caller's indent state."""
        saved_position = self.position.snapshot()
        self.indent_processor.save_state()
        try:
            self._generate(pad_segment)
        finally:
            self.indent_processor.restore_state()
            self.position.restore(saved_position)

    def _generate_text_line(self, segment_name: str, control: ControlItem, text_item: TextItem) -> None:
        if control.is_first_time:
            indent = self.indent_processor.get_first_time_indent(control.first_time_indent, text_item)
            control.is_first_time = False
        else:
            indent = self.indent_processor.get_indent(text_item)

        text = self.token_processor.replace_tokens(segment_name, text_item.text)
        self._generated_text.append(" " * indent + text)

    # setup

    def set_tab_size(self, tab_size: int) -> None:
        self.indent_processor.set_tab_size(tab_size)

    def set_token_delimiters(self, token_start: str, token_end: str, token_escape: str) -> bool:
        """Change token delimiters. An invalid set resets the whole processor."""
        if self.token_processor.set_token_delimiters(token_start, token_end, token_escape):
            # token names found at load time depend on the delimiters
            self.token_processor.rescan_tokens(
                {name: [item.text for item in items] for name, items in self._segments.items()}
            )
            return True
        self.log.error(LogCategory.SETUP, MSG_INVALID_DELIMITERS)
        self.reset_all()
        return False

    def load_token_values(self, segment_name: str, token_values: Optional[Mapping[str, Optional[str]]]) -> None:
        self.token_processor.load_token_values(segment_name, token_values)

    # resetting

    def reset_all(self) -> None:
        """Forget the template, the generated text and all processor state."""
        self._clear()
        self.token_processor.reset_token_delimiters()
        self.log.info(LogCategory.RESET, MSG_TEMPLATE_HAS_BEEN_RESET, self.template_name)
        self.template_path = None

    def _clear(self) -> None:
        self._generated_text.clear()
        self._segments = {}
        self._controls = {}
        self.position.reset()
        self.namer.reset()
        self.indent_processor.reset()
        self.token_processor.clear_tokens()
        self.is_template_loaded = False
        self.is_output_written = False

    def reset_generated_text(self, log_reset: bool = True) -> None:
        """Clear the generated text so segments render as if for the first time."""
        self._generated_text.clear()
        self.position.reset()
        self.indent_processor.reset()
        for control in self._controls.values():
            control.is_first_time = True

        if log_reset:
            self.log.info(LogCategory.RESET, MSG_GENERATED_TEXT_HAS_BEEN_RESET, self.template_name)

    def reset_segment(self, segment_name: str) -> None:
        """Make the next render of one segment behave like its first."""
        self.position.segment = segment_name or ""
        self.position.line_number = 0

        if segment_name in self._controls:
            self._controls[segment_name].is_first_time = True
            self.log.info(LogCategory.RESET, MSG_SEGMENT_HAS_BEEN_RESET, segment_name)
        else:
            self.log.log(LogCategory.RESET, MSG_UNABLE_TO_RESET_SEGMENT, self.position.segment)

    # writing

    def write_generated_text(self, path: Union[str, Path], reset: bool = True) -> bool:
        """Write the generated text to a file, then clear it unless `reset` is False."""
        if not write_text_lines(path, self._generated_text, self.log):
            return False
        if reset:
            self.reset_generated_text()
        self.is_output_written = True
        return True


def build_processor(settings: Optional[Settings] = None) -> TextTemplateProcessor:
    """Wire up a TextTemplateProcessor and its collaborators."""
    settings = settings or load_settings()

    position = Position()
    log = MessageLog(position)
    namer = DefaultSegmentNamer(settings.default_segment_prefix, settings.max_default_names)
    validator = NameValidator()
    indent_processor = IndentProcessor(log, position, settings.tab_size)
    token_processor = TokenProcessor(
        log,
        position,
        validator,
        settings.token_start,
        settings.token_end,
        settings.token_escape,
    )
    header_parser = SegmentHeaderParser(log, position, namer, validator, indent_processor)
    line_parser = TextLineParser(log)
    loader = TemplateLoader(log, position, namer, header_parser, line_parser, token_processor)

    return TextTemplateProcessor(log, position, namer, indent_processor, token_processor, loader)
