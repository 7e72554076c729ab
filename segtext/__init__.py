"""segtext -- segmented text templates with managed indentation and tokens."""

import logging

# Version - reads from package metadata (set in pyproject.toml)
try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("segtext")
except PackageNotFoundError:
    __version__ = "0.0.0+dev"

logger = logging.getLogger(__name__)
# entries are kept in MessageLog; the host decides whether to attach a handler
logger.addHandler(logging.NullHandler())

from .config import Settings, load_settings
from .errors import DefaultNameLimitError, SegtextError
from .files import read_template_lines, write_text_lines
from .header_parser import SegmentHeaderParser
from .indent import IndentProcessor
from .line_parser import LineKind, TextLineParser
from .loader import LoadErrorKind, LoadResult, TemplateLoader
from .logbook import LogCategory, LogEntry, MessageLog
from .models import ControlItem, Position, TextItem
from .processor import TextTemplateProcessor, build_processor
from .tokens import TokenProcessor
from .validation import DefaultSegmentNamer, NameValidator

__all__ = [
    "ControlItem",
    "DefaultNameLimitError",
    "DefaultSegmentNamer",
    "IndentProcessor",
    "LineKind",
    "LoadErrorKind",
    "LoadResult",
    "LogCategory",
    "LogEntry",
    "MessageLog",
    "NameValidator",
    "Position",
    "SegmentHeaderParser",
    "SegtextError",
    "Settings",
    "TemplateLoader",
    "TextItem",
    "TextLineParser",
    "TextTemplateProcessor",
    "TokenProcessor",
    "build_processor",
    "load_settings",
    "read_template_lines",
    "write_text_lines",
]
