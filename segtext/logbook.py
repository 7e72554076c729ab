"""Message log shared by every segtext component.

Template problems are never raised. They are recorded here as `LogEntry`
objects, stamped with the current segment and line while parsing or
generating, and forwarded to the standard `logging` module. The host decides
when to flush the accumulated entries.
"""

import logging
from enum import Enum
from typing import Callable, List, Optional

from pydantic import BaseModel, ConfigDict

from .models import Position

logger = logging.getLogger(__name__)


class LogCategory(str, Enum):
    SETUP = "Setup"
    LOADING = "Loading"
    PARSING = "Parsing"
    GENERATING = "Generating"
    WRITING = "Writing"
    RESET = "Reset"
    USER = "User"


# categories whose entries carry a segment/line location
LOCATED_CATEGORIES = {LogCategory.PARSING, LogCategory.GENERATING}


class LogEntry(BaseModel):
    """A single formatted message."""

    model_config = ConfigDict(frozen=True)

    category: LogCategory
    message: str
    segment: str = ""
    line_number: int = 0
    level: int = logging.WARNING

    def __str__(self):
        if not self.segment:
            return f"<{self.category.value}> {self.message}"
        return f"<{self.category.value}> {self.segment}[{self.line_number}] : {self.message}"


class MessageLog:
    """Collects log entries for later display."""

    def __init__(self, position: Optional[Position] = None):
        self.position = position if position is not None else Position()
        self._entries: List[LogEntry] = []

    @property
    def entries(self) -> List[LogEntry]:
        return list(self._entries)

    @property
    def has_warnings(self) -> bool:
        return any(e.level >= logging.WARNING for e in self._entries)

    def messages(self, category: Optional[LogCategory] = None) -> List[str]:
        """Formatted message text, optionally filtered by category."""
        return [
            e.message for e in self._entries if category is None or e.category == category
        ]

    def log(
        self,
        category: LogCategory,
        message: str,
        arg1: Optional[str] = None,
        arg2: Optional[str] = None,
        level: int = logging.WARNING,
    ) -> LogEntry:
        """Format `message` with up to two arguments and record it."""
        if arg1 is None:
            text = message
        elif arg2 is None:
            text = message.format(arg1)
        else:
            text = message.format(arg1, arg2)

        if category in LOCATED_CATEGORIES:
            entry = LogEntry(
                category=category,
                message=text,
                segment=self.position.segment,
                line_number=self.position.line_number,
                level=level,
            )
        else:
            entry = LogEntry(category=category, message=text, level=level)

        self._entries.append(entry)
        logger.log(level, str(entry))
        return entry

    def info(self, category: LogCategory, message: str, arg1: Optional[str] = None, arg2: Optional[str] = None) -> LogEntry:
        return self.log(category, message, arg1, arg2, level=logging.INFO)

    def error(self, category: LogCategory, message: str, arg1: Optional[str] = None, arg2: Optional[str] = None) -> LogEntry:
        return self.log(category, message, arg1, arg2, level=logging.ERROR)

    def clear(self) -> None:
        self._entries.clear()

    def flush(self, write: Callable[[str], None]) -> int:
        """Pass every entry to `write` and empty the log. Returns the count."""
        count = len(self._entries)
        for entry in self._entries:
            write(str(entry))
        self.clear()
        return count
