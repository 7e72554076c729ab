"""Core data structures: segment control options, parsed text lines, position."""

from dataclasses import dataclass
from typing import NamedTuple, Optional, Tuple


class TextItem(NamedTuple):
    """A parsed body line.

    `indent` is measured in tab units. A relative item moves the column from
    wherever the previous line left it; an absolute item sets it outright. A
    one-time item affects only its own line.
    """

    indent: int
    is_relative: bool
    is_one_time: bool
    text: str


@dataclass
class ControlItem:
    """Per-segment options taken from the segment header line."""

    is_first_time: bool = True
    first_time_indent: int = 0
    pad_segment: str = ""
    tab_size: Optional[int] = None

    @property
    def should_generate_pad_segment(self) -> bool:
        # pad segments go between repeats, never ahead of the first render
        return bool(self.pad_segment) and not self.is_first_time

    def __str__(self):
        return (
            f"Is first time: {self.is_first_time} "
            f"/ FTI: {self.first_time_indent} "
            f"/ PAD: {self.pad_segment} "
            f"/ TAB: {self.tab_size}"
        )


class Position:
    """Tracks the segment and line currently being parsed or generated."""

    def __init__(self, segment: str = "", line_number: int = 0):
        self.segment = segment
        self.line_number = line_number

    @property
    def location(self) -> Tuple[str, int]:
        return self.segment, self.line_number

    @property
    def has_segment(self) -> bool:
        return bool(self.segment)

    def snapshot(self) -> Tuple[str, int]:
        return self.location

    def restore(self, snapshot: Tuple[str, int]) -> None:
        self.segment, self.line_number = snapshot

    def reset(self) -> None:
        self.segment = ""
        self.line_number = 0

    def __repr__(self):
        return f"Position({self.segment!r}, {self.line_number})"

    def __str__(self):
        return f"{self.segment}[{self.line_number}]"
