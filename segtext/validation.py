"""Name validation, default segment names and numeric option parsing."""

import re
from typing import Container, Optional

from .errors import DefaultNameLimitError

# letters first, then letters, digits or underscores
VALID_NAME_PATTERN = re.compile(r"[A-Za-z][A-Za-z0-9_]*")
INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")

DEFAULT_SEGMENT_PREFIX = "DefaultSegment"
MAX_DEFAULT_NAMES = 999


class NameValidator:
    """Checks segment names and token names."""

    def is_valid_name(self, identifier: Optional[str]) -> bool:
        return isinstance(identifier, str) and VALID_NAME_PATTERN.fullmatch(identifier) is not None


class DefaultSegmentNamer:
    """Generates `<prefix>1`, `<prefix>2`, ... for segments without a usable name."""

    def __init__(self, prefix: str = DEFAULT_SEGMENT_PREFIX, ceiling: int = MAX_DEFAULT_NAMES):
        self.prefix = prefix
        self.ceiling = ceiling
        self._counter = 0

    @property
    def count(self) -> int:
        return self._counter

    def next(self, taken: Container[str] = ()) -> str:
        """Next default name, skipping any already in `taken`."""
        while True:
            if self._counter >= self.ceiling:
                raise DefaultNameLimitError(self.prefix, self.ceiling)
            self._counter += 1
            name = f"{self.prefix}{self._counter}"
            if name not in taken:
                return name

    def reset(self) -> None:
        self._counter = 0


def parse_int(text: Optional[str]) -> Optional[int]:
    """Parse a plain decimal integer, returning None for anything else.

    Surrounding whitespace is allowed; embedded spaces, decimals and exponents
    are not.
    """
    if text is None:
        return None
    text = text.strip()
    if not INTEGER_PATTERN.fullmatch(text):
        return None
    return int(text)
