"""Exception classes for segtext."""

from typing import Optional


class SegtextError(Exception):
    """Base class for segtext errors.

    Content problems in a template are never raised; they are recorded in the
    message log. Exceptions are reserved for conditions a component cannot
    recover from locally, and the loader converts them into a failed result.
    """

    def __init__(self, message: str, segment: Optional[str] = None, line_number: Optional[int] = None):
        self.segment = segment
        self.line_number = line_number
        super().__init__(message)

    def __str__(self):
        if self.segment:
            return f"{self.args[0]} ({self.segment}[{self.line_number or 0}])"
        return self.args[0]


class DefaultNameLimitError(SegtextError):
    """Raised when the default segment name generator runs past its ceiling."""

    def __init__(self, prefix: str, ceiling: int):
        self.prefix = prefix
        self.ceiling = ceiling
        super().__init__(
            f"More than {ceiling} default segment names were requested (prefix {prefix!r})"
        )
