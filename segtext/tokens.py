"""Token substitution.

A token is a name wrapped in start/end delimiters, `<#name#>` by default. The
escape string placed right before either delimiter makes it literal. A case
flag right after the start delimiter adjusts the first character of the value:
`+` upper-cases it, `-` lower-cases it, `=` leaves it alone.
"""

import logging
from typing import (Dict, Iterable, Iterator, Mapping, NamedTuple, Optional,
                    Set)

from .logbook import LogCategory, MessageLog
from .messages import (MSG_MISSING_TOKEN_NAME, MSG_TOKEN_DICTIONARY_INVALID_NAME,
                       MSG_TOKEN_DICTIONARY_IS_EMPTY,
                       MSG_TOKEN_DICTIONARY_IS_NULL,
                       MSG_TOKEN_END_AND_ESCAPE_SAME, MSG_TOKEN_END_IS_EMPTY,
                       MSG_TOKEN_END_IS_NULL, MSG_TOKEN_ESCAPE_IS_EMPTY,
                       MSG_TOKEN_ESCAPE_IS_NULL, MSG_TOKEN_HAS_INVALID_NAME,
                       MSG_TOKEN_MISSING_END_DELIMITER,
                       MSG_TOKEN_NAME_NOT_FOUND, MSG_TOKEN_START_AND_END_SAME,
                       MSG_TOKEN_START_AND_ESCAPE_SAME,
                       MSG_TOKEN_START_IS_EMPTY, MSG_TOKEN_START_IS_NULL,
                       MSG_TOKEN_START_WARNING, MSG_TOKEN_VALUE_IS_EMPTY,
                       MSG_TOKEN_VALUE_IS_NULL, MSG_UNKNOWN_TOKEN_NAME)
from .models import Position
from .validation import NameValidator

logger = logging.getLogger(__name__)

DEFAULT_TOKEN_START = "<#"
DEFAULT_TOKEN_END = "#>"
DEFAULT_TOKEN_ESCAPE = "\\"

LOWERCASE_FLAG = "-"
UPPERCASE_FLAG = "+"
SAME_CASE_FLAG = "="
CASE_FLAGS = (LOWERCASE_FLAG, UPPERCASE_FLAG, SAME_CASE_FLAG)

# kinds of text fragment produced by the scanner
LITERAL = "literal"
TOKEN = "token"
EMPTY_TOKEN = "empty"
UNTERMINATED = "unterminated"


class Fragment(NamedTuple):
    kind: str
    raw: str
    name: str = ""
    case: str = SAME_CASE_FLAG


class TokenProcessor:
    def __init__(
        self,
        log: MessageLog,
        position: Position,
        validator: NameValidator,
        token_start: str = DEFAULT_TOKEN_START,
        token_end: str = DEFAULT_TOKEN_END,
        token_escape: str = DEFAULT_TOKEN_ESCAPE,
    ):
        self.log = log
        self.position = position
        self.validator = validator
        self._defaults = (token_start, token_end, token_escape)
        self.token_start = token_start
        self.token_end = token_end
        self.token_escape = token_escape
        self._bindings: Dict[str, Dict[str, Optional[str]]] = {}
        self._known_tokens: Dict[str, Set[str]] = {}

    def set_token_delimiters(self, token_start: Optional[str], token_end: Optional[str], token_escape: Optional[str]) -> bool:
        """Change the delimiters. Returns False, keeping the old ones, if invalid."""
        problem = self._delimiter_problem(token_start, token_end, token_escape)
        if problem is not None:
            message, arg1, arg2 = problem
            self.log.log(LogCategory.SETUP, message, arg1, arg2)
            return False

        if token_start[-1] in CASE_FLAGS:
            self.log.log(LogCategory.SETUP, MSG_TOKEN_START_WARNING)

        self.token_start = token_start
        self.token_end = token_end
        self.token_escape = token_escape
        return True

    @staticmethod
    def _delimiter_problem(token_start, token_end, token_escape):
        if token_start is None:
            return MSG_TOKEN_START_IS_NULL, None, None
        if token_end is None:
            return MSG_TOKEN_END_IS_NULL, None, None
        if token_escape is None:
            return MSG_TOKEN_ESCAPE_IS_NULL, None, None
        if not token_start.strip():
            return MSG_TOKEN_START_IS_EMPTY, None, None
        if not token_end.strip():
            return MSG_TOKEN_END_IS_EMPTY, None, None
        if not token_escape.strip():
            return MSG_TOKEN_ESCAPE_IS_EMPTY, None, None
        if token_start == token_end:
            return MSG_TOKEN_START_AND_END_SAME, token_start, token_end
        if token_start == token_escape:
            return MSG_TOKEN_START_AND_ESCAPE_SAME, token_start, token_escape
        if token_end == token_escape:
            return MSG_TOKEN_END_AND_ESCAPE_SAME, token_end, token_escape
        return None

    def reset_token_delimiters(self) -> None:
        self.token_start, self.token_end, self.token_escape = self._defaults

    def extract_tokens(self, segment: str, text: str) -> Set[str]:
        """Record the token names used in `text` as belonging to `segment`."""
        names = self._known_tokens.setdefault(segment, set())
        for fragment in self._scan(text):
            if fragment.kind == TOKEN and self.validator.is_valid_name(fragment.name):
                names.add(fragment.name)
        return names

    def rescan_tokens(self, segment_texts: Mapping[str, Iterable[str]]) -> None:
        """Rebuild the known token names from segment text using the current delimiters."""
        self._known_tokens.clear()
        for segment, texts in segment_texts.items():
            self._known_tokens[segment] = set()
            for text in texts:
                self.extract_tokens(segment, text)

    def known_tokens(self, segment: str) -> Set[str]:
        return set(self._known_tokens.get(segment, ()))

    def token_values(self, segment: str) -> Dict[str, Optional[str]]:
        return dict(self._bindings.get(segment, {}))

    def load_token_values(self, segment: str, token_values: Optional[Mapping[str, Optional[str]]]) -> None:
        """Merge `token_values` into the bindings used when generating `segment`."""
        if token_values is None:
            self.log.log(LogCategory.GENERATING, MSG_TOKEN_DICTIONARY_IS_NULL, segment)
            return
        if not token_values:
            self.log.log(LogCategory.GENERATING, MSG_TOKEN_DICTIONARY_IS_EMPTY, segment)
            return

        bindings = self._bindings.setdefault(segment, {})
        known = self._known_tokens.get(segment)

        for name, value in token_values.items():
            if not self.validator.is_valid_name(name):
                self.log.log(LogCategory.GENERATING, MSG_TOKEN_DICTIONARY_INVALID_NAME, segment, str(name))
                continue
            if known is not None and name not in known:
                self.log.log(LogCategory.GENERATING, MSG_UNKNOWN_TOKEN_NAME, segment, name)
                continue
            bindings[name] = None if value is None else str(value)

    def replace_tokens(self, segment: str, text: str) -> str:
        """Substitute bound values for the tokens in `text`.

        The line is scanned once, left to right; substituted values are never
        scanned again. Tokens that can't be resolved are written out unchanged.
        """
        bindings = self._bindings.get(segment, {})
        output = []

        for fragment in self._scan(text):
            if fragment.kind == LITERAL:
                output.append(fragment.raw)
            elif fragment.kind == UNTERMINATED:
                self.log.log(LogCategory.GENERATING, MSG_TOKEN_MISSING_END_DELIMITER)
                output.append(fragment.raw)
            elif fragment.kind == EMPTY_TOKEN:
                self.log.log(LogCategory.GENERATING, MSG_MISSING_TOKEN_NAME)
                output.append(fragment.raw)
            elif not self.validator.is_valid_name(fragment.name):
                self.log.log(LogCategory.GENERATING, MSG_TOKEN_HAS_INVALID_NAME, fragment.name)
                output.append(fragment.raw)
            elif fragment.name not in bindings:
                self.log.log(LogCategory.GENERATING, MSG_TOKEN_NAME_NOT_FOUND, segment, fragment.name)
                output.append(fragment.raw)
            else:
                output.append(self._replacement_value(segment, fragment, bindings[fragment.name]))

        return "".join(output)

    def _replacement_value(self, segment: str, fragment: Fragment, value: Optional[str]) -> str:
        if value is None:
            self.log.log(LogCategory.GENERATING, MSG_TOKEN_VALUE_IS_NULL, segment, fragment.name)
            return ""
        if value == "":
            self.log.log(LogCategory.GENERATING, MSG_TOKEN_VALUE_IS_EMPTY, segment, fragment.name)
            return ""
        if fragment.case == UPPERCASE_FLAG:
            return value[0].upper() + value[1:]
        if fragment.case == LOWERCASE_FLAG:
            return value[0].lower() + value[1:]
        return value

    def _scan(self, text: str) -> Iterator[Fragment]:
        start, end, escape = self.token_start, self.token_end, self.token_escape
        literal = []
        i = 0

        while i < len(text):
            if text.startswith(escape, i):
                after = i + len(escape)
                if text.startswith(start, after):
                    literal.append(start)
                    i = after + len(start)
                elif text.startswith(end, after):
                    literal.append(end)
                    i = after + len(end)
                else:
                    literal.append(escape)
                    i = after
                continue

            if not text.startswith(start, i):
                literal.append(text[i])
                i += 1
                continue

            if literal:
                yield Fragment(LITERAL, "".join(literal))
                literal = []

            name_start = i + len(start)
            close = text.find(end, name_start)
            if close < 0:
                yield Fragment(UNTERMINATED, text[i:])
                return

            raw = text[i:close + len(end)]
            inner = text[name_start:close]
            case = SAME_CASE_FLAG
            if inner and inner[0] in CASE_FLAGS:
                case = inner[0]
                inner = inner[1:]
            name = inner.strip()

            yield Fragment(TOKEN if name else EMPTY_TOKEN, raw, name, case)
            i = close + len(end)

        if literal:
            yield Fragment(LITERAL, "".join(literal))

    def clear_tokens(self) -> None:
        self._bindings.clear()
        self._known_tokens.clear()
