"""Reading template files and writing generated text."""

import logging
from pathlib import Path
from typing import List, Optional, Sequence, Union

from .logbook import LogCategory, MessageLog
from .messages import (MSG_ERROR_READING_TEMPLATE, MSG_GENERATED_TEXT_IS_EMPTY,
                       MSG_TEMPLATE_FILE_NOT_FOUND, MSG_TEMPLATE_PATH_IS_EMPTY,
                       MSG_UNABLE_TO_WRITE_FILE, MSG_WRITING_TEXT_FILE)

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def read_template_lines(path: PathLike, log: MessageLog) -> Optional[List[str]]:
    """Return the lines of a template file, or None (after logging) if it can't be read."""
    if path is None or not str(path).strip():
        log.error(LogCategory.LOADING, MSG_TEMPLATE_PATH_IS_EMPTY)
        return None

    path = Path(path).expanduser()
    if not path.is_file():
        log.error(LogCategory.LOADING, MSG_TEMPLATE_FILE_NOT_FOUND, str(path))
        return None

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        log.error(LogCategory.LOADING, MSG_ERROR_READING_TEMPLATE, str(e))
        return None

    lines = text.splitlines()
    logger.debug(f"Read {len(lines)} lines from {path}")
    return lines


def write_text_lines(path: PathLike, lines: Sequence[str], log: MessageLog) -> bool:
    """Write `lines` to `path`, one per line. Returns False (after logging) on failure."""
    if not lines:
        log.log(LogCategory.WRITING, MSG_GENERATED_TEXT_IS_EMPTY, str(path))
        return False

    path = Path(path).expanduser()
    log.info(LogCategory.WRITING, MSG_WRITING_TEXT_FILE, str(path))

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            for line in lines:
                f.write(line + "\n")
    except OSError as e:
        log.error(LogCategory.WRITING, MSG_UNABLE_TO_WRITE_FILE, str(e))
        return False

    return True
