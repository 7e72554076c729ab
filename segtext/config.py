"""Settings for segtext, read from the environment (or a .env / settings.ini file).

Environment variables:
- SEGTEXT_TAB_SIZE: default tab size, 1-9 (default 4)
- SEGTEXT_TOKEN_START / SEGTEXT_TOKEN_END / SEGTEXT_TOKEN_ESCAPE: token delimiters
- SEGTEXT_DEFAULT_PREFIX: prefix for generated segment names
- SEGTEXT_MAX_DEFAULT_NAMES: how many generated names a template may use
- SEGTEXT_LOG_LEVEL: level for the segtext loggers
"""

from decouple import config as env_config
from pydantic import BaseModel, Field, model_validator

from .indent import DEFAULT_TAB_SIZE, MAX_TAB_SIZE, MIN_TAB_SIZE
from .tokens import DEFAULT_TOKEN_END, DEFAULT_TOKEN_ESCAPE, DEFAULT_TOKEN_START
from .validation import DEFAULT_SEGMENT_PREFIX, MAX_DEFAULT_NAMES


class Settings(BaseModel):
    tab_size: int = Field(default=DEFAULT_TAB_SIZE, ge=MIN_TAB_SIZE, le=MAX_TAB_SIZE)
    token_start: str = Field(default=DEFAULT_TOKEN_START, min_length=1)
    token_end: str = Field(default=DEFAULT_TOKEN_END, min_length=1)
    token_escape: str = Field(default=DEFAULT_TOKEN_ESCAPE, min_length=1)
    default_segment_prefix: str = Field(default=DEFAULT_SEGMENT_PREFIX, min_length=1)
    max_default_names: int = Field(default=MAX_DEFAULT_NAMES, ge=1)
    log_level: str = "WARNING"

    @model_validator(mode="after")
    def check_delimiters_distinct(self):
        delimiters = {self.token_start, self.token_end, self.token_escape}
        if len(delimiters) != 3:
            raise ValueError("token_start, token_end and token_escape must all differ")
        return self


def load_settings(**overrides) -> Settings:
    """Settings from the environment, with keyword overrides applied on top."""
    values = {
        "tab_size": env_config("SEGTEXT_TAB_SIZE", default=DEFAULT_TAB_SIZE, cast=int),
        "token_start": env_config("SEGTEXT_TOKEN_START", default=DEFAULT_TOKEN_START),
        "token_end": env_config("SEGTEXT_TOKEN_END", default=DEFAULT_TOKEN_END),
        "token_escape": env_config("SEGTEXT_TOKEN_ESCAPE", default=DEFAULT_TOKEN_ESCAPE),
        "default_segment_prefix": env_config("SEGTEXT_DEFAULT_PREFIX", default=DEFAULT_SEGMENT_PREFIX),
        "max_default_names": env_config("SEGTEXT_MAX_DEFAULT_NAMES", default=MAX_DEFAULT_NAMES, cast=int),
        "log_level": env_config("SEGTEXT_LOG_LEVEL", default="WARNING"),
    }
    values.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**values)
