import logging
import re
from enum import Enum
from typing import Callable, Literal, Optional, Pattern, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


_log = logging.getLogger("next_link")

LogLevel = Literal["warn", "error"]

_STDLIB_LEVELS = {"warn": logging.WARNING, "error": logging.ERROR}


class Direction(str, Enum):
    NEXT = "next"
    PREV = "prev"


class Method(str, Enum):
    REL = "rel"
    PAGINATION = "pagination"
    TEXT = "text"
    CLASS_NAME = "className"
    ARIA_LABEL = "aria-label"
    ALT = "alt"


DEFAULT_METHODS: Tuple[Method, ...] = tuple(Method)
DEFAULT_TIMEOUT_MS = 8000


class FindOptions(BaseModel):
    """Per-call settings shared by HTML detection and URL inference."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    methods: Tuple[Method, ...] = DEFAULT_METHODS
    class_name_regex: Optional[Pattern[str]] = None
    logger: Optional[Callable[[str, str], None]] = None
    timeout_ms: int = Field(default=DEFAULT_TIMEOUT_MS, gt=0)
    verify_exists: bool = True

    @field_validator("class_name_regex", mode="before")
    @classmethod
    def _compile_class_name_regex(cls, value):
        if isinstance(value, str):
            return re.compile(value, re.IGNORECASE)
        return value

    @property
    def timeout_sec(self) -> float:
        return self.timeout_ms / 1000

    def report(self, level: LogLevel, message: str) -> None:
        _log.log(_STDLIB_LEVELS[level], message)
        if self.logger is not None:
            self.logger(level, message)


def coerce_options(options) -> FindOptions:
    if options is None:
        return FindOptions()
    if isinstance(options, FindOptions):
        return options
    return FindOptions(**options)


class LinkResult(BaseModel):
    url: str
    next_url: Optional[str] = None
    next_source: Optional[str] = None
    prev_url: Optional[str] = None
    prev_source: Optional[str] = None
