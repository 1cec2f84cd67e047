"""Shared models for commit-verify."""
import re
from dataclasses import dataclass
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field, field_validator

_FLAG_LETTERS = (
    (re.IGNORECASE, "i"),
    (re.MULTILINE, "m"),
    (re.DOTALL, "s"),
    (re.VERBOSE, "x"),
)


class RegexRule(BaseModel):
    """A named pattern the whole commit message must match."""

    model_config = ConfigDict(frozen=True)

    regex: re.Pattern[str] = Field(description="Pattern searched for in the whole message")
    explanation: str = Field(
        default="",
        description="Human readable explanation shown when the pattern fails",
    )

    @field_validator("explanation", mode="before")
    @classmethod
    def _default_explanation(cls, value: Any) -> Any:
        return value or ""

    @classmethod
    def coerce(cls, value: Any) -> "RegexRule":
        """Build a rule from a pattern, a (pattern, explanation) pair or a mapping."""
        if isinstance(value, RegexRule):
            return value
        if isinstance(value, (str, re.Pattern)):
            return cls(regex=value)
        if isinstance(value, (tuple, list)) and len(value) in (1, 2):
            return cls(regex=value[0], explanation=value[1] if len(value) == 2 else "")
        return cls.model_validate(value)

    @property
    def source(self) -> str:
        """Textual form of the pattern, e.g. ``/^Fix/i``."""
        flags = "".join(
            letter for flag, letter in _FLAG_LETTERS if self.regex.flags & flag
        )
        return f"/{_escape_slashes(self.regex.pattern)}/{flags}"


def _escape_slashes(pattern: str) -> str:
    """Escape every unescaped ``/`` so the pattern reads as a regex literal."""
    out = []
    escaped = False
    for char in pattern:
        if char == "/" and not escaped:
            out.append("\\")
        out.append(char)
        escaped = char == "\\" and not escaped
    return "".join(out)


def _zero_if_falsy(value: Any) -> Any:
    return value or 0


class RuleConfig(BaseModel):
    """Validation rules for a commit message.

    Every numeric bound uses 0 for "no bound". Field names are snake_case;
    the camelCase spellings (``minLength``, ``maxFirstLineLength``, ...) are
    accepted on input as aliases.
    """

    model_config = ConfigDict(populate_by_name=True)

    regexes: Dict[str, RegexRule] = Field(
        default_factory=dict,
        description="Mapping of rule name to regex rule, checked in order",
    )
    min_length: int = Field(default=0, alias="minLength")
    max_length: int = Field(default=0, alias="maxLength")
    min_first_line_length: int = Field(default=0, alias="minFirstLineLength")
    max_first_line_length: int = Field(default=0, alias="maxFirstLineLength")
    max_line_length: int = Field(default=0, alias="maxLineLength")

    @field_validator("regexes", mode="before")
    @classmethod
    def _coerce_regexes(cls, value: Any) -> Any:
        if not value:
            return {}
        if isinstance(value, dict):
            return {name: RegexRule.coerce(rule) for name, rule in value.items()}
        return value

    @field_validator(
        "min_length",
        "max_length",
        "min_first_line_length",
        "max_first_line_length",
        "max_line_length",
        mode="before",
    )
    @classmethod
    def _coerce_bounds(cls, value: Any) -> Any:
        return _zero_if_falsy(value)


@dataclass(frozen=True)
class LengthBounds:
    min: int = 0
    max: int = 0


class CheckReport(BaseModel):
    """Aggregated result of one validation run."""

    errors: List[str] = Field(default_factory=list)
    some_regex_failed: bool = False

    @property
    def ok(self) -> bool:
        return not self.errors
