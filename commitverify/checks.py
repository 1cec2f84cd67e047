"""Commit message checks.

Each ``check_*`` function appends at most one finding to a caller supplied
error list and returns whether the check passed. ``perform_checks`` runs all
of them and never stops early: every applicable error ends up in the report.
"""
import re
from typing import Any, List, Mapping, Optional, Sequence, Union

from .models import CheckReport, LengthBounds, RegexRule, RuleConfig

# Version bump commits such as "1.2.3" or "v4.5.6" skip the length rules
VERSION_COMMIT_PATTERN = re.compile(r"^v?\d+\.\d+\.\d+", re.ASCII)

MISCONFIGURATION_ERROR = "Misconfiguration: minlen > maxlen! Check your settings!"
FIRST_LINE_LABEL = "The first line of commit message"
MESSAGE_LABEL = "The commit message"


def normalize_config(cfg: Optional[Union[RuleConfig, Mapping[str, Any]]] = None) -> RuleConfig:
    """Return a fully populated copy of ``cfg``.

    Missing or falsy bounds become 0 and missing regexes become an empty
    mapping. The input is never modified.
    """
    if cfg is None:
        return RuleConfig()
    if isinstance(cfg, RuleConfig):
        return cfg.model_copy(deep=True)
    return RuleConfig.model_validate(dict(cfg))


def is_version_commit(text: str) -> bool:
    return VERSION_COMMIT_PATTERN.match(text) is not None


def check_length(
    text: str,
    bounds: Optional[LengthBounds],
    label: str,
    errors: List[str],
) -> bool:
    """Check that ``text`` is between ``bounds.min`` and ``bounds.max`` chars.

    Args:
        text: Text under test
        bounds: Length bounds, 0 meaning unbounded. None skips the check.
        label: Start of the error message, e.g. "The commit message"
        errors: List the finding is appended to

    Returns:
        bool: True if the check passed
    """
    bounds = bounds or LengthBounds()
    min_len = bounds.min or 0
    max_len = bounds.max or 0

    if min_len > 0 and max_len > 0 and min_len > max_len:
        errors.append(MISCONFIGURATION_ERROR)
        return False

    if is_version_commit(text):
        return True

    length = len(text)
    too_short = min_len > 0 and length < min_len
    too_long = not too_short and max_len > 0 and length > max_len

    if too_short:
        errors.append(
            f"{label} is too short, should be at least {min_len} chars but it is {length}"
        )
        return False
    if too_long:
        errors.append(
            f"{label} is too long, should be at most {max_len} chars but it is {length}"
        )
        return False
    return True


def check_max_line_length(lines: Sequence[str], max_len: Optional[int], errors: List[str]) -> bool:
    """Check that no line is longer than ``max_len``.

    Only the longest line is reported, even when several lines are too long.
    """
    max_len = max_len or 0
    if max_len <= 0 or not lines:
        return True

    longest = lines[0]
    for line in lines[1:]:
        if len(line) > len(longest):
            longest = line

    if len(longest) > max_len:
        errors.append(
            f"The commit message has some very long lines. The longest line has "
            f"{len(longest)} chars while max. {max_len} are allowed.\n"
            "Split your message with newlines."
        )
        return False
    return True


def check_regex(
    message: str,
    rule: Union[RegexRule, str, re.Pattern, Mapping[str, Any]],
    name: str,
    errors: List[str],
) -> bool:
    """Search the whole message for the rule's pattern."""
    rule = RegexRule.coerce(rule)
    matched = rule.regex.search(message) is not None
    if not matched:
        errors.append(
            f"The regex '{name}' failed on the commit message.\n"
            f"{rule.explanation}\n"
            f"Failed regex: {rule.source}"
        )
    return matched


def perform_checks(
    message: str,
    cfg: Optional[Union[RuleConfig, Mapping[str, Any]]] = None,
) -> CheckReport:
    """Run every configured check against ``message``.

    Args:
        message: The commit message, possibly with several lines
        cfg: Rules to apply, normalized before use

    Returns:
        CheckReport: errors in check order, and whether any regex failed
    """
    cfg = normalize_config(cfg)
    lines = message.split("\n")
    errors: List[str] = []

    for name, rule in cfg.regexes.items():
        check_regex(message, rule, name, errors)
    some_regex_failed = len(errors) > 0

    check_max_line_length(lines, cfg.max_line_length, errors)
    check_length(
        lines[0],
        LengthBounds(min=cfg.min_first_line_length, max=cfg.max_first_line_length),
        FIRST_LINE_LABEL,
        errors,
    )
    check_length(
        message,
        LengthBounds(min=cfg.min_length, max=cfg.max_length),
        MESSAGE_LABEL,
        errors,
    )

    return CheckReport(errors=errors, some_regex_failed=some_regex_failed)
