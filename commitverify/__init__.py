"""Verify commit messages against configurable rules."""

__version__ = "0.1.0"

from .checks import (
    check_length,
    check_max_line_length,
    check_regex,
    normalize_config,
    perform_checks,
)
from .models import CheckReport, LengthBounds, RegexRule, RuleConfig
from .verifier import CommitVerifier

__all__ = [
    'check_length',
    'check_max_line_length',
    'check_regex',
    'normalize_config',
    'perform_checks',
    'CheckReport',
    'LengthBounds',
    'RegexRule',
    'RuleConfig',
    'CommitVerifier',
]
