"""Exceptions raised by commit-verify.

Validation findings are never raised; they are collected in a CheckReport.
These cover the failures that prevent a validation run from happening.
"""


class CommitVerifyError(Exception):
    """Base class for commit-verify errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class ConfigError(CommitVerifyError):
    """The configuration could not be read or is invalid."""


class MessageSourceError(CommitVerifyError):
    """The commit message could not be retrieved."""
