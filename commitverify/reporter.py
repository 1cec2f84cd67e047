"""Console presentation of validation reports."""

from typing import List, Optional

from rich.console import Console
from rich.markup import escape

from .models import CheckReport
from .observers import ValidationObserver

REGEX_HINT = "Hint: use http://www.regexper.com to visualize the regexes."
FAILED_REGEX_PREFIX = "Failed regex: "


class ConsoleReporter(ValidationObserver):
    """Observer that prints validation results to the console.

    Styling is decided by the caller through ``styled`` instead of being
    detected from the environment. Error strings coming from the checks are
    plain text and are escaped before printing.

    Attributes:
        console (Console): Rich console for output
        styled (bool): Whether to use colors
        amend_hint (bool): Whether the message is an existing commit that
            can be amended
    """

    def __init__(
        self,
        console: Optional[Console] = None,
        styled: bool = True,
        amend_hint: bool = True,
    ):
        self.styled = styled
        self.console = console or Console(
            no_color=not styled, highlight=False, soft_wrap=True, emoji=False
        )
        self.amend_hint = amend_hint

    def _print(self, text: str = "") -> None:
        # :name: codes in messages and patterns are literal text
        self.console.print(text, emoji=False)

    def _style(self, text: str, style: str) -> str:
        if not self.styled:
            return escape(text)
        return f"[{style}]{escape(text)}[/{style}]"

    def _format_error(self, error: str) -> str:
        lines: List[str] = []
        for line in error.split("\n"):
            if line.startswith(FAILED_REGEX_PREFIX):
                pattern = line[len(FAILED_REGEX_PREFIX):]
                lines.append(escape(FAILED_REGEX_PREFIX) + self._style(pattern, "cyan"))
            else:
                lines.append(escape(line))
        return "\n".join(lines)

    def on_validation_started(self, message: str) -> None:
        self._print(self._style("Verifying that the commit message is okay...", "cyan"))

    def on_validation_completed(self, message: str, report: CheckReport) -> None:
        if report.ok:
            self._print(self._style("OK", "green"))
            return

        subject = "the last commit message" if self.amend_hint else "the commit message"
        self._print(
            self._style(f"Almost there, but {subject} is not quite okay:", "yellow")
        )
        for idx, error in enumerate(report.errors, start=1):
            self._print()
            self._print(f"{idx}. {self._format_error(error)}")
        self._print()
        self._print(self._style("The commit message was:", "yellow"))
        self._print(self._style(message, "cyan"))
        self._print()
        if self.amend_hint:
            self._print("Use git commit --amend to improve the commit message.")
        if report.some_regex_failed:
            self._print(REGEX_HINT)

    def report_skipped(self, reason: str) -> None:
        """Tell the user that no verification took place."""
        self._print(self._style(f"Warning: {reason}", "yellow"))

    def report_failure(self, title: str, detail: Optional[str] = None) -> None:
        """Report a failure that prevented the verification."""
        self._print(self._style(title, "red"))
        if detail:
            self._print(f"Error: {escape(detail)}")
