"""Observer pattern for validation runs."""

from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path

from .models import CheckReport


class ValidationObserver(ABC):
    """Abstract base class for validation observers."""

    @abstractmethod
    def on_validation_started(self, message: str) -> None:
        """Called before the checks run."""
        pass

    @abstractmethod
    def on_validation_completed(self, message: str, report: CheckReport) -> None:
        """Called with the report once all checks ran."""
        pass


class FileLogObserver(ValidationObserver):
    """Observer that logs validation runs to a file."""

    def __init__(self, log_file: str):
        self.log_file = Path(log_file)
        # Ensure the parent directory exists
        self.log_file.parent.mkdir(parents=True, exist_ok=True)

    def _log(self, message: str) -> None:
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        with self.log_file.open("a", encoding="utf-8") as f:
            f.write(f"{timestamp} - {message}\n")

    def on_validation_started(self, message: str) -> None:
        first_line = message.split("\n")[0]
        self._log(f"Verifying commit message: {first_line}")

    def on_validation_completed(self, message: str, report: CheckReport) -> None:
        if report.ok:
            self._log("Commit message passed all checks")
            return
        self._log(f"Commit message failed {len(report.errors)} check(s)")
        for idx, error in enumerate(report.errors, start=1):
            # Keep one entry per line in the log
            self._log(f"{idx}. " + error.replace("\n", " | "))
