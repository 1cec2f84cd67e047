"""Verification of commit messages with observer notifications."""

from typing import Any, List, Mapping, Optional, Union

from .checks import normalize_config, perform_checks
from .models import CheckReport, RuleConfig
from .observers import ValidationObserver


class CommitVerifier:
    """Runs the configured checks and notifies observers of the outcome.

    Attributes:
        config (RuleConfig): Normalized rules applied to every message
        observers (List[ValidationObserver]): Observers to notify
    """

    def __init__(
        self,
        config: Optional[Union[RuleConfig, Mapping[str, Any]]] = None,
        observers: Optional[List[ValidationObserver]] = None,
    ):
        self.config = normalize_config(config)
        self.observers: List[ValidationObserver] = list(observers or [])

    def add_observer(self, observer: ValidationObserver) -> None:
        self.observers.append(observer)

    def remove_observer(self, observer: ValidationObserver) -> None:
        self.observers.remove(observer)

    def verify(self, message: str) -> CheckReport:
        """Check ``message`` against the configured rules.

        Args:
            message: The commit message under test

        Returns:
            CheckReport: The findings of every check
        """
        for observer in self.observers:
            observer.on_validation_started(message)

        report = perform_checks(message, self.config)

        for observer in self.observers:
            observer.on_validation_completed(message, report)
        return report
