"""Tests for console reporting and observers."""
import io

import pytest
from rich.console import Console

from commitverify.models import CheckReport
from commitverify.observers import FileLogObserver, ValidationObserver
from commitverify.reporter import REGEX_HINT, ConsoleReporter
from commitverify.verifier import CommitVerifier


def make_reporter(styled: bool = False, **kwargs):
    buffer = io.StringIO()
    console = Console(file=buffer, width=200, force_terminal=styled, color_system="standard" if styled else None)
    return ConsoleReporter(console=console, styled=styled, **kwargs), buffer


def test_reporter_success():
    reporter, buffer = make_reporter()
    reporter.on_validation_started("Fix bug")
    reporter.on_validation_completed("Fix bug", CheckReport())

    output = buffer.getvalue()
    assert "Verifying that the commit message is okay..." in output
    assert "OK" in output
    assert "Almost there" not in output


def test_reporter_numbers_errors():
    reporter, buffer = make_reporter()
    report = CheckReport(errors=["first problem", "second problem"], some_regex_failed=False)
    reporter.on_validation_completed("Bug: oops", report)

    output = buffer.getvalue()
    assert "Almost there, but the last commit message is not quite okay:" in output
    assert "1. first problem" in output
    assert "2. second problem" in output
    assert "The commit message was:" in output
    assert "Bug: oops" in output
    assert "Use git commit --amend to improve the commit message." in output
    assert REGEX_HINT not in output


def test_reporter_regex_hint_only_when_regex_failed():
    reporter, buffer = make_reporter()
    report = CheckReport(
        errors=["The regex 'fix' failed on the commit message.\n\nFailed regex: /^[Ff]ix/"],
        some_regex_failed=True,
    )
    reporter.on_validation_completed("Bug: oops", report)

    output = buffer.getvalue()
    assert REGEX_HINT in output
    # brackets in the pattern are not swallowed as markup
    assert "Failed regex: /^[Ff]ix/" in output


def test_reporter_without_amend_hint():
    reporter, buffer = make_reporter(amend_hint=False)
    reporter.on_validation_completed("Bug", CheckReport(errors=["problem"]))

    output = buffer.getvalue()
    assert "Almost there, but the commit message is not quite okay:" in output
    assert "--amend" not in output


def test_reporter_unstyled_output_has_no_escape_codes():
    reporter, buffer = make_reporter(styled=False)
    reporter.on_validation_completed("Bug", CheckReport(errors=["problem"], some_regex_failed=True))
    assert "\x1b[" not in buffer.getvalue()


def test_reporter_styled_output_colors_pattern():
    reporter, buffer = make_reporter(styled=True)
    report = CheckReport(
        errors=["The regex 'fix' failed on the commit message.\n\nFailed regex: /^Fix/"],
        some_regex_failed=True,
    )
    reporter.on_validation_completed("Bug: oops", report)

    output = buffer.getvalue()
    assert "\x1b[" in output
    assert "/^Fix/" in output


def test_reporter_skip_and_failure_messages():
    reporter, buffer = make_reporter()
    reporter.report_skipped("no configuration found")
    reporter.report_failure("Could not read message", "fatal: bad revision [x]")

    output = buffer.getvalue()
    assert "Warning: no configuration found" in output
    assert "Could not read message" in output
    assert "Error: fatal: bad revision [x]" in output


def test_file_log_observer(tmp_path):
    log_file = tmp_path / "logs" / "verify.log"
    observer = FileLogObserver(str(log_file))

    observer.on_validation_started("Bug: oops\n\nbody")
    observer.on_validation_completed(
        "Bug: oops\n\nbody",
        CheckReport(errors=["The regex 'fix' failed.\nFailed regex: /^Fix/"], some_regex_failed=True),
    )

    lines = log_file.read_text().splitlines()
    assert len(lines) == 3
    assert lines[0].endswith(" - Verifying commit message: Bug: oops")
    assert lines[1].endswith(" - Commit message failed 1 check(s)")
    assert lines[2].endswith(" - 1. The regex 'fix' failed. | Failed regex: /^Fix/")


def test_file_log_observer_success(tmp_path):
    log_file = tmp_path / "verify.log"
    observer = FileLogObserver(str(log_file))
    observer.on_validation_completed("Fix bug", CheckReport())
    assert "Commit message passed all checks" in log_file.read_text()


class RecordingObserver(ValidationObserver):
    def __init__(self):
        self.events = []

    def on_validation_started(self, message):
        self.events.append(("started", message))

    def on_validation_completed(self, message, report):
        self.events.append(("completed", message, report))


def test_verifier_notifies_observers():
    observer = RecordingObserver()
    verifier = CommitVerifier({"minLength": 10}, observers=[observer])

    report = verifier.verify("Fix bug")

    assert not report.ok
    assert observer.events[0] == ("started", "Fix bug")
    assert observer.events[1] == ("completed", "Fix bug", report)


def test_verifier_add_and_remove_observer():
    observer = RecordingObserver()
    verifier = CommitVerifier()
    verifier.add_observer(observer)
    assert verifier.verify("anything").ok
    verifier.remove_observer(observer)
    verifier.verify("anything")
    assert len(observer.events) == 2


def test_observer_is_abstract():
    with pytest.raises(TypeError):
        ValidationObserver()


def test_reporter_keeps_emoji_codes_literal():
    reporter, buffer = make_reporter()
    report = CheckReport(
        errors=["The regex 'gitmoji' failed on the commit message.\n\nFailed regex: /^:sparkles:/", "e :fire:"],
        some_regex_failed=True,
    )
    reporter.on_validation_completed(":bug: x", report)

    output = buffer.getvalue()
    assert ":bug: x" in output
    assert "Failed regex: /^:sparkles:/" in output
    assert "2. e :fire:" in output


def test_default_console_keeps_emoji_codes_literal(capsys):
    reporter = ConsoleReporter(styled=False)
    reporter.on_validation_completed(":bug: x", CheckReport(errors=["e :fire:"]))

    output = capsys.readouterr().out
    assert ":bug: x" in output
    assert "e :fire:" in output
