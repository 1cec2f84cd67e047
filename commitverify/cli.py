#!/usr/bin/env python3
import os
import sys
from pathlib import Path
from typing import Dict, Optional

import click
import pyperclip
from rich.console import Console

from .config import DEFAULT_CONFIG_FILENAME, Config, parse_regex_option
from .exceptions import ConfigError, MessageSourceError
from .models import RegexRule
from .observers import FileLogObserver
from .reporter import ConsoleReporter
from .source import read_last_commit_message, read_message_file
from .verifier import CommitVerifier

console = Console(highlight=False, soft_wrap=True, emoji=False)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_NO_INPUT = 2


def parse_regexes(
    ctx: click.Context, param: click.Parameter, values
) -> Optional[Dict[str, RegexRule]]:
    """Click callback turning repeated NAME=PATTERN values into rules."""
    regexes: Dict[str, RegexRule] = {}
    for value in values:
        try:
            regexes.update(parse_regex_option(value))
        except ConfigError as e:
            raise click.BadParameter(e.message)
    return regexes or None


def print_config(config: Optional[Config], repo_path: Path) -> None:
    config_path = Config.find_config_file(repo_path)

    console.print("\n[bold]Current Configuration Settings:[/bold]")
    if config_path:
        console.print(f"[dim]Config file: {str(config_path).replace(os.sep, '/')}[/dim]")
    if config is None:
        console.print("[dim]No configuration found, verification will be skipped[/dim]")
        return
    if not config_path:
        console.print("[dim]Using environment variables (no config file found)[/dim]")

    console.print(f"\n{'Setting':<24} {'Value':<20} {'Source':<10}")
    console.print("-" * 56)

    def print_setting(name: str, value, source: str):
        console.print(f"{name:<24} {str(value):<20} {source:<10}", markup=False)

    for name in (
        "min_length",
        "max_length",
        "min_first_line_length",
        "max_first_line_length",
        "max_line_length",
        "always_log",
        "log_file",
    ):
        value = getattr(config, name)
        source = "config" if name in config.model_fields_set else "default"
        print_setting(name, value if value is not None else "None", source)

    if config.regexes:
        console.print("\n[bold]Regex rules:[/bold]")
        for name, rule in config.regexes.items():
            console.print(f"  {name}: {rule.source}", markup=False)
            if rule.explanation:
                console.print(f"    {rule.explanation}", markup=False)

    console.print(
        f"\nTo modify these settings, create or edit {DEFAULT_CONFIG_FILENAME} in your repository root"
    )


@click.command()
@click.option(
    "--config-dir",
    is_flag=True,
    help="Display the config file location and copy it to clipboard",
)
@click.option(
    "--config-list", is_flag=True, help="Display current configuration settings"
)
@click.option(
    "-p",
    "--path",
    default=".",
    help="Path to git repository (defaults to current directory)",
    type=click.Path(exists=True, file_okay=False, dir_okay=True, path_type=Path),
)
@click.option(
    "-r",
    "--rev",
    default="HEAD",
    show_default=True,
    help="Revision whose commit message is verified",
)
@click.option(
    "-f",
    "--file",
    "message_file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Verify the message in this file instead (for use as a commit-msg hook)",
)
@click.option("--min-length", type=int, help="Minimum length of the whole message")
@click.option("--max-length", type=int, help="Maximum length of the whole message")
@click.option(
    "--min-first-line-length", type=int, help="Minimum length of the first line"
)
@click.option(
    "--max-first-line-length", type=int, help="Maximum length of the first line"
)
@click.option("--max-line-length", type=int, help="Maximum length of every line")
@click.option(
    "--regex",
    "regexes",
    multiple=True,
    metavar="NAME=PATTERN",
    callback=parse_regexes,
    help="Regex the whole message must match. Can be repeated.",
)
@click.option(
    "-l",
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Optional file to log verification results (overrides config setting)",
)
@click.option("--no-color", is_flag=True, help="Print results without colors")
@click.option("--version", is_flag=True, help="Display version information and exit")
def main(
    config_dir: bool,
    config_list: bool,
    path: Path,
    rev: str,
    message_file: Optional[Path],
    min_length: Optional[int],
    max_length: Optional[int],
    min_first_line_length: Optional[int],
    max_first_line_length: Optional[int],
    max_line_length: Optional[int],
    regexes: Optional[Dict[str, RegexRule]],
    log_file: Optional[Path],
    no_color: bool,
    version: bool,
):
    """
    Verify that a commit message conforms to the repository standards.

    By default the message of the last commit (HEAD) is checked. The rules
    are read from .commitverify.toml or the [tool.commitverify] table of
    pyproject.toml in the repository root; command line options override them.

    Exits with status 0 when the message is okay or nothing is configured,
    1 when some check failed and 2 when the message or the configuration
    could not be read.
    """
    try:
        if version:
            from .version import display_version_info

            display_version_info()
            return

        repo_path = path.absolute()
        reporter = ConsoleReporter(styled=not no_color, amend_hint=message_file is None)

        try:
            config = Config.load(repo_path)
        except ConfigError as e:
            reporter.report_failure("Could not load the commit-verify configuration", e.message)
            sys.exit(EXIT_NO_INPUT)

        if config_list:
            print_config(config, repo_path)
            return

        if config_dir:
            config_path = repo_path / DEFAULT_CONFIG_FILENAME
            config_path_str = str(config_path)

            # Create default config file if it doesn't exist
            if not config_path.exists():
                (config or Config()).save(repo_path)
                console.print("[yellow]Created new config file with default values[/yellow]")

            console.print(f"[green]Config file location:[/green] {config_path_str}")
            try:
                pyperclip.copy(config_path_str)
                console.print("[green]Path copied to clipboard![/green]")
            except pyperclip.PyperclipException:
                console.print("[yellow]Clipboard not available, path not copied[/yellow]")
            return

        overrides = dict(
            min_length=min_length,
            max_length=max_length,
            min_first_line_length=min_first_line_length,
            max_first_line_length=max_first_line_length,
            max_line_length=max_line_length,
            regexes=regexes,
        )
        if config is None:
            if all(v is None for v in overrides.values()):
                reporter.report_skipped(
                    f"no configuration found ({DEFAULT_CONFIG_FILENAME} or "
                    "[tool.commitverify] in pyproject.toml), skipping verification"
                )
                return
            config = Config()

        try:
            config = config.with_overrides(**overrides)
        except ConfigError as e:
            reporter.report_failure("Invalid commit-verify configuration", e.message)
            sys.exit(EXIT_NO_INPUT)

        try:
            if message_file is not None:
                message = read_message_file(message_file)
            else:
                message = read_last_commit_message(repo_path, rev)
        except MessageSourceError as e:
            reporter.report_failure(
                "Something went wrong when trying to read the Git commit message",
                e.message,
            )
            sys.exit(EXIT_NO_INPUT)

        verifier = CommitVerifier(config, observers=[reporter])

        # Set up logging based on configuration
        log_file_path = log_file or config.get_log_file()
        if log_file_path:
            verifier.add_observer(FileLogObserver(str(log_file_path)))

        report = verifier.verify(message)
        sys.exit(EXIT_OK if report.ok else EXIT_FAILED)
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        sys.exit(EXIT_FAILED)


if __name__ == "__main__":
    main()
