"""Configuration management for commit-verify."""
from pathlib import Path
from datetime import datetime
from typing import Any, Dict, Optional
from pydantic import Field, ValidationError
import tomli
import tomli_w
import os
import re

from .exceptions import ConfigError
from .models import RegexRule, RuleConfig

DEFAULT_CONFIG_FILENAME = ".commitverify.toml"
PYPROJECT_FILENAME = "pyproject.toml"
PYPROJECT_SECTION = "commitverify"

ENV_MAPPING = {
    'COMMIT_VERIFY_MIN_LENGTH': 'min_length',
    'COMMIT_VERIFY_MAX_LENGTH': 'max_length',
    'COMMIT_VERIFY_MIN_FIRST_LINE_LENGTH': 'min_first_line_length',
    'COMMIT_VERIFY_MAX_FIRST_LINE_LENGTH': 'max_first_line_length',
    'COMMIT_VERIFY_MAX_LINE_LENGTH': 'max_line_length',
    'COMMIT_VERIFY_ALWAYS_LOG': 'always_log',
    'COMMIT_VERIFY_LOG_FILE': 'log_file',
}


class Config(RuleConfig):
    """Configuration settings for commit-verify.

    The validation rules come from ``RuleConfig``; this class adds the
    settings of the command line tool itself. Values are read from
    ``.commitverify.toml`` (or the ``[tool.commitverify]`` table of
    ``pyproject.toml``) and from ``COMMIT_VERIFY_*`` environment variables.
    """

    always_log: bool = Field(
        default=False,
        description="Whether to always generate log files"
    )

    log_file: Optional[str] = Field(
        default=None,
        description="Path to log file (if not using automatic log file generation)"
    )

    def __init__(self, **data):
        """Initialize config with environment variable support."""
        merged_data = {**self._env_data(), **_field_names(data)}
        super().__init__(**merged_data)

    @staticmethod
    def _env_data() -> Dict[str, Any]:
        env_data = {}
        for env_var, field_name in ENV_MAPPING.items():
            if env_var in os.environ:
                value = os.environ[env_var]
                if field_name == 'always_log':
                    value = value.lower() in ['true', '1', 'yes', 'on']
                env_data[field_name] = value
        return env_data

    @staticmethod
    def _is_safe_path(path: str) -> bool:
        """Check if a path is safe (no path traversal)."""
        if not path:
            return False

        if '..' in path or path.startswith('/') or '\\' in path:
            return False

        if os.path.isabs(path):
            return False

        dangerous_patterns = [
            r'/etc/', r'/var/', r'/usr/', r'/bin/', r'/sbin/',
            r'C:\\Windows', r'C:\\System', r'C:\\Program'
        ]

        for pattern in dangerous_patterns:
            if re.search(pattern, path, re.IGNORECASE):
                return False

        return True

    @staticmethod
    def _read_toml(path: Path) -> Dict[str, Any]:
        try:
            with path.open('rb') as f:
                return tomli.load(f)
        except (OSError, tomli.TOMLDecodeError) as e:
            raise ConfigError(f"Error reading config file {path}: {e}") from e

    @classmethod
    def _read_file_data(cls, repo_path: Path) -> Dict[str, Any]:
        config_path = repo_path / DEFAULT_CONFIG_FILENAME
        if config_path.exists():
            return cls._read_toml(config_path)

        pyproject_path = repo_path / PYPROJECT_FILENAME
        if pyproject_path.exists():
            tool = cls._read_toml(pyproject_path).get('tool', {})
            return tool.get(PYPROJECT_SECTION, {})
        return {}

    @classmethod
    def find_config_file(cls, repo_path: Path) -> Optional[Path]:
        """Return the file the configuration is read from, if any."""
        config_path = repo_path / DEFAULT_CONFIG_FILENAME
        if config_path.exists():
            return config_path
        pyproject_path = repo_path / PYPROJECT_FILENAME
        if pyproject_path.exists() and cls._read_file_data(repo_path):
            return pyproject_path
        return None

    @classmethod
    def load(cls, repo_path: Path) -> Optional['Config']:
        """Load configuration for a repository.

        Args:
            repo_path: Path to the git repository

        Returns:
            Optional[Config]: The configuration, or None when neither a
            config file nor environment variables provide any settings

        Raises:
            ConfigError: If the config file is unreadable or invalid
        """
        data = cls._read_file_data(repo_path)
        if not data and not cls._env_data():
            return None

        try:
            return cls(**data)
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration: {e}") from e

    def with_overrides(self, **overrides) -> 'Config':
        """Return a copy with command line overrides applied.

        None values are ignored. Regex rules are merged into the configured
        ones, replacing rules with the same name.
        """
        updates = {k: v for k, v in overrides.items() if v is not None}
        if not updates:
            return self

        data = self.model_dump()
        regexes = updates.pop('regexes', None)
        if regexes:
            data['regexes'] = {**self.regexes, **regexes}
        else:
            data['regexes'] = dict(self.regexes)
        data.update(updates)

        try:
            return type(self)(**data)
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration: {e}") from e

    def save(self, repo_path: Path) -> None:
        """Save configuration to the config file.

        Args:
            repo_path: Path to the git repository
        """
        config_path = repo_path / DEFAULT_CONFIG_FILENAME

        config_dict = {
            k: v for k, v in self.model_dump(exclude={'regexes'}).items()
            if v is not None
        }
        config_dict['regexes'] = {
            name: {'regex': rule.regex.pattern, 'explanation': rule.explanation}
            for name, rule in self.regexes.items()
        }

        try:
            with config_path.open('wb') as f:
                tomli_w.dump(config_dict, f)
        except OSError as e:
            raise ConfigError(f"Error saving config file: {e}") from e

    def get_log_file(self) -> Optional[Path]:
        """Get the path to the log file.

        If always_log is True, generates a timestamped log file name.
        Otherwise, returns the configured log_file path if set.

        Returns:
            Optional[Path]: Path to the log file, or None if logging is disabled
        """
        if self.always_log:
            timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
            return Path(f"commit_verify-{timestamp}.log")
        elif self.log_file:
            if self._is_safe_path(self.log_file):
                return Path(self.log_file)
            return None
        return None


def _field_names(data: Dict[str, Any]) -> Dict[str, Any]:
    """Map camelCase aliases to field names so merging is unambiguous."""
    aliases = {
        field.alias: name
        for name, field in RuleConfig.model_fields.items()
        if field.alias
    }
    return {aliases.get(key, key): value for key, value in data.items()}


def parse_regex_option(value: str) -> Dict[str, RegexRule]:
    """Parse a ``NAME=PATTERN`` command line value into a rule mapping."""
    name, sep, pattern = value.partition('=')
    if not sep or not name.strip():
        raise ConfigError(f"Expected NAME=PATTERN, got '{value}'")
    try:
        return {name.strip(): RegexRule.coerce(pattern)}
    except ValidationError as e:
        raise ConfigError(f"Invalid regex for rule '{name.strip()}': {pattern}") from e
