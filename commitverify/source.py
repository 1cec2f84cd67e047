"""Retrieval of the commit message to verify."""
from pathlib import Path
from typing import Union

import git
from git import Repo

from .exceptions import MessageSourceError

SCISSORS_LINE = "# ------------------------ >8 ------------------------"


def read_last_commit_message(repo_path: Union[str, Path], rev: str = "HEAD") -> str:
    """Return the message of the most recent commit reachable from ``rev``.

    This is the equivalent of ``git log -1 --pretty=%B <rev>``.

    Raises:
        MessageSourceError: If the repository or revision cannot be read
    """
    try:
        repo = Repo(str(repo_path), search_parent_directories=True)
    except (git.InvalidGitRepositoryError, git.NoSuchPathError) as e:
        raise MessageSourceError(f"Not a git repository: {repo_path}") from e

    try:
        output = repo.git.log("-1", "--pretty=%B", rev)
    except git.GitCommandError as e:
        stderr = (e.stderr or "").strip()
        raise MessageSourceError(
            f"Could not read the commit message of '{rev}': {stderr or e}"
        ) from e
    finally:
        repo.close()

    return output.strip()


def read_message_file(path: Union[str, Path]) -> str:
    """Return the message stored in a commit-msg hook file.

    Everything below the scissors line written by ``git commit -v`` is cut
    off and comment lines (starting with ``#``) are dropped, as git does when
    it cleans up the message.
    """
    path = Path(path)
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise MessageSourceError(f"Cannot read commit message file {path}: {e}") from e

    lines = []
    for line in content.split("\n"):
        if line.rstrip("\r") == SCISSORS_LINE:
            break
        if not line.startswith("#"):
            lines.append(line)
    return "\n".join(lines).strip()
