import pytest
import tempfile
from pathlib import Path
from git import Repo

from commitverify.config import ENV_MAPPING


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep COMMIT_VERIFY_* variables of the developer out of the tests."""
    for env_var in ENV_MAPPING:
        monkeypatch.delenv(env_var, raising=False)
    yield


@pytest.fixture
def temp_git_repo():
    """Create a temporary git repository for testing."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        # Initialize git repo
        repo = Repo.init(tmp_dir)

        # Create a test file
        test_file = Path(tmp_dir) / "test.txt"
        test_file.write_text("Initial content")

        # Initial commit
        repo.index.add(["test.txt"])
        repo.index.commit("Initial commit")
        repo.close()

        yield tmp_dir


@pytest.fixture
def commit_message(temp_git_repo):
    """Return a helper that commits a change with the given message."""
    def _commit(message: str) -> str:
        repo = Repo(temp_git_repo)
        test_file = Path(temp_git_repo) / "test.txt"
        test_file.write_text(test_file.read_text() + "\nmore")
        repo.index.add(["test.txt"])
        commit = repo.index.commit(message)
        repo.close()
        return commit.hexsha

    return _commit


@pytest.fixture
def empty_git_repo():
    """Create a temporary git repository without any commit."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        Repo.init(tmp_dir).close()
        yield tmp_dir
