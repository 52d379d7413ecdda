import shutil
import subprocess

import pytest


def run_git(path, *args):
    subprocess.run(
        ["git", *args],
        cwd=path,
        check=True,
        capture_output=True,
        text=True,
    )


@pytest.fixture
def empty_git_repo(tmp_path):
    """An initialized repository without any commits."""
    if shutil.which("git") is None:
        pytest.skip("git is not installed")

    run_git(tmp_path, "init", "-q")
    run_git(tmp_path, "config", "user.name", "Test User")
    run_git(tmp_path, "config", "user.email", "test@example.com")
    run_git(tmp_path, "config", "commit.gpgsign", "false")
    return tmp_path


@pytest.fixture
def git_repo(empty_git_repo):
    """A local repository with three commits, oldest first."""
    for message in (
        "chore: initial import",
        "stuff",
        "feat(cli): add the --json flag\n\nPrints metrics as JSON.",
    ):
        run_git(empty_git_repo, "commit", "-q", "--allow-empty", "-m", message)
    return empty_git_repo
