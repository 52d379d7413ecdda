"""Local git repository access using subprocess."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

logger = logging.getLogger(__name__)


class GitError(Exception):
    """Error during git operations."""

    pass


class GitRepo:
    """Read commit subjects from a local repository through the git CLI."""

    def __init__(self, path: str | Path | None = None) -> None:
        """Initialize git repository wrapper.

        Args:
            path: Path to the repository (defaults to current directory)
        """
        self.path = Path(path) if path else Path.cwd()

    def _run(self, *args: str, check: bool = True) -> subprocess.CompletedProcess[str]:
        """Run a git command.

        Args:
            *args: Git command arguments
            check: Raise exception on non-zero exit

        Returns:
            CompletedProcess result

        Raises:
            GitError: If git is missing, or the command fails and check is True
        """
        cmd = ["git", *args]
        logger.debug("Running %s in %s", " ".join(cmd), self.path)
        try:
            return subprocess.run(
                cmd,
                cwd=self.path,
                check=check,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except FileNotFoundError as e:
            raise GitError(f"Cannot run git in {self.path}: {e}") from e
        except subprocess.CalledProcessError as e:
            raise GitError(
                f"Command failed: {' '.join(cmd)}\nExit code: {e.returncode}\nStderr: {e.stderr}"
            ) from e

    def is_repository(self) -> bool:
        """Check if this is a valid git repository."""
        try:
            self._run("rev-parse", "--git-dir")
            return True
        except GitError:
            return False

    def check_repository(self) -> None:
        """Check if this is a valid git repository.

        Raises:
            GitError: If not a git repository
        """
        if not self.is_repository():
            raise GitError(f"Not a git repository: {self.path}")

    def has_commits(self) -> bool:
        """Check whether HEAD points at a commit (false on an unborn branch)."""
        result = self._run("rev-parse", "--verify", "-q", "HEAD", check=False)
        return result.returncode == 0

    def get_commit_subjects(self, max_commits: int | None = None) -> list[str]:
        """Get commit subject lines, newest first.

        The subject is the first line of each message, not git's ``%s``
        (which joins the whole first paragraph).

        Args:
            max_commits: Maximum number of commits to read

        Returns:
            Trimmed, non-empty subject lines; empty for a repository without commits
        """
        self.check_repository()
        if not self.has_commits():
            logger.debug("No commits yet in %s", self.path)
            return []

        args = ["log", "--format=%B%x00"]
        if max_commits and max_commits > 0:
            args[1:1] = ["-n", str(max_commits)]

        result = self._run(*args)
        subjects = []
        for message in result.stdout.split("\x00"):
            subject = message.lstrip("\n").split("\n")[0].strip()
            if subject:
                subjects.append(subject)
        logger.debug("Read %d commit subjects from %s", len(subjects), self.path)
        return subjects
