"""CommitAnalyzer: collects commit subjects from a source and reports on them."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from rich.console import Console

from .git import GitRepo
from .github import DEFAULT_PER_PAGE, FetchResult, GitHubClient
from .report import render_languages, render_results, render_timeline
from .scoring import BatchMetrics, analyze_commits, parse_subjects

logger = logging.getLogger(__name__)

NO_INPUT_MESSAGE = "Please paste commit messages OR provide a GitHub repository URL."
NO_COMMITS_MESSAGE = "Could not find any commits. Try pasting messages manually."


class AnalysisError(Exception):
    """No commits could be collected for analysis."""

    pass


@dataclass
class AnalyzeOptions:
    """Options for a single analysis run."""

    text: str | None = None
    repo: str | None = None
    local: str | None = None
    token: str | None = None
    max_commits: int = DEFAULT_PER_PAGE

    show_timeline: bool = True
    show_languages: bool = True
    quiet: bool = False


@dataclass
class AnalysisResult:
    """Metrics plus whatever the remote fetch returned alongside them."""

    metrics: BatchMetrics
    fetch: FetchResult | None = None
    subjects: list[str] = field(default_factory=list)


class CommitAnalyzer:
    """Collect commit subjects and score them."""

    def __init__(
        self,
        options: AnalyzeOptions | None = None,
        github: GitHubClient | None = None,
    ) -> None:
        """Initialize the analyzer.

        Args:
            options: Analysis options
            github: Pre-built GitHub client (created on demand otherwise)
        """
        self.options = options or AnalyzeOptions()
        self.console = Console(quiet=self.options.quiet)
        self._github = github

    def _get_github(self) -> GitHubClient:
        """Lazily create and return the GitHub client."""
        if self._github is None:
            self._github = GitHubClient(
                token=self.options.token,
                per_page=self.options.max_commits,
            )
        return self._github

    def collect(self) -> tuple[list[str], FetchResult | None]:
        """Gather subjects from the configured source.

        A repository URL wins over pasted text, then a local repository.

        Raises:
            AnalysisError: If no source is configured or it yields no commits
        """
        if self.options.repo:
            with self.console.status("Fetching commits from GitHub..."):
                fetch = self._get_github().fetch_commits(self.options.repo)
            if not fetch.messages:
                raise AnalysisError(NO_COMMITS_MESSAGE)
            return fetch.messages, fetch

        if self.options.text is not None:
            subjects = parse_subjects(self.options.text)
            if subjects:
                return subjects, None

        if self.options.local:
            subjects = GitRepo(self.options.local).get_commit_subjects(self.options.max_commits)
            if not subjects:
                raise AnalysisError(NO_COMMITS_MESSAGE)
            return subjects, None

        raise AnalysisError(NO_INPUT_MESSAGE)

    def analyze(self) -> AnalysisResult:
        """Collect subjects and compute their metrics."""
        subjects, fetch = self.collect()
        logger.debug("Analyzing %d commit subjects", len(subjects))
        metrics = analyze_commits(subjects)
        logger.debug(
            "Score %d (%s): %d warning(s)",
            metrics.rating.score,
            metrics.rating.level,
            len(metrics.warnings),
        )
        return AnalysisResult(metrics=metrics, fetch=fetch, subjects=subjects)

    def report(self, result: AnalysisResult) -> None:
        """Render an analysis result to the console."""
        render_results(self.console, result.metrics)
        if result.fetch is None:
            return
        if self.options.show_timeline:
            render_timeline(self.console, result.fetch.details)
        if self.options.show_languages:
            render_languages(self.console, result.fetch.languages)

    def close(self) -> None:
        if self._github is not None:
            self._github.close()


__all__ = ["AnalysisError", "AnalysisResult", "AnalyzeOptions", "CommitAnalyzer"]
