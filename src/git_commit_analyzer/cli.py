"""CLI interface for git-commit-analyzer."""

from __future__ import annotations

import json
import logging
import sys
from typing import TextIO

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from . import __version__
from .analyzer import AnalyzeOptions, CommitAnalyzer
from .github import DEFAULT_PER_PAGE, MAX_PER_PAGE, TOKEN_ENV_VAR

err_console = Console(stderr=True)


def setup_logging(verbose: bool) -> None:
    """Route log records through rich, DEBUG when verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )
    # Keep transport chatter out of --verbose output
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


@click.command()
@click.argument("messages_file", type=click.File("r", encoding="utf-8"), required=False)
@click.option(
    "-r",
    "--repo",
    help="GitHub repository to fetch commits from (URL or owner/repo)",
)
@click.option(
    "--local",
    type=click.Path(exists=True, file_okay=False),
    help="Read commit subjects from a local git repository",
)
@click.option(
    "-t",
    "--token",
    envvar=TOKEN_ENV_VAR,
    help=f"GitHub token for private repos or higher rate limits (defaults to {TOKEN_ENV_VAR})",
)
@click.option(
    "-n",
    "--max-commits",
    type=click.IntRange(min=1, max=MAX_PER_PAGE),
    default=DEFAULT_PER_PAGE,
    show_default=True,
    help=f"Number of recent commits to fetch (GitHub returns at most {MAX_PER_PAGE})",
)
@click.option(
    "--json",
    "as_json",
    is_flag=True,
    help="Print the metrics as JSON instead of rendered cards",
)
@click.option(
    "--no-timeline",
    is_flag=True,
    help="Do not show the fetched commit timeline",
)
@click.option(
    "--no-languages",
    is_flag=True,
    help="Do not show repository language usage",
)
@click.option(
    "--fail-under",
    type=click.IntRange(0, 100),
    help="Exit with status 1 when the score is below this value",
)
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    help="Show debug logging and full tracebacks",
)
@click.option(
    "-q",
    "--quiet",
    is_flag=True,
    help="Suppress rendered output (useful in CI with --fail-under)",
)
@click.version_option(__version__)
def main(
    messages_file: TextIO | None,
    repo: str | None,
    local: str | None,
    token: str | None,
    max_commits: int,
    as_json: bool,
    no_timeline: bool,
    no_languages: bool,
    fail_under: int | None,
    verbose: bool,
    quiet: bool,
) -> None:
    """Rate the quality of git commit subject lines.

    Commit subjects are read one per line from MESSAGES_FILE ("-" for stdin),
    fetched from GitHub with --repo, or read from a local repository with --local.

    \b
    Examples:
      # Analyze pasted messages
      git log --format=%s -n 20 | git-commit-analyzer -

      # Fetch the latest commits from GitHub
      git-commit-analyzer --repo https://github.com/pallets/click

      # Use in CI
      git-commit-analyzer --local . --quiet --fail-under 50
    """
    setup_logging(verbose)

    options = AnalyzeOptions(
        text=messages_file.read() if messages_file is not None else None,
        repo=repo,
        local=local,
        token=token,
        max_commits=max_commits,
        show_timeline=not no_timeline,
        show_languages=not no_languages,
        quiet=quiet or as_json,
    )
    analyzer = CommitAnalyzer(options)

    try:
        result = analyzer.analyze()
        if as_json:
            click.echo(json.dumps(result.metrics.to_dict(), indent=2))
        else:
            analyzer.report(result)
    except Exception as e:
        if verbose:
            err_console.print_exception()
        else:
            err_console.print(f"\n[red]❌ Error: {escape(str(e))}[/]")
        sys.exit(1)
    finally:
        analyzer.close()

    if fail_under is not None and result.metrics.rating.score < fail_under:
        if not quiet:
            err_console.print(
                f"\n[red]Score {result.metrics.rating.score} is below the required {fail_under}.[/]"
            )
        sys.exit(1)


if __name__ == "__main__":
    main()
