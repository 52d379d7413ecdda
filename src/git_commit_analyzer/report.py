"""Rich terminal rendering of analysis results."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import datetime

from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .github import CommitDetail
from .scoring import LEVEL_AVERAGE, LEVEL_BAD, LEVEL_GOOD, BatchMetrics

BADGE_STYLES = {
    "positive": "bold green",
    "neutral": "bold blue",
    "warn": "bold yellow",
}

RATING_DESCRIPTIONS = {
    LEVEL_GOOD: "Excellent commit quality! Your commits follow best practices.",
    LEVEL_AVERAGE: "Decent commit quality. There's room for improvement in some areas.",
    LEVEL_BAD: "Commit quality needs attention. Consider following conventional commit formats.",
}
DEFAULT_DESCRIPTION = (
    "Commit quality requires significant improvement. Review the guidelines below."
)

QUICK_TIP = (
    'Keep subjects short (under 72 chars) and start with action words like "add", "fix", '
    'or "improve".'
)

BAR_WIDTH = 40


def rating_description(level: str) -> str:
    return RATING_DESCRIPTIONS.get(level, DEFAULT_DESCRIPTION)


def format_commit_date(date_string: str) -> str:
    """Format an ISO date for display, falling back to the original string."""
    if not date_string:
        return "Unknown date"
    try:
        parsed = datetime.fromisoformat(date_string.replace("Z", "+00:00"))
    except ValueError:
        return date_string
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone()
    return parsed.strftime("%Y-%m-%d %H:%M:%S")


def language_shares(languages: Mapping[str, int]) -> list[tuple[str, float, str]]:
    """Turn byte counts into (language, percent, label) sorted by size.

    Returns an empty list when no bytes are reported.
    """
    total_bytes = sum(languages.values())
    if total_bytes <= 0:
        return []

    shares = []
    for lang, size in sorted(languages.items(), key=lambda item: item[1], reverse=True):
        percent = size / total_bytes * 100
        label = f"{percent:.1f}".removesuffix(".0")
        shares.append((lang, percent, label))
    return shares


def _badge(text: str, badge: str) -> Text:
    return Text(f" {text} ", style=f"{BADGE_STYLES.get(badge, '')} reverse")


def _card(title: str, badge_text: str, badge: str, body) -> Panel:
    header = Text.assemble((title, "bold"), "  ", _badge(badge_text, badge))
    return Panel(Group(header, Text(""), body), expand=True)


def render_results(console: Console, metrics: BatchMetrics) -> None:
    """Print the rating, stats, insights and warnings cards."""
    rating = metrics.rating

    score = Text.assemble((str(rating.score), "bold"), " / 100\n", rating_description(rating.level))
    console.print(_card("Overall Rating", rating.level, rating.badge, score))

    stats = Table.grid(padding=(0, 2))
    stats.add_column(style="bold")
    stats.add_column()
    stats.add_row("Average length:", f"{metrics.average_length} chars")
    stats.add_row("Conventional format:", f"{metrics.conventional_percent}%")
    stats.add_row("Imperative tone:", f"{metrics.imperative_percent}%")
    console.print(_card("Message Stats", f"{metrics.total} commits", "positive", stats))

    status = "Healthy" if metrics.conventional_percent >= 70 else "Mixed"
    console.print(_card("Quick insights", status, "neutral", Text(QUICK_TIP)))

    if metrics.warnings:
        body = Text("\n".join(f"• {warning}" for warning in metrics.warnings))
        console.print(_card("Warnings", "Action", "warn", body))
    else:
        body = Text("No major issues detected. Great job!")
        console.print(_card("Warnings", "Clear", "positive", body))


def render_timeline(console: Console, details: Sequence[CommitDetail]) -> None:
    """Print the list of fetched commits."""
    if not details:
        console.print(_card("Commit timeline", "Idle", "neutral", Text("No commits to show yet.")))
        return

    table = Table(expand=True, show_lines=False)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Subject")
    table.add_column("Author")
    table.add_column("Date")
    table.add_column("SHA", style="cyan")
    for index, commit in enumerate(details, start=1):
        sha = f"[link={commit.url}]{commit.sha}[/link]" if commit.url else commit.sha
        table.add_row(
            str(index),
            Text(commit.message),
            Text(commit.author),
            format_commit_date(commit.date),
            sha,
        )
    console.print(_card("Latest commits", f"{len(details)} fetched", "positive", table))


def render_languages(console: Console, languages: Mapping[str, int]) -> None:
    """Print a horizontal bar chart of language usage."""
    shares = language_shares(languages)
    if not shares:
        message = Text("No language data was reported for this repository.")
        console.print(_card("Repository languages", "Idle", "neutral", message))
        return

    chart = Table.grid(padding=(0, 2))
    chart.add_column()
    chart.add_column(justify="right")
    chart.add_column()
    for lang, percent, label in shares:
        filled = round(percent / 100 * BAR_WIDTH)
        bar = Text("█" * filled, style="green") + Text("░" * (BAR_WIDTH - filled), style="dim")
        chart.add_row(lang, f"{label}%", bar)
    console.print(_card("Language usage", f"{len(shares)} languages", "positive", chart))
