"""Batch aggregation of commit subject checks into a 0-100 quality rating."""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import asdict, dataclass

from .quality import MAX_SUBJECT_LENGTH, classify_subject

NO_CONVENTIONAL_WARNING = "No commits use the Conventional Commits format (feat:, fix:, etc.)."

LEVEL_GOOD = "Good"
LEVEL_AVERAGE = "Average"
LEVEL_BAD = "Bad"
LEVEL_NEED_IMPROVEMENT = "Need Improvement"

RATING_LEVELS = (LEVEL_GOOD, LEVEL_AVERAGE, LEVEL_BAD, LEVEL_NEED_IMPROVEMENT)

_LINE_SPLIT = re.compile(r"\r?\n")


@dataclass(frozen=True)
class Rating:
    """Overall score with its rating level and display badge."""

    score: int
    level: str
    badge: str


@dataclass(frozen=True)
class BatchMetrics:
    """Aggregated quality metrics for a batch of commit subjects."""

    total: int
    average_length: int
    conventional_percent: int
    imperative_percent: int
    warnings: tuple[str, ...]
    rating: Rating
    conventional_count: int = 0
    imperative_count: int = 0
    over_long_count: int = 0
    vague_count: int = 0

    def to_dict(self) -> dict:
        data = asdict(self)
        data["warnings"] = list(self.warnings)
        return data


def parse_subjects(text: str) -> list[str]:
    """Split pasted text into commit subjects, dropping blank lines."""
    subjects = []
    for line in _LINE_SPLIT.split(text):
        trimmed = line.strip()
        if trimmed:
            subjects.append(trimmed)
    return subjects


def _round_half_up(numerator: int, denominator: int) -> int:
    # Exact integer rounding; both operands are non-negative here.
    return (2 * numerator + denominator) // (2 * denominator)


def _plural(count: int, singular: str, plural: str) -> str:
    return f"{count} {singular if count == 1 else plural}"


def analyze_commits(subjects: Sequence[str]) -> BatchMetrics:
    """Compute quality metrics over a batch of commit subjects.

    Args:
        subjects: Non-empty sequence of trimmed, non-empty subject lines

    Returns:
        BatchMetrics with percentages, warnings and the overall rating

    Raises:
        ValueError: If no subjects are given
    """
    total = len(subjects)
    if total == 0:
        raise ValueError("At least one commit subject is required")

    total_length = 0
    conventional_count = 0
    imperative_count = 0
    long_count = 0
    vague_count = 0

    for subject in subjects:
        result = classify_subject(subject)
        total_length += result.length
        conventional_count += result.is_conventional
        imperative_count += result.is_imperative
        long_count += result.is_over_long
        vague_count += result.is_vague

    average_length = _round_half_up(total_length, total)
    conventional_percent = _round_half_up(100 * conventional_count, total)
    imperative_percent = _round_half_up(100 * imperative_count, total)

    warnings: list[str] = []
    if long_count > 0:
        warnings.append(
            _plural(long_count, "commit is", "commits are")
            + f" longer than {MAX_SUBJECT_LENGTH} characters."
        )
    if vague_count > 0:
        warnings.append(
            _plural(vague_count, "commit looks", "commits look") + " vague. Add more detail."
        )
    if conventional_count == 0:
        warnings.append(NO_CONVENTIONAL_WARNING)

    rating = calculate_rating(
        conventional_percent=conventional_percent,
        imperative_percent=imperative_percent,
        average_length=average_length,
        warnings_count=len(warnings),
        total=total,
        long_count=long_count,
        vague_count=vague_count,
    )

    return BatchMetrics(
        total=total,
        average_length=average_length,
        conventional_percent=conventional_percent,
        imperative_percent=imperative_percent,
        warnings=tuple(warnings),
        rating=rating,
        conventional_count=conventional_count,
        imperative_count=imperative_count,
        over_long_count=long_count,
        vague_count=vague_count,
    )


def calculate_rating(
    *,
    conventional_percent: int,
    imperative_percent: int,
    average_length: int,
    warnings_count: int,
    total: int,
    long_count: int,
    vague_count: int,
) -> Rating:
    """Combine batch metrics into a 0-100 score and a rating level.

    Returns:
        Rating with the clamped score, its level and badge
    """
    score = 0

    # Conventional commits (0-30 points)
    if conventional_percent >= 80:
        score += 30
    elif conventional_percent >= 50:
        score += 20
    elif conventional_percent > 0:
        score += 10

    # Imperative tone (0-25 points)
    if imperative_percent >= 80:
        score += 25
    elif imperative_percent >= 50:
        score += 15
    elif imperative_percent > 0:
        score += 5

    # Length (0-20 points), ideal is 30-72 chars
    if 30 <= average_length <= 72:
        score += 20
    elif 20 <= average_length < 100:
        score += 10
    elif 10 <= average_length < 20:
        score += 5

    # Fewer warnings, bigger bonus (0-25 points)
    if warnings_count == 0:
        score += 25
    elif warnings_count == 1:
        score += 15
    elif warnings_count == 2:
        score += 5

    # Critical issues
    if conventional_percent == 0:
        score -= 10
    if vague_count * 2 > total:
        score -= 15
    if long_count * 2 > total:
        score -= 10

    score = max(0, min(100, score))

    if score >= 75:
        return Rating(score=score, level=LEVEL_GOOD, badge="positive")
    elif score >= 50:
        return Rating(score=score, level=LEVEL_AVERAGE, badge="neutral")
    elif score >= 30:
        return Rating(score=score, level=LEVEL_BAD, badge="warn")
    else:
        return Rating(score=score, level=LEVEL_NEED_IMPROVEMENT, badge="warn")
