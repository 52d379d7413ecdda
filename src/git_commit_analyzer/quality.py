"""Per-subject commit message quality checks."""

import re
from dataclasses import dataclass

CONVENTIONAL_TYPES = (
    "feat",
    "fix",
    "chore",
    "docs",
    "style",
    "refactor",
    "perf",
    "test",
    "build",
    "ci",
    "revert",
    "hotfix",
)

# Matches: "feat:", "fix(scope):", "docs: " ... followed by whitespace
CONVENTIONAL_PATTERN = re.compile(
    rf"^({'|'.join(CONVENTIONAL_TYPES)})(\(.+\))?:\s+",
    re.IGNORECASE,
)

IMPERATIVE_VERBS = frozenset(
    {
        "add",
        "fix",
        "update",
        "remove",
        "improve",
        "refactor",
        "optimize",
        "document",
        "test",
        "clean",
        "guard",
        "handle",
        "support",
        "merge",
        "release",
        "bump",
    }
)

VAGUE_PREFIXES = ("update", "changes", "stuff")

MAX_SUBJECT_LENGTH = 72
MIN_DESCRIPTIVE_LENGTH = 10


@dataclass(frozen=True)
class ClassificationResult:
    """Outcome of every check for one commit subject."""

    is_conventional: bool
    is_imperative: bool
    is_over_long: bool
    is_vague: bool
    length: int


def is_conventional(subject: str) -> bool:
    """Check whether a subject starts with a Conventional Commits prefix."""
    return CONVENTIONAL_PATTERN.match(subject) is not None


def is_imperative(subject: str) -> bool:
    """Check whether a subject reads in the imperative mood.

    The conventional prefix (if any) is removed and the first remaining word
    is compared, lower-cased, against a fixed list of verbs. No stemming.

    Args:
        subject: The commit subject line

    Returns:
        True if the first word is a known imperative verb
    """
    cleaned = CONVENTIONAL_PATTERN.sub("", subject, count=1).strip()
    words = cleaned.split()
    first_word = words[0].lower() if words else ""
    return first_word in IMPERATIVE_VERBS


def is_over_long(subject: str) -> bool:
    return len(subject) > MAX_SUBJECT_LENGTH


def is_vague(subject: str) -> bool:
    """Check for generic or overly short subjects.

    Catches obvious cases like "update ..." or "stuff" and anything too short
    to carry useful context.
    """
    lowercase = subject.lower()
    if lowercase.startswith(VAGUE_PREFIXES):
        return True
    return len(lowercase) < MIN_DESCRIPTIVE_LENGTH


def classify_subject(subject: str) -> ClassificationResult:
    """Run all checks against a single commit subject.

    Args:
        subject: Trimmed, non-empty first line of a commit message

    Returns:
        ClassificationResult with one flag per check and the raw length
    """
    return ClassificationResult(
        is_conventional=is_conventional(subject),
        is_imperative=is_imperative(subject),
        is_over_long=is_over_long(subject),
        is_vague=is_vague(subject),
        length=len(subject),
    )
