"""Score git commit subject lines for conventional format, tone, length and vagueness."""

__version__ = "1.0.0"

from .quality import ClassificationResult, classify_subject
from .scoring import BatchMetrics, Rating, analyze_commits, calculate_rating, parse_subjects

__all__ = [
    "BatchMetrics",
    "ClassificationResult",
    "Rating",
    "analyze_commits",
    "calculate_rating",
    "classify_subject",
    "parse_subjects",
    "__version__",
]
