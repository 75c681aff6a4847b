"""Service layer for the memory-haiku application."""

from .result_formatter import format_candidates, format_counts
from .session_service import (
    GENERATE_SEEDS,
    REGENERATE_SEEDS,
    HaikuCandidate,
    HaikuSession,
    regenerate_seeds,
)

__all__ = [
    "format_candidates",
    "format_counts",
    "GENERATE_SEEDS",
    "REGENERATE_SEEDS",
    "HaikuCandidate",
    "HaikuSession",
    "regenerate_seeds",
]
