"""Plain-text rendering of haiku candidates."""

from __future__ import annotations

from typing import List, Optional, Sequence

from .session_service import HaikuCandidate

__all__ = ["format_counts", "format_candidates"]


def format_counts(counts: Sequence[int]) -> str:
    return " / ".join(str(int(value)) for value in counts)


def format_candidates(
    candidates: Sequence[HaikuCandidate],
    *,
    show_counts: bool = False,
    selected_index: Optional[int] = None,
) -> str:
    """Render numbered haiku blocks separated by blank lines."""

    if not candidates:
        return "No haiku yet. Type or paste a memory first."

    blocks: List[str] = []
    for index, candidate in enumerate(candidates):
        header = f"Haiku {index + 1}"
        if index == selected_index:
            header += " [selected]"
        lines = [header, candidate.text]
        if show_counts:
            marker = "ok" if candidate.is_exact else "off"
            lines.append(f"({format_counts(candidate.counts)}, {marker})")
        blocks.append("\n".join(lines))
    return "\n\n".join(blocks)
