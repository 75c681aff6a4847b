"""Per-line syllable verification for composed haiku."""

from __future__ import annotations

from typing import Callable, List, Optional

from .composer import HAIKU_PATTERN
from .syllables import syllable_count

__all__ = ["count_line", "count_575", "is_575"]


def count_line(line: str, count: Optional[Callable[[str], int]] = None) -> int:
    counter = count or syllable_count
    return sum(counter(word) for word in (line or "").split())


def count_575(haiku: str, count: Optional[Callable[[str], int]] = None) -> List[int]:
    """Return the syllable totals of the first three lines of ``haiku``.

    Missing lines count as empty, so ``"a\\nb"`` yields ``[1, 1, 0]``.
    """

    lines = (haiku or "").split("\n")
    lines += [""] * (len(HAIKU_PATTERN) - len(lines))
    return [count_line(line, count) for line in lines[: len(HAIKU_PATTERN)]]


def is_575(haiku: str, count: Optional[Callable[[str], int]] = None) -> bool:
    return tuple(count_575(haiku, count)) == HAIKU_PATTERN
