"""Line packing strategies that fill a line to an exact syllable budget.

Two strategies live here:

* :func:`pack_natural` grows a line word by word from the pool, sprinkling
  in glue words (articles and prepositions) and rejecting lines that read
  like lists or like strings of prepositions.
* :func:`pack_exact` walks a rotated copy of the pool greedily and closes the
  remaining gap with a topic filler word.

Both are bounded randomized searches: every loop has a hard ceiling, so a
call always terminates and returns ``None`` when no line was found.
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass
from typing import Callable, FrozenSet, List, Optional, Sequence, Tuple

from .topics import TopicVocabulary

__all__ = [
    "GLUE_WORDS",
    "GLUE_SET",
    "PackingLimits",
    "DEFAULT_LIMITS",
    "is_glue",
    "line_stats",
    "has_adjacent_glue",
    "is_natural_line",
    "pack_natural",
    "pack_exact",
]


SyllableCounter = Callable[[str], int]
Line = Tuple[str, ...]

# "over" appears twice so it is drawn twice as often as other glue words.
GLUE_WORDS: Tuple[str, ...] = (
    "the", "a", "in", "on", "by", "with", "of", "to", "and", "at", "near",
    "under", "over", "through", "into", "from", "for", "as", "where", "along",
    "over",
)
GLUE_SET: FrozenSet[str] = frozenset(word.lower() for word in GLUE_WORDS)


@dataclass(frozen=True)
class PackingLimits:
    """Iteration ceilings and thresholds shared by the packers."""

    natural_attempts: int = 36
    natural_steps: int = 160
    glue_probability: float = 0.42
    min_imagery_ratio: float = 0.6
    max_glue_ratio: float = 0.5
    exact_attempts: int = 6
    exact_passes: int = 2
    rotation_stride: int = 3


DEFAULT_LIMITS = PackingLimits()


def is_glue(word: str) -> bool:
    return word.lower() in GLUE_SET


def line_stats(words: Sequence[str]) -> Tuple[int, int]:
    """Return ``(imagery_count, glue_count)`` for ``words``."""

    glue = sum(1 for word in words if is_glue(word))
    return len(words) - glue, glue


def has_adjacent_glue(words: Sequence[str]) -> bool:
    return any(is_glue(first) and is_glue(second) for first, second in zip(words, words[1:]))


def is_natural_line(
    words: Sequence[str],
    min_words: int,
    limits: PackingLimits = DEFAULT_LIMITS,
) -> bool:
    imagery, glue = line_stats(words)
    return (
        len(words) >= min_words
        and imagery >= math.ceil(min_words * limits.min_imagery_ratio)
        and glue <= math.ceil(len(words) * limits.max_glue_ratio)
    )


def _fitting(
    source: Sequence[str],
    remaining: int,
    count: SyllableCounter,
    after_glue: bool,
) -> List[str]:
    return [
        word
        for word in source
        if 0 < count(word) <= remaining and not (after_glue and is_glue(word))
    ]


def _preferred_tier(words: Sequence[str], count: SyllableCounter) -> Sequence[str]:
    # Short words first: one syllable, then two, then anything that fits.
    for size in (1, 2):
        tier = [word for word in words if count(word) == size]
        if tier:
            return tier
    return words


def pack_natural(
    pool: Sequence[str],
    target: int,
    rng: random.Random,
    min_words: int,
    count: SyllableCounter,
    limits: PackingLimits = DEFAULT_LIMITS,
) -> Optional[Line]:
    """Build a sentence-like line of exactly ``target`` syllables.

    Args:
        pool: Imagery words to draw from; never mutated.
        target: Exact syllable total the line must reach.
        rng: Seeded generator owned by the current composition.
        min_words: Minimum words for the line to count as natural.
        count: Syllable counter; words counting 0 are never placed.
        limits: Attempt and step ceilings plus the naturalness ratios.

    Returns:
        The packed words, or ``None`` once every attempt failed.
    """

    imagery_sorted = sorted(pool, key=count)
    glue_sorted = sorted(GLUE_WORDS, key=count)

    for _attempt in range(limits.natural_attempts):
        words: List[str] = []
        total = 0
        steps = 0
        while total < target and steps < limits.natural_steps:
            steps += 1
            prefer_glue = bool(words) and rng.random() < limits.glue_probability
            after_glue = bool(words) and is_glue(words[-1])
            if prefer_glue and after_glue:
                continue

            primary, secondary = (
                (glue_sorted, imagery_sorted) if prefer_glue else (imagery_sorted, glue_sorted)
            )
            remaining = target - total
            fits = _fitting(primary, remaining, count, after_glue)
            if not fits:
                fits = _fitting(secondary, remaining, count, after_glue)
            if not fits:
                break

            word = rng.choice(_preferred_tier(fits, count))
            words.append(word)
            total += count(word)

        if total != target:
            continue
        if is_natural_line(words, min_words, limits):
            return tuple(words)
    return None


def pack_exact(
    pool: Sequence[str],
    target: int,
    topic: TopicVocabulary,
    rng: random.Random,
    count: SyllableCounter,
    limits: PackingLimits = DEFAULT_LIMITS,
) -> Optional[Line]:
    """Greedy fallback packer that patches the last gap with a filler word.

    Only a single filler closes the gap per pass; a deficit that no filler
    matches exactly leaves the attempt short and the next rotation is tried.
    """

    fillers = topic.fillers
    words = list(pool)

    for attempt in range(limits.exact_attempts):
        shift = attempt * limits.rotation_stride + rng.randrange(limits.rotation_stride)
        rotated = words[shift % len(words):] + words[: shift % len(words)] if words else []

        line: List[str] = []
        used = set()
        total = 0
        for _pass in range(limits.exact_passes):
            for index, word in enumerate(rotated):
                if total >= target:
                    break
                if index in used:
                    continue
                syllables = count(word)
                if syllables == 0 or total + syllables > target:
                    continue
                line.append(word)
                total += syllables
                used.add(index)

            if total == target:
                break

            need = target - total
            exact = [word for word in fillers if count(word) == need]
            if exact:
                line.append(rng.choice(exact))
                total = target
                break

            size = 2 if need >= 2 else 1
            patches = [word for word in fillers if count(word) == size]
            if patches:
                line.append(rng.choice(patches))
                total += size

        if total == target:
            return tuple(line)
    return None
