"""Syllable counting backed by the CMU pronouncing dictionary."""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Optional, Protocol, Sequence, Tuple

import pronouncing
import pyphen

__all__ = [
    "SyllableService",
    "CmuSyllableService",
    "SyllableOracle",
    "DEFAULT_SYLLABLE_ORACLE",
    "syllable_count",
]


_ALPHA_PATTERN = re.compile(r"[A-Za-z]")
_STRESS_DIGIT_PATTERN = re.compile(r"\d$")


class SyllableService(Protocol):
    """Linguistic collaborator returning a syllable breakdown for a word."""

    def syllables(self, word: str) -> Optional[Sequence[str]]:
        ...


def _segment_phones(phones: Sequence[str]) -> Tuple[str, ...]:
    """Group CMU phones into one segment per vowel nucleus.

    A new segment starts whenever a stress-marked vowel arrives while the
    current segment already holds one, so ``S AH1 N L IH0 T`` becomes
    ``("S AH1 N L", "IH0 T")``.
    """

    segments: list[list[str]] = []
    current: list[str] = []
    has_vowel = False
    for phone in phones:
        is_vowel = bool(_STRESS_DIGIT_PATTERN.search(phone))
        if is_vowel and has_vowel:
            segments.append(current)
            current = []
            has_vowel = False
        current.append(phone)
        has_vowel = has_vowel or is_vowel
    segments.append(current)
    return tuple(" ".join(segment) for segment in segments)


class CmuSyllableService:
    """Syllable breakdowns from ``pronouncing`` with ``pyphen`` back-off.

    Words present in the CMU dictionary are split on vowel nuclei of their
    first listed pronunciation. Out-of-vocabulary words are hyphenated with
    pyphen and each hyphen piece counts as one segment.
    """

    def __init__(self, lang: str = "en") -> None:
        self._hyphenator = pyphen.Pyphen(lang=lang)

    def syllables(self, word: str) -> Optional[Sequence[str]]:
        normalized = (word or "").strip().lower()
        if not normalized:
            return None

        phones_list = pronouncing.phones_for_word(normalized)
        if phones_list:
            phones = phones_list[0].split()
            if any(_STRESS_DIGIT_PATTERN.search(phone) for phone in phones):
                return _segment_phones(phones)

        letters = "".join(ch for ch in normalized if ch.isalpha())
        if not letters:
            return None
        hyphenated = self._hyphenator.inserted(letters)
        pieces = tuple(piece for piece in hyphenated.split("-") if piece)
        return pieces or None


class SyllableOracle:
    """Turns a service breakdown into a non-negative syllable count."""

    def __init__(self, service: Optional[SyllableService] = None, *, cache_size: int = 4096) -> None:
        self.service: SyllableService = service or CmuSyllableService()
        self._cached_count = lru_cache(maxsize=cache_size)(self._count_uncached)

    def _count_uncached(self, word: str) -> int:
        if not word or not _ALPHA_PATTERN.search(word):
            return 0
        breakdown = self.service.syllables(word)
        if not breakdown:
            return 0
        segments = [segment for segment in breakdown if segment]
        if not segments:
            return 0
        return max(1, len(segments))

    def count(self, word: str) -> int:
        """Return the syllable count of ``word``; 0 means unusable."""

        return self._cached_count(word or "")

    __call__ = count

    def count_phrase(self, phrase: str) -> int:
        return sum(self.count(token) for token in (phrase or "").split())


DEFAULT_SYLLABLE_ORACLE = SyllableOracle()


def syllable_count(word: str) -> int:
    """Count syllables in ``word`` using the shared default oracle."""

    return DEFAULT_SYLLABLE_ORACLE.count(word)
