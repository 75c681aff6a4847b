"""Generate / select / regenerate workflow around the haiku composer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from memory_haiku.core import HAIKU_PATTERN, HaikuComposer, HaikuResult, count_575
from memory_haiku.utils.observability import create_counter, get_logger

__all__ = [
    "GENERATE_SEEDS",
    "REGENERATE_SEEDS",
    "REGENERATE_STRIDE",
    "HaikuCandidate",
    "HaikuSession",
    "regenerate_seeds",
]


GENERATE_SEEDS: Tuple[int, int, int] = (3, 7, 13)
REGENERATE_SEEDS: Tuple[int, int, int] = (5, 9, 15)
REGENERATE_STRIDE = 3


def regenerate_seeds(round_index: int) -> Tuple[int, ...]:
    """Seeds for the ``round_index``-th regenerate (0-based)."""

    offset = max(0, int(round_index)) * REGENERATE_STRIDE
    return tuple(seed + offset for seed in REGENERATE_SEEDS)


@dataclass(frozen=True)
class HaikuCandidate:
    """A composed haiku together with its verified syllable counts."""

    result: HaikuResult
    counts: Tuple[int, int, int]

    @property
    def text(self) -> str:
        return self.result.text

    @property
    def seed(self) -> int:
        return self.result.seed

    @property
    def is_exact(self) -> bool:
        return self.counts == HAIKU_PATTERN

    def as_dict(self) -> dict:
        return {
            "text": self.text,
            "lines": list(self.result.lines),
            "seed": self.seed,
            "topic": self.result.topic,
            "strategy": self.result.strategy,
            "counts": list(self.counts),
            "is_exact": self.is_exact,
        }


class HaikuSession:
    """Transient per-user state for producing three haiku at a time."""

    def __init__(self, composer: HaikuComposer) -> None:
        self.composer = composer
        self._candidates: List[HaikuCandidate] = []
        self._selected: Optional[int] = None
        self._selected_text = ""
        self._last_source = ""
        self._regen_count = 0
        self._logger = get_logger(__name__).bind(component="haiku_session")
        self._metric_actions = create_counter(
            "haiku_session_actions_total",
            "Session actions performed.",
            label_names=("action",),
        )

    # Read-only views ---------------------------------------------------------
    @property
    def candidates(self) -> Tuple[HaikuCandidate, ...]:
        return tuple(self._candidates)

    @property
    def selected(self) -> Optional[HaikuCandidate]:
        if self._selected is None:
            return None
        return self._candidates[self._selected]

    @property
    def selected_index(self) -> Optional[int]:
        return self._selected

    @property
    def selected_text(self) -> str:
        """Text of the most recent pick; survives regenerate rounds."""

        return self._selected_text

    @property
    def last_source(self) -> str:
        return self._last_source

    @property
    def regen_count(self) -> int:
        return self._regen_count

    def candidate_for(self, result: HaikuResult) -> HaikuCandidate:
        """Attach verifier counts to a composed ``result``."""

        counts = count_575(result.text, self.composer.oracle.count)
        return HaikuCandidate(result=result, counts=(counts[0], counts[1], counts[2]))

    # Internal helpers ------------------------------------------------------
    def _compose(self, source: str, seeds: Sequence[int]) -> List[HaikuCandidate]:
        return [self.candidate_for(result) for result in self.composer.compose_many(source, seeds)]

    # Actions ---------------------------------------------------------------
    def generate(self, text: str) -> List[HaikuCandidate]:
        """Compose three fresh candidates from ``text``.

        Blank input leaves the session untouched and returns an empty list.
        """

        base = (text or "").strip()
        if not base:
            return []

        self._metric_actions.labels(action="generate").inc()
        self._candidates = self._compose(base, GENERATE_SEEDS)
        self._selected = None
        self._selected_text = ""
        self._last_source = base
        self._regen_count = 0
        self._logger.info(
            "Generated haiku candidates",
            context={"exact": [c.is_exact for c in self._candidates]},
        )
        return list(self._candidates)

    def select(self, index: int) -> HaikuCandidate:
        if not 0 <= index < len(self._candidates):
            raise IndexError(f"no haiku candidate at index {index}")
        self._selected = index
        self._selected_text = self._candidates[index].text.strip()
        return self._candidates[index]

    def regenerate(self) -> List[HaikuCandidate]:
        """Compose three new candidates from the selection or the last source.

        Each call shifts the seeds by three so successive rounds differ. The
        picked text stays the source until the next generate or clear; the
        selected index is cleared for the new batch.
        """

        source = self._selected_text or self._last_source
        if not source:
            return []

        self._metric_actions.labels(action="regenerate").inc()
        seeds = regenerate_seeds(self._regen_count)
        self._candidates = self._compose(source, seeds)
        self._selected = None
        self._regen_count += 1
        self._logger.info(
            "Regenerated haiku candidates",
            context={"round": self._regen_count, "seeds": list(seeds)},
        )
        return list(self._candidates)

    def clear(self) -> None:
        self._candidates = []
        self._selected = None
        self._selected_text = ""
        self._last_source = ""
        self._regen_count = 0
