"""Haiku composition: pool building, the packing chain and the loose fallback."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Callable, Mapping, Optional, Sequence, Tuple

from memory_haiku.utils.observability import create_counter, create_histogram, get_logger

from .imagery import extract_imagery
from .packing import DEFAULT_LIMITS, Line, PackingLimits, pack_exact, pack_natural
from .pool import WordPool, build_pool
from .syllables import SyllableOracle
from .tagging import NltkTagger, TaggerService
from .topics import TopicVocabulary

__all__ = [
    "HAIKU_PATTERN",
    "MIN_WORDS",
    "SEED_MASK",
    "HaikuResult",
    "HaikuComposer",
    "get_default_composer",
    "compose_haiku",
]


HAIKU_PATTERN: Tuple[int, int, int] = (5, 7, 5)
MIN_WORDS: Tuple[int, int, int] = (3, 4, 3)
SEED_MASK = 0xFFFFFFFF

STRICT = "strict"
LOOSE = "loose"

LineStrategy = Callable[[WordPool, int, int, random.Random], Optional[Line]]


@dataclass(frozen=True)
class HaikuResult:
    """A composed haiku plus how it was produced."""

    text: str
    lines: Tuple[str, str, str]
    topic: str
    seed: int
    strategy: str
    line_strategies: Tuple[str, ...] = ()
    pool: Tuple[str, ...] = ()

    @property
    def is_strict(self) -> bool:
        return self.strategy == STRICT


class HaikuComposer:
    """Compose 5-7-5 haiku from free text, deterministically per seed."""

    def __init__(
        self,
        *,
        oracle: Optional[SyllableOracle] = None,
        tagger: Optional[TaggerService] = None,
        topic_table: Optional[Mapping[str, TopicVocabulary]] = None,
        limits: PackingLimits = DEFAULT_LIMITS,
    ) -> None:
        self.oracle = oracle or SyllableOracle()
        self.tagger: TaggerService = tagger or NltkTagger()
        self.topic_table = topic_table
        self.limits = limits
        self.strategies: Tuple[Tuple[str, LineStrategy], ...] = (
            ("natural", self._pack_natural),
            ("exact", self._pack_exact),
        )

        self._logger = get_logger(__name__).bind(component="haiku_composer")
        self._metric_requests = create_counter(
            "haiku_compose_requests_total",
            "Total haiku composition requests.",
        )
        self._metric_outcomes = create_counter(
            "haiku_compose_outcomes_total",
            "Haiku compositions by the strategy that produced them.",
            label_names=("strategy",),
        )
        self._metric_duration = create_histogram(
            "haiku_compose_seconds",
            "Latency of haiku composition.",
        )

    # Strategy chain ---------------------------------------------------------
    def _pack_natural(
        self, pool: WordPool, target: int, min_words: int, rng: random.Random
    ) -> Optional[Line]:
        return pack_natural(pool.words, target, rng, min_words, self.oracle.count, self.limits)

    def _pack_exact(
        self, pool: WordPool, target: int, min_words: int, rng: random.Random
    ) -> Optional[Line]:
        return pack_exact(pool.words, target, pool.topic, rng, self.oracle.count, self.limits)

    def pack_line(
        self, pool: WordPool, target: int, min_words: int, rng: random.Random
    ) -> Tuple[Optional[Line], Optional[str]]:
        """Run the strategies in order and return the first line found."""

        for name, strategy in self.strategies:
            line = strategy(pool, target, min_words, rng)
            if line is not None:
                return line, name
        return None, None

    # Fallback ---------------------------------------------------------------
    def loose_fallback(self, text: str) -> Tuple[str, str, str]:
        """Best-effort lines from the input imagery; totals may miss 5-7-5."""

        imagery = extract_imagery(text or "", self.tagger)
        lines = []
        for target in HAIKU_PATTERN:
            out = []
            total = 0
            for word in imagery:
                syllables = self.oracle.count(word)
                if syllables == 0:
                    continue
                if total + syllables <= target:
                    out.append(word)
                    total += syllables
                if total == target:
                    break
            lines.append(" ".join(out))
        return lines[0], lines[1], lines[2]

    # Public API -------------------------------------------------------------
    def compose(self, text: str, seed: int) -> HaikuResult:
        """Compose one haiku for ``text``; equal inputs give equal output."""

        self._metric_requests.inc()
        masked_seed = int(seed) & SEED_MASK
        with self._metric_duration.time():
            rng = random.Random(masked_seed)
            pool = build_pool(text or "", rng, self.tagger, self.topic_table)

            packed: list[Line] = []
            used: list[str] = []
            for target, min_words in zip(HAIKU_PATTERN, MIN_WORDS):
                line, strategy = self.pack_line(pool, target, min_words, rng)
                if line is None:
                    break
                packed.append(line)
                used.append(strategy or "")

            if len(packed) == len(HAIKU_PATTERN):
                lines = tuple(" ".join(words) for words in packed)
                strategy = STRICT
            else:
                lines = self.loose_fallback(text or "")
                strategy = LOOSE
                used = []

        result = HaikuResult(
            text="\n".join(lines),
            lines=(lines[0], lines[1], lines[2]),
            topic=pool.topic.key,
            seed=masked_seed,
            strategy=strategy,
            line_strategies=tuple(used),
            pool=pool.words,
        )
        self._metric_outcomes.labels(strategy=strategy).inc()
        self._logger.debug(
            "Composed haiku",
            context={
                "seed": masked_seed,
                "topic": result.topic,
                "strategy": strategy,
                "line_strategies": list(used),
                "pool_size": len(pool),
            },
        )
        return result

    def compose_haiku(self, text: str, seed: int) -> str:
        return self.compose(text, seed).text

    def compose_many(self, text: str, seeds: Sequence[int]) -> list[HaikuResult]:
        # Every seed gets its own generator inside compose().
        return [self.compose(text, seed) for seed in seeds]


_DEFAULT_COMPOSER: Optional[HaikuComposer] = None


def get_default_composer() -> HaikuComposer:
    global _DEFAULT_COMPOSER
    if _DEFAULT_COMPOSER is None:
        _DEFAULT_COMPOSER = HaikuComposer()
    return _DEFAULT_COMPOSER


def compose_haiku(text: str, seed: int) -> str:
    """Compose a haiku with the process-wide default composer."""

    return get_default_composer().compose_haiku(text, seed)
