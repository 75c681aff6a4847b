"""Assemble the word pool a haiku is packed from."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Iterable, List, Mapping, Optional, Tuple

from .imagery import extract_imagery
from .tagging import TaggerService
from .topics import TopicVocabulary, classify_topic, get_topic, load_topic_table

__all__ = ["KIGO_PROBABILITY", "WordPool", "dedupe_casefold", "build_pool"]


KIGO_PROBABILITY = 0.5


@dataclass(frozen=True)
class WordPool:
    """Immutable packing input: ordered words plus the resolved topic."""

    words: Tuple[str, ...]
    topic: TopicVocabulary
    imagery: Tuple[str, ...] = ()
    kigo: Tuple[str, ...] = ()

    def __len__(self) -> int:
        return len(self.words)

    def __iter__(self):
        return iter(self.words)


def dedupe_casefold(words: Iterable[str]) -> List[str]:
    """Drop case-insensitive repeats while keeping first-seen casing and order."""

    seen = set()
    unique: List[str] = []
    for word in words:
        key = word.lower()
        if key in seen:
            continue
        seen.add(key)
        unique.append(word)
    return unique


def build_pool(
    text: str,
    rng: random.Random,
    tagger: TaggerService,
    table: Optional[Mapping[str, TopicVocabulary]] = None,
) -> WordPool:
    """Merge input imagery with topic nouns and, half the time, a kigo phrase."""

    vocabulary = table if table is not None else load_topic_table()
    raw_tokens = (text or "").lower().split()
    topic = get_topic(classify_topic(raw_tokens, vocabulary), vocabulary)

    imagery = [
        word for word in extract_imagery(text or "", tagger) if word.lower() not in topic.banned
    ]
    unique = dedupe_casefold(imagery + list(topic.nouns))

    kigo_tokens: List[str] = []
    if topic.kigo and rng.random() < KIGO_PROBABILITY:
        kigo_tokens = rng.choice(topic.kigo).split()

    return WordPool(
        words=tuple(kigo_tokens + unique),
        topic=topic,
        imagery=tuple(imagery),
        kigo=tuple(kigo_tokens),
    )
