"""Topic vocabulary tables and the keyword-based topic classifier."""

from __future__ import annotations

import json
from dataclasses import dataclass
from functools import lru_cache
from importlib import resources
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Iterable, Mapping, Optional, Tuple

__all__ = [
    "TOPIC_ORDER",
    "GENERIC_TOPIC",
    "EXACT_MATCH_POINTS",
    "SUBSTRING_MATCH_POINTS",
    "TopicVocabulary",
    "UnknownTopicError",
    "parse_topic_table",
    "load_topic_table",
    "get_topic",
    "score_topics",
    "classify_topic",
]


# Declaration order doubles as the tie-break order.
TOPIC_ORDER: Tuple[str, ...] = ("beach", "forest", "mountain", "snow", "city", "generic")
GENERIC_TOPIC = "generic"

EXACT_MATCH_POINTS = 2
SUBSTRING_MATCH_POINTS = 1


class UnknownTopicError(KeyError):
    """Raised when a topic outside :data:`TOPIC_ORDER` is requested."""


@dataclass(frozen=True)
class TopicVocabulary:
    """Static word lists owned by a single topic."""

    key: str
    keywords: Tuple[str, ...]
    f1: Tuple[str, ...]
    f2: Tuple[str, ...]
    nouns: Tuple[str, ...]
    banned: FrozenSet[str] = frozenset()
    kigo: Tuple[str, ...] = ()

    @property
    def fillers(self) -> Tuple[str, ...]:
        return self.f1 + self.f2


def _string_tuple(values: Any, *, field: str, topic: str) -> Tuple[str, ...]:
    if values is None:
        return ()
    if isinstance(values, (str, bytes)) or not isinstance(values, Iterable):
        raise ValueError(f"topic '{topic}' field '{field}' must be a list of strings")
    return tuple(str(value).strip() for value in values if str(value).strip())


def _build_topic(key: str, raw: Mapping[str, Any]) -> TopicVocabulary:
    for required in ("keywords", "f1", "f2", "nouns"):
        if required not in raw:
            raise ValueError(f"topic '{key}' is missing required field '{required}'")

    banned = _string_tuple(raw.get("banned"), field="banned", topic=key)
    return TopicVocabulary(
        key=key,
        keywords=tuple(word.lower() for word in _string_tuple(raw["keywords"], field="keywords", topic=key)),
        f1=_string_tuple(raw["f1"], field="f1", topic=key),
        f2=_string_tuple(raw["f2"], field="f2", topic=key),
        nouns=_string_tuple(raw["nouns"], field="nouns", topic=key),
        banned=frozenset(word.lower() for word in banned),
        kigo=_string_tuple(raw.get("kigo"), field="kigo", topic=key),
    )


def parse_topic_table(raw_config: Mapping[str, Any]) -> Mapping[str, TopicVocabulary]:
    """Validate raw vocabulary configuration into an immutable table."""

    section = raw_config.get("topics") if isinstance(raw_config, Mapping) else None
    if not isinstance(section, Mapping):
        raise ValueError("topic vocabulary must contain a 'topics' mapping")

    table: Dict[str, TopicVocabulary] = {}
    for key in TOPIC_ORDER:
        raw = section.get(key)
        if not isinstance(raw, Mapping):
            raise ValueError(f"topic vocabulary is missing topic '{key}'")
        table[key] = _build_topic(key, raw)
    return MappingProxyType(table)


@lru_cache()
def load_topic_table() -> Mapping[str, TopicVocabulary]:
    """Load the packaged topic vocabulary once per process."""

    config_path = resources.files("memory_haiku").joinpath("data").joinpath(
        "topic_vocabulary.json"
    )
    with config_path.open("r", encoding="utf-8") as handle:
        raw_config = json.load(handle)
    return parse_topic_table(raw_config)


def get_topic(
    key: str,
    table: Optional[Mapping[str, TopicVocabulary]] = None,
) -> TopicVocabulary:
    vocabulary = table if table is not None else load_topic_table()
    try:
        return vocabulary[key]
    except KeyError:
        raise UnknownTopicError(key) from None


def score_topics(
    tokens: Iterable[str],
    table: Optional[Mapping[str, TopicVocabulary]] = None,
) -> Dict[str, int]:
    """Return the bag-of-keywords score of every topic for ``tokens``."""

    vocabulary = table if table is not None else load_topic_table()
    lowered = [str(token).lower() for token in tokens]
    exact = set(lowered)

    scores: Dict[str, int] = {}
    for key in TOPIC_ORDER:
        score = 0
        for keyword in vocabulary[key].keywords:
            if keyword in exact:
                score += EXACT_MATCH_POINTS
            if any(keyword in token for token in lowered):
                score += SUBSTRING_MATCH_POINTS
        scores[key] = score
    return scores


def classify_topic(
    tokens: Iterable[str],
    table: Optional[Mapping[str, TopicVocabulary]] = None,
) -> str:
    """Pick the best scoring topic; ties go to the earlier declared topic."""

    scores = score_topics(tokens, table)
    best_key = GENERIC_TOPIC
    best_score = 0
    for key in TOPIC_ORDER:
        if scores[key] > best_score:
            best_key = key
            best_score = scores[key]
    return best_key
