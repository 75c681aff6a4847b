"""Haiku composition engine for memory-haiku."""

from .composer import (
    HAIKU_PATTERN,
    MIN_WORDS,
    HaikuComposer,
    HaikuResult,
    compose_haiku,
    get_default_composer,
)
from .imagery import extract_imagery
from .packing import (
    DEFAULT_LIMITS,
    GLUE_SET,
    GLUE_WORDS,
    PackingLimits,
    has_adjacent_glue,
    line_stats,
    pack_exact,
    pack_natural,
)
from .pool import WordPool, build_pool
from .syllables import (
    DEFAULT_SYLLABLE_ORACLE,
    CmuSyllableService,
    SyllableOracle,
    syllable_count,
)
from .tagging import NltkTagger, TaggerUnavailableError, tokenize_and_tag
from .topics import (
    TOPIC_ORDER,
    TopicVocabulary,
    UnknownTopicError,
    classify_topic,
    get_topic,
    load_topic_table,
)
from .verifier import count_575, count_line, is_575

__all__ = [
    "HAIKU_PATTERN",
    "MIN_WORDS",
    "HaikuComposer",
    "HaikuResult",
    "compose_haiku",
    "get_default_composer",
    "extract_imagery",
    "DEFAULT_LIMITS",
    "GLUE_SET",
    "GLUE_WORDS",
    "PackingLimits",
    "has_adjacent_glue",
    "line_stats",
    "pack_exact",
    "pack_natural",
    "WordPool",
    "build_pool",
    "DEFAULT_SYLLABLE_ORACLE",
    "CmuSyllableService",
    "SyllableOracle",
    "syllable_count",
    "NltkTagger",
    "TaggerUnavailableError",
    "tokenize_and_tag",
    "TOPIC_ORDER",
    "TopicVocabulary",
    "UnknownTopicError",
    "classify_topic",
    "get_topic",
    "load_topic_table",
    "count_575",
    "count_line",
    "is_575",
]
