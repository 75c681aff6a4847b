"""Noun and adjective extraction for haiku imagery."""

from __future__ import annotations

from typing import FrozenSet, List

from .tagging import TaggerService, tokenize_and_tag

__all__ = ["IMAGERY_TAG_PREFIXES", "IMAGERY_STOPWORDS", "extract_imagery"]


IMAGERY_TAG_PREFIXES = ("nn", "jj")
IMAGERY_STOPWORDS: FrozenSet[str] = frozenset({"other", "another"})


def extract_imagery(text: str, tagger: TaggerService) -> List[str]:
    """Return the nouns and adjectives of ``text`` in their original order.

    Casing is preserved; duplicates are kept and removed later by the pool
    builder.
    """

    tokens, tags = tokenize_and_tag(text, tagger)
    keep: List[str] = []
    for token, tag in zip(tokens, tags):
        lowered = token.lower()
        if lowered in IMAGERY_STOPWORDS:
            continue
        if (tag or "").lower().startswith(IMAGERY_TAG_PREFIXES):
            keep.append(token)
    return keep
