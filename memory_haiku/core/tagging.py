"""Tokenizer and part-of-speech tagger adapter built on nltk."""

from __future__ import annotations

from typing import List, Protocol, Sequence, Tuple

import nltk
from nltk.tokenize import TreebankWordTokenizer

from memory_haiku.utils.observability import get_logger

__all__ = [
    "TaggerService",
    "TaggerUnavailableError",
    "NltkTagger",
    "tokenize_and_tag",
]


class TaggerUnavailableError(RuntimeError):
    """Raised when the POS tagger model cannot be loaded."""


class TaggerService(Protocol):
    """Tokenizer/tagger collaborator producing Penn-Treebank-like tags."""

    def tokenize(self, text: str) -> List[str]:
        ...

    def pos(self, tokens: Sequence[str]) -> List[str]:
        ...


# (resource path, download name)
_TAGGER_RESOURCES: Tuple[Tuple[str, str], ...] = (
    ("taggers/averaged_perceptron_tagger_eng", "averaged_perceptron_tagger_eng"),
)


class NltkTagger:
    """Treebank tokenization plus the averaged perceptron tagger."""

    def __init__(self, *, auto_download: bool = True) -> None:
        self.auto_download = auto_download
        self._tokenizer = TreebankWordTokenizer()
        self._resources_ready = False
        self._logger = get_logger(__name__).bind(component="nltk_tagger")

    def ensure_resources(self) -> None:
        if self._resources_ready:
            return
        for data_path, data_name in _TAGGER_RESOURCES:
            try:
                nltk.data.find(data_path)
            except LookupError:
                if not self.auto_download:
                    raise TaggerUnavailableError(f"nltk resource '{data_name}' is not installed")
                self._logger.info("Downloading nltk resource", context={"resource": data_name})
                nltk.download(data_name, quiet=True)
                try:
                    nltk.data.find(data_path)
                except LookupError as exc:
                    raise TaggerUnavailableError(
                        f"nltk resource '{data_name}' could not be downloaded"
                    ) from exc
        self._resources_ready = True

    def tokenize(self, text: str) -> List[str]:
        return self._tokenizer.tokenize(text or "")

    def pos(self, tokens: Sequence[str]) -> List[str]:
        if not tokens:
            return []
        self.ensure_resources()
        return [tag for _, tag in nltk.pos_tag(list(tokens))]


def tokenize_and_tag(text: str, tagger: TaggerService) -> Tuple[List[str], List[str]]:
    """Return parallel ``(tokens, tags)`` lists for ``text``."""

    tokens = list(tagger.tokenize(text or ""))
    if not tokens:
        return [], []
    tags = list(tagger.pos(tokens))
    if len(tags) != len(tokens):
        raise ValueError(
            f"tagger returned {len(tags)} tags for {len(tokens)} tokens"
        )
    return tokens, tags
