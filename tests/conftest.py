import random
import re
import sys
from pathlib import Path
from typing import Dict, Iterable, List, Sequence

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from memory_haiku.core import HaikuComposer, SyllableOracle


_TOKEN_PATTERN = re.compile(r"[A-Za-z']+|[^\sA-Za-z']")

STUB_NOUNS = {
    "waves", "sand", "sky", "snow", "moon", "river", "stones", "city",
    "street", "memory", "grandmother", "kitchen", "bread", "morning",
    "pines", "trail", "ridge", "moss", "lake", "dog", "other",
}
STUB_ADJECTIVES = {"warm", "bright", "cold", "quiet", "old", "green", "another"}


class StubTagger:
    """Deterministic tagger that knows a handful of nouns and adjectives."""

    def __init__(self) -> None:
        self.pos_calls: List[List[str]] = []

    def tokenize(self, text: str) -> List[str]:
        return _TOKEN_PATTERN.findall(text or "")

    def pos(self, tokens: Sequence[str]) -> List[str]:
        self.pos_calls.append(list(tokens))
        tags = []
        for token in tokens:
            lowered = token.lower()
            if lowered in STUB_NOUNS:
                tags.append("NNS" if lowered.endswith("s") else "NN")
            elif lowered in STUB_ADJECTIVES:
                tags.append("JJ")
            elif not lowered.isalpha():
                tags.append(".")
            else:
                tags.append("DT")
        return tags


class ScriptedRandom(random.Random):
    """Random whose ``random()`` draws come from a fixed script."""

    def __init__(self, draws: Iterable[float]) -> None:
        super().__init__(0)
        self._draws = list(draws)

    def random(self) -> float:
        if self._draws:
            return self._draws.pop(0)
        return 0.99

    def choice(self, seq):
        return seq[0]


def make_counter(counts: Dict[str, int]):
    """Syllable counter backed by a plain dictionary (unknown words count 0)."""

    def _count(word: str) -> int:
        return counts.get(word.lower(), 0)

    return _count


@pytest.fixture
def stub_tagger() -> StubTagger:
    return StubTagger()


@pytest.fixture(scope="session")
def oracle() -> SyllableOracle:
    return SyllableOracle()


@pytest.fixture
def composer(stub_tagger: StubTagger, oracle: SyllableOracle) -> HaikuComposer:
    return HaikuComposer(oracle=oracle, tagger=stub_tagger)


@pytest.fixture
def scripted_random():
    return ScriptedRandom


@pytest.fixture
def counter_from():
    return make_counter
