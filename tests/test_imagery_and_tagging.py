import nltk
import pytest

from memory_haiku.core.imagery import extract_imagery
from memory_haiku.core.tagging import NltkTagger, TaggerUnavailableError, tokenize_and_tag


class LowercaseTagger:
    def tokenize(self, text):
        return text.split()

    def pos(self, tokens):
        return ["nns", "jjr", "vbd", "nn"][: len(tokens)]


class MisalignedTagger:
    def tokenize(self, text):
        return text.split()

    def pos(self, tokens):
        return ["NN"]


def test_extract_imagery_keeps_nouns_and_adjectives_in_order(stub_tagger):
    words = extract_imagery("The warm Sand under a bright sky, and the waves.", stub_tagger)

    assert words == ["warm", "Sand", "bright", "sky", "waves"]


def test_extract_imagery_drops_other_and_another(stub_tagger):
    words = extract_imagery("another moon and the other river", stub_tagger)

    assert words == ["moon", "river"]


def test_extract_imagery_keeps_duplicates(stub_tagger):
    assert extract_imagery("moon moon Moon", stub_tagger) == ["moon", "moon", "Moon"]


def test_tag_prefix_comparison_is_case_insensitive():
    assert extract_imagery("stones colder fell rain", LowercaseTagger()) == [
        "stones",
        "colder",
        "rain",
    ]


def test_tokenize_and_tag_skips_tagger_for_empty_text(stub_tagger):
    assert tokenize_and_tag("", stub_tagger) == ([], [])
    assert tokenize_and_tag("   ", stub_tagger) == ([], [])
    assert stub_tagger.pos_calls == []


def test_tokenize_and_tag_rejects_misaligned_tags():
    with pytest.raises(ValueError):
        tokenize_and_tag("two words", MisalignedTagger())


def test_nltk_tokenizer_splits_punctuation_and_clitics():
    tagger = NltkTagger(auto_download=False)

    assert tagger.tokenize("the sand's warm.") == ["the", "sand", "'s", "warm", "."]


def test_nltk_tagger_marks_nouns_and_adjectives():
    tagger = NltkTagger(auto_download=False)
    try:
        tagger.ensure_resources()
    except TaggerUnavailableError:
        pytest.skip("nltk perceptron tagger data is not installed")

    tokens, tags = tokenize_and_tag("the cold river runs past old stones", tagger)

    assert len(tokens) == len(tags)
    tagged = dict(zip(tokens, tags))
    assert tagged["river"].startswith("NN")
    assert tagged["stones"].startswith("NN")
    assert tagged["cold"].startswith("JJ")


@pytest.fixture
def missing_tagger_data(monkeypatch):
    lookups = []
    downloads = []

    def fake_find(path):
        lookups.append(path)
        raise LookupError(path)

    def fake_download(name, quiet=False):
        downloads.append((name, quiet))
        return True

    monkeypatch.setattr(nltk.data, "find", fake_find)
    monkeypatch.setattr(nltk, "download", fake_download)
    return lookups, downloads


def test_missing_tagger_data_raises_without_download_when_disabled(missing_tagger_data):
    lookups, downloads = missing_tagger_data
    tagger = NltkTagger(auto_download=False)

    with pytest.raises(TaggerUnavailableError):
        tagger.pos(["cold", "river"])

    assert lookups == ["taggers/averaged_perceptron_tagger_eng"]
    assert downloads == []


def test_failed_download_raises_after_one_quiet_attempt(missing_tagger_data):
    lookups, downloads = missing_tagger_data
    tagger = NltkTagger(auto_download=True)

    with pytest.raises(TaggerUnavailableError):
        tagger.ensure_resources()

    assert downloads == [("averaged_perceptron_tagger_eng", True)]
    assert lookups == ["taggers/averaged_perceptron_tagger_eng"] * 2


def test_successful_download_is_checked_once(monkeypatch):
    state = {"installed": False, "finds": 0}
    downloads = []

    def fake_find(path):
        state["finds"] += 1
        if not state["installed"]:
            raise LookupError(path)
        return path

    def fake_download(name, quiet=False):
        downloads.append((name, quiet))
        state["installed"] = True
        return True

    monkeypatch.setattr(nltk.data, "find", fake_find)
    monkeypatch.setattr(nltk, "download", fake_download)
    tagger = NltkTagger(auto_download=True)

    tagger.ensure_resources()
    tagger.ensure_resources()

    assert downloads == [("averaged_perceptron_tagger_eng", True)]
    assert state["finds"] == 2
