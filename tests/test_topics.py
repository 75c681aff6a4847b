import pytest

from memory_haiku.core.topics import (
    TOPIC_ORDER,
    UnknownTopicError,
    classify_topic,
    get_topic,
    load_topic_table,
    parse_topic_table,
    score_topics,
)


def test_exact_and_substring_matches_use_fixed_weights():
    scores = score_topics(["waves", "sand"])

    # waves: +2 exact +1 substring, wave: +1 substring, sand: +2 exact +1 substring
    assert scores["beach"] == 7
    assert scores["generic"] == 0


def test_substring_only_match_still_selects_topic():
    assert score_topics(["seashells"])["beach"] == 1
    assert classify_topic(["seashells"]) == "beach"


def test_ties_go_to_first_declared_topic():
    scores = score_topics(["ridge", "moss"])
    assert scores["forest"] == scores["mountain"] == 3

    assert classify_topic(["ridge", "moss"]) == "forest"


def test_no_signal_resolves_to_generic():
    assert classify_topic([]) == "generic"
    assert classify_topic(["hello", "there"]) == "generic"


@pytest.mark.parametrize(
    "token, expected",
    [
        ("pelican", "beach"),
        ("brook", "forest"),
        ("summit", "mountain"),
        ("blizzard", "snow"),
        ("subway", "city"),
    ],
)
def test_single_exact_keyword_selects_its_topic(token, expected):
    assert classify_topic(["we", "saw", "the", token]) == expected


def test_classification_is_case_insensitive():
    assert classify_topic(["The", "SNOW", "fell"]) == "snow"


def test_packaged_table_covers_every_topic_in_order():
    table = load_topic_table()

    assert tuple(table) == TOPIC_ORDER
    beach = table["beach"]
    assert "snow" in beach.banned
    assert beach.fillers == beach.f1 + beach.f2
    assert "hot sand" in beach.kigo
    assert table["generic"].keywords == ()
    assert table["generic"].kigo == ()


def test_table_is_read_only():
    table = load_topic_table()

    with pytest.raises(TypeError):
        table["beach"] = table["city"]  # type: ignore[index]
    with pytest.raises(AttributeError):
        table["beach"].nouns = ()  # type: ignore[misc]


def test_unknown_topic_lookup_raises():
    with pytest.raises(UnknownTopicError):
        get_topic("desert")


def test_parse_rejects_missing_topics_and_fields():
    with pytest.raises(ValueError):
        parse_topic_table({"topics": {}})

    raw = {
        "topics": {
            key: {"keywords": [], "f1": [], "f2": [], "nouns": ["x"]} for key in TOPIC_ORDER
        }
    }
    del raw["topics"]["city"]["nouns"]
    with pytest.raises(ValueError):
        parse_topic_table(raw)
