"""Tests for text cleaning, summarizing and segmentation."""

import pytest

from story_video.errors import InputError
from story_video.segmenter import clean_text, segment, summarize


# --- clean_text ---

def test_clean_text_strips_tags():
    assert clean_text("<p>Long ago</p><p>a city</p>") == "Long ago a city"


def test_clean_text_collapses_whitespace():
    assert clean_text("  one\n\n two\t three  ") == "one two three"


def test_clean_text_unescapes_entities():
    assert clean_text("Fish &amp; chips&nbsp;today") == "Fish & chips today"


def test_clean_text_none():
    assert clean_text(None) == ""


# --- summarize ---

def test_summarize_short_text_unchanged(lost_city):
    assert summarize(lost_city.description) == (
        "Long ago... a city vanished. It was never found. Historians still wonder."
    )


def test_summarize_truncates_to_max_chars():
    text = "word " * 400
    assert len(summarize(text)) <= 800


def test_summarize_breaks_at_sentence_end():
    """Cut moves back to the last full stop past the minimum break index."""
    first = "A" * 250 + ". "
    text = first + "B" * 700
    result = summarize(text)
    assert result == "A" * 250 + "."


def test_summarize_ignores_early_sentence_end():
    """A full stop before index 200 is not used as the break."""
    text = "Short. " + "x" * 900
    result = summarize(text)
    assert len(result) == 800
    assert result.startswith("Short. ")


# --- segment ---

def test_segment_lost_city(lost_city):
    chunks = segment(summarize(lost_city.description), 3)
    assert chunks == [
        "Long ago... a city",
        "vanished. It was never",
        "found. Historians still wonder.",
    ]


@pytest.mark.parametrize("word_count,target", [(1, 1), (7, 3), (10, 4), (12, 5), (3, 5), (100, 7)])
def test_segment_count_and_order(word_count, target):
    """Always exactly target chunks; joined chunks reproduce the words."""
    words = [f"w{i}" for i in range(word_count)]
    chunks = segment(" ".join(words), target)
    assert len(chunks) == target
    assert " ".join(chunks).split() == words


def test_segment_chunk_sizes():
    """ceil(words/target) per chunk, shorter tail."""
    chunks = segment("a b c d e f g", 3)
    assert [len(c.split()) for c in chunks] == [3, 3, 1]


def test_segment_short_input_yields_empty_chunks():
    chunks = segment("one two three", 5)
    assert chunks == ["one", "two", "three", "", ""]


def test_segment_deterministic():
    text = "the quick brown fox jumps over the lazy dog"
    assert segment(text, 4) == segment(text, 4)


def test_segment_empty_text():
    with pytest.raises(InputError):
        segment("   ", 3)


def test_segment_invalid_target():
    with pytest.raises(InputError):
        segment("some words", 0)
