"""Tests for script composition and the duration schedule."""

import pytest

from story_video.composer import compose, intro_for, segment_duration
from story_video.constants import OUTRO_TEXT
from story_video.errors import InputError


def test_intro_template():
    assert intro_for("The Lost City") == (
        "Today, we're going to explore an incredible story: The Lost City."
    )


def test_intro_no_double_period():
    assert intro_for("A Story.").endswith("A Story.")


def test_compose_lost_city(sample_script):
    """Three segments get equal clamped durations; outro fills the rest."""
    assert sample_script.intro == "Today, we're going to explore an incredible story: The Lost City."
    assert [s.duration for s in sample_script.segments] == [8.0, 8.0, 8.0]
    assert sample_script.outro == OUTRO_TEXT
    assert sample_script.intro_duration == 3
    assert sample_script.outro_duration == 33.0
    assert sample_script.total_duration == 60


def test_compose_durations_within_band():
    script = compose("T", ["a"] * 8)
    assert all(s.duration == 6.25 for s in script.segments)
    assert script.outro_duration == 7.0


def test_compose_clamps_to_min_and_truncates_outro():
    """Nine segments at the 6s floor leave only 3s for the outro."""
    script = compose("T", ["a"] * 9)
    assert all(s.duration == 6 for s in script.segments)
    assert script.outro_duration == 3.0


def test_compose_durations_ignore_word_count():
    script = compose("T", ["one", "one two three four five six seven eight"])
    assert script.segments[0].duration == script.segments[1].duration


def test_compose_total_always_reached():
    for count in range(1, 10):
        script = compose("T", ["x"] * count)
        total = script.intro_duration + sum(s.duration for s in script.segments) + script.outro_duration
        assert abs(total - script.total_duration) < 1e-9


def test_compose_custom_total():
    script = compose("T", ["a", "b", "c"], total_duration=57)
    assert script.total_duration == 57
    assert script.outro_duration == 30.0


def test_compose_accepts_empty_segment_text():
    script = compose("T", ["one", "two", "three", "", ""])
    assert len(script.segments) == 5
    assert script.segments[-1].text == ""


def test_segment_duration_floors_to_milliseconds():
    assert segment_duration(7) == 7.142


def test_compose_empty_segments():
    with pytest.raises(InputError):
        compose("T", [])


def test_compose_blank_title():
    with pytest.raises(InputError):
        compose("  ", ["a"])


def test_compose_too_many_segments_shrink_below_band():
    """Ten segments share the 50s before the nominal outro."""
    script = compose("T", ["a"] * 10)
    assert all(s.duration == 5.0 for s in script.segments)
    assert script.outro_duration == 7.0


def test_compose_short_total_shrinks_segments():
    script = compose("T", ["a"] * 5, total_duration=30)
    assert all(s.duration == 4.0 for s in script.segments)
    assert script.outro_duration == 7.0


def test_compose_total_shorter_than_intro_and_outro():
    """No runway before the nominal outro: segments and outro split what is left."""
    script = compose("T", ["a", "b", "c"], total_duration=9)
    assert all(s.duration == 1.5 for s in script.segments)
    assert script.outro_duration == 1.5


@pytest.mark.parametrize("count,total", [(10, 60), (5, 30), (20, 60), (3, 9), (40, 20)])
def test_compose_overshoot_keeps_positive_outro(count, total):
    script = compose("T", ["x"] * count, total_duration=total)
    assert all(s.duration > 0 for s in script.segments)
    assert script.outro_duration > 0
    used = script.intro_duration + sum(s.duration for s in script.segments) + script.outro_duration
    assert abs(used - total) < 1e-9


def test_compose_total_not_longer_than_intro():
    with pytest.raises(InputError):
        compose("T", ["a"], total_duration=3)
