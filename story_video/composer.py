"""Wrap segments with a fixed intro and outro and schedule their durations."""

import math

from story_video.constants import (
    INTRO_TEMPLATE,
    OUTRO_TEXT,
    TOTAL_DURATION_SECONDS,
    INTRO_DURATION_SECONDS,
    OUTRO_DURATION_SECONDS,
    SEGMENT_MIN_SECONDS,
    SEGMENT_MAX_SECONDS,
)
from story_video.errors import InputError
from story_video.models import Script, Segment


def intro_for(title: str) -> str:
    """Intro line for a story title.

    "The Lost City" → "Today, we're going to explore an incredible story: The Lost City."
    """
    return INTRO_TEMPLATE.format(title=title.strip().rstrip("."))


def segment_duration(
    count: int,
    total_duration: float = TOTAL_DURATION_SECONDS,
    intro_duration: float = INTRO_DURATION_SECONDS,
    outro_duration: float = OUTRO_DURATION_SECONDS,
    min_seconds: float = SEGMENT_MIN_SECONDS,
    max_seconds: float = SEGMENT_MAX_SECONDS,
) -> float:
    """Seconds given to each of `count` segments.

    Schedule-driven: the runway left after the nominal intro and outro is
    divided evenly and clamped to [min_seconds, max_seconds]. Word counts are
    ignored. The result is floored to whole milliseconds so subtitle
    timestamps stay exact.

    When `count` segments at min_seconds would overshoot the total, segments
    drop below the band instead: they share the runway before the nominal
    outro, or, if there is none, split the time after the intro evenly with
    the outro.
    """
    available = total_duration - intro_duration - outro_duration
    seconds = min(max(available / count, min_seconds), max_seconds)
    if intro_duration + seconds * count >= total_duration:
        if available > 0:
            seconds = available / count
        else:
            seconds = (total_duration - intro_duration) / (count + 1)
    return math.floor(seconds * 1000) / 1000


def compose(
    title: str,
    segments: list[str],
    total_duration: float = TOTAL_DURATION_SECONDS,
    intro_duration: float = INTRO_DURATION_SECONDS,
    outro_duration: float = OUTRO_DURATION_SECONDS,
    min_seconds: float = SEGMENT_MIN_SECONDS,
    max_seconds: float = SEGMENT_MAX_SECONDS,
) -> Script:
    """Build a Script from a title and segment texts.

    The outro keeps whatever time is left up to total_duration, so it is
    stretched when segments hit max_seconds and truncated when they hit
    min_seconds. Too many segments for the total shrink below min_seconds
    rather than failing; see segment_duration.
    """
    if not segments:
        raise InputError("Cannot compose a script without segments")
    if not title or not title.strip():
        raise InputError("Cannot compose a script without a title")
    if min_seconds <= 0 or min_seconds > max_seconds:
        raise InputError(f"Invalid segment band [{min_seconds}, {max_seconds}]")
    if total_duration <= intro_duration:
        raise InputError(
            f"Total duration {total_duration}s leaves no room after a {intro_duration}s intro"
        )

    duration = segment_duration(
        len(segments),
        total_duration=total_duration,
        intro_duration=intro_duration,
        outro_duration=outro_duration,
        min_seconds=min_seconds,
        max_seconds=max_seconds,
    )
    if duration <= 0:
        raise InputError(
            f"{len(segments)} segments do not fit in {total_duration}s at millisecond resolution"
        )
    body = [Segment(text=text, duration=duration) for text in segments]
    remainder = total_duration - intro_duration - duration * len(body)

    return Script(
        intro=intro_for(title),
        segments=body,
        outro=OUTRO_TEXT,
        intro_duration=intro_duration,
        outro_duration=round(remainder, 3),
        total_duration=total_duration,
    )
