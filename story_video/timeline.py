"""Assemble a Script into an ordered project timeline."""

import uuid
from dataclasses import replace
from datetime import datetime, timezone

from story_video.categories import placeholder
from story_video.constants import OUTRO_ANIMATION
from story_video.models import Project, Script, TimelineEntry, VideoSettings
from story_video.subtitles import encode


def _media_for(index: int, text: str, media_refs: list[str | None]) -> dict:
    """File reference at media_refs[index] if there is one, else a placeholder."""
    if index < len(media_refs) and media_refs[index]:
        return {"type": "file", "path": media_refs[index]}
    return placeholder(text)


def build(
    title: str,
    script: Script,
    media_refs: list[str | None] | None = None,
    *,
    source: str = "",
    link: str = "",
    settings: VideoSettings | None = None,
) -> Project:
    """Build a Project with 2 + len(script.segments) timeline entries.

    Order is Intro, Segment[0..N-1], Outro. media_refs is aligned with that
    order; missing or falsy entries fall back to keyword-styled placeholders.
    The video total always comes from the script, so the outro entry and the
    final subtitle cue end at the same instant.
    """
    media_refs = media_refs or []
    settings = replace(settings or VideoSettings(), total_duration=script.total_duration)

    timeline = [
        TimelineEntry(
            kind="intro",
            duration=script.intro_duration,
            media=_media_for(0, title, media_refs),
            text=script.intro,
        )
    ]
    for i, seg in enumerate(script.segments, start=1):
        timeline.append(TimelineEntry(
            kind="segment",
            duration=seg.duration,
            media=_media_for(i, seg.text, media_refs),
            text=seg.text,
        ))

    outro_media = _media_for(len(timeline), script.outro, media_refs)
    if outro_media["type"] == "placeholder":
        outro_media["animation"] = OUTRO_ANIMATION
    timeline.append(TimelineEntry(
        kind="outro",
        duration=script.outro_duration,
        media=outro_media,
        text=script.outro,
    ))

    return Project(
        id=uuid.uuid4().hex,
        title=title,
        source=source,
        link=link,
        created_at=datetime.now(timezone.utc).isoformat(),
        video_settings=settings,
        timeline=timeline,
        subtitle_document=encode(script),
    )
