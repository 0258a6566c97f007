"""Encode a Script as SRT subtitles and parse SRT back into cues."""

import logging
import re

from story_video.errors import InputError
from story_video.models import Script, SubtitleCue

logger = logging.getLogger(__name__)

_TIMESTAMP_RE = re.compile(r"^(\d{2,}):(\d{2}):(\d{2}),(\d{3})$")
_ARROW = " --> "


def _to_ms(seconds: float) -> int:
    return int(round(seconds * 1000))


def format_timestamp(ms: int) -> str:
    """Milliseconds → "HH:MM:SS,mmm".

    3000 → "00:00:03,000", 61500 → "00:01:01,500"
    """
    hours, rem = divmod(ms, 3_600_000)
    minutes, rem = divmod(rem, 60_000)
    seconds, millis = divmod(rem, 1000)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d},{millis:03d}"


def parse_timestamp(value: str) -> int:
    """"HH:MM:SS,mmm" → milliseconds."""
    match = _TIMESTAMP_RE.match(value.strip())
    if not match:
        raise InputError(f"Invalid SRT timestamp: {value!r}")
    h, m, s, ms = (int(g) for g in match.groups())
    return ((h * 60 + m) * 60 + s) * 1000 + ms


def build_cues(script: Script) -> list[SubtitleCue]:
    """One cue for the intro, one per segment, one for the outro.

    Segment cues run back to back from the end of the intro. The last cue
    always ends at exactly total_duration, whatever the segments add up to:
    undershoot stretches the outro cue, overshoot truncates the cue that
    crosses the boundary and drops everything after it.
    """
    total_ms = _to_ms(script.total_duration)
    position = 0
    cues = []
    for text, duration in (
        [(script.intro, script.intro_duration)]
        + [(seg.text, seg.duration) for seg in script.segments]
    ):
        if position >= total_ms:
            break
        end = min(position + _to_ms(duration), total_ms)
        cues.append(SubtitleCue(index=len(cues) + 1, start_ms=position, end_ms=end, text=text))
        position = end

    if position < total_ms:
        cues.append(SubtitleCue(index=len(cues) + 1, start_ms=position, end_ms=total_ms, text=script.outro))
    else:
        logger.warning("Script overruns %dms; dropped %d cue(s)", total_ms, len(script.segments) + 2 - len(cues))
    return cues


def format_cues(cues: list[SubtitleCue]) -> str:
    """Serialize cues: index, timing line, text, blank line."""
    blocks = []
    for cue in cues:
        timing = f"{format_timestamp(cue.start_ms)}{_ARROW}{format_timestamp(cue.end_ms)}"
        blocks.append(f"{cue.index}\n{timing}\n{cue.text}\n\n")
    return "".join(blocks)


def encode(script: Script) -> str:
    """SRT document for a script. Pure and deterministic."""
    return format_cues(build_cues(script))


def parse_srt(document: str) -> list[SubtitleCue]:
    """Parse an SRT document into cues.

    Text lines run until the next blank line, so a cue with empty text is a
    timing line followed directly by a blank line.
    """
    lines = document.replace("\r\n", "\n").split("\n")
    cues = []
    i = 0
    while i < len(lines):
        line = lines[i].strip()
        if not line:
            i += 1
            continue
        if not line.isdigit() or i + 1 >= len(lines) or _ARROW not in lines[i + 1]:
            raise InputError(f"Malformed SRT block at line {i + 1}: {line!r}")
        start, end = lines[i + 1].split(_ARROW, 1)
        i += 2
        text_lines = []
        while i < len(lines) and lines[i] != "":
            text_lines.append(lines[i])
            i += 1
        cues.append(SubtitleCue(
            index=int(line),
            start_ms=parse_timestamp(start),
            end_ms=parse_timestamp(end),
            text="\n".join(text_lines),
        ))
        i += 1  # blank line closing the block
    return cues
