"""Clean article markup and slice the text into narration segments."""

import html
import math
import re

from story_video.constants import SUMMARY_MAX_CHARS, SUMMARY_MIN_BREAK
from story_video.errors import InputError

_TAG_RE = re.compile(r"<[^>]*>")
_WS_RE = re.compile(r"\s+")


def clean_text(markup: str) -> str:
    """Strip HTML tags, unescape entities and collapse whitespace.

    "<p>Long ago...</p>\\n<p>a city</p>" → "Long ago... a city"
    """
    text = _TAG_RE.sub(" ", markup or "")
    text = html.unescape(text)
    return _WS_RE.sub(" ", text).strip()


def summarize(text: str, max_chars: int = SUMMARY_MAX_CHARS) -> str:
    """Truncate cleaned text to at most max_chars.

    If a sentence ends past SUMMARY_MIN_BREAK, the cut moves back to just after
    the last full stop so narration does not stop mid-sentence. This is plain
    truncation, not summarization.
    """
    content = clean_text(text)
    summary = content[:max_chars]
    last_period = summary.rfind(". ")
    if last_period > SUMMARY_MIN_BREAK:
        summary = summary[:last_period + 1]
    return summary


def segment(text: str, target_count: int) -> list[str]:
    """Split text into exactly target_count contiguous word chunks.

    Every chunk holds ceil(words / target_count) words except the tail, which
    may be shorter or empty for short inputs. Chunks are positional only: a
    sentence can be split across two segments.
    """
    if target_count < 1:
        raise InputError(f"target_count must be >= 1, got {target_count}")

    words = text.split()
    if not words:
        raise InputError("Cannot segment empty text")

    size = math.ceil(len(words) / target_count)
    chunks = []
    for i in range(target_count):
        start = i * size
        chunks.append(" ".join(words[start:start + size]))
    return chunks
