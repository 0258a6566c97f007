"""Narration backends and timeline-aligned narration track assembly."""

import asyncio
import logging
import os

import edge_tts
from pydub import AudioSegment
from pydub.exceptions import CouldntDecodeError, CouldntEncodeError

from story_video.constants import (
    AUDIO_BITRATE,
    EDGE_RATE,
    EDGE_VOICE,
    ESPEAK_MAX_CHARS,
    ESPEAK_PITCH,
    ESPEAK_SPEED,
)
from story_video.errors import ExternalToolError
from story_video.models import Project
from story_video.tools import Capabilities, run_tool

logger = logging.getLogger(__name__)


class Narrator:
    """Turns one piece of text into one audio file."""
    name = "base"
    enabled = True

    def synthesize(self, text: str, output_base: str) -> str:
        """Write audio for text next to output_base (no extension); return the path."""
        raise NotImplementedError


class NoopNarrator(Narrator):
    """Produces no audio; the video renders silent."""
    name = "none"
    enabled = False

    def synthesize(self, text: str, output_base: str) -> str:
        raise ExternalToolError("Narration is disabled")


class EspeakNarrator(Narrator):
    """Local espeak-ng voice, converted to MP3 when ffmpeg is available."""
    name = "espeak"

    def __init__(self, capabilities: Capabilities):
        self.capabilities = capabilities

    def synthesize(self, text: str, output_base: str) -> str:
        if not self.capabilities.espeak:
            raise ExternalToolError("espeak-ng is not installed")

        wav_path = output_base + ".wav"
        run_tool([
            "espeak-ng",
            "-p", str(ESPEAK_PITCH),
            "-s", str(ESPEAK_SPEED),
            "-w", wav_path,
            "--",
            text[:ESPEAK_MAX_CHARS],
        ])
        if not os.path.exists(wav_path):
            raise ExternalToolError(f"espeak-ng produced no file for: {text[:50]}...")

        if not self.capabilities.ffmpeg:
            return wav_path

        mp3_path = output_base + ".mp3"
        run_tool(["ffmpeg", "-y", "-i", wav_path, "-b:a", AUDIO_BITRATE, mp3_path])
        os.remove(wav_path)
        return mp3_path


class EdgeNarrator(Narrator):
    """Cloud neural voice through edge-tts."""
    name = "edge"

    def __init__(self, voice: str = EDGE_VOICE, rate: str = EDGE_RATE):
        self.voice = voice
        self.rate = rate

    def synthesize(self, text: str, output_base: str) -> str:
        output_path = output_base + ".mp3"
        try:
            communicate = edge_tts.Communicate(text, self.voice, rate=self.rate)
            asyncio.run(communicate.save(output_path))
        except Exception as e:
            raise ExternalToolError(f"edge-tts failed: {e}") from e

        # 0-byte file counts as failure
        if not os.path.exists(output_path) or os.path.getsize(output_path) == 0:
            raise ExternalToolError(f"edge-tts produced an empty file for: {text[:50]}...")
        return output_path


NARRATORS = ("none", "espeak", "edge")


def get_narrator(name: str, capabilities: Capabilities) -> Narrator:
    """Narrator backend by configured name."""
    if name == "none":
        return NoopNarrator()
    if name == "espeak":
        return EspeakNarrator(capabilities)
    if name == "edge":
        return EdgeNarrator()
    raise ValueError(f"Unknown narrator '{name}'. Choose from: {', '.join(NARRATORS)}")


def narrate(project: Project, narrator: Narrator, audio_dir: str) -> list[str | None]:
    """Synthesize one clip per timeline entry.

    Returns paths aligned with project.timeline; failed or empty entries are
    None. A disabled narrator returns an empty list.
    """
    if not narrator.enabled:
        return []

    os.makedirs(audio_dir, exist_ok=True)
    total = len(project.timeline)
    refs = []
    for i, entry in enumerate(project.timeline):
        if not entry.text.strip():
            refs.append(None)
            continue
        output_base = os.path.join(audio_dir, f"{i:03d}_{entry.kind}")
        print(f"  Narrating {i + 1}/{total}: {entry.kind}")
        try:
            refs.append(narrator.synthesize(entry.text, output_base))
        except ExternalToolError as e:
            logger.warning("Narration failed for entry %d (%s): %s", i, entry.kind, e)
            refs.append(None)
    return refs


def _fit(clip: AudioSegment, duration_ms: int) -> AudioSegment:
    """Trim or pad a clip with silence to exactly duration_ms."""
    if len(clip) >= duration_ms:
        return clip[:duration_ms]
    return clip + AudioSegment.silent(duration=duration_ms - len(clip), frame_rate=clip.frame_rate)


def _load_clip(ref: str | None) -> AudioSegment | None:
    """Decode one narration clip, or None when it is missing or unreadable."""
    if not ref or not os.path.exists(ref):
        return None
    try:
        return AudioSegment.from_file(ref)
    except (CouldntDecodeError, OSError) as e:
        logger.warning("Skipping undecodable narration clip %s: %s", ref, e)
        return None


def assemble_narration(project: Project, output_path: str) -> str | None:
    """Lay the project's clips on the timeline as one narration track.

    Each clip is trimmed or padded to its entry's duration, so the track is
    exactly the video's total length. Clips that cannot be decoded count as
    silence. Returns None when no clip is usable; raises ExternalToolError
    when the track cannot be written.
    """
    refs = project.audio_refs
    clips = [_load_clip(refs[i] if i < len(refs) else None) for i in range(len(project.timeline))]
    if not any(clip is not None for clip in clips):
        return None

    track = AudioSegment.silent(duration=0)
    for entry, clip in zip(project.timeline, clips):
        duration_ms = int(round(entry.duration * 1000))
        track += _fit(clip if clip is not None else AudioSegment.silent(duration=0), duration_ms)

    os.makedirs(os.path.dirname(output_path) or ".", exist_ok=True)
    fmt = os.path.splitext(output_path)[1].lstrip(".").lower() or "mp3"
    try:
        if fmt == "wav":
            track.export(output_path, format="wav")
        else:
            track.export(output_path, format=fmt, bitrate=AUDIO_BITRATE)
    except (CouldntEncodeError, OSError) as e:
        raise ExternalToolError(f"Could not write narration track {output_path}: {e}") from e
    return output_path
