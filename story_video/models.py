"""Data models for story video generation."""

from dataclasses import dataclass, field

from story_video.constants import (
    VIDEO_WIDTH,
    VIDEO_HEIGHT,
    VIDEO_FPS,
    VIDEO_BG_COLOR,
    TOTAL_DURATION_SECONDS,
)


@dataclass(frozen=True)
class Article:
    title: str
    description: str   # raw feed content, may contain markup
    link: str
    source: str        # feed display name
    pub_date: str = ""


@dataclass
class Segment:
    text: str          # may be empty when the article is shorter than the segment count
    duration: float    # seconds


@dataclass
class Script:
    intro: str
    segments: list[Segment]
    outro: str
    intro_duration: float
    outro_duration: float   # remainder up to total_duration
    total_duration: float


@dataclass
class SubtitleCue:
    index: int         # 1-based
    start_ms: int
    end_ms: int
    text: str


@dataclass
class VideoSettings:
    width: int = VIDEO_WIDTH
    height: int = VIDEO_HEIGHT
    fps: int = VIDEO_FPS
    total_duration: float = TOTAL_DURATION_SECONDS
    bg_color: str = VIDEO_BG_COLOR


@dataclass
class TimelineEntry:
    kind: str          # "intro", "segment" or "outro"
    duration: float
    media: dict        # placeholder descriptor or {"type": "file", "path": ...}
    text: str = ""     # narration text


@dataclass
class Project:
    id: str
    title: str
    video_settings: VideoSettings
    timeline: list[TimelineEntry]
    subtitle_document: str
    source: str = ""
    link: str = ""
    created_at: str = ""
    audio_refs: list[str | None] = field(default_factory=list)

    @property
    def segment_entries(self) -> list[TimelineEntry]:
        return [e for e in self.timeline if e.kind == "segment"]

    def to_dict(self) -> dict:
        """JSON-ready form. The subtitle document is persisted as its own sidecar."""
        s = self.video_settings
        return {
            "id": self.id,
            "title": self.title,
            "source": self.source,
            "link": self.link,
            "created_at": self.created_at,
            "settings": {
                "width": s.width,
                "height": s.height,
                "fps": s.fps,
                "duration": s.total_duration,
                "bg_color": s.bg_color,
            },
            "timeline": [
                {"kind": e.kind, "duration": e.duration, "media": e.media, "text": e.text}
                for e in self.timeline
            ],
            "audio": list(self.audio_refs),
        }

    @classmethod
    def from_dict(cls, data: dict, subtitle_document: str = "") -> "Project":
        settings = data.get("settings", {})
        return cls(
            id=data["id"],
            title=data.get("title", ""),
            source=data.get("source", ""),
            link=data.get("link", ""),
            created_at=data.get("created_at", ""),
            video_settings=VideoSettings(
                width=settings.get("width", VIDEO_WIDTH),
                height=settings.get("height", VIDEO_HEIGHT),
                fps=settings.get("fps", VIDEO_FPS),
                total_duration=settings.get("duration", TOTAL_DURATION_SECONDS),
                bg_color=settings.get("bg_color", VIDEO_BG_COLOR),
            ),
            timeline=[
                TimelineEntry(
                    kind=e["kind"],
                    duration=e["duration"],
                    media=e.get("media", {}),
                    text=e.get("text", ""),
                )
                for e in data.get("timeline", [])
            ],
            subtitle_document=subtitle_document,
            audio_refs=list(data.get("audio", [])),
        )
