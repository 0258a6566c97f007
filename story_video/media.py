"""Resolve timeline media into slide images through ranked strategies."""

import base64
import logging
import os
import shutil

import numpy as np
from PIL import Image

from story_video.errors import ExternalToolError
from story_video.models import TimelineEntry, VideoSettings
from story_video.tools import Capabilities, run_tool

logger = logging.getLogger(__name__)

# 1x1 PNG used when nothing else can draw a slide
MINIMAL_PNG = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNk+A8AAQUBAScY42YAAAAASUVORK5CYII="
)


def _hex_to_rgb(color: str) -> tuple[int, int, int]:
    color = color.lstrip("#")
    return tuple(int(color[i:i + 2], 16) for i in (0, 2, 4))


class SlideStrategy:
    """One way of producing a slide. Returns the path, or None if not applicable."""
    name = "base"

    def create(self, entry: TimelineEntry, settings: VideoSettings, output_path: str) -> str | None:
        raise NotImplementedError


class ExistingFileStrategy(SlideStrategy):
    """Copy a generated image referenced by the timeline entry."""
    name = "file"

    def create(self, entry, settings, output_path):
        if entry.media.get("type") != "file":
            return None
        source = entry.media.get("path", "")
        if not os.path.exists(source):
            return None
        shutil.copyfile(source, output_path)
        return output_path


class FfmpegColorStrategy(SlideStrategy):
    """Solid category color rendered by ffmpeg's lavfi color source."""
    name = "ffmpeg"

    def __init__(self, capabilities: Capabilities):
        self.capabilities = capabilities

    def create(self, entry, settings, output_path):
        if not self.capabilities.ffmpeg:
            return None
        color = entry.media.get("color", settings.bg_color)
        run_tool([
            "ffmpeg", "-y",
            "-f", "lavfi",
            "-i", f"color=c={color}:s={settings.width}x{settings.height}",
            "-frames:v", "1",
            output_path,
        ])
        return output_path if os.path.exists(output_path) else None


class GradientStrategy(SlideStrategy):
    """Vertical gradient from the category color to the video background."""
    name = "gradient"

    def create(self, entry, settings, output_path):
        top = np.array(_hex_to_rgb(entry.media.get("color", settings.bg_color)), dtype=np.float32)
        bottom = np.array(_hex_to_rgb(settings.bg_color), dtype=np.float32)
        mix = np.linspace(0, 1, settings.height, dtype=np.float32)[:, None, None]
        column = top * (1 - mix) + bottom * mix
        frame = np.broadcast_to(column, (settings.height, settings.width, 3))
        Image.fromarray(np.clip(frame, 0, 255).astype(np.uint8)).save(output_path, format="PNG")
        return output_path


class MinimalPngStrategy(SlideStrategy):
    """Last resort: a 1x1 PNG the renderer scales up."""
    name = "minimal"

    def create(self, entry, settings, output_path):
        with open(output_path, "wb") as f:
            f.write(MINIMAL_PNG)
        return output_path


class MediaResolver:
    """Try each strategy in rank order until one produces a slide."""

    def __init__(self, strategies: list[SlideStrategy]):
        self.strategies = strategies

    @classmethod
    def default(cls, capabilities: Capabilities) -> "MediaResolver":
        return cls([
            ExistingFileStrategy(),
            FfmpegColorStrategy(capabilities),
            GradientStrategy(),
            MinimalPngStrategy(),
        ])

    def resolve(
        self,
        entry: TimelineEntry,
        settings: VideoSettings,
        output_path: str,
    ) -> tuple[str | None, str | None]:
        """Return (slide path, strategy name), or (None, None) if all fail."""
        for strategy in self.strategies:
            try:
                path = strategy.create(entry, settings, output_path)
            except (ExternalToolError, OSError, ValueError) as e:
                logger.warning("Slide strategy %s failed: %s", strategy.name, e)
                continue
            if path:
                return path, strategy.name
        return None, None
