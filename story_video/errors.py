"""Exception taxonomy for story generation."""


class StoryVideoError(Exception):
    """Base class for all story_video errors."""


class NoContentError(StoryVideoError):
    """No article was available from any feed source."""


class InputError(StoryVideoError):
    """Empty or invalid text handed to segmentation or composition."""


class NotFoundError(StoryVideoError):
    """No persisted project exists for the requested id."""


class ExternalToolError(StoryVideoError):
    """An external tool (TTS, ffmpeg, upload) failed or is unavailable."""
