"""External tool probing and invocation."""

import shutil
import subprocess
from dataclasses import dataclass

from story_video.constants import TOOL_TIMEOUT_SECONDS
from story_video.errors import ExternalToolError


@dataclass(frozen=True)
class Capabilities:
    """Which external binaries a render or narration run may use."""
    ffmpeg: bool = False
    espeak: bool = False

    @classmethod
    def probe(cls) -> "Capabilities":
        """Look the binaries up on PATH now."""
        return cls(
            ffmpeg=shutil.which("ffmpeg") is not None,
            espeak=shutil.which("espeak-ng") is not None,
        )


def run_tool(args: list[str], timeout: float = TOOL_TIMEOUT_SECONDS) -> None:
    """Run an external command, raising ExternalToolError on any failure."""
    try:
        result = subprocess.run(args, capture_output=True, text=True, timeout=timeout)
    except (OSError, subprocess.TimeoutExpired) as e:
        raise ExternalToolError(f"{args[0]} failed to run: {e}") from e
    if result.returncode != 0:
        raise ExternalToolError(
            f"{args[0]} exited with {result.returncode}: {result.stderr[-300:].strip()}"
        )
