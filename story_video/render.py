"""Render a saved project into an MP4 with ffmpeg."""

import os

from story_video.artifacts import project_paths
from story_video.constants import OUTPUT_DIR
from story_video.errors import ExternalToolError
from story_video.media import MediaResolver
from story_video.models import Project
from story_video.narration import assemble_narration
from story_video.tools import Capabilities, run_tool


def render_dir(project_id: str, output_dir: str = OUTPUT_DIR) -> str:
    """Working directory for one project's slides, audio and concat list."""
    return os.path.join(output_dir, f"render-{project_id}")


def video_path(project_id: str, output_dir: str = OUTPUT_DIR) -> str:
    return os.path.join(output_dir, f"story_video_{project_id}.mp4")


def build_slides(
    project: Project,
    work_dir: str,
    resolver: MediaResolver,
) -> list[tuple[str, float]]:
    """One slide per timeline entry, as (path, duration) pairs in timeline order."""
    os.makedirs(work_dir, exist_ok=True)
    slides = []
    total = len(project.timeline)
    for i, entry in enumerate(project.timeline):
        output_path = os.path.join(work_dir, f"slide_{i:03d}.png")
        path, strategy = resolver.resolve(entry, project.video_settings, output_path)
        if path is None:
            print(f"  Slide {i + 1}/{total}: no strategy succeeded")
            continue
        print(f"  Slide {i + 1}/{total}: {entry.media.get('category', entry.kind)} ({strategy})")
        slides.append((path, entry.duration))
    return slides


def write_concat_list(slides: list[tuple[str, float]], path: str) -> str:
    """ffmpeg concat-demuxer list. The last file is repeated so its duration applies."""
    lines = []
    for slide, duration in slides:
        lines.append(f"file '{os.path.abspath(slide)}'")
        lines.append(f"duration {duration}")
    lines.append(f"file '{os.path.abspath(slides[-1][0])}'")
    with open(path, "w") as f:
        f.write("\n".join(lines) + "\n")
    return path


def ffmpeg_args(
    project: Project,
    concat_path: str,
    output_path: str,
    narration_path: str | None = None,
    subtitles_path: str | None = None,
) -> list[str]:
    """Command line muxing slides, optional narration and optional soft subtitles."""
    s = project.video_settings
    args = ["ffmpeg", "-y", "-f", "concat", "-safe", "0", "-i", concat_path]
    maps = ["-map", "0:v"]
    codecs = ["-c:v", "libx264", "-preset", "ultrafast", "-crf", "23"]
    next_input = 1

    if narration_path:
        args += ["-i", narration_path]
        maps += ["-map", f"{next_input}:a"]
        codecs += ["-c:a", "aac"]
        next_input += 1

    if subtitles_path:
        args += ["-i", subtitles_path]
        maps += ["-map", f"{next_input}:s"]
        codecs += ["-c:s", "mov_text"]

    return (
        args
        + maps
        + ["-vf", f"scale={s.width}:{s.height},fps={s.fps},format=yuv420p"]
        + codecs
        + ["-t", str(s.total_duration), output_path]
    )


def render_project(
    project: Project,
    capabilities: Capabilities,
    output_dir: str = OUTPUT_DIR,
    resolver: MediaResolver | None = None,
) -> str:
    """Render slides, narration and subtitles into story_video_<id>.mp4.

    Raises ExternalToolError when ffmpeg is missing, no slide could be made,
    or encoding fails.
    """
    if not capabilities.ffmpeg:
        raise ExternalToolError("ffmpeg is required to render video")
    resolver = resolver or MediaResolver.default(capabilities)
    work_dir = render_dir(project.id, output_dir)

    slides = build_slides(project, work_dir, resolver)
    if not slides:
        raise ExternalToolError("No slides generated")

    concat_path = write_concat_list(slides, os.path.join(work_dir, "concat.txt"))
    narration_path = assemble_narration(project, os.path.join(work_dir, "narration.mp3"))
    subtitles_path = project_paths(project.id, output_dir)["subtitles"]
    if not os.path.exists(subtitles_path):
        subtitles_path = None

    output_path = video_path(project.id, output_dir)
    print(f"  Encoding {len(slides)} slides → {output_path}")
    run_tool(ffmpeg_args(project, concat_path, output_path, narration_path, subtitles_path))
    if not os.path.exists(output_path):
        raise ExternalToolError(f"ffmpeg reported success but wrote no file: {output_path}")
    return output_path
