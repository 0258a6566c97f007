"""Persist projects and their subtitle and transcript sidecars."""

import json
import os
import re

from story_video.constants import OUTPUT_DIR
from story_video.errors import NotFoundError
from story_video.models import Project

_PROJECT_FILE_RE = re.compile(r"^project-(.+)\.json$")


def project_paths(project_id: str, output_dir: str = OUTPUT_DIR) -> dict[str, str]:
    """Paths of the three artifacts written for a project id."""
    return {
        "project": os.path.join(output_dir, f"project-{project_id}.json"),
        "subtitles": os.path.join(output_dir, f"subtitles-{project_id}.srt"),
        "story": os.path.join(output_dir, f"story-{project_id}.txt"),
    }


def story_transcript(project: Project) -> str:
    """Human-readable script: header, intro, one "- " line per segment, outro."""
    intro = next((e.text for e in project.timeline if e.kind == "intro"), "")
    outro = next((e.text for e in project.timeline if e.kind == "outro"), "")
    lines = [
        f"Title: {project.title}",
        f"Source: {project.source}",
        f"Link: {project.link}",
        "---",
        "Script:",
        intro,
    ]
    lines.extend(f"- {e.text}" for e in project.segment_entries)
    lines.append(outro)
    return "\n".join(lines)


def save_project(project: Project, output_dir: str = OUTPUT_DIR) -> dict[str, str]:
    """Write project JSON, SRT and story transcript.

    Projects are write-once: an existing project file is never overwritten.
    Returns the paths keyed "project", "subtitles", "story".
    """
    os.makedirs(output_dir, exist_ok=True)
    paths = project_paths(project.id, output_dir)
    if os.path.exists(paths["project"]):
        raise FileExistsError(f"Project already saved: {paths['project']}")

    with open(paths["subtitles"], "w", encoding="utf-8", newline="") as f:
        f.write(project.subtitle_document)
    with open(paths["story"], "w", encoding="utf-8") as f:
        f.write(story_transcript(project))
    # Project file last: its presence marks a complete save
    with open(paths["project"], "w", encoding="utf-8") as f:
        json.dump(project.to_dict(), f, indent=2, ensure_ascii=False)
    return paths


def load_project(project_id: str, output_dir: str = OUTPUT_DIR) -> Project:
    """Read a project and its subtitle sidecar. Raises NotFoundError."""
    paths = project_paths(project_id, output_dir)
    if not os.path.exists(paths["project"]):
        raise NotFoundError(f"Project '{project_id}' not found in {output_dir}")

    with open(paths["project"], encoding="utf-8") as f:
        data = json.load(f)

    subtitles = ""
    if os.path.exists(paths["subtitles"]):
        with open(paths["subtitles"], encoding="utf-8") as f:
            subtitles = f.read()
    return Project.from_dict(data, subtitle_document=subtitles)


def list_projects(output_dir: str = OUTPUT_DIR) -> list[str]:
    """Sorted ids of all saved projects under output_dir."""
    if not os.path.isdir(output_dir):
        return []
    ids = []
    for name in os.listdir(output_dir):
        match = _PROJECT_FILE_RE.match(name)
        if match:
            ids.append(match.group(1))
    return sorted(ids)
