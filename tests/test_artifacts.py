"""Tests for project persistence."""

import json
import os

import pytest

from story_video.artifacts import (
    list_projects,
    load_project,
    project_paths,
    save_project,
    story_transcript,
)
from story_video.errors import NotFoundError


def test_save_writes_three_artifacts(tmp_path, sample_project):
    paths = save_project(sample_project, str(tmp_path))
    assert set(paths) == {"project", "subtitles", "story"}
    for path in paths.values():
        assert os.path.exists(path)
    pid = sample_project.id
    assert os.path.basename(paths["project"]) == f"project-{pid}.json"
    assert os.path.basename(paths["subtitles"]) == f"subtitles-{pid}.srt"
    assert os.path.basename(paths["story"]) == f"story-{pid}.txt"


def test_save_creates_output_dir(tmp_path, sample_project):
    out = tmp_path / "nested" / "output"
    save_project(sample_project, str(out))
    assert out.is_dir()


def test_saved_json_content(tmp_path, sample_project):
    paths = save_project(sample_project, str(tmp_path))
    with open(paths["project"]) as f:
        data = json.load(f)
    assert data["id"] == sample_project.id
    assert data["title"] == "The Lost City"
    assert data["settings"] == {
        "width": 1080, "height": 1920, "fps": 30, "duration": 60, "bg_color": "#1a1a2e",
    }
    assert [e["kind"] for e in data["timeline"]] == ["intro", "segment", "segment", "segment", "outro"]
    assert data["audio"] == []


def test_saved_srt_is_exact(tmp_path, sample_project):
    paths = save_project(sample_project, str(tmp_path))
    with open(paths["subtitles"], "rb") as f:
        raw = f.read()
    assert raw == sample_project.subtitle_document.encode("utf-8")
    assert b"\r\n" not in raw


def test_story_transcript(sample_project):
    text = story_transcript(sample_project)
    assert text.splitlines() == [
        "Title: The Lost City",
        "Source: Listverse",
        "Link: https://example.com/lost-city",
        "---",
        "Script:",
        "Today, we're going to explore an incredible story: The Lost City.",
        "- Long ago... a city",
        "- vanished. It was never",
        "- found. Historians still wonder.",
        "What do you think about this story? Leave a comment below! "
        "Don't forget to subscribe for more amazing stories!",
    ]


def test_load_round_trip(tmp_path, sample_project):
    sample_project.audio_refs = [None, "a.mp3", None, None, None]
    save_project(sample_project, str(tmp_path))
    loaded = load_project(sample_project.id, str(tmp_path))
    assert loaded == sample_project


def test_load_missing(tmp_path):
    with pytest.raises(NotFoundError):
        load_project("does-not-exist", str(tmp_path))


def test_save_is_write_once(tmp_path, sample_project):
    save_project(sample_project, str(tmp_path))
    with pytest.raises(FileExistsError):
        save_project(sample_project, str(tmp_path))


def test_list_projects(tmp_path, sample_project):
    assert list_projects(str(tmp_path)) == []
    save_project(sample_project, str(tmp_path))
    (tmp_path / "notes.txt").write_text("ignore me")
    assert list_projects(str(tmp_path)) == [sample_project.id]


def test_list_projects_missing_dir(tmp_path):
    assert list_projects(str(tmp_path / "nope")) == []


def test_project_paths_layout():
    paths = project_paths("abc", "out")
    assert paths == {
        "project": os.path.join("out", "project-abc.json"),
        "subtitles": os.path.join("out", "subtitles-abc.srt"),
        "story": os.path.join("out", "story-abc.txt"),
    }
