"""Shared fixtures for story video tests."""

import pytest
from pydub import AudioSegment

from story_video.composer import compose
from story_video.models import Article
from story_video.timeline import build


@pytest.fixture
def lost_city():
    """The canonical three-sentence story with markup in its description."""
    return Article(
        title="The Lost City",
        description="<p>Long ago... a city vanished. It was never found. Historians still wonder.</p>",
        link="https://example.com/lost-city",
        source="Listverse",
    )


@pytest.fixture
def sample_script():
    """Three segments on the default 60s schedule."""
    return compose("The Lost City", [
        "Long ago... a city",
        "vanished. It was never",
        "found. Historians still wonder.",
    ])


@pytest.fixture
def sample_project(sample_script):
    return build(
        "The Lost City",
        sample_script,
        source="Listverse",
        link="https://example.com/lost-city",
    )


@pytest.fixture
def tiny_wav(tmp_path):
    """Generate a 500ms silent WAV (no ffmpeg needed)."""
    path = tmp_path / "clip.wav"
    AudioSegment.silent(duration=500).export(str(path), format="wav")
    return path
