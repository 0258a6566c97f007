"""Tests for tool probing and invocation."""

import subprocess
from unittest.mock import patch, MagicMock

import pytest

from story_video.errors import ExternalToolError
from story_video.tools import Capabilities, run_tool


@patch("story_video.tools.shutil.which")
def test_probe_all_found(mock_which):
    mock_which.return_value = "/usr/bin/tool"
    assert Capabilities.probe() == Capabilities(ffmpeg=True, espeak=True)


@patch("story_video.tools.shutil.which")
def test_probe_missing_espeak(mock_which):
    mock_which.side_effect = lambda name: "/usr/bin/ffmpeg" if name == "ffmpeg" else None
    caps = Capabilities.probe()
    assert caps.ffmpeg is True
    assert caps.espeak is False


def test_capabilities_default_none():
    assert Capabilities() == Capabilities(ffmpeg=False, espeak=False)


@patch("story_video.tools.subprocess.run")
def test_run_tool_success(mock_run):
    mock_run.return_value = MagicMock(returncode=0, stderr="")
    run_tool(["ffmpeg", "-version"])
    assert mock_run.call_args[0][0] == ["ffmpeg", "-version"]


@patch("story_video.tools.subprocess.run")
def test_run_tool_nonzero_exit(mock_run):
    mock_run.return_value = MagicMock(returncode=1, stderr="Invalid argument")
    with pytest.raises(ExternalToolError, match="Invalid argument"):
        run_tool(["ffmpeg", "-bad"])


@patch("story_video.tools.subprocess.run")
def test_run_tool_missing_binary(mock_run):
    mock_run.side_effect = FileNotFoundError("no such file")
    with pytest.raises(ExternalToolError):
        run_tool(["espeak-ng", "hi"])


@patch("story_video.tools.subprocess.run")
def test_run_tool_timeout(mock_run):
    mock_run.side_effect = subprocess.TimeoutExpired(cmd="ffmpeg", timeout=1)
    with pytest.raises(ExternalToolError):
        run_tool(["ffmpeg"], timeout=1)
