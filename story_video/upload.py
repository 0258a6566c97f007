"""Publish a finished video to a GitHub repository via the Contents API."""

import base64
import logging
import os

import requests

from story_video.constants import GITHUB_API, GITHUB_REPO, GITHUB_VIDEO_DIR, MIN_UPLOAD_BYTES

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT = 60


def github_token() -> str | None:
    return os.environ.get("GITHUB_TOKEN") or os.environ.get("GITHUB_PAT")


def github_repo() -> str:
    return os.environ.get("STORY_VIDEO_GITHUB_REPO", GITHUB_REPO)


def upload_to_github(
    file_path: str,
    message: str,
    repo: str | None = None,
    token: str | None = None,
    dest_dir: str = GITHUB_VIDEO_DIR,
) -> str | None:
    """Create or replace dest_dir/<basename> in repo.

    Returns the file's download URL, or None when there is no token, the file
    is too small to be a real render, or the API call fails.
    """
    repo = repo or github_repo()
    token = token or github_token()
    if not token:
        logger.warning("No GITHUB_TOKEN or GITHUB_PAT set, skipping upload")
        return None

    size = os.path.getsize(file_path) if os.path.exists(file_path) else 0
    if size < MIN_UPLOAD_BYTES:
        logger.warning("Video too small (%d bytes), skipping upload: %s", size, file_path)
        return None

    filename = os.path.basename(file_path)
    url = f"{GITHUB_API}/repos/{repo}/contents/{dest_dir}/{filename}"
    headers = {"Authorization": f"token {token}", "Accept": "application/vnd.github+json"}

    with open(file_path, "rb") as f:
        content = base64.b64encode(f.read()).decode("ascii")
    body = {"message": message, "content": content}

    try:
        # Replacing an existing file requires its blob sha
        existing = requests.get(url, headers=headers, timeout=REQUEST_TIMEOUT)
        if existing.status_code == 200:
            body["sha"] = existing.json().get("sha")

        response = requests.put(url, json=body, headers=headers, timeout=REQUEST_TIMEOUT)
        response.raise_for_status()
        return response.json()["content"]["download_url"]
    except (requests.RequestException, KeyError, ValueError) as e:
        logger.warning("Upload of %s failed: %s", filename, e)
        return None
