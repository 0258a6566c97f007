"""Pipeline orchestration: fetch → segment → compose → timeline → save → render → upload."""

import logging
import os
import random
from dataclasses import dataclass, field

from story_video.artifacts import load_project, save_project
from story_video.composer import compose
from story_video.constants import OUTPUT_DIR, SEGMENT_COUNT, TOTAL_DURATION_SECONDS
from story_video.errors import ExternalToolError
from story_video.feeds import fetch_articles, pick_article
from story_video.models import Article, Project
from story_video.narration import Narrator, narrate
from story_video.render import render_dir, render_project
from story_video.segmenter import segment, summarize
from story_video.timeline import build
from story_video.tools import Capabilities
from story_video.upload import upload_to_github

logger = logging.getLogger(__name__)


@dataclass
class RunResult:
    success: bool
    message: str
    project_id: str | None = None
    paths: dict[str, str] = field(default_factory=dict)
    video_path: str | None = None
    url: str | None = None


def project_from_article(
    article: Article,
    segment_count: int = SEGMENT_COUNT,
    total_duration: float = TOTAL_DURATION_SECONDS,
) -> Project:
    """Pure core: article text → segments → script → project (subtitles included)."""
    summary = summarize(article.description)
    chunks = segment(summary, segment_count)
    script = compose(article.title, chunks, total_duration=total_duration)
    return build(article.title, script, source=article.source, link=article.link)


def generate_project(
    output_dir: str = OUTPUT_DIR,
    sources: list[dict] | None = None,
    segment_count: int = SEGMENT_COUNT,
    total_duration: float = TOTAL_DURATION_SECONDS,
    narrator: Narrator | None = None,
    article: Article | None = None,
    rng: random.Random | None = None,
) -> tuple[Project, dict[str, str]]:
    """Fetch a story and persist its project, subtitles and transcript.

    NoContentError and InputError propagate and nothing is saved. Narration
    failures only leave None audio references.
    """
    if article is None:
        print("[1/4] Fetching story...")
        article = pick_article(fetch_articles(sources), rng=rng)
    print(f"Selected story: \"{article.title}\" ({article.source})")

    print("[2/4] Building script and timeline...")
    project = project_from_article(article, segment_count, total_duration)
    print(f"  {len(project.segment_entries)} segments, {project.video_settings.total_duration}s")

    if narrator is not None and narrator.enabled:
        print(f"[3/4] Narrating with {narrator.name}...")
        project.audio_refs = narrate(project, narrator, os.path.join(render_dir(project.id, output_dir), "audio"))
    else:
        print("[3/4] Narration skipped")

    print("[4/4] Saving project...")
    paths = save_project(project, output_dir)
    return project, paths


def render(
    project_id: str,
    capabilities: Capabilities,
    output_dir: str = OUTPUT_DIR,
    upload: bool = False,
) -> RunResult:
    """Render a saved project and optionally upload it.

    Render and upload failures are reported in the result, never raised.
    NotFoundError propagates.
    """
    project = load_project(project_id, output_dir)
    try:
        path = render_project(project, capabilities, output_dir)
    except ExternalToolError as e:
        logger.warning("Render failed for %s: %s", project_id, e)
        return RunResult(False, f"Render failed: {e}", project_id=project_id)

    url = None
    if upload:
        url = upload_to_github(path, f"Add video: {project.title}")
    message = "Video rendered" + (" and uploaded" if url else "")
    return RunResult(True, message, project_id=project_id, video_path=path, url=url)


def auto_generate(
    capabilities: Capabilities,
    output_dir: str = OUTPUT_DIR,
    sources: list[dict] | None = None,
    segment_count: int = SEGMENT_COUNT,
    total_duration: float = TOTAL_DURATION_SECONDS,
    narrator: Narrator | None = None,
    do_render: bool = True,
    upload: bool = False,
) -> RunResult:
    """Generate a project and render it in one run.

    A generated project whose render failed is still a success, with
    video_path None.
    """
    project, paths = generate_project(
        output_dir=output_dir,
        sources=sources,
        segment_count=segment_count,
        total_duration=total_duration,
        narrator=narrator,
    )
    if not do_render:
        return RunResult(True, "Project generated", project_id=project.id, paths=paths)

    rendered = render(project.id, capabilities, output_dir, upload=upload)
    if not rendered.success:
        return RunResult(
            True,
            f"Project generated; {rendered.message}",
            project_id=project.id,
            paths=paths,
        )
    return RunResult(
        True,
        f"Project generated; {rendered.message}",
        project_id=project.id,
        paths=paths,
        video_path=rendered.video_path,
        url=rendered.url,
    )
