"""CLI interface with subcommand routing."""

import argparse
import logging
import sys

from dotenv import load_dotenv

from story_video.artifacts import list_projects, load_project, project_paths
from story_video.constants import OUTPUT_DIR, SEGMENT_COUNT, TOTAL_DURATION_SECONDS, VERSION
from story_video.errors import StoryVideoError
from story_video.narration import NARRATORS, get_narrator
from story_video.pipeline import auto_generate, generate_project, render
from story_video.tools import Capabilities


def _output_dir(args) -> str:
    return args.output_dir or OUTPUT_DIR


def _fail(message: str):
    print(f"Error: {message}", file=sys.stderr)
    raise SystemExit(1)


def _print_files(paths: dict[str, str]) -> None:
    print("Output files:")
    for name, path in paths.items():
        print(f"  {name:<10} {path}")


def cmd_generate(args):
    """Fetch a story and write its project, subtitles and transcript."""
    capabilities = Capabilities.probe()
    narrator = get_narrator(args.narrator, capabilities)
    project, paths = generate_project(
        output_dir=_output_dir(args),
        segment_count=args.segments,
        total_duration=args.duration,
        narrator=narrator,
    )
    print(f"Generated project: {project.id}")
    _print_files(paths)


def cmd_render(args):
    """Render a saved project to MP4."""
    result = render(args.project_id, Capabilities.probe(), _output_dir(args), upload=args.upload)
    if not result.success:
        _fail(result.message)
    print(f"Done: {result.video_path}")
    if result.url:
        print(f"Uploaded: {result.url}")


def cmd_auto(args):
    """Generate and render in one run."""
    capabilities = Capabilities.probe()
    result = auto_generate(
        capabilities,
        output_dir=_output_dir(args),
        segment_count=args.segments,
        total_duration=args.duration,
        narrator=get_narrator(args.narrator, capabilities),
        do_render=not args.no_render,
        upload=args.upload,
    )
    print(result.message)
    print(f"Project: {result.project_id}")
    _print_files(result.paths)
    print(f"Video: {result.video_path or 'not rendered'}")
    if result.url:
        print(f"Uploaded: {result.url}")


def cmd_show(args):
    """Show one project's timeline."""
    output_dir = _output_dir(args)
    project = load_project(args.project_id, output_dir)
    s = project.video_settings
    print(f"Project: {project.id}")
    print(f"Title:   {project.title}")
    print(f"Source:  {project.source or 'unknown'}")
    print(f"Video:   {s.width}x{s.height} @ {s.fps}fps, {s.total_duration}s")
    narrated = sum(1 for ref in project.audio_refs if ref)
    print(f"Audio:   {narrated}/{len(project.timeline)} entries narrated")
    print("Timeline:")
    for entry in project.timeline:
        label = entry.media.get("category", entry.media.get("type", ""))
        print(f"  {entry.kind:<8} {entry.duration:>6.3f}s  [{label}] {entry.text[:50]}")
    _print_files(project_paths(project.id, output_dir))


def cmd_list(args):
    """List saved projects."""
    ids = list_projects(_output_dir(args))
    if not ids:
        print("No projects found.")
        return
    print("Projects:")
    for project_id in ids:
        print(f"  {project_id}")


def cmd_tools(args):
    """Report which external tools are available."""
    capabilities = Capabilities.probe()
    for name in ("ffmpeg", "espeak"):
        state = "found" if getattr(capabilities, name) else "missing"
        print(f"  {name:<8} {state}")


def _add_generation_args(parser):
    parser.add_argument("--segments", type=int, default=SEGMENT_COUNT, help="Number of story segments")
    parser.add_argument("--duration", type=float, default=TOTAL_DURATION_SECONDS, help="Total video length in seconds")
    parser.add_argument("--narrator", choices=NARRATORS, default="none", help="Narration backend")


def main():
    """CLI entry point."""
    load_dotenv()

    parser = argparse.ArgumentParser(
        prog="story-video",
        description="Story Video Generator — turn RSS stories into narrated vertical videos",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log progress details")
    parser.add_argument("--output-dir", help=f"Artifact directory (default: {OUTPUT_DIR})")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    generate_parser = subparsers.add_parser("generate", help="Fetch a story and create a project")
    _add_generation_args(generate_parser)
    generate_parser.set_defaults(func=cmd_generate)

    render_parser = subparsers.add_parser("render", help="Render a saved project to MP4")
    render_parser.add_argument("project_id", help="Project id")
    render_parser.add_argument("--upload", action="store_true", help="Upload the video to GitHub")
    render_parser.set_defaults(func=cmd_render)

    auto_parser = subparsers.add_parser("auto", help="Generate and render in one run")
    _add_generation_args(auto_parser)
    auto_parser.add_argument("--no-render", action="store_true", help="Stop after saving the project")
    auto_parser.add_argument("--upload", action="store_true", help="Upload the video to GitHub")
    auto_parser.set_defaults(func=cmd_auto)

    show_parser = subparsers.add_parser("show", help="Show a project's timeline")
    show_parser.add_argument("project_id", help="Project id")
    show_parser.set_defaults(func=cmd_show)

    list_parser = subparsers.add_parser("list", help="List saved projects")
    list_parser.set_defaults(func=cmd_list)

    tools_parser = subparsers.add_parser("tools", help="Check external tools")
    tools_parser.set_defaults(func=cmd_tools)

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not args.command:
        parser.print_help()
        return

    try:
        args.func(args)
    except StoryVideoError as e:
        _fail(str(e))


if __name__ == "__main__":
    main()
