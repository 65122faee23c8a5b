"""
CLI Adapter - Command-line interface.

Thin wrapper over the settings store, progress tracker, sign overlay,
typing statistics and job listing, all sharing one storage file.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from inclusive_jobs.config import AppConfig
from inclusive_jobs.monitoring.logging import configure_logging
from inclusive_jobs.storage import JSONFileStorage

_TOGGLES = {
    "read-easy": "set_read_easy_mode",
    "speech": "set_speech_enabled",
    "speak-on-hover": "set_speak_on_hover_enabled",
    "sign-on-hover": "set_sign_on_hover_enabled",
}

_PARAM_FLAGS = {
    "font_size": "font_size_percent",
    "line_height": "line_height",
    "letter_spacing": "letter_spacing_em",
    "word_spacing": "word_spacing_em",
}


def main(args: list[str] | None = None) -> int:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="inclusive-jobs",
        description="Accessible job board client: settings, learning progress and jobs",
    )
    parser.add_argument("--data-dir", help="Directory holding storage.json")
    parser.add_argument(
        "--log-level",
        choices=["debug", "info", "warning", "error", "critical"],
        help="Structured log level",
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # settings command
    settings_parser = subparsers.add_parser("settings", help="Accessibility settings")
    settings_sub = settings_parser.add_subparsers(dest="action")
    settings_sub.add_parser("show", help="Show current settings")
    set_parser = settings_sub.add_parser("set", help="Turn a toggle on or off")
    set_parser.add_argument("toggle", choices=sorted(_TOGGLES))
    set_parser.add_argument("state", choices=["on", "off"])
    params_parser = settings_sub.add_parser("params", help="Adjust ReadEasy typography")
    params_parser.add_argument("--font-size", type=float, help="Font size percent (80-150)")
    params_parser.add_argument("--line-height", type=float, help="Line height (1.2-2.0)")
    params_parser.add_argument("--letter-spacing", type=float, help="Letter spacing em (0-0.3)")
    params_parser.add_argument("--word-spacing", type=float, help="Word spacing em (0-0.15)")
    settings_sub.add_parser("reset", help="Restore default typography")

    # progress command
    progress_parser = subparsers.add_parser("progress", help="Learning progress")
    progress_sub = progress_parser.add_subparsers(dest="action")
    progress_sub.add_parser("show", help="Points and levels per skill")
    add_parser = progress_sub.add_parser("add", help="Award points to a skill")
    add_parser.add_argument("skill", help="Skill name")
    add_parser.add_argument("points", type=int, help="Points to add")
    progress_sub.add_parser("reset", help="Clear all progress")
    progress_sub.add_parser("export", help="Print progress as JSON")

    # sign command
    sign_parser = subparsers.add_parser("sign", help="Render the sign overlay for text")
    sign_parser.add_argument("text", help="Text to fingerspell")

    # typing-stats command
    typing_parser = subparsers.add_parser("typing-stats", help="WPM and accuracy of a typing attempt")
    typing_parser.add_argument("target", help="Passage to type")
    typing_parser.add_argument("typed", help="What was typed")
    typing_parser.add_argument("seconds", type=float, help="Elapsed seconds")

    # jobs command
    jobs_parser = subparsers.add_parser("jobs", help="List sample jobs")
    jobs_parser.add_argument("-q", "--query", default="", help="Search company and role")
    jobs_parser.add_argument("--location", default="", help="Location contains")
    jobs_parser.add_argument("--min-yoe", type=int, default=0, help="Minimum years of experience")
    jobs_parser.add_argument("--max-yoe", type=int, default=20, help="Maximum years of experience")
    jobs_parser.add_argument("--sort", choices=["new", "yoe_asc", "yoe_desc"], default="new")
    jobs_parser.add_argument("--page", type=int, default=1, help="Pages of results to show")

    # saved command
    saved_parser = subparsers.add_parser("saved", help="Saved jobs")
    saved_sub = saved_parser.add_subparsers(dest="action")
    toggle_parser = saved_sub.add_parser("toggle", help="Save or unsave a job")
    toggle_parser.add_argument("job_id", help="Job id")
    saved_sub.add_parser("list", help="List saved job ids")

    # version command
    subparsers.add_parser("version", help="Show version")

    parsed = parser.parse_args(args)

    if parsed.command is None:
        parser.print_help()
        return 0

    if parsed.command == "version":
        from inclusive_jobs import __version__
        print(f"inclusive-jobs {__version__}")
        return 0

    try:
        config = AppConfig.from_env()
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if parsed.data_dir:
        config.data_dir = Path(parsed.data_dir).expanduser()
    if parsed.log_level:
        config.log_level = parsed.log_level
    configure_logging(config.log_level, json_format=config.log_json)

    if parsed.command == "sign":
        return _cmd_sign(parsed, config)

    if parsed.command == "typing-stats":
        return _cmd_typing_stats(parsed)

    if parsed.command == "jobs":
        return _cmd_jobs(parsed)

    storage = JSONFileStorage(config.storage_path)

    if parsed.command == "settings":
        return _cmd_settings(parsed, storage)

    if parsed.command == "progress":
        return _cmd_progress(parsed, storage)

    if parsed.command == "saved":
        return _cmd_saved(parsed, storage)

    return 1


def _on_off(value: bool) -> str:
    return "on" if value else "off"


def _print_settings(settings) -> None:
    params = settings.read_easy_params
    print(f"read-easy:       {_on_off(settings.read_easy_mode)}")
    print(f"speech:          {_on_off(settings.speech_enabled)}")
    print(f"speak-on-hover:  {_on_off(settings.speak_on_hover_enabled)}")
    print(f"sign-on-hover:   {_on_off(settings.sign_on_hover_enabled)}")
    print(f"font size:       {params.font_size_percent:g}%")
    print(f"line height:     {params.line_height:g}")
    print(f"letter spacing:  {params.letter_spacing_em:g}em")
    print(f"word spacing:    {params.word_spacing_em:g}em")


def _cmd_settings(args: argparse.Namespace, storage: JSONFileStorage) -> int:
    """Handle settings command."""
    from inclusive_jobs.accessibility.settings import SettingsStore

    store = SettingsStore(storage)

    if args.action == "set":
        getattr(store, _TOGGLES[args.toggle])(args.state == "on")
    elif args.action == "params":
        changes = {
            field: getattr(args, flag)
            for flag, field in _PARAM_FLAGS.items()
            if getattr(args, flag) is not None
        }
        if not changes:
            print("Error: give at least one typography option", file=sys.stderr)
            return 1
        store.update_read_easy_params(changes)
    elif args.action == "reset":
        store.reset_read_easy_params()

    _print_settings(store.get())
    return 0


def _cmd_progress(args: argparse.Namespace, storage: JSONFileStorage) -> int:
    """Handle progress command."""
    from inclusive_jobs.learning.progress import ProgressTracker, next_threshold

    tracker = ProgressTracker(storage)

    if args.action == "add":
        try:
            tracker.add_points(args.skill, args.points)
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
    elif args.action == "reset":
        tracker.reset_all()
        print("Progress cleared")
        return 0
    elif args.action == "export":
        print(tracker.export_json())
        return 0

    state = tracker.get_state()
    print(f"Total: {state.total_points} pts")

    for skill in sorted(state.skills):
        points = state.skills[skill].points
        level = tracker.highest_level(skill)
        progress = next_threshold(points)
        label = f" [{level.value}]" if level else ""
        print(
            f"  {skill}: {points} pts{label} "
            f"({progress.percent}% to next level, target {progress.next} pts)"
        )

    return 0


def _cmd_sign(args: argparse.Namespace, config: AppConfig) -> int:
    """Print the sign overlay markup for text."""
    from inclusive_jobs.accessibility.dom import Document
    from inclusive_jobs.accessibility.overlay import OverlayConfig, SignOverlay

    overlay = SignOverlay(
        Document(),
        OverlayConfig(
            max_words=config.overlay_max_words,
            max_letters=config.overlay_max_letters,
            glyph_url_template=config.glyph_url_template,
        ),
    )

    if not overlay.show(args.text):
        print("Error: no letters to sign", file=sys.stderr)
        return 1

    print(overlay.element.to_html())
    return 0


def _cmd_typing_stats(args: argparse.Namespace) -> int:
    """Compute typing statistics."""
    from inclusive_jobs.learning.typing_test import compute_stats

    stats = compute_stats(args.target, args.typed, args.seconds * 1000)
    print(f"WPM: {stats.wpm}")
    print(f"Accuracy: {stats.accuracy}%")
    print(f"Errors: {stats.errors}")
    print(f"Done: {'yes' if stats.done else 'no'}")
    return 0


def _cmd_jobs(args: argparse.Namespace) -> int:
    """List sample jobs matching the filters."""
    from inclusive_jobs.jobs.listing import (
        SAMPLE_JOBS,
        JobFilter,
        filter_jobs,
        paginate,
        results_message,
    )

    criteria = JobFilter(
        query=args.query,
        location=args.location,
        min_yoe=args.min_yoe,
        max_yoe=args.max_yoe,
        sort=args.sort,
    )

    try:
        matches = filter_jobs(SAMPLE_JOBS, criteria)
        shown = paginate(matches, args.page)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    for job in shown:
        location = f" - {job.location}" if job.location else ""
        print(f"[{job.id}] {job.headline}{location} ({job.yoe_required} yrs)")
    print(results_message(len(matches)))
    return 0


def _cmd_saved(args: argparse.Namespace, storage: JSONFileStorage) -> int:
    """Handle saved command."""
    from inclusive_jobs.jobs.saved import SavedJobs

    saved = SavedJobs(storage)

    if args.action == "toggle":
        now_saved = saved.toggle(args.job_id)
        print(f"{'Saved' if now_saved else 'Removed'} job {args.job_id}")
        return 0

    ids = saved.saved()
    if not ids:
        print("No saved jobs")
    for job_id in ids:
        print(job_id)
    return 0


if __name__ == "__main__":
    sys.exit(main())
