"""
Markdown reports written next to each backup.
"""

import json
from datetime import datetime, timezone

PREVIEW = "preview"
EXECUTED = "executed"


def _generated_at(generated):
    generated = generated or datetime.now(timezone.utc)
    return generated.strftime("%Y-%m-%d %H:%M:%S")


def _show_lines(shows):
    if not shows:
        return ["[None]", ""]
    lines = [
        f"{index}. **{show.get('date')}** - {show.get('venue')}, {show.get('city')} "
        f"({show.get('time')}) [{show.get('status')}]"
        if isinstance(show, dict)
        else f"{index}. {show!r}"
        for index, show in enumerate(shows, start=1)
    ]
    return lines + [""]


def _numbered(items):
    return [f"{index}. {item}" for index, item in enumerate(items, start=1)] + [""]


def generate_backup_report(site_name, file_path, backup_path, file_info, data=None, error=None, generated=None):
    """
    Listing of the document as it was backed up, plus integrity metadata.
    When the document could not be read or validated, data is None and error
    explains why; the integrity and restore sections are still written.
    """
    lines = [
        "# Shows Backup Report",
        "",
        f"**Generated:** {_generated_at(generated)}",
        f"**Original File:** {file_path}",
        f"**Website:** {site_name}",
        "",
    ]

    if error:
        lines += ["## Errors", "", f"1. {error}", ""]

    if data is not None:
        upcoming = data.get("upcoming", [])
        past = data.get("past", [])
        lines += [f"## Upcoming Shows ({len(upcoming)} total)", ""]
        lines += _show_lines(upcoming)
        lines += [f"## Past Shows ({len(past)} total)", ""]
        lines += _show_lines(past)

        lines += ["## Settings", ""]
        settings = data.get("settings", {})
        if settings:
            lines += [f"- {key}: {json.dumps(value)}" for key, value in settings.items()]
        else:
            lines.append("[None]")
        lines.append("")

    lines += [
        "## File Integrity",
        "",
        f"- SHA256: {file_info['hash_prefix']}...",
        f"- File Size: {file_info['size']:,} bytes",
        f"- Last Modified: {file_info['modified']}",
        "",
        "---",
        "",
        "To restore this backup:",
        "```bash",
        f"cp {backup_path} {file_path}",
        "```",
        "",
    ]

    return "\n".join(lines)


def generate_run_report(result, kind, generated=None):
    """Summary of a preview or executed archive run."""
    preview = kind == PREVIEW
    title = "Dry Run" if preview else "Execution"
    to_be = " To Be" if preview else ""

    lines = [
        f"# Shows Archive {title} Report",
        "",
        f"**Generated:** {_generated_at(generated)}",
        f"**Website:** {result.site_name}",
        f"**File:** {result.file_path}",
        "",
        "## Summary",
        "",
        f"- **Original upcoming shows:** {result.original_upcoming}",
        f"- **Original past shows:** {result.original_past}",
        f"- **Shows archived:** {result.archived}",
        f"- **Remaining upcoming shows:** {result.remaining}",
        f"- **Total past shows:** {result.total_past}",
        "",
    ]

    if result.archived > 0:
        lines += [f"## Shows{to_be} Archived", ""]
        lines += _numbered(
            f"**{show['date']}** - {show['venue']}, {show['city']} ({show['days_ago']} day(s) ago)"
            for show in result.archived_shows
        )
    else:
        lines += [f"## No Shows{to_be} Archived", "", "All shows are either today or in the future.", ""]

    if result.unparsed_shows:
        lines += ["## Kept (Date Not Parsed)", ""]
        lines += _numbered(
            f"**{show['date']}** - {show['venue']}, {show['city']}: {show['reason']}"
            for show in result.unparsed_shows
        )

    if result.warnings:
        lines += ["## Warnings", ""]
        lines += _numbered(result.warnings)

    if result.errors:
        lines += ["## Errors", ""]
        lines += _numbered(result.errors)

    return "\n".join(lines)


def run_report_filename(kind, timestamp):
    return f"shows-{kind}-{timestamp}.md"
