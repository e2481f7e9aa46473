#!/usr/bin/env python3
"""
Move past shows from 'upcoming' to 'past' for every configured site.

Modes:
  --dry-run   report what would be archived (default)
  --execute   archive and write shows.json
  --verify    back up and check structure only

Every mode backs up each shows.json and writes a markdown report first.
Assumes it is the only process writing these files.
"""

import argparse
import sys
import time
import traceback
from datetime import date, datetime, timezone
from pathlib import Path

from archiver import config
from archiver.pipeline.archive import commit_archive, plan_archive
from archiver.pipeline.backup import backup_report_path, create_backup, get_file_info, make_timestamp
from archiver.pipeline.io import load_shows_document, save_run_log
from archiver.pipeline.metrics import SiteMetrics
from archiver.pipeline.report import EXECUTED, PREVIEW, generate_backup_report, generate_run_report, run_report_filename
from archiver.pipeline.validate import ensure_valid
from archiver.registry import get_sites

DRY_RUN = "dry-run"
EXECUTE = "execute"
VERIFY = "verify"


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Archive past shows in shows.json files")
    modes = parser.add_mutually_exclusive_group()
    modes.add_argument("--dry-run", dest="mode", action="store_const", const=DRY_RUN,
                       help="Report what would be archived without writing (default)")
    modes.add_argument("--execute", "--apply", dest="mode", action="store_const", const=EXECUTE,
                       help="Archive past shows and write shows.json")
    modes.add_argument("--verify", dest="mode", action="store_const", const=VERIFY,
                       help="Back up and check structure only")
    parser.add_argument("--today", type=date.fromisoformat, default=None,
                        help="Reference date as YYYY-MM-DD (defaults to the local date)")
    parser.set_defaults(mode=DRY_RUN)
    return parser.parse_args(argv)


def write_backup_report(site, backup_path, log):
    """
    Decode and validate the site's document and write the backup report.
    The report is written even when the document is broken; the failure is
    raised afterwards. Returns the decoded document.
    """
    file_info = get_file_info(site.file_path)
    data = None
    load_error = None

    try:
        data = ensure_valid(load_shows_document(site.file_path))
    except ValueError as e:
        load_error = e

    report = generate_backup_report(
        site.name,
        site.file_path,
        backup_path,
        file_info,
        data=data,
        error=str(load_error) if load_error else None,
    )
    report_path = backup_report_path(backup_path)
    report_path.write_text(report, encoding="utf-8")
    log(f"  Backup report: {report_path.name}")

    if load_error:
        raise load_error
    return data


def process_site(site, mode, today, metrics, log):
    """Run backup, validation and archiving for one site."""
    if not site.file_path.exists():
        raise FileNotFoundError(f"File not found: {site.file_path}")

    backup_path = create_backup(site.file_path, site.backup_dir, make_timestamp())
    log(f"  Backup created: {backup_path.name}")
    timestamp = backup_path.stem[len("shows-backup-"):]

    data = write_backup_report(site, backup_path, log)

    if mode == VERIFY:
        log("  Verification results:")
        log(f"    - Total shows: {len(data['upcoming']) + len(data['past'])}")
        log(f"    - Upcoming shows: {len(data['upcoming'])}")
        log(f"    - Past shows: {len(data['past'])}")
        log("    - Structure: valid")
        metrics.remaining = len(data["upcoming"])
        return None

    dry_run = mode != EXECUTE
    result, new_data = plan_archive(site.name, site.file_path, data, today)
    metrics.remaining = result.remaining

    log(f"  Total shows: {result.original_upcoming + result.original_past}")
    log(f"  Shows {'to archive' if dry_run else 'archived'}: {result.archived}")
    log(f"  Shows remaining: {result.remaining}")

    for show in result.archived_shows:
        log(f"    - {show['date']} - {show['venue']}, {show['city']} ({show['days_ago']} days ago)")
    for show in result.unparsed_shows:
        log(f"  Kept {show['date']!r} at {show['venue']}: {show['reason']}", "WARNING")
    for warning in result.warnings:
        log(f"  {warning}", "WARNING")
    for error in result.errors:
        log(f"  {error}", "ERROR")

    write_error = None
    if not dry_run:
        try:
            commit_archive(result, new_data)
        except Exception as e:
            write_error = e
            result.errors.append(f"Write failed, original file restored: {e}")

    metrics.archived = result.archived if (dry_run or result.written) else 0
    if write_error:
        metrics.remaining = result.original_upcoming

    kind = PREVIEW if dry_run else EXECUTED
    report_path = Path(site.backup_dir) / run_report_filename(kind, timestamp)
    report_path.write_text(generate_run_report(result, kind), encoding="utf-8")
    log(f"  Report generated: {report_path.name}")

    if write_error:
        raise write_error

    if dry_run and result.archived > 0:
        log("  To execute this operation, run: archive-shows --execute")
    elif result.written:
        log("  Changes applied successfully. Verify with: archive-shows --verify")
    else:
        log("  No changes needed - all shows are today or in the future.")

    return result


def main(argv=None, sites=None, log_path=None):
    args = parse_args(argv)
    mode = args.mode
    today = args.today or date.today()
    sites = get_sites() if sites is None else sites
    log_path = config.LOG_PATH if log_path is None else log_path

    run_timestamp = datetime.now(timezone.utc).isoformat()
    log_lines = []

    def log(message, level="INFO"):
        """Log a message to both console and log buffer."""
        timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")
        log_entry = f"[{timestamp}] [{level}] {message}"
        print(message, file=sys.stderr if level == "ERROR" else sys.stdout)
        log_lines.append(log_entry)

    log("=" * 75)
    log(f"Shows Archive - {mode.upper()} MODE")
    if mode == EXECUTE:
        log("This will modify shows.json files!")
    elif mode == DRY_RUN:
        log("(No changes will be made)")
    log(f"Started {run_timestamp}, reference date {today.isoformat()}")
    log("=" * 75)

    site_metrics = []

    for site in sites:
        log("")
        log(f"Processing: {site.name}")
        log(f"File: {site.file_path}")
        metrics = SiteMetrics(name=site.name, mode=mode)
        start_time = time.time()

        try:
            process_site(site, mode, today, metrics, log)
        except Exception as e:
            error_msg = str(e)
            metrics.errors = 1
            metrics.error_messages.append(error_msg)
            log(f"  ERROR: Failed to process {site.name}: {error_msg}", "ERROR")
            log(f"  Traceback:\n{traceback.format_exc()}", "ERROR")

        metrics.duration_ms = (time.time() - start_time) * 1000
        site_metrics.append(metrics)

    log("")
    log("=" * 75)
    log("SITE SUMMARY")
    log("=" * 75)
    log(f"{'Site':<28} {'Mode':>8} {'Archived':>9} {'Remaining':>10} {'Errors':>7} {'Time':>8}")
    log("-" * 75)
    for m in site_metrics:
        time_str = f"{m.duration_ms:.0f}ms"
        log(f"{m.name[:28]:<28} {m.mode:>8} {m.archived:>9} {m.remaining:>10} {m.errors:>7} {time_str:>8}")
    log("-" * 75)
    total_archived = sum(m.archived for m in site_metrics)
    total_remaining = sum(m.remaining for m in site_metrics)
    total_errors = sum(m.errors for m in site_metrics)
    total_time = sum(m.duration_ms for m in site_metrics)
    log(f"{'TOTAL':<28} {'':>8} {total_archived:>9} {total_remaining:>10} {total_errors:>7} {total_time:.0f}ms")
    log("=" * 75)

    failed_sites = [m for m in site_metrics if m.errors]
    for m in failed_sites:
        log(f"Failed: {m.name} ({'; '.join(m.error_messages)})", "ERROR")
    log("Archive script completed")

    try:
        save_run_log(log_path, log_lines)
    except OSError as e:
        print(f"Warning: Could not save run log to {log_path}: {e}", file=sys.stderr)

    return 1 if failed_sites else 0


def cli():
    sys.exit(main())


if __name__ == "__main__":
    cli()
