from datetime import datetime

from archiver.pipeline.metrics import ArchiveResult
from archiver.pipeline.report import EXECUTED, PREVIEW, generate_backup_report, generate_run_report

GENERATED = datetime(2025, 12, 6, 9, 30, 0)
FILE_INFO = {"sha256": "ab" * 32, "hash_prefix": "ab" * 8, "size": 1234, "modified": "2025-12-05 22:00:00"}


def make_result(**overrides):
    values = dict(
        site_name="The Dutch Queen (Full Band)",
        file_path="content/shows.json",
        original_upcoming=3,
        original_past=1,
        archived=1,
        remaining=2,
        total_past=2,
        archived_shows=[{"date": "Dec 4, 2025", "venue": "Paradiso", "city": "Amsterdam", "days_ago": 2}],
    )
    values.update(overrides)
    return ArchiveResult(**values)


def test_backup_report_lists_shows_settings_and_integrity():
    data = {
        "upcoming": [{"date": "Dec 4, 2025", "time": "20:00", "venue": "Paradiso", "city": "Amsterdam", "status": "sold-out"}],
        "past": [],
        "settings": {"showPastShows": True, "maxPastDisplay": 5},
    }
    report = generate_backup_report("Main", "shows.json", "backups/shows-backup-x.json", FILE_INFO, data=data, generated=GENERATED)

    assert "**Generated:** 2025-12-06 09:30:00" in report
    assert "## Upcoming Shows (1 total)" in report
    assert "1. **Dec 4, 2025** - Paradiso, Amsterdam (20:00) [sold-out]" in report
    assert "## Past Shows (0 total)\n\n[None]" in report
    assert "- showPastShows: true" in report
    assert "- maxPastDisplay: 5" in report
    assert "- SHA256: abababababababab..." in report
    assert "- File Size: 1,234 bytes" in report
    assert "cp backups/shows-backup-x.json shows.json" in report


def test_backup_report_for_unreadable_document():
    report = generate_backup_report("Main", "shows.json", "b.json", FILE_INFO, error="Expecting value", generated=GENERATED)

    assert "## Errors\n\n1. Expecting value" in report
    assert "## Upcoming Shows" not in report
    assert "## File Integrity" in report


def test_preview_report_counts():
    report = generate_run_report(make_result(), PREVIEW, generated=GENERATED)

    assert report.startswith("# Shows Archive Dry Run Report")
    assert "- **Original upcoming shows:** 3" in report
    assert "- **Original past shows:** 1" in report
    assert "- **Shows archived:** 1" in report
    assert "- **Remaining upcoming shows:** 2" in report
    assert "- **Total past shows:** 2" in report
    assert "## Shows To Be Archived" in report
    assert "1. **Dec 4, 2025** - Paradiso, Amsterdam (2 day(s) ago)" in report
    assert "## Warnings" not in report
    assert "## Errors" not in report


def test_executed_report_with_nothing_archived():
    report = generate_run_report(make_result(archived=0, archived_shows=[], remaining=3, total_past=1), EXECUTED)

    assert report.startswith("# Shows Archive Execution Report")
    assert "## No Shows Archived" in report


def test_warnings_errors_and_unparsed_are_never_omitted():
    result = make_result(
        warnings=["All upcoming shows would be archived. This seems unusual."],
        errors=["Write failed, original file restored: disk full"],
        unparsed_shows=[{"date": "next tuesday", "venue": "013", "city": "Tilburg", "reason": "Could not parse date safely"}],
    )
    report = generate_run_report(result, EXECUTED)

    assert "## Warnings\n\n1. All upcoming shows would be archived. This seems unusual." in report
    assert "## Errors\n\n1. Write failed, original file restored: disk full" in report
    assert "## Kept (Date Not Parsed)" in report
    assert "**next tuesday** - 013, Tilburg" in report


def test_backup_report_lists_non_object_entries_verbatim():
    data = {"upcoming": [], "past": ["legacy note", 42], "settings": {}}
    report = generate_backup_report("Main", "shows.json", "b.json", FILE_INFO, data=data, generated=GENERATED)

    assert "1. 'legacy note'\n2. 42" in report
