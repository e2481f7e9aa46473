from archiver import config
from archiver.pipeline.io import write_shows_document
from archiver.pipeline.metrics import ArchiveResult
from archiver.pipeline.validate import ensure_valid
from archiver.utils.dates import KEEP_UNPARSEABLE, decide_archive


class ArchiveIntegrityError(RuntimeError):
    """Raised when a proposed document would gain or lose shows."""


def partition_shows(upcoming, today):
    """
    Split upcoming shows into (to_archive, to_keep), keeping their order.
    to_archive holds (show, decision) pairs; unparseable dates land in
    to_keep and are also returned in the third list with their decision.
    """
    to_archive = []
    to_keep = []
    unparsed = []

    for show in upcoming:
        decision = decide_archive(show.get("date"), today)
        if decision.should_archive:
            to_archive.append((show, decision))
        else:
            to_keep.append(show)
            if decision.outcome == KEEP_UNPARSEABLE:
                unparsed.append((show, decision))

    return to_archive, to_keep, unparsed


def check_sanity(result):
    """
    Flag suspicious partitions. Never blocks the run.
    Returns (warnings, errors).
    """
    warnings = []
    errors = []

    if result.remaining == 0 and result.archived > 0:
        warnings.append("All upcoming shows would be archived. This seems unusual.")

    if result.archived > config.MAX_ARCHIVE_PER_RUN:
        warnings.append(f"{result.archived} shows would be archived. This seems high.")

    for show in result.archived_shows:
        if show["days_ago"] < 0:
            errors.append(
                f"Future show would be archived: {show['date']} ({abs(show['days_ago'])} days ahead)"
            )

    for show in result.archived_shows:
        if show["days_ago"] == 0:
            warnings.append(f"Today's show would be archived: {show['date']}. This may not be desired.")

    return warnings, errors


def build_archived_document(data, to_archive, to_keep):
    """
    New document with archived shows prepended to past, most recent first.
    Extra top-level keys are carried after upcoming/past/settings.
    """
    archived = [show for show, _ in to_archive]
    new_data = {
        "upcoming": list(to_keep),
        "past": list(reversed(archived)) + list(data["past"]),
        "settings": data["settings"],
    }
    for key, value in data.items():
        if key not in new_data:
            new_data[key] = value

    before = len(data["upcoming"]) + len(data["past"])
    after = len(new_data["upcoming"]) + len(new_data["past"])
    if before != after:
        raise ArchiveIntegrityError(f"Show count changed from {before} to {after}")

    return new_data


def plan_archive(site_name, file_path, data, today):
    """
    Partition a shows document without touching storage.
    Returns (result, new_data); new_data is None when nothing needs archiving.
    """
    ensure_valid(data)

    to_archive, to_keep, unparsed = partition_shows(data["upcoming"], today)

    result = ArchiveResult(
        site_name=site_name,
        file_path=str(file_path),
        original_upcoming=len(data["upcoming"]),
        original_past=len(data["past"]),
        archived=len(to_archive),
        remaining=len(to_keep),
        total_past=len(data["past"]) + len(to_archive),
        archived_shows=[
            {
                "date": show.get("date"),
                "venue": show.get("venue"),
                "city": show.get("city"),
                "days_ago": decision.days_ago,
            }
            for show, decision in to_archive
        ],
        unparsed_shows=[
            {
                "date": show.get("date"),
                "venue": show.get("venue"),
                "city": show.get("city"),
                "reason": decision.reason,
            }
            for show, decision in unparsed
        ],
    )

    result.warnings, result.errors = check_sanity(result)

    new_data = build_archived_document(data, to_archive, to_keep) if to_archive else None
    return result, new_data


def commit_archive(result, new_data):
    if new_data is None:
        return result
    write_shows_document(result.file_path, new_data)
    result.written = True
    return result


def archive_shows(site_name, file_path, data, today, apply=False):
    """
    Partition a shows document and, in apply mode, persist it.
    Nothing is written when no show needs archiving.
    """
    result, new_data = plan_archive(site_name, file_path, data, today)
    if apply:
        result = commit_archive(result, new_data)
    return result
