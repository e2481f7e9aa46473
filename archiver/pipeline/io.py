import json
import os
import re
import shutil
from datetime import datetime, timedelta, timezone
from pathlib import Path

from archiver import config


def trim_log_by_time(log_path, retention_days=config.LOG_RETENTION_DAYS):
    """
    Remove log entries older than retention_days.
    Returns list of lines to keep.
    """
    log_path = Path(log_path)
    if not log_path.exists():
        return []

    cutoff = datetime.now(timezone.utc) - timedelta(days=retention_days)
    cutoff_str = cutoff.strftime("%Y-%m-%d %H:%M:%S")

    kept_lines = []
    current_entry_recent = False

    with open(log_path, "r", encoding="utf-8") as f:
        for line in f:
            match = re.match(r"\[(\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2})\]", line)
            if match:
                current_entry_recent = match.group(1) >= cutoff_str

            if current_entry_recent:
                kept_lines.append(line)

    return kept_lines


def save_run_log(log_path, log_lines, retention_days=config.LOG_RETENTION_DAYS):
    """Append this run's entries to the log file, dropping expired ones."""
    log_path = Path(log_path)
    existing_log = trim_log_by_time(log_path, retention_days=retention_days)
    log_content = existing_log + ["\n--- New Run ---\n"] + [line + "\n" for line in log_lines]

    log_path.parent.mkdir(parents=True, exist_ok=True)
    with open(log_path, "w", encoding="utf-8") as f:
        f.writelines(log_content)


def load_shows_document(file_path):
    """Read and decode a shows.json file. Errors propagate to the caller."""
    with open(file_path, "r", encoding="utf-8") as f:
        return json.load(f)


def dump_shows_document(data):
    return json.dumps(data, indent=2, ensure_ascii=False)


def write_shows_document(file_path, data):
    """
    Replace file_path with data without ever leaving it truncated.
    The new content goes to a .tmp sibling, is re-read to confirm it decodes,
    and is renamed over the target. The previous file is held at .backup until
    the rename succeeds and is copied back if anything fails.
    """
    file_path = Path(file_path)
    tmp_path = file_path.with_name(file_path.name + ".tmp")
    backup_path = file_path.with_name(file_path.name + ".backup")

    try:
        with open(tmp_path, "w", encoding="utf-8") as f:
            f.write(dump_shows_document(data))
            f.flush()
            os.fsync(f.fileno())

        with open(tmp_path, "r", encoding="utf-8") as f:
            json.load(f)

        if file_path.exists():
            shutil.copyfile(file_path, backup_path)

        os.replace(tmp_path, file_path)

        if backup_path.exists():
            backup_path.unlink()
    except Exception:
        if tmp_path.exists():
            tmp_path.unlink()

        if backup_path.exists():
            shutil.copyfile(backup_path, file_path)
            backup_path.unlink()

        raise
