import hashlib
import shutil
from datetime import datetime, timezone
from pathlib import Path

from archiver import config


def make_timestamp(now=None):
    """UTC timestamp safe for filenames, e.g. 2025-12-06T14-30-05."""
    now = now or datetime.now(timezone.utc)
    return now.strftime("%Y-%m-%dT%H-%M-%S")


def calculate_file_hash(file_path):
    """SHA256 hex digest of a file's bytes."""
    digest = hashlib.sha256()
    with open(file_path, "rb") as f:
        for chunk in iter(lambda: f.read(65536), b""):
            digest.update(chunk)
    return digest.hexdigest()


def get_file_info(file_path):
    """Integrity metadata for the backup report."""
    stats = Path(file_path).stat()
    sha256 = calculate_file_hash(file_path)
    modified = datetime.fromtimestamp(stats.st_mtime, tz=timezone.utc)
    return {
        "sha256": sha256,
        "hash_prefix": sha256[: config.HASH_PREFIX_LENGTH],
        "size": stats.st_size,
        "modified": modified.strftime("%Y-%m-%d %H:%M:%S"),
    }


def _unused_backup_path(backup_dir, timestamp):
    path = backup_dir / f"shows-backup-{timestamp}.json"
    counter = 2
    while path.exists():
        path = backup_dir / f"shows-backup-{timestamp}-{counter}.json"
        counter += 1
    return path


def create_backup(file_path, backup_dir, timestamp=None):
    """
    Copy file_path byte-for-byte into backup_dir.
    Runs before the document is decoded so even a corrupt file is kept.
    Existing backups are never overwritten. Returns the backup path.
    """
    backup_dir = Path(backup_dir)
    timestamp = timestamp or make_timestamp()

    backup_dir.mkdir(parents=True, exist_ok=True)
    backup_path = _unused_backup_path(backup_dir, timestamp)
    shutil.copyfile(file_path, backup_path)

    return backup_path


def backup_report_path(backup_path):
    backup_path = Path(backup_path)
    return backup_path.with_name(backup_path.stem + "-report.md")
