from freezegun import freeze_time

from archiver.pipeline.io import save_run_log, trim_log_by_time


@freeze_time("2025-12-20 12:00:00")
def test_trim_log_by_time_drops_old_entries(tmp_path):
    log_path = tmp_path / "archive-log.txt"
    log_path.write_text(
        "[2025-11-01 08:00:00] [INFO] old run\n"
        "  continuation of old entry\n"
        "[2025-12-19 08:00:00] [INFO] recent run\n"
        "  continuation of recent entry\n"
    )

    kept = trim_log_by_time(log_path, retention_days=14)

    assert kept == [
        "[2025-12-19 08:00:00] [INFO] recent run\n",
        "  continuation of recent entry\n",
    ]


def test_trim_log_missing_file(tmp_path):
    assert trim_log_by_time(tmp_path / "missing.txt") == []


@freeze_time("2025-12-20 12:00:00")
def test_save_run_log_appends_new_run(tmp_path):
    log_path = tmp_path / "logs" / "archive-log.txt"
    save_run_log(log_path, ["[2025-12-20 12:00:00] [INFO] first"])
    save_run_log(log_path, ["[2025-12-20 12:00:00] [INFO] second"])

    content = log_path.read_text()
    assert "--- New Run ---" in content
    assert content.index("first") < content.index("second")
