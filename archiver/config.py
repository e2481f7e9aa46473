import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

REPO_ROOT = Path(__file__).resolve().parents[1]
MAIN_SITE_ROOT = Path(os.environ.get("ARCHIVE_MAIN_ROOT", REPO_ROOT))
VARIANT_SITE_ROOT = Path(
    os.environ.get("ARCHIVE_VARIANT_ROOT", REPO_ROOT.parent / "Queenwebsite_v3_UNPLUGGED")
)

LOG_PATH = Path(os.environ.get("ARCHIVE_LOG_PATH", MAIN_SITE_ROOT / "backups" / "archive-log.txt"))
LOG_RETENTION_DAYS = 14

REQUIRED_SHOW_FIELDS = ["date", "time", "venue", "city", "status"]

# "Dec 4, 2025"
SHOW_DATE_PATTERN = r"^[A-Za-z]{3}\s+[0-9]{1,2},\s+[0-9]{4}$"
SHOW_DATE_FORMAT = "%b %d %Y"
MIN_YEAR = 2020
MAX_YEAR = 2030

MAX_ARCHIVE_PER_RUN = 10
HASH_PREFIX_LENGTH = 16
