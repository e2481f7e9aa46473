from dataclasses import dataclass
from pathlib import Path

from archiver import config


@dataclass(frozen=True)
class SiteTarget:
    """A shows document and the directory its backups and reports go to."""
    name: str
    file_path: Path
    backup_dir: Path


def get_sites():
    """Build the ordered list of sites to archive."""
    return [
        SiteTarget(
            name="The Dutch Queen (Full Band)",
            file_path=config.MAIN_SITE_ROOT / "content" / "bands" / "the-dutch-queen" / "data" / "shows.json",
            backup_dir=config.MAIN_SITE_ROOT / "backups",
        ),
        SiteTarget(
            name="The Dutch Queen Unplugged",
            file_path=config.VARIANT_SITE_ROOT / "content" / "bands" / "the-dutch-queen-unplugged" / "data" / "shows.json",
            backup_dir=config.VARIANT_SITE_ROOT / "backups",
        ),
    ]
