#!/usr/bin/env python3
"""
Archive past shows for both The Dutch Queen websites.

Usage:
  python archive_shows.py              # dry run (safe, default)
  python archive_shows.py --execute    # move past shows and write shows.json
  python archive_shows.py --verify     # back up and check structure only
"""

import sys

from archiver.runner import main

if __name__ == "__main__":
    sys.exit(main())
