#!/usr/bin/env python
"""
Clash Royale Battle Logger: Fetch battle log → SQLite → Analytics → Terminal views
"""
import sys

from battlelog.cli import main


if __name__ == "__main__":
    sys.exit(main())
