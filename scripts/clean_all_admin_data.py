#!/usr/bin/env python3
"""
Reset the admin dashboard: delete all customer requests, vendor data and
vendor user accounts.

Usage:
    python scripts/clean_all_admin_data.py [--policy keep_admin_only] [--yes]
"""

import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from admin_cleanup.main import cli


if __name__ == "__main__":
    cli()
