#!/usr/bin/env python3
"""
Two-way stock sync between the stock sheet and Supabase

Usage:
    python sync_stocks.py              # Full sync
    python sync_stocks.py --dry-run    # Only show the DB -> sheet mapping
"""

import argparse
import sys

from sheetsync import SupabaseDB, get_sheets_client, load_settings, sync_stocks


def main():
    parser = argparse.ArgumentParser(description="Sync stock sheet with Supabase")
    parser.add_argument("--dry-run", action="store_true", help="Compute sheet fixes, write nothing")
    args = parser.parse_args()

    print("=" * 60)
    print("  Stock Sheet <-> Supabase Sync")
    print("=" * 60)

    try:
        settings = load_settings()
        sheets = get_sheets_client(settings)
        db = SupabaseDB(settings)
        result = sync_stocks(sheets, db, settings, dry_run=args.dry_run)
    except Exception as e:
        print(f"\nError: {e}")
        sys.exit(1)

    print(f"\nDone: {result}")


if __name__ == "__main__":
    main()
