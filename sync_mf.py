#!/usr/bin/env python3
"""
Sync mutual fund prices between the MF sheet and Supabase

Usage:
    python sync_mf.py              # LCP <- CMP, CMP <- sheet NAV, append missing funds
    python sync_mf.py --dry-run    # Show what would change
"""

import argparse
import sys

from sheetsync import SupabaseDB, get_sheets_client, load_settings, sync_mutual_funds


def main():
    parser = argparse.ArgumentParser(description="Sync MF sheet with Supabase")
    parser.add_argument("--dry-run", action="store_true", help="Compute changes, write nothing")
    args = parser.parse_args()

    print("=" * 60)
    print("  MF Sheet <-> Supabase Sync")
    print("=" * 60)

    try:
        settings = load_settings()
        sheets = get_sheets_client(settings)
        db = SupabaseDB(settings)
        result = sync_mutual_funds(sheets, db, settings, dry_run=args.dry_run)
    except Exception as e:
        print(f"\nError: {e}")
        sys.exit(1)

    print(f"\nDone: {result}")


if __name__ == "__main__":
    main()
