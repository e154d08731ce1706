#!/usr/bin/env python3
"""
Fetch latest NPS NAVs into the nps sheet and upsert them to Supabase

Usage:
    python sync_nps.py
    python sync_nps.py --insecure
"""

import argparse
import sys

from sheetsync import NPSNavClient, SupabaseDB, fetch_and_sync_nps_navs, get_sheets_client, load_settings


def main():
    parser = argparse.ArgumentParser(description="Sync NPS NAVs")
    parser.add_argument("--insecure", action="store_true", help="Disable SSL verification")
    args = parser.parse_args()

    if args.insecure:
        import urllib3
        urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

    print("=" * 60)
    print("  NPS NAV Sync")
    print("=" * 60)

    try:
        settings = load_settings()
        sheets = get_sheets_client(settings)
        db = SupabaseDB(settings)
        nps = NPSNavClient(verify_ssl=not args.insecure)
        result = fetch_and_sync_nps_navs(sheets, db, settings, nps=nps)
    except Exception as e:
        print(f"\nError: {e}")
        sys.exit(1)

    print(f"\nDone: {result}")


if __name__ == "__main__":
    main()
