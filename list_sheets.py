#!/usr/bin/env python3
"""
Check Google Sheets credentials - list worksheets, optionally preview a range

Usage:
    python list_sheets.py
    python list_sheets.py --range MF!A1:B5
"""

import argparse
import sys

from sheetsync import get_sheets_client, load_settings


def main():
    parser = argparse.ArgumentParser(description="List worksheets of the configured spreadsheet")
    parser.add_argument("--range", "-r", help="Preview range as Sheet!A1:B5")
    args = parser.parse_args()

    try:
        settings = load_settings()
        sheets = get_sheets_client(settings)

        print("Available Sheets:")
        for title in sheets.list_sheets():
            print(f" - {title}")

        if args.range:
            name, _, a1 = args.range.partition("!")
            values = sheets.read(name, a1 or None)
            print(f"\nConnected successfully, {args.range}:")
            for row in values:
                print(f"  {row}")
    except Exception as e:
        print(f"Sheets auth failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
