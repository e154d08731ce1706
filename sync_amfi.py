#!/usr/bin/env python3
"""
Refresh mutual fund NAVs on the MF sheet from AMFI's NAVAll.txt

Usage:
    python sync_amfi.py                  # Fast NAV update of the MF sheet
    python sync_amfi.py --sheet MF2      # Another sheet with the same headers
    python sync_amfi.py --workflow       # LCP roll -> NAV update -> CMP roll into MF1
    python sync_amfi.py --insecure       # Disable SSL verification
"""

import argparse
import sys

from sheetsync import AMFIClient, fast_nav_update, get_sheets_client, load_settings, run_mf_workflow


def main():
    parser = argparse.ArgumentParser(
        description="AMFI NAV update",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python sync_amfi.py                   # Update Date/NAV/Status on MF
  python sync_amfi.py --workflow        # Also roll LCP/CMP into MF1
        """
    )
    parser.add_argument("--sheet", "-s", help="NAV sheet name (default: GOOGLE_SHEET_NAME_MF or MF)")
    parser.add_argument("--workflow", "-w", action="store_true", help="Run the MF -> MF1 LCP/CMP workflow")
    parser.add_argument("--insecure", action="store_true", help="Disable SSL verification")
    args = parser.parse_args()

    if args.insecure:
        import urllib3
        urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

    print("=" * 60)
    print("  AMFI NAV Update")
    print("=" * 60)

    try:
        settings = load_settings()
        sheet_name = args.sheet or settings.mf_sheet
        sheets = get_sheets_client(settings)
        amfi = AMFIClient(verify_ssl=not args.insecure)

        if args.workflow:
            result = run_mf_workflow(sheets, sheet_name, settings.mf1_sheet, amfi=amfi)
        else:
            result = fast_nav_update(sheets, sheet_name, amfi=amfi)
    except Exception as e:
        print(f"\nError: {e}")
        sys.exit(1)

    print(f"\n{result['message']}")
    if result.get("success") is False:
        sys.exit(1)


if __name__ == "__main__":
    main()
