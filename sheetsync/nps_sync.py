"""
NPS NAV sync - roll CMP into LCP, fetch fresh NAVs, write sheet, upsert DB

Sheet block (from A2): A scheme name, B scheme code, C CMP, D LCP, E fund name
"""

from typing import Dict, List

from .normalize import num_or_null, pad_row
from .npsnav import NPSNavClient

SHEET_RANGE = "A2:E1000"
WIDTH = 5


def roll_cmp_to_lcp(data: List[List]) -> None:
    """LCP <- CMP in place for rows that have a CMP"""
    for row in data:
        pad_row(row, WIDTH)
        if row[2]:
            row[3] = row[2]


def fetch_and_sync_nps_navs(sheets, db, settings, nps: NPSNavClient = None) -> Dict:
    """
    Refresh NPS NAVs on the sheet and in the database

    Args:
        sheets: SheetsClient
        db: SupabaseDB
        settings: Settings (NPS sheet name)
        nps: NPS NAV client (created if not given)

    Returns:
        Dict with fetched / failed / skipped / upserted counts
    """
    print("Running NPS NAV Sync...")
    nps = nps or NPSNavClient()
    sheet_name = settings.nps_sheet

    data = sheets.read(sheet_name, SHEET_RANGE)
    if not data:
        print("  No data found in sheet.")
        return {"fetched": 0, "failed": 0, "skipped": 0, "upserted": 0}

    roll_cmp_to_lcp(data)

    payload = []
    failed = 0
    skipped = 0
    for i, row in enumerate(data):
        scheme_name, scheme_code, _, lcp, fund_name = row[:WIDTH]
        scheme_code = str(scheme_code).strip()

        if not scheme_code:
            print(f"  Skipping empty scheme code at row {i + 2}")
            skipped += 1
            continue

        try:
            latest = nps.get_latest_nav(scheme_code)
        except Exception as e:
            print(f"  Error fetching NAV for {scheme_code}: {e}")
            failed += 1
            continue

        row[2] = latest
        payload.append({
            "scheme_name": scheme_name,
            "scheme_code": scheme_code,
            "cmp": latest,
            "lcp": num_or_null(lcp),
            "fund_name": fund_name or None,
        })

    sheets.write(sheet_name, "A2", data)
    print(f"  Sheet updated: {len(payload)} NAVs, {failed} failed, {skipped} skipped")

    upserted = 0
    if payload:
        upserted = db.upsert_nps_navs(payload)
        print(f"  Supabase upsert successful: {upserted} rows")
    else:
        print("  No NAV data to sync.")

    return {
        "fetched": len(payload),
        "failed": failed,
        "skipped": skipped,
        "upserted": upserted,
    }
