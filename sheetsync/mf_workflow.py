"""
MF workflow - roll prices from the MF sheet into the MF1 holdings sheet

Order matters:
    1. LCP <- NAV for funds whose NAV is at least two days old (before fetch)
    2. Fast NAV update of the MF sheet from AMFI
    3. CMP <- NAV for funds whose NAV is dated yesterday (after fetch)
All dates are IST.
"""

from datetime import date, timedelta
from typing import Dict, List, Optional

from .amfi import AMFIClient
from .amfi_sync import fast_nav_update
from .normalize import cell, format_date, ist_today, pad_row, parse_date

# Column layout shared by MF and MF1 (0-based)
ISIN_COL = 1
MF1_CMP_COL = 3
MF1_LCP_COL = 4


def _index_by_isin(mf1_data: List[List]) -> Dict[str, int]:
    index = {}
    for i in range(1, len(mf1_data)):
        isin = cell(mf1_data[i], ISIN_COL)
        if isin:
            index[isin] = i
    return index


def _price_columns(mf_data: List[List]) -> Optional[tuple]:
    header = mf_data[0] if mf_data else []
    if "Date" not in header or "NAV" not in header:
        return None
    return header.index("Date"), header.index("NAV")


def copy_nav_to_mf1(
    mf_data: List[List],
    mf1_data: List[List],
    target_col: int,
    matches
) -> int:
    """
    Copy MF NAVs into a column of MF1 for rows whose date passes `matches`

    Args:
        mf_data: MF sheet values (header row first)
        mf1_data: MF1 sheet values, modified in place
        target_col: MF1 column to write (CMP or LCP)
        matches: Callable taking the parsed MF row date (or None)

    Returns:
        Number of MF1 rows changed
    """
    columns = _price_columns(mf_data)
    if not columns:
        return 0
    date_col, nav_col = columns

    mf1_index = _index_by_isin(mf1_data)
    changed = 0

    for i in range(1, len(mf_data)):
        row = mf_data[i]
        isin = cell(row, ISIN_COL)
        if not isin:
            continue
        if not matches(parse_date(cell(row, date_col))):
            continue

        target = mf1_index.get(isin)
        if target is None:
            continue
        pad_row(mf1_data[target], target_col + 1)[target_col] = cell(row, nav_col)
        changed += 1

    return changed


def update_lcp_from_mf(sheets, mf_data: List[List], mf1_data: List[List], target_sheet: str, today: date) -> int:
    """LCP <- NAV for MF rows dated on or before today - 2"""
    cutoff = today - timedelta(days=2)
    changed = copy_nav_to_mf1(
        mf_data, mf1_data, MF1_LCP_COL,
        lambda d: d is not None and d <= cutoff
    )
    sheets.write(target_sheet, "A1", mf1_data)
    print(f"  LCP updated for {changed} funds (NAV dated <= {format_date(cutoff)})")
    return changed


def update_cmp_from_mf(sheets, mf_data: List[List], mf1_data: List[List], target_sheet: str, today: date) -> int:
    """CMP <- NAV for MF rows dated yesterday"""
    yesterday = today - timedelta(days=1)
    changed = copy_nav_to_mf1(
        mf_data, mf1_data, MF1_CMP_COL,
        lambda d: d == yesterday
    )
    sheets.write(target_sheet, "A1", mf1_data)
    print(f"  CMP updated for {changed} funds (NAV dated {format_date(yesterday)})")
    return changed


def _read_or_none(sheets, name: str) -> Optional[List[List]]:
    if not sheets.has_sheet(name):
        print(f"  Sheet '{name}' not found")
        return None
    return sheets.read(name)


def run_mf_workflow(
    sheets,
    sheet_name: str = "MF",
    target_sheet: str = "MF1",
    amfi: AMFIClient = None,
    today: date = None
) -> Dict:
    """
    LCP roll, AMFI NAV refresh, CMP roll

    Args:
        sheets: SheetsClient
        sheet_name: NAV sheet (ISIN in column B, 'Date' and 'NAV' headers)
        target_sheet: Holdings sheet (ISIN B, CMP D, LCP E)
        amfi: AMFI client
        today: IST date to compute against (defaults to today)

    Returns:
        Dict with the NAV update result and LCP/CMP counts, or an error message
    """
    today = today or ist_today()

    mf = _read_or_none(sheets, sheet_name)
    mf1 = _read_or_none(sheets, target_sheet)
    if mf is None:
        return {"success": False, "message": f"{sheet_name} sheet not found"}
    if mf1 is None:
        return {"success": False, "message": f"{target_sheet} sheet not found"}

    lcp = update_lcp_from_mf(sheets, mf, mf1, target_sheet, today)

    nav = fast_nav_update(sheets, sheet_name, amfi=amfi)

    # Dates moved during the NAV update
    mf = sheets.read(sheet_name)
    cmp = update_cmp_from_mf(sheets, mf, mf1, target_sheet, today)

    return {
        "success": True,
        "nav": nav,
        "lcp": lcp,
        "cmp": cmp,
        "message": nav["message"] + "\nCMP/LCP sync completed.",
    }
