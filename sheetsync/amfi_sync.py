"""
Fast NAV update - refresh Date/NAV columns of the MF sheet from AMFI
Every row gets a Status of 'Updated' or 'Not Found'
"""

from typing import Dict, List

from gspread.exceptions import WorksheetNotFound
from gspread.utils import rowcol_to_a1

from .amfi import AMFIClient, NavQuote
from .normalize import cell

STATUS_UPDATED = "Updated"
STATUS_NOT_FOUND = "Not Found"


def plan_nav_updates(
    data: List[List],
    nav_map: Dict[str, NavQuote],
    code_col: int,
    date_col: int,
    nav_col: int,
    status_col: int
) -> Dict:
    """
    Build the cell writes for a fast NAV update

    Args:
        data: Sheet values including the header row
        nav_map: Scheme code -> NavQuote
        code_col, date_col, nav_col, status_col: 0-based column indexes

    Returns:
        Dict with 'updates' (batch write payload), 'updated', 'not_found'
    """
    updates = []
    updated = 0
    not_found = 0

    for i in range(1, len(data)):
        row_number = i + 1
        code = str(cell(data[i], code_col)).strip()
        found = nav_map.get(code) if code else None

        if found:
            updated += 1
            updates.append({"range": rowcol_to_a1(row_number, date_col + 1), "values": [[found.date]]})
            updates.append({"range": rowcol_to_a1(row_number, nav_col + 1), "values": [[found.nav]]})
            updates.append({"range": rowcol_to_a1(row_number, status_col + 1), "values": [[STATUS_UPDATED]]})
        else:
            not_found += 1
            updates.append({"range": rowcol_to_a1(row_number, status_col + 1), "values": [[STATUS_NOT_FOUND]]})

    return {"updates": updates, "updated": updated, "not_found": not_found}


def fast_nav_update(sheets, sheet_name: str = "MF", amfi: AMFIClient = None) -> Dict:
    """
    Update Date and NAV for every scheme code on the sheet

    Args:
        sheets: SheetsClient
        sheet_name: Worksheet holding 'Scheme Code', 'Date', 'NAV' headers
        amfi: AMFI client (created if not given)

    Returns:
        Dict with updated / not_found counts and a summary message

    Raises:
        ValueError: If the sheet is missing, empty or lacks a required header
    """
    try:
        data = sheets.read(sheet_name)
    except WorksheetNotFound as e:
        raise ValueError(f"Sheet '{sheet_name}' not found") from e
    if not data:
        raise ValueError(f"Sheet '{sheet_name}' is empty")

    header = data[0]
    columns = {}
    for name in ("Scheme Code", "Date", "NAV"):
        if name not in header:
            raise ValueError(f"Sheet '{sheet_name}' has no '{name}' column")
        columns[name] = header.index(name)

    if "Status" in header:
        status_col = header.index("Status")
    else:
        status_col = len(header)
        header.append("Status")
        sheets.write(sheet_name, rowcol_to_a1(1, status_col + 1), [["Status"]])
        print(f"  Added 'Status' column to {sheet_name}")

    nav_map = (amfi or AMFIClient()).get_nav_map()

    plan = plan_nav_updates(
        data, nav_map,
        code_col=columns["Scheme Code"],
        date_col=columns["Date"],
        nav_col=columns["NAV"],
        status_col=status_col,
    )
    sheets.batch_write(sheet_name, plan["updates"])

    message = f"NAV Update Completed. Updated: {plan['updated']}, Not Found: {plan['not_found']}"
    print(f"  {message}")

    return {
        "updated": plan["updated"],
        "not_found": plan["not_found"],
        "message": message,
    }
