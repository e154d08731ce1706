"""
Mutual fund sync - MF sheet <-> Supabase

For every fund in the database (keyed by ISIN):
    - LCP <- CMP, always (yesterday's price becomes last close)
    - CMP <- sheet NAV, when the sheet has a NAV that differs
    - funds missing from the sheet are appended to it
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .normalize import cell, norm, num_or_null

SHEET_RANGE = "A1:Z10000"


@dataclass
class MFSyncPlan:
    """Writes computed by plan_mf_sync, not yet applied"""
    lcp_updates: List[Dict] = field(default_factory=list)
    cmp_updates: List[Dict] = field(default_factory=list)
    missing_rows: List[List] = field(default_factory=list)

    def summary(self) -> Dict:
        return {
            "added": len(self.missing_rows),
            "lcp": len(self.lcp_updates),
            "cmp": len(self.cmp_updates),
        }


def header_index(headers: List) -> Dict[str, int]:
    """Normalized header text -> column index (first occurrence wins)"""
    index = {}
    for i, h in enumerate(headers):
        index.setdefault(norm(h), i)
    return index


def plan_mf_sync(sheet_values: List[List], db_rows: List[Dict]) -> MFSyncPlan:
    """
    Compute the MF sync without touching either side

    Args:
        sheet_values: MF sheet values, header row first
        db_rows: Rows with isin, scheme_code, fund_full_name, cmp, lcp

    Returns:
        MFSyncPlan

    Raises:
        ValueError: If the sheet lacks ISIN or NAV headers
    """
    if not sheet_values:
        raise ValueError("MF sheet is empty")

    headers = sheet_values[0]
    columns = header_index(headers)
    if "ISIN" not in columns or "NAV" not in columns:
        raise ValueError("MF sheet needs 'ISIN' and 'NAV' columns")

    isin_col = columns["ISIN"]
    nav_col = columns["NAV"]
    name_col = columns.get("SCHEME NAME")
    code_col = columns.get("SCHEME CODE")

    sheet_navs: Dict[str, Optional[float]] = {}
    for row in sheet_values[1:]:
        isin = norm(cell(row, isin_col))
        if isin:
            sheet_navs[isin] = num_or_null(cell(row, nav_col))

    plan = MFSyncPlan()
    for r in db_rows:
        isin = norm(r.get("isin"))
        if not isin:
            continue

        plan.lcp_updates.append({"isin": r["isin"], "lcp": r.get("cmp")})

        if isin not in sheet_navs:
            new_row = [""] * len(headers)
            if code_col is not None:
                new_row[code_col] = r.get("scheme_code") or ""
            if name_col is not None:
                new_row[name_col] = r.get("fund_full_name") or ""
            new_row[isin_col] = r["isin"]
            plan.missing_rows.append(new_row)
            continue

        nav = sheet_navs[isin]
        if nav is not None and nav != num_or_null(r.get("cmp")):
            plan.cmp_updates.append({"isin": r["isin"], "cmp": nav})

    return plan


def apply_mf_sync(plan: MFSyncPlan, sheets, db, sheet_name: str) -> None:
    """LCP updates, then CMP updates, then one append of missing funds"""
    for u in plan.lcp_updates:
        db.update_mutual_fund(u["isin"], {"lcp": u["lcp"]})

    for u in plan.cmp_updates:
        db.update_mutual_fund(u["isin"], {"cmp": u["cmp"]})

    if plan.missing_rows:
        sheets.append(sheet_name, plan.missing_rows)


def sync_mutual_funds(sheets, db, settings, dry_run: bool = False) -> Dict:
    """
    Run the MF sync

    Args:
        sheets: SheetsClient
        db: SupabaseDB
        settings: Settings (MF sheet name)
        dry_run: Compute only, write nothing

    Returns:
        Dict with added / lcp / cmp counts
    """
    print("MF Sync Started...")

    db_rows = db.get_mutual_funds()
    print(f"  Database: {len(db_rows)} funds")

    sheet_values = sheets.read(settings.mf_sheet, SHEET_RANGE)
    print(f"  Sheet: {max(len(sheet_values) - 1, 0)} rows")

    plan = plan_mf_sync(sheet_values, db_rows)
    summary = plan.summary()
    print(f"  Planned: {summary['lcp']} LCP, {summary['cmp']} CMP, {summary['added']} new rows")

    if dry_run:
        print("  --dry-run: nothing written")
        return {**summary, "success": True, "dry_run": True}

    apply_mf_sync(plan, sheets, db, settings.mf_sheet)

    print("MF Sync Completed.")
    return {**summary, "success": True}
